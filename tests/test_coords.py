import pytest

from gurk.ui.coords import CHANNEL_VIEW_RATIO, Rect, coords_within_channels_view

AREA = Rect(x=0, y=0, width=80, height=24)


def test_top_left_inner_cell_maps_to_origin():
    assert coords_within_channels_view(AREA, 1, 1) == (0, 0)


def test_bottom_right_inner_cell():
    x = AREA.width // CHANNEL_VIEW_RATIO - 1
    y = AREA.height - 2
    assert coords_within_channels_view(AREA, x, y) == (x - 1, y - 1)


@pytest.mark.parametrize(
    "x, y",
    [
        (5, 0),  # top border
        (0, 5),  # left border
        (AREA.width // CHANNEL_VIEW_RATIO, 5),  # right edge of the view
        (5, AREA.height - 1),  # bottom border
        (AREA.width - 1, 5),  # in the chat view
    ],
)
def test_outside_or_on_border(x, y):
    assert coords_within_channels_view(AREA, x, y) is None


def test_results_stay_inside_view():
    inner_width = AREA.width // CHANNEL_VIEW_RATIO
    results = [
        coords_within_channels_view(AREA, x, y)
        for x in range(AREA.width)
        for y in range(AREA.height)
    ]
    hits = [r for r in results if r is not None]
    assert hits
    assert all(0 <= col < inner_width - 1 for col, _ in hits)
    assert all(0 <= line < AREA.height - 2 for _, line in hits)


def test_tiny_area_has_no_inner_cells():
    area = Rect(x=0, y=0, width=4, height=2)
    assert all(
        coords_within_channels_view(area, x, y) is None
        for x in range(area.width)
        for y in range(area.height)
    )