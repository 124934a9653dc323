"""Translating terminal coordinates into positions within the UI views."""

from __future__ import annotations

from dataclasses import dataclass

# The channels view takes this fraction (1 / ratio) of the terminal width.
CHANNEL_VIEW_RATIO = 4


@dataclass(frozen=True)
class Rect:
    """A rectangular area of the terminal in cells."""

    x: int
    y: int
    width: int
    height: int


def coords_within_channels_view(area: Rect, x: int, y: int) -> tuple[int, int] | None:
    """Position of (x, y) inside the channels view, excluding its border.

    Returns None when the point lies outside the view or on its border.
    """
    if y < 1:
        return None
    # one cell offset around the view accounts for the border
    if 0 < x < area.width // CHANNEL_VIEW_RATIO and 0 < y and y + 1 < area.height:
        return (x - 1, y - 1)
    return None