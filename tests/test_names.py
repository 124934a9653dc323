from uuid import UUID

import pytest

from gurk.ui.names import USER_COLORS, Color, NameResolver, displayed_name, user_color

USER_ID = UUID(int=0)
OTHER_ID = UUID(int=1)


def test_single_user_resolves_name_and_color():
    names = NameResolver.single_user(USER_ID, "boxdot", Color.GREEN)
    assert names.resolve(USER_ID) == ("boxdot", Color.GREEN)


def test_single_user_max_name_width():
    names = NameResolver.single_user(USER_ID, "boxdot", Color.GREEN)
    assert names.max_name_width() == 6


def test_unknown_id_without_fallback_raises():
    names = NameResolver.single_user(USER_ID, "boxdot", Color.GREEN)
    with pytest.raises(LookupError):
        names.resolve(OTHER_ID)


def test_unknown_id_uses_fallback_in_magenta():
    names = NameResolver({USER_ID: ("boxdot", Color.GREEN)}, fallback=str)
    assert names.resolve(OTHER_ID) == (str(OTHER_ID), Color.MAGENTA)


def test_max_name_width_is_longest_name():
    names = NameResolver(
        {USER_ID: ("ellie", Color.RED), OTHER_ID: ("joel", Color.BLUE)}
    )
    assert names.max_name_width() == len("ellie")


def test_max_name_width_empty():
    assert NameResolver({}).max_name_width() == 0


def test_displayed_name_first_name_only():
    assert displayed_name("Tyler Durden", True) == "Tyler"


def test_displayed_name_full():
    assert displayed_name("Tyler Durden", False) == "Tyler Durden"


def test_displayed_name_without_space():
    assert displayed_name("boxdot", True) == "boxdot"


def test_user_color_of_empty_name_is_first_color():
    assert user_color("") == USER_COLORS[0]


@pytest.mark.parametrize("name", ["boxdot", "ellie", "Tyler Durden", "äöü"])
def test_user_color_is_deterministic_and_from_palette(name):
    assert user_color(name) == user_color(name)
    assert user_color(name) in USER_COLORS


def test_user_color_ignores_letter_order():
    assert user_color("ab") == user_color("ba")