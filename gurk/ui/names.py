"""Resolving user ids to display names and colors."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from uuid import UUID

from wcwidth import wcwidth


class Color(Enum):
    """Terminal colors used when drawing names and messages."""

    BLACK = "Black"
    RED = "Red"
    GREEN = "Green"
    YELLOW = "Yellow"
    BLUE = "Blue"
    MAGENTA = "Magenta"
    CYAN = "Cyan"
    GRAY = "Gray"


USER_COLORS: tuple[Color, ...] = (
    Color.RED,
    Color.GREEN,
    Color.YELLOW,
    Color.BLUE,
    Color.MAGENTA,
    Color.CYAN,
    Color.GRAY,
)


def _text_width(text: str) -> int:
    return sum(max(wcwidth(char), 0) for char in text)


class NameResolver:
    """Resolves user ids to a name and a color.

    Names not known up front are looked up with the fallback and shown in magenta.
    """

    def __init__(
        self,
        names_and_colors: Mapping[UUID, tuple[str, Color]],
        fallback: Callable[[UUID], str] | None = None,
        max_name_width: int | None = None,
    ) -> None:
        self._names_and_colors = dict(names_and_colors)
        self._fallback = fallback
        if max_name_width is None:
            max_name_width = max(
                (_text_width(name) for name, _ in self._names_and_colors.values()),
                default=0,
            )
        self._max_name_width = max_name_width

    @classmethod
    def single_user(cls, user_id: UUID, username: str, color: Color) -> NameResolver:
        """Resolver knowing a single user, with a fixed name width of 6."""
        return cls({user_id: (username, color)}, max_name_width=6)

    def resolve(self, id: UUID) -> tuple[str, Color]:
        """Name and color for the given id."""
        known = self._names_and_colors.get(id)
        if known is not None:
            return known
        if self._fallback is None:
            raise LookupError(f"cannot resolve name of {id}")
        return self._fallback(id), Color.MAGENTA

    def max_name_width(self) -> int:
        """Display width of the longest known name."""
        return self._max_name_width


def displayed_name(name: str, first_name_only: bool) -> str:
    """The name as shown: only up to the first space if first_name_only is set."""
    if not first_name_only:
        return name
    space_pos = name.find(" ")
    return name if space_pos < 0 else name[:space_pos]


def user_color(username: str) -> Color:
    """Pick a color for a username, randomly looking but deterministic."""
    idx = sum(username.encode("utf-8")) % len(USER_COLORS)
    return USER_COLORS[idx]