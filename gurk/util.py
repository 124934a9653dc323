"""Small helpers shared across the client: selectable lists, timestamps, URL patterns."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Generic, TypeVar

T = TypeVar("T")

# Whether moving past either end of a list wraps around to the other end.
_MESSAGE_SCROLL_BACK = False

_URL_BODY = "[^\x00-\x1f\x7f-\x9f<>\"\\s{-}\\^⟨⟩`]+"

URL_REGEX = re.compile(
    "(ipfs:|ipns:|magnet:|mailto:|gemini:|gopher:|https:|http:|news:|file:|git:|ssh:|ftp:)"
    + _URL_BODY
)

ATTACHMENT_REGEX = re.compile("file:" + _URL_BODY)


@dataclass
class StatefulList(Generic[T]):
    """A list of items with an optional selection.

    Two lists compare equal when their items are equal; the selection and the
    rendered offset are view state and take no part in the comparison.
    """

    items: list[T] = field(default_factory=list)
    selected: int | None = field(default=None, compare=False)
    offset: int = field(default=0, compare=False)

    def next(self) -> None:
        """Move the selection one item forward."""
        if self.selected is None:
            if self.items:
                self.selected = 0
            return
        if self.selected + 1 >= len(self.items):
            if _MESSAGE_SCROLL_BACK:
                self.selected = 0
        else:
            self.selected += 1

    def previous(self) -> None:
        """Move the selection one item back."""
        if self.selected is None:
            if self.items:
                self.selected = 0
            return
        if self.selected == 0:
            if _MESSAGE_SCROLL_BACK:
                self.selected = len(self.items) - 1
        else:
            self.selected -= 1

    def selected_item(self) -> T | None:
        """The selected item, or None when nothing is selected."""
        if self.selected is None:
            return None
        return self.items[self.selected]


def utc_timestamp_msec_to_local(timestamp: int) -> datetime:
    """Convert a UTC timestamp in milliseconds to an aware local datetime.

    Only whole seconds are kept.
    """
    if timestamp < 0:
        raise ValueError("invalid datetime")
    try:
        utc = datetime.fromtimestamp(timestamp // 1000, tz=timezone.utc)
        return utc.astimezone()
    except (OverflowError, OSError, ValueError) as error:
        raise ValueError("invalid datetime") from error


def utc_now_timestamp_msec() -> int:
    """The current UTC time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000