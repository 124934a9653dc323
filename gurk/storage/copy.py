"""Copying the contents of one storage into another."""

from __future__ import annotations

from dataclasses import dataclass

from gurk.storage.base import Storage


@dataclass
class Stats:
    """Counts of what was copied."""

    channels: int = 0
    messages: int = 0
    names: int = 0


def copy(source: Storage, target: Storage) -> Stats:
    """Copy metadata, channels with their messages, and names from source to target."""
    stats = Stats()

    target.store_metadata(source.metadata())

    for channel in list(source.channels()):
        target.store_channel(channel)
        stats.channels += 1
        for message in source.messages(channel.id):
            target.store_message(channel.id, message)
            stats.messages += 1

    for id, name in list(source.names()):
        target.store_name(id, name)
        stats.names += 1

    return stats