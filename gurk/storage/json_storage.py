"""A storage that keeps everything in a single JSON file."""

from __future__ import annotations

import bisect
import json
import logging
from collections.abc import Iterator
from copy import deepcopy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from uuid import UUID

from gurk.data import Channel, ChannelId, GroupData, Message, TypingSet
from gurk.storage.base import MessageId, Metadata, Storage

log = logging.getLogger(__name__)

_LOAD_FAILED_HINT = (
    "This might happen due to incompatible data model when Gurk is upgraded.\n"
    "Please consider to backup your messages and then remove the store."
)


def _format_datetime(value: datetime) -> str:
    text = value.astimezone(timezone.utc).isoformat()
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def _parse_datetime(value: str) -> datetime:
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value).astimezone(timezone.utc)


@dataclass
class _JsonChannel:
    """A channel as stored in the file, together with its messages."""

    id: ChannelId
    name: str
    group_data: GroupData | None = None
    messages: list[Message] = field(default_factory=list)
    unread_messages: int = 0
    typing: TypingSet | None = None

    def to_channel(self) -> Channel:
        is_group = self.group_data is not None
        return Channel(
            id=self.id,
            name=self.name,
            group_data=deepcopy(self.group_data),
            unread_messages=self.unread_messages,
            typing=deepcopy(self.typing)
            if self.typing is not None
            else TypingSet.new(is_group),
        )

    @classmethod
    def from_channel(cls, channel: Channel, messages: list[Message]) -> _JsonChannel:
        return cls(
            id=channel.id,
            name=channel.name,
            group_data=deepcopy(channel.group_data),
            messages=messages,
            unread_messages=channel.unread_messages,
            typing=deepcopy(channel.typing),
        )

    def find_message_index(self, arrived_at: int) -> tuple[int, bool]:
        """Insertion index for arrived_at and whether a message is already there."""
        idx = bisect.bisect_left(self.messages, arrived_at, key=lambda m: m.arrived_at)
        found = idx < len(self.messages) and self.messages[idx].arrived_at == arrived_at
        return idx, found

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id.to_json(),
            "name": self.name,
            "group_data": self.group_data.to_json()
            if self.group_data is not None
            else None,
            "messages": [message.to_json() for message in self.messages],
            "unread_messages": self.unread_messages,
        }

    @classmethod
    def from_json(cls, value: dict[str, Any]) -> _JsonChannel:
        group_data = value.get("group_data")
        return cls(
            id=ChannelId.from_json(value["id"]),
            name=value["name"],
            group_data=GroupData.from_json(group_data) if group_data is not None else None,
            messages=[Message.from_json(m) for m in value["messages"]],
            unread_messages=value.get("unread_messages", 0),
        )


@dataclass
class _JsonStorageData:
    channels: list[_JsonChannel] = field(default_factory=list)
    # Names from profiles, from contacts, or the uuid when both have failed.
    names: dict[UUID, str] = field(default_factory=dict)
    contacts_sync_request_at: datetime | None = None

    def to_json(self) -> dict[str, Any]:
        return {
            "channels": {"items": [channel.to_json() for channel in self.channels]},
            "names": {str(uid): name for uid, name in self.names.items()},
            "contacts_sync_request_at": _format_datetime(self.contacts_sync_request_at)
            if self.contacts_sync_request_at is not None
            else None,
        }

    @classmethod
    def from_json(cls, value: dict[str, Any]) -> _JsonStorageData:
        synced_at = value.get("contacts_sync_request_at")
        return cls(
            channels=[_JsonChannel.from_json(c) for c in value["channels"]["items"]],
            names={UUID(uid): name for uid, name in value["names"].items()},
            contacts_sync_request_at=_parse_datetime(synced_at)
            if synced_at is not None
            else None,
        )


class JsonStorage(Storage):
    """Storage persisted as one JSON document on disk."""

    def __init__(
        self, data_path: str | Path, fallback_data_path: str | Path | None = None
    ) -> None:
        path = Path(data_path)
        if not path.exists() and fallback_data_path is not None:
            # try the legacy location
            path = Path(fallback_data_path)

        if path.exists():
            # be conservative: fail rather than override and lose the messages
            try:
                data = self._load_data_from(path)
            except (OSError, ValueError, KeyError, TypeError) as error:
                raise ValueError(
                    f"failed to load stored data from '{path}':\n{_LOAD_FAILED_HINT}"
                ) from error
        else:
            data = _JsonStorageData()

        for channel in data.channels:
            # invariant: messages are sorted by arrived_at
            channel.messages.sort(key=lambda message: message.arrived_at)

        self.data_path = path
        self._data = data
        self._is_dirty = False

    @staticmethod
    def _load_data_from(path: Path) -> _JsonStorageData:
        log.info("loading app data from: %s", path)
        with path.open("r", encoding="utf-8") as f:
            return _JsonStorageData.from_json(json.load(f))

    def _try_save(self) -> None:
        if not self._is_dirty:
            return
        log.info("saving app data to: %s", self.data_path)
        with self.data_path.open("w", encoding="utf-8") as f:
            json.dump(self._data.to_json(), f, ensure_ascii=False)
        self._is_dirty = False

    def _find_channel(self, channel_id: ChannelId) -> _JsonChannel | None:
        return next((ch for ch in self._data.channels if ch.id == channel_id), None)

    def channels(self) -> Iterator[Channel]:
        return (channel.to_channel() for channel in list(self._data.channels))

    def channel(self, channel_id: ChannelId) -> Channel | None:
        stored = self._find_channel(channel_id)
        return stored.to_channel() if stored is not None else None

    def store_channel(self, channel: Channel) -> Channel:
        for idx, stored in enumerate(self._data.channels):
            if stored.id == channel.id:
                replacement = _JsonChannel.from_channel(channel, stored.messages)
                self._data.channels[idx] = replacement
                break
        else:
            replacement = _JsonChannel.from_channel(channel, [])
            self._data.channels.append(replacement)
        self._is_dirty = True
        return replacement.to_channel()

    def messages(self, channel_id: ChannelId) -> list[Message]:
        stored = self._find_channel(channel_id)
        if stored is None:
            return []
        return [message for message in stored.messages if not message.is_edit()]

    def edits(self, message_id: MessageId) -> list[Message]:
        stored = self._find_channel(message_id.channel_id)
        if stored is None:
            return []
        return [m for m in stored.messages if m.edit == message_id.arrived_at]

    def message(self, message_id: MessageId) -> Message | None:
        stored = self._find_channel(message_id.channel_id)
        if stored is None:
            return None
        return next(
            (m for m in stored.messages if m.arrived_at == message_id.arrived_at), None
        )

    def store_message(self, channel_id: ChannelId, message: Message) -> Message:
        stored = self._find_channel(channel_id)
        if stored is None:
            raise KeyError(f"no such channel: {channel_id}")
        idx, found = stored.find_message_index(message.arrived_at)
        if found:
            stored.messages[idx] = message
        else:
            stored.messages.insert(idx, message)
        self._is_dirty = True
        return stored.messages[idx]

    def names(self) -> Iterator[tuple[UUID, str]]:
        return iter(list(self._data.names.items()))

    def name(self, id: UUID) -> str | None:
        return self._data.names.get(id)

    def store_name(self, id: UUID, name: str) -> str:
        self._data.names[id] = name
        self._is_dirty = True
        return self._data.names[id]

    def metadata(self) -> Metadata:
        return Metadata(
            contacts_sync_request_at=self._data.contacts_sync_request_at,
            fully_migrated=None,
        )

    def store_metadata(self, metadata: Metadata) -> Metadata:
        # fully_migrated is not supported by this storage
        self._data.contacts_sync_request_at = metadata.contacts_sync_request_at
        self._is_dirty = True
        return metadata

    def save(self) -> None:
        try:
            self._try_save()
        except (OSError, TypeError, ValueError) as error:
            log.error("failed to save json storage: %s", error)

    def message_channel(self, arrived_at: int) -> ChannelId | None:
        for channel in self._data.channels:
            _, found = channel.find_message_index(arrived_at)
            if found:
                return channel.id
        return None