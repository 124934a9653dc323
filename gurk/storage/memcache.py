"""An in-memory cache in front of another storage."""

from __future__ import annotations

from collections.abc import Iterator
from copy import deepcopy
from uuid import UUID

from gurk.data import Channel, ChannelId, Message
from gurk.storage.base import MessageId, Metadata, Storage


class MemCache(Storage):
    """Caches the data of the underlying storage in memory.

    Edits and the mapping of arrival times to channels are not cached.
    """

    def __init__(self, storage: Storage) -> None:
        self._storage = storage
        self._channels: list[Channel] = []
        self._channels_index: dict[ChannelId, int] = {}
        self._messages: dict[ChannelId, list[Message]] = {}
        self._messages_index: dict[MessageId, int] = {}

        for channel in storage.channels():
            channel_messages = self._messages.setdefault(channel.id, [])
            for message in storage.messages(channel.id):
                message_id = MessageId(channel.id, message.arrived_at)
                self._messages_index[message_id] = len(channel_messages)
                channel_messages.append(deepcopy(message))
            self._channels_index[channel.id] = len(self._channels)
            self._channels.append(deepcopy(channel))

        self._names: dict[UUID, str] = dict(storage.names())
        self._metadata: Metadata = deepcopy(storage.metadata())

    def channels(self) -> Iterator[Channel]:
        return iter(list(self._channels))

    def channel(self, channel_id: ChannelId) -> Channel | None:
        idx = self._channels_index.get(channel_id)
        if idx is None:
            return None
        return self._channels[idx]

    def store_channel(self, channel: Channel) -> Channel:
        idx = self._channels_index.get(channel.id)
        if idx is None:
            self._channels_index[channel.id] = len(self._channels)
            self._channels.append(deepcopy(channel))
        else:
            self._channels[idx] = deepcopy(channel)
        return self._storage.store_channel(channel)

    def messages(self, channel_id: ChannelId) -> list[Message]:
        return list(self._messages.get(channel_id, []))

    def edits(self, message_id: MessageId) -> list[Message]:
        return self._storage.edits(message_id)

    def message(self, message_id: MessageId) -> Message | None:
        messages = self._messages.get(message_id.channel_id)
        if messages is None:
            return None
        idx = self._messages_index.get(message_id)
        if idx is not None and idx < len(messages):
            return messages[idx]
        return self._storage.message(message_id)

    def store_message(self, channel_id: ChannelId, message: Message) -> Message:
        message_id = MessageId(channel_id, message.arrived_at)
        messages = self._messages.setdefault(channel_id, [])
        idx = self._messages_index.get(message_id)
        if idx is None:
            self._messages_index[message_id] = len(messages)
            messages.append(deepcopy(message))
        else:
            messages[idx] = deepcopy(message)
        return self._storage.store_message(channel_id, message)

    def names(self) -> Iterator[tuple[UUID, str]]:
        return iter(sorted(self._names.items()))

    def name(self, id: UUID) -> str | None:
        return self._names.get(id)

    def store_name(self, id: UUID, name: str) -> str:
        self._names[id] = name
        return self._storage.store_name(id, name)

    def metadata(self) -> Metadata:
        return self._metadata

    def store_metadata(self, metadata: Metadata) -> Metadata:
        self._metadata = deepcopy(metadata)
        return self._storage.store_metadata(metadata)

    def save(self) -> None:
        self._storage.save()

    def message_channel(self, arrived_at: int) -> ChannelId | None:
        return self._storage.message_channel(arrived_at)