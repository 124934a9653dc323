"""A storage that keeps nothing."""

from __future__ import annotations

from collections.abc import Iterator
from uuid import UUID

from gurk.data import Channel, ChannelId, Message
from gurk.storage.base import MessageId, Metadata, Storage


class ForgetfulStorage(Storage):
    """A storage which does not store anything, therefore forgetful."""

    def channels(self) -> Iterator[Channel]:
        return iter(())

    def channel(self, channel_id: ChannelId) -> Channel | None:
        return None

    def store_channel(self, channel: Channel) -> Channel:
        return channel

    def messages(self, channel_id: ChannelId) -> list[Message]:
        return []

    def message(self, message_id: MessageId) -> Message | None:
        return None

    def message_channel(self, arrived_at: int) -> ChannelId | None:
        return None

    def edits(self, message_id: MessageId) -> list[Message]:
        return []

    def store_message(self, channel_id: ChannelId, message: Message) -> Message:
        return message

    def names(self) -> Iterator[tuple[UUID, str]]:
        return iter(())

    def name(self, id: UUID) -> str | None:
        return None

    def store_name(self, id: UUID, name: str) -> str:
        return name

    def metadata(self) -> Metadata:
        return Metadata()

    def store_metadata(self, metadata: Metadata) -> Metadata:
        return metadata

    def save(self) -> None:
        """Nothing to persist."""