"""The storage interface for channels, messages, names and metadata."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from copy import deepcopy
from dataclasses import dataclass, replace
from datetime import datetime
from uuid import UUID

from gurk.data import Channel, ChannelId, Message


@dataclass(frozen=True, order=True)
class MessageId:
    """A message is identified by its channel and its arrival time in milliseconds."""

    channel_id: ChannelId
    arrived_at: int


@dataclass
class Metadata:
    """Persisted flags and settings."""

    # Time of the last request to synchronize contacts; amortizes calls to the backend.
    contacts_sync_request_at: datetime | None = None
    fully_migrated: bool | None = None


class Storage(ABC):
    """Storage of channels, messages, names and metadata, used to persist data."""

    @abstractmethod
    def channels(self) -> Iterator[Channel]:
        """Channels in no particular order."""

    @abstractmethod
    def channel(self, channel_id: ChannelId) -> Channel | None:
        """The channel with the given id, if any."""

    @abstractmethod
    def store_channel(self, channel: Channel) -> Channel:
        """Store the channel, replacing one with the same id, and return it."""

    @abstractmethod
    def messages(self, channel_id: ChannelId) -> list[Message]:
        """Messages of the channel sorted by arrival time; edits are left out."""

    @abstractmethod
    def message(self, message_id: MessageId) -> Message | None:
        """The message with the given id, if any."""

    @abstractmethod
    def message_channel(self, arrived_at: int) -> ChannelId | None:
        """The channel holding a message that arrived at the given time."""

    @abstractmethod
    def edits(self, message_id: MessageId) -> list[Message]:
        """Edits of the given message."""

    @abstractmethod
    def store_message(self, channel_id: ChannelId, message: Message) -> Message:
        """Store the message in the channel, replacing one with the same id."""

    def store_edited_message(
        self, channel_id: ChannelId, target_sent_timestamp: int, message: Message
    ) -> Message | None:
        """Store an edit and rewrite the body of the original message.

        The target points to the previous edit or to the original message. On the
        first edit the original body is preserved as an edit of its own. Returns
        the updated original, or None when the target is unknown.
        """
        prev_edited = self.message(MessageId(channel_id, target_sent_timestamp))
        if prev_edited is None:
            return None

        if prev_edited.edit is not None:
            found = self.message(MessageId(channel_id, prev_edited.edit))
            if found is None:
                return None
            original = deepcopy(found)
        else:
            original = deepcopy(prev_edited)
            preserved = replace(
                deepcopy(original),
                arrived_at=original.arrived_at + 1,
                edit=original.arrived_at,
            )
            self.store_message(channel_id, preserved)

        body = message.message
        self.store_message(channel_id, replace(message, edit=original.arrived_at))

        original.message = body
        original.edited = True
        return self.store_message(channel_id, original)

    @abstractmethod
    def names(self) -> Iterator[tuple[UUID, str]]:
        """Names of contacts."""

    @abstractmethod
    def name(self, id: UUID) -> str | None:
        """The name of the given contact, if any."""

    @abstractmethod
    def store_name(self, id: UUID, name: str) -> str:
        """Store the name of a contact, replacing an existing one."""

    @abstractmethod
    def metadata(self) -> Metadata:
        """The persisted metadata."""

    @abstractmethod
    def store_metadata(self, metadata: Metadata) -> Metadata:
        """Replace the stored metadata."""

    @abstractmethod
    def save(self) -> None:
        """Persist the data; must guarantee that everything is written."""

    def is_empty(self) -> bool:
        """True if the storage holds neither channels nor names."""
        return next(iter(self.channels()), None) is None and next(
            iter(self.names()), None
        ) is None