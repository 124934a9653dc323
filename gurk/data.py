"""Core data model: channels, messages, attachments and receipts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from pathlib import Path
from typing import Any
from uuid import UUID

GROUP_ID_LEN = 32


class Receipt(Enum):
    """Delivery state of a message."""

    NOTHING = "Nothing"
    SENT = "Sent"
    DELIVERED = "Delivered"
    READ = "Read"


@total_ordering
@dataclass(frozen=True)
class ChannelId:
    """Identifies a channel: either a direct chat with a user or a group."""

    uuid: UUID | None = None
    group_id: bytes | None = None

    def __post_init__(self) -> None:
        if (self.uuid is None) == (self.group_id is None):
            raise ValueError("a channel id is either a user or a group")
        if self.group_id is not None and len(self.group_id) != GROUP_ID_LEN:
            raise ValueError(
                f"group id must be {GROUP_ID_LEN} bytes, got {len(self.group_id)}"
            )

    @classmethod
    def user(cls, uuid: UUID) -> ChannelId:
        return cls(uuid=uuid)

    @classmethod
    def group(cls, group_id: bytes) -> ChannelId:
        return cls(group_id=bytes(group_id))

    def is_user(self) -> bool:
        return self.uuid is not None

    def _sort_key(self) -> tuple[int, bytes]:
        if self.uuid is not None:
            return (0, self.uuid.bytes)
        assert self.group_id is not None
        return (1, self.group_id)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ChannelId):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def to_json(self) -> dict[str, Any]:
        if self.uuid is not None:
            return {"User": str(self.uuid)}
        assert self.group_id is not None
        return {"Group": list(self.group_id)}

    @classmethod
    def from_json(cls, value: dict[str, Any]) -> ChannelId:
        if "User" in value:
            return cls.user(UUID(value["User"]))
        if "Group" in value:
            return cls.group(bytes(value["Group"]))
        raise ValueError(f"invalid channel id: {value!r}")


@dataclass
class GroupData:
    master_key_bytes: bytes
    members: list[UUID] = field(default_factory=list)
    revision: int = 0

    def to_json(self) -> dict[str, Any]:
        return {
            "master_key_bytes": list(self.master_key_bytes),
            "members": [str(member) for member in self.members],
            "revision": self.revision,
        }

    @classmethod
    def from_json(cls, value: dict[str, Any]) -> GroupData:
        return cls(
            master_key_bytes=bytes(value["master_key_bytes"]),
            members=[UUID(member) for member in value.get("members", [])],
            revision=value.get("revision", 0),
        )


@dataclass
class TypingSet:
    """Who is typing in a channel: a flag for direct chats, members for groups."""

    is_group: bool = False
    typing: bool = False
    members: set[UUID] = field(default_factory=set)

    @classmethod
    def new(cls, is_group: bool) -> TypingSet:
        return cls(is_group=is_group)


@dataclass
class Channel:
    id: ChannelId
    name: str
    group_data: GroupData | None = None
    unread_messages: int = 0
    typing: TypingSet = field(default_factory=TypingSet)


@dataclass(frozen=True)
class AssociatedValue:
    """Value of a body range: a mentioned user or a text style."""

    mention_uuid: UUID | None = None
    style: int | None = None

    def __post_init__(self) -> None:
        if (self.mention_uuid is None) == (self.style is None):
            raise ValueError("an associated value is either a mention or a style")

    @classmethod
    def mention(cls, uuid: UUID) -> AssociatedValue:
        return cls(mention_uuid=uuid)

    @classmethod
    def styled(cls, style: int) -> AssociatedValue:
        return cls(style=style)

    def to_json(self) -> dict[str, Any]:
        if self.mention_uuid is not None:
            return {"MentionUuid": str(self.mention_uuid)}
        return {"Style": self.style}

    @classmethod
    def from_json(cls, value: dict[str, Any]) -> AssociatedValue:
        if "MentionUuid" in value:
            return cls.mention(UUID(value["MentionUuid"]))
        if "Style" in value:
            return cls.styled(value["Style"])
        raise ValueError(f"invalid associated value: {value!r}")


@dataclass(frozen=True)
class BodyRange:
    start: int
    end: int
    value: AssociatedValue

    def to_json(self) -> dict[str, Any]:
        return {"start": self.start, "end": self.end, "value": self.value.to_json()}

    @classmethod
    def from_json(cls, value: dict[str, Any]) -> BodyRange:
        return cls(
            start=value["start"],
            end=value["end"],
            value=AssociatedValue.from_json(value["value"]),
        )


@dataclass
class Attachment:
    """A file attached to a message and saved locally."""

    id: str
    content_type: str
    filename: Path
    size: int

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "contentType": self.content_type,
            "filename": str(self.filename),
            "size": self.size,
        }

    @classmethod
    def from_json(cls, value: dict[str, Any]) -> Attachment:
        return cls(
            id=value["id"],
            content_type=value["contentType"],
            filename=Path(value["filename"]),
            size=value["size"],
        )


@dataclass
class Message:
    from_id: UUID
    message: str | None
    arrived_at: int
    quote: Message | None = None
    attachments: list[Attachment] = field(default_factory=list)
    reactions: list[tuple[UUID, str]] = field(default_factory=list)
    receipt: Receipt = Receipt.NOTHING
    body_ranges: list[BodyRange] = field(default_factory=list)
    send_failed: str | None = None
    edit: int | None = None
    edited: bool = False

    @classmethod
    def text(cls, from_id: UUID, arrived_at: int, message: str) -> Message:
        """A plain text message with everything else left at its default."""
        return cls(from_id=from_id, message=message, arrived_at=arrived_at)

    def is_edit(self) -> bool:
        """Whether this message is an edit of another message."""
        return self.edit is not None

    def to_json(self) -> dict[str, Any]:
        return {
            "from_id": str(self.from_id),
            "message": self.message,
            "arrived_at": self.arrived_at,
            "quote": self.quote.to_json() if self.quote is not None else None,
            "attachments": [attachment.to_json() for attachment in self.attachments],
            "reactions": [[str(uid), emoji] for uid, emoji in self.reactions],
            "receipt": self.receipt.value,
            "body_ranges": [body_range.to_json() for body_range in self.body_ranges],
            "send_failed": self.send_failed,
            "edit": self.edit,
            "edited": self.edited,
        }

    @classmethod
    def from_json(cls, value: dict[str, Any]) -> Message:
        quote = value.get("quote")
        return cls(
            from_id=UUID(value["from_id"]),
            message=value.get("message"),
            arrived_at=value["arrived_at"],
            quote=cls.from_json(quote) if quote is not None else None,
            attachments=[Attachment.from_json(a) for a in value.get("attachments", [])],
            reactions=[(UUID(uid), emoji) for uid, emoji in value.get("reactions", [])],
            receipt=Receipt(value.get("receipt", Receipt.NOTHING.value)),
            body_ranges=[BodyRange.from_json(r) for r in value.get("body_ranges", [])],
            send_failed=value.get("send_failed"),
            edit=value.get("edit"),
            edited=value.get("edited", False),
        )


@dataclass
class ResolvedGroup:
    """A group as resolved from the messenger backend."""

    name: str
    group_data: GroupData
    profile_keys: list[bytes] = field(default_factory=list)