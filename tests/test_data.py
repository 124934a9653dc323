from pathlib import Path
from uuid import UUID

import pytest

from gurk.data import (
    AssociatedValue,
    Attachment,
    BodyRange,
    Channel,
    ChannelId,
    GroupData,
    Message,
    Receipt,
    ResolvedGroup,
    TypingSet,
)

USER_A = UUID("966960e0-a8cd-43f1-ac7a-2c986dd470cd")
USER_B = UUID("a955d20f-6b83-4e69-846e-a99b1779ff7a")
GROUP_ID = b"4149b9686807fdb4a8c95d9b5413bbcd"


def test_channel_id_user_and_group():
    user = ChannelId.user(USER_A)
    group = ChannelId.group(GROUP_ID)
    assert user.is_user()
    assert not group.is_user()
    assert user.uuid == USER_A
    assert group.group_id == GROUP_ID


def test_channel_id_group_rejects_wrong_length():
    with pytest.raises(ValueError):
        ChannelId.group(b"short")


def test_channel_id_requires_exactly_one_variant():
    with pytest.raises(ValueError):
        ChannelId()
    with pytest.raises(ValueError):
        ChannelId(uuid=USER_A, group_id=GROUP_ID)


def test_channel_id_ordering_and_hashing():
    ids = [ChannelId.group(GROUP_ID), ChannelId.user(USER_B), ChannelId.user(USER_A)]
    ordered = sorted(ids)
    assert ordered[-1] == ChannelId.group(GROUP_ID)
    assert ordered[0] == ChannelId.user(USER_A)
    assert len({ChannelId.user(USER_A), ChannelId.user(USER_A)}) == 1


@pytest.mark.parametrize("channel_id", [ChannelId.user(USER_A), ChannelId.group(GROUP_ID)])
def test_channel_id_json_round_trip(channel_id):
    assert ChannelId.from_json(channel_id.to_json()) == channel_id


def test_channel_id_from_invalid_json():
    with pytest.raises(ValueError):
        ChannelId.from_json({"Other": 1})


def test_typing_set_new():
    assert TypingSet.new(True).is_group
    assert not TypingSet.new(False).is_group
    assert not TypingSet.new(False).typing
    assert TypingSet.new(True).members == set()


def test_channel_defaults():
    channel = Channel(id=ChannelId.user(USER_A), name="direct-channel")
    assert channel.unread_messages == 0
    assert channel.group_data is None
    assert channel.typing == TypingSet.new(False)


def test_message_text_and_is_edit():
    msg = Message.text(USER_A, 1664832050000, "hello")
    assert msg.from_id == USER_A
    assert msg.arrived_at == 1664832050000
    assert msg.message == "hello"
    assert msg.receipt is Receipt.NOTHING
    assert not msg.is_edit()
    msg.edit = 23
    assert msg.is_edit()


def test_message_json_round_trip():
    attachment = Attachment(
        id="abc", content_type="image/jpeg", filename=Path("/tmp/a.jpeg"), size=42
    )
    quote = Message.text(USER_B, 1664832050001, "world")
    msg = Message(
        from_id=USER_A,
        message="Mention \ufffc",
        arrived_at=1664832050000,
        quote=quote,
        attachments=[attachment],
        reactions=[(USER_B, "👍")],
        receipt=Receipt.READ,
        body_ranges=[BodyRange(8, 9, AssociatedValue.mention(USER_B))],
        send_failed="timeout",
        edit=None,
        edited=True,
    )
    assert Message.from_json(msg.to_json()) == msg


def test_attachment_json_uses_camel_case():
    attachment = Attachment(
        id="abc", content_type="image/jpeg", filename=Path("/tmp/a.jpeg"), size=42
    )
    data = attachment.to_json()
    assert data["contentType"] == "image/jpeg"
    assert Attachment.from_json(data) == attachment


def test_associated_value_variants():
    style = AssociatedValue.styled(2)
    assert AssociatedValue.from_json(style.to_json()) == style
    with pytest.raises(ValueError):
        AssociatedValue()


def test_group_data_round_trip():
    data = GroupData(master_key_bytes=GROUP_ID, members=[USER_A, USER_B], revision=3)
    assert GroupData.from_json(data.to_json()) == data
    resolved = ResolvedGroup(name="some_group", group_data=data)
    assert resolved.group_data.members == [USER_A, USER_B]
    assert resolved.profile_keys == []