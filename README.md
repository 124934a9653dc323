# gurk

The core of a terminal client for the Signal messenger: the data model for
channels and messages, pluggable message storage, saving of received
attachments, and helpers for laying out the chat in a terminal.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## What is inside

- `gurk.data` – channels (`Channel`, `ChannelId`), messages (`Message`),
  receipts (`Receipt`), group data (`GroupData`, `ResolvedGroup`), typing
  state (`TypingSet`), mentions (`BodyRange`, `AssociatedValue`) and
  attachments (`Attachment`).
- `gurk.util` – `StatefulList`, a list with a selection cursor that stops at
  either end, helpers for millisecond UTC timestamps
  (`utc_now_timestamp_msec`, `utc_timestamp_msec_to_local`) and the
  `URL_REGEX` / `ATTACHMENT_REGEX` patterns.
- `gurk.attachment` – `save()` writes attachment data below
  `<data dir>/files/<upload date>/`, deriving a safe file name
  (`derive_name`) and never overwriting an existing file
  (`image.jpeg`, `image.1.jpeg`, ... via `conflict_free_filename`).
  An `AttachmentPointer` without a digest is rejected with `ValueError`.
- `gurk.storage` – the `Storage` interface (`gurk.storage.base`) and its
  implementations:
  - `ForgetfulStorage` (`gurk.storage.forgetful`) keeps nothing,
  - `MemCache` (`gurk.storage.memcache`) caches another storage in memory,
  - `JsonStorage` (`gurk.storage.json_storage`) persists everything in a
    single JSON file, written on `save()`,
  - `copy()` (`gurk.storage.copy`) moves metadata, channels, messages and
    names from one storage to another and reports what it copied as `Stats`.
- `gurk.ui.coords` – `Rect` and `coords_within_channels_view()`, which maps a
  terminal position to a position inside the channels view.
- `gurk.ui.names` – `NameResolver` for names and colours of chat
  participants, `user_color()` and `displayed_name()`.

## Example

```python
from gurk.data import Channel, ChannelId, Message
from gurk.storage.base import MessageId
from gurk.storage.forgetful import ForgetfulStorage
from gurk.storage.memcache import MemCache
from uuid import uuid4

storage = MemCache(ForgetfulStorage())
print(storage.is_empty())  # True

user = uuid4()
channel_id = ChannelId.user(user)
storage.store_channel(Channel(id=channel_id, name="ellie"))
storage.store_message(channel_id, Message.text(user, 1000, "hello"))
print(storage.message(MessageId(channel_id, 1000)).message)  # hello
```

Messages are identified by their channel and their arrival time in
milliseconds (`MessageId`). `Storage.store_edited_message` stores an edit,
keeps the original body as a separate entry that `messages()` leaves out, and
marks the visible message as edited.

`JsonStorage(path, fallback_path)` reads the file if it exists (falling back to
the second path when the first is missing) and raises `ValueError` rather than
overwriting a file it cannot read.

## Release notes command

`gurk-changelog` extracts the section for the release being built from
`CHANGELOG.md` and writes it to `dist/CHANGELOG.md`, replacing any existing
`dist` directory. The version is taken from the `GITHUB_REF` environment
variable, which must look like `refs/tags/v<version>`:

```
GITHUB_REF=refs/tags/v0.7.1 gurk-changelog
GITHUB_REF=refs/tags/v0.7.1 gurk-changelog --root path/to/project
```

The section is the text between the level-two heading that mentions the
version and the next level-two heading. The command exits with status 1 and a
message on standard error when something is missing.

## What this package does not do

- It does not connect to the Signal network: there is no registration,
  sending or receiving of messages.
- It has no interactive terminal interface and does not draw message lists;
  `gurk.ui` holds only coordinate and name helpers.
- Storage is limited to memory and JSON files; there is no database-backed
  storage.