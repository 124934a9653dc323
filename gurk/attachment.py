"""Saving received and sent attachments to the data directory."""

from __future__ import annotations

import logging
import mimetypes
import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from gurk.data import Attachment
from gurk.util import utc_timestamp_msec_to_local

log = logging.getLogger(__name__)

DIGEST_BYTES_LEN = 4
APPLICATION_OCTET_STREAM = "application/octet-stream"
IMAGE_JPEG = "image/jpeg"

_INVALID_CHARS = re.compile('[\x00-\x1f\x7f-\x9f<>"\\s{}\\^⟨⟩`]')
_MIME = re.compile(
    r"^\s*([A-Za-z0-9!#$&^_.+-]+)/([A-Za-z0-9!#$&^_.+-]+)\s*((?:;.*)?)$", re.DOTALL
)
# Built-in table only, so results do not depend on the host's mime.types files.
_MIME_TYPES = mimetypes.MimeTypes()


@dataclass
class AttachmentPointer:
    """Description of an attachment as carried by a message."""

    content_type: str | None = None
    digest: bytes | None = None
    file_name: str | None = None
    upload_timestamp: int | None = None
    size: int | None = None
    width: int | None = None
    height: int | None = None


def _parse_mime(content_type: str) -> str:
    match = _MIME.match(content_type)
    if match is None:
        return APPLICATION_OCTET_STREAM
    kind, subtype, params = match.groups()
    return f"{kind.lower()}/{subtype.lower()}{params.rstrip()}"


def _mime_extension(mime: str) -> str | None:
    essence = mime.split(";", 1)[0].strip()
    extension = _MIME_TYPES.guess_extension(essence, strict=False)
    return extension.lstrip(".") if extension else None


def derive_name(file_name: str | None, digest: bytes, mime: str) -> str:
    """File name for an attachment: the sanitised given name, or one from the digest."""
    if file_name is not None:
        return _INVALID_CHARS.sub("-", file_name)
    name = digest[:DIGEST_BYTES_LEN].hex()
    if mime == IMAGE_JPEG:
        extension: str | None = "jpeg"
    elif mime == APPLICATION_OCTET_STREAM:
        extension = None
    else:
        extension = _mime_extension(mime)
    return f"{name}.{extension}" if extension else name


def _split_name(name: str) -> tuple[str, str] | None:
    dot = name.rfind(".")
    if dot <= 0:
        return None
    return name[:dot], name[dot + 1 :]


def conflict_free_filename(filedir: Path, name: str) -> Path:
    """A path in filedir for name that does not exist yet, numbering on conflict."""
    filedir = Path(filedir)
    filepath = filedir / name
    parts = _split_name(name)
    idx = 0
    while filepath.exists():
        idx += 1
        if parts is not None:
            stem, extension = parts
            filepath = filedir / f"{stem}.{idx}.{extension}"
        else:
            filepath = filedir / f"{name}.{idx}"
    return filepath


def save(data_dir: str | Path, pointer: AttachmentPointer, data: bytes) -> Attachment:
    """Write the attachment data below data_dir/files/<date>/ and describe it."""
    base_dir = Path(data_dir) / "files"

    if pointer.digest is None:
        raise ValueError("dropping attachment without digest")
    digest = pointer.digest

    mime = _parse_mime(pointer.content_type or "")
    name = derive_name(pointer.file_name, digest, mime)

    if pointer.upload_timestamp is not None:
        day = utc_timestamp_msec_to_local(pointer.upload_timestamp).date()
    else:
        day = date.today()
    filedir = base_dir / day.isoformat()
    filepath = conflict_free_filename(filedir, name)

    try:
        filedir.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise OSError(f"failed to create dir: {filedir}") from error
    try:
        filepath.write_bytes(data)
    except OSError as error:
        raise OSError(f"failed to save attachment at: {filepath}") from error

    log.info("saved attachment: dest=%s", filepath)

    return Attachment(
        id=digest.hex(),
        content_type=mime,
        filename=filepath,
        size=pointer.size or 0,
    )