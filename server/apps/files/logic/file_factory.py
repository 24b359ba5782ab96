"""Construction of file records from uploads, other records and payloads.

Every builder returns an unsaved record with a fresh id and creation
time. Content is not uploaded here: saving the record hands its
``real_path`` to the persistence synchronizer.
"""

import base64
import binascii
import logging
import re
import tempfile
from pathlib import Path
from typing import Final, TypeVar

from server.apps.files.contracts import FileEntity, UploadHandle
from server.apps.files.exceptions import InvalidEncodingError
from server.apps.files.identity import new_id, serialize
from server.apps.files.infrastructure.metadata import (
    detect_mime_type,
    extension_for,
    sniff_mime_type,
)
from server.apps.files.models import File

_UNKNOWN_NAME: Final = 'Unknown'

# Placeholder path for upload handles exposing no content
_ROOT_PATH: Final = '/'

_DATA_URI_PATTERN: Final = re.compile(r'^data:([a-zA-Z0-9/\-+.]+);base64,')

_RecordT = TypeVar('_RecordT', bound=FileEntity)

logger = logging.getLogger(__name__)


def create_from_entity(
    source: FileEntity,
    model: type[_RecordT] = File,  # type: ignore[assignment]
) -> _RecordT:
    """Create a new record sharing another record's content metadata.

    The result is a distinct entity: id and creation time are new,
    the source's are dropped.

    Args:
        source: Any object satisfying the FileEntity contract.
        model: Record class to instantiate.

    Returns:
        Unsaved record.

    Raises:
        TypeError: If source does not satisfy the FileEntity contract.
    """
    if not isinstance(source, FileEntity):
        raise TypeError(
            f'{type(source).__name__} does not satisfy the file contract',
        )

    record = model(
        name=source.name or _UNKNOWN_NAME,
        mime=source.mime,
        bytes=source.bytes,
        real_path=source.real_path,
        file_url=source.file_url,
    )
    logger.debug('Built file record %s from %r', record.id, source)
    return record


def create_from_upload(
    upload: UploadHandle,
    model: type[_RecordT] = File,  # type: ignore[assignment]
) -> _RecordT:
    """Create a record from an uploaded file.

    Disk-backed uploads (``TemporaryUploadedFile``) reference their
    temporary file. In-memory uploads are copied to a new file in the
    system temp directory, which the caller must remove once stored.
    Handles exposing no content at all get '/'.

    Args:
        upload: Django UploadedFile or compatible object.
        model: Record class to instantiate.

    Returns:
        Unsaved record.
    """
    name = upload.name or _UNKNOWN_NAME
    mime_type = upload.content_type or detect_mime_type(name)

    record = model(
        name=name,
        mime=mime_type,
        bytes=upload.size or 0,
        real_path=_resolve_upload_path(upload),
        file_url=None,
    )
    logger.debug(
        'Built file record %s from upload %s (%s)',
        record.id,
        name,
        mime_type,
    )
    return record


def create_from_base64(
    payload: str,
    name: str | None = None,
    model: type[_RecordT] = File,  # type: ignore[assignment]
) -> _RecordT:
    """Create a record from a base64 string or data URI.

    A ``data:<mime>;base64,`` prefix declares the MIME type; without
    one the type is sniffed from the decoded content. Decoded content
    is written to a new file in the system temp directory, which the
    caller must remove once it is no longer needed.

    Args:
        payload: Base64 string, optionally in data URI form.
        name: Display filename. Generated from a new id and the
            MIME type's extension when omitted.
        model: Record class to instantiate.

    Returns:
        Unsaved record pointing at the temporary file.

    Raises:
        InvalidEncodingError: If payload is not valid base64.
    """
    declared_mime = None
    encoded = payload
    match = _DATA_URI_PATTERN.match(payload)
    if match:
        declared_mime = match.group(1)
        encoded = payload[match.end():]

    try:
        content = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as error:
        logger.warning('Rejected invalid base64 payload')
        raise InvalidEncodingError from error

    mime_type = declared_mime or sniff_mime_type(content)

    token = serialize(new_id())
    temp_path = Path(tempfile.gettempdir()) / token
    temp_path.write_bytes(content)

    record = model(
        name=name or _synthesize_name(token, mime_type),
        mime=mime_type,
        bytes=len(content),
        real_path=str(temp_path),
        file_url=None,
    )
    logger.debug(
        'Built file record %s from base64 payload (%d bytes, %s)',
        record.id,
        len(content),
        mime_type,
    )
    return record


def discard_temporary_content(record: FileEntity) -> bool:
    """Remove the local file referenced by a record.

    Use after the content has been stored. Missing files are fine;
    the '/' placeholder and directories are never removed.

    Args:
        record: Record whose ``real_path`` should be released.

    Returns:
        True if a file was removed, False otherwise.
    """
    if record.real_path in {'', _ROOT_PATH}:
        return False

    path = Path(record.real_path)
    if not path.is_file():
        return False

    path.unlink(missing_ok=True)
    logger.debug('Removed temporary content: %s', path)
    return True


def _resolve_upload_path(upload: UploadHandle) -> str:
    temporary_file_path = getattr(upload, 'temporary_file_path', None)
    if temporary_file_path is not None:
        return temporary_file_path() or _ROOT_PATH

    chunks = getattr(upload, 'chunks', None)
    if chunks is None:
        return _ROOT_PATH

    # Content only lives in memory
    temp_path = Path(tempfile.gettempdir()) / serialize(new_id())
    with temp_path.open('wb') as destination:
        for chunk in chunks():
            destination.write(chunk)
    logger.debug('Spooled in-memory upload to %s', temp_path)
    return str(temp_path)


def _synthesize_name(token: str, mime_type: str) -> str:
    extension = extension_for(mime_type)
    if not extension:
        return token
    return f'{token}.{extension}'
