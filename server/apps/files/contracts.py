"""Structural contracts for file records and uploads.

Anything exposing these attributes is treated as a file record,
whatever its class. Checks go through ``isinstance`` on the
runtime-checkable protocols below, never through inheritance.
"""

from datetime import datetime
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class FileEntity(Protocol):
    """File metadata plus a local reference to not-yet-stored content."""

    id: Any  # noqa: WPS125
    name: str | None
    mime: str
    bytes: int  # noqa: WPS125
    real_path: str
    created_at: datetime
    file_url: str | None


@runtime_checkable
class UploadHandle(Protocol):
    """Subset of Django's ``UploadedFile`` read by the record builder.

    Disk-backed uploads additionally provide ``temporary_file_path()``.
    """

    name: str | None
    content_type: str | None
    size: int | None
