"""Shared fixtures for files app tests."""

import tempfile
from contextlib import suppress
from dataclasses import dataclass, field
from datetime import datetime
from typing import Final

import boto3
import pytest
from django.core.files.storage import InMemoryStorage
from django.core.files.uploadhandler import (
    MemoryFileUploadHandler,
    StopFutureHandlers,
)
from django.utils import timezone
from moto import mock_aws

from server.apps.files.identity import new_id
from server.apps.files.infrastructure.blob_store import BlobStore
from server.apps.files.logic.persistence import FilePersistenceSynchronizer

TEST_BUCKET: Final = 'file-content'

# PNG signature followed by arbitrary chunk bytes
PNG_CONTENT: Final = b'\x89PNG\r\n\x1a\n' + b'\x00\x00\x00\rIHDR' + bytes(13)


@dataclass
class ForeignFile:
    """File record implemented outside the app, without the File model."""

    name: str | None = 'source.pdf'
    mime: str = 'application/pdf'
    bytes: int = 5000  # noqa: WPS125
    real_path: str = '/tmp/source.pdf'  # noqa: S108
    file_url: str | None = 'https://cdn.example.com/source.pdf'
    id: object = field(default_factory=new_id)  # noqa: WPS125
    created_at: datetime = field(default_factory=timezone.now)


@pytest.fixture
def mock_s3():
    """Mock S3 service with file-content bucket.

    Yields:
        boto3 S3 resource with file-content bucket created.
    """
    with mock_aws():
        # Create S3 resource
        conn = boto3.resource('s3', region_name='us-east-1')

        # Create bucket
        conn.create_bucket(Bucket=TEST_BUCKET)

        yield conn


@pytest.fixture
def temp_dir(tmp_path, monkeypatch):
    """Point the system temp directory at a per-test directory.

    Returns:
        Path used by tempfile.gettempdir() during the test.
    """
    monkeypatch.setattr(tempfile, 'tempdir', str(tmp_path))
    return tmp_path


@pytest.fixture
def memory_storage():
    """Empty in-memory Django storage.

    Returns:
        InMemoryStorage instance.
    """
    return InMemoryStorage()


@pytest.fixture
def blob_store(memory_storage):
    """Blob store backed by in-memory storage.

    Returns:
        BlobStore instance.
    """
    return BlobStore(memory_storage)


@pytest.fixture
def synchronizer(blob_store):
    """Synchronizer without a record class filter.

    Returns:
        FilePersistenceSynchronizer instance.
    """
    return FilePersistenceSynchronizer(blob_store)


@pytest.fixture
def content_file(tmp_path):
    """Local file with text content.

    Returns:
        Path of the file.
    """
    path = tmp_path / 'content.txt'
    path.write_bytes(b'test file content')
    return path


@pytest.fixture
def foreign_file(content_file):
    """Foreign record pointing at local content.

    Returns:
        ForeignFile instance.
    """
    return ForeignFile(
        name='content.txt',
        mime='text/plain',
        bytes=len(b'test file content'),
        real_path=str(content_file),
        file_url=None,
    )


@pytest.fixture
def foreign_file_factory():
    """Class for building foreign records with custom fields.

    Returns:
        ForeignFile dataclass.
    """
    return ForeignFile


@pytest.fixture
def png_content():
    """Bytes starting with the PNG signature.

    Returns:
        PNG-like content.
    """
    return PNG_CONTENT


@pytest.fixture
def memory_upload():
    """Upload kept in memory by Django's MemoryFileUploadHandler.

    Returns:
        InMemoryUploadedFile holding PNG content.
    """
    handler = MemoryFileUploadHandler()
    handler.activated = True
    with suppress(StopFutureHandlers):
        handler.new_file('file', 'photo.png', 'image/png', len(PNG_CONTENT))
    handler.receive_data_chunk(PNG_CONTENT, 0)
    return handler.file_complete(len(PNG_CONTENT))
