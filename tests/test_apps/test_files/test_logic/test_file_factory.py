"""Tests for building file records."""

import base64
import re
from pathlib import Path
from types import SimpleNamespace

import pytest
from django.core.files.uploadedfile import (
    SimpleUploadedFile,
    TemporaryUploadedFile,
)
from django.utils import timezone

from server.apps.files.exceptions import InvalidEncodingError
from server.apps.files.logic.file_factory import (
    create_from_base64,
    create_from_entity,
    create_from_upload,
    discard_temporary_content,
)
from server.apps.files.models import File

_UUID_PATTERN = r'[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}'


def test_create_from_entity_copies_content_metadata(foreign_file_factory):
    """Test descriptive fields are copied from the source."""
    source = foreign_file_factory()

    file_instance = create_from_entity(source)

    assert isinstance(file_instance, File)
    assert file_instance.name == 'source.pdf'
    assert file_instance.mime == 'application/pdf'
    assert file_instance.bytes == 5000
    assert file_instance.real_path == source.real_path
    assert file_instance.file_url == 'https://cdn.example.com/source.pdf'


def test_create_from_entity_assigns_new_identity(foreign_file_factory):
    """Test the copy gets its own id and creation time."""
    source = foreign_file_factory(
        created_at=timezone.now().replace(year=2020),
    )

    before = timezone.now()
    file_instance = create_from_entity(source)
    after = timezone.now()

    assert file_instance.id != source.id
    assert re.fullmatch(_UUID_PATTERN, str(file_instance.id))
    assert before <= file_instance.created_at <= after


def test_create_from_entity_defaults_name(foreign_file_factory):
    """Test missing source name becomes 'Unknown'."""
    source = foreign_file_factory(name=None, file_url=None)

    file_instance = create_from_entity(source)

    assert file_instance.name == 'Unknown'
    assert file_instance.file_url is None


def test_create_from_entity_accepts_file_model():
    """Test a File record can be the source of another."""
    source = File(
        name='a.txt',
        mime='text/plain',
        bytes=1,
        real_path='/tmp/a.txt',  # noqa: S108
    )

    file_instance = create_from_entity(source)

    assert file_instance.name == 'a.txt'
    assert file_instance.id != source.id


def test_create_from_entity_rejects_other_objects():
    """Test objects without the file attributes are refused."""
    with pytest.raises(TypeError, match='does not satisfy'):
        create_from_entity(SimpleNamespace(name='x.txt'))


def test_create_from_upload_in_memory(temp_dir):
    """Test in-memory upload content is copied to a temp file."""
    upload = SimpleUploadedFile(
        'document.pdf',
        b'%PDF-1.7 test',
        content_type='application/pdf',
    )

    file_instance = create_from_upload(upload)

    assert file_instance.name == 'document.pdf'
    assert file_instance.mime == 'application/pdf'
    assert file_instance.bytes == 13
    assert Path(file_instance.real_path).parent == temp_dir
    assert Path(file_instance.real_path).read_bytes() == b'%PDF-1.7 test'
    assert file_instance.file_url is None


def test_create_from_upload_memory_handler(temp_dir, memory_upload, png_content):
    """Test uploads from MemoryFileUploadHandler get readable content."""
    file_instance = create_from_upload(memory_upload)

    assert file_instance.name == 'photo.png'
    assert file_instance.mime == 'image/png'
    assert file_instance.bytes == len(png_content)
    assert Path(file_instance.real_path).read_bytes() == png_content


def test_create_from_upload_on_disk():
    """Test disk-backed upload references its temporary file."""
    upload = TemporaryUploadedFile(
        'document.pdf',
        'application/pdf',
        12,
        None,
    )
    upload.write(b'test content')
    upload.flush()

    try:
        file_instance = create_from_upload(upload)

        assert file_instance.name == 'document.pdf'
        assert file_instance.bytes == 12
        assert file_instance.real_path == upload.temporary_file_path()
        assert Path(file_instance.real_path).read_bytes() == b'test content'
    finally:
        upload.close()


def test_create_from_upload_without_content_type(temp_dir):
    """Test missing content type is guessed from the filename."""
    upload = SimpleUploadedFile('report.pdf', b'data', content_type=None)

    file_instance = create_from_upload(upload)

    assert file_instance.mime == 'application/pdf'


def test_create_from_upload_defaults():
    """Test missing name, size and path get defaults."""
    upload = SimpleNamespace(name=None, content_type='text/plain', size=None)

    file_instance = create_from_upload(upload)

    assert file_instance.name == 'Unknown'
    assert file_instance.bytes == 0
    assert file_instance.real_path == '/'


def test_create_from_upload_unique_ids(temp_dir):
    """Test identical uploads produce distinct records and files."""
    first = create_from_upload(SimpleUploadedFile('a.txt', b'a'))
    second = create_from_upload(SimpleUploadedFile('a.txt', b'a'))

    assert first.id != second.id
    assert first.real_path != second.real_path


def test_create_from_base64_data_uri(temp_dir, png_content):
    """Test data URI declares MIME type and drives the generated name."""
    payload = 'data:image/png;base64,{0}'.format(
        base64.b64encode(png_content).decode(),
    )

    file_instance = create_from_base64(payload)

    assert file_instance.mime == 'image/png'
    assert file_instance.bytes == len(png_content)
    assert re.fullmatch(rf'{_UUID_PATTERN}\.png', file_instance.name)
    assert Path(file_instance.real_path).parent == temp_dir
    assert Path(file_instance.real_path).read_bytes() == png_content


def test_create_from_base64_declared_type_wins(temp_dir, png_content):
    """Test data URI type is used even if content looks different."""
    payload = 'data:application/pdf;base64,{0}'.format(
        base64.b64encode(png_content).decode(),
    )

    file_instance = create_from_base64(payload)

    assert file_instance.mime == 'application/pdf'
    assert file_instance.name.endswith('.pdf')


def test_create_from_base64_sniffs_type(temp_dir, png_content):
    """Test plain base64 content has its type sniffed."""
    file_instance = create_from_base64(base64.b64encode(png_content).decode())

    assert file_instance.mime == 'image/png'
    assert file_instance.name.endswith('.png')


def test_create_from_base64_custom_name(temp_dir, png_content):
    """Test explicit name is kept."""
    file_instance = create_from_base64(
        base64.b64encode(png_content).decode(),
        'custom-image.png',
    )

    assert file_instance.name == 'custom-image.png'
    assert file_instance.mime == 'image/png'


def test_create_from_base64_unknown_extension(temp_dir):
    """Test generated name has no extension for unknown types."""
    payload = base64.b64encode(b'\x00\x01\x02\xfe').decode()

    file_instance = create_from_base64(payload)

    assert file_instance.mime == 'application/octet-stream'
    assert re.fullmatch(_UUID_PATTERN, file_instance.name)


@pytest.mark.parametrize('content', [
    b'',
    b'a',
    b'hello world',
    bytes(range(256)),
])
def test_create_from_base64_content_matches(temp_dir, content):
    """Test stored content and size equal the decoded payload."""
    payload = base64.b64encode(content).decode()

    file_instance = create_from_base64(payload)

    stored = Path(file_instance.real_path).read_bytes()
    assert stored == content
    assert file_instance.bytes == len(content)
    assert base64.b64encode(stored).decode() == payload


@pytest.mark.parametrize('payload', [
    '!!!invalid-base64!!!',
    'aGVsbG8',  # missing padding
    'aGVs bG8=',
    'data:image/png;base64,@@@',
    'zażółć',
])
def test_create_from_base64_invalid(temp_dir, payload):
    """Test malformed payloads fail without creating files."""
    with pytest.raises(
        InvalidEncodingError,
        match='Invalid base64 string provided.',
    ):
        create_from_base64(payload)

    assert not list(temp_dir.iterdir())


def test_create_from_base64_unique_ids(temp_dir):
    """Test identical payloads produce distinct records and files."""
    first = create_from_base64('aGVsbG8=')
    second = create_from_base64('aGVsbG8=')

    assert first.id != second.id
    assert first.real_path != second.real_path


def test_discard_temporary_content(temp_dir):
    """Test local content is removed once."""
    file_instance = create_from_base64('aGVsbG8=')

    assert discard_temporary_content(file_instance)
    assert not Path(file_instance.real_path).exists()
    assert not discard_temporary_content(file_instance)


def test_discard_temporary_content_ignores_placeholder():
    """Test the '/' placeholder of content-less uploads is left alone."""
    upload = SimpleNamespace(name='a.txt', content_type='text/plain', size=1)
    file_instance = create_from_upload(upload)

    assert not discard_temporary_content(file_instance)
