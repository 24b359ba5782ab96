"""MIME type and extension resolution for file content."""

import mimetypes
from types import MappingProxyType
from typing import Final

DEFAULT_MIME_TYPE: Final = 'application/octet-stream'

# Canonical extension (without dot) for common MIME types
_EXTENSIONS: Final = MappingProxyType({
    'image/png': 'png',
    'image/jpeg': 'jpg',
    'image/gif': 'gif',
    'image/webp': 'webp',
    'image/svg+xml': 'svg',
    'image/bmp': 'bmp',
    'image/tiff': 'tiff',
    'application/pdf': 'pdf',
    'application/zip': 'zip',
    'application/gzip': 'gz',
    'application/json': 'json',
    'application/xml': 'xml',
    'application/msword': 'doc',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document': 'docx',  # noqa: E501
    'application/vnd.ms-excel': 'xls',
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet': 'xlsx',  # noqa: E501
    'text/plain': 'txt',
    'text/html': 'html',
    'text/csv': 'csv',
    'audio/wav': 'wav',
    'audio/x-wav': 'wav',
    'audio/mpeg': 'mp3',
    'audio/ogg': 'ogg',
    'audio/flac': 'flac',
    'video/mp4': 'mp4',
    'video/webm': 'webm',
})

_WEB_IMAGE_TYPES: Final = frozenset((
    'image/jpeg',
    'image/png',
    'image/gif',
    'image/webp',
    'image/svg+xml',
))

# (offset, signature, MIME type); first match wins
_SIGNATURES: Final = (
    (0, b'\x89PNG\r\n\x1a\n', 'image/png'),
    (0, b'\xff\xd8\xff', 'image/jpeg'),
    (0, b'GIF87a', 'image/gif'),
    (0, b'GIF89a', 'image/gif'),
    (0, b'%PDF-', 'application/pdf'),
    (0, b'PK\x03\x04', 'application/zip'),
    (0, b'\x1f\x8b', 'application/gzip'),
    (0, b'II*\x00', 'image/tiff'),
    (0, b'MM\x00*', 'image/tiff'),
    (0, b'ID3', 'audio/mpeg'),
    (0, b'OggS', 'audio/ogg'),
    (0, b'fLaC', 'audio/flac'),
    (4, b'ftyp', 'video/mp4'),
    (0, b'\x1a\x45\xdf\xa3', 'video/webm'),
)

# RIFF containers carry their format at offset 8
_RIFF_FORMATS: Final = MappingProxyType({
    b'WEBP': 'image/webp',
    b'WAVE': 'audio/wav',
})

_BMP_RESERVED: Final = bytes(4)

# How much leading text is inspected for markup
_MARKUP_SNIFF_LENGTH: Final = 512

# Bytes allowed in plain text besides printable characters
_TEXT_CONTROL_BYTES: Final = frozenset(b'\t\n\r\f\b\x1b')


def extension_for(mime_type: str) -> str:
    """Get canonical file extension for a MIME type.

    Args:
        mime_type: MIME type, optionally with parameters
            (e.g., 'text/plain; charset=utf-8').

    Returns:
        Extension without dot (e.g., 'png').
        Returns empty string if MIME type is not known.
    """
    essence = mime_type.split(';', 1)[0].strip().lower()
    return _EXTENSIONS.get(essence, '')


def sniff_mime_type(content: bytes) -> str:
    """Guess MIME type from content signature.

    Checks well-known magic numbers first, then markup, then falls
    back to plain text detection.

    Args:
        content: Raw file content.

    Returns:
        MIME type string. Returns 'application/octet-stream' if
        content is empty or the type cannot be determined.
    """
    if not content:
        return DEFAULT_MIME_TYPE

    for offset, signature, mime_type in _SIGNATURES:
        if content.startswith(signature, offset):
            return mime_type

    # BMP header reserves four zero bytes after the file size
    if content.startswith(b'BM') and content[6:10] == _BMP_RESERVED:
        return 'image/bmp'

    if content.startswith(b'RIFF'):
        riff_type = _RIFF_FORMATS.get(content[8:12])
        if riff_type:
            return riff_type

    return _sniff_text(content)


def detect_mime_type(filename: str) -> str:
    """Detect MIME type from filename extension.

    Args:
        filename: Filename with extension.

    Returns:
        MIME type string (e.g., 'image/jpeg', 'application/pdf').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None:
        return DEFAULT_MIME_TYPE
    return mime_type


def is_web_image(mime_type: str) -> bool:
    """Check whether browsers can render the MIME type as an image.

    Args:
        mime_type: MIME type string.

    Returns:
        True for JPEG, PNG, GIF, WebP and SVG.
    """
    return mime_type in _WEB_IMAGE_TYPES


def _sniff_text(content: bytes) -> str:
    try:
        text = content.decode('utf-8')
    except UnicodeDecodeError:
        return DEFAULT_MIME_TYPE

    if any(byte < 0x20 and byte not in _TEXT_CONTROL_BYTES for byte in content):
        return DEFAULT_MIME_TYPE

    head = text[:_MARKUP_SNIFF_LENGTH].lstrip().lower()
    if head.startswith('<svg') or (head.startswith('<?xml') and '<svg' in head):
        return 'image/svg+xml'
    if head.startswith(('<!doctype html', '<html')):
        return 'text/html'
    return 'text/plain'
