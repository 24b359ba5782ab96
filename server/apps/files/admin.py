"""Django admin configuration for files app."""

from typing import Final

from django.contrib import admin
from django.http import HttpRequest

from server.apps.files.models import File

_KILOBYTE: Final = 1024


def _format_bytes(size_bytes: int) -> str:
    """Format bytes in human-readable format.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Formatted size string (e.g., '1.5 MB', '234 KB').
    """
    if size_bytes < _KILOBYTE:
        return f'{size_bytes} B'
    if size_bytes < _KILOBYTE ** 2:
        return f'{size_bytes / _KILOBYTE:.1f} KB'
    if size_bytes < _KILOBYTE ** 3:
        return f'{size_bytes / _KILOBYTE ** 2:.1f} MB'
    return f'{size_bytes / _KILOBYTE ** 3:.1f} GB'


@admin.register(File)
class FileAdmin(admin.ModelAdmin[File]):
    """Admin interface for File model.

    Only ``file_url`` is editable; everything else is fixed when the
    record is built.
    """

    list_display = [
        'name',
        'mime',
        'size_display',
        'created_at',
        'file_url',
    ]

    list_filter = [
        'mime',
        'created_at',
    ]

    search_fields = [
        'name',
        'id',
    ]

    readonly_fields = [
        'id',
        'name',
        'mime',
        'bytes',
        'real_path',
        'created_at',
    ]

    fieldsets = (
        ('File Information', {
            'fields': ('id', 'name', 'file_url'),
        }),
        ('Content', {
            'fields': ('mime', 'bytes', 'real_path'),
        }),
        ('Timestamps', {
            'fields': ('created_at',),
        }),
    )

    def size_display(self, obj: File) -> str:
        """Display file size in human-readable format.

        Args:
            obj: File instance.

        Returns:
            Formatted size string.
        """
        return _format_bytes(obj.bytes)
    size_display.short_description = 'Size'  # type: ignore[attr-defined]

    def has_add_permission(self, request: HttpRequest) -> bool:
        """Disallow adding records, which need content to upload.

        Args:
            request: HTTP request.

        Returns:
            Always False.
        """
        return False
