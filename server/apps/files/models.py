"""Database models for files app."""

from typing import Any, ClassVar, Final, final, override

from django.db import models
from django.utils import timezone

from server.apps.files.identity import IdentityStrategy, UuidIdentity
from server.apps.files.infrastructure import metadata

# Constants for field max lengths
_NAME_MAX_LENGTH: Final = 255
_MIME_TYPE_MAX_LENGTH: Final = 100
_PATH_MAX_LENGTH: Final = 500

# Only column that may change after the record is created
_MUTABLE_FIELDS: Final = ('file_url',)

_IDENTITY: Final = UuidIdentity()


@final
class File(models.Model):
    """Metadata of a file whose content lives in blob storage.

    The record id doubles as the object key in blob storage. Content
    is picked up from ``real_path`` once, when the record is created.
    All fields except ``file_url`` are fixed at construction.
    """

    identity: ClassVar[IdentityStrategy] = _IDENTITY

    id = _IDENTITY.primary_key_field()  # noqa: WPS125

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
    )

    mime = models.CharField(
        max_length=_MIME_TYPE_MAX_LENGTH,
        help_text='Declared or sniffed MIME type',
    )

    bytes = models.PositiveBigIntegerField(  # noqa: WPS125
        help_text='Content size in bytes',
    )

    # Local content awaiting upload to blob storage
    real_path = models.CharField(
        max_length=_PATH_MAX_LENGTH,
    )

    created_at = models.DateTimeField(default=timezone.now, editable=False)

    # External URL (e.g. CDN), assigned after upload
    file_url = models.CharField(
        max_length=_PATH_MAX_LENGTH,
        null=True,
        blank=True,
    )

    class Meta:
        """Model metadata."""

        db_table = 'files'
        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        ordering = ['-created_at']

        constraints = [
            models.CheckConstraint(
                condition=~models.Q(mime=''),
                name='files_mime_not_empty',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.name} ({self.storage_key})'

    @override
    def save(self, *args: Any, **kwargs: Any) -> None:
        """Save record; existing records only persist ``file_url``.

        Args:
            args: Positional arguments for Model.save.
            kwargs: Keyword arguments for Model.save.
        """
        if not self._state.adding:
            kwargs['update_fields'] = _MUTABLE_FIELDS
        super().save(*args, **kwargs)

    @property
    def storage_key(self) -> str:
        """Get the object key for this record's content.

        Returns:
            Serialized record id.
        """
        return self.identity.serialize(self.id)

    def set_file_url(self, file_url: str | None) -> 'File':
        """Assign external URL of the stored content.

        Args:
            file_url: URL or None to clear it.

        Returns:
            The same record, for chaining.
        """
        self.file_url = file_url
        return self

    def is_web_image(self) -> bool:
        """Check whether browsers can display the content as an image.

        Returns:
            True for JPEG, PNG, GIF, WebP and SVG content.
        """
        return metadata.is_web_image(self.mime)
