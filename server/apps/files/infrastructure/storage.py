"""S3 backend storing file content under exact object keys."""

import logging
from typing import Any, final, override

from storages.backends.s3 import S3Storage
from storages.utils import get_available_overwrite_name

logger = logging.getLogger(__name__)


@final
class FileStorage(S3Storage):
    """S3 storage where an object key always addresses one record's content.

    Saving under a taken key replaces the object instead of picking a
    new name, so content stays reachable by record id. Deleting a key
    that is already gone is logged and ignored.
    """

    @override
    def get_available_name(
        self,
        name: str,
        max_length: int | None = None,
    ) -> str:
        """Keep the requested key even if an object already uses it.

        Args:
            name: Requested object key.
            max_length: Optional maximum key length.

        Returns:
            The key itself, truncated to max_length if needed.
        """
        return get_available_overwrite_name(name, max_length)

    @override
    def _save(self, name: str, content: Any) -> str:
        try:
            stored_key = super()._save(name, content)
        except Exception:
            logger.exception('Failed to store object: %s', name)
            raise
        logger.info('Stored object: %s', stored_key)
        return stored_key

    @override
    def delete(self, name: str) -> None:
        """Delete object, tolerating keys that no longer exist.

        Args:
            name: Object key.

        Raises:
            Exception: If S3 rejects the request.
        """
        if not self.exists(name):
            logger.warning(
                'Object not found in storage (already deleted?): %s',
                name,
            )
            return

        try:
            super().delete(name)
        except Exception:
            logger.exception('Failed to delete object: %s', name)
            raise
        logger.info('Deleted object: %s', name)
