"""Key-addressed blob store on top of a Django storage backend."""

import logging
from typing import final

from django.core.files.base import ContentFile
from django.core.files.storage import Storage, storages

logger = logging.getLogger(__name__)


@final
class BlobStore:
    """Write, read and delete raw content by key.

    Backends that overwrite in place (``FileStorage``) are used as is.
    Backends that would rename on a taken key get the old object
    removed first, so content always ends up under exactly the key.
    """

    def __init__(self, storage: Storage) -> None:
        """Initialize blob store.

        Args:
            storage: Django storage backend holding the objects.
        """
        self._storage = storage

    @classmethod
    def from_alias(cls, alias: str) -> 'BlobStore':
        """Create blob store for a configured storage.

        Args:
            alias: Key of the STORAGES setting (e.g., 'default').

        Returns:
            BlobStore backed by that storage.

        Raises:
            InvalidStorageError: If alias is not configured.
        """
        return cls(storages[alias])

    @property
    def storage(self) -> Storage:
        """Get the underlying storage backend."""
        return self._storage

    def write(self, key: str, content: bytes) -> None:
        """Store content under key, replacing any existing object.

        Args:
            key: Object key.
            content: Raw bytes to store.

        Raises:
            Exception: If the storage backend fails.
        """
        if self._storage.get_available_name(key) != key:
            logger.debug('Replacing existing object: %s', key)
            self._storage.delete(key)

        saved_name = self._storage.save(key, ContentFile(content))
        if saved_name != key:
            # Backend normalized the name; the key no longer addresses it
            logger.warning('Object stored as %s instead of %s', saved_name, key)

    def read(self, key: str) -> bytes:
        """Read content stored under key.

        Args:
            key: Object key.

        Returns:
            Stored bytes.

        Raises:
            FileNotFoundError: If no object exists under key
                (exact type depends on the backend).
        """
        with self._storage.open(key, 'rb') as stored:
            return stored.read()

    def delete(self, key: str) -> None:
        """Delete object stored under key.

        Django storages treat a missing name as already deleted.

        Args:
            key: Object key.

        Raises:
            Exception: If the storage backend fails.
        """
        self._storage.delete(key)

    def exists(self, key: str) -> bool:
        """Check whether an object is stored under key.

        Args:
            key: Object key.

        Returns:
            True if the object exists.
        """
        return self._storage.exists(key)
