"""Keeps blob storage content in step with file record lifecycle.

The synchronizer reacts to two events: a record was created (upload
its content) and a record was removed (delete its content). It does
not know about Django signals; see ``signals.py`` for the wiring.
"""

import logging
from pathlib import Path
from typing import final

from django.conf import settings

from server.apps.files.contracts import FileEntity
from server.apps.files.exceptions import ResourceUnavailableError
from server.apps.files.identity import IdentityStrategy, serialize
from server.apps.files.infrastructure.blob_store import BlobStore

logger = logging.getLogger(__name__)


@final
class FilePersistenceSynchronizer:
    """Writes content on record creation and deletes it on removal.

    Holds no mutable state, so one instance can serve concurrent
    events for unrelated records. Storage failures propagate to the
    caller; nothing is retried.
    """

    __slots__ = ('_blob_store', '_entity_class')

    def __init__(
        self,
        blob_store: BlobStore,
        entity_class: type | None = None,
    ) -> None:
        """Initialize synchronizer.

        Args:
            blob_store: Destination for record content.
            entity_class: If given, only instances of this class are
                synchronized, even when other objects satisfy the
                file contract.
        """
        self._blob_store = blob_store
        self._entity_class = entity_class

    @property
    def blob_store(self) -> BlobStore:
        """Get the blob store receiving content."""
        return self._blob_store

    @property
    def entity_class(self) -> type | None:
        """Get the record class filter, if any."""
        return self._entity_class

    def accepts(self, record: object) -> bool:
        """Check whether a record should be synchronized.

        Args:
            record: Object seen in a lifecycle event.

        Returns:
            True if it satisfies the file contract and the class filter.
        """
        if not isinstance(record, FileEntity):
            return False
        if self._entity_class is None:
            return True
        return isinstance(record, self._entity_class)

    def on_created(self, record: object) -> None:
        """Upload content of a newly created record.

        Reads everything at ``record.real_path`` and stores it under
        the record id, replacing any existing object.

        Args:
            record: Object seen in the creation event.

        Raises:
            ResourceUnavailableError: If ``real_path`` cannot be read.
            Exception: If the blob store write fails.
        """
        if not self.accepts(record):
            logger.debug('Skipping content upload for %r', record)
            return

        key = storage_key(record)
        content = _read_local_content(record.real_path)  # type: ignore[attr-defined]

        logger.info('Storing content for file %s (%d bytes)', key, len(content))
        self._blob_store.write(key, content)

    def on_removed(self, record: object) -> None:
        """Delete content of a removed record.

        Deleting content that is already gone is not an error.

        Args:
            record: Object seen in the removal event.

        Raises:
            Exception: If the blob store delete fails.
        """
        if not self.accepts(record):
            logger.debug('Skipping content removal for %r', record)
            return

        key = storage_key(record)
        logger.info('Deleting content for file %s', key)
        self._blob_store.delete(key)


def storage_key(record: object) -> str:
    """Build the blob key of a record.

    Record types declaring an ``identity`` strategy render their own
    ids; anything else uses the canonical serialization.

    Args:
        record: Object satisfying the file contract.

    Returns:
        Object key for the record's content.
    """
    identity = getattr(type(record), 'identity', None)
    if isinstance(identity, IdentityStrategy):
        return identity.serialize(record.id)  # type: ignore[attr-defined]
    return serialize(record.id)  # type: ignore[attr-defined]


def read_file_content(
    record: FileEntity,
    blob_store: BlobStore | None = None,
) -> bytes:
    """Read stored content of a record from blob storage.

    Args:
        record: Record whose content was synchronized.
        blob_store: Blob store to read from. Defaults to the storage
            configured by FILE_PERSISTENCE_STORAGE.

    Returns:
        Stored bytes.

    Raises:
        FileNotFoundError: If nothing is stored for the record
            (exact type depends on the storage backend).
    """
    if blob_store is None:
        blob_store = BlobStore.from_alias(settings.FILE_PERSISTENCE_STORAGE)
    return blob_store.read(storage_key(record))


def _read_local_content(real_path: str) -> bytes:
    try:
        return Path(real_path).read_bytes()
    except OSError as error:
        logger.exception('Cannot read file content: %s', real_path)
        raise ResourceUnavailableError(real_path) from error
