"""Django signal wiring for file content persistence.

Receivers are connected explicitly rather than with ``@receiver`` so
persistence can be switched on and off by settings and tests.
"""

import logging
from typing import Any, Final

from django.apps import apps
from django.conf import settings
from django.db.models import Model
from django.db.models.signals import post_delete, post_save

from server.apps.files.infrastructure.blob_store import BlobStore
from server.apps.files.logic.persistence import FilePersistenceSynchronizer

_DISPATCH_UID: Final = 'files.file_persistence'

logger = logging.getLogger(__name__)


def connect_file_persistence(
    synchronizer: FilePersistenceSynchronizer,
    sender: type[Model] | None = None,
) -> str:
    """Run synchronizer on record creation and removal.

    Replaces a previously connected synchronizer for the same sender.

    Args:
        synchronizer: Synchronizer to call.
        sender: Model to listen to. None listens to all models and
            relies on the synchronizer's own filtering.

    Returns:
        Dispatch UID of the connected receivers.
    """
    def store_content(
        sender: type[Model],
        instance: Model,
        created: bool,
        raw: bool = False,
        **kwargs: Any,
    ) -> None:
        # Fixture loading saves rows without their local content
        if created and not raw:
            synchronizer.on_created(instance)

    def delete_content(
        sender: type[Model],
        instance: Model,
        **kwargs: Any,
    ) -> None:
        synchronizer.on_removed(instance)

    disconnect_file_persistence(sender)
    post_save.connect(
        store_content,
        sender=sender,
        weak=False,
        dispatch_uid=_DISPATCH_UID,
    )
    post_delete.connect(
        delete_content,
        sender=sender,
        weak=False,
        dispatch_uid=_DISPATCH_UID,
    )
    logger.info(
        'File persistence connected (sender: %s)',
        sender.__name__ if sender else 'any',
    )
    return _DISPATCH_UID


def disconnect_file_persistence(sender: type[Model] | None = None) -> None:
    """Stop running the synchronizer on record lifecycle events.

    Args:
        sender: Model passed to ``connect_file_persistence``.
    """
    post_save.disconnect(sender=sender, dispatch_uid=_DISPATCH_UID)
    post_delete.disconnect(sender=sender, dispatch_uid=_DISPATCH_UID)


def build_synchronizer_from_settings() -> FilePersistenceSynchronizer:
    """Create synchronizer configured by FILE_PERSISTENCE_* settings.

    Returns:
        Synchronizer bound to the configured storage and record model.

    Raises:
        LookupError: If FILE_PERSISTENCE_ENTITY_MODEL names an unknown model.
        InvalidStorageError: If FILE_PERSISTENCE_STORAGE is not configured.
    """
    entity_model = settings.FILE_PERSISTENCE_ENTITY_MODEL
    entity_class = apps.get_model(entity_model) if entity_model else None
    blob_store = BlobStore.from_alias(settings.FILE_PERSISTENCE_STORAGE)
    return FilePersistenceSynchronizer(blob_store, entity_class=entity_class)


def register_file_persistence() -> FilePersistenceSynchronizer | None:
    """Connect synchronizer when FILE_PERSISTENCE_ENABLED is set.

    Returns:
        Connected synchronizer, or None when persistence is disabled.
    """
    if not settings.FILE_PERSISTENCE_ENABLED:
        logger.debug('File persistence disabled')
        return None

    synchronizer = build_synchronizer_from_settings()
    connect_file_persistence(synchronizer)
    return synchronizer
