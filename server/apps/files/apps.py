"""Django app configuration for files app."""

from typing import override

from django.apps import AppConfig


class FilesConfig(AppConfig):
    """Configuration for files app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.files'
    label = 'files'
    verbose_name = 'Files'

    @override
    def ready(self) -> None:
        """Connect file persistence when app is ready."""
        from server.apps.files.signals import (  # noqa: WPS433
            register_file_persistence,
        )

        register_file_persistence()
