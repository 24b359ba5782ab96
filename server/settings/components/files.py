"""File content persistence settings."""

from server.settings.components import config

# Upload record content to blob storage on create, delete it on removal
FILE_PERSISTENCE_ENABLED = config(
    'FILE_PERSISTENCE_ENABLED',
    cast=bool,
    default=False,
)

# Only this model is synchronized; empty string accepts any file record
FILE_PERSISTENCE_ENTITY_MODEL = config(
    'FILE_PERSISTENCE_ENTITY_MODEL',
    default='files.File',
)

# Key of STORAGES holding the content
FILE_PERSISTENCE_STORAGE = config(
    'FILE_PERSISTENCE_STORAGE',
    default='default',
)

# Request uploads always land on disk
FILE_UPLOAD_HANDLERS = (
    'django.core.files.uploadhandler.TemporaryFileUploadHandler',
)
