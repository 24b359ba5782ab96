"""Django storage configuration for S3-compatible backends.

This module configures django-storages to work with:
- MinIO for local development
- Any S3-compatible service in production

File record content is stored under the record id as object key.
Bucket and credentials are set per environment.
"""

from typing import Any, Final

from server.settings.components import config

# Storage configuration dictionary
# Uses S3-compatible storage for file content, local storage for static files
STORAGES: Final[dict[str, dict[str, Any]]] = {
    'default': {
        'BACKEND': 'server.apps.files.infrastructure.storage.FileStorage',
        'OPTIONS': {
            'endpoint_url': config(
                'AWS_S3_ENDPOINT_URL',
                default=None,
            ),
            'region_name': config(
                'AWS_S3_REGION_NAME',
                default='us-east-1',
            ),
            'file_overwrite': False,  # exists() must query the bucket
            'default_acl': None,  # Inherit bucket ACL
        },
    },
    'staticfiles': {
        # Keep static files separate from file content
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}
