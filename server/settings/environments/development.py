"""
This file contains all the settings that defines the development server.

SECURITY WARNING: don't run with debug turned on in production!
"""

from server.settings.components import config

DEBUG = True

SECRET_KEY = config('DJANGO_SECRET_KEY', default='insecure-development-key')

ALLOWED_HOSTS = [
    config('DOMAIN_NAME', default='localhost'),
    'localhost',
    '127.0.0.1',
]

# Local MinIO defaults
STORAGES['default']['OPTIONS'].update({  # noqa: F821
    'bucket_name': config('AWS_STORAGE_BUCKET_NAME', default='file-content'),
    'access_key': config('AWS_ACCESS_KEY_ID', default='minioadmin'),
    'secret_key': config('AWS_SECRET_ACCESS_KEY', default='minioadmin'),
})
