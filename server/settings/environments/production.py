"""
This file contains all the settings used in production.

This file is required and if development.py is present these
values are overridden.
"""

from server.settings.components import config

DEBUG = False

SECRET_KEY = config('DJANGO_SECRET_KEY')

ALLOWED_HOSTS = [
    config('DOMAIN_NAME'),
]

STORAGES['default']['OPTIONS'].update({  # noqa: F821
    'bucket_name': config('AWS_STORAGE_BUCKET_NAME'),
    'access_key': config('AWS_ACCESS_KEY_ID'),
    'secret_key': config('AWS_SECRET_ACCESS_KEY'),
})

SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SECURE_CONTENT_TYPE_NOSNIFF = True
