"""Django settings for the media storage gateway.

There is no database: notes and files live in the object store only.
"""

from typing import Final

from decouple import Csv

from server.settings.components import BASE_DIR, config

SECRET_KEY = config(
    'DJANGO_SECRET_KEY',
    default='django-insecure-media-storage-dev-key',
)

DEBUG = config('DJANGO_DEBUG', cast=bool, default=False)

ALLOWED_HOSTS = config('DJANGO_ALLOWED_HOSTS', cast=Csv(), default='*')

APP_VERSION = config('APP_VERSION', default='0.0.0')

INSTALLED_APPS: Final[tuple[str, ...]] = (
    'server.apps.core',
    'server.apps.authentication',
    'server.apps.files',
)

# The bearer gate runs in `process_view`, after URL resolution,
# so unknown paths are answered with 404 without a token.
MIDDLEWARE: Final[tuple[str, ...]] = (
    'server.apps.core.middleware.RequestLoggingMiddleware',
    'server.apps.core.middleware.RequestMetricsMiddleware',
    'django.middleware.common.CommonMiddleware',
    'server.apps.core.middleware.AppErrorMiddleware',
    'server.apps.authentication.middleware.BearerTokenMiddleware',
)

ROOT_URLCONF = 'server.urls'

WSGI_APPLICATION = 'server.wsgi.application'

DATABASES: Final[dict[str, dict[str, str]]] = {}

APPEND_SLASH = False

USE_TZ = True

# Uploads are fully drained into memory before hashing, keep the
# in-memory threshold in line with the multipart limit (32 MB).
FILE_UPLOAD_MAX_MEMORY_SIZE = config(
    'FILE_UPLOAD_MAX_MEMORY_SIZE',
    cast=int,
    default=32 * 1024 * 1024,
)
