"""Object store configuration for note files.

Each note is stored in its own bucket of an S3-compatible backend:
- MinIO for local development
- any S3-compatible service in production

The backend is pluggable, ``InMemoryFileStorage`` can be used
to run the gateway without an object store. It accepts the same
``OPTIONS`` and ignores them, so switching backends only needs
``NOTE_FILE_STORAGE_BACKEND`` to change.
"""

from typing import Any, Final

from server.settings.components import config

NOTE_FILE_STORAGE: Final[dict[str, Any]] = {
    'BACKEND': config(
        'NOTE_FILE_STORAGE_BACKEND',
        default='server.apps.files.infrastructure.storage.S3FileStorage',
    ),
    'OPTIONS': {
        'endpoint_url': config('MINIO_ENDPOINT', default=None),
        'access_key': config('MINIO_ACCESS_KEY', default=''),
        'secret_key': config('MINIO_SECRET_KEY', default=''),
        'region_name': config('MINIO_REGION_NAME', default='us-east-1'),
        'use_ssl': config('MINIO_USE_SSL', cast=bool, default=False),
        # Per-call budgets in seconds, calls are never retried
        'read_timeout': config('MINIO_READ_TIMEOUT', cast=float, default=5),
        'list_timeout': config('MINIO_LIST_TIMEOUT', cast=float, default=10),
        'write_timeout': config('MINIO_WRITE_TIMEOUT', cast=float, default=10),
    },
}
