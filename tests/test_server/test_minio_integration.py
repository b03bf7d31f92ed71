"""Integration tests against a running MinIO.

These tests exercise the object store client and the S3 storage
against a real S3-compatible endpoint. They are deselected by default,
run them with ``pytest -m integration``.
"""
import os
import uuid
from typing import Final

import pytest

from server.apps.core.exceptions import NotFoundError
from server.apps.files.infrastructure.object_store import ObjectStoreClient
from server.apps.files.infrastructure.storage import S3FileStorage
from server.apps.files.models import File

_TEST_FILE_NAME: Final = 'integration test.txt'
_TEST_FILE_CONTENT: Final = b'Hello from MinIO integration test!'


@pytest.fixture
def minio_client() -> ObjectStoreClient:
    """Create object store client for MinIO.

    Returns:
        Client configured from the environment.
    """
    return ObjectStoreClient(
        endpoint_url=os.getenv('MINIO_ENDPOINT', 'http://minio:9000'),
        access_key=os.getenv('MINIO_ACCESS_KEY', 'minioadmin'),
        secret_key=os.getenv('MINIO_SECRET_KEY', 'minioadmin'),
    )


@pytest.fixture
def note_id() -> str:
    """Fresh note identifier, used as bucket name.

    Returns:
        Note identifier.
    """
    return str(uuid.uuid4())


@pytest.mark.integration
def test_ensure_bucket_twice(minio_client: ObjectStoreClient, note_id: str):
    """Test repeated bucket creation succeeds."""
    minio_client.ensure_bucket(note_id)
    minio_client.ensure_bucket(note_id)

    assert list(minio_client.list_objects(note_id)) == []


@pytest.mark.integration
def test_storage_round_trip(minio_client: ObjectStoreClient, note_id: str):
    """Test upload, listing, download and deletion of one file."""
    storage = S3FileStorage(client=minio_client)
    file = File.derive(
        _TEST_FILE_NAME,
        len(_TEST_FILE_CONTENT),
        _TEST_FILE_CONTENT,
    )

    storage.create_file(note_id, file)

    assert storage.get_file(note_id, file.id) == file
    assert storage.list_files(note_id) == [file]

    storage.delete_file(note_id, file.id)
    storage.delete_file(note_id, file.id)

    with pytest.raises(NotFoundError):
        storage.list_files(note_id)


@pytest.mark.integration
def test_missing_note(minio_client: ObjectStoreClient, note_id: str):
    """Test a note without a bucket has no files."""
    storage = S3FileStorage(client=minio_client)

    with pytest.raises(NotFoundError):
        storage.list_files(note_id)
