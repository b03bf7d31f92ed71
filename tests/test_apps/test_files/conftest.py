"""Shared fixtures for files app tests."""

import io

import boto3
import pytest
from django.apps import apps
from moto import mock_aws

from server.apps.files.infrastructure.object_store import ObjectStoreClient
from server.apps.files.infrastructure.storage import (
    InMemoryFileStorage,
    S3FileStorage,
)
from server.apps.files.logic.file_operations import FileService
from server.apps.files.models import FileUpload


@pytest.fixture
def mock_s3():
    """Mock S3 service.

    Yields:
        boto3 S3 resource backed by moto.
    """
    with mock_aws():
        yield boto3.resource('s3', region_name='us-east-1')


@pytest.fixture
def object_store(mock_s3) -> ObjectStoreClient:
    """Object store client talking to mocked S3.

    Returns:
        ObjectStoreClient instance.
    """
    return ObjectStoreClient(
        endpoint_url=None,
        access_key='testing',
        secret_key='testing',
    )


@pytest.fixture
def s3_storage(object_store) -> S3FileStorage:
    """S3-backed storage over mocked S3.

    Returns:
        S3FileStorage instance.
    """
    return S3FileStorage(client=object_store)


@pytest.fixture
def memory_storage() -> InMemoryFileStorage:
    """Empty in-memory storage.

    Returns:
        InMemoryFileStorage instance.
    """
    return InMemoryFileStorage()


@pytest.fixture
def file_service(memory_storage) -> FileService:
    """File service over in-memory storage.

    Returns:
        FileService instance.
    """
    return FileService(memory_storage)


@pytest.fixture
def installed_service(monkeypatch, file_service) -> FileService:
    """Replace the process-wide service used by views.

    Returns:
        The installed FileService.
    """
    monkeypatch.setattr(apps.get_app_config('files'), 'service', file_service)
    return file_service


@pytest.fixture
def sample_upload() -> FileUpload:
    """Upload of a small text file.

    Returns:
        FileUpload with test data.
    """
    content = b'test file content'
    return FileUpload(
        name='test.txt',
        size=len(content),
        reader=io.BytesIO(content),
    )
