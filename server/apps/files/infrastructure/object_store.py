"""Client for the S3-compatible object store.

Wraps boto3 with the operations the file storage needs. Every call
has its own time budget and is never retried, a failed call surfaces
as :class:`ObjectStoreError` and the caller decides what to do.

boto3 clients are thread-safe, one instance is shared by all requests.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Final, final

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from server.apps.files.exceptions import ObjectStoreError
from server.apps.files.infrastructure.metadata import (
    NAME_METADATA_KEY,
    encode_display_name,
)

logger = logging.getLogger(__name__)

_CONTENT_TYPE: Final = 'application/octet-stream'

# Error codes meaning the bucket is already there
_BUCKET_EXISTS_CODES: Final = frozenset((
    'BucketAlreadyOwnedByYou',
    'BucketAlreadyExists',
))

_MISSING_BUCKET_CODES: Final = frozenset(('NoSuchBucket', '404'))

_DEFAULT_REGION: Final = 'us-east-1'


@final
@dataclass(frozen=True, slots=True)
class ObjectSummary:
    """Object as returned by a bucket listing."""

    key: str
    size: int


@final
@dataclass(frozen=True, slots=True)
class StoredObject:
    """Object opened for reading.

    ``body`` is a streaming response, close it when done.
    """

    key: str
    size: int
    metadata: dict[str, str]
    body: Any = field(repr=False)


def _error_code(error: ClientError) -> str:
    return error.response.get('Error', {}).get('Code', '')


@final
class ObjectStoreClient:
    """Thin client for named objects inside named buckets."""

    def __init__(  # noqa: WPS211
        self,
        endpoint_url: str | None,
        access_key: str,
        secret_key: str,
        region_name: str = _DEFAULT_REGION,
        use_ssl: bool = False,
        read_timeout: float = 5,
        list_timeout: float = 10,
        write_timeout: float = 10,
    ) -> None:
        """Create one boto3 client per time budget.

        Args:
            endpoint_url: Store URL, None for AWS defaults.
            access_key: Access key ID.
            secret_key: Secret access key.
            region_name: Region to sign requests for.
            use_ssl: Whether to use TLS.
            read_timeout: Budget for reading one object, seconds.
            list_timeout: Budget for listing a bucket, seconds.
            write_timeout: Budget for writing one object, seconds.
        """
        self._session = boto3.Session(
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region_name,
        )
        self._endpoint_url = endpoint_url
        self._use_ssl = use_ssl
        self._region_name = region_name

        self._reader = self._make_client(read_timeout)
        self._lister = self._make_client(list_timeout)
        self._writer = self._make_client(write_timeout)
        # Bucket management and deletes use botocore default timeouts
        self._control = self._make_client(None)

    def read_object(self, bucket: str, key: str) -> StoredObject:
        """Open an object for reading.

        Args:
            bucket: Bucket name.
            key: Object key.

        Returns:
            Opened object with its size and user metadata.

        Raises:
            ObjectStoreError: If the object is missing or the call fails.
        """
        try:
            response = self._reader.get_object(Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as error:
            raise ObjectStoreError('get object', bucket, key, error) from error
        return StoredObject(
            key=key,
            size=response['ContentLength'],
            metadata=response.get('Metadata', {}),
            body=response['Body'],
        )

    def list_objects(self, bucket: str) -> Iterator[ObjectSummary]:
        """List every object in a bucket.

        A bucket that does not exist lists as empty.

        Args:
            bucket: Bucket name.

        Yields:
            Summary of each object.

        Raises:
            ObjectStoreError: If the listing fails.
        """
        paginator = self._lister.get_paginator('list_objects_v2')
        try:
            for page in paginator.paginate(Bucket=bucket):
                for entry in page.get('Contents', []):
                    yield ObjectSummary(key=entry['Key'], size=entry['Size'])
        except ClientError as error:
            if _error_code(error) in _MISSING_BUCKET_CODES:
                logger.debug('Bucket %s does not exist', bucket)
                return
            raise ObjectStoreError(
                'list objects', bucket, reason=error,
            ) from error
        except BotoCoreError as error:
            raise ObjectStoreError(
                'list objects', bucket, reason=error,
            ) from error

    def ensure_bucket(self, bucket: str) -> None:
        """Create a bucket unless it already exists.

        Creation is attempted when the bucket is missing or the existence
        check fails. Losing a creation race to another writer counts
        as success.

        Args:
            bucket: Bucket name.

        Raises:
            ObjectStoreError: If the bucket could not be created.
        """
        try:
            self._control.head_bucket(Bucket=bucket)
        except (BotoCoreError, ClientError):
            logger.warning('No bucket %s, creating new one...', bucket)
        else:
            return

        try:
            self._control.create_bucket(
                Bucket=bucket,
                **self._bucket_location(),
            )
        except ClientError as error:
            if _error_code(error) in _BUCKET_EXISTS_CODES:
                logger.debug('Bucket %s was created concurrently', bucket)
                return
            raise ObjectStoreError(
                'create bucket', bucket, reason=error,
            ) from error
        except BotoCoreError as error:
            raise ObjectStoreError(
                'create bucket', bucket, reason=error,
            ) from error

    def write_object(  # noqa: WPS211
        self,
        bucket: str,
        key: str,
        name: str,
        size: int,
        stream: BinaryIO,
    ) -> None:
        """Write an object, replacing any object under the same key.

        Args:
            bucket: Bucket name, must exist.
            key: Object key.
            name: Display name, recorded as user metadata.
            size: Number of bytes in ``stream``.
            stream: Object content.

        Raises:
            ObjectStoreError: If the upload fails.
        """
        logger.debug('Put new object %s to bucket %s', name, bucket)
        try:
            self._writer.put_object(
                Bucket=bucket,
                Key=key,
                Body=stream,
                ContentLength=size,
                ContentType=_CONTENT_TYPE,
                Metadata={NAME_METADATA_KEY: encode_display_name(name)},
            )
        except (BotoCoreError, ClientError) as error:
            raise ObjectStoreError(
                'upload object', bucket, key, error,
            ) from error

    def delete_object(self, bucket: str, key: str) -> None:
        """Delete an object.

        Deleting a missing object is not an error.

        Args:
            bucket: Bucket name.
            key: Object key.

        Raises:
            ObjectStoreError: If the call fails.
        """
        try:
            self._control.delete_object(Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as error:
            raise ObjectStoreError(
                'delete object', bucket, key, error,
            ) from error

    def _bucket_location(self) -> dict[str, Any]:
        # us-east-1 is the default location and must not be named explicitly
        if self._region_name == _DEFAULT_REGION:
            return {}
        return {
            'CreateBucketConfiguration': {
                'LocationConstraint': self._region_name,
            },
        }

    def _make_client(self, timeout: float | None) -> Any:
        options: dict[str, Any] = {
            'retries': {'total_max_attempts': 1},
            's3': {'addressing_style': 'path'},
        }
        if timeout is not None:
            options['connect_timeout'] = timeout
            options['read_timeout'] = timeout
        return self._session.client(
            's3',
            endpoint_url=self._endpoint_url,
            use_ssl=self._use_ssl,
            config=Config(**options),
        )
