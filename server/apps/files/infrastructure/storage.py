"""Storage backends for note files.

Every note maps to one bucket named after the note identifier,
files are objects in that bucket keyed by their identifier.
"""

import contextlib
import dataclasses
import io
import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, final, override

from botocore.exceptions import BotoCoreError
from django.conf import settings
from django.utils.module_loading import import_string

from server.apps.core.exceptions import NotFoundError, SystemFailureError
from server.apps.files.exceptions import ObjectStoreError
from server.apps.files.infrastructure.metadata import decode_display_name
from server.apps.files.infrastructure.object_store import (
    ObjectStoreClient,
    ObjectSummary,
)
from server.apps.files.models import File

logger = logging.getLogger(__name__)


class FileStorage(ABC):
    """Files grouped by note."""

    @abstractmethod
    def get_file(self, note_id: str, file_id: str) -> File:
        """Fetch a single file.

        Raises:
            SystemFailureError: If the file cannot be fetched, a missing
                file is not told apart from other failures.
        """

    @abstractmethod
    def list_files(self, note_id: str) -> list[File]:
        """Fetch every readable file of a note.

        Raises:
            NotFoundError: If the note has no files at all.
        """

    @abstractmethod
    def create_file(self, note_id: str, file: File) -> None:
        """Persist a file, replacing one with the same identifier."""

    @abstractmethod
    def delete_file(self, note_id: str, file_id: str) -> None:
        """Remove a file, missing files are ignored."""


@final
class S3FileStorage(FileStorage):
    """Storage backed by an S3-compatible object store.

    Each note is a bucket, created on the first upload and never
    removed by this service.
    """

    def __init__(
        self,
        client: ObjectStoreClient | None = None,
        **options: Any,
    ) -> None:
        """Initialize the storage.

        Args:
            client: Ready object store client.
            options: Client options, used when no client is given,
                see :class:`ObjectStoreClient`.
        """
        self._client = client or ObjectStoreClient(**options)

    @override
    def get_file(self, note_id: str, file_id: str) -> File:
        stored = self._client.read_object(note_id, file_id)
        with contextlib.closing(stored.body):
            content = self._read_body(
                stored.body,
                stored.size,
                note_id,
                file_id,
            )
        return File(
            id=stored.key,
            name=decode_display_name(stored.metadata),
            size=stored.size,
            content=content,
        )

    @override
    def list_files(self, note_id: str) -> list[File]:
        summaries = list(self._client.list_objects(note_id))
        if not summaries:
            raise NotFoundError(f'Note {note_id} has no files')

        files = []
        for summary in summaries:
            file = self._read_listed(note_id, summary)
            if file is not None:
                files.append(file)

        if len(files) < len(summaries):
            logger.warning(
                'Listed %d of %d files for note %s',
                len(files),
                len(summaries),
                note_id,
            )
        return files

    @override
    def create_file(self, note_id: str, file: File) -> None:
        try:
            self._client.ensure_bucket(note_id)
            logger.info('Uploading file %s to note %s', file.id, note_id)
            self._client.write_object(
                note_id,
                file.id,
                file.name,
                len(file.content),
                io.BytesIO(file.content),
            )
        except ObjectStoreError:
            logger.exception('Failed to upload file %s', file.id)
            raise

    @override
    def delete_file(self, note_id: str, file_id: str) -> None:
        try:
            logger.info('Deleting file %s from note %s', file_id, note_id)
            self._client.delete_object(note_id, file_id)
        except ObjectStoreError:
            logger.exception('Failed to delete file %s', file_id)
            raise

    def _read_listed(
        self,
        note_id: str,
        summary: ObjectSummary,
    ) -> File | None:
        """Read one listed object, None if it cannot be read."""
        try:
            return self.get_file(note_id, summary.key)
        except SystemFailureError as error:
            logger.warning('Skipping unreadable file: %s', error)
            return None

    def _read_body(
        self,
        body: Any,
        size: int,
        note_id: str,
        file_id: str,
    ) -> bytes:
        """Read up to the declared size, a short read is accepted."""
        try:
            return body.read(size)
        except (BotoCoreError, OSError) as error:
            raise ObjectStoreError(
                'read object', note_id, file_id, error,
            ) from error


@final
class InMemoryFileStorage(FileStorage):
    """Storage keeping files in process memory.

    Observable behaviour matches :class:`S3FileStorage`, meant for
    tests and for running the gateway without an object store. Like the
    object store, it reports the size of the stored content rather than
    the size declared on upload.
    """

    def __init__(self, **options: Any) -> None:
        """Initialize empty storage."""
        self._notes: dict[str, dict[str, File]] = {}
        # Request threads share one instance
        self._lock = threading.Lock()

    @override
    def get_file(self, note_id: str, file_id: str) -> File:
        try:
            with self._lock:
                file = self._notes[note_id][file_id]
        except KeyError as error:
            raise SystemFailureError(
                f'Failed to get object {file_id} from bucket {note_id}',
            ) from error
        return _as_stored(file)

    @override
    def list_files(self, note_id: str) -> list[File]:
        with self._lock:
            stored = list(self._notes.get(note_id, {}).values())
        files = [_as_stored(file) for file in stored]
        if not files:
            raise NotFoundError(f'Note {note_id} has no files')
        return files

    @override
    def create_file(self, note_id: str, file: File) -> None:
        with self._lock:
            self._notes.setdefault(note_id, {})[file.id] = file

    @override
    def delete_file(self, note_id: str, file_id: str) -> None:
        with self._lock:
            self._notes.get(note_id, {}).pop(file_id, None)


def _as_stored(file: File) -> File:
    return dataclasses.replace(file, size=len(file.content))


def build_file_storage() -> FileStorage:
    """Instantiate the backend configured in ``NOTE_FILE_STORAGE``.

    Returns:
        Storage instance.
    """
    backend = settings.NOTE_FILE_STORAGE['BACKEND']
    options = settings.NOTE_FILE_STORAGE.get('OPTIONS', {})
    logger.info('Using note file storage backend %s', backend)
    return import_string(backend)(**options)
