"""Business logic for file operations."""

import logging
from typing import final

from server.apps.authentication.tokens import CallerIdentity
from server.apps.core.exceptions import InvalidRequestError
from server.apps.files.infrastructure.storage import FileStorage
from server.apps.files.models import File, FileUpload

logger = logging.getLogger(__name__)


def _require(value: str, parameter: str) -> None:
    if not value:
        raise InvalidRequestError(f'{parameter} is required')


@final
class FileService:
    """Operations on the files of a note.

    Every operation receives the verified caller explicitly. The caller
    is only used for log context, any authenticated caller may access
    any note.
    """

    def __init__(self, storage: FileStorage) -> None:
        """Initialize the service.

        Args:
            storage: Backend holding the files.
        """
        self._storage = storage

    @property
    def storage(self) -> FileStorage:
        """Backend the service delegates to."""
        return self._storage

    def get_file(
        self,
        note_id: str,
        file_id: str,
        *,
        caller: CallerIdentity,
    ) -> File:
        """Fetch a single file of a note.

        Args:
            note_id: Note identifier.
            file_id: File identifier.
            caller: Verified caller.

        Returns:
            The file with its content.

        Raises:
            InvalidRequestError: If an identifier is missing.
            SystemFailureError: If the file cannot be fetched.
        """
        _require(note_id, 'note_uuid')
        _require(file_id, 'id')
        logger.debug(
            'Caller %s fetches file %s of note %s',
            caller.subject,
            file_id,
            note_id,
        )
        return self._storage.get_file(note_id, file_id)

    def list_files(
        self,
        note_id: str,
        *,
        caller: CallerIdentity,
    ) -> list[File]:
        """Fetch every readable file of a note.

        Args:
            note_id: Note identifier.
            caller: Verified caller.

        Returns:
            Files that could be read, possibly none.

        Raises:
            InvalidRequestError: If the note identifier is missing.
            NotFoundError: If the note has no files.
        """
        _require(note_id, 'note_uuid')
        logger.debug('Caller %s lists note %s', caller.subject, note_id)
        return self._storage.list_files(note_id)

    def create_file(
        self,
        note_id: str,
        upload: FileUpload,
        *,
        caller: CallerIdentity,
    ) -> File:
        """Store an uploaded file in a note.

        The upload is drained into memory to derive the identifier.
        Uploading the same name and content twice overwrites the
        first copy with identical bytes.

        Args:
            note_id: Note identifier.
            upload: Raw upload.
            caller: Verified caller.

        Returns:
            Stored file.

        Raises:
            InvalidRequestError: If the note identifier is missing.
            SystemFailureError: If the upload cannot be read or stored.
        """
        _require(note_id, 'note_uuid')
        file = File.from_upload(upload)
        logger.info(
            'Caller %s uploads %s (%d bytes) to note %s as %s',
            caller.subject,
            file.name,
            file.size,
            note_id,
            file.id,
        )
        self._storage.create_file(note_id, file)
        return file

    def delete_file(
        self,
        note_id: str,
        file_id: str,
        *,
        caller: CallerIdentity,
    ) -> None:
        """Remove a file from a note, missing files are ignored.

        Args:
            note_id: Note identifier.
            file_id: File identifier.
            caller: Verified caller.

        Raises:
            InvalidRequestError: If an identifier is missing.
            SystemFailureError: If the store call fails.
        """
        _require(note_id, 'note_uuid')
        _require(file_id, 'id')
        logger.info(
            'Caller %s deletes file %s of note %s',
            caller.subject,
            file_id,
            note_id,
        )
        self._storage.delete_file(note_id, file_id)
