"""File value types.

Files are not database rows: the object store is the system of record,
these types only exist while a request is being served.
"""

import base64
from dataclasses import dataclass, field
from typing import Any, BinaryIO, final

from server.apps.core.exceptions import SystemFailureError
from server.apps.files.infrastructure.metadata import derive_file_id


@final
@dataclass(frozen=True, slots=True)
class FileUpload:
    """Raw upload as received from the caller.

    ``size`` is the size declared by the caller, it is
    not checked against the number of bytes in ``reader``.
    """

    name: str
    size: int
    reader: BinaryIO


@final
@dataclass(frozen=True, slots=True)
class File:
    """File stored in a note's bucket.

    The identifier is derived from the name and the content,
    see :func:`derive_file_id`. Uploading the same name with the
    same content always yields the same identifier.
    """

    id: str
    name: str
    size: int
    content: bytes = field(repr=False)

    @classmethod
    def derive(cls, name: str, size: int, content: bytes) -> 'File':
        """Build a file with its content-addressed identifier.

        Args:
            name: Display name.
            size: Declared size in bytes.
            content: Complete file content.

        Returns:
            New File instance.
        """
        return cls(
            id=derive_file_id(name, content),
            name=name,
            size=size,
            content=content,
        )

    @classmethod
    def from_upload(cls, upload: FileUpload) -> 'File':
        """Drain an upload into memory and derive the file.

        Args:
            upload: Upload description.

        Returns:
            New File instance.

        Raises:
            SystemFailureError: If the upload stream cannot be read.
        """
        try:
            content = upload.reader.read()
        except OSError as error:
            raise SystemFailureError(
                f'Failed to create file model: {error}',
            ) from error
        return cls.derive(upload.name, upload.size, content)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses, content is base64 encoded."""
        return {
            'id': self.id,
            'name': self.name,
            'size': self.size,
            'bytes': base64.b64encode(self.content).decode('ascii'),
        }
