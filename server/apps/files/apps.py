"""Django app configuration for files app."""

from typing import TYPE_CHECKING, override

from django.apps import AppConfig

if TYPE_CHECKING:
    from server.apps.files.logic.file_operations import FileService


class FilesConfig(AppConfig):
    """Configuration for files app.

    Holds the process-wide :class:`FileService`, built once on startup.
    """

    name = 'server.apps.files'
    verbose_name = 'Files'

    service: 'FileService'

    @override
    def ready(self) -> None:
        """Build the file service when app is ready."""
        from server.apps.files.infrastructure.storage import (  # noqa: PLC0415
            build_file_storage,
        )
        from server.apps.files.logic.file_operations import (  # noqa: PLC0415
            FileService,
        )

        self.service = FileService(build_file_storage())
