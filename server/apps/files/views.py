"""HTTP views for note files.

Views only shape requests and responses, errors raised by the
service are rendered by ``AppErrorMiddleware``.
"""

from http import HTTPStatus
from typing import final

from django.apps import apps
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.http import content_disposition_header
from django.views import View

from server.apps.core.exceptions import InvalidRequestError
from server.apps.core.responses import json_response
from server.apps.files.logic.file_operations import FileService
from server.apps.files.models import FileUpload

_NOTE_PARAM = 'note_uuid'


def _get_service() -> FileService:
    """Get the process-wide file service.

    Returns:
        FileService built by the files app on startup.
    """
    return apps.get_app_config('files').service  # type: ignore[attr-defined]


@final
class FileCollectionView(View):
    """List the files of a note or upload a new one."""

    http_method_names = ['get', 'post']  # noqa: RUF012

    def get(self, request: HttpRequest) -> JsonResponse:
        """Return every readable file of the note as JSON."""
        files = _get_service().list_files(
            request.GET.get(_NOTE_PARAM, ''),
            caller=request.caller,  # type: ignore[attr-defined]
        )
        return json_response(
            [file.to_dict() for file in files],
            meta={'count': len(files)},
        )

    def post(self, request: HttpRequest) -> JsonResponse:
        """Store the multipart ``file`` field in the note.

        ``note_uuid`` is read from the form, then from the query string.
        """
        uploaded = request.FILES.get('file')
        if uploaded is None:
            raise InvalidRequestError('file required')

        note_id = request.POST.get(_NOTE_PARAM) or request.GET.get(
            _NOTE_PARAM,
            '',
        )
        file = _get_service().create_file(
            note_id,
            FileUpload(
                name=uploaded.name or '',
                size=uploaded.size or 0,
                reader=uploaded,
            ),
            caller=request.caller,  # type: ignore[attr-defined]
        )
        return json_response(
            {'id': file.id, 'name': file.name, 'size': file.size},
            status=HTTPStatus.CREATED,
        )


@final
class FileDetailView(View):
    """Download or delete a single file."""

    http_method_names = ['get', 'delete']  # noqa: RUF012

    def get(self, request: HttpRequest, file_id: str) -> HttpResponse:
        """Return the raw file content as an attachment."""
        file = _get_service().get_file(
            request.GET.get(_NOTE_PARAM, ''),
            file_id,
            caller=request.caller,  # type: ignore[attr-defined]
        )
        response = HttpResponse(
            file.content,
            content_type='application/octet-stream',
        )
        response['Content-Disposition'] = content_disposition_header(
            as_attachment=True,
            filename=file.name,
        )
        return response

    def delete(self, request: HttpRequest, file_id: str) -> HttpResponse:
        """Remove the file from the note."""
        _get_service().delete_file(
            request.GET.get(_NOTE_PARAM, ''),
            file_id,
            caller=request.caller,  # type: ignore[attr-defined]
        )
        return HttpResponse(status=HTTPStatus.NO_CONTENT)
