"""Tests for service endpoints and error rendering."""

from http import HTTPStatus

from django.http import HttpResponse

from server.apps.core.exceptions import NotFoundError
from server.apps.core.middleware import AppErrorMiddleware


def test_ping_without_token(client):
    """Test liveness probe needs no token."""
    response = client.get('/ping')

    assert response.status_code == HTTPStatus.OK
    assert response.json() == {'data': 'pong'}


def test_version_without_token(client, settings):
    """Test version is reported without a token."""
    settings.APP_VERSION = '1.2.3'

    response = client.get('/version')

    assert response.status_code == HTTPStatus.OK
    assert response.json() == {'data': '1.2.3'}


def test_ping_rejects_post(client):
    """Test service endpoints are read-only."""
    response = client.post('/ping')

    assert response.status_code == HTTPStatus.METHOD_NOT_ALLOWED


def test_unknown_path(client, auth_headers):
    """Test unknown routes answer 404."""
    response = client.get('/public/v1/api/unknown', headers=auth_headers)

    assert response.status_code == HTTPStatus.NOT_FOUND


def test_files_require_token(client):
    """Test API routes are not exempt."""
    response = client.get('/public/v1/api/files', {'note_uuid': 'note-one'})

    assert response.status_code == HTTPStatus.UNAUTHORIZED


def test_error_middleware_renders_app_errors(rf):
    """Test application errors become error envelopes."""
    middleware = AppErrorMiddleware(lambda request: HttpResponse())

    response = middleware.process_exception(
        rf.get('/'),
        NotFoundError('Note note-one has no files'),
    )

    assert response.status_code == HTTPStatus.NOT_FOUND


def test_error_middleware_ignores_other_errors(rf):
    """Test unexpected exceptions are left to Django."""
    middleware = AppErrorMiddleware(lambda request: HttpResponse())

    assert middleware.process_exception(rf.get('/'), KeyError('x')) is None
