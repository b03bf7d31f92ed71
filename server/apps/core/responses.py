"""JSON response envelope used by every endpoint.

Successful responses carry ``data`` and optionally ``meta``,
failed ones carry ``error`` and ``code``::

    {"data": [...], "meta": {"count": 2}}
    {"data": [], "error": "Unauthorized", "code": 401}
"""

import logging
from http import HTTPStatus
from typing import Any

from django.http import JsonResponse

from server.apps.core.exceptions import (
    AlreadyExistsError,
    AppError,
    AuthenticationError,
    NotFoundError,
    SystemFailureError,
)

logger = logging.getLogger(__name__)


def json_response(
    data: Any,
    status: int = HTTPStatus.OK,
    meta: dict[str, Any] | None = None,
) -> JsonResponse:
    """Wrap payload into the response envelope.

    Args:
        data: Payload to return.
        status: HTTP status code.
        meta: Optional metadata, e.g. item count.

    Returns:
        JSON response.
    """
    body: dict[str, Any] = {'data': data}
    if meta is not None:
        body['meta'] = meta
    return JsonResponse(body, status=status, safe=False)


def error_response(message: str, status: int) -> JsonResponse:
    """Build an error envelope.

    Args:
        message: Error description.
        status: HTTP status code.

    Returns:
        JSON response with ``error`` and ``code`` set.
    """
    return JsonResponse(
        {'data': [], 'error': message, 'code': int(status)},
        status=status,
    )


def status_for(error: Exception) -> HTTPStatus:
    """Map an error kind onto an HTTP status.

    Args:
        error: Raised exception.

    Returns:
        Status the caller should see.
    """
    if isinstance(error, NotFoundError):
        return HTTPStatus.NOT_FOUND
    if isinstance(error, AlreadyExistsError):
        return HTTPStatus.CONFLICT
    if isinstance(error, AuthenticationError):
        return HTTPStatus.UNAUTHORIZED
    if isinstance(error, SystemFailureError):
        return HTTPStatus.INTERNAL_SERVER_ERROR
    if isinstance(error, AppError):
        return HTTPStatus.BAD_REQUEST
    return HTTPStatus.INTERNAL_SERVER_ERROR


def response_for_error(error: Exception) -> JsonResponse:
    """Convert an exception into an error envelope.

    Store failures carry bucket and key details meant for operators,
    so server-side errors are logged in full and reported generically.

    Args:
        error: Raised exception.

    Returns:
        JSON error response.
    """
    status = status_for(error)
    if status >= HTTPStatus.INTERNAL_SERVER_ERROR:
        logger.error('Request failed: %s', error, exc_info=error)
        return error_response('Internal server error', status)
    return error_response(str(error) or status.phrase, status)
