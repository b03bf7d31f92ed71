"""Middleware enforcing bearer token authentication."""

import logging
from collections.abc import Callable
from http import HTTPStatus
from typing import Any, final

from django.conf import settings
from django.http import HttpRequest, HttpResponse

from server.apps.authentication.keys import load_configured_public_key
from server.apps.authentication.tokens import (
    TokenVerifier,
    extract_bearer_token,
)
from server.apps.core.exceptions import AuthenticationError, SystemFailureError
from server.apps.core.responses import error_response

logger = logging.getLogger(__name__)


@final
class BearerTokenMiddleware:
    """Reject requests without a validly signed bearer token.

    The public key is loaded once, when Django builds the middleware
    chain at startup. A missing or malformed key raises
    ``ImproperlyConfigured`` there and the server does not start.

    On success the verified identity is stored as ``request.caller``
    and views pass it on to the services explicitly.
    """

    def __init__(
        self,
        get_response: Callable[[HttpRequest], HttpResponse],
    ) -> None:
        """Load the verification key.

        Args:
            get_response: Next handler in the chain.
        """
        self.get_response = get_response
        self._verifier = TokenVerifier(
            load_configured_public_key(),
            algorithms=settings.JWT_ALGORITHMS,
        )

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Pass the request through."""
        return self.get_response(request)

    def process_view(
        self,
        request: HttpRequest,
        view_func: Callable[..., Any],
        view_args: tuple[Any, ...],
        view_kwargs: dict[str, Any],
    ) -> HttpResponse | None:
        """Authenticate the request before the view runs.

        Args:
            request: Current request.
            view_func: Resolved view.
            view_args: Positional view arguments.
            view_kwargs: Keyword view arguments.

        Returns:
            Error response if the request is rejected, None otherwise.
        """
        if getattr(view_func, 'bearer_exempt', False):
            return None

        try:
            token = extract_bearer_token(request.headers.get('Authorization'))
            request.caller = self._verifier.verify(token)  # type: ignore[attr-defined]
        except AuthenticationError as error:
            logger.debug('Rejected request to %s: %s', request.path, error)
            return error_response('Unauthorized', HTTPStatus.UNAUTHORIZED)
        except SystemFailureError as error:
            logger.warning('Err parsing token: %s', error)
            return error_response(
                'Internal server error',
                HTTPStatus.INTERNAL_SERVER_ERROR,
            )
        return None
