"""Request middleware: access logging, metrics and error rendering."""

import logging
import time
from collections.abc import Callable
from typing import final

from django.apps import apps
from django.http import HttpRequest, HttpResponse

from server.apps.core.exceptions import AppError
from server.apps.core.responses import response_for_error

logger = logging.getLogger(__name__)


@final
class RequestLoggingMiddleware:
    """Log one line per handled request."""

    def __init__(
        self,
        get_response: Callable[[HttpRequest], HttpResponse],
    ) -> None:
        """Store the next handler in the chain."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Handle the request and log its outcome."""
        started = time.perf_counter()
        response = self.get_response(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.info(
            '"%s %s" from %s - %d %sB in %.1fms',
            request.method,
            request.get_full_path(),
            request.META.get('REMOTE_ADDR', '-'),
            response.status_code,
            '-' if response.streaming else len(response.content),
            elapsed_ms,
        )
        return response


@final
class RequestMetricsMiddleware:
    """Feed every handled request into the process :class:`HttpMetrics`."""

    def __init__(
        self,
        get_response: Callable[[HttpRequest], HttpResponse],
    ) -> None:
        """Take the metrics built by the core app.

        Args:
            get_response: Next handler in the chain.
        """
        self.get_response = get_response
        self._metrics = apps.get_app_config('core').metrics  # type: ignore[attr-defined]

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Handle the request and record it."""
        started = time.perf_counter()
        response = self.get_response(request)
        self._metrics.observe(request, response, time.perf_counter() - started)
        return response


@final
class AppErrorMiddleware:
    """Render :class:`AppError` raised by views as error envelopes.

    Other exceptions are left to Django's own 500 handling.
    """

    def __init__(
        self,
        get_response: Callable[[HttpRequest], HttpResponse],
    ) -> None:
        """Store the next handler in the chain."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Pass the request through."""
        return self.get_response(request)

    def process_exception(
        self,
        request: HttpRequest,
        exception: Exception,
    ) -> HttpResponse | None:
        """Build an error response for application errors.

        Args:
            request: Current request.
            exception: Exception raised by the view.

        Returns:
            Error envelope, or None to let Django handle the exception.
        """
        if isinstance(exception, AppError):
            return response_for_error(exception)
        return None
