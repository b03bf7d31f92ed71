"""Prometheus metrics of incoming HTTP requests.

Series are registered in a private registry owned by :class:`HttpMetrics`.
One instance is built by ``CoreConfig.ready()`` and shared by reference,
nothing is registered in the ``prometheus_client`` default registry.
"""

import time
from typing import final

from django.http import HttpRequest, HttpResponse
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

# Requests that did not resolve to a route share one label value
UNMATCHED_ROUTE = '<unmatched>'


def route_label(request: HttpRequest) -> str:
    """URL pattern of the resolved view, keeps label cardinality bounded."""
    match = getattr(request, 'resolver_match', None)
    if match is None:
        return UNMATCHED_ROUTE
    return match.route or UNMATCHED_ROUTE


@final
class HttpMetrics:
    """Request and response series of the gateway HTTP listener."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Register every series.

        Args:
            registry: Registry to use, a new one by default.
        """
        self.registry = registry or CollectorRegistry()
        started = time.monotonic()

        self.uptime = Gauge(
            'http_in_uptime_seconds',
            'Seconds since the HTTP listener has started',
            registry=self.registry,
        )
        self.uptime.set_function(lambda: time.monotonic() - started)

        self.requests = Counter(
            'http_in_requests',
            'Incoming HTTP requests',
            ['method', 'url'],
            registry=self.registry,
        )
        self.request_bytes = Counter(
            'http_in_request_bytes',
            'Declared content length of incoming HTTP requests',
            ['method', 'url'],
            registry=self.registry,
        )
        self.responses = Counter(
            'http_in_responses',
            'HTTP responses sent, partitioned by status code',
            ['method', 'url', 'code'],
            registry=self.registry,
        )
        self.response_bytes = Counter(
            'http_in_response_bytes',
            'Size of HTTP responses sent',
            ['method', 'url'],
            registry=self.registry,
        )
        self.response_time = Histogram(
            'http_in_response_time_seconds',
            'Time spent producing HTTP responses',
            ['method', 'url'],
            registry=self.registry,
        )

    def observe(
        self,
        request: HttpRequest,
        response: HttpResponse,
        elapsed: float,
    ) -> None:
        """Record one finished request.

        Args:
            request: Handled request.
            response: Response returned for it.
            elapsed: Handling time in seconds.
        """
        method = request.method or ''
        url = route_label(request)

        self.requests.labels(method, url).inc()
        self.request_bytes.labels(method, url).inc(_request_size(request))
        self.responses.labels(method, url, str(response.status_code)).inc()
        self.response_bytes.labels(method, url).inc(_response_size(response))
        self.response_time.labels(method, url).observe(elapsed)

    def render(self) -> tuple[bytes, str]:
        """Exposition of the registry.

        Returns:
            Body in Prometheus text format and its content type.
        """
        return generate_latest(self.registry), CONTENT_TYPE_LATEST


def _request_size(request: HttpRequest) -> int:
    try:
        return max(int(request.META.get('CONTENT_LENGTH') or 0), 0)
    except ValueError:
        return 0


def _response_size(response: HttpResponse) -> int:
    if response.streaming:
        return 0
    return len(response.content)
