"""Django app configuration for core app."""

from typing import override

from django.apps import AppConfig

from server.apps.core.metrics import HttpMetrics


class CoreConfig(AppConfig):
    """Configuration for core app.

    Holds the process-wide :class:`HttpMetrics`, built once on startup.
    """

    name = 'server.apps.core'
    verbose_name = 'Core'

    metrics: HttpMetrics

    @override
    def ready(self) -> None:
        """Register HTTP metrics when app is ready."""
        self.metrics = HttpMetrics()
