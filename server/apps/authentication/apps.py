"""Django app configuration for authentication app."""

from typing import override

from django.apps import AppConfig


class AuthenticationConfig(AppConfig):
    """Configuration for authentication app."""

    name = 'server.apps.authentication'
    label = 'authentication'
    verbose_name = 'Authentication'

    @override
    def ready(self) -> None:
        """Register system checks when app is ready."""
        from server.apps.authentication import checks  # noqa: F401
