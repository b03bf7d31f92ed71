"""System checks for authentication settings."""

from typing import Any

from django.core.checks import CheckMessage, Error, Tags, register
from django.core.exceptions import ImproperlyConfigured

from server.apps.authentication.keys import load_configured_public_key


@register(Tags.security)
def check_public_key(app_configs: Any, **kwargs: Any) -> list[CheckMessage]:
    """Report a missing or unusable JWT public key."""
    try:
        load_configured_public_key()
    except ImproperlyConfigured as error:
        return [
            Error(
                str(error),
                hint='Set JWT_PUBLIC_KEY or JWT_PUBLIC_KEY_PATH.',
                id='authentication.E001',
            ),
        ]
    return []
