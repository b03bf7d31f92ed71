"""Shared fixtures for authentication app tests."""

import pytest

from server.apps.authentication.keys import load_public_key
from server.apps.authentication.tokens import TokenVerifier


@pytest.fixture
def verifier(public_key_pem) -> TokenVerifier:
    """Verifier trusting the issuer key.

    Returns:
        TokenVerifier instance.
    """
    return TokenVerifier(
        load_public_key(public_key_pem.encode()),
        algorithms=('RS256', 'RS384', 'RS512'),
    )
