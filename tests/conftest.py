"""Shared fixtures: signing keys, tokens and callers."""

from collections.abc import Callable
from typing import Any

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    PublicFormat,
)

from server.apps.authentication.tokens import CallerIdentity


def _generate_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope='session')
def private_key() -> rsa.RSAPrivateKey:
    """RSA key the trusted issuer signs tokens with.

    Returns:
        RSA private key.
    """
    return _generate_key()


@pytest.fixture(scope='session')
def foreign_private_key() -> rsa.RSAPrivateKey:
    """RSA key unknown to the gateway.

    Returns:
        RSA private key.
    """
    return _generate_key()


@pytest.fixture(scope='session')
def public_key_pem(private_key) -> str:
    """PEM encoded public half of the issuer key.

    Returns:
        SubjectPublicKeyInfo PEM string.
    """
    return private_key.public_key().public_bytes(
        Encoding.PEM,
        PublicFormat.SubjectPublicKeyInfo,
    ).decode()


@pytest.fixture(autouse=True)
def _jwt_public_key(settings, public_key_pem) -> None:
    """Configure the issuer public key for every test."""
    settings.JWT_PUBLIC_KEY = public_key_pem


@pytest.fixture
def make_token(private_key) -> Callable[..., str]:
    """Factory minting tokens signed with the issuer key.

    Returns:
        Function accepting claims and optional key/algorithm.
    """

    def factory(
        claims: dict[str, Any] | None = None,
        key: Any = None,
        algorithm: str = 'RS256',
    ) -> str:
        payload = {'id': 'u1'} if claims is None else claims
        return jwt.encode(
            payload,
            private_key if key is None else key,
            algorithm=algorithm,
        )

    return factory


@pytest.fixture
def auth_headers(make_token) -> dict[str, str]:
    """Headers carrying a valid bearer token for subject ``u1``.

    Returns:
        Headers dict for the test client.
    """
    return {'Authorization': f'Bearer {make_token()}'}


@pytest.fixture
def caller() -> CallerIdentity:
    """Verified caller.

    Returns:
        CallerIdentity with subject ``u1``.
    """
    return CallerIdentity(subject='u1')
