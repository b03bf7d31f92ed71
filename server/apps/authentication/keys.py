"""Loading of the RSA public key used to verify bearer tokens."""

import logging
from pathlib import Path

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey
from cryptography.hazmat.primitives.serialization import load_pem_public_key
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)


def load_public_key(pem: bytes) -> RSAPublicKey:
    """Parse a PEM encoded RSA public key.

    Args:
        pem: SubjectPublicKeyInfo PEM bytes.

    Returns:
        RSA public key.

    Raises:
        ImproperlyConfigured: If the key is empty, malformed or not RSA.
    """
    if not pem.strip():
        raise ImproperlyConfigured('JWT public key is empty')

    try:
        key = load_pem_public_key(pem)
    except ValueError as error:
        raise ImproperlyConfigured(
            f'Unable to decode JWT public key: {error}',
        ) from error

    if not isinstance(key, RSAPublicKey):
        raise ImproperlyConfigured('JWT public key must be an RSA key')
    return key


def load_configured_public_key() -> RSAPublicKey:
    """Load the public key from settings.

    ``JWT_PUBLIC_KEY`` (inline PEM) wins over ``JWT_PUBLIC_KEY_PATH``.

    Returns:
        RSA public key.

    Raises:
        ImproperlyConfigured: If neither source provides a usable key.
    """
    inline_pem = settings.JWT_PUBLIC_KEY
    if inline_pem:
        logger.debug('Loading JWT public key from settings')
        return load_public_key(inline_pem.encode())

    key_path = Path(settings.JWT_PUBLIC_KEY_PATH)
    try:
        pem = key_path.read_bytes()
    except OSError as error:
        raise ImproperlyConfigured(
            'Neither JWT_PUBLIC_KEY nor a readable key file at '
            f'{key_path} is set',
        ) from error

    logger.debug('Loading JWT public key from %s', key_path)
    return load_public_key(pem)
