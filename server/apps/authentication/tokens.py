"""Bearer token extraction and verification.

The gate works in three steps:
1. extract the token from the ``Authorization`` header
2. verify its RSA signature against the configured public key
3. read the caller's subject from the verified claims

Nothing is kept between requests.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Final, final

import jwt
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from server.apps.authentication.exceptions import (
    InvalidAccessTokenError,
    InvalidSigningMethodError,
    TokenVerificationError,
)

logger = logging.getLogger(__name__)

_BEARER_SCHEME: Final = 'Bearer'

# Claims holding the caller's identifier, in lookup order
_SUBJECT_CLAIMS: Final = ('id', 'sub')


@final
@dataclass(frozen=True, slots=True)
class CallerIdentity:
    """Verified caller, lives for the duration of one request."""

    subject: str


def extract_bearer_token(authorization: str | None) -> str:
    """Extract the token from an ``Authorization`` header value.

    The header must consist of exactly two space separated parts,
    the first one being literally ``Bearer``.

    Args:
        authorization: Raw header value, None if the header is absent.

    Returns:
        Encoded token.

    Raises:
        InvalidAccessTokenError: If the header is missing or malformed.
    """
    if not authorization:
        raise InvalidAccessTokenError('Authorization header is missing')

    header_parts = authorization.split(' ')
    if len(header_parts) != 2:
        raise InvalidAccessTokenError('Malformed Authorization header')

    scheme, token = header_parts
    if scheme != _BEARER_SCHEME:
        raise InvalidAccessTokenError(
            f'Unsupported authorization scheme: {scheme}',
        )
    return token


@final
class TokenVerifier:
    """Verifies RSA signed tokens with a single public key."""

    def __init__(
        self,
        public_key: RSAPublicKey,
        algorithms: Sequence[str],
    ) -> None:
        """Initialize the verifier.

        Args:
            public_key: Key the tokens must be signed with.
            algorithms: Accepted signing algorithms.
        """
        self._public_key = public_key
        self._algorithms = list(algorithms)

    def verify(self, token: str) -> CallerIdentity:
        """Verify a token and return the caller it was issued to.

        Args:
            token: Encoded token.

        Returns:
            Identity from the token's subject claim.

        Raises:
            InvalidSigningMethodError: If the token declares another algorithm.
            InvalidAccessTokenError: If the token is malformed, expired,
                wrongly signed or has no subject.
            TokenVerificationError: If verification failed for another reason.
        """
        claims = self._decode(token)
        for claim in _SUBJECT_CLAIMS:
            subject = claims.get(claim)
            if subject:
                return CallerIdentity(subject=str(subject))
        # Stricter than the previous service, which let an empty subject through
        raise InvalidAccessTokenError('Token has no subject')

    def _decode(self, token: str) -> dict[str, Any]:
        try:
            header = jwt.get_unverified_header(token)
        except jwt.InvalidTokenError as error:
            raise InvalidAccessTokenError(str(error)) from error

        if header.get('alg') not in self._algorithms:
            raise InvalidSigningMethodError(
                f'Unexpected signing method: {header.get("alg")}',
            )

        try:
            return jwt.decode(
                token,
                self._public_key,
                algorithms=self._algorithms,
            )
        except jwt.InvalidTokenError as error:
            raise InvalidAccessTokenError(str(error)) from error
        except (jwt.PyJWTError, ValueError, TypeError) as error:
            logger.warning('Failed to verify token: %s', error)
            raise TokenVerificationError(str(error)) from error
