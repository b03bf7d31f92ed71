"""Exceptions for authentication app."""

from server.apps.core.exceptions import AuthenticationError, SystemFailureError


class InvalidAccessTokenError(AuthenticationError):
    """Raised when a token is missing, malformed or fails verification."""


class InvalidSigningMethodError(InvalidAccessTokenError):
    """Raised when a token is signed with an unexpected algorithm."""


class TokenVerificationError(SystemFailureError):
    """Raised when a token could not be checked for reasons not
    attributable to the caller, e.g. an unusable verification key."""
