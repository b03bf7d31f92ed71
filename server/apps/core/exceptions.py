"""Error kinds shared by every app.

The HTTP boundary maps these onto response statuses,
see :mod:`server.apps.core.responses`.
"""


class AppError(Exception):
    """Base class for errors produced by the gateway."""


class InvalidRequestError(AppError):
    """Raised when a required identifier or parameter is missing."""


class NotFoundError(AppError):
    """Raised when the requested resource does not exist."""


class AlreadyExistsError(AppError):
    """Raised when a resource conflicts with an existing one."""


class AuthenticationError(AppError):
    """Raised when the caller could not be authenticated."""


class SystemFailureError(AppError):
    """Raised for unclassified store, I/O or internal failures."""
