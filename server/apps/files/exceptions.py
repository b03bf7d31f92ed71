"""Exceptions for files app."""

from server.apps.core.exceptions import SystemFailureError


class ObjectStoreError(SystemFailureError):
    """Raised when a call to the object store fails.

    Covers transport failures, timeouts and store-level errors such
    as a missing object alike.
    """

    def __init__(
        self,
        operation: str,
        bucket: str,
        key: str = '',
        reason: object = None,
    ) -> None:
        """Initialize ObjectStoreError.

        Args:
            operation: What was attempted, e.g. 'get object'.
            bucket: Bucket the call was made against.
            key: Object key, if the call targeted a single object.
            reason: Underlying error.
        """
        self.operation = operation
        self.bucket = bucket
        self.key = key

        target = f'{key} from bucket {bucket}' if key else f'bucket {bucket}'
        message = f'Failed to {operation} {target}'
        if reason is not None:
            message = f'{message}: {reason}'
        super().__init__(message)
