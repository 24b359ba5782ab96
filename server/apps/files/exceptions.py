"""Exceptions for files app."""

from typing import Final

_INVALID_BASE64_MESSAGE: Final = 'Invalid base64 string provided.'


class InvalidEncodingError(ValueError):
    """Raised when an encoded payload is not valid base64."""

    def __init__(self, message: str = _INVALID_BASE64_MESSAGE) -> None:
        """Initialize InvalidEncodingError.

        Args:
            message: Error message shown to the caller.
        """
        super().__init__(message)


class ResourceUnavailableError(OSError):
    """Raised when a record's local content cannot be read."""

    def __init__(self, path: str) -> None:
        """Initialize ResourceUnavailableError.

        Args:
            path: Local path that could not be read.
        """
        self.path = path
        super().__init__(f'File content is not readable: {path}')
