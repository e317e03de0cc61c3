"""
Exception hierarchy raised by the Andromeda client.

Every failure derives from :class:`AndromedaError`, so callers that do not
care about the category can catch a single type. The subclasses separate
problems the caller can fix (:class:`ValidationError`), network trouble
(:class:`TransportError`), failures reported by the provider
(:class:`APIError`) and payloads that do not match the documented schema
(:class:`ResponseDecodeError`).
"""

from __future__ import annotations

from typing import Optional

REQUEST_FAILED_MESSAGE = "request failed"


class AndromedaError(RuntimeError):
    """Base class for all client errors."""


class ValidationError(AndromedaError, ValueError):
    """Raised before any I/O when an input record is malformed."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class RequestBuildError(AndromedaError):
    """Raised when a validated input still cannot be turned into a request."""


class TransportError(AndromedaError):
    """Raised when the HTTP exchange itself fails (connection, read, protocol)."""


class RequestTimeoutError(TransportError):
    """Raised when the client timeout elapses before the exchange completes."""


class APIError(AndromedaError):
    """Raised when the provider answers with a non-success status."""

    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProviderError(APIError):
    """HTTP 400 carrying the provider's ``Message`` and ``SpResultCode``."""

    def __init__(self, message: str, *, result_code: Optional[int] = None, status_code: int = 400) -> None:
        super().__init__(message, status_code=status_code)
        self.message = message
        self.result_code = result_code


class RequestFailedError(APIError):
    """Any other unexpected status; the provider returns no usable detail."""

    def __init__(self, status_code: int) -> None:
        super().__init__(REQUEST_FAILED_MESSAGE, status_code=status_code)


class ResponseDecodeError(AndromedaError):
    """Raised when a response body is not valid JSON or does not match the expected schema."""
