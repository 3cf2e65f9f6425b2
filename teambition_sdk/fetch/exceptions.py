"""
Custom exceptions for API requests.

Provides structured error handling with retryable flags.
"""

from typing import Optional


class SDKFetchError(Exception):
    """Base exception for API requests."""

    retryable: bool = False

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.original_error = original_error


class SDKAuthError(SDKFetchError):
    """
    Authentication or authorization failure.

    Causes:
    - Missing, invalid or expired access token
    - No permission on the project or event
    """

    retryable = False


class SDKNotFoundError(SDKFetchError):
    """
    Resource not found.

    Causes:
    - Event or project was deleted
    - ID is invalid
    """

    retryable = False


class SDKConflictError(SDKFetchError):
    """
    Update conflict.

    Retryable after re-fetching the resource.
    """

    retryable = True


class SDKRateLimitError(SDKFetchError):
    """
    Rate limit hit (429 response).

    Retryable after exponential backoff.
    """

    retryable = True


class SDKServerError(SDKFetchError):
    """Server-side failure (5xx) or transport error."""

    retryable = True


class SDKValidationError(SDKFetchError):
    """
    Invalid request data.

    Causes:
    - Server rejected the payload (400, 422)
    - Invalid recurrence rule caught before sending
    """

    retryable = False
