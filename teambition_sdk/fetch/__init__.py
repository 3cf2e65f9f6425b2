"""
HTTP access to the project-management REST API.
"""

from teambition_sdk.fetch.client import SDKFetch
from teambition_sdk.fetch.exceptions import (
    SDKAuthError,
    SDKConflictError,
    SDKFetchError,
    SDKNotFoundError,
    SDKRateLimitError,
    SDKServerError,
    SDKValidationError,
)

__all__ = [
    "SDKFetch",
    "SDKFetchError",
    "SDKAuthError",
    "SDKConflictError",
    "SDKNotFoundError",
    "SDKRateLimitError",
    "SDKServerError",
    "SDKValidationError",
]
