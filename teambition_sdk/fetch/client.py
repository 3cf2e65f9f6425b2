"""
REST API client with retry and error handling.

Thin wrapper over httpx: every endpoint forwards its parameters to one
request routine that maps HTTP failures onto SDK exceptions.
"""

import logging
from datetime import datetime
from typing import Any, Optional

import httpx
from tenacity import (
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from teambition_sdk.config import get_settings
from teambition_sdk.fetch.exceptions import (
    SDKAuthError,
    SDKConflictError,
    SDKFetchError,
    SDKNotFoundError,
    SDKRateLimitError,
    SDKServerError,
    SDKValidationError,
)
from teambition_sdk.services.recurrence import format_instant

logger = logging.getLogger(__name__)


def _is_retryable_error(exception: BaseException) -> bool:
    """Check if an exception should trigger a retry."""
    if isinstance(exception, SDKFetchError):
        return exception.retryable
    return isinstance(exception, httpx.TransportError)


def _handle_http_error(response: httpx.Response) -> None:
    """Convert an unsuccessful response to the matching SDKFetchError."""
    status = response.status_code
    message = response.text

    if status in (401, 403):
        raise SDKAuthError(
            "Authentication failed - token may be invalid or lack permission",
            status=status,
        )
    elif status == 404:
        raise SDKNotFoundError(
            f"Resource not found: {response.request.url}",
            status=status,
        )
    elif status == 409:
        raise SDKConflictError(
            "Resource was modified by another client",
            status=status,
        )
    elif status == 429:
        raise SDKRateLimitError(
            "Rate limit exceeded - too many requests",
            status=status,
        )
    elif status in (400, 422):
        raise SDKValidationError(
            f"Request rejected ({status}): {message}",
            status=status,
        )
    elif status >= 500:
        raise SDKServerError(
            f"Server error ({status}): {message}",
            status=status,
        )
    else:
        raise SDKFetchError(
            f"API error ({status}): {message}",
            status=status,
        )


class SDKFetch:
    """
    Client for the project-management REST API.

    Provides:
    - Automatic retry with exponential backoff
    - Consistent error handling
    - One method per endpoint used by the SDK
    """

    def __init__(
        self,
        api_host: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        client: Optional[httpx.Client] = None,
        retry_wait: Optional[wait_base] = None,
    ):
        """
        Initialize the client.

        Args:
            api_host: Base URL, defaults to TEAMBITION_API_HOST
            token: OAuth2 access token, defaults to TEAMBITION_TOKEN
            timeout: Request timeout in seconds
            max_retries: Attempts for retryable failures
            client: Preconfigured httpx client (base_url and headers are left untouched)
            retry_wait: tenacity wait strategy between attempts
        """
        settings = get_settings()
        self.api_host = (api_host or settings.api_host).rstrip("/")
        self.token = token if token is not None else settings.token

        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"OAuth2 {self.token}"

        self._client = client or httpx.Client(
            base_url=self.api_host,
            headers=headers,
            timeout=timeout or settings.request_timeout,
        )
        self._retrying = Retrying(
            stop=stop_after_attempt(max_retries or settings.max_retries),
            wait=retry_wait or wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception(_is_retryable_error),
            reraise=True,
        )

    @property
    def client(self) -> httpx.Client:
        """Get the underlying httpx client."""
        return self._client

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SDKFetch":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _send(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        body: Optional[Any] = None,
    ) -> Any:
        try:
            response = self._client.request(method, path, params=params, json=body)
        except httpx.TransportError as e:
            raise SDKServerError(f"{method} {path} failed: {e}", original_error=e) from e

        if response.is_error:
            _handle_http_error(response)

        logger.debug(f"{method} {path} -> {response.status_code}")
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        body: Optional[Any] = None,
    ) -> Any:
        """
        Send a request, retrying retryable failures.

        Args:
            method: HTTP method
            path: Path relative to api_host
            params: Query string parameters
            body: JSON body

        Returns:
            Decoded JSON response, or None for empty responses
        """
        return self._retrying(self._send, method, path.lstrip("/"), params, body)

    def get(self, path: str, query: Optional[dict] = None) -> Any:
        return self.request("GET", path, params=query)

    def post(self, path: str, body: Optional[Any] = None) -> Any:
        return self.request("POST", path, body=body)

    def put(self, path: str, body: Optional[Any] = None) -> Any:
        return self.request("PUT", path, body=body)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def get_event(self, event_id: str) -> dict:
        """
        Get a single event by ID.

        Args:
            event_id: Event ID

        Returns:
            Event record
        """
        return self.get(f"events/{event_id}")

    def get_project_events(
        self,
        project_id: str,
        start_date: datetime,
        end_date: datetime,
    ) -> list[dict]:
        """
        List the events of a project that touch a date range.

        Recurring events are returned once, as their series record.

        Args:
            project_id: Project to query
            start_date: Range start
            end_date: Range end

        Returns:
            Event records
        """
        events = self.get(
            f"projects/{project_id}/events",
            {
                "startDate": format_instant(start_date),
                "endDate": format_instant(end_date),
            },
        )
        events = events or []
        logger.debug(f"Listed {len(events)} events from project {project_id}")
        return events

    def update_event(self, event_id: str, patch: dict) -> dict:
        """
        Update fields of an event.

        Args:
            event_id: Event to update
            patch: Fields to update

        Returns:
            Updated event record
        """
        result = self.put(f"events/{event_id}", patch)
        logger.info(f"Updated event {event_id}")
        return result

    def delete_event(self, event_id: str) -> None:
        """
        Delete an event.

        Args:
            event_id: Event to delete
        """
        try:
            self.delete(f"events/{event_id}")
            logger.info(f"Deleted event {event_id}")
        except SDKNotFoundError:
            # Already deleted - consider success
            logger.warning(f"Event {event_id} already deleted")

    def get_my_count(self) -> dict:
        """Get the current user's dashboard counters."""
        return self.get("users/me/count")

    def create_post(self, options: dict) -> dict:
        """
        Create a post in a project.

        Args:
            options: Post fields (_projectId, title, content, ...)

        Returns:
            Created post
        """
        result = self.post("posts", options)
        logger.info(f"Created post {(result or {}).get('_id')} in project {options.get('_projectId')}")
        return result
