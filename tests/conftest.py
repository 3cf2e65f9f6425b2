"""
Pytest configuration and fixtures for Teambition SDK tests.

Provides sample event records and HTTP fixtures.
"""

import copy
from typing import Callable, Generator

import httpx
import pytest
from tenacity import wait_none

from teambition_sdk.config import get_settings
from teambition_sdk.fetch.client import SDKFetch


RECURRENCE_BY_MONTH = {
    "_id": "event-monthly",
    "_projectId": "project-1",
    "_creatorId": "user-1",
    "content": "Monthly review",
    "location": "Room 3",
    "involveMembers": ["user-1", "user-2"],
    "isAllDay": False,
    "startDate": "2017-01-01T00:00:00.000Z",
    "endDate": "2017-01-01T01:00:00.000Z",
    "recurrence": ["RRULE:FREQ=MONTHLY;INTERVAL=1"],
}

RECURRENCE_HAS_END = {
    "_id": "event-daily",
    "_projectId": "project-1",
    "content": "Daily standup",
    "startDate": "2017-01-01T09:00:00.000Z",
    "endDate": "2017-01-01T10:00:00.000Z",
    "recurrence": ["RRULE:FREQ=DAILY;UNTIL=20170410T090000Z"],
    "untilDate": "2017-04-10T09:00:00.000Z",
}

RECURRENCE_START_AT_AN_EXCLUDED_DATE = {
    "_id": "event-weekly",
    "_projectId": "project-1",
    "content": "Weekly sync",
    "startDate": "2017-05-31T09:00:00.000Z",
    "endDate": "2017-05-31T10:00:00.000Z",
    "recurrence": ["RRULE:FREQ=WEEKLY", "EXDATE:20170531T090000Z"],
}

NORMAL_EVENT = {
    "_id": "event-single",
    "_projectId": "project-1",
    "content": "Kickoff",
    "startDate": "2017-03-15T06:00:00.000Z",
    "endDate": "2017-03-15T07:30:00.000Z",
    "recurrence": [],
}


@pytest.fixture
def recurrence_by_month() -> dict:
    """Monthly series without an end."""
    return copy.deepcopy(RECURRENCE_BY_MONTH)


@pytest.fixture
def recurrence_has_end() -> dict:
    """Daily series with 100 occurrences, ending at untilDate."""
    return copy.deepcopy(RECURRENCE_HAS_END)


@pytest.fixture
def recurrence_start_at_an_excluded_date() -> dict:
    """Weekly series whose first nominal instant is excluded."""
    return copy.deepcopy(RECURRENCE_START_AT_AN_EXCLUDED_DATE)


@pytest.fixture
def normal_event() -> dict:
    """Single, non-recurring event."""
    return copy.deepcopy(NORMAL_EVENT)


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch) -> Generator[None, None, None]:
    """Isolate tests from the developer's environment and settings cache."""
    monkeypatch.delenv("TEAMBITION_TOKEN", raising=False)
    monkeypatch.delenv("TEAMBITION_API_HOST", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_fetch() -> Generator[Callable[..., SDKFetch], None, None]:
    """
    Build an SDKFetch whose requests are answered by a handler function.

    Retries do not wait between attempts.
    """
    clients: list[SDKFetch] = []

    def factory(handler, max_retries: int = 3) -> SDKFetch:
        client = httpx.Client(
            base_url="https://api.example.com/api",
            transport=httpx.MockTransport(handler),
        )
        fetch = SDKFetch(
            api_host="https://api.example.com/api",
            token="test-token",
            max_retries=max_retries,
            client=client,
            retry_wait=wait_none(),
        )
        clients.append(fetch)
        return fetch

    yield factory

    for fetch in clients:
        fetch.close()
