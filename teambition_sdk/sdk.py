"""
High-level SDK entry point.

Combines the REST client with the occurrence generator so callers get
materialized occurrences instead of raw series records.
"""

import logging
from datetime import datetime
from typing import Optional

from pydantic import ValidationError

from teambition_sdk.fetch.client import SDKFetch
from teambition_sdk.fetch.exceptions import SDKValidationError
from teambition_sdk.models.counts import MyCountData
from teambition_sdk.models.events import EventSchema
from teambition_sdk.services.event_generator import EventGenerator
from teambition_sdk.services.recurrence import parse_instant, validate_recurrence

logger = logging.getLogger(__name__)


def _to_record(payload: dict) -> dict:
    try:
        return EventSchema.model_validate(payload).to_record()
    except ValidationError as e:
        raise SDKValidationError(
            f"Invalid event payload {payload.get('_id')}: {e}",
            original_error=e,
        ) from e


class SDK:
    """
    Client-facing SDK.

    Usage:
        configure_logging()  # applies TEAMBITION_LOG_LEVEL
        sdk = SDK()
        egen = sdk.get_event("event-id")
        upcoming = egen.after(datetime.now(timezone.utc))

        occurrences = sdk.get_project_events("project-id", week_start, week_end)
    """

    def __init__(self, fetch: Optional[SDKFetch] = None):
        self.fetch = fetch or SDKFetch()

    def get_event(self, event_id: str) -> EventGenerator:
        """
        Fetch an event and wrap it in an occurrence generator.

        Args:
            event_id: Event ID

        Returns:
            EventGenerator over the event's occurrences

        Raises:
            SDKValidationError: If the server returned a malformed event
        """
        return EventGenerator(_to_record(self.fetch.get_event(event_id)))

    def get_project_events(
        self,
        project_id: str,
        start_date: datetime,
        end_date: datetime,
    ) -> list[dict]:
        """
        Get every occurrence of a project's events that overlaps a range.

        Args:
            project_id: Project to query
            start_date: Range start
            end_date: Range end

        Returns:
            Occurrences sorted by startDate
        """
        occurrences: list[dict] = []
        for payload in self.fetch.get_project_events(project_id, start_date, end_date):
            egen = EventGenerator(_to_record(payload))
            occurrences.extend(egen.take_from(start_date, end_date))

        occurrences.sort(key=lambda o: parse_instant(o["startDate"]))
        logger.debug(
            f"Expanded {len(occurrences)} occurrences for project {project_id}"
        )
        return occurrences

    def update_event(self, event_id: str, patch: dict) -> dict:
        """
        Update an event, checking any new recurrence first.

        Raises:
            SDKValidationError: If patch carries an invalid recurrence
        """
        if patch.get("recurrence"):
            is_valid, error = validate_recurrence(patch["recurrence"])
            if not is_valid:
                raise SDKValidationError(error)
        return self.fetch.update_event(event_id, patch)

    def delete_event(self, event_id: str) -> None:
        self.fetch.delete_event(event_id)

    def get_my_count(self) -> MyCountData:
        return MyCountData.model_validate(self.fetch.get_my_count())

    def create_post(self, options: dict) -> dict:
        """
        Create a post in a project.

        Args:
            options: Post fields; _projectId, title and content are required

        Returns:
            Created post
        """
        missing = [f for f in ("_projectId", "title", "content") if not options.get(f)]
        if missing:
            raise SDKValidationError(f"Missing post fields: {', '.join(missing)}")
        return self.fetch.create_post(options)
