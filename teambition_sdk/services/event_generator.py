"""
Occurrence generator for calendar events.

Wraps a single event record, recurring or not, and materializes its
concrete occurrences:
- next(): one-shot, forward-only iteration over the series
- take_until() / take_from(): bounded window extraction
- after(): first occurrence at or after an instant

Rule evaluation is delegated to a dateutil rruleset built from the
event's recurrence lines.
"""

import copy
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Iterator, Literal, Mapping, NamedTuple, Optional

from teambition_sdk.services.recurrence import (
    RecurrenceEvaluator,
    build_rule_set,
    format_instant,
    format_occurrence_id,
    is_recurrence,
    parse_instant,
)

logger = logging.getLogger(__name__)

CompareOption = Literal["byStartDate", "byEndDate"]


@dataclass
class TimeFrame:
    """Start and end of one occurrence."""

    start_date: datetime
    end_date: datetime


class IteratorResult(NamedTuple):
    """Result of advancing an EventGenerator."""

    value: Optional[dict]
    done: bool


class EventGenerator:
    """
    Lazy sequence of occurrences for one event record.

    The cursor used by next() only moves forward and cannot be reset;
    construct a new generator to restart. after(), take_until() and
    take_from() never read or move the cursor.

    Usage:
        egen = EventGenerator(event)

        result = egen.next()
        while not result.done:
            ...
            result = egen.next()

        this_month = egen.take_from(month_start, month_end)
    """

    type = "event"

    def __init__(self, event: Mapping[str, Any]):
        """
        Initialize the generator.

        Args:
            event: Event record with _id, startDate, endDate and optional recurrence

        Raises:
            ValueError: If the recurrence rule text cannot be parsed
        """
        self.event = event
        self._id = event["_id"]
        self._done = False
        self.is_recurrence = is_recurrence(event)
        self.interval = timedelta(0)
        self.rrule: Optional[RecurrenceEvaluator] = None
        self._cursor: Optional[datetime] = parse_instant(event["startDate"])

        if self.is_recurrence:
            start_date = parse_instant(event["startDate"])
            end_date = parse_instant(event["endDate"])
            self.interval = end_date - start_date
            self.rrule = build_rule_set(event["recurrence"], start_date)
            logger.debug(f"Built recurrence evaluator for event {self._id}")

    def __iter__(self) -> Iterator[dict]:
        while True:
            result = self.next()
            if result.value is not None:
                yield result.value
            if result.done:
                return

    def _make_event(self, time_frame: Optional[TimeFrame] = None) -> dict:
        target = copy.deepcopy(dict(self.event))

        if not self.is_recurrence or time_frame is None:
            return target

        target["_id"] = format_occurrence_id(target["_id"], time_frame.start_date)
        target["startDate"] = format_instant(time_frame.start_date)
        target["endDate"] = format_instant(time_frame.end_date)
        return target

    def _compute_end_date(self, start_date: datetime) -> datetime:
        return start_date + self.interval

    def _cutoff(self, start_to: datetime, end_to: Optional[datetime]) -> datetime:
        start_to = parse_instant(start_to)
        if end_to is None:
            return start_to
        return min(start_to, parse_instant(end_to) - self.interval)

    def _slice(
        self,
        from_date: datetime,
        from_cmp: CompareOption,
        to_date: datetime,
        to_cmp: CompareOption,
    ) -> list[TimeFrame]:
        """
        Collect the spans between two bounds.

        Spans are walked from the start of the series. A span is skipped
        while it lies before from_date and the walk stops at the first span
        beyond to_date, each bound compared by start or end date.
        """

        def skip(span: TimeFrame) -> bool:
            if from_cmp == "byStartDate":
                return span.start_date < from_date
            return span.end_date < from_date

        def stop(span: TimeFrame) -> bool:
            if to_cmp == "byStartDate":
                return span.start_date > to_date
            return span.end_date > to_date

        series_start = parse_instant(self.event["startDate"])
        result: list[TimeFrame] = []

        if not self.is_recurrence:
            span = TimeFrame(series_start, parse_instant(self.event["endDate"]))
            if not skip(span) and not stop(span):
                result.append(span)
            return result

        start_date = self.rrule.after(series_start, inc=True)
        while start_date is not None:
            span = TimeFrame(start_date, self._compute_end_date(start_date))
            if stop(span):
                break
            if not skip(span):
                result.append(span)
            start_date = self.rrule.after(start_date)

        return result

    def next(self) -> IteratorResult:
        """
        Advance the cursor to the next occurrence.

        For a recurring event the last occurrence of a terminating series
        is returned together with done=True.

        Returns:
            IteratorResult with the materialized occurrence and the done flag
        """
        done_result = IteratorResult(None, True)

        if not self.is_recurrence:
            if self._done:
                return done_result
            self._done = True
            return IteratorResult(self._make_event(), False)

        if self._cursor is None:
            return done_result

        start_date = self.rrule.after(self._cursor, inc=True)
        if start_date is None:
            self._cursor = None
            return done_result

        end_date = self._compute_end_date(start_date)
        # zero-length events would otherwise return start_date again
        after_date = self.rrule.after(end_date, inc=end_date > start_date)
        self._cursor = after_date
        return IteratorResult(
            self._make_event(TimeFrame(start_date, end_date)),
            after_date is None,
        )

    def take_until(
        self,
        start_date_until: datetime,
        end_date_until: Optional[datetime] = None,
    ) -> list[dict]:
        """
        Get every occurrence from the start of the series up to a date.

        Args:
            start_date_until: Latest allowed start (inclusive)
            end_date_until: Latest allowed end (inclusive), optional

        Returns:
            Materialized occurrences in start order
        """
        until_date = self._cutoff(start_date_until, end_date_until)
        spans = self._slice(
            parse_instant(self.event["startDate"]), "byStartDate",
            until_date, "byStartDate",
        )
        return [self._make_event(span) for span in spans]

    def take_from(
        self,
        from_date: datetime,
        start_date_to: datetime,
        end_date_to: Optional[datetime] = None,
    ) -> list[dict]:
        """
        Get every occurrence that overlaps a window.

        An occurrence is included when its end is not before from_date and
        its start is not after the cutoff, so spans that only partly
        overlap the window are kept.

        Args:
            from_date: Window start, compared against occurrence ends
            start_date_to: Latest allowed start (inclusive)
            end_date_to: Latest allowed end (inclusive), optional

        Returns:
            Materialized occurrences in start order
        """
        to_date = self._cutoff(start_date_to, end_date_to)
        spans = self._slice(
            parse_instant(from_date), "byEndDate",
            to_date, "byStartDate",
        )
        return [self._make_event(span) for span in spans]

    def after(self, date: datetime) -> Optional[dict]:
        """
        Get the first occurrence starting at or after a date.

        Args:
            date: Reference instant (inclusive)

        Returns:
            Materialized occurrence, or None when there is none
        """
        date = parse_instant(date)

        if not self.is_recurrence:
            if parse_instant(self.event["startDate"]) < date:
                return None
            return self._make_event()

        start_date = self.rrule.after(date, inc=True)
        if start_date is None:
            return None
        return self._make_event(TimeFrame(start_date, self._compute_end_date(start_date)))
