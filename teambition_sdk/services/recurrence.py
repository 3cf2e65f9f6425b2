"""
Recurrence rule helpers.

Wraps python-dateutil as the recurrence-rule evaluator used by the
event generator, and provides the date conversions shared by every
materialized occurrence:
- Builds a UTC-evaluated rruleset from an event's recurrence lines
- Parses and formats ISO-8601 instants
- Formats per-occurrence identifiers
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional, Protocol, Sequence, Union

from dateutil.parser import isoparse
from dateutil.rrule import rrulestr, rruleset

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class RecurrenceEvaluator(Protocol):
    """
    Anything that can answer "earliest qualifying instant" queries.

    UTCRuleSet and dateutil's own rrule and rruleset satisfy this protocol.
    """

    def after(self, dt: datetime, inc: bool = False) -> Optional[datetime]:
        """
        Return the first instant after dt, or None if the rule is exhausted.

        Args:
            dt: Reference instant
            inc: If True, dt itself qualifies when it matches the rule
        """
        ...


def is_recurrence(event: Mapping[str, Any]) -> bool:
    """Check whether an event record carries at least one recurrence line."""
    recurrence = event.get("recurrence")
    if not recurrence:
        return False
    return any(line for line in recurrence)


def join_recurrence(recurrence: Sequence[str]) -> str:
    """Join recurrence lines into one rule specification."""
    return "\n".join(line for line in recurrence if line)


def to_naive_utc(dt: datetime) -> datetime:
    """Convert an instant to a naive datetime on the UTC wall clock."""
    return parse_instant(dt).astimezone(timezone.utc).replace(tzinfo=None)


class UTCRuleSet:
    """
    rruleset evaluated on the UTC wall clock.

    Rule text may carry floating or zoned DTSTART/UNTIL/EXDATE values; all
    of them are read as UTC, so BYDAY/BYMONTHDAY expand in the UTC calendar
    and queries never mix naive and aware datetimes.
    """

    def __init__(self, rule: rruleset):
        self.rule = rule

    def after(self, dt: datetime, inc: bool = False) -> Optional[datetime]:
        result = self.rule.after(to_naive_utc(dt), inc=inc)
        if result is None:
            return None
        return result.replace(tzinfo=timezone.utc)


def build_rule_set(recurrence: Sequence[str], dtstart: datetime) -> UTCRuleSet:
    """
    Build an evaluator for an event's recurrence lines.

    The rule set honours EXDATE/RDATE/EXRULE lines, so explicitly excluded
    instants never qualify. A DTSTART line inside the rule text takes
    precedence over the dtstart argument.

    Args:
        recurrence: Rule lines (e.g. ['RRULE:FREQ=MONTHLY', 'EXDATE:...'])
        dtstart: Start of the series, normally the event's startDate

    Returns:
        UTCRuleSet answering after() with UTC-aware instants

    Raises:
        ValueError: If the rule text cannot be parsed
    """
    rule = rrulestr(
        join_recurrence(recurrence),
        dtstart=to_naive_utc(dtstart),
        forceset=True,
        ignoretz=True,
    )
    return UTCRuleSet(rule)


def parse_instant(value: Union[str, datetime]) -> datetime:
    """
    Parse an ISO-8601 instant into a timezone-aware datetime.

    Naive values are taken to be UTC.
    """
    dt = value if isinstance(value, datetime) else isoparse(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_instant(dt: datetime) -> str:
    """
    Format an instant as ISO-8601 UTC with millisecond precision.

    Example: 2017-06-07T09:00:00.000Z
    """
    dt = parse_instant(dt).astimezone(timezone.utc)
    return f"{dt:%Y-%m-%dT%H:%M:%S}.{dt.microsecond // 1000:03d}Z"


def epoch_millis(dt: datetime) -> int:
    """Milliseconds since the Unix epoch."""
    return (parse_instant(dt) - EPOCH) // timedelta(milliseconds=1)


def format_occurrence_id(source_id: str, dt: datetime) -> str:
    """
    Format the identifier of one occurrence of a recurring series.

    Args:
        source_id: _id of the recurring event
        dt: Start of the occurrence

    Returns:
        String in <source_id>_<epoch millis> format
    """
    return f"{source_id}_{epoch_millis(dt)}"


def validate_recurrence(recurrence: Optional[Sequence[str]]) -> tuple[bool, Optional[str]]:
    """
    Validate recurrence lines before they are sent to the server.

    Args:
        recurrence: Rule lines to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not recurrence or not any(recurrence):
        return False, "Recurrence is empty"

    rule_lines = [
        line for line in recurrence
        if line and not line.upper().startswith(("EXDATE", "RDATE", "DTSTART"))
    ]
    if not any("FREQ=" in line.upper() for line in rule_lines):
        return False, "Recurrence must contain a rule with FREQ component"

    try:
        dummy_start = datetime(2020, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        rule = build_rule_set(recurrence, dummy_start)
        # a DTSTART line may place the series anywhere in time
        first = rule.after(datetime.min.replace(tzinfo=timezone.utc), inc=True)
    except (ValueError, TypeError) as e:
        return False, f"Invalid recurrence: {e}"

    if first is None:
        return False, "Recurrence generates no occurrences"

    return True, None
