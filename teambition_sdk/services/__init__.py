"""
Service layer for the Teambition SDK.

Provides:
- Recurrence rule evaluation (RRULE handling)
- Occurrence generation for calendar events
"""

from teambition_sdk.services.recurrence import (
    RecurrenceEvaluator,
    is_recurrence,
    build_rule_set,
    parse_instant,
    format_instant,
    epoch_millis,
    format_occurrence_id,
    validate_recurrence,
)

from teambition_sdk.services.event_generator import (
    EventGenerator,
    IteratorResult,
    TimeFrame,
)

__all__ = [
    # Recurrence
    "RecurrenceEvaluator",
    "is_recurrence",
    "build_rule_set",
    "parse_instant",
    "format_instant",
    "epoch_millis",
    "format_occurrence_id",
    "validate_recurrence",
    # Occurrences
    "EventGenerator",
    "IteratorResult",
    "TimeFrame",
]
