"""
Pydantic schema for event records returned by the API.

The generator works on plain mappings; this schema validates server
payloads before they reach it and keeps unknown fields intact.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from teambition_sdk.services.recurrence import parse_instant


class EventSchema(BaseModel):
    """Event record as exchanged with the API."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="allow",
    )

    id: str = Field(..., alias="_id", description="Event ID")
    start_date: str = Field(..., alias="startDate", description="ISO-8601 start of the first occurrence")
    end_date: str = Field(..., alias="endDate", description="ISO-8601 end of the first occurrence")
    recurrence: Optional[list[str]] = Field(
        None,
        description="RRULE/EXDATE/RDATE lines, empty for single events",
    )
    content: Optional[str] = None
    location: Optional[str] = None
    project_id: Optional[str] = Field(None, alias="_projectId")
    creator_id: Optional[str] = Field(None, alias="_creatorId")
    involve_members: list[str] = Field(default_factory=list, alias="involveMembers")
    is_all_day: bool = Field(False, alias="isAllDay")

    @field_validator("start_date", "end_date")
    @classmethod
    def validate_iso_instant(cls, v: str) -> str:
        try:
            parse_instant(v)
        except ValueError as e:
            raise ValueError(f"Invalid ISO-8601 instant: {v}") from e
        return v

    @model_validator(mode="after")
    def validate_span(self) -> "EventSchema":
        if parse_instant(self.end_date) < parse_instant(self.start_date):
            raise ValueError("endDate must not be before startDate")
        return self

    def to_record(self) -> dict[str, Any]:
        """Dump back to the camelCase record consumed by EventGenerator."""
        record = dict(self.model_extra or {})
        record.update(self.model_dump(by_alias=True, exclude_unset=True))
        return record
