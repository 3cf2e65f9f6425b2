"""
Pydantic models for API payloads.
"""

from teambition_sdk.models.events import EventSchema
from teambition_sdk.models.counts import MyCountData

__all__ = [
    "EventSchema",
    "MyCountData",
]
