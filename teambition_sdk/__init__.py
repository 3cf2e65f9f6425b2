"""
Teambition SDK.

REST client and calendar occurrence expansion for the project-management API.
"""

from teambition_sdk.config import configure_logging
from teambition_sdk.sdk import SDK
from teambition_sdk.services.event_generator import EventGenerator, IteratorResult

__all__ = ["SDK", "EventGenerator", "IteratorResult", "configure_logging"]
