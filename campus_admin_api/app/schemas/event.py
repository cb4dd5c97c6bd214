"""
Pydantic models for calendar event data.

These schemas define the structure of event data exchanged via the
API.  The ``EventBase`` class contains shared fields; ``EventCreate``
extends it for requests, and ``EventRead`` extends it with an ``id``
for responses.  Event dates are normalised to UTC so that upcoming
windows compare consistently.
"""

from typing import Literal, Optional

from pydantic import Field

from .common import PayloadModel, RecordId, UtcDatetime


EventType = Literal["academic", "social", "sports", "cultural", "administrative", "other"]
EventStatus = Literal["scheduled", "cancelled", "completed"]


class EventBase(PayloadModel):
    title: str = Field(..., min_length=1, examples=["Fall Career Fair"])
    description: str = Field("", examples=["Meet recruiters from over 50 companies"])
    date: UtcDatetime = Field(..., examples=["2025-10-15T10:00:00Z"])
    location: str = Field("", examples=["Student Union Ballroom"])
    type: EventType = "academic"
    status: EventStatus = "scheduled"


class EventCreate(EventBase):
    """Schema for creating an event."""
    pass


class EventRead(EventBase):
    """Schema for reading an event from the API."""

    id: RecordId


class EventUpdate(PayloadModel):
    """Schema for updating an event.

    All fields are optional; only provided fields will be updated.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[UtcDatetime] = None
    location: Optional[str] = None
    type: Optional[EventType] = None
    status: Optional[EventStatus] = None
