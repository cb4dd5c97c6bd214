"""
Pydantic models for announcements.

The ``timestamp`` of an announcement is assigned by the service when it
is created, so it is not part of ``AnnouncementCreate``.
"""

from typing import Literal, Optional

from pydantic import Field

from .common import PayloadModel, RecordId, UtcDatetime


Priority = Literal["high", "medium", "low"]
Audience = Literal["all", "students", "faculty", "staff"]

DEFAULT_AUTHOR = "Admin User"


class AnnouncementBase(PayloadModel):
    title: str = Field(..., min_length=1, examples=["Library Hours Extended"])
    content: str = Field(..., examples=["The library will stay open until midnight during finals."])
    priority: Priority = "medium"
    audience: Audience = "all"
    author: str = DEFAULT_AUTHOR


class AnnouncementCreate(AnnouncementBase):
    """Schema for creating an announcement."""
    pass


class AnnouncementRead(AnnouncementBase):
    """Schema for reading an announcement."""

    id: RecordId
    timestamp: UtcDatetime


class AnnouncementUpdate(PayloadModel):
    """Schema for updating an announcement.

    All fields are optional; only provided fields will be updated.
    """

    title: Optional[str] = None
    content: Optional[str] = None
    priority: Optional[Priority] = None
    audience: Optional[Audience] = None
    author: Optional[str] = None
