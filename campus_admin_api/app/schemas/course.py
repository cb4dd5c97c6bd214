"""
Pydantic models for course data.

A course's weekly schedule is modelled as a nested ``CourseSchedule``
(weekday names plus a free‑form time string).  Older payloads and the
record API use two flat fields instead, ``schedule_days`` (comma
separated) and ``schedule_time``; :func:`fold_schedule` converts those
into the nested form before validation.

``enrollment_count`` is deliberately not capped by ``capacity``:
over‑enrolled courses are legal and show up as utilization above 100 %.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field, model_validator

from .common import PayloadModel, RecordId


WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def split_days(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [day.strip() for day in value.split(",") if day.strip()]
    return [str(day).strip() for day in value if str(day).strip()]


def fold_schedule(data: Dict[str, Any]) -> Dict[str, Any]:
    """Move flat ``schedule_days``/``schedule_time`` keys into ``schedule``.

    An explicit ``schedule`` object wins over the flat keys.  Only the
    flat keys that are present end up in ``schedule``, so a partial update
    carrying just ``schedule_time`` leaves the stored days alone.  The
    input dictionary is not modified.
    """
    flat_keys = ("schedule_days", "scheduleDays", "schedule_time", "scheduleTime")
    if not any(key in data for key in flat_keys):
        return data
    folded = {key: value for key, value in data.items() if key not in flat_keys}
    if folded.get("schedule") is None:
        schedule: Dict[str, Any] = {}
        for key in ("schedule_days", "scheduleDays"):
            if key in data:
                schedule["days"] = split_days(data[key])
        for key in ("schedule_time", "scheduleTime"):
            if key in data:
                schedule["time"] = data[key] or ""
        folded["schedule"] = schedule
    return folded


class CourseSchedule(PayloadModel):
    days: List[str] = Field(default_factory=list, examples=[["Monday", "Wednesday"]])
    time: str = Field("", examples=["10:00 AM - 11:30 AM"])

    @model_validator(mode="before")
    @classmethod
    def _split_days(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("days"), str):
            return {**data, "days": split_days(data["days"])}
        return data


class _FlatScheduleMixin(PayloadModel):
    @model_validator(mode="before")
    @classmethod
    def _fold_schedule(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return fold_schedule(data)
        return data


class CourseBase(_FlatScheduleMixin):
    name: str = Field(..., min_length=1, examples=["Introduction to Programming"])
    code: str = Field(..., min_length=1, examples=["CS101"])
    instructor: str = Field("", examples=["Dr. Sarah Mitchell"])
    capacity: int = Field(..., gt=0, examples=[120])
    enrollment_count: int = Field(0, ge=0, examples=[95])
    schedule: CourseSchedule = Field(default_factory=CourseSchedule)
    room: str = Field("", examples=["Engineering Hall 101"])


class CourseCreate(CourseBase):
    """Schema for creating a course."""
    pass


class CourseRead(CourseBase):
    """Schema for reading a course."""

    id: RecordId


class CourseUpdate(_FlatScheduleMixin):
    """Schema for updating a course.

    All fields are optional; only provided fields will be updated.
    """

    name: Optional[str] = None
    code: Optional[str] = None
    instructor: Optional[str] = None
    capacity: Optional[int] = Field(None, gt=0)
    enrollment_count: Optional[int] = Field(None, ge=0)
    schedule: Optional[CourseSchedule] = None
    room: Optional[str] = None
