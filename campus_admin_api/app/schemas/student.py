"""
Pydantic models for student data.

``StudentBase`` contains the shared fields; ``StudentCreate`` is used for
requests and ``StudentRead`` adds the store‑assigned ``id``.
``StudentUpdate`` has every field optional so that partial updates only
touch what the client sent.
"""

from typing import List, Literal, Optional

from pydantic import Field

from .common import PayloadModel, RecordId


StudentStatus = Literal["Active", "Inactive"]


class StudentBase(PayloadModel):
    name: str = Field(..., min_length=1, examples=["Emma Johnson"])
    email: str = Field(..., examples=["emma.johnson@university.edu"])
    program: str = Field(..., examples=["Computer Science"])
    year: int = Field(1, ge=1, le=4, examples=[2])
    gpa: float = Field(0.0, ge=0.0, le=4.0, examples=[3.7])
    status: StudentStatus = "Active"
    enrolled_courses: List[RecordId] = Field(default_factory=list)


class StudentCreate(StudentBase):
    """Schema for creating a student."""
    pass


class StudentRead(StudentBase):
    """Schema for reading a student."""

    id: RecordId


class StudentUpdate(PayloadModel):
    """Schema for updating a student.

    All fields are optional; only provided fields will be updated.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    program: Optional[str] = None
    year: Optional[int] = Field(None, ge=1, le=4)
    gpa: Optional[float] = Field(None, ge=0.0, le=4.0)
    status: Optional[StudentStatus] = None
    enrolled_courses: Optional[List[RecordId]] = None
