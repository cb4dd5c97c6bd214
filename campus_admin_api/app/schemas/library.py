"""
Pydantic models for the library domain: books, issues, returns and fines.

Issues, returns and fines refer to books and students by id only.  The
references are not checked when a record is stored, so a record may
point at a book that has since been deleted.
"""

from datetime import date, timedelta
from typing import Literal, Optional

from pydantic import Field, model_validator

from .common import PayloadModel, RecordId


BookStatus = Literal["available", "issued", "lost", "maintenance"]
IssueStatus = Literal["active", "returned", "overdue"]
FineStatus = Literal["pending", "paid", "waived"]

DEFAULT_LOAN_DAYS = 14
DEFAULT_MAX_RENEWALS = 2
DEFAULT_LIBRARIAN = "Library Staff"


# ---------------------------------------------------------------------------
# Books
# ---------------------------------------------------------------------------

class BookBase(PayloadModel):
    title: str = Field(..., min_length=1, examples=["Clean Code"])
    author: str = Field("", examples=["Robert C. Martin"])
    isbn: str = Field("", examples=["978-0132350884"])
    category: str = Field("", examples=["Computer Science"])
    status: BookStatus = "available"
    location: str = Field("", examples=["Shelf A-12"])
    published_year: Optional[int] = Field(None, examples=[2008])
    edition: Optional[str] = Field(None, examples=["1st"])
    pages: Optional[int] = Field(None, gt=0, examples=[464])
    language: str = "English"


class BookCreate(BookBase):
    """Schema for adding a book to the catalogue."""
    pass


class BookRead(BookBase):
    id: RecordId


class BookUpdate(PayloadModel):
    """All fields are optional; only provided fields will be updated."""

    title: Optional[str] = None
    author: Optional[str] = None
    isbn: Optional[str] = None
    category: Optional[str] = None
    status: Optional[BookStatus] = None
    location: Optional[str] = None
    published_year: Optional[int] = None
    edition: Optional[str] = None
    pages: Optional[int] = Field(None, gt=0)
    language: Optional[str] = None


# ---------------------------------------------------------------------------
# Issues
# ---------------------------------------------------------------------------

class IssueBase(PayloadModel):
    book_id: RecordId = Field(..., examples=["1"])
    book_title: str = Field("", examples=["Clean Code"])
    student_name: str = Field(..., examples=["Emma Johnson"])
    issue_date: date = Field(default_factory=date.today)
    due_date: Optional[date] = None
    status: IssueStatus = "active"
    renewal_count: int = Field(0, ge=0)
    max_renewals: int = Field(DEFAULT_MAX_RENEWALS, ge=0)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _default_due_date(self):
        if self.due_date is None:
            self.due_date = self.issue_date + timedelta(days=DEFAULT_LOAN_DAYS)
        return self


class IssueCreate(IssueBase):
    """Schema for issuing a book to a student.

    ``due_date`` defaults to two weeks after ``issue_date``.
    """
    pass


class IssueRead(IssueBase):
    id: RecordId


class IssueUpdate(PayloadModel):
    """All fields are optional; only provided fields will be updated."""

    book_id: Optional[RecordId] = None
    book_title: Optional[str] = None
    student_name: Optional[str] = None
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    status: Optional[IssueStatus] = None
    renewal_count: Optional[int] = Field(None, ge=0)
    max_renewals: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


# ---------------------------------------------------------------------------
# Returns
# ---------------------------------------------------------------------------

class ReturnBase(PayloadModel):
    issue_id: Optional[RecordId] = None
    book_id: RecordId = Field(..., examples=["1"])
    book_title: str = ""
    student_name: str = ""
    return_date: date = Field(default_factory=date.today)
    due_date: Optional[date] = None
    days_late: Optional[int] = Field(None, ge=0)
    condition: str = Field("good", examples=["good", "fair", "damaged"])
    fine_amount: Optional[float] = Field(None, ge=0)
    librarian: str = DEFAULT_LIBRARIAN
    notes: Optional[str] = None


class ReturnCreate(ReturnBase):
    """Schema for recording a returned book.

    ``days_late`` and ``fine_amount`` are derived by the service when
    omitted.
    """
    pass


class ReturnRead(ReturnBase):
    id: RecordId
    days_late: int = Field(0, ge=0)
    fine_amount: float = Field(0.0, ge=0)


class ReturnUpdate(PayloadModel):
    """All fields are optional; only provided fields will be updated."""

    issue_id: Optional[RecordId] = None
    book_id: Optional[RecordId] = None
    book_title: Optional[str] = None
    student_name: Optional[str] = None
    return_date: Optional[date] = None
    due_date: Optional[date] = None
    days_late: Optional[int] = Field(None, ge=0)
    condition: Optional[str] = None
    fine_amount: Optional[float] = Field(None, ge=0)
    librarian: Optional[str] = None
    notes: Optional[str] = None


# ---------------------------------------------------------------------------
# Fines
# ---------------------------------------------------------------------------

class FineBase(PayloadModel):
    student_id: RecordId = Field(..., examples=["3"])
    student_name: str = ""
    book_id: Optional[RecordId] = None
    book_title: str = ""
    reason: str = Field(..., examples=["Late return"])
    amount: float = Field(..., ge=0, examples=[5.5])
    due_date: Optional[date] = None
    status: FineStatus = "pending"
    issued_date: date = Field(default_factory=date.today)
    payment_date: Optional[date] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None


class FineCreate(FineBase):
    """Schema for issuing a fine."""
    pass


class FineRead(FineBase):
    id: RecordId


class FineUpdate(PayloadModel):
    """All fields are optional; only provided fields will be updated."""

    student_id: Optional[RecordId] = None
    student_name: Optional[str] = None
    book_id: Optional[RecordId] = None
    book_title: Optional[str] = None
    reason: Optional[str] = None
    amount: Optional[float] = Field(None, ge=0)
    due_date: Optional[date] = None
    status: Optional[FineStatus] = None
    issued_date: Optional[date] = None
    payment_date: Optional[date] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None


class FinePayment(PayloadModel):
    payment_method: str = Field("cash", examples=["cash", "card"])
    payment_date: Optional[date] = None


class FineWaiver(PayloadModel):
    notes: Optional[str] = None


class IssueRenewal(PayloadModel):
    days: int = Field(DEFAULT_LOAN_DAYS, gt=0)
