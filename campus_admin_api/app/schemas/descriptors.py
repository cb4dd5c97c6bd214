"""
Entity descriptors.

An ``EntityDescriptor`` bundles everything that differs between entity
types but is not business logic: the pydantic models used to validate
create, update and read payloads, the table columns clients display,
and the mapping between the local record shape and the record API's
table layout.  Services and repositories are written once against this
interface instead of switching on entity names.

Record API tables carry a set of system fields (``Name``, ``Owner``,
``CreatedOn`` …) next to the entity's own columns.  ``Name`` mirrors one
local field (``name_field``); for students and courses it *is* the name
column, for everything else it duplicates a title.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from .announcement import AnnouncementCreate, AnnouncementRead, AnnouncementUpdate
from .common import PayloadModel
from .course import CourseCreate, CourseRead, CourseUpdate, fold_schedule
from .event import EventCreate, EventRead, EventUpdate
from .library import (
    BookCreate,
    BookRead,
    BookUpdate,
    FineCreate,
    FineRead,
    FineUpdate,
    IssueCreate,
    IssueRead,
    IssueUpdate,
    ReturnCreate,
    ReturnRead,
    ReturnUpdate,
)
from .student import StudentCreate, StudentRead, StudentUpdate


Record = Dict[str, Any]

SYSTEM_FIELDS: Tuple[str, ...] = (
    "Name",
    "Tags",
    "Owner",
    "CreatedOn",
    "CreatedBy",
    "ModifiedOn",
    "ModifiedBy",
)


def _remote_id(value: Any) -> Any:
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return value


@dataclass(frozen=True)
class EntityDescriptor:
    entity: str
    label: str
    table: str
    create_model: Type[PayloadModel]
    update_model: Type[PayloadModel]
    read_model: Type[PayloadModel]
    columns: Tuple[Tuple[str, str], ...]
    remote_fields: Tuple[str, ...]
    name_field: str
    reference_fields: Tuple[str, ...] = ()
    pack: Optional[Callable[[Record], Record]] = None
    unpack: Optional[Callable[[Record], Record]] = None

    @property
    def fields(self) -> List[str]:
        """Field list sent with record API reads."""
        return list(SYSTEM_FIELDS) + list(self.remote_fields)

    def remote_field(self, field: str) -> str:
        if field == self.name_field and field not in self.remote_fields:
            return "Name"
        return field

    def to_remote(self, record: Record) -> Record:
        """Convert a local record (or partial record) to a record API row."""
        data = dict(record)
        data.pop("id", None)
        if self.pack:
            data = self.pack(data)
        row: Record = {}
        if self.name_field in data:
            row["Name"] = data[self.name_field]
        for field in self.remote_fields:
            if field in data:
                value = data[field]
                row[field] = _remote_id(value) if field in self.reference_fields else value
        return row

    def from_remote(self, row: Record) -> Record:
        """Convert a record API row to the local record shape."""
        data = {key: value for key, value in row.items() if key not in SYSTEM_FIELDS and key != "Id"}
        record_id = row.get("Id", row.get("id"))
        if record_id is not None:
            data["id"] = str(record_id)
        if self.name_field not in data and row.get("Name") is not None:
            data[self.name_field] = row["Name"]
        for field in self.reference_fields:
            if data.get(field) is not None:
                data[field] = str(data[field])
        if self.unpack:
            data = self.unpack(data)
        return data

    def describe(self) -> Dict[str, Any]:
        return {
            "entity": self.entity,
            "label": self.label,
            "columns": [{"key": key, "header": header} for key, header in self.columns],
            "defaults": _defaults(self.create_model),
        }


def _defaults(model: Type[PayloadModel]) -> Dict[str, Any]:
    defaults: Dict[str, Any] = {}
    for name, field in model.model_fields.items():
        if field.is_required():
            continue
        value = field.get_default(call_default_factory=True)
        if isinstance(value, PayloadModel):
            value = value.model_dump(mode="json")
        elif hasattr(value, "isoformat"):
            value = value.isoformat()
        defaults[name] = value
    return defaults


def _pack_schedule(data: Record) -> Record:
    schedule = data.pop("schedule", None)
    if schedule is not None:
        if "days" in schedule:
            data["schedule_days"] = ",".join(schedule["days"] or [])
        if "time" in schedule:
            data["schedule_time"] = schedule["time"] or ""
    return data


STUDENT = EntityDescriptor(
    entity="student",
    label="Students",
    table="student",
    create_model=StudentCreate,
    update_model=StudentUpdate,
    read_model=StudentRead,
    columns=(
        ("name", "Student"),
        ("program", "Program"),
        ("year", "Year"),
        ("gpa", "GPA"),
        ("status", "Status"),
        ("enrolled_courses", "Courses"),
    ),
    remote_fields=("email", "program", "year", "gpa", "status"),
    name_field="name",
)

COURSE = EntityDescriptor(
    entity="course",
    label="Courses",
    table="course",
    create_model=CourseCreate,
    update_model=CourseUpdate,
    read_model=CourseRead,
    columns=(
        ("code", "Code"),
        ("name", "Course"),
        ("schedule", "Schedule"),
        ("room", "Room"),
        ("enrollment_count", "Enrollment"),
        ("capacity", "Capacity"),
    ),
    remote_fields=(
        "code",
        "instructor",
        "enrollment_count",
        "capacity",
        "schedule_days",
        "schedule_time",
        "room",
    ),
    name_field="name",
    pack=_pack_schedule,
    unpack=fold_schedule,
)

EVENT = EntityDescriptor(
    entity="event",
    label="Events",
    table="event",
    create_model=EventCreate,
    update_model=EventUpdate,
    read_model=EventRead,
    columns=(
        ("title", "Event"),
        ("date", "Date"),
        ("location", "Location"),
        ("type", "Type"),
        ("status", "Status"),
    ),
    remote_fields=("title", "description", "date", "location", "type", "status"),
    name_field="title",
)

ANNOUNCEMENT = EntityDescriptor(
    entity="announcement",
    label="Announcements",
    table="announcement",
    create_model=AnnouncementCreate,
    update_model=AnnouncementUpdate,
    read_model=AnnouncementRead,
    columns=(
        ("title", "Title"),
        ("priority", "Priority"),
        ("audience", "Audience"),
        ("author", "Author"),
        ("timestamp", "Posted"),
    ),
    remote_fields=("title", "content", "priority", "audience", "author", "timestamp"),
    name_field="title",
)

BOOK = EntityDescriptor(
    entity="book",
    label="Books",
    table="book",
    create_model=BookCreate,
    update_model=BookUpdate,
    read_model=BookRead,
    columns=(
        ("title", "Title"),
        ("author", "Author"),
        ("isbn", "ISBN"),
        ("category", "Category"),
        ("status", "Status"),
    ),
    remote_fields=(
        "title",
        "author",
        "isbn",
        "category",
        "status",
        "location",
        "published_year",
        "edition",
        "pages",
        "language",
    ),
    name_field="title",
)

ISSUE = EntityDescriptor(
    entity="issue",
    label="Issues",
    table="issue",
    create_model=IssueCreate,
    update_model=IssueUpdate,
    read_model=IssueRead,
    columns=(
        ("book_title", "Book"),
        ("student_name", "Student"),
        ("issue_date", "Issue Date"),
        ("due_date", "Due Date"),
        ("status", "Status"),
    ),
    remote_fields=(
        "book_title",
        "student_name",
        "issue_date",
        "due_date",
        "status",
        "renewal_count",
        "max_renewals",
        "notes",
        "book_id",
    ),
    name_field="book_title",
    reference_fields=("book_id",),
)

RETURN = EntityDescriptor(
    entity="return",
    label="Returns",
    table="return",
    create_model=ReturnCreate,
    update_model=ReturnUpdate,
    read_model=ReturnRead,
    columns=(
        ("book_title", "Book"),
        ("student_name", "Student"),
        ("return_date", "Return Date"),
        ("days_late", "Days Late"),
        ("fine_amount", "Fine"),
    ),
    remote_fields=(
        "issue_id",
        "book_title",
        "student_name",
        "return_date",
        "due_date",
        "days_late",
        "condition",
        "fine_amount",
        "librarian",
        "notes",
        "book_id",
    ),
    name_field="book_title",
    reference_fields=("issue_id", "book_id"),
)

FINE = EntityDescriptor(
    entity="fine",
    label="Fines",
    table="fine",
    create_model=FineCreate,
    update_model=FineUpdate,
    read_model=FineRead,
    columns=(
        ("student_name", "Student"),
        ("reason", "Reason"),
        ("amount", "Amount"),
        ("due_date", "Due Date"),
        ("status", "Status"),
    ),
    remote_fields=(
        "student_id",
        "student_name",
        "book_id",
        "book_title",
        "reason",
        "amount",
        "due_date",
        "status",
        "issued_date",
        "payment_date",
        "payment_method",
        "notes",
    ),
    name_field="student_name",
    reference_fields=("student_id", "book_id"),
)

DESCRIPTORS: Dict[str, EntityDescriptor] = {
    descriptor.entity: descriptor
    for descriptor in (STUDENT, COURSE, EVENT, ANNOUNCEMENT, BOOK, ISSUE, RETURN, FINE)
}
