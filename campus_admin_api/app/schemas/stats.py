"""
Pydantic models for statistics and reports.

Every numeric field defaults to ``0`` so that statistics over an empty
collection are well defined.
"""

from typing import Dict, List, Literal

from pydantic import BaseModel

from .common import RecordId


UtilizationBand = Literal["healthy", "warning", "critical"]


class StudentStats(BaseModel):
    total: int = 0
    active: int = 0
    average_gpa: float = 0.0


class CourseStats(BaseModel):
    total: int = 0
    total_enrollment: int = 0
    average_enrollment: int = 0
    utilization: int = 0


class AnnouncementStats(BaseModel):
    total: int = 0
    by_priority: Dict[str, int] = {}
    by_audience: Dict[str, int] = {}


class LibraryStats(BaseModel):
    total_books: int = 0
    available_books: int = 0
    issued_books: int = 0
    active_issues: int = 0
    overdue_issues: int = 0
    total_returns: int = 0
    pending_fines: int = 0
    outstanding_fine_amount: float = 0.0


class CourseUtilization(BaseModel):
    id: RecordId
    code: str
    name: str
    enrollment_count: int
    capacity: int
    utilization: int
    band: UtilizationBand


class DashboardOverview(BaseModel):
    students: StudentStats
    courses: CourseStats
    library: LibraryStats
    announcements: AnnouncementStats
    upcoming_events: int = 0


class AcademicReport(BaseModel):
    students: StudentStats
    courses: CourseStats
    program_distribution: Dict[str, int] = {}
    year_distribution: Dict[str, int] = {}
    gpa_distribution: Dict[str, int] = {}
    gpa_distribution_percent: Dict[str, int] = {}
    course_utilization: List[CourseUtilization] = []
