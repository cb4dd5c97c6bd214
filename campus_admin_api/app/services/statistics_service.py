"""
Service layer for statistics and reporting.

This module aggregates metrics across the entity services: the
dashboard overview (student, course, library and announcement summaries
plus the number of upcoming events) and the academic report with its
program, year and GPA distributions and per‑course utilization.

Nothing is cached.  Every call takes a fresh snapshot of the records
involved, so the figures always reflect the current state of the
stores.  Empty collections yield zeros instead of division errors.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime
from typing import Dict, List, Optional

from ..schemas.common import as_utc, utcnow
from ..schemas.stats import AcademicReport, DashboardOverview
from ..schemas.student import StudentRead
from .announcement_service import AnnouncementService, summarize_announcements
from .course_service import CourseService, course_utilization, round_half_up, summarize_courses
from .event_service import EventService
from .library_service import LibraryService, summarize_library
from .student_service import StudentService, summarize_students


# (label, lower bound inclusive), checked top to bottom.
GPA_BANDS = (
    ("Excellent (3.5+)", 3.5),
    ("Good (3.0-3.4)", 3.0),
    ("Satisfactory (2.5-2.9)", 2.5),
    ("Below Average (<2.5)", 0.0),
)


def gpa_band(gpa: float) -> str:
    for label, lower in GPA_BANDS:
        if gpa >= lower:
            return label
    return GPA_BANDS[-1][0]


def gpa_distribution(students: List[StudentRead]) -> Dict[str, int]:
    counts = Counter(gpa_band(s.gpa) for s in students)
    return {label: counts.get(label, 0) for label, _ in GPA_BANDS}


def year_distribution(students: List[StudentRead]) -> Dict[str, int]:
    counts = Counter(s.year for s in students)
    return {f"Year {year}": counts[year] for year in sorted(counts)}


def as_percentages(counts: Dict[str, int], total: int) -> Dict[str, int]:
    """Whole percent of ``total`` for each count; zeros when ``total`` is 0."""
    if not total:
        return {key: 0 for key in counts}
    return {key: round_half_up(count / total * 100) for key, count in counts.items()}


class StatisticsService:
    """Service providing aggregated statistics for administrators."""

    def __init__(
        self,
        students: StudentService,
        courses: CourseService,
        events: EventService,
        announcements: AnnouncementService,
        library: LibraryService,
    ) -> None:
        self.students = students
        self.courses = courses
        self.events = events
        self.announcements = announcements
        self.library = library

    async def overview(self, now: Optional[datetime] = None) -> DashboardOverview:
        """Return the headline figures shown on the dashboard.

        ``upcoming_events`` counts events dated at or after ``now``
        (default: the current UTC time).
        """
        logger = logging.getLogger(__name__)
        await self.students.latency.wait("stats")
        now = as_utc(now) if now else utcnow()
        events = await self.events.snapshot()
        overview = DashboardOverview(
            students=summarize_students(await self.students.snapshot()),
            courses=summarize_courses(await self.courses.snapshot()),
            library=summarize_library(
                await self.library.books.snapshot(),
                await self.library.issues.snapshot(),
                await self.library.returns.snapshot(),
                await self.library.fines.snapshot(),
            ),
            announcements=summarize_announcements(await self.announcements.snapshot()),
            upcoming_events=sum(1 for event in events if event.date >= now),
        )
        logger.debug("Dashboard overview: %s", overview)
        return overview

    async def academic_report(self) -> AcademicReport:
        """Return the academic report.

        Distributions map a label to a student count:

        * ``program_distribution`` – per program, in first‑seen order;
        * ``year_distribution`` – ``"Year N"`` labels in year order;
        * ``gpa_distribution`` – the four GPA bands, always present;
          ``gpa_distribution_percent`` gives the same as whole percent.

        ``course_utilization`` lists every course, busiest first.
        """
        await self.students.latency.wait("stats")
        students = await self.students.snapshot()
        courses = await self.courses.snapshot()
        gpa = gpa_distribution(students)
        utilization = sorted(
            (course_utilization(c) for c in courses), key=lambda row: row.utilization, reverse=True
        )
        return AcademicReport(
            students=summarize_students(students),
            courses=summarize_courses(courses),
            program_distribution=dict(Counter(s.program for s in students)),
            year_distribution=year_distribution(students),
            gpa_distribution=gpa,
            gpa_distribution_percent=as_percentages(gpa, len(students)),
            course_utilization=utilization,
        )
