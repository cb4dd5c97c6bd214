"""
Business logic for courses.

Enrollment is not capped by capacity, so utilization can exceed 100 %.
Utilization bands are derived here for the reports:

* ``critical`` – 90 % and above
* ``warning``  – 75 % and above
* ``healthy``  – everything below
"""

import logging
import math
from typing import List

from ..schemas.course import CourseRead
from ..schemas.stats import CourseStats, CourseUtilization
from .base import CRUDService


CRITICAL_UTILIZATION = 90
WARNING_UTILIZATION = 75


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def course_utilization(course: CourseRead) -> CourseUtilization:
    percent = round_half_up(course.enrollment_count / course.capacity * 100)
    if percent >= CRITICAL_UTILIZATION:
        band = "critical"
    elif percent >= WARNING_UTILIZATION:
        band = "warning"
    else:
        band = "healthy"
    return CourseUtilization(
        id=course.id,
        code=course.code,
        name=course.name,
        enrollment_count=course.enrollment_count,
        capacity=course.capacity,
        utilization=percent,
        band=band,
    )


def summarize_courses(courses: List[CourseRead]) -> CourseStats:
    """Enrollment totals and mean utilization; zeros for an empty list."""
    if not courses:
        return CourseStats()
    total_enrollment = sum(c.enrollment_count for c in courses)
    ratios = [c.enrollment_count / c.capacity for c in courses]
    return CourseStats(
        total=len(courses),
        total_enrollment=total_enrollment,
        average_enrollment=round_half_up(total_enrollment / len(courses)),
        utilization=round_half_up(sum(ratios) / len(ratios) * 100),
    )


class CourseService(CRUDService[CourseRead]):
    """Сервис для работы с курсами."""

    async def search(self, query: str) -> List[CourseRead]:
        """Courses whose name, code or instructor contains ``query``."""
        await self.latency.wait("query")
        needle = query.strip().lower()
        return [
            c
            for c in await self.snapshot()
            if needle in c.name.lower() or needle in c.code.lower() or needle in c.instructor.lower()
        ]

    async def get_utilization(self) -> List[CourseUtilization]:
        """Per‑course utilization, busiest first."""
        await self.latency.wait("query")
        rows = [course_utilization(c) for c in await self.snapshot()]
        return sorted(rows, key=lambda row: row.utilization, reverse=True)

    async def get_stats(self) -> CourseStats:
        logger = logging.getLogger(__name__)
        await self.latency.wait("stats")
        stats = summarize_courses(await self.snapshot())
        logger.debug("Course stats: %s", stats)
        return stats
