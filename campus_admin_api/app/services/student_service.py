"""
Business logic for students.

Besides the generic CRUD operations students can be searched by name or
e‑mail and filtered by program.  Statistics are recomputed from the
current records on every call.
"""

import logging
from typing import List

from ..core.repository import EXACT_MATCH, Condition
from ..schemas.stats import StudentStats
from ..schemas.student import StudentRead
from .base import CRUDService


def summarize_students(students: List[StudentRead]) -> StudentStats:
    """Totals and average GPA of ``students``; zeros for an empty list."""
    if not students:
        return StudentStats()
    return StudentStats(
        total=len(students),
        active=sum(1 for s in students if s.status == "Active"),
        average_gpa=round(sum(s.gpa for s in students) / len(students), 2),
    )


class StudentService(CRUDService[StudentRead]):
    """Сервис для работы со студентами."""

    async def search_by_name(self, query: str) -> List[StudentRead]:
        """Students whose name or e‑mail contains ``query``, ignoring case."""
        await self.latency.wait("query")
        needle = query.strip().lower()
        students = await self.snapshot()
        return [s for s in students if needle in s.name.lower() or needle in s.email.lower()]

    async def filter_by_program(self, program: str) -> List[StudentRead]:
        """Students enrolled in ``program`` (exact match, case‑insensitive)."""
        await self.latency.wait("query")
        return await self.snapshot([Condition("program", EXACT_MATCH, [program.strip()])])

    async def get_stats(self) -> StudentStats:
        logger = logging.getLogger(__name__)
        await self.latency.wait("stats")
        stats = summarize_students(await self.snapshot())
        logger.debug("Student stats: %s", stats)
        return stats
