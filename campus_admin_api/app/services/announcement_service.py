"""
Business logic for announcements.

Announcements are listed newest first.  The posting time is assigned
here when an announcement is created; clients cannot set it.  New
announcements are stored at the front of the collection, so two
announcements posted within the same clock tick still list newest
first.
"""

from collections import Counter
from typing import List

from ..schemas.announcement import AnnouncementRead
from ..schemas.common import utcnow
from ..schemas.descriptors import Record
from ..schemas.stats import AnnouncementStats
from .base import CRUDService


def summarize_announcements(announcements: List[AnnouncementRead]) -> AnnouncementStats:
    return AnnouncementStats(
        total=len(announcements),
        by_priority=dict(Counter(a.priority for a in announcements)),
        by_audience=dict(Counter(a.audience for a in announcements)),
    )


class AnnouncementService(CRUDService[AnnouncementRead]):
    """Сервис для публикации объявлений."""

    def _sorted(self, items: List[AnnouncementRead]) -> List[AnnouncementRead]:
        return sorted(items, key=lambda a: a.timestamp, reverse=True)

    def _prepare_create(self, record: Record) -> Record:
        record["timestamp"] = utcnow().isoformat()
        return record

    async def get_recent(self, limit: int = 5) -> List[AnnouncementRead]:
        """The ``limit`` most recently posted announcements."""
        await self.latency.wait("query")
        return self._sorted(await self.snapshot())[: max(limit, 0)]

    async def get_stats(self) -> AnnouncementStats:
        await self.latency.wait("stats")
        return summarize_announcements(await self.snapshot())
