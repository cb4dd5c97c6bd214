"""
Business logic for calendar events.

Events are always listed in chronological order.  The calendar queries
(``list_on_date`` and ``list_in_month``) compare dates in UTC, which is
how event dates are stored.
"""

from datetime import date, datetime
from typing import List, Optional

from ..core.exceptions import ValidationFailedError
from ..schemas.common import as_utc, utcnow
from ..schemas.event import EventRead
from .base import CRUDService


class EventService(CRUDService[EventRead]):
    """Сервис для управления мероприятиями."""

    def _sorted(self, items: List[EventRead]) -> List[EventRead]:
        return sorted(items, key=lambda event: event.date)

    async def get_upcoming(self, limit: int = 5, now: Optional[datetime] = None) -> List[EventRead]:
        """Return up to ``limit`` events dated at or after ``now``, soonest first.

        Parameters
        ----------
        limit: int
            Maximum number of events to return.
        now: datetime, optional
            Reference time; defaults to the current UTC time.
        """
        await self.latency.wait("query")
        now = as_utc(now) if now else utcnow()
        upcoming = [event for event in await self.snapshot() if event.date >= now]
        return self._sorted(upcoming)[: max(limit, 0)]

    async def list_on_date(self, day: date) -> List[EventRead]:
        """Events taking place on ``day``."""
        await self.latency.wait("query")
        return self._sorted([e for e in await self.snapshot() if e.date.date() == day])

    async def list_in_month(self, year: int, month: int) -> List[EventRead]:
        if not 1 <= month <= 12:
            raise ValidationFailedError("month: must be between 1 and 12")
        await self.latency.wait("query")
        return self._sorted(
            [e for e in await self.snapshot() if e.date.year == year and e.date.month == month]
        )
