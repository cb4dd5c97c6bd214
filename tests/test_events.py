from datetime import date, datetime, timezone

import pytest

from campus_admin_api.app.core.exceptions import ValidationFailedError
from tests.conftest import make_services


def make_event(record_id, when, **overrides):
    record = {
        "id": record_id,
        "title": f"Event {record_id}",
        "description": "",
        "date": when,
        "location": "Quad",
        "type": "social",
        "status": "scheduled",
    }
    record.update(overrides)
    return record


NOW = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def events():
    return make_services(
        events=[
            make_event("1", "2026-12-01T10:00:00Z"),
            make_event("2", "2026-09-15T10:00:00Z"),
            make_event("3", "2026-10-01T12:00:00Z"),
            make_event("4", "2026-10-20T08:00:00Z"),
        ]
    ).events


async def test_list_is_chronological(events):
    assert [e.id for e in await events.list_all()] == ["2", "3", "4", "1"]


async def test_upcoming_includes_now_and_respects_limit(events):
    upcoming = await events.get_upcoming(limit=2, now=NOW)
    assert [e.id for e in upcoming] == ["3", "4"]
    assert [e.id for e in await events.get_upcoming(now=NOW)] == ["3", "4", "1"]
    assert await events.get_upcoming(limit=0, now=NOW) == []


async def test_naive_dates_are_utc(services):
    event = await services.events.create({"title": "Naive", "date": "2026-11-05T09:30:00"})
    assert event.date == datetime(2026, 11, 5, 9, 30, tzinfo=timezone.utc)
    assert event.type == "academic"
    assert event.status == "scheduled"


async def test_list_on_date(events):
    assert [e.id for e in await events.list_on_date(date(2026, 10, 20))] == ["4"]
    assert await events.list_on_date(date(2026, 10, 21)) == []


async def test_list_in_month(events):
    assert [e.id for e in await events.list_in_month(2026, 10)] == ["3", "4"]
    with pytest.raises(ValidationFailedError):
        await events.list_in_month(2026, 13)


async def test_update_keeps_order_by_new_date(events):
    await events.update("1", {"date": "2026-01-01T00:00:00Z"})
    assert [e.id for e in await events.list_all()] == ["1", "2", "3", "4"]


async def test_invalid_type_is_rejected(services):
    with pytest.raises(ValidationFailedError):
        await services.events.create({"title": "Bad", "date": "2026-11-05T09:30:00Z", "type": "party"})
