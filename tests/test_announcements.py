from campus_admin_api.app.schemas.announcement import DEFAULT_AUTHOR
from tests.conftest import make_services


async def test_recent_returns_newest_first(services):
    announcements = services.announcements
    t1 = await announcements.create({"title": "t1", "content": "first"})
    t2 = await announcements.create({"title": "t2", "content": "second"})
    t3 = await announcements.create({"title": "t3", "content": "third"})
    recent = await announcements.get_recent(2)
    assert [a.id for a in recent] == [t3.id, t2.id]
    assert t1.timestamp <= t2.timestamp <= t3.timestamp


async def test_list_is_sorted_by_timestamp_descending():
    announcements = make_services(
        announcements=[
            {"id": "1", "title": "old", "content": "", "timestamp": "2026-01-01T00:00:00Z"},
            {"id": "2", "title": "new", "content": "", "timestamp": "2026-03-01T00:00:00Z"},
            {"id": "3", "title": "mid", "content": "", "timestamp": "2026-02-01T00:00:00Z"},
        ]
    ).announcements
    assert [a.id for a in await announcements.list_all()] == ["2", "3", "1"]


async def test_create_assigns_timestamp_and_defaults(services):
    created = await services.announcements.create({"title": "Hello", "content": "World"})
    assert created.timestamp.tzinfo is not None
    assert created.author == DEFAULT_AUTHOR
    assert created.priority == "medium"
    assert created.audience == "all"


async def test_update_does_not_touch_timestamp(services):
    created = await services.announcements.create({"title": "Hello", "content": "World"})
    updated = await services.announcements.update(created.id, {"priority": "high"})
    assert updated.priority == "high"
    assert updated.timestamp == created.timestamp


async def test_stats(services):
    await services.announcements.create({"title": "a", "content": "", "priority": "high"})
    await services.announcements.create({"title": "b", "content": "", "audience": "faculty"})
    stats = await services.announcements.get_stats()
    assert stats.total == 2
    assert stats.by_priority == {"high": 1, "medium": 1}
    assert stats.by_audience == {"all": 1, "faculty": 1}


async def test_stats_on_empty_store(services):
    stats = await services.announcements.get_stats()
    assert stats.total == 0
    assert stats.by_priority == {}
