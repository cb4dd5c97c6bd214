from concurrent.futures import ThreadPoolExecutor

from campus_admin_api.app.core.store import EntityStore


def test_ids_continue_after_highest_seed_id():
    store = EntityStore("student", [{"id": "3", "name": "a"}, {"id": 7, "name": "b"}])
    created = store.add({"name": "c"})
    assert created["id"] == "8"
    assert store.get("7")["name"] == "b"


def test_returned_records_are_copies():
    store = EntityStore("student", [{"id": "1", "tags": ["x"]}])
    record = store.get("1")
    record["tags"].append("y")
    snapshot = store.all()
    snapshot[0]["tags"].clear()
    assert store.get("1")["tags"] == ["x"]


def test_added_record_is_copied_in():
    store = EntityStore("student")
    payload = {"name": "a", "tags": ["x"]}
    created = store.add(payload)
    payload["tags"].append("y")
    assert store.get(created["id"])["tags"] == ["x"]


def test_prepend_puts_new_record_first():
    store = EntityStore("announcement", [{"id": "1"}])
    store.add({"title": "new"}, prepend=True)
    assert [r["id"] for r in store.all()] == ["2", "1"]


def test_replace_keeps_id_and_position():
    store = EntityStore("course", [{"id": "1", "n": 1}, {"id": "2", "n": 2}])
    updated = store.replace("1", {"id": "99", "n": 10})
    assert updated == {"id": "1", "n": 10}
    assert [r["id"] for r in store.all()] == ["1", "2"]
    assert store.replace("5", {"n": 0}) is None


def test_remove():
    store = EntityStore("course", [{"id": "1"}])
    assert store.remove("1") is True
    assert store.remove("1") is False
    assert len(store) == 0


def test_next_id_is_unique_across_threads():
    store = EntityStore("student")
    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(lambda _: store.next_id(), range(200)))
    assert len(set(ids)) == 200
