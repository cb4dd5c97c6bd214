from unittest.mock import AsyncMock

import pytest

from campus_admin_api.app.core.config import Settings
from campus_admin_api.app.core.fixtures import load_fixture
from campus_admin_api.app.core.repository import InMemoryRepository, RemoteRepository
from campus_admin_api.app.services.container import build_container, memory_repositories


def test_memory_backend_is_seeded_from_fixtures():
    services = build_container(Settings(data_backend="memory", latency_scale=0, fixtures_dir=""))
    assert isinstance(services.students.repository, InMemoryRepository)
    assert len(services.students.repository.store) == len(load_fixture("students"))
    assert services.announcements.repository.prepend is True
    assert services.students.repository.prepend is False


def test_custom_fixtures_dir(tmp_path):
    (tmp_path / "students.json").write_text(
        '[{"id": "1", "name": "Solo", "email": "solo@uni.edu", "program": "Art"}]', encoding="utf-8"
    )
    services = build_container(Settings(data_backend="memory", latency_scale=0, fixtures_dir=str(tmp_path)))
    assert len(services.students.repository.store) == 1
    assert len(services.courses.repository.store) == 0


def test_fixture_must_be_a_list(tmp_path):
    (tmp_path / "books.json").write_text('{"id": "1"}', encoding="utf-8")
    with pytest.raises(ValueError):
        load_fixture("books", str(tmp_path))


def test_remote_backend_uses_injected_client():
    client = AsyncMock()
    services = build_container(Settings(data_backend="remote", latency_scale=0), client=client)
    assert isinstance(services.library.fines.repository, RemoteRepository)
    assert services.library.fines.repository.client is client


def test_remote_backend_builds_http_client_from_settings():
    settings = Settings(data_backend="remote", latency_scale=0, record_api_url="https://records.test", record_api_project_id="p")
    services = build_container(settings)
    http_client = services.events.repository.client
    assert http_client.base_url == "https://records.test"
    assert http_client.project_id == "p"


def test_remote_backend_requires_url():
    with pytest.raises(ValueError):
        build_container(Settings(data_backend="remote", record_api_url=""))


def test_unknown_backend():
    with pytest.raises(ValueError):
        build_container(Settings(data_backend="sqlite"))


def test_invalid_seed_record_fails_at_startup():
    with pytest.raises(ValueError, match="student"):
        memory_repositories(seed={"students": [{"id": "1", "name": "x"}]})
