from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from campus_admin_api.app.core.latency import Latency
from campus_admin_api.app.main import create_app
from campus_admin_api.app.services.container import (
    COLLECTIONS,
    ServiceContainer,
    build_services,
    memory_repositories,
)


def make_student(record_id: str, **overrides: Any) -> Dict[str, Any]:
    record = {
        "id": record_id,
        "name": f"Student {record_id}",
        "email": f"student{record_id}@university.edu",
        "program": "Computer Science",
        "year": 1,
        "gpa": 3.0,
        "status": "Active",
        "enrolled_courses": [],
    }
    record.update(overrides)
    return record


def make_course(record_id: str, **overrides: Any) -> Dict[str, Any]:
    record = {
        "id": record_id,
        "name": f"Course {record_id}",
        "code": f"CS{record_id}00",
        "instructor": "Dr. Smith",
        "capacity": 100,
        "enrollment_count": 0,
        "schedule": {"days": ["Monday"], "time": "9:00 AM"},
        "room": "Room 1",
    }
    record.update(overrides)
    return record


def make_book(record_id: str, **overrides: Any) -> Dict[str, Any]:
    record = {
        "id": record_id,
        "title": f"Book {record_id}",
        "author": "Author",
        "isbn": f"isbn-{record_id}",
        "category": "General",
        "status": "available",
        "location": "Shelf A",
        "published_year": 2000,
        "edition": None,
        "pages": 100,
        "language": "English",
    }
    record.update(overrides)
    return record


def make_services(late_fee_per_day: float = 0.0, **collections: List[Dict[str, Any]]) -> ServiceContainer:
    """Services over in-memory stores holding only the given records."""
    seed = {name: collections.get(name, []) for name in COLLECTIONS.values()}
    return build_services(memory_repositories(seed=seed), Latency(0), late_fee_per_day)


@pytest.fixture
def services() -> ServiceContainer:
    return make_services()


@pytest.fixture
def seeded_services() -> ServiceContainer:
    """Services seeded from the packaged fixture files."""
    return build_services(memory_repositories(), Latency(0))


@pytest.fixture
def client(seeded_services: ServiceContainer) -> TestClient:
    return TestClient(create_app(seeded_services))
