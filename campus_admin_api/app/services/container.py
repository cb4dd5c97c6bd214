"""
Service wiring.

``build_container`` creates the data sources once (in‑memory stores
seeded from fixtures, or remote repositories sharing one record client)
and hands them to the services.  The FastAPI application keeps the
resulting ``ServiceContainer`` on ``app.state``; tests build their own
container with custom stores or a mocked client.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional

from pydantic import ValidationError

from ..core.config import Settings
from ..core.fixtures import load_fixture
from ..core.latency import Latency
from ..core.record_client import HttpRecordClient, RecordClient
from ..core.repository import InMemoryRepository, RecordRepository, RemoteRepository
from ..core.store import EntityStore
from ..schemas.common import format_validation_errors
from ..schemas.descriptors import DESCRIPTORS, EntityDescriptor, Record
from .announcement_service import AnnouncementService
from .course_service import CourseService
from .event_service import EventService
from .library_service import LibraryService
from .statistics_service import StatisticsService
from .student_service import StudentService


# Fixture file (and store) name per entity.
COLLECTIONS: Dict[str, str] = {
    "student": "students",
    "course": "courses",
    "event": "events",
    "announcement": "announcements",
    "book": "books",
    "issue": "issues",
    "return": "returns",
    "fine": "fines",
}

# Entities whose new records go to the front of the store.
PREPENDED = ("announcement",)


@dataclass
class ServiceContainer:
    students: StudentService
    courses: CourseService
    events: EventService
    announcements: AnnouncementService
    library: LibraryService
    statistics: StatisticsService


def seed_records(descriptor: EntityDescriptor, records: Iterable[Record]) -> List[Record]:
    """Validate seed records and normalise them to stored form.

    Each record goes through the read model once, so camelCase keys and
    flat course schedules are stored under their canonical field names.
    An invalid record raises ``ValueError`` naming the entity and id.
    """
    rows: List[Record] = []
    for record in records:
        try:
            rows.append(descriptor.read_model.model_validate(record).model_dump(mode="json"))
        except ValidationError as e:
            record_id = record.get("id") if isinstance(record, dict) else None
            raise ValueError(
                f"Invalid {descriptor.entity} seed record {record_id!r}: {format_validation_errors(e)[0]}"
            ) from e
    return rows


def memory_repositories(
    fixtures_dir: Optional[str] = None,
    seed: Optional[Mapping[str, list]] = None,
) -> Dict[str, RecordRepository]:
    """In‑memory repositories keyed by entity.

    ``seed`` maps a collection name (``"students"`` …) to its initial
    records and takes precedence over the fixture files; collections
    missing from it are loaded from ``fixtures_dir``.
    """
    repositories: Dict[str, RecordRepository] = {}
    for entity, collection in COLLECTIONS.items():
        if seed is not None and collection in seed:
            records = seed[collection]
        else:
            records = load_fixture(collection, fixtures_dir)
        descriptor = DESCRIPTORS[entity]
        store = EntityStore(entity, seed_records(descriptor, records))
        repositories[entity] = InMemoryRepository(descriptor, store, prepend=entity in PREPENDED)
    return repositories


def remote_repositories(client: RecordClient) -> Dict[str, RecordRepository]:
    return {entity: RemoteRepository(DESCRIPTORS[entity], client) for entity in COLLECTIONS}


def build_services(
    repositories: Mapping[str, RecordRepository],
    latency: Optional[Latency] = None,
    late_fee_per_day: float = 0.0,
) -> ServiceContainer:
    latency = latency or Latency(0)
    students = StudentService(repositories["student"], latency)
    courses = CourseService(repositories["course"], latency)
    events = EventService(repositories["event"], latency)
    announcements = AnnouncementService(repositories["announcement"], latency)
    library = LibraryService(
        repositories["book"],
        repositories["issue"],
        repositories["return"],
        repositories["fine"],
        latency=latency,
        late_fee_per_day=late_fee_per_day,
    )
    statistics = StatisticsService(students, courses, events, announcements, library)
    return ServiceContainer(students, courses, events, announcements, library, statistics)


def build_container(settings: Settings, client: Optional[RecordClient] = None) -> ServiceContainer:
    """Build the services for the configured data backend.

    With ``data_backend == "remote"`` the given ``client`` is used, or an
    :class:`HttpRecordClient` is created from the ``record_api_*``
    settings.

    Raises
    ------
    ValueError
        If the backend is unknown, or remote without a client and
        without ``record_api_url``.
    """
    logger = logging.getLogger(__name__)
    latency = Latency(settings.latency_scale)
    backend = settings.data_backend.lower()
    if backend == "memory":
        repositories = memory_repositories(settings.fixtures_dir or None)
    elif backend == "remote":
        if client is None:
            if not settings.record_api_url:
                raise ValueError("RECORD_API_URL must be set for the remote data backend")
            client = HttpRecordClient(
                base_url=settings.record_api_url,
                project_id=settings.record_api_project_id,
                public_key=settings.record_api_key or None,
                timeout=settings.record_api_timeout,
            )
        repositories = remote_repositories(client)
    else:
        raise ValueError(f"Unknown data backend {settings.data_backend!r}")
    logger.info("Using %s data backend (latency scale %s)", backend, settings.latency_scale)
    return build_services(repositories, latency, settings.late_fee_per_day)
