"""
Generic CRUD service.

``CRUDService`` implements the contract shared by every entity service:
``list_all``, ``get_by_id``, ``create``, ``update`` and ``delete``.  The
entity specific parts (pydantic models, remote mapping) come from the
repository's :class:`~campus_admin_api.app.schemas.descriptors.EntityDescriptor`;
subclasses only add queries, statistics and, where needed, override the
``_sorted`` and ``_prepare_create`` hooks.

Each operation first awaits the simulated latency for its kind and then
talks to the repository.  Records come back from the repository as
copies, so the models returned here never share state with the store.
"""

import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ..core.exceptions import NotFoundError, ValidationFailedError
from ..core.latency import Latency
from ..core.repository import RecordRepository
from ..schemas.common import format_validation_errors
from ..schemas.descriptors import EntityDescriptor, Record


def merge_nested(current: Record, changes: Record) -> Record:
    """Return ``changes`` with nested objects merged over their current value.

    A partial ``{"schedule": {"time": ...}}`` keeps the stored
    ``schedule.days``.
    """
    merged = dict(changes)
    for key, value in changes.items():
        if isinstance(value, dict) and isinstance(current.get(key), dict):
            merged[key] = {**current[key], **value}
    return merged


ReadT = TypeVar("ReadT", bound=BaseModel)
ModelT = TypeVar("ModelT", bound=BaseModel)

Payload = Union[BaseModel, Dict[str, Any]]


def parse_payload(model: Type[ModelT], payload: Payload) -> ModelT:
    """Validate ``payload`` against ``model``.

    Accepts an instance of the model (returned unchanged), any other
    pydantic model (re-validated from its set fields) or a plain
    dictionary using either snake_case or camelCase keys.  Validation
    errors are re-raised as :class:`ValidationFailedError`.
    """
    if isinstance(payload, model):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(exclude_unset=True)
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        errors = format_validation_errors(e)
        raise ValidationFailedError(errors[0], errors) from e


class CRUDService(Generic[ReadT]):
    """List/get/create/update/delete for one entity type."""

    def __init__(self, repository: RecordRepository, latency: Optional[Latency] = None) -> None:
        self.repository = repository
        self.latency = latency or Latency(0)

    @property
    def descriptor(self) -> EntityDescriptor:
        return self.repository.descriptor

    @property
    def entity_name(self) -> str:
        return self.descriptor.entity.capitalize()

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------
    def _sorted(self, items: List[ReadT]) -> List[ReadT]:
        """Order returned by ``list_all``; store order by default."""
        return items

    def _prepare_create(self, record: Record) -> Record:
        """Fill values the service assigns itself before a record is stored."""
        return record

    def to_read(self, record: Record) -> ReadT:
        return self.descriptor.read_model.model_validate(record)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------
    async def snapshot(self, where=None) -> List[ReadT]:
        """Current records as read models, without the simulated latency."""
        records = await self.repository.list_records(where)
        return [self.to_read(record) for record in records]

    async def list_all(self) -> List[ReadT]:
        """Return every record, ordered by ``_sorted``."""
        await self.latency.wait("list")
        return self._sorted(await self.snapshot())

    async def get_by_id(self, record_id: str) -> Optional[ReadT]:
        """Return the record with ``record_id`` or ``None`` if there is none."""
        await self.latency.wait("get")
        record = await self.repository.get_record(str(record_id))
        if record is None:
            return None
        return self.to_read(record)

    async def create(self, payload: Payload) -> ReadT:
        """Validate ``payload``, store it under a fresh id and return the stored record."""
        logger = logging.getLogger(__name__)
        await self.latency.wait("create")
        data = parse_payload(self.descriptor.create_model, payload)
        record = self._prepare_create(data.model_dump(mode="json"))
        created = await self.repository.create_record(record)
        logger.info("Created %s %s", self.descriptor.entity, created.get("id"))
        return self.to_read(created)

    async def update(self, record_id: str, payload: Payload) -> ReadT:
        """Merge the fields present in ``payload`` into an existing record.

        Raises
        ------
        NotFoundError
            If no record with ``record_id`` exists.
        ValidationFailedError
            If the payload or the merged record is invalid.
        """
        logger = logging.getLogger(__name__)
        await self.latency.wait("update")
        record_id = str(record_id)
        current = await self.repository.get_record(record_id)
        if current is None:
            raise NotFoundError(self.entity_name, record_id)
        changes_model = parse_payload(self.descriptor.update_model, payload)
        changes = merge_nested(current, changes_model.model_dump(mode="json", exclude_unset=True))
        parse_payload(self.descriptor.read_model, {**current, **changes})
        updated = await self.repository.update_record(record_id, changes)
        logger.info("Updated %s %s: %s", self.descriptor.entity, record_id, sorted(changes))
        return self.to_read(updated)

    async def delete(self, record_id: str) -> bool:
        """Delete the record; raises :class:`NotFoundError` when it does not exist."""
        logger = logging.getLogger(__name__)
        await self.latency.wait("delete")
        record_id = str(record_id)
        if not await self.repository.delete_record(record_id):
            raise NotFoundError(self.entity_name, record_id)
        logger.info("Deleted %s %s", self.descriptor.entity, record_id)
        return True
