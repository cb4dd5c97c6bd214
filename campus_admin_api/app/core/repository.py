"""
Record repositories.

A repository is the data source a service reads from and writes to.
Services depend on the abstract :class:`RecordRepository` only, so the
same service code runs against either implementation:

``InMemoryRepository``
    Wraps an :class:`~campus_admin_api.app.core.store.EntityStore`.
``RemoteRepository``
    Forwards each call to an injected record client and interprets the
    response envelope, raising :class:`UpstreamFailureError` for
    top‑level failures and :class:`ValidationFailedError` for rejected
    records.

Records crossing this boundary are plain JSON‑compatible dictionaries in
the local (snake_case) shape.
"""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from ..schemas.descriptors import EntityDescriptor, Record
from .exceptions import NotFoundError, UpstreamFailureError, ValidationFailedError
from .record_client import RecordClient, Response
from .store import EntityStore


logger = logging.getLogger(__name__)

CONTAINS = "Contains"
EXACT_MATCH = "ExactMatch"


@dataclass(frozen=True)
class Condition:
    """A ``where`` clause in the record API's format."""

    field: str
    operator: str
    values: Sequence[Any]

    def matches(self, record: Record) -> bool:
        value = record.get(self.field)
        if value is None:
            return False
        text = str(value).lower()
        if self.operator == CONTAINS:
            return any(str(v).lower() in text for v in self.values)
        if self.operator == EXACT_MATCH:
            return any(str(v).lower() == text for v in self.values)
        raise ValueError(f"Unsupported operator {self.operator!r}")


class RecordRepository(abc.ABC):
    """Data source for one entity type."""

    def __init__(self, descriptor: EntityDescriptor) -> None:
        self.descriptor = descriptor

    @abc.abstractmethod
    async def list_records(self, where: Optional[Sequence[Condition]] = None) -> List[Record]:
        """Return every record matching all ``where`` conditions, in store order."""

    @abc.abstractmethod
    async def get_record(self, record_id: str) -> Optional[Record]:
        """Return the record or ``None`` when it does not exist."""

    @abc.abstractmethod
    async def create_record(self, record: Record) -> Record:
        """Persist a new record and return it with its assigned id."""

    @abc.abstractmethod
    async def update_record(self, record_id: str, changes: Record) -> Record:
        """Merge ``changes`` into an existing record and return the result."""

    @abc.abstractmethod
    async def delete_record(self, record_id: str) -> bool:
        """Remove a record; ``False`` when it did not exist."""


class InMemoryRepository(RecordRepository):
    """Repository backed by an :class:`EntityStore`.

    With ``prepend`` set, new records are inserted at the front of the
    store instead of appended.
    """

    def __init__(self, descriptor: EntityDescriptor, store: EntityStore, *, prepend: bool = False) -> None:
        super().__init__(descriptor)
        self.store = store
        self.prepend = prepend

    async def list_records(self, where: Optional[Sequence[Condition]] = None) -> List[Record]:
        records = self.store.all()
        for condition in where or []:
            records = [record for record in records if condition.matches(record)]
        return records

    async def get_record(self, record_id: str) -> Optional[Record]:
        return self.store.get(record_id)

    async def create_record(self, record: Record) -> Record:
        return self.store.add(record, prepend=self.prepend)

    async def update_record(self, record_id: str, changes: Record) -> Record:
        current = self.store.get(record_id)
        if current is None:
            raise NotFoundError(self.descriptor.entity.capitalize(), record_id)
        current.update(changes)
        updated = self.store.replace(record_id, current)
        if updated is None:
            raise NotFoundError(self.descriptor.entity.capitalize(), record_id)
        return updated

    async def delete_record(self, record_id: str) -> bool:
        return self.store.remove(record_id)


class RemoteRepository(RecordRepository):
    """Repository backed by the record API.

    Request shapes::

        read    {"Fields": [...], "where": [{"FieldName", "Operator", "Values"}]}
        write   {"records": [{...}]}
        delete  {"RecordIds": [...]}
    """

    def __init__(self, descriptor: EntityDescriptor, client: RecordClient) -> None:
        super().__init__(descriptor)
        self.client = client

    @property
    def table(self) -> str:
        return self.descriptor.table

    async def list_records(self, where: Optional[Sequence[Condition]] = None) -> List[Record]:
        params: Dict[str, Any] = {"Fields": self.descriptor.fields}
        if where:
            params["where"] = [
                {
                    "FieldName": self.descriptor.remote_field(condition.field),
                    "Operator": condition.operator,
                    "Values": list(condition.values),
                }
                for condition in where
            ]
        response = await self.client.fetch_records(self.table, params)
        self._check(response, "fetch")
        return [self.descriptor.from_remote(row) for row in response.get("data") or []]

    async def get_record(self, record_id: str) -> Optional[Record]:
        response = await self.client.get_record_by_id(
            self.table, _wire_id(record_id), {"fields": self.descriptor.fields}
        )
        self._check(response, "get")
        data = response.get("data")
        if not data:
            return None
        return self.descriptor.from_remote(data)

    async def create_record(self, record: Record) -> Record:
        params = {"records": [self.descriptor.to_remote(record)]}
        response = await self.client.create_record(self.table, params)
        self._check(response, "create")
        data = self._first_result(response, "create")
        if data is None:
            raise UpstreamFailureError(f"Record API returned no {self.descriptor.entity} after create")
        return self.descriptor.from_remote(data)

    async def update_record(self, record_id: str, changes: Record) -> Record:
        row = self.descriptor.to_remote(changes)
        row["Id"] = _wire_id(record_id)
        response = await self.client.update_record(self.table, {"records": [row]})
        self._check(response, "update")
        data = self._first_result(response, "update")
        if data is None:
            # Some tables only acknowledge updates; read the record back.
            merged = await self.get_record(record_id)
            if merged is None:
                raise NotFoundError(self.descriptor.entity.capitalize(), record_id)
            return merged
        return self.descriptor.from_remote(data)

    async def delete_record(self, record_id: str) -> bool:
        if await self.get_record(record_id) is None:
            return False
        response = await self.client.delete_record(self.table, {"RecordIds": [_wire_id(record_id)]})
        self._check(response, "delete")
        return True

    # ------------------------------------------------------------------
    # Response envelope handling
    # ------------------------------------------------------------------
    def _check(self, response: Optional[Response], action: str) -> None:
        if not response or not response.get("success"):
            message = (response or {}).get("message") or f"Record API {action} failed"
            logger.error("Failed to %s %s records: %s", action, self.descriptor.entity, message)
            raise UpstreamFailureError(message)

    def _first_result(self, response: Response, action: str) -> Optional[Record]:
        """Return the first successful record of a batch write.

        Every failed record is reported; the first failure raises
        ``ValidationFailedError`` carrying all field errors of that
        record.
        """
        results = response.get("results")
        if results is None:
            return response.get("data")
        failed = [result for result in results if not result.get("success")]
        if failed:
            logger.error(
                "Failed to %s %d %s records: %s", action, len(failed), self.descriptor.entity, failed
            )
            record = failed[0]
            errors = [
                f"{error.get('fieldLabel')}: {error.get('message')}" for error in record.get("errors") or []
            ]
            if record.get("message"):
                errors.append(record["message"])
            if not errors:
                errors.append(f"Record API rejected the {self.descriptor.entity}")
            raise ValidationFailedError(errors[0], errors)
        successful = [result for result in results if result.get("success")]
        return successful[0].get("data") if successful else None


def _wire_id(record_id: str) -> Any:
    if isinstance(record_id, str) and record_id.isdigit():
        return int(record_id)
    return record_id
