"""
In‑memory entity stores.

An ``EntityStore`` owns the ordered collection of records for one entity
type.  Records are plain dictionaries keyed by field name; every value
handed out or taken in is deep‑copied so callers never share mutable
state with the store.  Ids are assigned from a lock‑guarded counter that
starts after the largest numeric id found in the seed data, which keeps
id assignment collision free even if two creates interleave.
"""

import copy
import itertools
import logging
import threading
from typing import Any, Dict, Iterable, List, Optional


Record = Dict[str, Any]


class EntityStore:
    """Ordered, id‑addressable collection of records for one entity."""

    def __init__(self, entity: str, records: Optional[Iterable[Record]] = None) -> None:
        self.entity = entity
        self._records: List[Record] = []
        self._lock = threading.Lock()
        highest = 0
        for record in records or []:
            item = copy.deepcopy(record)
            item["id"] = str(item["id"])
            if item["id"].isdigit():
                highest = max(highest, int(item["id"]))
            self._records.append(item)
        self._counter = itertools.count(highest + 1)
        logging.getLogger(__name__).debug(
            "Seeded %s store with %d records", entity, len(self._records)
        )

    def __len__(self) -> int:
        return len(self._records)

    def next_id(self) -> str:
        with self._lock:
            return str(next(self._counter))

    def all(self) -> List[Record]:
        """Return a deep copy of every record in store order."""
        return copy.deepcopy(self._records)

    def get(self, record_id: str) -> Optional[Record]:
        index = self._index_of(record_id)
        if index is None:
            return None
        return copy.deepcopy(self._records[index])

    def add(self, record: Record, *, prepend: bool = False) -> Record:
        """Store a copy of ``record`` under a freshly assigned id."""
        item = copy.deepcopy(record)
        item["id"] = self.next_id()
        with self._lock:
            if prepend:
                self._records.insert(0, item)
            else:
                self._records.append(item)
        return copy.deepcopy(item)

    def replace(self, record_id: str, record: Record) -> Optional[Record]:
        """Overwrite an existing record, keeping its id and position."""
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return None
            item = copy.deepcopy(record)
            item["id"] = self._records[index]["id"]
            self._records[index] = item
        return copy.deepcopy(item)

    def remove(self, record_id: str) -> bool:
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return False
            del self._records[index]
        return True

    def _index_of(self, record_id: str) -> Optional[int]:
        record_id = str(record_id)
        for index, record in enumerate(self._records):
            if record["id"] == record_id:
                return index
        return None
