from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, TypeVar

from ..common.datetime_utils import now_local

T = TypeVar("T")


class InMemoryTable(Generic[T]):
    """Keyed storage for one entity kind.

    Entities are frozen dataclasses with an integer ``id`` field. Ids start at
    1, only ever grow, and are never handed out twice, even after a delete.
    Every mutation runs under the table lock so concurrent requests cannot
    receive the same id.
    """

    def __init__(self, name: str):
        self.name = name
        self._rows: Dict[int, T] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._rows)

    def get(self, entity_id: int) -> Optional[T]:
        return self._rows.get(int(entity_id))

    def list(self, predicate: Optional[Callable[[T], bool]] = None) -> List[T]:
        # dicts keep insertion order
        rows = list(self._rows.values())
        if predicate is None:
            return rows
        return [r for r in rows if predicate(r)]

    def create(self, build: Callable[[int], T]) -> T:
        with self._lock:
            entity_id = self._next_id
            entity = build(entity_id)
            self._rows[entity_id] = entity
            self._next_id += 1
            return entity

    def update(self, entity_id: int, changes: Mapping[str, Any]) -> Optional[T]:
        if "id" in changes:
            raise ValueError(f"{self.name}: the id of a record cannot change")
        with self._lock:
            current = self._rows.get(int(entity_id))
            if current is None:
                return None
            if not changes:
                return current
            updated = replace(current, **dict(changes))
            self._rows[int(entity_id)] = updated
            return updated

    def delete(self, entity_id: int) -> bool:
        with self._lock:
            return self._rows.pop(int(entity_id), None) is not None


@dataclass
class MemoryStore:
    """All entity tables of one running process.

    Built explicitly (see ``container.build_container``) so each test can
    own an isolated store. ``clock`` stamps every created_at/reviewed_at.
    """

    clock: Callable[[], datetime] = now_local
    users: InMemoryTable = field(default_factory=lambda: InMemoryTable("users"))
    departments: InMemoryTable = field(default_factory=lambda: InMemoryTable("departments"))
    shifts: InMemoryTable = field(default_factory=lambda: InMemoryTable("shifts"))
    time_off_requests: InMemoryTable = field(default_factory=lambda: InMemoryTable("time_off_requests"))
    activities: InMemoryTable = field(default_factory=lambda: InMemoryTable("activities"))
    messages: InMemoryTable = field(default_factory=lambda: InMemoryTable("messages"))

    def now(self) -> datetime:
        return self.clock()
