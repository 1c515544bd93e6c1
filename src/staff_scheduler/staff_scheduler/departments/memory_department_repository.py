from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..database.memory_store import MemoryStore
from .model import Department, NewDepartment
from .repository import DepartmentRepository


class InMemoryDepartmentRepository(DepartmentRepository):
    def __init__(self, store: MemoryStore):
        self._table = store.departments

    def get_by_id(self, dept_id: int) -> Optional[Department]:
        return self._table.get(dept_id)

    def get_by_name(self, name: str) -> Optional[Department]:
        for dept in self._table.list():
            if dept.name == name:
                return dept
        return None

    def list_all(self) -> Sequence[Department]:
        return self._table.list()

    def create(self, data: NewDepartment) -> Department:
        return self._table.create(lambda dept_id: Department(id=dept_id, name=data.name, color=data.color))

    def update(self, dept_id: int, changes: Mapping[str, Any]) -> Optional[Department]:
        return self._table.update(dept_id, changes)

    def delete(self, dept_id: int) -> bool:
        return self._table.delete(dept_id)
