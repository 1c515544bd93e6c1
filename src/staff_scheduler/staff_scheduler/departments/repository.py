from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Department, NewDepartment


class DepartmentRepository(Protocol):
    def get_by_id(self, dept_id: int) -> Optional[Department]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Department]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError

    def create(self, data: NewDepartment) -> Department:
        raise NotImplementedError

    def update(self, dept_id: int, changes: Mapping[str, Any]) -> Optional[Department]:
        raise NotImplementedError

    def delete(self, dept_id: int) -> bool:
        raise NotImplementedError
