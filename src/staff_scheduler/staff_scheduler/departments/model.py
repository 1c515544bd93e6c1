from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Union

from ..core.constants import UNSET, _Unset


@dataclass(frozen=True)
class Department:
    id: int
    name: str
    color: str


@dataclass(frozen=True)
class NewDepartment:
    name: str
    color: str


@dataclass(frozen=True)
class DepartmentChanges:
    name: Union[str, _Unset] = UNSET
    color: Union[str, _Unset] = UNSET

    def as_updates(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not UNSET}
