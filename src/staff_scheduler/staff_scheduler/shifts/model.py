from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date, time
from typing import Any, Dict, Optional, Union

from ..core.constants import UNSET, _Unset


@dataclass(frozen=True)
class Shift:
    """Domain entity: one work shift of one employee on one day."""

    id: int
    user_id: int
    date: date
    start_time: time
    end_time: time
    department: str
    notes: Optional[str] = None


@dataclass(frozen=True)
class NewShift:
    user_id: int
    date: date
    start_time: time
    end_time: time
    department: str
    notes: Optional[str] = None


@dataclass(frozen=True)
class ShiftChanges:
    user_id: Union[int, _Unset] = UNSET
    date: Union[date, _Unset] = UNSET
    start_time: Union[time, _Unset] = UNSET
    end_time: Union[time, _Unset] = UNSET
    department: Union[str, _Unset] = UNSET
    notes: Union[Optional[str], _Unset] = UNSET

    def as_updates(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not UNSET}
