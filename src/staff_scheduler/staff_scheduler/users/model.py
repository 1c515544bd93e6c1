from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Union

from ..core.constants import UNSET, _Unset
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object, no storage access. ``password`` is stored as
    given and compared verbatim at login.
    """

    id: int
    username: str
    password: str
    first_name: str
    last_name: str
    role: Role = Role.EMPLOYEE
    position: Optional[str] = None
    department: Optional[str] = None
    profile_image: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class NewUser:
    username: str
    password: str
    first_name: str
    last_name: str
    role: Role = Role.EMPLOYEE
    position: Optional[str] = None
    department: Optional[str] = None
    profile_image: Optional[str] = None


@dataclass(frozen=True)
class UserChanges:
    username: Union[str, _Unset] = UNSET
    password: Union[str, _Unset] = UNSET
    first_name: Union[str, _Unset] = UNSET
    last_name: Union[str, _Unset] = UNSET
    role: Union[Role, _Unset] = UNSET
    position: Union[Optional[str], _Unset] = UNSET
    department: Union[Optional[str], _Unset] = UNSET
    profile_image: Union[Optional[str], _Unset] = UNSET

    def as_updates(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not UNSET}
