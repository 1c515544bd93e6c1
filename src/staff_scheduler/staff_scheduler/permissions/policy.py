"""Role based permissions.

A ``PermissionTable`` maps each role to the capabilities it holds. It is
built once (``PermissionTable.default()``) and handed to the
``PermissionEngine`` through the container; nothing mutates it afterwards.

The only context-sensitive rule is the own-shift exception: a role without
``editShift`` but with ``editOwnShift`` may still edit a shift it owns.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Union

from ..core.enums import Role
from ..core.exceptions import AuthorizationError


class Capability(str, Enum):
    VIEW_USERS = "viewUsers"
    CREATE_USER = "createUser"
    EDIT_USER = "editUser"
    DELETE_USER = "deleteUser"

    VIEW_DEPARTMENTS = "viewDepartments"
    CREATE_DEPARTMENT = "createDepartment"
    EDIT_DEPARTMENT = "editDepartment"
    DELETE_DEPARTMENT = "deleteDepartment"

    VIEW_SHIFTS = "viewShifts"
    CREATE_SHIFT = "createShift"
    EDIT_SHIFT = "editShift"
    EDIT_OWN_SHIFT = "editOwnShift"
    DELETE_SHIFT = "deleteShift"

    VIEW_TIME_OFF = "viewTimeOff"
    CREATE_TIME_OFF = "createTimeOff"
    APPROVE_TIME_OFF = "approveTimeOff"

    VIEW_MESSAGES = "viewMessages"
    SEND_MESSAGES = "sendMessages"


class DenialReason(str, Enum):
    NO_PERMISSION = "no_permission"
    NOT_OWNER = "not_owner"


_VIEW_ALL = {
    Capability.VIEW_USERS,
    Capability.VIEW_DEPARTMENTS,
    Capability.VIEW_SHIFTS,
    Capability.VIEW_TIME_OFF,
    Capability.VIEW_MESSAGES,
}

DEFAULT_ROLE_CAPABILITIES: Dict[Role, FrozenSet[Capability]] = {
    Role.ADMIN: frozenset(Capability),
    Role.MANAGER: frozenset(
        _VIEW_ALL
        | {
            Capability.EDIT_USER,
            Capability.CREATE_SHIFT,
            Capability.EDIT_SHIFT,
            Capability.EDIT_OWN_SHIFT,
            Capability.DELETE_SHIFT,
            Capability.CREATE_TIME_OFF,
            Capability.APPROVE_TIME_OFF,
            Capability.SEND_MESSAGES,
        }
    ),
    Role.EMPLOYEE: frozenset(
        _VIEW_ALL
        | {
            Capability.EDIT_OWN_SHIFT,
            Capability.CREATE_TIME_OFF,
            Capability.SEND_MESSAGES,
        }
    ),
}

# admin > manager > employee; unknown roles rank lowest
ROLE_RANK: Dict[Role, int] = {Role.EMPLOYEE: 0, Role.MANAGER: 1, Role.ADMIN: 2}


def outranks(role: Union[Role, str, None], other: Union[Role, str, None]) -> bool:
    def rank(value) -> int:
        try:
            return ROLE_RANK[Role(value)]
        except (KeyError, ValueError):
            return -1

    return rank(role) > rank(other)


class PermissionTable:
    """Immutable role -> capabilities mapping."""

    def __init__(self, grants: Mapping[Role, Iterable[Capability]], *, fallback_role: Role = Role.EMPLOYEE):
        self._grants: Mapping[Role, FrozenSet[Capability]] = MappingProxyType(
            {Role(role): frozenset(caps) for role, caps in grants.items()}
        )
        if fallback_role not in self._grants:
            raise ValueError(f"Fallback role {fallback_role.value!r} has no row in the table")
        self._fallback = fallback_role

    @classmethod
    def default(cls) -> "PermissionTable":
        return cls(DEFAULT_ROLE_CAPABILITIES)

    def _row(self, role: Union[Role, str, None]) -> FrozenSet[Capability]:
        try:
            return self._grants[Role(role)]
        except (KeyError, ValueError):
            # unknown roles get the least privileged row
            return self._grants[self._fallback]

    def grants(self, role: Union[Role, str, None], capability: Capability) -> bool:
        return capability in self._row(role)

    def capabilities_for(self, role: Union[Role, str, None]) -> Dict[str, bool]:
        row = self._row(role)
        return {cap.value: cap in row for cap in Capability}


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[DenialReason] = None

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = Decision(True)


class PermissionEngine:
    def __init__(self, table: PermissionTable):
        self._table = table

    @property
    def table(self) -> PermissionTable:
        return self._table

    def authorize(self, user, capability: Capability, resource_owner_id: Optional[int] = None) -> Decision:
        """Decide whether ``user`` may use ``capability``.

        ``resource_owner_id`` only matters for ``editShift``: a user holding
        ``editOwnShift`` is let through when they own the shift.
        """
        capability = Capability(capability)
        if self._table.grants(user.role, capability):
            return ALLOW

        if capability is Capability.EDIT_SHIFT and self._table.grants(user.role, Capability.EDIT_OWN_SHIFT):
            if resource_owner_id is not None and int(resource_owner_id) == int(user.id):
                return ALLOW
            return Decision(False, DenialReason.NOT_OWNER)

        return Decision(False, DenialReason.NO_PERMISSION)

    def require(self, user, capability: Capability, resource_owner_id: Optional[int] = None) -> None:
        decision = self.authorize(user, capability, resource_owner_id)
        if decision.allowed:
            return
        if decision.reason is DenialReason.NOT_OWNER:
            raise AuthorizationError("You can only edit your own shifts", decision.reason)
        raise AuthorizationError(f"You are not allowed to perform this action ({Capability(capability).value})", decision.reason)

    def capabilities_for(self, role: Union[Role, str, None]) -> Dict[str, bool]:
        return self._table.capabilities_for(role)
