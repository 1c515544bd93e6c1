"""Staff Scheduler package.

Organised by feature modules (users, departments, shifts, time_off, ...)
with a thin Flask controller layer over service and repository layers.
Storage is in memory; see ``database.memory_store``.
"""
from __future__ import annotations

from .container import Container, build_container
from .permissions.policy import Capability, PermissionEngine, PermissionTable

__all__ = ["Capability", "Container", "PermissionEngine", "PermissionTable", "build_container"]
