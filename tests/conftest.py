from __future__ import annotations

import time
from datetime import datetime, timedelta

import pytest

from src.staff_scheduler.staff_scheduler.container import build_container
from src.staff_scheduler.staff_scheduler.core.enums import Role
from src.staff_scheduler.staff_scheduler.database.memory_store import MemoryStore
from src.staff_scheduler.staff_scheduler.users.model import NewUser


class FakeClock:
    """Returns ``current`` then moves it forward by ``step``.

    A non-zero ``delay`` makes each reading block, which widens the window
    between a check and the write that follows it.
    """

    def __init__(self, start: datetime = datetime(2024, 6, 1, 8, 0, 0), step: timedelta = timedelta(0)):
        self.current = start
        self.step = step
        self.delay = 0.0

    def __call__(self) -> datetime:
        if self.delay:
            time.sleep(self.delay)
        value = self.current
        self.current = self.current + self.step
        return value

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def container(clock):
    return build_container(store=MemoryStore(clock=clock))


def _make_user(container, username: str, role: Role = Role.EMPLOYEE, **extra):
    return container.users_repo.create(
        NewUser(
            username=username,
            password="secret",
            first_name=extra.pop("first_name", username.title()),
            last_name=extra.pop("last_name", "Test"),
            role=role,
            **extra,
        )
    )


@pytest.fixture
def make_user(container):
    return lambda username, role=Role.EMPLOYEE, **extra: _make_user(container, username, role, **extra)


@pytest.fixture
def people(make_user):
    return {
        "admin": make_user("admin", Role.ADMIN, first_name="Thomas", last_name="Martin"),
        "manager": make_user("manon", Role.MANAGER, first_name="Manon", last_name="Leroy"),
        "alex": make_user("alex", Role.EMPLOYEE, first_name="Alex", last_name="Dubois", department="Cuisine"),
        "sophie": make_user("sophie", Role.EMPLOYEE, first_name="Sophie", last_name="Martin", department="Service"),
    }


class SlowLookups:
    """Delegates to a repository, pausing after each call to ``method``."""

    def __init__(self, inner, method: str, delay: float = 0.05):
        self._inner = inner
        self._method = method
        self._delay = delay

    def __getattr__(self, name):
        attr = getattr(self._inner, name)
        if name != self._method:
            return attr

        def slow(*args, **kwargs):
            found = attr(*args, **kwargs)
            time.sleep(self._delay)
            return found

        return slow


@pytest.fixture
def slow_lookups():
    return SlowLookups
