from __future__ import annotations

import threading
from datetime import date, time

import pytest

from src.staff_scheduler.staff_scheduler.core.enums import Role
from src.staff_scheduler.staff_scheduler.core.exceptions import AuthenticationError, ValidationError
from src.staff_scheduler.staff_scheduler.shifts.model import NewShift
from src.staff_scheduler.staff_scheduler.time_off.model import NewTimeOffRequest
from src.staff_scheduler.staff_scheduler.users.model import NewUser, UserChanges
from src.staff_scheduler.staff_scheduler.users.service import UserService


def _new_user(username="julie", **overrides):
    values = dict(username=username, password="password", first_name="Julie", last_name="Moreau", department="Réception")
    values.update(overrides)
    return NewUser(**values)


def test_authenticate_with_exact_password(container, people):
    user = container.auth_service.authenticate("alex", "secret")

    assert user.id == people["alex"].id


@pytest.mark.parametrize("username,password", [("alex", "Secret"), ("alex", "secret "), ("nobody", "secret")])
def test_authenticate_rejects_bad_credentials(container, people, username, password):
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate(username, password)


def test_create_user_logs_activity(container, people):
    result = container.user_service.create_user(actor_id=people["admin"].id, data=_new_user())

    user = result.value
    assert user.role == Role.EMPLOYEE
    assert container.user_service.get(user.id) == user
    activity = container.activity_log.recent(1)[0]
    assert activity.type == "user_created"
    assert activity.user_id == people["admin"].id
    assert activity.related_user_id == user.id


def test_create_user_rejects_duplicate_username_and_short_password(container, people):
    with pytest.raises(ValidationError):
        container.user_service.create_user(actor_id=None, data=_new_user(username="alex"))
    with pytest.raises(ValidationError):
        container.user_service.create_user(actor_id=None, data=_new_user(password="pw"))


def test_update_user_is_a_shallow_merge(container, people):
    alex = people["alex"]

    result = container.user_service.update_user(
        actor_id=people["manager"].id,
        user_id=alex.id,
        changes=UserChanges(position="Chef", department=None),
    )

    assert result.value.position == "Chef"
    assert result.value.department is None
    assert result.value.first_name == alex.first_name
    assert result.value.id == alex.id
    assert container.activity_log.recent(1)[0].type == "user_updated"


def test_empty_update_changes_nothing_and_logs_nothing(container, people):
    result = container.user_service.update_user(actor_id=None, user_id=people["alex"].id, changes=UserChanges())

    assert result.value == people["alex"]
    assert container.activity_log.recent() == []


def test_update_rejects_taken_username(container, people):
    with pytest.raises(ValidationError):
        container.user_service.update_user(actor_id=None, user_id=people["alex"].id, changes=UserChanges(username="sophie"))


def test_update_missing_user_returns_none(container, people):
    assert container.user_service.update_user(actor_id=None, user_id=404, changes=UserChanges(position="x")) is None


def test_delete_user_logs_activity_with_rendered_name(container, people):
    sophie = people["sophie"]

    result = container.user_service.delete_user(actor_id=people["admin"].id, user_id=sophie.id)

    assert result.value == sophie
    assert container.user_service.get(sophie.id) is None
    activity = container.activity_log.recent(1)[0]
    assert activity.type == "user_deleted"
    assert "Sophie Martin" in activity.description


def test_delete_missing_user_returns_none(container, people):
    assert container.user_service.delete_user(actor_id=people["admin"].id, user_id=404) is None


def test_delete_refused_while_user_has_shifts_or_pending_leave(container, people):
    alex, sophie, admin = people["alex"], people["sophie"], people["admin"]
    container.shifts_repo.create(
        NewShift(user_id=alex.id, date=date(2024, 6, 10), start_time=time(9), end_time=time(17), department="Cuisine")
    )
    container.time_off_repo.create(NewTimeOffRequest(user_id=sophie.id, start_date=date(2024, 7, 1), end_date=date(2024, 7, 1)))

    with pytest.raises(ValidationError):
        container.user_service.delete_user(actor_id=admin.id, user_id=alex.id)
    with pytest.raises(ValidationError):
        container.user_service.delete_user(actor_id=admin.id, user_id=sophie.id)
    with pytest.raises(ValidationError):
        container.user_service.delete_user(actor_id=admin.id, user_id=admin.id)


def test_concurrent_creates_keep_usernames_unique(container, slow_lookups):
    svc = UserService(
        slow_lookups(container.users_repo, "get_by_username"),
        container.activity_log,
        container.shifts_repo,
        container.time_off_repo,
    )
    start = threading.Barrier(2)
    created, rejected = [], []

    def create():
        start.wait()
        try:
            created.append(svc.create_user(actor_id=None, data=_new_user()).value)
        except ValidationError:
            rejected.append(True)

    threads = [threading.Thread(target=create) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(created) == 1 and len(rejected) == 1
    assert [u.username for u in container.users_repo.list_all()] == ["julie"]
