from __future__ import annotations

import threading
from datetime import date

import pytest

from src.staff_scheduler.staff_scheduler.core.enums import RequestStatus
from src.staff_scheduler.staff_scheduler.core.exceptions import InvalidTransitionError, ValidationError
from src.staff_scheduler.staff_scheduler.time_off.model import NewTimeOffRequest


def _submit(container, user_id):
    return container.time_off_service.submit(
        NewTimeOffRequest(user_id=user_id, start_date=date(2024, 7, 1), end_date=date(2024, 7, 2), reason=" Family ")
    )


def test_submit_creates_pending_request(container, people):
    req = _submit(container, people["alex"].id)

    assert req.status == RequestStatus.PENDING
    assert req.reviewed_by is None and req.reviewed_at is None
    assert req.reason == "Family"
    assert container.time_off_service.list_pending() == [req]


def test_submit_rejects_end_before_start(container, people):
    with pytest.raises(ValidationError):
        container.time_off_service.submit(
            NewTimeOffRequest(user_id=people["alex"].id, start_date=date(2024, 7, 3), end_date=date(2024, 7, 1))
        )


def test_submit_rejects_unknown_employee(container, people):
    with pytest.raises(ValidationError):
        _submit(container, 999)


def test_approve_sets_review_fields_and_logs_activity(container, people, clock):
    req = _submit(container, people["alex"].id)
    clock.advance(hours=1)

    result = container.time_off_service.approve(req.id, people["manager"].id)

    assert result.value.status == RequestStatus.APPROVED
    assert result.value.reviewed_by == people["manager"].id
    assert result.value.reviewed_at is not None
    assert result.value.reviewed_at >= result.value.created_at
    assert result.effects.activity is True

    activity = container.activity_log.recent(1)[0]
    assert activity.type == "approval"
    assert activity.user_id == people["manager"].id
    assert activity.related_user_id == people["alex"].id
    assert "Alex Dubois" in activity.description and "Manon Leroy" in activity.description
    assert container.time_off_service.list_pending() == []


def test_deny_is_symmetric(container, people):
    req = _submit(container, people["sophie"].id)

    result = container.time_off_service.deny(req.id, people["admin"].id)

    assert result.value.status == RequestStatus.DENIED
    assert result.value.reviewed_by == people["admin"].id
    assert container.activity_log.recent(1)[0].type == "denial"


def test_review_of_missing_request_returns_none_without_side_effects(container, people):
    assert container.time_off_service.approve(42, people["admin"].id) is None
    assert container.time_off_service.deny(42, people["admin"].id) is None
    assert container.activity_log.recent() == []


def test_unknown_reviewer_still_commits_but_skips_activity(container, people):
    req = _submit(container, people["alex"].id)

    result = container.time_off_service.approve(req.id, 5000)

    assert result.value.status == RequestStatus.APPROVED
    assert result.value.reviewed_by == 5000
    assert result.effects.activity is False
    assert container.activity_log.recent() == []


def test_reviewed_request_cannot_be_reviewed_again(container, people):
    req = _submit(container, people["alex"].id)
    container.time_off_service.approve(req.id, people["manager"].id)

    with pytest.raises(InvalidTransitionError):
        container.time_off_service.deny(req.id, people["admin"].id)
    with pytest.raises(InvalidTransitionError):
        container.time_off_service.approve(req.id, people["admin"].id)

    stored = container.time_off_service.get(req.id)
    assert stored.status == RequestStatus.APPROVED
    assert stored.reviewed_by == people["manager"].id


def test_concurrent_approve_and_deny_commit_only_once(container, people, clock):
    req = _submit(container, people["alex"].id)
    clock.delay = 0.05
    start = threading.Barrier(2)
    outcomes, rejected = [], []

    def review(action, reviewer_id):
        start.wait()
        try:
            outcomes.append(action(req.id, reviewer_id).value.status)
        except InvalidTransitionError:
            rejected.append(action.__name__)

    threads = [
        threading.Thread(target=review, args=(container.time_off_service.approve, people["manager"].id)),
        threading.Thread(target=review, args=(container.time_off_service.deny, people["admin"].id)),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(outcomes) == 1
    assert len(rejected) == 1
    assert container.time_off_service.get(req.id).status == outcomes[0]
    assert len(container.activity_log.recent()) == 1
