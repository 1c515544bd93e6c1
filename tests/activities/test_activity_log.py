from __future__ import annotations

import pytest

from src.staff_scheduler.staff_scheduler.activities.model import NewActivity
from src.staff_scheduler.staff_scheduler.core.enums import ActivityType
from src.staff_scheduler.staff_scheduler.core.exceptions import ValidationError


def test_record_requires_type_and_description(container):
    with pytest.raises(ValidationError):
        container.activity_log.record(NewActivity(type="", description="x"))
    with pytest.raises(ValidationError):
        container.activity_log.record(NewActivity(type="late", description="  "))


def test_record_about_skips_missing_subject(container, people):
    log = container.activity_log

    written = log.record_about(ActivityType.SHIFT_ADDED, actor_id=None, subject_id=404, describe=lambda u: "never")
    assert written is False

    written = log.record_about(
        ActivityType.SHIFT_ADDED,
        actor_id=people["admin"].id,
        subject_id=people["alex"].id,
        describe=lambda u: f"shift for {u.full_name}",
    )
    assert written is True
    assert log.recent(1)[0].description == "shift for Alex Dubois"


def test_limit_two_returns_two_newest(container, clock):
    log = container.activity_log
    for n in range(4):
        clock.advance(seconds=1)
        log.record(NewActivity(type="t", description=str(n)))

    assert [a.description for a in log.recent(2)] == ["3", "2"]
