from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

import pytest

from src.staff_scheduler.staff_scheduler.activities.model import NewActivity
from src.staff_scheduler.staff_scheduler.core.enums import MessageType, RequestStatus
from src.staff_scheduler.staff_scheduler.database.memory_store import InMemoryTable
from src.staff_scheduler.staff_scheduler.departments.model import NewDepartment
from src.staff_scheduler.staff_scheduler.messages.model import NewMessage
from src.staff_scheduler.staff_scheduler.shifts.model import NewShift
from src.staff_scheduler.staff_scheduler.time_off.model import NewTimeOffRequest


@dataclass(frozen=True)
class Item:
    id: int
    label: str
    note: str = ""


def test_create_then_get_returns_equal_entity_and_ids_increase():
    table = InMemoryTable("items")
    first = table.create(lambda i: Item(id=i, label="a"))
    second = table.create(lambda i: Item(id=i, label="b"))

    assert table.get(first.id) == first
    assert table.get(second.id) == second
    assert second.id > first.id
    assert [i.label for i in table.list()] == ["a", "b"]


def test_delete_then_get_is_absent_and_second_delete_returns_false():
    table = InMemoryTable("items")
    item = table.create(lambda i: Item(id=i, label="a"))

    assert table.delete(item.id) is True
    assert table.get(item.id) is None
    assert table.delete(item.id) is False


def test_ids_are_never_reused_after_delete():
    table = InMemoryTable("items")
    a = table.create(lambda i: Item(id=i, label="a"))
    table.delete(a.id)
    b = table.create(lambda i: Item(id=i, label="b"))

    assert b.id == a.id + 1


def test_update_merges_partial_fields_and_empty_update_is_a_no_op():
    table = InMemoryTable("items")
    item = table.create(lambda i: Item(id=i, label="a", note="keep"))

    assert table.update(item.id, {}) == item
    updated = table.update(item.id, {"label": "b"})

    assert updated == Item(id=item.id, label="b", note="keep")
    assert table.get(item.id) == updated


def test_update_missing_id_returns_none_and_id_cannot_change():
    table = InMemoryTable("items")
    item = table.create(lambda i: Item(id=i, label="a"))

    assert table.update(999, {"label": "x"}) is None
    with pytest.raises(ValueError):
        table.update(item.id, {"id": 42})


def test_each_kind_has_its_own_counter(container):
    dept = container.departments_repo.create(NewDepartment(name="Cuisine", color="#a3e635"))
    activity = container.activities_repo.create(NewActivity(type="note", description="x"))

    assert dept.id == 1
    assert activity.id == 1


def test_shift_range_is_inclusive_on_both_ends(container):
    repo = container.shifts_repo

    def add(day: date):
        return repo.create(
            NewShift(user_id=1, date=day, start_time=time(9), end_time=time(17), department="Cuisine")
        )

    before = add(date(2024, 6, 9))
    first = add(date(2024, 6, 10))
    middle = add(date(2024, 6, 12))
    last = add(date(2024, 6, 14))
    after = add(date(2024, 6, 15))

    found = repo.list_in_range(start=date(2024, 6, 10), end=date(2024, 6, 14))

    assert [s.id for s in found] == [first.id, middle.id, last.id]
    assert before not in found and after not in found

    # time of day on the bounds is ignored
    late_bound = repo.list_in_range(start=datetime(2024, 6, 14, 23, 0), end=datetime(2024, 6, 14, 23, 30))
    assert [s.id for s in late_bound] == [last.id]


def test_shifts_by_user(container):
    repo = container.shifts_repo
    mine = repo.create(NewShift(user_id=3, date=date(2024, 6, 10), start_time=time(9), end_time=time(17), department="Service"))
    repo.create(NewShift(user_id=4, date=date(2024, 6, 10), start_time=time(9), end_time=time(17), department="Service"))

    assert repo.list_for_user(3) == [mine]


def test_new_time_off_request_is_pending_and_unreviewed(container, clock):
    req = container.time_off_repo.create(
        NewTimeOffRequest(user_id=2, start_date=date(2024, 7, 1), end_date=date(2024, 7, 3), reason="Holiday")
    )

    assert req.status == RequestStatus.PENDING
    assert req.reviewed_by is None
    assert req.reviewed_at is None
    assert req.created_at == datetime(2024, 6, 1, 8, 0, 0)
    assert container.time_off_repo.list_by_status(RequestStatus.PENDING) == [req]
    assert container.time_off_repo.list_for_user(2) == [req]
    assert container.time_off_repo.list_for_user(3) == []


def test_recent_activities_newest_first_with_id_tiebreak(container, clock):
    repo = container.activities_repo
    a = repo.create(NewActivity(type="t", description="a"))
    clock.advance(minutes=5)
    b = repo.create(NewActivity(type="t", description="b"))
    c = repo.create(NewActivity(type="t", description="c"))  # same timestamp as b

    assert [x.id for x in repo.list_recent(2)] == [c.id, b.id]
    assert [x.id for x in repo.list_recent()] == [c.id, b.id, a.id]
    assert repo.list_recent(0) == []


def test_recent_activities_sorted_by_timestamp_not_insertion(container, clock):
    repo = container.activities_repo
    clock.advance(hours=2)
    newer = repo.create(NewActivity(type="t", description="newer"))
    clock.current = clock.current - timedelta(hours=5)
    older = repo.create(NewActivity(type="t", description="older"))

    assert [x.id for x in repo.list_recent(1)] == [newer.id]
    assert repo.list_recent()[-1] == older


def test_unread_count_only_counts_unread_messages_received(container):
    repo = container.messages_repo
    first = repo.create(sender_id=2, data=NewMessage(receiver_id=1, content="one"))
    repo.create(sender_id=2, data=NewMessage(receiver_id=1, content="two"))
    read = repo.create(sender_id=3, data=NewMessage(receiver_id=1, content="three"))
    outgoing = repo.create(sender_id=1, data=NewMessage(receiver_id=2, content="four"))
    repo.mark_read(read.id)

    assert repo.count_unread(1) == 2
    assert first.is_read is False
    assert first.message_type == MessageType.MESSAGE
    assert outgoing in repo.list_for_user(1)
    assert len(repo.list_for_user(1)) == 4
    assert repo.mark_read(999) is None
