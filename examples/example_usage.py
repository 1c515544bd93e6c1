"""Example: using the service layer without Flask.

Controllers are a thin layer; the scheduling rules live in the services.
"""

from datetime import timedelta

from src.staff_scheduler.staff_scheduler.container import build_container
from src.staff_scheduler.staff_scheduler.database.bootstrap import seed_demo_data
from src.staff_scheduler.staff_scheduler.permissions.policy import Capability
from src.staff_scheduler.staff_scheduler.shifts.model import ShiftChanges


def main():
    container = build_container()
    ids = seed_demo_data(container)
    admin = container.users_repo.get_by_id(ids["admin"])
    alex = container.users_repo.get_by_id(ids["alex"])

    shift = container.shift_service.list_for_user(alex.id)[0]
    print("alex may edit own shift:", container.permissions.authorize(alex, Capability.EDIT_SHIFT, shift.user_id))

    container.permissions.require(admin, Capability.EDIT_SHIFT)
    result = container.shift_service.update_shift(
        actor_id=admin.id,
        shift_id=shift.id,
        changes=ShiftChanges(date=shift.date + timedelta(days=1)),
        notify=True,
    )
    print("moved:", result.value, result.effects)

    pending = container.time_off_service.list_pending()[0]
    print("approved:", container.time_off_service.approve(pending.id, admin.id).value.status.value)
    print("alex unread:", container.message_service.unread_count(alex.id))
    for activity in container.activity_log.recent(3):
        print("-", activity.type, activity.description)


if __name__ == "__main__":
    main()
