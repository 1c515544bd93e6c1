from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_clock, parse_iso_date
from ..common.serialization import to_payload, to_payloads
from ..common.validators import require_bool, require_positive_int
from ..common.web import Guards, json_body, not_found, parse_int_arg
from ..container import Container
from ..core.exceptions import ValidationError
from ..permissions.policy import Capability
from .model import NewShift, ShiftChanges


def _parse_changes(body: dict) -> ShiftChanges:
    values = {}
    if "userId" in body:
        values["user_id"] = require_positive_int(body["userId"], "userId")
    if "date" in body:
        values["date"] = parse_iso_date(body["date"], "date")
    if "startTime" in body:
        values["start_time"] = parse_clock(body["startTime"], "startTime")
    if "endTime" in body:
        values["end_time"] = parse_clock(body["endTime"], "endTime")
    for key in ("department", "notes"):
        if key in body:
            if body[key] is not None and not isinstance(body[key], str):
                raise ValidationError(f"{key} must be text")
            values[key] = body[key]
    return ShiftChanges(**values)


def _parse_new_shift(body: dict) -> NewShift:
    return NewShift(
        user_id=require_positive_int(body.get("userId"), "userId"),
        date=parse_iso_date(body.get("date"), "date"),
        start_time=parse_clock(body.get("startTime"), "startTime"),
        end_time=parse_clock(body.get("endTime"), "endTime"),
        department=body.get("department") or "",
        notes=body.get("notes"),
    )


def _notify_flag(body: dict) -> bool:
    return require_bool(body.get("notify", False), "notify")


def register(app: Flask, container: Container) -> None:
    guards = Guards(container)

    def shift_owner(shift_id: int):
        shift = container.shift_service.get(shift_id)
        return shift.user_id if shift else None

    @app.route("/api/shifts", methods=["GET"], endpoint="list_shifts")
    @guards.require(Capability.VIEW_SHIFTS)
    def list_shifts():
        start = request.args.get("startDate")
        end = request.args.get("endDate")
        user_id = request.args.get("userId")

        if start and end:
            shifts = container.shift_service.list_in_range(
                start=parse_iso_date(start, "startDate"),
                end=parse_iso_date(end, "endDate"),
            )
        elif user_id:
            shifts = container.shift_service.list_for_user(parse_int_arg(user_id, "user ID"))
        else:
            shifts = container.shift_service.list_all()
        return jsonify(to_payloads(shifts))

    @app.route("/api/shifts/<int:shift_id>", methods=["GET"], endpoint="get_shift")
    @guards.require(Capability.VIEW_SHIFTS)
    def get_shift(shift_id: int):
        shift = container.shift_service.get(shift_id)
        if shift is None:
            return not_found("Shift")
        return jsonify(to_payload(shift))

    @app.route("/api/shifts", methods=["POST"], endpoint="create_shift")
    @guards.require(Capability.CREATE_SHIFT)
    def create_shift():
        body = json_body()
        result = container.shift_service.create_shift(
            actor_id=guards.current_user().id,
            data=_parse_new_shift(body),
            notify=_notify_flag(body),
        )
        return jsonify(to_payload(result.value)), 201

    @app.route("/api/shifts/<int:shift_id>", methods=["PUT", "PATCH"], endpoint="update_shift")
    @guards.require(Capability.EDIT_SHIFT, owner_of=shift_owner)
    def update_shift(shift_id: int):
        actor = guards.current_user()
        body = json_body()
        changes = _parse_changes(body)
        if "user_id" in changes.as_updates():
            # handing the shift to someone else needs editShift on the new owner too
            container.permissions.require(actor, Capability.EDIT_SHIFT, changes.user_id)

        result = container.shift_service.update_shift(
            actor_id=actor.id,
            shift_id=shift_id,
            changes=changes,
            notify=_notify_flag(body),
        )
        if result is None:
            return not_found("Shift")
        return jsonify(to_payload(result.value))

    @app.route("/api/shifts/<int:shift_id>", methods=["DELETE"], endpoint="delete_shift")
    @guards.require(Capability.DELETE_SHIFT)
    def delete_shift(shift_id: int):
        notify = request.args.get("notify", "").lower() in {"1", "true", "yes"}
        result = container.shift_service.delete_shift(
            actor_id=guards.current_user().id,
            shift_id=shift_id,
            notify=notify,
        )
        if result is None:
            return not_found("Shift")
        return "", 204
