from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.serialization import to_payload, to_payloads
from ..common.validators import require_choice, require_positive_int
from ..common.web import Guards, json_body, not_found, parse_int_arg
from ..container import Container
from ..core.enums import RequestStatus
from ..permissions.policy import Capability
from .model import NewTimeOffRequest


def register(app: Flask, container: Container) -> None:
    guards = Guards(container)

    @app.route("/api/time-off", methods=["GET"], endpoint="list_time_off")
    @guards.require(Capability.VIEW_TIME_OFF)
    def list_time_off():
        user_id = request.args.get("userId")
        status = request.args.get("status")

        if user_id:
            items = container.time_off_service.list_for_user(parse_int_arg(user_id, "user ID"))
        elif status:
            items = container.time_off_service.list_by_status(require_choice(status, RequestStatus, "status"))
        else:
            items = container.time_off_service.list_all()
        return jsonify(to_payloads(items))

    @app.route("/api/time-off/<int:request_id>", methods=["GET"], endpoint="get_time_off")
    @guards.require(Capability.VIEW_TIME_OFF)
    def get_time_off(request_id: int):
        item = container.time_off_service.get(request_id)
        if item is None:
            return not_found("Time off request")
        return jsonify(to_payload(item))

    @app.route("/api/time-off", methods=["POST"], endpoint="create_time_off")
    @guards.require(Capability.CREATE_TIME_OFF)
    def create_time_off():
        actor = guards.current_user()
        body = json_body()

        user_id = actor.id
        if body.get("userId") is not None:
            user_id = require_positive_int(body["userId"], "userId")
            if user_id != actor.id:
                # filing on behalf of someone else is a reviewer's job
                container.permissions.require(actor, Capability.APPROVE_TIME_OFF)

        item = container.time_off_service.submit(
            NewTimeOffRequest(
                user_id=user_id,
                start_date=parse_iso_date(body.get("startDate"), "startDate"),
                end_date=parse_iso_date(body.get("endDate"), "endDate"),
                reason=body.get("reason"),
            )
        )
        return jsonify(to_payload(item)), 201

    @app.route("/api/time-off/<int:request_id>/approve", methods=["POST"], endpoint="approve_time_off")
    @guards.require(Capability.APPROVE_TIME_OFF)
    def approve_time_off(request_id: int):
        result = container.time_off_service.approve(request_id, guards.current_user().id)
        if result is None:
            return not_found("Time off request")
        return jsonify(to_payload(result.value))

    @app.route("/api/time-off/<int:request_id>/deny", methods=["POST"], endpoint="deny_time_off")
    @guards.require(Capability.APPROVE_TIME_OFF)
    def deny_time_off(request_id: int):
        result = container.time_off_service.deny(request_id, guards.current_user().id)
        if result is None:
            return not_found("Time off request")
        return jsonify(to_payload(result.value))
