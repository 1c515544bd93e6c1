from __future__ import annotations

from flask import Flask, current_app, jsonify, request

from ..common.serialization import to_payload, to_payloads
from ..common.validators import require_positive_int
from ..common.web import Guards, json_body, parse_int_arg
from ..container import Container
from ..core.exceptions import ValidationError
from .model import NewActivity


def register(app: Flask, container: Container) -> None:
    guards = Guards(container)

    @app.route("/api/activities", methods=["GET"], endpoint="list_activities")
    @guards.login_required
    def list_activities():
        limit = request.args.get("limit")
        if limit is None:
            limit_num = current_app.config.get("ACTIVITY_FEED_LIMIT")
        else:
            limit_num = parse_int_arg(limit, "limit")
            if limit_num < 0:
                raise ValidationError("Invalid limit format")
        return jsonify(to_payloads(container.activity_log.recent(limit_num)))

    @app.route("/api/activities", methods=["POST"], endpoint="create_activity")
    @guards.login_required
    def create_activity():
        body = json_body()
        related = body.get("relatedUserId")
        activity = container.activity_log.record(
            NewActivity(
                type=body.get("type") or "",
                description=body.get("description") or "",
                # the actor is always whoever is logged in
                user_id=guards.current_user().id,
                related_user_id=require_positive_int(related, "relatedUserId") if related is not None else None,
            )
        )
        return jsonify(to_payload(activity)), 201
