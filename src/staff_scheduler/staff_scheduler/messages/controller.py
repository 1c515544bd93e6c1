from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serialization import to_payload, to_payloads
from ..common.validators import require_choice
from ..common.web import Guards, json_body, not_found, parse_int_arg
from ..container import Container
from ..core.enums import MessagePriority, MessageType, Role
from ..core.exceptions import AuthorizationError
from ..permissions.policy import Capability, DenialReason
from .model import NewMessage


def register(app: Flask, container: Container) -> None:
    guards = Guards(container)

    @app.route("/api/messages", methods=["GET"], endpoint="list_messages")
    @guards.require(Capability.VIEW_MESSAGES)
    def list_messages():
        actor = guards.current_user()
        user_id = request.args.get("userId")
        target = parse_int_arg(user_id, "user ID") if user_id else actor.id
        if target != actor.id and actor.role != Role.ADMIN:
            raise AuthorizationError("You can only read your own messages", DenialReason.NOT_OWNER)
        return jsonify(to_payloads(container.message_service.inbox(target)))

    @app.route("/api/messages/unread-count", methods=["GET"], endpoint="unread_count")
    @guards.require(Capability.VIEW_MESSAGES)
    def unread_count():
        return jsonify({"count": container.message_service.unread_count(guards.current_user().id)})

    @app.route("/api/messages", methods=["POST"], endpoint="send_message")
    @guards.require(Capability.SEND_MESSAGES)
    def send_message():
        body = json_body()
        message = container.message_service.send(
            sender_id=guards.current_user().id,
            data=NewMessage(
                receiver_id=body.get("receiverId"),
                content=body.get("content") or "",
                subject=body.get("subject"),
                priority=require_choice(body.get("priority", MessagePriority.NORMAL.value), MessagePriority, "priority"),
                message_type=require_choice(body.get("messageType", MessageType.MESSAGE.value), MessageType, "messageType"),
            ),
        )
        return jsonify(to_payload(message)), 201

    @app.route("/api/messages/<int:message_id>/read", methods=["POST"], endpoint="mark_message_read")
    @guards.require(Capability.VIEW_MESSAGES)
    def mark_message_read(message_id: int):
        actor = guards.current_user()
        message = container.message_service.get(message_id)
        if message is None:
            return not_found("Message")
        if message.receiver_id != actor.id:
            raise AuthorizationError("Only the receiver can mark a message as read", DenialReason.NOT_OWNER)
        return jsonify(to_payload(container.message_service.mark_read(message_id)))
