from __future__ import annotations

import pytest

from src.staff_scheduler.staff_scheduler.core.enums import MessagePriority, MessageType
from src.staff_scheduler.staff_scheduler.core.exceptions import ValidationError
from src.staff_scheduler.staff_scheduler.messages.model import NewMessage


def test_unread_count_scenario(container, people):
    svc = container.message_service
    u, other = people["alex"], people["sophie"]

    svc.send(sender_id=other.id, data=NewMessage(receiver_id=u.id, content="one"))
    svc.send(sender_id=other.id, data=NewMessage(receiver_id=u.id, content="two"))
    read = svc.send(sender_id=people["admin"].id, data=NewMessage(receiver_id=u.id, content="three"))
    svc.send(sender_id=u.id, data=NewMessage(receiver_id=other.id, content="four"))
    svc.mark_read(read.id)

    assert svc.unread_count(u.id) == 2
    assert len(svc.inbox(u.id)) == 4


def test_send_applies_defaults(container, people):
    message = container.message_service.send(
        sender_id=people["alex"].id,
        data=NewMessage(receiver_id=people["sophie"].id, content=" Hello ", subject="  "),
    )

    assert message.is_read is False
    assert message.priority == MessagePriority.NORMAL
    assert message.message_type == MessageType.MESSAGE
    assert message.content == "Hello"
    assert message.subject is None


def test_send_requires_content_and_existing_receiver(container, people):
    with pytest.raises(ValidationError):
        container.message_service.send(sender_id=None, data=NewMessage(receiver_id=people["alex"].id, content=""))
    with pytest.raises(ValidationError):
        container.message_service.send(sender_id=None, data=NewMessage(receiver_id=999, content="hi"))


def test_mark_read_is_one_way(container, people):
    svc = container.message_service
    message = svc.send(sender_id=None, data=NewMessage(receiver_id=people["alex"].id, content="hi"))

    assert svc.mark_read(message.id).is_read is True
    assert svc.mark_read(message.id).is_read is True
    assert svc.mark_read(12345) is None
