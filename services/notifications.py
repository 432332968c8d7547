"""Helpers for creating user notifications from other flows."""

from __future__ import annotations

from models import db
from models.notification import Notification

LOGIN_TITLE = "Login Successful"
LOGIN_CONTENT = "You have successfully logged in to the CCTV monitoring system."
STREAM_EVENT_TITLE = "CCTV Stream Event"
MESSAGE_TITLE = "New Message"


def create_notification(user_id: int, type_: str, title: str, content: str) -> Notification:
    notification = Notification(user_id=user_id, type=type_, title=title, content=content)
    db.session.add(notification)
    db.session.commit()
    return notification


def create_login_notification(user_id: int) -> Notification:
    return create_notification(user_id, "LOGIN", LOGIN_TITLE, LOGIN_CONTENT)


def create_stream_event_notification(user_id: int, cctv_name: str, event: str) -> Notification:
    return create_notification(user_id, "STREAM_EVENT", STREAM_EVENT_TITLE, f"{cctv_name}: {event}")


def create_message_notification(receiver_id: int, sender_name: str) -> Notification:
    return create_notification(
        receiver_id, "MESSAGE", MESSAGE_TITLE, f"You have a new message from {sender_name}."
    )
