"""Notifications blueprint."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required
from werkzeug.exceptions import BadRequest, NotFound

from models import db
from models.notification import NOTIFICATION_TYPES, Notification
from models.user import User
from services.notifications import (
    create_login_notification,
    create_notification,
    create_stream_event_notification,
)
from utils.current_user import require_admin, require_user
from utils.request_validation import is_integer, parse_json_request, raise_for_errors

notifications_bp = Blueprint("notifications", __name__)


def _get_notification_for(user: User, notification_id: int) -> Notification:
    notification = db.session.get(Notification, notification_id)
    if notification is None or (notification.user_id != user.id and not user.is_admin):
        raise NotFound("Notification not found")
    return notification


def _resolve_target_user(data: dict, caller: User) -> int:
    """Notifications for other users may only be created by admins."""

    user_id = data.get("user_id", caller.id)
    if not is_integer(user_id):
        raise BadRequest("user_id must be an integer")
    if user_id != caller.id:
        require_admin()
    if db.session.get(User, user_id) is None:
        raise NotFound("User not found")
    return user_id


@notifications_bp.route("", methods=["GET"])
@jwt_required()
def list_notifications():
    user = require_user()
    notifications = (
        Notification.query.filter_by(user_id=user.id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .all()
    )
    return jsonify([notification.to_dict() for notification in notifications])


@notifications_bp.route("/unread-count", methods=["GET"])
@jwt_required()
def unread_count():
    user = require_user()
    count = Notification.query.filter_by(user_id=user.id, is_read=False).count()
    return jsonify({"count": count})


@notifications_bp.route("/<int:notification_id>", methods=["GET"])
@jwt_required()
def get_notification(notification_id: int):
    user = require_user()
    return jsonify(_get_notification_for(user, notification_id).to_dict())


@notifications_bp.route("", methods=["POST"])
@jwt_required()
def create():
    require_admin()
    data = parse_json_request(request)

    errors = []
    if not is_integer(data.get("user_id")):
        errors.append("user_id must be an integer")
    if data.get("type") not in NOTIFICATION_TYPES:
        errors.append("type must be one of LOGIN, MESSAGE, STREAM_EVENT")
    for field in ("title", "content"):
        if not isinstance(data.get(field), str) or not data[field].strip():
            errors.append(f"{field} is required")
    raise_for_errors(errors)

    if db.session.get(User, data["user_id"]) is None:
        raise NotFound("User not found")

    notification = create_notification(
        data["user_id"], data["type"], data["title"].strip(), data["content"].strip()
    )
    return jsonify(notification.to_dict()), 201


@notifications_bp.route("/login", methods=["POST"])
@jwt_required()
def create_login():
    caller = require_user()
    data = parse_json_request(request, allow_empty=True) if request.content_length else {}
    notification = create_login_notification(_resolve_target_user(data, caller))
    return jsonify(notification.to_dict()), 201


@notifications_bp.route("/stream-event", methods=["POST"])
@jwt_required()
def create_stream_event():
    """Record a camera event such as a stream going offline."""

    caller = require_user()
    data = parse_json_request(request)

    errors = []
    for field in ("cctv_name", "event"):
        if not isinstance(data.get(field), str) or not data[field].strip():
            errors.append(f"{field} is required")
    raise_for_errors(errors)

    notification = create_stream_event_notification(
        _resolve_target_user(data, caller), data["cctv_name"].strip(), data["event"].strip()
    )
    return jsonify(notification.to_dict()), 201


@notifications_bp.route("/<int:notification_id>/read", methods=["POST"])
@jwt_required()
def mark_as_read(notification_id: int):
    user = require_user()
    notification = _get_notification_for(user, notification_id)
    notification.is_read = True
    db.session.commit()
    return jsonify(notification.to_dict())


@notifications_bp.route("/<int:notification_id>", methods=["DELETE"])
@jwt_required()
def delete_notification(notification_id: int):
    user = require_user()
    notification = _get_notification_for(user, notification_id)
    db.session.delete(notification)
    db.session.commit()
    return jsonify({"message": "Notification deleted successfully."})
