"""Direct messaging blueprint."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required
from sqlalchemy import and_, or_
from werkzeug.exceptions import Forbidden, NotFound

from models import db, utcnow
from models.message import Message
from models.user import User
from services.notifications import create_message_notification
from utils.current_user import require_user
from utils.request_validation import is_integer, parse_json_request, raise_for_errors

messages_bp = Blueprint("messages", __name__)


def _get_message_for(user: User, message_id: int) -> Message:
    message = db.session.get(Message, message_id)
    if message is None or not message.involves(user.id):
        raise NotFound("Message not found")
    return message


@messages_bp.route("", methods=["GET"])
@jwt_required()
def list_messages():
    """Messages sent or received by the caller, newest first."""

    user = require_user()
    messages = (
        Message.query.filter(or_(Message.sender_id == user.id, Message.receiver_id == user.id))
        .order_by(Message.created_at.desc(), Message.id.desc())
        .all()
    )
    return jsonify([message.to_dict() for message in messages])


@messages_bp.route("/unread-count", methods=["GET"])
@jwt_required()
def unread_count():
    user = require_user()
    count = Message.query.filter_by(receiver_id=user.id, is_read=False).count()
    return jsonify({"count": count})


@messages_bp.route("/conversation/<int:other_user_id>", methods=["GET"])
@jwt_required()
def get_conversation(other_user_id: int):
    """Messages exchanged with another user, oldest first."""

    user = require_user()
    messages = (
        Message.query.filter(
            or_(
                and_(Message.sender_id == user.id, Message.receiver_id == other_user_id),
                and_(Message.sender_id == other_user_id, Message.receiver_id == user.id),
            )
        )
        .order_by(Message.created_at.asc(), Message.id.asc())
        .all()
    )
    return jsonify([message.to_dict() for message in messages])


@messages_bp.route("/<int:message_id>", methods=["GET"])
@jwt_required()
def get_message(message_id: int):
    user = require_user()
    return jsonify(_get_message_for(user, message_id).to_dict())


@messages_bp.route("", methods=["POST"])
@jwt_required()
def send_message():
    """Send a message and notify its receiver."""

    sender = require_user()
    data = parse_json_request(request)

    errors = []
    if not is_integer(data.get("receiver_id")):
        errors.append("receiver_id must be an integer")
    content = data.get("content")
    if not isinstance(content, str) or not content.strip():
        errors.append("content is required")
    raise_for_errors(errors)

    receiver = db.session.get(User, data["receiver_id"])
    if receiver is None:
        raise NotFound("Receiver not found")

    message = Message(sender_id=sender.id, receiver_id=receiver.id, content=content)
    db.session.add(message)
    db.session.commit()
    create_message_notification(receiver.id, sender.name)

    return jsonify(message.to_dict()), 201


@messages_bp.route("/<int:message_id>/read", methods=["POST"])
@jwt_required()
def mark_as_read(message_id: int):
    user = require_user()
    message = _get_message_for(user, message_id)
    if message.receiver_id != user.id:
        raise Forbidden("Only the receiver can mark a message as read.")

    message.is_read = True
    message.updated_at = utcnow()
    db.session.commit()
    return jsonify(message.to_dict())


@messages_bp.route("/<int:message_id>", methods=["DELETE"])
@jwt_required()
def delete_message(message_id: int):
    user = require_user()
    message = _get_message_for(user, message_id)
    db.session.delete(message)
    db.session.commit()
    return jsonify({"message": "Message deleted successfully."})
