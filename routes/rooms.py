"""Rooms blueprint."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required
from werkzeug.exceptions import NotFound

from models import db, utcnow
from models.building import Building
from models.room import Room
from utils.current_user import require_admin, require_user
from utils.request_validation import (
    is_integer,
    parse_int_arg,
    parse_json_request,
    raise_for_errors,
)

rooms_bp = Blueprint("rooms", __name__)


def _get_room_or_404(room_id: int) -> Room:
    room = db.session.get(Room, room_id)
    if room is None:
        raise NotFound("Room not found")
    return room


def _require_building(building_id: int) -> Building:
    building = db.session.get(Building, building_id)
    if building is None:
        raise NotFound("Building not found")
    return building


def _validate_room_payload(data: dict, partial: bool = False) -> list[str]:
    errors = []

    if not partial:
        for field in ("building_id", "name", "floor"):
            if data.get(field) in (None, ""):
                errors.append(f"{field} is required")

    if data.get("name") is not None:
        if not isinstance(data["name"], str) or not data["name"].strip():
            errors.append("name must be a non-empty string")
    for field in ("building_id", "floor"):
        if data.get(field) is not None and not is_integer(data[field]):
            errors.append(f"{field} must be an integer")

    return errors


@rooms_bp.route("", methods=["GET"])
@jwt_required()
def list_rooms():
    """Return all rooms, or those of ``building_id`` when given."""

    require_user()
    query = Room.query
    building_id = parse_int_arg(request.args.get("building_id"), "building_id")
    if building_id is not None:
        query = query.filter(Room.building_id == building_id)
    rooms = query.order_by(Room.id.asc()).all()
    return jsonify([room.to_dict() for room in rooms])


@rooms_bp.route("/<int:room_id>", methods=["GET"])
@jwt_required()
def get_room(room_id: int):
    require_user()
    return jsonify(_get_room_or_404(room_id).to_dict())


@rooms_bp.route("", methods=["POST"])
@jwt_required()
def create_room():
    require_admin()
    data = parse_json_request(request)
    raise_for_errors(_validate_room_payload(data))
    _require_building(data["building_id"])

    room = Room(
        building_id=data["building_id"],
        name=data["name"].strip(),
        floor=data["floor"],
    )
    db.session.add(room)
    db.session.commit()
    return jsonify(room.to_dict()), 201


@rooms_bp.route("/<int:room_id>", methods=["PATCH"])
@jwt_required()
def update_room(room_id: int):
    require_admin()
    room = _get_room_or_404(room_id)
    data = parse_json_request(request)
    raise_for_errors(_validate_room_payload(data, partial=True))

    if data.get("building_id") is not None:
        _require_building(data["building_id"])
        room.building_id = data["building_id"]
    if data.get("name") is not None:
        room.name = data["name"].strip()
    if data.get("floor") is not None:
        room.floor = data["floor"]
    room.updated_at = utcnow()

    db.session.commit()
    return jsonify(room.to_dict())


@rooms_bp.route("/<int:room_id>", methods=["DELETE"])
@jwt_required()
def delete_room(room_id: int):
    """Delete a room and the cameras installed in it."""

    require_admin()
    room = _get_room_or_404(room_id)
    db.session.delete(room)
    db.session.commit()
    return jsonify({"message": "Room deleted successfully."})
