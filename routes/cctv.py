"""CCTV blueprint: camera inventory, filtering, status and stream lookup."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required
from werkzeug.exceptions import BadRequest, NotFound

from models import db, utcnow
from models.cctv import CCTV_STATUSES, Cctv
from models.room import Room
from services.seed import initialize_cctv_samples
from utils.current_user import require_admin, require_user
from utils.request_validation import (
    is_integer,
    is_number,
    is_valid_ip,
    is_valid_url,
    parse_int_arg,
    parse_json_request,
    raise_for_errors,
)

cctv_bp = Blueprint("cctv", __name__)

_STRING_FIELDS = ("name", "ip_address", "rtsp_url", "status")


def _get_cctv_or_404(cctv_id: int) -> Cctv:
    cctv = db.session.get(Cctv, cctv_id)
    if cctv is None:
        raise NotFound("CCTV not found")
    return cctv


def _require_room(room_id: int) -> Room:
    room = db.session.get(Room, room_id)
    if room is None:
        raise NotFound("Room not found")
    return room


def _validate_status(status: str | None) -> str | None:
    if status is None:
        return None
    if status not in CCTV_STATUSES:
        raise BadRequest("status must be one of ONLINE, OFFLINE, MAINTENANCE")
    return status


def _validate_cctv_payload(data: dict, partial: bool = False) -> list[str]:
    errors = []

    if not partial:
        for field in ("room_id", "name", "ip_address", "rtsp_url", "status", "latitude", "longitude"):
            if data.get(field) in (None, ""):
                errors.append(f"{field} is required")

    if data.get("room_id") is not None and not is_integer(data["room_id"]):
        errors.append("room_id must be an integer")
    if data.get("name") is not None:
        if not isinstance(data["name"], str) or not data["name"].strip():
            errors.append("name must be a non-empty string")
    if data.get("ip_address") is not None and not is_valid_ip(data["ip_address"]):
        errors.append("ip_address must be a valid IP address")
    if data.get("rtsp_url") is not None and not is_valid_url(data["rtsp_url"]):
        errors.append("rtsp_url must be a valid URL")
    if data.get("status") is not None and data["status"] not in CCTV_STATUSES:
        errors.append("status must be one of ONLINE, OFFLINE, MAINTENANCE")
    for field in ("latitude", "longitude"):
        if data.get(field) is not None and not is_number(data[field]):
            errors.append(f"{field} must be numeric")

    return errors


def _serialize(cctvs) -> list[dict]:
    return [cctv.to_dict() for cctv in cctvs]


@cctv_bp.route("", methods=["GET"])
@jwt_required()
def list_cctvs():
    """Return cameras, optionally filtered by ``status`` and ``building_id``."""

    require_user()
    status = _validate_status(request.args.get("status") or None)
    building_id = parse_int_arg(request.args.get("building_id"), "building_id")

    query = Cctv.query
    if building_id is not None:
        query = query.join(Room, Cctv.room_id == Room.id).filter(Room.building_id == building_id)
    if status is not None:
        query = query.filter(Cctv.status == status)

    return jsonify(_serialize(query.order_by(Cctv.id.asc()).all()))


@cctv_bp.route("/<int:cctv_id>", methods=["GET"])
@jwt_required()
def get_cctv(cctv_id: int):
    require_user()
    return jsonify(_get_cctv_or_404(cctv_id).to_dict())


@cctv_bp.route("/room/<int:room_id>", methods=["GET"])
@jwt_required()
def list_cctvs_by_room(room_id: int):
    require_user()
    cctvs = Cctv.query.filter_by(room_id=room_id).order_by(Cctv.id.asc()).all()
    return jsonify(_serialize(cctvs))


@cctv_bp.route("/building/<int:building_id>", methods=["GET"])
@jwt_required()
def list_cctvs_by_building(building_id: int):
    require_user()
    cctvs = (
        Cctv.query.join(Room, Cctv.room_id == Room.id)
        .filter(Room.building_id == building_id)
        .order_by(Cctv.id.asc())
        .all()
    )
    return jsonify(_serialize(cctvs))


@cctv_bp.route("", methods=["POST"])
@jwt_required()
def create_cctv():
    require_admin()
    data = parse_json_request(request)
    raise_for_errors(_validate_cctv_payload(data))
    _require_room(data["room_id"])

    cctv = Cctv(
        room_id=data["room_id"],
        name=data["name"].strip(),
        ip_address=data["ip_address"],
        rtsp_url=data["rtsp_url"],
        status=data["status"],
        latitude=float(data["latitude"]),
        longitude=float(data["longitude"]),
    )
    db.session.add(cctv)
    db.session.commit()
    return jsonify(cctv.to_dict()), 201


@cctv_bp.route("/<int:cctv_id>", methods=["PATCH"])
@jwt_required()
def update_cctv(cctv_id: int):
    require_admin()
    cctv = _get_cctv_or_404(cctv_id)
    data = parse_json_request(request)
    raise_for_errors(_validate_cctv_payload(data, partial=True))

    if data.get("room_id") is not None:
        _require_room(data["room_id"])
        cctv.room_id = data["room_id"]
    for field in _STRING_FIELDS:
        if data.get(field) is not None:
            value = data[field]
            setattr(cctv, field, value.strip() if field == "name" else value)
    for field in ("latitude", "longitude"):
        if data.get(field) is not None:
            setattr(cctv, field, float(data[field]))
    cctv.updated_at = utcnow()

    db.session.commit()
    return jsonify(cctv.to_dict())


@cctv_bp.route("/<int:cctv_id>/status", methods=["PATCH"])
@jwt_required()
def update_cctv_status(cctv_id: int):
    require_admin()
    data = parse_json_request(request, required_keys=["status"])
    status = _validate_status(data["status"])

    cctv = _get_cctv_or_404(cctv_id)
    cctv.status = status
    cctv.updated_at = utcnow()
    db.session.commit()
    return jsonify(cctv.to_dict())


@cctv_bp.route("/<int:cctv_id>", methods=["DELETE"])
@jwt_required()
def delete_cctv(cctv_id: int):
    require_admin()
    cctv = _get_cctv_or_404(cctv_id)
    db.session.delete(cctv)
    db.session.commit()
    return jsonify({"message": "CCTV deleted successfully."})


@cctv_bp.route("/<int:cctv_id>/stream", methods=["GET"])
@jwt_required()
def get_cctv_stream(cctv_id: int):
    """Return where to pull the camera's stream from and its current status."""

    require_user()
    cctv = _get_cctv_or_404(cctv_id)
    return jsonify({"stream_url": cctv.rtsp_url, "status": cctv.status})


@cctv_bp.route("/initialize-samples", methods=["POST"])
@jwt_required()
def initialize_samples():
    require_admin()
    count = initialize_cctv_samples()
    return jsonify({"message": "Sample CCTVs initialized successfully.", "count": count})
