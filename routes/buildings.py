"""Buildings blueprint with search and CRUD."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required
from werkzeug.exceptions import BadRequest, NotFound

from models import db, utcnow
from models.building import Building
from services.seed import initialize_pertamina_buildings
from utils.current_user import require_admin, require_user
from utils.request_validation import is_number, parse_json_request, raise_for_errors

buildings_bp = Blueprint("buildings", __name__)


def _get_building_or_404(building_id: int) -> Building:
    building = db.session.get(Building, building_id)
    if building is None:
        raise NotFound("Building not found")
    return building


def _validate_building_payload(data: dict, partial: bool = False) -> list[str]:
    errors = []

    if not partial:
        for field in ("name", "address", "latitude", "longitude"):
            if data.get(field) in (None, ""):
                errors.append(f"{field} is required")

    for field in ("name", "address"):
        if field in data and data[field] is not None:
            if not isinstance(data[field], str) or not data[field].strip():
                errors.append(f"{field} must be a non-empty string")

    for field in ("latitude", "longitude"):
        if field in data and data[field] is not None and not is_number(data[field]):
            errors.append(f"{field} must be numeric")

    return errors


@buildings_bp.route("", methods=["GET"])
@jwt_required()
def list_buildings():
    require_user()
    buildings = Building.query.order_by(Building.id.asc()).all()
    return jsonify([building.to_dict() for building in buildings])


@buildings_bp.route("/search", methods=["GET"])
@jwt_required()
def search_buildings():
    """Return buildings whose name contains ``q``, ignoring case."""

    require_user()
    query = (request.args.get("q") or "").strip()
    if not query:
        raise BadRequest("q is required")

    like = f"%{query.lower()}%"
    buildings = (
        Building.query.filter(db.func.lower(Building.name).like(like))
        .order_by(Building.name.asc())
        .all()
    )
    return jsonify([building.to_dict() for building in buildings])


@buildings_bp.route("/<int:building_id>", methods=["GET"])
@jwt_required()
def get_building(building_id: int):
    require_user()
    return jsonify(_get_building_or_404(building_id).to_dict())


@buildings_bp.route("", methods=["POST"])
@jwt_required()
def create_building():
    require_admin()
    data = parse_json_request(request)
    raise_for_errors(_validate_building_payload(data))

    building = Building(
        name=data["name"].strip(),
        address=data["address"].strip(),
        latitude=float(data["latitude"]),
        longitude=float(data["longitude"]),
    )
    db.session.add(building)
    db.session.commit()
    return jsonify(building.to_dict()), 201


@buildings_bp.route("/<int:building_id>", methods=["PATCH"])
@jwt_required()
def update_building(building_id: int):
    require_admin()
    building = _get_building_or_404(building_id)
    data = parse_json_request(request)
    raise_for_errors(_validate_building_payload(data, partial=True))

    for field in ("name", "address"):
        if data.get(field) is not None:
            setattr(building, field, data[field].strip())
    for field in ("latitude", "longitude"):
        if data.get(field) is not None:
            setattr(building, field, float(data[field]))
    building.updated_at = utcnow()

    db.session.commit()
    return jsonify(building.to_dict())


@buildings_bp.route("/<int:building_id>", methods=["DELETE"])
@jwt_required()
def delete_building(building_id: int):
    """Delete a building together with its rooms and their cameras."""

    require_admin()
    building = _get_building_or_404(building_id)
    db.session.delete(building)
    db.session.commit()
    return jsonify({"message": "Building deleted successfully."})


@buildings_bp.route("/initialize-pertamina", methods=["POST"])
@jwt_required()
def initialize_pertamina():
    require_admin()
    count = initialize_pertamina_buildings()
    return jsonify({"message": "Pertamina buildings initialized successfully.", "count": count})
