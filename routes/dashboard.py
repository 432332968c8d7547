"""Dashboard blueprint: aggregate counts for the admin and operator views."""

from __future__ import annotations

import csv
import io
from datetime import date

from flask import Blueprint, Response, jsonify
from flask_jwt_extended import jwt_required
from sqlalchemy import func

from models import db
from models.building import Building
from models.cctv import CCTV_STATUSES, Cctv
from models.room import Room
from models.user import User
from utils.current_user import require_admin, require_user

dashboard_bp = Blueprint("dashboard", __name__)


def _cctv_status_counts() -> dict[str, int]:
    rows = db.session.query(Cctv.status, func.count(Cctv.id)).group_by(Cctv.status).all()
    counts = {status: 0 for status in CCTV_STATUSES}
    counts.update({status: total for status, total in rows})
    return counts


def facility_stats() -> dict[str, int]:
    statuses = _cctv_status_counts()
    return {
        "total_buildings": Building.query.count(),
        "total_rooms": Room.query.count(),
        "total_cctvs": sum(statuses.values()),
        "online_cctvs": statuses["ONLINE"],
        "offline_cctvs": statuses["OFFLINE"],
        "maintenance_cctvs": statuses["MAINTENANCE"],
    }


def dashboard_analytics() -> dict[str, int]:
    """Facility stats plus user counts; "online" users are the active accounts."""

    total_users = User.query.count()
    online_users = User.query.filter(User.is_active.is_(True)).count()
    return {
        "total_users": total_users,
        "online_users": online_users,
        "offline_users": total_users - online_users,
        **facility_stats(),
    }


@dashboard_bp.route("/analytics", methods=["GET"])
@jwt_required()
def get_analytics():
    require_admin()
    return jsonify(dashboard_analytics())


@dashboard_bp.route("/stats", methods=["GET"])
@jwt_required()
def get_user_stats():
    require_user()
    return jsonify(facility_stats())


@dashboard_bp.route("/export", methods=["GET"])
@jwt_required()
def export_data():
    """Download the analytics as a two-column CSV file."""

    require_admin()
    analytics = dashboard_analytics()

    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(["metric", "value"])
    for metric, value in analytics.items():
        writer.writerow([metric, value])

    filename = f"dashboard_export_{date.today().isoformat()}.csv"
    return Response(
        buffer.getvalue(),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
