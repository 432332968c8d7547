"""Tests for the dashboard aggregates and export."""

from __future__ import annotations

import csv
import io

from models import db
from models.building import Building
from models.cctv import Cctv
from models.room import Room


def _seed_facility(app) -> None:
    with app.app_context():
        building = Building(name="MCR", address="Balongan", latitude=-6.38, longitude=108.37)
        room = Room(building=building, name="Lobby", floor=1)
        db.session.add_all(
            [
                building,
                room,
                Cctv(room=room, name="A", ip_address="10.0.0.1", rtsp_url="rtsp://10.0.0.1/s",
                     status="ONLINE", latitude=0, longitude=0),
                Cctv(room=room, name="B", ip_address="10.0.0.2", rtsp_url="rtsp://10.0.0.2/s",
                     status="ONLINE", latitude=0, longitude=0),
                Cctv(room=room, name="C", ip_address="10.0.0.3", rtsp_url="rtsp://10.0.0.3/s",
                     status="MAINTENANCE", latitude=0, longitude=0),
            ]
        )
        db.session.commit()


def test_stats_for_operators(client, app, user_headers):
    _seed_facility(app)

    response = client.get("/dashboard/stats", headers=user_headers)

    assert response.status_code == 200
    assert response.get_json() == {
        "total_buildings": 1,
        "total_rooms": 1,
        "total_cctvs": 3,
        "online_cctvs": 2,
        "offline_cctvs": 0,
        "maintenance_cctvs": 1,
    }


def test_analytics_counts_users(client, app, admin_headers, user_headers, make_user):
    _seed_facility(app)
    make_user("gone@example.com", is_active=False)

    assert client.get("/dashboard/analytics", headers=user_headers).status_code == 403

    data = client.get("/dashboard/analytics", headers=admin_headers).get_json()
    assert data["total_users"] == 3
    assert data["online_users"] == 2
    assert data["offline_users"] == 1
    assert data["total_cctvs"] == 3


def test_export_is_csv_attachment(client, app, admin_headers):
    _seed_facility(app)

    response = client.get("/dashboard/export", headers=admin_headers)

    assert response.status_code == 200
    assert response.mimetype == "text/csv"
    assert "attachment; filename=dashboard_export_" in response.headers["Content-Disposition"]
    rows = list(csv.reader(io.StringIO(response.get_data(as_text=True))))
    assert rows[0] == ["metric", "value"]
    assert ["total_cctvs", "3"] in rows
    assert ["online_users", "1"] in rows
