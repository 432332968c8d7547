"""Seed the refinery buildings, a few rooms per building and sample cameras."""

from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app import create_app
from models import db
from models.building import Building
from models.room import Room
from services.seed import initialize_cctv_samples, initialize_pertamina_buildings

ROOMS_PER_BUILDING = (
    ("Lobby", 1),
    ("Control Room", 2),
)


def ensure_rooms() -> int:
    """Give every building the demo rooms it is missing; return how many were added."""

    created = 0
    for building in Building.query.order_by(Building.id.asc()).all():
        existing = {room.name for room in building.rooms}
        for name, floor in ROOMS_PER_BUILDING:
            if name in existing:
                continue
            db.session.add(Room(building_id=building.id, name=name, floor=floor))
            created += 1
    db.session.commit()
    return created


def main() -> None:
    app = create_app()
    with app.app_context():
        db.create_all()
        buildings = initialize_pertamina_buildings()
        rooms = ensure_rooms()
        cameras = initialize_cctv_samples()
        print(
            f"Seed data inserted: {buildings} buildings, {rooms} rooms, {cameras} cameras."
        )


if __name__ == "__main__":
    main()
