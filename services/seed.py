"""Reference data for the Pertamina Refinery Unit VI Balongan deployment."""

from __future__ import annotations

import random

from werkzeug.exceptions import BadRequest

from models import db
from models.building import Building
from models.cctv import CCTV_STATUSES, Cctv
from models.room import Room

REFINERY_ADDRESS = "Pertamina Refinery Unit VI Balongan, Indramayu, West Java"

PERTAMINA_BUILDINGS = (
    ("Collaborative Building", -6.38610, 108.37470),
    ("Main Gate", -6.39020, 108.37120),
    ("AWI", -6.38750, 108.37690),
    ("Maintenance Shelter Area 1", -6.38420, 108.37950),
    ("Maintenance Shelter Area 2", -6.38380, 108.38110),
    ("Maintenance Shelter Area 3", -6.38290, 108.38270),
    ("Maintenance Shelter Area 4", -6.38210, 108.38430),
    ("White OM Shelter", -6.38530, 108.38020),
    ("Entrance to Pertamina Refinery Area", -6.39110, 108.37030),
    ("Marine Region III Pertamina Balongan", -6.37480, 108.39260),
    ("Main Control Room", -6.38470, 108.37780),
    ("Tank Farm Area 1", -6.38090, 108.37610),
    ("EXOR Building", -6.38660, 108.37840),
    ("Crude Distillation Unit (CDU) Production Area", -6.38320, 108.37720),
    ("HSSE Demo Room", -6.38800, 108.37390),
    ("Amanah Building", -6.38910, 108.37280),
    ("POC", -6.38570, 108.37560),
    ("JGC", -6.38690, 108.38190),
)

SAMPLE_CCTV_LIMIT = 50
SAMPLE_CCTV_PER_ROOM = 5
SAMPLE_IP_PREFIX = "10.56.236."


def initialize_pertamina_buildings() -> int:
    """Insert the predefined refinery buildings that are missing.

    Returns the number of buildings created; existing names are left alone.
    """

    existing = {name for (name,) in db.session.query(Building.name).all()}
    created = 0
    for name, latitude, longitude in PERTAMINA_BUILDINGS:
        if name in existing:
            continue
        db.session.add(
            Building(
                name=name,
                address=REFINERY_ADDRESS,
                latitude=latitude,
                longitude=longitude,
            )
        )
        created += 1
    db.session.commit()
    return created


def initialize_cctv_samples() -> int:
    """Spread sample cameras across existing rooms and return how many were added."""

    rooms = Room.query.order_by(Room.id.asc()).all()
    if not rooms:
        raise BadRequest("No rooms available - please create rooms first")

    count = min(SAMPLE_CCTV_LIMIT, len(rooms) * SAMPLE_CCTV_PER_ROOM)
    for index in range(count):
        room = rooms[index % len(rooms)]
        ip_address = f"{SAMPLE_IP_PREFIX}{index + 1}"
        db.session.add(
            Cctv(
                room_id=room.id,
                name=f"CCTV Camera {index + 1}",
                ip_address=ip_address,
                rtsp_url=f"rtsp://admin:password.123@{ip_address}/streaming/channels/",
                status=CCTV_STATUSES[index % len(CCTV_STATUSES)],
                latitude=-6.2 + random.random() * 0.4,
                longitude=106.8 + random.random() * 0.4,
            )
        )
    db.session.commit()
    return count
