"""Room model definition."""

from . import db, utcnow


class Room(db.Model):
    """A room on a given floor of a building."""

    __tablename__ = "rooms"

    id = db.Column(db.Integer, primary_key=True)
    building_id = db.Column(
        db.Integer,
        db.ForeignKey("buildings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = db.Column(db.String(255), nullable=False)
    floor = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    building = db.relationship("Building", back_populates="rooms")
    cctvs = db.relationship(
        "Cctv",
        back_populates="room",
        cascade="all, delete-orphan",
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "building_id": self.building_id,
            "name": self.name,
            "floor": self.floor,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
