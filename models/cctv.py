"""CCTV camera model definition."""

from . import db, utcnow

CCTV_STATUSES = ("ONLINE", "OFFLINE", "MAINTENANCE")


class Cctv(db.Model):
    """A camera installed in a room, reachable over RTSP."""

    __tablename__ = "cctv"

    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(
        db.Integer,
        db.ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = db.Column(db.String(255), nullable=False)
    ip_address = db.Column(db.String(64), nullable=False)
    rtsp_url = db.Column(db.Text, nullable=False)
    status = db.Column(
        db.Enum(*CCTV_STATUSES, name="cctv_status"),
        nullable=False,
        default="OFFLINE",
        index=True,
    )
    latitude = db.Column(db.Float, nullable=False)
    longitude = db.Column(db.Float, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    room = db.relationship("Room", back_populates="cctvs")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "room_id": self.room_id,
            "name": self.name,
            "ip_address": self.ip_address,
            "rtsp_url": self.rtsp_url,
            "status": self.status,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
