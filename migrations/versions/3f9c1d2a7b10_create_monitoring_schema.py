"""create users, facility, messaging and reset request tables"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f9c1d2a7b10"
down_revision = None
branch_labels = None
depends_on = None


USER_ROLES = ("USER", "ADMIN")
THEMES = ("LIGHT", "DARK", "SYSTEM")
CCTV_STATUSES = ("ONLINE", "OFFLINE", "MAINTENANCE")
NOTIFICATION_TYPES = ("LOGIN", "MESSAGE", "STREAM_EVENT")


def _timestamps(include_updated: bool = True) -> list:
    columns = [
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    ]
    if include_updated:
        columns.append(
            sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now())
        )
    return columns


def upgrade() -> None:
    """Create the monitoring schema."""

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.Column(
            "role",
            sa.Enum(*USER_ROLES, name="user_role"),
            nullable=False,
            server_default="USER",
        ),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("remember_me", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "theme",
            sa.Enum(*THEMES, name="theme"),
            nullable=False,
            server_default="SYSTEM",
        ),
        *_timestamps(),
    )

    op.create_table(
        "buildings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "rooms",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "building_id",
            sa.Integer(),
            sa.ForeignKey("buildings.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("floor", sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_rooms_building_id", "rooms", ["building_id"])

    op.create_table(
        "cctv",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "room_id",
            sa.Integer(),
            sa.ForeignKey("rooms.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("ip_address", sa.String(length=64), nullable=False),
        sa.Column("rtsp_url", sa.Text(), nullable=False),
        sa.Column(
            "status",
            sa.Enum(*CCTV_STATUSES, name="cctv_status"),
            nullable=False,
            server_default="OFFLINE",
        ),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_cctv_room_id", "cctv", ["room_id"])
    op.create_index("ix_cctv_status", "cctv", ["status"])

    op.create_table(
        "contacts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("whatsapp", sa.String(length=64), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "messages",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "sender_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "receiver_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_messages_sender_id", "messages", ["sender_id"])
    op.create_index("ix_messages_receiver_id", "messages", ["receiver_id"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "type",
            sa.Enum(*NOTIFICATION_TYPES, name="notification_type"),
            nullable=False,
        ),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(include_updated=False),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])

    op.create_table(
        "password_reset_requests",
        sa.Column("email", sa.String(length=255), primary_key=True),
        sa.Column("code", sa.String(length=6), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        *_timestamps(include_updated=False),
    )


def downgrade() -> None:
    """Drop the monitoring schema."""

    op.drop_table("password_reset_requests")

    op.drop_index("ix_notifications_user_id", table_name="notifications")
    op.drop_table("notifications")

    op.drop_index("ix_messages_receiver_id", table_name="messages")
    op.drop_index("ix_messages_sender_id", table_name="messages")
    op.drop_table("messages")

    op.drop_table("contacts")

    op.drop_index("ix_cctv_status", table_name="cctv")
    op.drop_index("ix_cctv_room_id", table_name="cctv")
    op.drop_table("cctv")

    op.drop_index("ix_rooms_building_id", table_name="rooms")
    op.drop_table("rooms")

    op.drop_table("buildings")
    op.drop_table("users")

    bind = op.get_bind()
    for name in ("notification_type", "cctv_status", "theme", "user_role"):
        sa.Enum(name=name).drop(bind, checkfirst=True)
