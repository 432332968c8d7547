"""Seed an administrator user."""

import os

from app import create_app
from models import db, utcnow
from models.user import User

ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "AdminPass123")


def main() -> None:
    app = create_app()
    with app.app_context():
        admin = User.query.filter_by(email=ADMIN_EMAIL).first()
        if admin is None:
            admin = User(
                name=ADMIN_NAME,
                email=ADMIN_EMAIL,
                role="ADMIN",
                is_verified=True,
            )
            admin.set_password(ADMIN_PASSWORD)
            db.session.add(admin)
            action = "created"
        else:
            admin.role = "ADMIN"
            admin.is_verified = True
            admin.is_active = True
            admin.set_password(ADMIN_PASSWORD)
            admin.updated_at = utcnow()
            action = "updated"
        db.session.commit()
        print(f"Admin user {action}: {ADMIN_EMAIL}")


if __name__ == "__main__":
    main()
