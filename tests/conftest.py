"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient
from flask_jwt_extended import create_access_token

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402
from models.user import User  # noqa: E402


class _BaseTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = "test-jwt-secret-key-that-is-long-enough-for-hs256"
    RATE_LIMIT = "1000 per minute"
    RESET_CODE_STORE = "memory"
    LOG_LEVEL = "WARNING"


@pytest.fixture()
def app() -> Flask:
    """Create a Flask application instance for tests."""

    application = create_app(_BaseTestConfig)

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def db_session(app: Flask):
    """Keep an application context open for tests that talk to the database directly."""

    with app.app_context():
        yield db.session


@pytest.fixture()
def make_user(app: Flask):
    """Return a helper that persists a user and returns its id."""

    def _make_user(
        email: str,
        password: str = "secret123",
        *,
        name: str = "Test User",
        role: str = "USER",
        is_active: bool = True,
        is_verified: bool = False,
    ) -> int:
        with app.app_context():
            user = User(
                name=name,
                email=email,
                role=role,
                is_active=is_active,
                is_verified=is_verified,
            )
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return user.id

    return _make_user


@pytest.fixture()
def auth_headers(app: Flask):
    """Return a helper building a bearer header for a user id."""

    def _auth_headers(user_id: int) -> dict[str, str]:
        with app.app_context():
            token = create_access_token(identity=str(user_id))
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture()
def admin_headers(make_user, auth_headers) -> dict[str, str]:
    admin_id = make_user("admin@example.com", "AdminPass123", name="Admin", role="ADMIN")
    return auth_headers(admin_id)


@pytest.fixture()
def user_headers(make_user, auth_headers) -> dict[str, str]:
    user_id = make_user("operator@example.com", "Operator123", name="Operator")
    return auth_headers(user_id)
