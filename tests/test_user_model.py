"""Tests for the User model helpers."""

from models import db
from models.message import Message
from models.notification import Notification
from models.user import User


def test_user_defaults_and_password_helpers(app):
    """New users start unverified, active and with the system theme."""

    with app.app_context():
        user = User(name="Helper", email="helper@example.com")
        user.set_password("password123")
        db.session.add(user)
        db.session.commit()

        assert user.role == "USER"
        assert user.is_active is True
        assert user.is_verified is False
        assert user.remember_me is False
        assert user.theme == "SYSTEM"
        assert user.is_admin is False
        assert user.created_at is not None

        assert user.password != "password123"
        assert user.check_password("password123") is True
        assert user.check_password("password124") is False


def test_to_dict_omits_password(app):
    with app.app_context():
        user = User(name="Admin", email="root@example.com", role="ADMIN")
        user.set_password("password123")
        db.session.add(user)
        db.session.commit()

        data = user.to_dict()

        assert "password" not in data
        assert data["role"] == "ADMIN"
        assert data["email"] == "root@example.com"
        assert user.is_admin is True


def test_deleting_user_removes_messages_and_notifications(app):
    with app.app_context():
        alice = User(name="Alice", email="alice@example.com")
        bob = User(name="Bob", email="bob@example.com")
        for user in (alice, bob):
            user.set_password("password123")
        db.session.add_all([alice, bob])
        db.session.commit()

        db.session.add_all(
            [
                Message(sender_id=alice.id, receiver_id=bob.id, content="hi bob"),
                Message(sender_id=bob.id, receiver_id=alice.id, content="hi alice"),
                Notification(user_id=alice.id, type="LOGIN", title="Login", content="welcome"),
            ]
        )
        db.session.commit()

        db.session.delete(alice)
        db.session.commit()

        assert Message.query.count() == 0
        assert Notification.query.count() == 0
        assert User.query.count() == 1
