"""Tests for the user repository."""

import pytest

from models import db
from models.user import User
from services.errors import DuplicateUser, EmailTaken, UserNotFound
from services.user_repository import UserRepository
from utils.passwords import hash_password


def _fields(email: str) -> dict:
    return {"name": "Ann", "email": email, "password": hash_password("secret1")}


def test_insert_duplicate_email_raises(db_session):
    users = UserRepository()
    users.insert_user(_fields("ann@x.com"))

    with pytest.raises(DuplicateUser):
        users.insert_user(_fields("ann@x.com"))

    assert User.query.count() == 1


def test_update_to_taken_email_raises_and_rolls_back(db_session):
    users = UserRepository()
    users.insert_user(_fields("ann@x.com"))
    bob = users.insert_user(_fields("bob@x.com"))

    with pytest.raises(EmailTaken):
        users.update_user(bob.id, {"email": "ann@x.com", "name": "Bob"})

    stored = db.session.get(User, bob.id)
    assert stored.email == "bob@x.com"
    assert stored.name == "Ann"


def test_update_unknown_user(db_session):
    with pytest.raises(UserNotFound):
        UserRepository().update_user(404, {"name": "Nobody"})
