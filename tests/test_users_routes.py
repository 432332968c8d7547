"""Tests for the user management endpoints."""

from __future__ import annotations

from models import db
from models.user import User


def test_users_require_authentication(client):
    response = client.get("/users/me")

    assert response.status_code == 401


def test_list_users_requires_admin(client, admin_headers, user_headers):
    assert client.get("/users", headers=user_headers).status_code == 403

    response = client.get("/users", headers=admin_headers)

    assert response.status_code == 200
    emails = [user["email"] for user in response.get_json()]
    assert emails == ["admin@example.com", "operator@example.com"]


def test_get_user_by_id(client, make_user, user_headers):
    other_id = make_user("other@example.com")

    assert client.get(f"/users/{other_id}", headers=user_headers).get_json()["email"] == "other@example.com"
    assert client.get("/users/9999", headers=user_headers).status_code == 404


def test_user_updates_own_profile(client, make_user, auth_headers):
    user_id = make_user("self@example.com")

    response = client.patch(
        f"/users/{user_id}",
        json={"name": "Renamed", "theme": "DARK"},
        headers=auth_headers(user_id),
    )

    assert response.status_code == 200
    data = response.get_json()
    assert data["name"] == "Renamed"
    assert data["theme"] == "DARK"


def test_user_cannot_update_someone_else(client, make_user, auth_headers):
    user_id = make_user("self@example.com")
    other_id = make_user("other@example.com")

    response = client.patch(f"/users/{other_id}", json={"name": "Hacked"}, headers=auth_headers(user_id))

    assert response.status_code == 403


def test_update_rejects_taken_email_and_bad_theme(client, make_user, auth_headers):
    user_id = make_user("self@example.com")
    make_user("taken@example.com")
    headers = auth_headers(user_id)

    taken = client.patch(f"/users/{user_id}", json={"email": "taken@example.com"}, headers=headers)
    bad_theme = client.patch(f"/users/{user_id}", json={"theme": "NEON"}, headers=headers)

    assert taken.status_code == 409
    assert taken.get_json()["detail"] == "Email is already taken."
    assert bad_theme.status_code == 400


def test_change_password(client, make_user, auth_headers, app):
    user_id = make_user("self@example.com", "oldpass1")
    headers = auth_headers(user_id)

    wrong = client.post(
        f"/users/{user_id}/change-password",
        json={"current_password": "nope123", "new_password": "newpass1", "confirm_password": "newpass1"},
        headers=headers,
    )
    mismatch = client.post(
        f"/users/{user_id}/change-password",
        json={"current_password": "oldpass1", "new_password": "newpass1", "confirm_password": "newpass2"},
        headers=headers,
    )
    ok = client.post(
        f"/users/{user_id}/change-password",
        json={"current_password": "oldpass1", "new_password": "newpass1", "confirm_password": "newpass1"},
        headers=headers,
    )

    assert wrong.status_code == 400
    assert wrong.get_json()["detail"] == "Current password is incorrect."
    assert mismatch.status_code == 400
    assert mismatch.get_json()["detail"] == "Passwords don't match."
    assert ok.status_code == 200
    with app.app_context():
        assert db.session.get(User, user_id).check_password("newpass1")


def test_admin_toggles_status_and_blocks_login(client, make_user, admin_headers):
    user_id = make_user("self@example.com", "secret123")

    response = client.post(f"/users/{user_id}/toggle-status", headers=admin_headers)

    assert response.status_code == 200
    assert response.get_json()["is_active"] is False
    login = client.post("/auth/login", json={"email": "self@example.com", "password": "secret123"})
    assert login.status_code == 403

    reactivated = client.post(f"/users/{user_id}/toggle-status", headers=admin_headers)
    assert reactivated.get_json()["is_active"] is True


def test_deactivated_token_is_refused(client, make_user, auth_headers):
    user_id = make_user("gone@example.com", is_active=False)

    response = client.get("/users/me", headers=auth_headers(user_id))

    assert response.status_code == 403


def test_admin_deletes_user(client, make_user, admin_headers, user_headers, app):
    user_id = make_user("self@example.com")

    assert client.delete(f"/users/{user_id}", headers=user_headers).status_code == 403

    response = client.delete(f"/users/{user_id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.get_json()["message"] == "User deleted successfully."
    with app.app_context():
        assert db.session.get(User, user_id) is None
