"""Tests for contacts, direct messages and notifications."""

from __future__ import annotations

import pytest

from models.notification import Notification

CONTACT = {
    "name": "Fire Brigade",
    "email": "fire@example.com",
    "phone": "113",
    "address": "Balongan",
    "whatsapp": "+62 811 000 113",
}


@pytest.fixture()
def pair(make_user, auth_headers):
    alice = make_user("alice@example.com", name="Alice")
    bob = make_user("bob@example.com", name="Bob")
    return {
        "alice": alice,
        "bob": bob,
        "alice_headers": auth_headers(alice),
        "bob_headers": auth_headers(bob),
    }


def _send(client, headers, receiver_id, content="hello"):
    response = client.post("/messages", json={"receiver_id": receiver_id, "content": content}, headers=headers)
    assert response.status_code == 201
    return response.get_json()["id"]


def test_contact_crud(client, admin_headers, user_headers):
    created = client.post("/contacts", json=CONTACT, headers=admin_headers)
    assert created.status_code == 201
    contact_id = created.get_json()["id"]

    assert client.post("/contacts", json=CONTACT, headers=user_headers).status_code == 403
    assert client.get("/contacts", headers=user_headers).get_json()[0]["name"] == "Fire Brigade"

    updated = client.patch(f"/contacts/{contact_id}", json={"phone": "112"}, headers=admin_headers)
    assert updated.get_json()["phone"] == "112"

    assert client.delete(f"/contacts/{contact_id}", headers=admin_headers).status_code == 200
    missing = client.get(f"/contacts/{contact_id}", headers=user_headers)
    assert missing.status_code == 404
    assert missing.get_json()["detail"] == f"Contact with ID {contact_id} not found"


def test_contact_validation(client, admin_headers):
    response = client.post("/contacts", json={**CONTACT, "email": "nope", "phone": ""}, headers=admin_headers)

    assert response.status_code == 400
    detail = response.get_json()["detail"]
    assert "email must be a valid email address" in detail
    assert "phone must be a non-empty string" in detail


def test_send_message_notifies_receiver(client, pair, app):
    message_id = _send(client, pair["alice_headers"], pair["bob"])

    inbox = client.get("/messages", headers=pair["bob_headers"]).get_json()
    assert [message["id"] for message in inbox] == [message_id]
    assert client.get("/messages/unread-count", headers=pair["bob_headers"]).get_json() == {"count": 1}

    with app.app_context():
        note = Notification.query.filter_by(user_id=pair["bob"]).one()
        assert note.type == "MESSAGE"
        assert "Alice" in note.content


def test_send_message_to_unknown_receiver(client, pair):
    response = client.post(
        "/messages", json={"receiver_id": 999, "content": "hi"}, headers=pair["alice_headers"]
    )

    assert response.status_code == 404
    assert response.get_json()["detail"] == "Receiver not found"


def test_conversation_is_oldest_first(client, pair):
    first = _send(client, pair["alice_headers"], pair["bob"], "one")
    second = _send(client, pair["bob_headers"], pair["alice"], "two")
    third = _send(client, pair["alice_headers"], pair["bob"], "three")

    conversation = client.get(f"/messages/conversation/{pair['bob']}", headers=pair["alice_headers"]).get_json()
    newest_first = client.get("/messages", headers=pair["alice_headers"]).get_json()

    assert [message["id"] for message in conversation] == [first, second, third]
    assert [message["id"] for message in newest_first] == [third, second, first]


def test_only_receiver_marks_read(client, pair):
    message_id = _send(client, pair["alice_headers"], pair["bob"])

    assert client.post(f"/messages/{message_id}/read", headers=pair["alice_headers"]).status_code == 403
    response = client.post(f"/messages/{message_id}/read", headers=pair["bob_headers"])

    assert response.get_json()["is_read"] is True
    assert client.get("/messages/unread-count", headers=pair["bob_headers"]).get_json() == {"count": 0}


def test_outsiders_cannot_see_messages(client, pair, make_user, auth_headers):
    message_id = _send(client, pair["alice_headers"], pair["bob"])
    outsider = auth_headers(make_user("eve@example.com"))

    assert client.get(f"/messages/{message_id}", headers=outsider).status_code == 404
    assert client.delete(f"/messages/{message_id}", headers=outsider).status_code == 404
    assert client.delete(f"/messages/{message_id}", headers=pair["bob_headers"]).status_code == 200


def test_notification_list_and_read(client, pair):
    client.post("/notifications/login", headers=pair["alice_headers"])
    client.post(
        "/notifications/stream-event",
        json={"cctv_name": "Gate Cam", "event": "stream offline"},
        headers=pair["alice_headers"],
    )

    notes = client.get("/notifications", headers=pair["alice_headers"]).get_json()
    assert [note["type"] for note in notes] == ["STREAM_EVENT", "LOGIN"]
    assert notes[0]["content"] == "Gate Cam: stream offline"
    assert client.get("/notifications/unread-count", headers=pair["alice_headers"]).get_json() == {"count": 2}

    note_id = notes[0]["id"]
    assert client.get(f"/notifications/{note_id}", headers=pair["bob_headers"]).status_code == 404
    read = client.post(f"/notifications/{note_id}/read", headers=pair["alice_headers"])
    assert read.get_json()["is_read"] is True
    assert client.get("/notifications/unread-count", headers=pair["alice_headers"]).get_json() == {"count": 1}

    assert client.delete(f"/notifications/{note_id}", headers=pair["alice_headers"]).status_code == 200


def test_notifying_other_users_requires_admin(client, pair, admin_headers):
    payload = {"cctv_name": "Gate Cam", "event": "motion", "user_id": pair["bob"]}

    assert client.post("/notifications/stream-event", json=payload, headers=pair["alice_headers"]).status_code == 403
    assert client.post("/notifications/stream-event", json=payload, headers=admin_headers).status_code == 201


def test_admin_creates_notification(client, pair, admin_headers):
    payload = {"user_id": pair["alice"], "type": "MESSAGE", "title": "Heads up", "content": "Drill at 10"}

    assert client.post("/notifications", json=payload, headers=pair["alice_headers"]).status_code == 403
    created = client.post("/notifications", json=payload, headers=admin_headers)
    assert created.status_code == 201
    assert created.get_json()["title"] == "Heads up"

    invalid = client.post("/notifications", json={**payload, "type": "SPAM"}, headers=admin_headers)
    assert invalid.status_code == 400
