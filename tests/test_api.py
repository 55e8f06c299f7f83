from __future__ import annotations

import pytest

from src.volunteer_hub.volunteer_hub.main import create_app


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, identifier, password):
    return client.post("/api/auth/login", json={"identifier": identifier, "password": password})


def _signup(client, name="Asha", roll_no="21CS101", password="pw"):
    return client.post("/api/auth/signup", json={"name": name, "rollNo": roll_no, "password": password})


def test_login_failure_returns_401(client):
    res = _login(client, "Admin User", "nope")

    assert res.status_code == 401
    assert res.get_json()["success"] is False


def test_signup_conflict_returns_409(client):
    assert _signup(client).status_code == 201
    assert _signup(client, name="Other", roll_no="21cs101").status_code == 409


def test_unapproved_volunteer_logs_in_as_pending_and_cannot_register(client, container, event):
    _signup(client)

    res = _login(client, "21cs101", "pw")
    assert res.status_code == 200
    assert res.get_json()["pending"] is True

    res = client.post(f"/api/events/{event.event_id}/register")
    assert res.status_code == 403
    assert res.get_json() == {"success": False, "message": "Your account is waiting for admin approval"}


def test_volunteer_cannot_use_admin_endpoints(client, approved_volunteer):
    _login(client, approved_volunteer.roll_no, "pw")

    res = client.get("/api/admin/volunteers/pending")
    assert res.status_code == 403
    assert res.get_json()["message"] == "Administrators only"
    assert client.post("/api/events", json={"name": "x", "date": "2026-01-01"}).status_code == 403


def test_admin_cannot_register_as_volunteer(client, event):
    _login(client, "Admin User", "admin")

    res = client.post(f"/api/events/{event.event_id}/register")

    assert res.status_code == 403
    assert res.get_json()["message"] == "Only volunteers can register for events"


def test_requests_without_session_are_rejected(client):
    assert client.get("/api/events").status_code == 401


def test_full_registration_and_attendance_flow(client, approved_volunteer):
    _login(client, "Admin User", "admin")
    res = client.post("/api/events", json={"name": "Beach clean-up", "date": "2026-11-02", "description": ""})
    assert res.status_code == 201
    event_id = res.get_json()["event"]["id"]
    client.post("/api/auth/logout")

    _login(client, approved_volunteer.roll_no, "pw")
    assert client.post(f"/api/events/{event_id}/register").status_code == 201
    assert client.post(f"/api/events/{event_id}/register").status_code == 409
    client.post("/api/auth/logout")

    _login(client, "Admin User", "admin")
    regs = client.get(f"/api/events/{event_id}/registrations").get_json()
    assert [u["id"] for u in regs["pending"]] == [approved_volunteer.user_id]

    url = f"/api/events/{event_id}/registrations/{approved_volunteer.user_id}/confirm"
    assert client.post(url).status_code == 200

    sheet = client.get(f"/api/events/{event_id}/attendance").get_json()
    assert sheet["sheet"][0]["status"] == "absent"
    assert sheet["summary"] is None

    res = client.post(f"/api/events/{event_id}/attendance", json={"attendance": {approved_volunteer.user_id: "present"}})
    assert res.status_code == 200
    res = client.post(f"/api/events/{event_id}/attendance", json={"attendance": {"user_stranger": "present"}})
    assert res.status_code == 400

    summary = client.get(f"/api/events/{event_id}/attendance").get_json()["summary"]
    assert summary == {"present": 1, "absent": 0}

    assert client.delete(f"/api/events/{event_id}").status_code == 200
    assert client.delete(f"/api/events/{event_id}/attendance").status_code == 404


def test_invalid_attendance_status_is_a_bad_request(client, container, event, approved_volunteer):
    container.event_service.register_for_event(event.event_id, approved_volunteer.user_id)
    container.event_service.confirm_registration(event.event_id, approved_volunteer.user_id)
    _login(client, "Admin User", "admin")

    res = client.post(f"/api/events/{event.event_id}/attendance", json={"attendance": {approved_volunteer.user_id: "late"}})

    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_chat_post_and_poll(client, approved_volunteer):
    _login(client, approved_volunteer.roll_no, "pw")

    first = client.post("/api/chat/messages", json={"text": "hello"}).get_json()["message"]
    client.post("/api/chat/messages", json={"text": "again"})

    all_msgs = client.get("/api/chat/messages").get_json()["messages"]
    newer = client.get(f"/api/chat/messages?since={first['timestamp']}").get_json()["messages"]

    assert [m["text"] for m in all_msgs] == ["hello", "again"]
    assert [m["text"] for m in newer] == ["again"]
    assert all_msgs[0]["senderRole"] == "volunteer"


def test_my_attendance_lists_confirmed_events(client, container, event, approved_volunteer):
    container.event_service.register_for_event(event.event_id, approved_volunteer.user_id)
    container.event_service.confirm_registration(event.event_id, approved_volunteer.user_id)
    _login(client, approved_volunteer.roll_no, "pw")

    rows = client.get("/api/me/attendance").get_json()["attendance"]

    assert rows == [{"eventId": event.event_id, "eventName": event.name, "date": event.date, "status": None}]


def test_photo_admin_crud(client):
    _login(client, "Admin User", "admin")

    photo = client.post("/api/photos", json={"imageUrl": "https://img/1.jpg", "eventName": "Drive"}).get_json()["photo"]
    res = client.put(f"/api/photos/{photo['id']}", json={"description": "Team", "eventName": "Drive 2"})
    assert res.get_json()["photo"]["eventName"] == "Drive 2"
    assert client.delete(f"/api/photos/{photo['id']}").status_code == 200
    assert client.delete(f"/api/photos/{photo['id']}").status_code == 404


def test_non_text_event_description_is_accepted(client):
    _login(client, "Admin User", "admin")

    res = client.post("/api/events", json={"name": "Drive", "date": "2026-01-01", "description": 5})

    assert res.status_code == 201
    assert res.get_json()["event"]["description"] == "5"
