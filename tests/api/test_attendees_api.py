import pytest
from fastapi.testclient import TestClient

from tests.utils.event import create_random_event


@pytest.fixture
def event(db_session, organizer):
    return create_random_event(db_session, owner_id=organizer.id)


def _add(client, event, headers, name="Ada Lovelace", email="ada@example.com"):
    return client.post(
        f"/api/v1/events/{event.id}/attendees",
        json={"name": name, "email": email, "ticket_type": "general"},
        headers=headers,
    )


def test_create_and_duplicate(client: TestClient, event, organizer_headers):
    response = _add(client, event, organizer_headers)
    assert response.status_code == 201
    assert response.json()["ticket_number"].startswith("TKT-")
    assert response.json()["status"] == "registered"

    response = _add(client, event, organizer_headers, email="ADA@example.com")
    assert response.status_code == 409
    assert response.json()["detail"] == (
        "An attendee with this email is already registered for this event"
    )


def test_invalid_email_is_rejected(client: TestClient, event, organizer_headers):
    response = _add(client, event, organizer_headers, email="not-an-email")
    assert response.status_code == 422


def test_check_in_by_ticket_number(client: TestClient, event, organizer_headers):
    attendee = _add(client, event, organizer_headers).json()
    base = f"/api/v1/events/{event.id}/attendees"

    response = client.post(f"{base}/check-in", json={"ticket_number": attendee["ticket_number"]},
                           headers=organizer_headers)
    body = response.json()
    assert response.status_code == 200
    assert body["success"] is True
    assert body["message"] == "Check-in successful"
    assert body["attendee"]["status"] == "checked_in"

    response = client.post(f"{base}/check-in", json={"attendee_id": attendee["id"]},
                           headers=organizer_headers)
    assert response.json()["success"] is False
    assert response.json()["message"] == "Attendee already checked in"

    stats = client.get(f"{base}/stats", headers=organizer_headers).json()
    assert stats["checked_in"] == 1
    assert stats["check_in_rate"] == 100

    response = client.post(f"{base}/{attendee['id']}/undo-check-in", headers=organizer_headers)
    assert response.json()["status"] == "confirmed"
    assert response.json()["checked_in_at"] is None

    response = client.post(f"{base}/{attendee['id']}/undo-check-in", headers=organizer_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Attendee is not checked in"


def test_cancelled_attendee_cannot_check_in(client: TestClient, event, organizer_headers):
    attendee = _add(client, event, organizer_headers).json()
    base = f"/api/v1/events/{event.id}/attendees"
    client.patch(f"{base}/{attendee['id']}", json={"status": "cancelled"},
                 headers=organizer_headers)

    response = client.post(f"{base}/check-in", json={"attendee_id": attendee["id"]},
                           headers=organizer_headers)
    assert response.json()["success"] is False
    assert response.json()["message"] == "Cannot check in a cancelled registration"


def test_check_in_requires_identifier(client: TestClient, event, organizer_headers):
    response = client.post(f"/api/v1/events/{event.id}/attendees/check-in", json={},
                           headers=organizer_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Either attendee_id or ticket_number is required"


def test_check_in_unknown_ticket(client: TestClient, event, organizer_headers):
    response = client.post(f"/api/v1/events/{event.id}/attendees/check-in",
                           json={"ticket_number": "TKT-NOPE-000000"}, headers=organizer_headers)
    assert response.status_code == 404


def test_admin_can_check_in_but_not_register(client: TestClient, event, organizer_headers,
                                             admin_headers):
    attendee = _add(client, event, organizer_headers).json()
    base = f"/api/v1/events/{event.id}/attendees"

    response = client.post(f"{base}/check-in", json={"attendee_id": attendee["id"]},
                           headers=admin_headers)
    assert response.json()["success"] is True

    response = _add(client, event, admin_headers, email="admin-added@example.com")
    assert response.status_code == 403


def test_search_and_update_email_conflict(client: TestClient, event, organizer_headers):
    base = f"/api/v1/events/{event.id}/attendees"
    _add(client, event, organizer_headers)
    grace = _add(client, event, organizer_headers, name="Grace Hopper",
                 email="grace@example.com").json()

    response = client.get(f"{base}?search=grace", headers=organizer_headers)
    assert [a["name"] for a in response.json()] == ["Grace Hopper"]

    response = client.patch(f"{base}/{grace['id']}", json={"email": "ada@example.com"},
                            headers=organizer_headers)
    assert response.status_code == 409

    assert client.delete(f"{base}/{grace['id']}", headers=organizer_headers).status_code == 204
