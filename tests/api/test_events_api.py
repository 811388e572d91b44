from fastapi.testclient import TestClient

from eventops.crud import crud_organization
from eventops.schemas.organization import OrganizationCreate

from tests.utils.event import create_random_event


def test_create_event_api(client: TestClient, organizer, organizer_headers):
    request_data = {
        "title": "API Test Event",
        "start_date": "2030-10-26T10:00:00Z",
        "end_date": "2030-10-28T18:00:00Z",
        "budget": 250000,
    }
    response = client.post("/api/v1/events", json=request_data, headers=organizer_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "API Test Event"
    assert data["owner_id"] == organizer.id
    assert data["status"] == "draft"
    assert data["id"].startswith("evt_")


def test_create_event_requires_auth(client: TestClient):
    response = client.post("/api/v1/events", json={"title": "Nope"})
    assert response.status_code == 401


def test_list_events_only_returns_own(client: TestClient, db_session, organizer,
                                      other_organizer, organizer_headers):
    create_random_event(db_session, owner_id=organizer.id, title="Event 1")
    create_random_event(db_session, owner_id=organizer.id, title="Event 2", status="active")
    create_random_event(db_session, owner_id=other_organizer.id, title="Other Event")

    response = client.get("/api/v1/events", headers=organizer_headers)

    assert response.status_code == 200
    data = response.json()
    assert len(data["data"]) == 2
    assert data["pagination"]["totalItems"] == 2
    assert data["pagination"]["totalPages"] == 1

    response = client.get("/api/v1/events?status=active", headers=organizer_headers)
    assert [e["title"] for e in response.json()["data"]] == ["Event 2"]

    response = client.get("/api/v1/events?search=event%201", headers=organizer_headers)
    assert [e["title"] for e in response.json()["data"]] == ["Event 1"]


def test_get_event_access(client: TestClient, db_session, organizer, organizer_headers,
                          other_headers, admin_headers):
    event = create_random_event(db_session, owner_id=organizer.id)

    assert client.get(f"/api/v1/events/{event.id}", headers=organizer_headers).status_code == 200
    assert client.get(f"/api/v1/events/{event.id}", headers=admin_headers).status_code == 200

    response = client.get(f"/api/v1/events/{event.id}", headers=other_headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Not authorized to access this event"

    response = client.get("/api/v1/events/evt_missing", headers=organizer_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Event not found"


def test_update_and_delete_event(client: TestClient, db_session, organizer,
                                 organizer_headers, admin_headers):
    event = create_random_event(db_session, owner_id=organizer.id)

    response = client.patch(
        f"/api/v1/events/{event.id}", json={"status": "planning"}, headers=organizer_headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "planning"

    # Admins may view but not edit
    response = client.patch(
        f"/api/v1/events/{event.id}", json={"title": "Hijacked"}, headers=admin_headers
    )
    assert response.status_code == 403

    response = client.delete(f"/api/v1/events/{event.id}", headers=organizer_headers)
    assert response.status_code == 204
    assert client.get(f"/api/v1/events/{event.id}", headers=organizer_headers).status_code == 404


def test_upcoming_events(client: TestClient, db_session, organizer, organizer_headers):
    create_random_event(db_session, owner_id=organizer.id, title="Soon")
    create_random_event(db_session, owner_id=organizer.id, title="Cancelled", status="cancelled")

    response = client.get("/api/v1/events/upcoming", headers=organizer_headers)

    assert response.status_code == 200
    assert [e["title"] for e in response.json()] == ["Soon"]


def test_create_event_for_organization_checks_membership(
    client: TestClient, db_session, organizer, organizer_headers, other_headers
):
    org = crud_organization.organization.create_with_owner(
        db_session, obj_in=OrganizationCreate(name="Org Events"), owner_id=organizer.id
    )
    payload = {"title": "Org Event", "organization_id": org.id}

    response = client.post("/api/v1/events", json=payload, headers=other_headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Not authorized to create events for this organization"

    for _ in range(org.max_events):
        assert client.post("/api/v1/events", json=payload, headers=organizer_headers).status_code == 201

    response = client.post("/api/v1/events", json=payload, headers=organizer_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == f"Organization has reached its event limit ({org.max_events})"
