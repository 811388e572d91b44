"""
Sponsor and vendor catalogs: submission, admin review and event links.
"""
from fastapi.testclient import TestClient

from eventops.models.moderation_log import ModerationLog

from tests.utils.event import create_random_event


def _submit_sponsor(client, headers, **overrides):
    payload = {
        "name": "Acme Cloud",
        "industry": "technology",
        "description": "Cloud hosting",
        "sponsorship_tiers": ["gold", "silver"],
        "budget_min": 100000,
        "budget_max": 500000,
        "website": "https://acme.example.com",
    }
    payload.update(overrides)
    return client.post("/api/v1/sponsors", json=payload, headers=headers)


def test_sponsor_review_flow(client: TestClient, db_session, other_headers, admin_headers,
                             organizer_headers):
    submitted = _submit_sponsor(client, other_headers)
    assert submitted.status_code == 201
    sponsor_id = submitted.json()["id"]
    assert submitted.json()["status"] == "pending"

    # Pending entries are hidden from the public list and from strangers
    assert client.get("/api/v1/sponsors").json() == []
    assert client.get(f"/api/v1/sponsors/{sponsor_id}").status_code == 404
    assert client.get(f"/api/v1/sponsors/{sponsor_id}", headers=other_headers).status_code == 200

    pending = client.get("/api/v1/sponsors/admin?status=pending", headers=admin_headers)
    assert [s["id"] for s in pending.json()] == [sponsor_id]
    assert client.get("/api/v1/sponsors/admin", headers=organizer_headers).status_code == 403

    response = client.post(f"/api/v1/sponsors/{sponsor_id}/approve", json={"notes": "Looks good"},
                           headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "approved"
    assert response.json()["verified"] is True

    response = client.post(f"/api/v1/sponsors/{sponsor_id}/approve", headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Sponsor is already approved"

    assert [s["id"] for s in client.get("/api/v1/sponsors?industry=technology").json()] == [sponsor_id]
    assert client.get("/api/v1/sponsors/industries").json() == ["technology"]

    log = db_session.query(ModerationLog).filter(ModerationLog.target_id == sponsor_id).one()
    assert log.action == "approve_sponsor"
    assert log.reason == "Looks good"


def test_sponsor_budget_range_is_validated(client: TestClient, other_headers):
    response = _submit_sponsor(client, other_headers, budget_min=10, budget_max=5)
    assert response.status_code == 422


def test_reject_sponsor(client: TestClient, other_headers, admin_headers):
    sponsor_id = _submit_sponsor(client, other_headers).json()["id"]

    response = client.post(f"/api/v1/sponsors/{sponsor_id}/reject",
                           json={"reason": "Incomplete profile"}, headers=admin_headers)
    assert response.json()["status"] == "rejected"
    assert response.json()["rejection_reason"] == "Incomplete profile"

    response = client.post(f"/api/v1/sponsors/{sponsor_id}/reject", headers=admin_headers)
    assert response.json()["detail"] == "Sponsor is already rejected"


def test_event_sponsor_links(client: TestClient, db_session, organizer, organizer_headers,
                             other_headers, admin_headers):
    event = create_random_event(db_session, owner_id=organizer.id)
    sponsor_id = _submit_sponsor(client, other_headers).json()["id"]
    base = f"/api/v1/events/{event.id}/sponsors"

    # Not linkable until approved
    response = client.post(base, json={"sponsor_id": sponsor_id}, headers=organizer_headers)
    assert response.status_code == 404

    client.post(f"/api/v1/sponsors/{sponsor_id}/approve", headers=admin_headers)

    response = client.post(base, json={"sponsor_id": sponsor_id, "tier": "gold",
                                       "proposed_amount": 200000}, headers=organizer_headers)
    assert response.status_code == 201
    link = response.json()
    assert link["status"] == "inquiry"
    assert link["sponsor"]["name"] == "Acme Cloud"

    again = client.post(base, json={"sponsor_id": sponsor_id}, headers=organizer_headers)
    assert again.status_code == 200
    assert again.json()["id"] == link["id"]

    response = client.patch(f"{base}/{link['id']}", json={"status": "confirmed",
                                                         "final_amount": 180000},
                            headers=organizer_headers)
    assert response.json()["status"] == "confirmed"
    assert response.json()["final_amount"] == 180000

    response = client.patch(f"{base}/{link['id']}", json={"status": "declined"},
                            headers=other_headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Not authorized to modify this relationship"

    assert client.delete(f"{base}/{link['id']}", headers=organizer_headers).status_code == 204
    response = client.delete(f"{base}/{link['id']}", headers=organizer_headers)
    assert response.json()["detail"] == "Sponsor relationship not found"


def test_vendor_catalog(client: TestClient, db_session, organizer, organizer_headers,
                        other_headers, admin_headers):
    response = client.post(
        "/api/v1/vendors",
        json={"name": "Tasty Catering", "category": "catering", "location": "Porto",
              "price_min": 1000, "price_max": 9000},
        headers=other_headers,
    )
    assert response.status_code == 201
    vendor_id = response.json()["id"]

    client.post(f"/api/v1/vendors/{vendor_id}/approve", headers=admin_headers)
    assert client.get("/api/v1/vendors/categories").json() == ["catering"]
    assert [v["name"] for v in client.get("/api/v1/vendors?search=tasty").json()] == ["Tasty Catering"]

    event = create_random_event(db_session, owner_id=organizer.id)
    response = client.post(f"/api/v1/events/{event.id}/vendors",
                           json={"vendor_id": vendor_id, "proposed_budget": 5000},
                           headers=organizer_headers)
    assert response.status_code == 201
    assert response.json()["proposed_budget"] == 5000
