import pytest
from fastapi.testclient import TestClient

from tests.utils.event import create_random_event


@pytest.fixture
def event(db_session, organizer):
    return create_random_event(db_session, owner_id=organizer.id)


def _create(client, headers, **overrides):
    payload = {"code": "early-bird", "discount_type": "percentage", "discount_value": 20}
    payload.update(overrides)
    return client.post("/api/v1/promo-codes", json=payload, headers=headers)


def test_create_normalizes_code(client: TestClient, event, organizer_headers):
    response = _create(client, organizer_headers, event_id=event.id, max_uses=10)

    assert response.status_code == 201
    data = response.json()
    assert data["code"] == "EARLY-BIRD"
    assert data["discount_formatted"] == "20%"
    assert data["remaining_uses"] == 10


@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"discount_value": 0}, "Percentage discount must be between 1 and 100"),
        ({"discount_value": 101}, "Percentage discount must be between 1 and 100"),
        ({"discount_type": "fixed", "discount_value": 0}, "Fixed discount must be greater than 0"),
        ({"code": "   "}, "Promo code cannot be empty"),
        ({"code": "SAVE 20!"},
         "Promo code can only contain letters, numbers, hyphens, and underscores"),
    ],
)
def test_create_rejects_bad_input(client: TestClient, organizer_headers, overrides, message):
    response = _create(client, organizer_headers, **overrides)
    assert response.status_code == 400
    assert response.json()["detail"] == message


def test_duplicate_code_and_foreign_event(client: TestClient, event, organizer_headers,
                                          other_headers):
    assert _create(client, organizer_headers).status_code == 201

    response = _create(client, organizer_headers, code="EARLY-BIRD")
    assert response.status_code == 409

    response = _create(client, other_headers, event_id=event.id)
    assert response.status_code == 403
    assert response.json()["detail"] == "Not authorized to create promo codes for this event"


def test_validate_is_public(client: TestClient, event, organizer_headers):
    _create(client, organizer_headers, event_id=event.id, min_order_amount=1000)

    response = client.post(
        "/api/v1/promo-codes/validate",
        json={"code": "early-bird", "event_id": event.id, "order_amount": 500},
    )
    assert response.status_code == 200
    assert response.json()["valid"] is False
    assert response.json()["error"] == "Minimum order amount is $10.00 for this promo code"

    response = client.post(
        "/api/v1/promo-codes/validate",
        json={"code": "early-bird", "event_id": event.id, "order_amount": 5000},
    )
    assert response.json()["valid"] is True
    assert response.json()["discount_amount"] == 1000


def test_redeem_enforces_per_email_limit(client: TestClient, event, organizer_headers):
    promo = _create(client, organizer_headers, discount_type="fixed", discount_value=1500,
                    max_uses_per_email=1).json()
    url = f"/api/v1/promo-codes/{promo['id']}/redeem"

    response = client.post(url, json={"order_id": "ord_1", "order_amount": 1000,
                                      "buyer_email": "Buyer@Example.com"},
                           headers=organizer_headers)
    assert response.status_code == 201
    assert response.json()["discount_applied"] == 1000
    assert response.json()["buyer_email"] == "buyer@example.com"

    response = client.post(url, json={"order_id": "ord_2", "order_amount": 1000,
                                      "buyer_email": "buyer@example.com"},
                           headers=organizer_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "You have already used this promo code"

    usages = client.get(f"/api/v1/promo-codes/{promo['id']}/usages", headers=organizer_headers)
    assert len(usages.json()) == 1

    # Used codes can only be deactivated
    response = client.delete(f"/api/v1/promo-codes/{promo['id']}", headers=organizer_headers)
    assert response.status_code == 400
    response = client.patch(f"/api/v1/promo-codes/{promo['id']}", json={"is_active": False},
                            headers=organizer_headers)
    assert response.json()["is_active"] is False


def test_owner_only_access(client: TestClient, organizer_headers, other_headers):
    promo = _create(client, organizer_headers).json()

    response = client.get(f"/api/v1/promo-codes/{promo['id']}", headers=other_headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Not authorized"

    response = client.get("/api/v1/promo-codes/promo_missing", headers=organizer_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Promo code not found"

    assert client.get("/api/v1/promo-codes", headers=other_headers).json() == []

    response = client.delete(f"/api/v1/promo-codes/{promo['id']}", headers=organizer_headers)
    assert response.status_code == 204


def test_update_rechecks_bounds_when_type_changes(client: TestClient, organizer_headers):
    promo = _create(client, organizer_headers, discount_type="fixed",
                    discount_value=5000).json()
    url = f"/api/v1/promo-codes/{promo['id']}"

    response = client.patch(url, json={"discount_type": "percentage"},
                            headers=organizer_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Percentage discount must be between 1 and 100"

    response = client.patch(url, json={"discount_type": "percentage", "discount_value": 50},
                            headers=organizer_headers)
    assert response.status_code == 200
    assert response.json()["discount_formatted"] == "50%"


def test_update_ignores_null_for_required_fields(client: TestClient, organizer_headers):
    promo = _create(client, organizer_headers, description="Launch week").json()
    url = f"/api/v1/promo-codes/{promo['id']}"

    response = client.patch(
        url,
        json={"discount_value": None, "code": None, "is_active": None, "description": None},
        headers=organizer_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["discount_value"] == 20
    assert data["code"] == "EARLY-BIRD"
    assert data["is_active"] is True
    assert data["description"] is None
