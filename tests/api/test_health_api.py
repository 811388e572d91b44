from fastapi.testclient import TestClient


def test_root(client: TestClient):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"status": "EventOps service is running"}


def test_health(client: TestClient):
    response = client.get("/api/v1/health")
    assert response.json() == {"status": "healthy", "service": "eventops"}


def test_database_health(client: TestClient):
    response = client.get("/api/v1/health/db")
    assert response.status_code == 200
    assert response.json()["component"] == "database"


def test_jwks_not_published_for_shared_secret(client: TestClient):
    response = client.get("/.well-known/jwks.json")
    assert response.status_code == 404
