"""
Tests for the HTTP API client, using httpx's mock transport.
"""

import json

import httpx
import pytest

from eventops.client import ApiError, EventOpsClient, MutationFailedError, NetworkError


def make_client(handler, **kwargs) -> EventOpsClient:
    return EventOpsClient(
        "http://testserver",
        token="token-123",
        transport=httpx.MockTransport(handler),
        sleep=lambda _: None,
        **kwargs,
    )


def test_request_sends_bearer_token_and_parses_json():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == "Bearer token-123"
        assert request.url.path == "/api/v1/events/evt_1"
        return httpx.Response(200, json={"id": "evt_1"})

    with make_client(handler) as client:
        assert client.get_event("evt_1") == {"id": "evt_1"}


def test_error_status_raises_api_error_with_detail():
    def handler(request):
        return httpx.Response(404, json={"detail": "Event not found"})

    with make_client(handler) as client:
        with pytest.raises(ApiError) as exc_info:
            client.get_event("evt_missing")

    assert exc_info.value.status_code == 404
    assert str(exc_info.value) == "Event not found"


def test_validation_errors_are_summarised():
    def handler(request):
        return httpx.Response(422, json={"detail": [{"msg": "field required"}]})

    with make_client(handler) as client:
        with pytest.raises(ApiError) as exc_info:
            client.request("POST", "/api/v1/events", json={})

    assert str(exc_info.value) == "Validation error: field required"


def test_mutation_retries_connection_errors():
    calls = {"count": 0}

    def handler(request):
        calls["count"] += 1
        if calls["count"] < 3:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(201, json={"id": "evt_new", **json.loads(request.content)})

    with make_client(handler) as client:
        created = client.create_event({"title": "Launch"})

    assert calls["count"] == 3
    assert created == {"id": "evt_new", "title": "Launch"}


def test_mutation_does_not_retry_rejections():
    calls = {"count": 0}

    def handler(request):
        calls["count"] += 1
        return httpx.Response(403, json={"detail": "Not authorized to access this event"})

    with make_client(handler) as client:
        with pytest.raises(MutationFailedError) as exc_info:
            client.update_event("evt_1", {"title": "New"})

    assert calls["count"] == 1
    assert isinstance(exc_info.value.last_error, ApiError)


def test_reads_surface_network_errors():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with make_client(handler) as client:
        with pytest.raises(NetworkError):
            client.me()


def test_login_stores_token():
    def handler(request):
        return httpx.Response(
            200, json={"access_token": "fresh", "token_type": "bearer", "user": {}}
        )

    client = make_client(handler)
    client.login("user@example.com", "secret-password")
    assert client.token == "fresh"
    client.close()


def test_delete_with_no_content_returns_none():
    def handler(request):
        return httpx.Response(204)

    with make_client(handler) as client:
        assert client.request("DELETE", "/api/v1/events/evt_1") is None
