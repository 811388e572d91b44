import pytest
from fastapi.testclient import TestClient

from eventops.main import app
from eventops.services.assistant import AssistantService, get_assistant_service

from tests.utils.assistant import FakeAnthropic, text_block, tool_use_block


@pytest.fixture
def fake_client():
    return FakeAnthropic()


@pytest.fixture
def assistant_client(client, fake_client):
    app.dependency_overrides[get_assistant_service] = lambda: AssistantService(fake_client)
    yield client
    app.dependency_overrides.pop(get_assistant_service, None)


def test_chat_without_api_key(client: TestClient, organizer_headers):
    response = client.post("/api/v1/assistant/chat", json={"message": "hello"},
                           headers=organizer_headers)
    assert response.status_code == 503
    body = response.json()
    assert body["detail"] == "AI assistant is not configured"
    assert body["error"]["service"] == "anthropic"


def test_chat_requires_auth(client: TestClient):
    response = client.post("/api/v1/assistant/chat", json={"message": "hello"})
    assert response.status_code == 401


def test_chat_confirm_and_history(assistant_client: TestClient, fake_client, organizer_headers,
                                  other_headers):
    fake_client.messages.responses = [
        [tool_use_block("tu_1", "create_event",
                        {"title": "Team Offsite", "event_type": "corporate", "start_date": "2031-03-10"})],
        [text_block("Confirm to create Team Offsite.")],
    ]

    response = assistant_client.post("/api/v1/assistant/chat",
                                     json={"message": "Plan our offsite"}, headers=organizer_headers)
    assert response.status_code == 200
    body = response.json()
    conversation_id = body["conversation_id"]
    assert body["message"] == "Confirm to create Team Offsite."
    assert body["pending_actions"][0]["tool_name"] == "create_event"

    response = assistant_client.post(
        "/api/v1/assistant/confirm",
        json={"conversation_id": conversation_id, "tool_use_id": "tu_1"},
        headers=organizer_headers,
    )
    assert response.status_code == 200
    assert response.json()["tool_results"][0]["success"] is True

    events = assistant_client.get("/api/v1/events", headers=organizer_headers).json()
    assert [e["title"] for e in events["data"]] == ["Team Offsite"]

    response = assistant_client.post(
        "/api/v1/assistant/confirm",
        json={"conversation_id": conversation_id, "tool_use_id": "tu_1"},
        headers=organizer_headers,
    )
    assert response.status_code == 409

    conversations = assistant_client.get("/api/v1/assistant/conversations",
                                         headers=organizer_headers).json()
    assert [c["id"] for c in conversations] == [conversation_id]

    # Conversations are private to their owner
    response = assistant_client.get(f"/api/v1/assistant/conversations/{conversation_id}",
                                    headers=other_headers)
    assert response.status_code == 404

    detail = assistant_client.get(f"/api/v1/assistant/conversations/{conversation_id}",
                                  headers=organizer_headers).json()
    assert detail["messages"][-1]["role"] == "assistant"

    response = assistant_client.delete(f"/api/v1/assistant/conversations/{conversation_id}",
                                       headers=organizer_headers)
    assert response.status_code == 204
    assert assistant_client.get("/api/v1/assistant/conversations",
                                headers=organizer_headers).json() == []
