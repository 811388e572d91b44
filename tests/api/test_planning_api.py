"""
Tasks, budget items and notes share the same event-scoped access rules.
"""
import pytest
from fastapi.testclient import TestClient

from tests.utils.event import create_random_event


@pytest.fixture
def event(db_session, organizer):
    return create_random_event(db_session, owner_id=organizer.id, budget=100000)


class TestTasks:
    def test_create_list_and_toggle(self, client: TestClient, event, organizer_headers):
        base = f"/api/v1/events/{event.id}/tasks"

        low = client.post(base, json={"title": "Order swag", "priority": "low"},
                          headers=organizer_headers)
        urgent = client.post(base, json={"title": "Sign venue", "priority": "urgent"},
                             headers=organizer_headers)
        assert low.status_code == 201
        assert urgent.json()["sort_order"] == 2

        response = client.get(base, headers=organizer_headers)
        assert [t["title"] for t in response.json()] == ["Order swag", "Sign venue"]

        task_id = urgent.json()["id"]
        toggled = client.post(f"{base}/{task_id}/toggle", headers=organizer_headers)
        assert toggled.json()["status"] == "completed"
        assert toggled.json()["completed_at"] is not None

        response = client.get(f"{base}?status=completed", headers=organizer_headers)
        assert [t["id"] for t in response.json()] == [task_id]

        summary = client.get(f"{base}/summary", headers=organizer_headers).json()
        assert summary["total"] == 2
        assert summary["completed"] == 1
        assert summary["completion_rate"] == 50

    def test_template_and_reorder(self, client: TestClient, event, organizer_headers):
        base = f"/api/v1/events/{event.id}/tasks"

        response = client.post(f"{base}/template", json={"template": "workshop"},
                               headers=organizer_headers)
        assert response.status_code == 201
        tasks = response.json()
        assert len(tasks) == 7

        reversed_ids = [t["id"] for t in reversed(tasks)]
        response = client.post(f"{base}/reorder", json={"task_ids": reversed_ids},
                               headers=organizer_headers)
        assert [t["id"] for t in response.json()] == reversed_ids

    def test_update_delete_and_missing(self, client: TestClient, event, organizer_headers):
        base = f"/api/v1/events/{event.id}/tasks"
        task = client.post(base, json={"title": "Draft agenda"}, headers=organizer_headers).json()

        response = client.patch(f"{base}/{task['id']}", json={"status": "blocked"},
                                headers=organizer_headers)
        assert response.json()["status"] == "blocked"

        assert client.delete(f"{base}/{task['id']}", headers=organizer_headers).status_code == 204

        response = client.patch(f"{base}/{task['id']}", json={"title": "Gone"},
                                headers=organizer_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Task not found"

    def test_other_organizer_is_forbidden(self, client: TestClient, event, other_headers):
        response = client.get(f"/api/v1/events/{event.id}/tasks", headers=other_headers)
        assert response.status_code == 403


class TestBudget:
    def test_budget_flow(self, client: TestClient, event, organizer_headers):
        base = f"/api/v1/events/{event.id}/budget"

        venue = client.post(base, json={"category": "venue", "name": "Hall",
                                        "estimated_amount": 60000}, headers=organizer_headers)
        food = client.post(base, json={"category": "catering", "name": "Lunch",
                                       "estimated_amount": 20000}, headers=organizer_headers)
        assert venue.status_code == 201

        response = client.patch(f"{base}/{venue.json()['id']}",
                                json={"status": "paid", "actual_amount": 66000},
                                headers=organizer_headers)
        assert response.json()["paid_at"] is not None

        response = client.post(f"{base}/bulk-status",
                               json={"item_ids": [food.json()["id"]], "status": "committed"},
                               headers=organizer_headers)
        assert response.json() == {"updated": 1}

        summary = client.get(f"{base}/summary", headers=organizer_headers).json()
        assert summary["total_estimated"] == 80000
        assert summary["total_paid"] == 66000
        assert summary["total_committed"] == 20000
        assert summary["variance_percent"] == pytest.approx(-17.5)
        assert summary["remaining"] == 20000

        response = client.get(f"{base}?category=catering", headers=organizer_headers)
        assert [i["name"] for i in response.json()] == ["Lunch"]

        assert client.delete(f"{base}/{food.json()['id']}",
                             headers=organizer_headers).status_code == 204
        response = client.delete(f"{base}/{food.json()['id']}", headers=organizer_headers)
        assert response.json()["detail"] == "Budget item not found"


class TestNotes:
    def test_pinned_notes_come_first(self, client: TestClient, event, organizer,
                                     organizer_headers):
        base = f"/api/v1/events/{event.id}/notes"

        client.post(base, json={"content": "Regular note"}, headers=organizer_headers)
        pinned = client.post(base, json={"content": "Important", "is_pinned": True},
                             headers=organizer_headers)
        assert pinned.json()["author_id"] == organizer.id

        response = client.get(base, headers=organizer_headers)
        assert [n["content"] for n in response.json()] == ["Important", "Regular note"]

        note_id = pinned.json()["id"]
        response = client.patch(f"{base}/{note_id}", json={"is_pinned": False},
                                headers=organizer_headers)
        assert response.json()["is_pinned"] is False

        assert client.delete(f"{base}/{note_id}", headers=organizer_headers).status_code == 204
        response = client.delete(f"{base}/{note_id}", headers=organizer_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Note not found"
