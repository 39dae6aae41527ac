from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError


def create_task(client, headers, **payload):
    payload.setdefault("title", "Write brief")
    response = client.post("/tasks", json=payload, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


class TestTasks:
    def test_create_defaults(self, client, headers, org_id):
        task = create_task(client, headers, due_date="2024-05-02")

        assert task["status"] == "todo"
        assert task["priority"] == "medium"
        assert task["position"] == 0
        assert task["org_id"] == org_id
        assert task["due_date"] == "2024-05-02"

    def test_create_recurring_seed(self, client, headers, org_id):
        task = create_task(
            client, headers, recur_rule="MONTHLY", recur_interval=1, recur_count=12, due_date="2024-01-15"
        )

        assert task["recur_rule"] == "MONTHLY"
        assert task["recur_count"] == 12

    @pytest.mark.parametrize(
        "payload",
        [
            {"title": "   "},
            {"title": "x", "priority": "critical"},
            {"title": "x", "recur_rule": "DAILY"},
            {"title": "x", "recur_interval": 0},
            {"title": "x", "recur_count": -1},
        ],
    )
    def test_invalid_input_is_422(self, client, headers, org_id, payload):
        assert client.post("/tasks", json=payload, headers=headers).status_code == 422

    def test_list_orders_by_due_date_with_undated_last(self, client, headers, org_id):
        create_task(client, headers, title="Undated")
        create_task(client, headers, title="Later", due_date="2024-05-10")
        create_task(client, headers, title="Sooner", due_date="2024-05-01")

        titles = [t["title"] for t in client.get("/tasks", headers=headers).json()]

        assert titles == ["Sooner", "Later", "Undated"]

    def test_update(self, client, headers, org_id):
        task = create_task(client, headers)

        response = client.patch(
            f"/tasks/{task['id']}", json={"status": "doing", "priority": "urgent"}, headers=headers
        )

        assert response.json()["status"] == "doing"
        assert response.json()["priority"] == "urgent"

    @pytest.mark.parametrize("payload", [{"title": ""}, {"status": None}, {"position": None}])
    def test_update_rejects_blank_required_fields(self, client, headers, org_id, payload):
        task = create_task(client, headers)
        assert client.patch(f"/tasks/{task['id']}", json=payload, headers=headers).status_code == 400

    def test_update_rejects_unknown_status(self, client, headers, org_id):
        task = create_task(client, headers)
        response = client.patch(f"/tasks/{task['id']}", json={"status": "archived"}, headers=headers)
        assert response.status_code == 422

    def test_delete(self, client, headers, org_id):
        task = create_task(client, headers)

        assert client.delete(f"/tasks/{task['id']}", headers=headers).status_code == 200
        assert client.get(f"/tasks/{task['id']}", headers=headers).status_code == 404

    def test_requires_workspace(self, client):
        response = client.get("/tasks", headers={"X-User-Id": "nobody"})
        assert response.status_code == 403

    def test_unconfigured_database_is_500(self, unconfigured_client, headers):
        response = unconfigured_client.get("/tasks", headers=headers)

        assert response.status_code == 500
        assert response.text == "Server keys missing"

    def test_write_failure_is_500_with_message(self, client, headers, org_id):
        error = OperationalError("INSERT", {}, Exception("disk I/O error"))
        with patch("app.database.Session.commit", side_effect=error):
            response = client.post("/tasks", json={"title": "Lost"}, headers=headers)

        assert response.status_code == 500
        assert "disk I/O error" in response.text
        assert client.get("/tasks", headers=headers).json() == []
