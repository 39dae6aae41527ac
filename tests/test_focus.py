from datetime import date, timedelta
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from app.domain.focus.service import load_dashboard
from app.models import Client, Invoice, Task


def add_invoice(db, org_id, amount, status="sent", due=None, client_id=None):
    invoice = Invoice(
        org_id=org_id, status=status, amount_total=amount, due_date=due, client_id=client_id
    )
    db.add(invoice)
    db.commit()
    return invoice


class TestFocus:
    def test_kpis(self, client, db, headers, org_id):
        today = date.today()
        add_invoice(db, org_id, 100, due=today - timedelta(days=3))
        add_invoice(db, org_id, 50.5, status="overdue", due=today - timedelta(days=1))
        add_invoice(db, org_id, 70, due=today + timedelta(days=5))
        add_invoice(db, org_id, 999, status="paid", due=today - timedelta(days=30))
        add_invoice(db, org_id, 999, status="draft")

        kpis = client.get("/focus/kpis", headers=headers).json()

        assert kpis == {"unpaidTotal": 220.5, "overdueCount": 2}

    def test_top_overdue_sorted_by_days(self, client, db, headers, org_id):
        today = date.today()
        acme = Client(org_id=org_id, name="Acme")
        db.add(acme)
        db.commit()
        add_invoice(db, org_id, 10, due=today - timedelta(days=2), client_id=acme.id)
        add_invoice(db, org_id, 20, due=today - timedelta(days=20))
        add_invoice(db, org_id, 30, due=today - timedelta(days=9))

        rows = client.get("/focus/top-overdue", params={"limit": 2}, headers=headers).json()

        assert [r["days_overdue"] for r in rows] == [20, 9]
        assert rows[0]["client_name"] == "Client"

    def test_today_excludes_done(self, client, db, headers, org_id):
        db.add_all(
            [
                Task(org_id=org_id, title="Open", due_date=date.today()),
                Task(org_id=org_id, title="Closed", due_date=date.today(), status="done"),
                Task(org_id=org_id, title="Tomorrow", due_date=date.today() + timedelta(days=1)),
            ]
        )
        db.commit()

        titles = [t["title"] for t in client.get("/focus/today", headers=headers).json()]

        assert titles == ["Open"]

    def test_toggle_done(self, client, headers, org_id):
        task_id = client.post("/tasks", json={"title": "Ship"}, headers=headers).json()["id"]

        done = client.post(f"/focus/tasks/{task_id}/toggle", json={"done": True}, headers=headers)
        undone = client.post(f"/focus/tasks/{task_id}/toggle", json={"done": False}, headers=headers)

        assert done.json()["status"] == "done"
        assert undone.json()["status"] == "todo"

    def test_week_summary(self, client, db, headers, org_id):
        db.add_all(
            [
                Task(org_id=org_id, title="One", due_date=date.today()),
                Task(org_id=org_id, title="Two", due_date=date.today(), status="done"),
                Task(org_id=org_id, title="Far", due_date=date.today() + timedelta(days=30)),
            ]
        )
        db.commit()

        assert client.get("/focus/week", headers=headers).json() == {
            "dueThisWeek": 2,
            "doneThisWeek": 1,
        }


class TestDashboard:
    def test_reads_from_database(self, client, db, headers, org_id):
        add_invoice(db, org_id, 120, due=date.today())
        db.add(Task(org_id=org_id, title="Review", due_date=date.today()))
        db.commit()

        body = client.get("/dashboard", headers=headers).json()

        assert body["source"] == "database"
        assert body["error"] is None
        assert body["data"]["unpaidTotal"] == 120
        assert [t["title"] for t in body["data"]["thisWeek"]] == ["Review"]
        assert body["data"]["thisWeek"][0]["due_date"] == date.today().isoformat()

    def test_unconfigured_serves_empty_dashboard(self, unconfigured_client, headers):
        body = unconfigured_client.get("/dashboard", headers=headers).json()

        assert body == {
            "source": "unconfigured",
            "data": {"unpaidTotal": 0.0, "thisWeek": []},
            "error": None,
        }

    def test_missing_workspace_is_reported(self, client):
        body = client.get("/dashboard", headers={"X-User-Id": "nobody"}).json()

        assert body["source"] == "error"
        assert body["error"] == {"message": "No workspace", "kind": "workspace"}

    def test_read_failure_is_reported_not_raised(self, db, org_id):
        error = OperationalError("SELECT", {}, Exception("connection reset"))
        with patch("app.domain.focus.service.FocusService.unpaid_total", side_effect=error):
            result = load_dashboard(db, "user-1")

        assert not result.ok
        assert result.source == "error"
        assert "connection reset" in result.error.message
        assert result.data is None
