from datetime import date, timedelta
from unittest.mock import patch

import httpx
from sqlalchemy.exc import OperationalError

from app.domain.recurrence import RecurrenceService
from app.models import Task


def add_seed(db, org_id, **overrides):
    fields = {
        "org_id": org_id,
        "title": "Send timesheet",
        "priority": "low",
        "due_date": date.today(),
        "recur_rule": "WEEKLY",
        "recur_interval": 1,
        "recur_count": 3,
    }
    fields.update(overrides)
    seed = Task(**fields)
    db.add(seed)
    db.commit()
    return seed


def generated(db, org_id):
    return (
        db.query(Task)
        .filter(Task.org_id == org_id, Task.recur_rule.is_(None))
        .order_by(Task.due_date)
        .all()
    )


class TestRecurrenceService:
    def test_inserts_generated_rows(self, db, org_id):
        add_seed(db, org_id, due_date=date(2024, 1, 1))

        result = RecurrenceService(db).materialize(today=date(2024, 1, 1))

        assert result.count == 3
        rows = generated(db, org_id)
        assert [r.due_date for r in rows] == [date(2024, 1, 8), date(2024, 1, 15), date(2024, 1, 22)]
        assert {(r.status, r.position, r.priority) for r in rows} == {("todo", 0, "low")}

    def test_runs_without_tracking_duplicate(self, db, org_id):
        add_seed(db, org_id, due_date=date(2024, 1, 1))
        service = RecurrenceService(db)

        service.materialize(today=date(2024, 1, 1))
        service.materialize(today=date(2024, 1, 1))

        assert len(generated(db, org_id)) == 6

    def test_high_water_makes_reruns_idempotent(self, db, org_id):
        seed = add_seed(db, org_id, due_date=date(2024, 1, 1))
        service = RecurrenceService(db, track_high_water=True)

        assert service.materialize(today=date(2024, 1, 1)).count == 3
        assert service.materialize(today=date(2024, 1, 1)).count == 0

        db.refresh(seed)
        assert seed.recur_materialized_until == date(2024, 1, 22)
        assert len(generated(db, org_id)) == 3

    def test_org_scope(self, db, org_id):
        add_seed(db, org_id)
        add_seed(db, "other-org")

        result = RecurrenceService(db).materialize(org_id="other-org")

        assert {i.org_id for i in result.instances} == {"other-org"}
        assert generated(db, org_id) == []


class TestMaterializeEndpoint:
    def test_returns_created_count(self, client, db, org_id):
        add_seed(db, org_id)

        response = client.post("/functions/materialize-recurrence")

        assert response.status_code == 200
        assert response.json() == {"created": 3}
        dates = [r.due_date for r in generated(db, org_id)]
        assert dates == [date.today() + timedelta(days=7 * n) for n in (1, 2, 3)]

    def test_org_in_body_limits_scope(self, client, db, org_id):
        add_seed(db, org_id)
        add_seed(db, "other-org", recur_count=2)

        response = client.post("/functions/materialize-recurrence", json={"org": "other-org"})

        assert response.json() == {"created": 2}

    def test_invalid_body_means_all_orgs(self, client, db, org_id):
        add_seed(db, org_id)
        add_seed(db, "other-org", recur_count=2)

        response = client.post(
            "/functions/materialize-recurrence",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.json() == {"created": 5}

    def test_far_future_seed_does_not_abort_the_run(self, client, db, org_id):
        add_seed(db, org_id, due_date=date(9999, 12, 28))
        add_seed(db, org_id)

        response = client.post("/functions/materialize-recurrence")

        assert response.status_code == 200
        assert response.json() == {"created": 3}

    def test_nothing_to_do(self, client):
        assert client.post("/functions/materialize-recurrence", json={}).json() == {"created": 0}

    def test_read_failure_is_500_with_message(self, client):
        error = OperationalError("SELECT", {}, Exception("database is locked"))
        with patch(
            "app.domain.recurrence.service.RecurrenceRepository.get_seeds", side_effect=error
        ):
            response = client.post("/functions/materialize-recurrence")

        assert response.status_code == 500
        assert "database is locked" in response.text

    def test_unconfigured_database_is_500(self, unconfigured_client):
        response = unconfigured_client.post("/functions/materialize-recurrence")

        assert response.status_code == 500
        assert response.text == "Server keys missing"


class TestMaterializeCron:
    def _patched_client(self, handler):
        real_client = httpx.AsyncClient

        def factory(*args, **kwargs):
            return real_client(transport=httpx.MockTransport(handler))

        return patch("app.routes.materialize.httpx.AsyncClient", side_effect=factory)

    def test_forwards_to_materialize_endpoint(self, client):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"created": 4})

        with self._patched_client(handler):
            response = client.get("/functions/materialize-cron")

        assert response.status_code == 200
        assert '"created"' in response.text
        assert seen[0].method == "POST"
        assert seen[0].url.path == "/functions/materialize-recurrence"

    def test_transport_failure_is_500(self, client):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with self._patched_client(handler):
            response = client.get("/functions/materialize-cron")

        assert response.status_code == 500
        assert "connection refused" in response.text
