import json
from unittest.mock import AsyncMock

import httpx
import pytest

from app.domain.ai import CompletionClient
from app.domain.ai.schemas import FocusAIRequest, InvoiceAIRequest
from app.domain.ai.service import build_focus_prompt, build_invoice_prompt
from app.exceptions import ConfigurationError
from app.routes.ai import get_completion_client


def completion(content):
    return {"choices": [{"message": {"content": content}}]}


@pytest.fixture()
def completion_client(app):
    """A CompletionClient whose HTTP call is replaced by an AsyncMock."""
    fake = CompletionClient(api_key="test-key")
    fake.complete = AsyncMock()
    app.dependency_overrides[get_completion_client] = lambda: fake
    yield fake
    app.dependency_overrides.clear()


FOCUS_CONTEXT = {
    "kpis": {"unpaidTotal": 1250.5, "overdueCount": 2},
    "todayTasks": [{"title": "Draft proposal", "priority": "high", "status": "todo"}],
    "topOverdue": [{"client_name": "Acme", "amount_total": 900, "days_overdue": 12}],
}


class TestFocusToday:
    def test_returns_model_plan(self, client, completion_client):
        plan = {
            "headline": "Chase Acme first",
            "top_actions": [
                {"label": "Email Acme", "why": "12 days overdue", "nav": "invoices"},
                {"label": "Draft proposal", "why": "Due today", "nav": "tasks"},
            ],
            "followups": ["Check bank on Friday"],
        }
        completion_client.complete.return_value = completion(json.dumps(plan))

        response = client.post("/functions/ai-focus-today", json=FOCUS_CONTEXT)

        assert response.status_code == 200
        assert response.json() == plan
        prompt = completion_client.complete.call_args.args[0]
        assert "Unpaid total: 1250.5" in prompt
        assert "Acme 900 (12d)" in prompt

    def test_unparseable_content_falls_back(self, client, completion_client):
        completion_client.complete.return_value = completion("Sure! Here is your plan")

        response = client.post("/functions/ai-focus-today", json=FOCUS_CONTEXT)

        assert response.status_code == 200
        assert response.json() == {"headline": "Today's Focus", "top_actions": [], "followups": []}

    def test_non_array_fields_are_coerced(self, client, completion_client):
        completion_client.complete.return_value = completion(
            json.dumps({"headline": "Go", "top_actions": "none", "followups": None})
        )

        body = client.post("/functions/ai-focus-today", json=FOCUS_CONTEXT).json()

        assert body == {"headline": "Go", "top_actions": [], "followups": []}

    def test_malformed_action_is_dropped_not_the_plan(self, client, completion_client):
        plan = {
            "headline": "Chase Acme first",
            "top_actions": [
                {"label": "Email Acme", "why": "Overdue", "nav": "invoices"},
                {"label": "Check CRM", "why": "Stale", "nav": "crm"},
                "call the bank",
            ],
            "followups": ["Friday review", 42],
        }
        completion_client.complete.return_value = completion(json.dumps(plan))

        body = client.post("/functions/ai-focus-today", json=FOCUS_CONTEXT).json()

        assert body["headline"] == "Chase Acme first"
        assert body["top_actions"] == [{"label": "Email Acme", "why": "Overdue", "nav": "invoices"}]
        assert body["followups"] == ["Friday review"]

    def test_upstream_failure_falls_back(self, client, completion_client):
        completion_client.complete.side_effect = httpx.ConnectTimeout("timed out")

        response = client.post("/functions/ai-focus-today", json=FOCUS_CONTEXT)

        assert response.status_code == 200
        assert response.json()["headline"] == "Today's Focus"

    def test_error_body_without_choices_falls_back(self, client, completion_client):
        completion_client.complete.return_value = {"error": {"message": "rate limited"}}

        response = client.post("/functions/ai-focus-today", json=FOCUS_CONTEXT)

        assert response.json()["top_actions"] == []

    def test_unreadable_context_still_answers(self, client, completion_client):
        completion_client.complete.return_value = completion('{"headline": "Rest"}')

        response = client.post(
            "/functions/ai-focus-today",
            content=b"{{{",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        assert response.json()["headline"] == "Rest"


class TestSuggestInvoice:
    CONTEXT = {
        "clientName": "Acme",
        "previousItems": [{"description": "Design sprint", "unit_price": 200}],
        "recentTasks": [{"title": "Landing page"}],
        "currency": "EUR",
    }

    def test_returns_suggestion(self, client, completion_client):
        suggestion = {
            "due_in_days": 30,
            "items": [{"description": "Landing page", "quantity": 2, "unit_price": 200}],
            "notes": "Thanks!",
        }
        completion_client.complete.return_value = completion(json.dumps(suggestion))

        body = client.post("/functions/ai-suggest-invoice", json=self.CONTEXT).json()

        assert body["due_in_days"] == 30
        assert body["items"] == [{"description": "Landing page", "quantity": 2.0, "unit_price": 200.0}]
        assert body["notes"] == "Thanks!"

    def test_missing_fields_get_defaults(self, client, completion_client):
        completion_client.complete.return_value = completion(json.dumps({"due_in_days": "soon"}))

        body = client.post("/functions/ai-suggest-invoice", json=self.CONTEXT).json()

        assert body == {"due_in_days": 14, "items": [], "notes": ""}

    def test_bad_item_is_dropped_and_due_days_rounded(self, client, completion_client):
        suggestion = {
            "due_in_days": 20.6,
            "items": [
                {"description": "Landing page", "quantity": 1, "unit_price": 400},
                {"quantity": 3},
            ],
            "notes": "Net 21",
        }
        completion_client.complete.return_value = completion(json.dumps(suggestion))

        body = client.post("/functions/ai-suggest-invoice", json=self.CONTEXT).json()

        assert body == {
            "due_in_days": 21,
            "items": [{"description": "Landing page", "quantity": 1.0, "unit_price": 400.0}],
            "notes": "Net 21",
        }

    def test_empty_content_falls_back(self, client, completion_client):
        completion_client.complete.return_value = completion("")

        body = client.post("/functions/ai-suggest-invoice", json=self.CONTEXT).json()

        assert body == {"due_in_days": 14, "items": [], "notes": ""}


class TestConfiguration:
    def test_missing_key_raises(self):
        with pytest.raises(ConfigurationError):
            CompletionClient(api_key=None)

    def test_missing_key_is_500(self, client, app):
        def unconfigured():
            raise ConfigurationError("OPENAI_API_KEY missing")

        app.dependency_overrides[get_completion_client] = unconfigured
        try:
            response = client.post("/functions/ai-focus-today", json={})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.text == "OPENAI_API_KEY missing"


class TestPrompts:
    def test_focus_prompt_handles_empty_context(self):
        prompt = build_focus_prompt(FocusAIRequest())
        assert "Top overdue: none" in prompt
        assert "Today tasks: none" in prompt

    def test_invoice_prompt_lists_previous_items(self):
        prompt = build_invoice_prompt(InvoiceAIRequest.model_validate(TestSuggestInvoice.CONTEXT))
        assert "Previous items: Design sprint:200" in prompt
        assert "Recent tasks: Landing page" in prompt
