"""AI suggestion service - prompt building and best-effort parsing"""

import logging
import math
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .client import CompletionClient
from .schemas import (
    FocusAction,
    FocusAIRequest,
    FocusAIResponse,
    InvoiceAIRequest,
    InvoiceAIResponse,
    SuggestedItem,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def build_focus_prompt(ctx: FocusAIRequest) -> str:
    top_overdue = "; ".join(
        f"{o.client_name} {o.amount_total:g} ({o.days_overdue}d)" for o in ctx.topOverdue
    )
    today_tasks = "; ".join(f"{t.title} [{t.priority}/{t.status}]" for t in ctx.todayTasks)
    return f"""
You are a productivity coach for a freelancer. Return a terse JSON plan (no prose) that prioritizes cash and commitments.
Context:
- Unpaid total: {ctx.kpis.unpaidTotal:g}
- Overdue count: {ctx.kpis.overdueCount}
- Top overdue: {top_overdue or "none"}
- Today tasks: {today_tasks or "none"}

Return ONLY JSON in this shape:
{{
  "headline": string,
  "top_actions": [
    {{ "label": string, "why": string, "nav": "invoices" | "schedule" | "leads" | "tasks" }}
  ],
  "followups": string[]
}}
- 3 to 4 top_actions max.
- Prefer actions that move money (overdue follow-ups) then time commitments (today's tasks).
- Keep each 'why' under 18 words.
""".strip()


def build_invoice_prompt(ctx: InvoiceAIRequest) -> str:
    previous = ", ".join(f"{i.description}:{i.unit_price:g}" for i in ctx.previousItems)
    recent = ", ".join(t.title for t in ctx.recentTasks)
    return f"""
Return ONLY JSON:
{{ "due_in_days": number,
  "items":[{{"description":string,"quantity":number,"unit_price":number}}],
  "notes": string }}
Client: {ctx.clientName}
Previous items: {previous}
Recent tasks: {recent or "none"}
Currency: {ctx.currency}
""".strip()


def valid_entries(values: Any, model: type[ModelT], kind: str) -> list[ModelT]:
    """Entries of ``values`` that validate as ``model``; the rest are dropped"""
    if not isinstance(values, list):
        return []
    entries = []
    for value in values:
        try:
            entries.append(model.model_validate(value))
        except ValidationError as e:
            logger.warning(f"⚠️ Dropping malformed AI {kind}: {e.errors()[0]['msg']}")
    return entries


class AISuggestionService:
    """Wraps the completion client; every failure degrades to a default shape"""

    def __init__(self, client: CompletionClient):
        self.client = client

    async def _fetch_json(self, prompt: str, kind: str):
        try:
            return await self.client.complete_json(prompt)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"⚠️ AI {kind} suggestion unavailable, using default: {e}")
            return None

    async def focus_today(self, ctx: FocusAIRequest) -> FocusAIResponse:
        data = await self._fetch_json(build_focus_prompt(ctx), "focus")
        if not isinstance(data, dict):
            return FocusAIResponse()

        followups = data.get("followups")
        plan = FocusAIResponse(
            top_actions=valid_entries(data.get("top_actions"), FocusAction, "action"),
            followups=[f for f in followups if isinstance(f, str)] if isinstance(followups, list) else [],
        )
        headline = data.get("headline")
        if isinstance(headline, str) and headline.strip():
            plan.headline = headline
        return plan

    async def suggest_invoice(self, ctx: InvoiceAIRequest) -> InvoiceAIResponse:
        data = await self._fetch_json(build_invoice_prompt(ctx), "invoice")
        if not isinstance(data, dict):
            return InvoiceAIResponse()

        suggestion = InvoiceAIResponse(
            items=valid_entries(data.get("items"), SuggestedItem, "invoice item"),
        )
        due_in_days = data.get("due_in_days")
        if isinstance(due_in_days, (int, float)) and not isinstance(due_in_days, bool):
            if math.isfinite(due_in_days):
                suggestion.due_in_days = round(due_in_days)
        if isinstance(data.get("notes"), str):
            suggestion.notes = data["notes"]
        return suggestion
