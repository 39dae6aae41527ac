"""
AI suggestion endpoints.

Both endpoints answer 200 with a best-effort body: an unreadable context, an
upstream failure or an unparseable completion all degrade to the default
shape. Only a missing API key is reported as an error.
"""

import json
import logging
from typing import TypeVar

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ValidationError

from ..domain.ai import AISuggestionService, CompletionClient
from ..domain.ai.schemas import FocusAIRequest, FocusAIResponse, InvoiceAIRequest, InvoiceAIResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["Functions"])

ContextT = TypeVar("ContextT", bound=BaseModel)


def get_completion_client() -> CompletionClient:
    return CompletionClient()


def get_ai_service(client: CompletionClient = Depends(get_completion_client)) -> AISuggestionService:
    return AISuggestionService(client)


async def read_context(request: Request, model: type[ContextT]) -> ContextT:
    raw = await request.body()
    try:
        return model.model_validate(json.loads(raw or b"{}"))
    except (ValueError, ValidationError) as e:
        logger.warning(f"⚠️ Unreadable {model.__name__}, using empty context: {e}")
        return model()


@router.post("/ai-focus-today", response_model=FocusAIResponse)
async def ai_focus_today(request: Request, service: AISuggestionService = Depends(get_ai_service)):
    ctx = await read_context(request, FocusAIRequest)
    return await service.focus_today(ctx)


@router.post("/ai-suggest-invoice", response_model=InvoiceAIResponse)
async def ai_suggest_invoice(
    request: Request, service: AISuggestionService = Depends(get_ai_service)
):
    ctx = await read_context(request, InvoiceAIRequest)
    return await service.suggest_invoice(ctx)
