"""
Recurrence materialization triggers.

POST /functions/materialize-recurrence   body: { "org"?: string }
GET  /functions/materialize-cron         for an external daily scheduler
"""

import json
import logging

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from ..config import MATERIALIZE_TRACK_HIGH_WATER, PUBLIC_BASE_URL
from ..database import get_db
from ..domain.recurrence import RecurrenceService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["Functions"])


def get_recurrence_service(db: Session = Depends(get_db)) -> RecurrenceService:
    return RecurrenceService(db, track_high_water=MATERIALIZE_TRACK_HIGH_WATER)


async def read_org_scope(request: Request) -> str:
    """Optional ``org`` from the JSON body; anything unreadable means all orgs"""
    raw = await request.body()
    if not raw.strip():
        return ""
    try:
        body = json.loads(raw)
    except ValueError:
        logger.warning("⚠️ Ignoring non-JSON materialize body")
        return ""
    org = body.get("org") if isinstance(body, dict) else None
    return org.strip() if isinstance(org, str) else ""


@router.post("/materialize-recurrence")
async def materialize_recurrence(
    request: Request,
    service: RecurrenceService = Depends(get_recurrence_service),
):
    """Create forward instances for tasks with a recurrence rule"""
    org = await read_org_scope(request)
    result = service.materialize(org_id=org or None)
    return {"created": result.count}


@router.get("/materialize-cron")
async def materialize_cron():
    """Run the materializer for every organization through its public endpoint"""
    url = f"{PUBLIC_BASE_URL.rstrip('/')}/functions/materialize-recurrence"
    try:
        async with httpx.AsyncClient() as client:
            response = await client.post(url, json={}, timeout=60.0)
    except httpx.HTTPError as e:
        logger.error(f"❌ Scheduled materialization failed: {e}")
        return PlainTextResponse(str(e) or e.__class__.__name__, status_code=500)

    logger.info(f"⏰ Scheduled materialization finished: HTTP {response.status_code}")
    return PlainTextResponse(response.text, status_code=200)
