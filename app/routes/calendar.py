"""
Read-only ICS feed of tasks by organization.

GET /functions/ics-tasks?org=<id>&status=todo,doing (status optional)
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse, Response
from sqlalchemy.orm import Session

from ..database import get_db
from ..domain.calendar import CalendarService

router = APIRouter(prefix="/functions", tags=["Functions"])


@router.get("/ics-tasks")
async def ics_tasks(
    org: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    org = (org or "").strip()
    if not org:
        return PlainTextResponse("org required", status_code=400)

    statuses = [s.strip() for s in (status or "").split(",") if s.strip()]
    body = CalendarService(db).export_tasks_ics(org, statuses or None)
    return Response(content=body, media_type="text/calendar; charset=utf-8")
