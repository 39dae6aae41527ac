"""Focus router - today's priorities and the dashboard summary"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ...auth import get_current_org_id, get_current_user_id
from ...database import get_db, get_session_factory
from ..tasks.schemas import TaskResponse
from ..tasks.service import TaskService
from .service import FocusService, load_dashboard

router = APIRouter(tags=["Focus"])


class ToggleDone(BaseModel):
    done: bool


class OverdueResponse(BaseModel):
    id: str
    client_id: Optional[str] = None
    client_name: str
    amount_total: float
    due_date: date
    days_overdue: int
    status: str


def get_focus_service(db: Session = Depends(get_db)) -> FocusService:
    return FocusService(db)


@router.get("/focus/kpis")
async def get_kpis(
    org_id: str = Depends(get_current_org_id),
    service: FocusService = Depends(get_focus_service),
):
    return service.get_kpis(org_id)


@router.get("/focus/top-overdue", response_model=list[OverdueResponse])
async def get_top_overdue(
    limit: int = Query(3, ge=1, le=50),
    org_id: str = Depends(get_current_org_id),
    service: FocusService = Depends(get_focus_service),
):
    return [vars(o) for o in service.get_top_overdue(org_id, limit)]


@router.get("/focus/today", response_model=list[TaskResponse])
async def get_today_tasks(
    org_id: str = Depends(get_current_org_id),
    service: FocusService = Depends(get_focus_service),
):
    return service.get_today_tasks(org_id)


@router.get("/focus/week")
async def get_week_summary(
    org_id: str = Depends(get_current_org_id),
    service: FocusService = Depends(get_focus_service),
):
    return service.get_week_summary(org_id)


@router.post("/focus/tasks/{task_id}/toggle", response_model=TaskResponse)
async def toggle_task_done(
    task_id: str,
    data: ToggleDone,
    org_id: str = Depends(get_current_org_id),
    db: Session = Depends(get_db),
):
    return TaskService(db).set_done(task_id, data.done, org_id)


@router.get("/dashboard")
async def get_dashboard(request: Request, user_id: str = Depends(get_current_user_id)):
    """Unpaid total and this week's tasks; works without a configured database"""
    session_factory = get_session_factory(request)
    if session_factory is None:
        return load_dashboard(None, user_id).as_dict()

    db = session_factory()
    try:
        return load_dashboard(db, user_id).as_dict()
    finally:
        db.close()
