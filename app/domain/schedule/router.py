"""Schedule router - week view and task ordering endpoints"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_org_id
from ...database import get_db
from ..tasks.schemas import TaskResponse
from .schemas import MoveTask, QuickTaskCreate, ReorderDay, WeekResponse
from .service import ScheduleService

router = APIRouter(prefix="/schedule", tags=["Schedule"])


def get_schedule_service(db: Session = Depends(get_db)) -> ScheduleService:
    return ScheduleService(db)


@router.get("/week", response_model=WeekResponse)
async def get_week(
    day: Optional[date] = Query(None, alias="date"),
    org_id: str = Depends(get_current_org_id),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Week (Monday to Sunday) containing ``date``, defaulting to this week"""
    return service.get_week(org_id, day or date.today())


@router.get("/tasks", response_model=list[TaskResponse])
async def get_tasks_in_range(
    start: date,
    end: date,
    org_id: str = Depends(get_current_org_id),
    service: ScheduleService = Depends(get_schedule_service),
):
    return service.get_tasks_in_range(org_id, start, end)


@router.post("/quick", response_model=TaskResponse)
async def quick_create_task(
    data: QuickTaskCreate,
    org_id: str = Depends(get_current_org_id),
    service: ScheduleService = Depends(get_schedule_service),
):
    return service.quick_create(data, org_id)


@router.post("/reorder")
async def reorder_day(
    data: ReorderDay,
    org_id: str = Depends(get_current_org_id),
    service: ScheduleService = Depends(get_schedule_service),
):
    return service.reorder_day(data, org_id)


@router.post("/move")
async def move_task(
    data: MoveTask,
    org_id: str = Depends(get_current_org_id),
    service: ScheduleService = Depends(get_schedule_service),
):
    return service.move_across_days(data, org_id)
