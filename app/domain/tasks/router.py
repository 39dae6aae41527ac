"""Task router - FastAPI endpoints for task operations"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_org_id
from ...database import get_db
from .schemas import TaskCreate, TaskResponse, TaskUpdate
from .service import TaskService

router = APIRouter(prefix="/tasks", tags=["Tasks"])


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    """Dependency injection for TaskService"""
    return TaskService(db)


@router.get("", response_model=list[TaskResponse])
async def get_tasks(
    org_id: str = Depends(get_current_org_id),
    service: TaskService = Depends(get_task_service),
):
    return service.get_tasks(org_id)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    org_id: str = Depends(get_current_org_id),
    service: TaskService = Depends(get_task_service),
):
    return service.get_task(task_id, org_id)


@router.post("", response_model=TaskResponse)
async def create_task(
    data: TaskCreate,
    org_id: str = Depends(get_current_org_id),
    service: TaskService = Depends(get_task_service),
):
    return service.create_task(data, org_id)


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    data: TaskUpdate,
    org_id: str = Depends(get_current_org_id),
    service: TaskService = Depends(get_task_service),
):
    return service.update_task(task_id, data, org_id)


@router.delete("/{task_id}")
async def delete_task(
    task_id: str,
    org_id: str = Depends(get_current_org_id),
    service: TaskService = Depends(get_task_service),
):
    return service.delete_task(task_id, org_id)
