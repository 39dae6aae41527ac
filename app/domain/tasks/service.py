"""Task service - Business logic for task operations"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Task
from ..projects.service import ProjectService
from .repository import TaskRepository
from .schemas import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


class TaskService:
    """Service layer for task business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = TaskRepository()
        self.projects = ProjectService(db)

    def get_tasks(self, org_id: str) -> list[Task]:
        return self.repo.get_tasks(self.db, org_id)

    def get_task(self, task_id: str, org_id: str) -> Task:
        task = self.repo.get_task_by_id(self.db, task_id, org_id)
        if not task:
            raise HTTPException(status_code=404, detail="Task not found")
        return task

    def create_task(self, data: TaskCreate, org_id: str) -> Task:
        self.projects.check_project(data.project_id, org_id)
        task_data = data.model_dump()
        task_data.update(status="todo", position=0)
        task = self.repo.create_task(self.db, org_id, **task_data)
        logger.info(f"📝 Created task {task.id} in org {org_id}")
        return task

    def update_task(self, task_id: str, data: TaskUpdate, org_id: str) -> Task:
        task = self.get_task(task_id, org_id)
        updates = data.model_dump(exclude_unset=True)

        if "title" in updates and not (updates["title"] or "").strip():
            raise HTTPException(status_code=400, detail="Title cannot be empty")
        for required in ("status", "priority", "position"):
            if required in updates and updates[required] is None:
                raise HTTPException(status_code=400, detail=f"{required} cannot be null")
        if "project_id" in updates:
            self.projects.check_project(updates["project_id"], org_id)

        return self.repo.update_task(self.db, task, **updates)

    def set_done(self, task_id: str, done: bool, org_id: str) -> Task:
        task = self.get_task(task_id, org_id)
        return self.repo.update_task(self.db, task, status="done" if done else "todo")

    def delete_task(self, task_id: str, org_id: str) -> dict:
        task = self.get_task(task_id, org_id)
        self.repo.delete_task(self.db, task)
        return {"message": "Task deleted"}
