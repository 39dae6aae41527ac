"""Task repository - Database operations for tasks"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...database import commit_or_raise
from ...models import Task


class TaskRepository:
    """Repository for task database operations"""

    @staticmethod
    def get_tasks(db: Session, org_id: str) -> list[Task]:
        """All tasks, due date ascending with undated tasks last"""
        return (
            db.query(Task)
            .filter(Task.org_id == org_id)
            .order_by(Task.due_date.is_(None), Task.due_date.asc(), Task.position.asc())
            .all()
        )

    @staticmethod
    def get_task_by_id(db: Session, task_id: str, org_id: str) -> Optional[Task]:
        return db.query(Task).filter(Task.id == task_id, Task.org_id == org_id).first()

    @staticmethod
    def get_tasks_by_ids(db: Session, task_ids: list[str], org_id: str) -> dict[str, Task]:
        if not task_ids:
            return {}
        tasks = db.query(Task).filter(Task.id.in_(task_ids), Task.org_id == org_id).all()
        return {task.id: task for task in tasks}

    @staticmethod
    def get_tasks_in_range(db: Session, org_id: str, start: date, end: date) -> list[Task]:
        """Tasks with start <= due_date < end, by day then position"""
        return (
            db.query(Task)
            .filter(Task.org_id == org_id, Task.due_date >= start, Task.due_date < end)
            .order_by(Task.due_date.asc(), Task.position.asc())
            .all()
        )

    @staticmethod
    def get_open_tasks_due_on(db: Session, org_id: str, day: date) -> list[Task]:
        return (
            db.query(Task)
            .filter(Task.org_id == org_id, Task.due_date == day, Task.status != "done")
            .order_by(Task.position.asc())
            .all()
        )

    @staticmethod
    def create_task(db: Session, org_id: str, **task_data) -> Task:
        task = Task(org_id=org_id, **task_data)
        db.add(task)
        commit_or_raise(db, "create task")
        db.refresh(task)
        return task

    @staticmethod
    def update_task(db: Session, task: Task, **updates) -> Task:
        for key, value in updates.items():
            if hasattr(task, key):
                setattr(task, key, value)

        commit_or_raise(db, "update task")
        db.refresh(task)
        return task

    @staticmethod
    def delete_task(db: Session, task: Task) -> None:
        db.delete(task)
        commit_or_raise(db, "delete task")
