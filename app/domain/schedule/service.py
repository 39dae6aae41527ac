"""Schedule service - week view, quick capture and drag-and-drop ordering"""

import logging
from datetime import date

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...database import commit_or_raise
from ...models import Task
from ...utils.dates import build_week, fmt_day
from ..tasks.repository import TaskRepository
from .schemas import MoveTask, QuickTaskCreate, ReorderDay

logger = logging.getLogger(__name__)


class ScheduleService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = TaskRepository()

    def get_tasks_in_range(self, org_id: str, start: date, end: date) -> list[Task]:
        if end <= start:
            raise HTTPException(status_code=400, detail="end must be after start")
        return self.repo.get_tasks_in_range(self.db, org_id, start, end)

    def get_week(self, org_id: str, day: date) -> dict:
        """Monday-start week containing ``day`` with its tasks grouped per day"""
        week = build_week(day)
        tasks = self.repo.get_tasks_in_range(self.db, org_id, week.start, week.end)

        by_day: dict[date, list[Task]] = {d: [] for d in week.days}
        for task in tasks:
            by_day[task.due_date].append(task)

        return {
            "start": week.start,
            "end": week.end,
            "days": [
                {"date": d, "label": fmt_day(d), "tasks": by_day[d]} for d in week.days
            ],
        }

    def quick_create(self, data: QuickTaskCreate, org_id: str) -> Task:
        return self.repo.create_task(
            self.db,
            org_id,
            title=data.title,
            due_date=data.due_date,
            status="todo",
            priority="medium",
            position=0,
        )

    def _load_all(self, task_ids: list[str], org_id: str) -> dict[str, Task]:
        tasks = self.repo.get_tasks_by_ids(self.db, task_ids, org_id)
        missing = set(task_ids) - set(tasks)
        if missing:
            raise HTTPException(status_code=404, detail="Task not found")
        return tasks

    def reorder_day(self, data: ReorderDay, org_id: str) -> dict:
        """Positions 0..n-1 in the given order"""
        tasks = self._load_all(data.ordered_ids, org_id)
        if any(task.due_date != data.due_date for task in tasks.values()):
            raise HTTPException(status_code=400, detail="ordered_ids must all be due on due_date")
        for idx, task_id in enumerate(data.ordered_ids):
            tasks[task_id].position = idx
        commit_or_raise(self.db, "reorder tasks")
        return {"updated": len(data.ordered_ids)}

    def move_across_days(self, data: MoveTask, org_id: str) -> dict:
        """Reorder both days and set the moved task's new due date"""
        if data.task_id not in data.to_ordered_ids:
            raise HTTPException(status_code=400, detail="to_ordered_ids must include task_id")

        tasks = self._load_all(list({*data.from_ordered_ids, *data.to_ordered_ids}), org_id)
        for idx, task_id in enumerate(data.from_ordered_ids):
            tasks[task_id].position = idx
        for idx, task_id in enumerate(data.to_ordered_ids):
            tasks[task_id].position = idx
            if task_id == data.task_id:
                tasks[task_id].due_date = data.to_date

        commit_or_raise(self.db, "move task")
        logger.info(f"↔️ Moved task {data.task_id} from {data.from_date} to {data.to_date}")
        return {"updated": len(data.from_ordered_ids) + len(data.to_ordered_ids)}
