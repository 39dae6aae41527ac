"""Schedule schemas"""

from datetime import date

from pydantic import BaseModel, field_validator

from ..tasks.schemas import TaskResponse


class QuickTaskCreate(BaseModel):
    title: str
    due_date: date

    @field_validator("title")
    @classmethod
    def check_title(cls, v):
        if not v or not v.strip():
            raise ValueError("Title is required")
        return v.strip()


class ReorderDay(BaseModel):
    due_date: date
    ordered_ids: list[str]


class MoveTask(BaseModel):
    task_id: str
    from_date: date
    to_date: date
    from_ordered_ids: list[str]
    to_ordered_ids: list[str]  # final order of the target day, including task_id


class ScheduleDay(BaseModel):
    date: date
    label: str
    tasks: list[TaskResponse]


class WeekResponse(BaseModel):
    start: date
    end: date
    days: list[ScheduleDay]
