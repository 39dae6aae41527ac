"""Task domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ...shared.validators import (
    RECUR_RULES,
    TASK_PRIORITIES,
    TASK_STATUSES,
    validate_choice,
    validate_positive,
)


class RecurrenceFields(BaseModel):
    recur_rule: Optional[str] = None
    recur_interval: Optional[int] = None
    recur_count: Optional[int] = None
    recur_until: Optional[date] = None

    @field_validator("recur_rule")
    @classmethod
    def check_rule(cls, v):
        return validate_choice(v, RECUR_RULES, "Recurrence rule")

    @field_validator("recur_interval")
    @classmethod
    def check_interval(cls, v):
        return validate_positive(v, "Recurrence interval")

    @field_validator("recur_count")
    @classmethod
    def check_count(cls, v):
        return validate_positive(v, "Recurrence count")


class TaskCreate(RecurrenceFields):
    title: str
    description: Optional[str] = None
    project_id: Optional[str] = None
    priority: str = "medium"
    due_date: Optional[date] = None
    estimate_minutes: Optional[int] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v):
        if not v or not v.strip():
            raise ValueError("Title is required")
        return v.strip()

    @field_validator("priority")
    @classmethod
    def check_priority(cls, v):
        return validate_choice(v, TASK_PRIORITIES, "Priority")


class TaskUpdate(RecurrenceFields):
    title: Optional[str] = None
    description: Optional[str] = None
    project_id: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[date] = None
    position: Optional[int] = None
    estimate_minutes: Optional[int] = None

    @field_validator("status")
    @classmethod
    def check_status(cls, v):
        return validate_choice(v, TASK_STATUSES, "Status")

    @field_validator("priority")
    @classmethod
    def check_priority(cls, v):
        return validate_choice(v, TASK_PRIORITIES, "Priority")


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    org_id: str
    project_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    status: str
    priority: str
    due_date: Optional[date] = None
    estimate_minutes: Optional[int] = None
    position: int
    recur_rule: Optional[str] = None
    recur_interval: Optional[int] = None
    recur_count: Optional[int] = None
    recur_until: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
