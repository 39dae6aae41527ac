"""Project schemas"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    org_id: str
    client_id: Optional[str] = None
    name: str
    status: Optional[str] = None
    due_date: Optional[date] = None
    created_at: Optional[datetime] = None
