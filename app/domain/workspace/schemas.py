"""Workspace schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class WorkspaceInit(BaseModel):
    full_name: Optional[str] = None


class MembershipResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    org_id: str
    role: str


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: Optional[str] = None
    default_org_id: Optional[str] = None
    created_at: Optional[datetime] = None
    memberships: list[MembershipResponse] = []
