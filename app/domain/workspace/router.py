"""Workspace router - bootstrap and inspect the caller's workspace"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_profile, get_current_user_id
from ...database import get_db
from ...models import Profile
from .schemas import ProfileResponse, WorkspaceInit
from .service import WorkspaceService

router = APIRouter(prefix="/workspace", tags=["Workspace"])


@router.post("/init", response_model=ProfileResponse)
async def init_workspace(
    data: WorkspaceInit,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Create the caller's profile, workspace and owner membership if missing"""
    return WorkspaceService(db).init_user(user_id, data.full_name)


@router.get("", response_model=ProfileResponse)
async def get_workspace(profile: Profile = Depends(get_current_profile)):
    return profile
