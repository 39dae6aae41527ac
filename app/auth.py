"""
Caller identity and organization scope.

Authentication itself belongs to the hosted auth provider, which forwards the
verified user id in the ``X-User-Id`` header. Everything here is about
mapping that user to a workspace (organization).
"""

import logging

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from .database import get_db
from .models import Profile

logger = logging.getLogger(__name__)


async def get_current_user_id(x_user_id: str = Header(..., alias="X-User-Id")) -> str:
    user_id = x_user_id.strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user_id


async def get_current_profile(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> Profile:
    profile = db.query(Profile).filter(Profile.id == user_id).first()
    if not profile:
        logger.warning(f"⚠️ No profile for user {user_id}")
        raise HTTPException(status_code=403, detail="No workspace")
    return profile


async def get_current_org_id(profile: Profile = Depends(get_current_profile)) -> str:
    """The caller's default organization; every business query is scoped to it"""
    if not profile.default_org_id:
        raise HTTPException(status_code=403, detail="No workspace")
    return profile.default_org_id
