"""Workspace service - profile, personal organization and membership bootstrap"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...database import commit_or_raise
from ...models import Membership, Organization, Profile

logger = logging.getLogger(__name__)


class WorkspaceService:
    def __init__(self, db: Session):
        self.db = db

    def init_user(self, user_id: str, full_name: Optional[str] = None) -> Profile:
        """Create the profile and a personal workspace if they do not exist yet.

        Safe to call on every sign-in: an existing profile only gets a missing
        name filled in, and an owner membership is ensured for its default org.
        """
        profile = self.db.query(Profile).filter(Profile.id == user_id).first()
        if profile is None:
            profile = Profile(id=user_id, full_name=full_name)
            self.db.add(profile)
            logger.info(f"👤 Creating profile for user {user_id}")
        elif full_name and not profile.full_name:
            profile.full_name = full_name

        if not profile.default_org_id:
            org = Organization(name=f"{full_name or 'My'} workspace".strip())
            self.db.add(org)
            self.db.flush()
            profile.default_org_id = org.id
            logger.info(f"🏢 Created workspace {org.id} for user {user_id}")

        self.db.flush()
        self.ensure_membership(profile, role="owner")
        commit_or_raise(self.db, "initialize workspace")
        self.db.refresh(profile)
        return profile

    def ensure_membership(self, profile: Profile, role: str = "member") -> Membership:
        membership = (
            self.db.query(Membership)
            .filter(
                Membership.user_id == profile.id,
                Membership.org_id == profile.default_org_id,
            )
            .first()
        )
        if membership is None:
            membership = Membership(user_id=profile.id, org_id=profile.default_org_id, role=role)
            self.db.add(membership)
        return membership
