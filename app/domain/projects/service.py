"""Project service - listing and org-scoped lookups"""

from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Project
from .repository import ProjectRepository


class ProjectService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProjectRepository()

    def get_projects(self, org_id: str) -> list[Project]:
        return self.repo.get_projects(self.db, org_id)

    def check_project(self, project_id: Optional[str], org_id: str) -> None:
        """404 unless ``project_id`` is empty or belongs to the organization"""
        if project_id and not self.repo.get_project_by_id(self.db, project_id, org_id):
            raise HTTPException(status_code=404, detail="Project not found")
