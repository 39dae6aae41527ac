"""Project repository - Database operations for projects"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Project


class ProjectRepository:
    """Repository for project database operations"""

    @staticmethod
    def get_projects(db: Session, org_id: str) -> list[Project]:
        """Projects of an organization, newest first"""
        return (
            db.query(Project)
            .filter(Project.org_id == org_id)
            .order_by(Project.created_at.desc())
            .all()
        )

    @staticmethod
    def get_project_by_id(db: Session, project_id: str, org_id: str) -> Optional[Project]:
        return db.query(Project).filter(Project.id == project_id, Project.org_id == org_id).first()
