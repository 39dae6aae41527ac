"""Project router - read-only project list for task assignment"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_org_id
from ...database import get_db
from .schemas import ProjectResponse
from .service import ProjectService

router = APIRouter(prefix="/projects", tags=["Projects"])


def get_project_service(db: Session = Depends(get_db)) -> ProjectService:
    return ProjectService(db)


@router.get("", response_model=list[ProjectResponse])
async def get_projects(
    org_id: str = Depends(get_current_org_id),
    service: ProjectService = Depends(get_project_service),
):
    return service.get_projects(org_id)
