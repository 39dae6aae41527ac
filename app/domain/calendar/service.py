"""Calendar service - task feed export"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...exceptions import PersistenceError
from ...models import Task
from .ics import render_calendar

logger = logging.getLogger(__name__)


class CalendarService:
    def __init__(self, db: Session):
        self.db = db

    def get_dated_tasks(self, org_id: str, statuses: Optional[list[str]] = None) -> list[Task]:
        query = self.db.query(Task).filter(Task.org_id == org_id, Task.due_date.isnot(None))
        if statuses:
            query = query.filter(Task.status.in_(statuses))
        return query.order_by(Task.due_date.asc()).all()

    def export_tasks_ics(self, org_id: str, statuses: Optional[list[str]] = None) -> str:
        try:
            tasks = self.get_dated_tasks(org_id, statuses)
        except SQLAlchemyError as e:
            logger.error(f"❌ Calendar export failed for org {org_id}: {e}")
            raise PersistenceError(str(e)) from e

        logger.info(f"📅 Exporting {len(tasks)} task(s) to ICS for org {org_id}")
        return render_calendar(tasks)
