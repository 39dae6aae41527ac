"""Recurrence service - loads seeds, materializes and bulk-inserts the batch"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...exceptions import PersistenceError
from ...models import Task
from .materializer import MaterializationResult, materialize

logger = logging.getLogger(__name__)


class RecurrenceRepository:
    """Repository for recurrence seed reads and batch writes"""

    @staticmethod
    def get_seeds(db: Session, org_id: Optional[str] = None) -> list[Task]:
        """Tasks with a recurrence rule, oldest due date first"""
        query = db.query(Task).filter(Task.recur_rule.isnot(None))
        if org_id:
            query = query.filter(Task.org_id == org_id)
        return query.order_by(Task.due_date.asc()).all()

    @staticmethod
    def insert_tasks(db: Session, rows: list[dict]) -> None:
        db.add_all([Task(**row) for row in rows])


class RecurrenceService:
    """Service layer for recurrence materialization"""

    def __init__(self, db: Session, track_high_water: bool = False):
        self.db = db
        self.repo = RecurrenceRepository()
        self.track_high_water = track_high_water

    def materialize(
        self, org_id: Optional[str] = None, today: Optional[date] = None
    ) -> MaterializationResult:
        """Create forward task instances for every recurring seed.

        The run is a single shot: a failed read or insert aborts it and is
        raised as PersistenceError. Overlapping runs are not coordinated.
        """
        today = today or date.today()
        org_id = (org_id or "").strip() or None

        try:
            seeds = self.repo.get_seeds(self.db, org_id)
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to load recurrence seeds: {e}")
            raise PersistenceError(str(e)) from e

        result = materialize(seeds, today, org_id=org_id, track_high_water=self.track_high_water)
        logger.info(
            f"🔁 Materializing {result.count} task(s) from {len(seeds)} seed(s)"
            + (f" for org {org_id}" if org_id else "")
        )

        if not result.instances:
            return result

        try:
            self.repo.insert_tasks(self.db, [instance.as_row() for instance in result.instances])
            if self.track_high_water:
                self._advance_high_water(seeds, result)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to insert materialized tasks: {e}")
            raise PersistenceError(str(e)) from e

        return result

    def _advance_high_water(self, seeds: list[Task], result: MaterializationResult) -> None:
        latest: dict[str, date] = {}
        for instance in result.instances:
            current = latest.get(instance.seed_id)
            if current is None or instance.due_date > current:
                latest[instance.seed_id] = instance.due_date

        for seed in seeds:
            if seed.id in latest:
                seed.recur_materialized_until = latest[seed.id]
