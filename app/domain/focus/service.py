"""Focus service - daily KPIs, overdue invoices and this week's workload"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Profile, Task
from ...shared.results import FetchResult, fetch
from ...utils.dates import build_week, to_iso_date
from ..invoices.reminders import OverdueInvoice
from ..invoices.repository import InvoiceRepository
from ..invoices.service import InvoiceService
from ..tasks.repository import TaskRepository

logger = logging.getLogger(__name__)

EMPTY_DASHBOARD = {"unpaidTotal": 0.0, "thisWeek": []}


class FocusService:
    def __init__(self, db: Session):
        self.db = db
        self.invoices = InvoiceRepository()
        self.tasks = TaskRepository()

    def unpaid_total(self, org_id: str) -> float:
        return round(
            sum(float(inv.amount_total or 0) for inv in self.invoices.get_unpaid(self.db, org_id)),
            2,
        )

    def get_kpis(self, org_id: str, today: Optional[date] = None) -> dict:
        today = today or date.today()
        unpaid = self.invoices.get_unpaid(self.db, org_id)
        overdue_count = sum(
            1 for inv in unpaid if inv.due_date is not None and inv.due_date < today
        )
        return {
            "unpaidTotal": round(sum(float(inv.amount_total or 0) for inv in unpaid), 2),
            "overdueCount": overdue_count,
        }

    def get_top_overdue(
        self, org_id: str, limit: int = 3, today: Optional[date] = None
    ) -> list[OverdueInvoice]:
        return InvoiceService(self.db).get_overdue(org_id, today)[:limit]

    def get_today_tasks(self, org_id: str, today: Optional[date] = None) -> list[Task]:
        return self.tasks.get_open_tasks_due_on(self.db, org_id, today or date.today())

    def get_week_summary(self, org_id: str, today: Optional[date] = None) -> dict:
        week = build_week(today or date.today())
        rows = self.tasks.get_tasks_in_range(self.db, org_id, week.start, week.end)
        return {
            "dueThisWeek": len(rows),
            "doneThisWeek": sum(1 for t in rows if t.status == "done"),
        }

    def get_this_week_tasks(self, org_id: str, today: Optional[date] = None) -> list[dict]:
        week = build_week(today or date.today())
        return [
            {
                "id": t.id,
                "title": t.title,
                "due_date": to_iso_date(t.due_date),
                "status": t.status,
            }
            for t in self.tasks.get_tasks_in_range(self.db, org_id, week.start, week.end)
        ]


def load_dashboard(
    db: Optional[Session], user_id: str, today: Optional[date] = None
) -> FetchResult[dict]:
    """Unpaid total and this week's tasks as an explicit FetchResult.

    ``db`` is None when no database is configured; that branch returns the
    empty dashboard marked ``unconfigured``.
    """
    if db is None:
        logger.info("📭 Database not configured, serving empty dashboard")
        return FetchResult.unconfigured(dict(EMPTY_DASHBOARD))

    def read() -> Optional[dict]:
        profile = db.query(Profile).filter(Profile.id == user_id).first()
        if profile is None or not profile.default_org_id:
            return None
        service = FocusService(db)
        return {
            "unpaidTotal": service.unpaid_total(profile.default_org_id),
            "thisWeek": service.get_this_week_tasks(profile.default_org_id, today),
        }

    result = fetch(read)
    if not result.ok:
        logger.error(f"❌ Dashboard read failed for user {user_id}: {result.error.message}")
    elif result.data is None:
        return FetchResult.failure("No workspace", kind="workspace")
    return result
