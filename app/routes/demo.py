"""Demo data for a fresh workspace: one client, one sent invoice, two items"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import get_db
from ..domain.invoices.repository import recompute_totals
from ..exceptions import PersistenceError
from ..models import Client, Invoice, InvoiceItem

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["Functions"])

DEMO_ITEMS = [
    {"description": "Design sprint", "quantity": 5, "unit_price": 200},
    {"description": "Hosting", "quantity": 1, "unit_price": 50},
]


def seed_demo(db: Session, org_id: str) -> Invoice:
    client = Client(org_id=org_id, name="Acme Inc", email="billing@acme.test")
    db.add(client)
    db.flush()

    invoice = Invoice(org_id=org_id, client_id=client.id, status="sent", notes="Demo invoice")
    db.add(invoice)
    db.flush()

    for line_no, item in enumerate(DEMO_ITEMS):
        invoice.items.append(
            InvoiceItem(
                org_id=org_id,
                invoice_id=invoice.id,
                line_no=line_no,
                amount=item["quantity"] * item["unit_price"],
                **item,
            )
        )
    recompute_totals(invoice)
    db.commit()
    return invoice


@router.post("/seed-demo")
async def seed_demo_data(org: Optional[str] = Query(None), db: Session = Depends(get_db)):
    org = (org or "").strip()
    if not org:
        return PlainTextResponse("org required", status_code=400)

    try:
        invoice = seed_demo(db, org)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Demo seeding failed for org {org}: {e}")
        raise PersistenceError(str(e)) from e

    logger.info(f"🌱 Seeded demo data for org {org}")
    return {"ok": True, "invoice": invoice.id}
