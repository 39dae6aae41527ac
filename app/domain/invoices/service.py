"""Invoice service - Business logic for invoices and items"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Invoice, InvoiceItem
from ..clients.repository import ClientRepository
from .reminders import OverdueInvoice, build_reminder_email, days_overdue
from .repository import InvoiceRepository, recompute_totals
from .schemas import InvoiceCreate, InvoiceItemCreate, InvoiceUpdate

logger = logging.getLogger(__name__)


class InvoiceService:
    """Service layer for invoice business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = InvoiceRepository()
        self.clients = ClientRepository()

    def get_invoices(self, org_id: str) -> list[Invoice]:
        return self.repo.get_invoices(self.db, org_id)

    def get_invoice(self, invoice_id: str, org_id: str) -> Invoice:
        invoice = self.repo.get_invoice_by_id(self.db, invoice_id, org_id)
        if not invoice:
            raise HTTPException(status_code=404, detail="Invoice not found")
        return invoice

    def _check_client(self, client_id: Optional[str], org_id: str) -> None:
        if client_id and not self.clients.get_client_by_id(self.db, client_id, org_id):
            raise HTTPException(status_code=404, detail="Client not found")

    def create_invoice(self, data: InvoiceCreate, org_id: str) -> Invoice:
        self._check_client(data.client_id, org_id)
        invoice = self.repo.create_invoice(
            self.db,
            org_id,
            status="draft",
            amount_subtotal=0,
            amount_total=data.amount_tax,
            **data.model_dump(),
        )
        logger.info(f"🧾 Created draft invoice {invoice.id} in org {org_id}")
        return invoice

    def update_invoice(self, invoice_id: str, data: InvoiceUpdate, org_id: str) -> Invoice:
        invoice = self.get_invoice(invoice_id, org_id)
        updates = data.model_dump(exclude_unset=True)

        if updates.get("status", "") is None:
            raise HTTPException(status_code=400, detail="status cannot be null")
        if "client_id" in updates:
            self._check_client(updates["client_id"], org_id)
        if "amount_tax" in updates:
            invoice.amount_tax = updates.pop("amount_tax") or 0
            recompute_totals(invoice)

        return self.repo.update_invoice(self.db, invoice, **updates)

    def get_items(self, invoice_id: str, org_id: str) -> list[InvoiceItem]:
        return list(self.get_invoice(invoice_id, org_id).items)

    def add_item(self, invoice_id: str, data: InvoiceItemCreate, org_id: str) -> InvoiceItem:
        invoice = self.get_invoice(invoice_id, org_id)
        amount = round(data.quantity * data.unit_price, 2)
        return self.repo.add_item(self.db, invoice, amount=amount, **data.model_dump())

    def get_overdue(self, org_id: str, today: Optional[date] = None) -> list[OverdueInvoice]:
        """Unpaid invoices past their due date, most overdue first"""
        today = today or date.today()
        rows = [
            inv
            for inv in self.repo.get_unpaid(self.db, org_id)
            if inv.due_date is not None and inv.due_date < today
        ]
        names = self.clients.get_names(self.db, list({r.client_id for r in rows if r.client_id}))

        overdue = [
            OverdueInvoice(
                id=inv.id,
                client_id=inv.client_id,
                client_name=names.get(inv.client_id, "Client") if inv.client_id else "Client",
                amount_total=float(inv.amount_total or 0),
                due_date=inv.due_date,
                days_overdue=days_overdue(inv.due_date, today),
                status=inv.status,
            )
            for inv in rows
        ]
        overdue.sort(key=lambda o: o.days_overdue, reverse=True)
        return overdue

    def build_reminder(
        self,
        invoice_id: str,
        org_id: str,
        sender: Optional[str] = None,
        currency: str = "EUR",
        today: Optional[date] = None,
    ) -> dict:
        today = today or date.today()
        invoice = self.get_invoice(invoice_id, org_id)
        if invoice.status not in ("sent", "overdue") or invoice.due_date is None:
            raise HTTPException(status_code=400, detail="Invoice is not awaiting payment")

        client_name = invoice.client.name if invoice.client else "Client"
        item = OverdueInvoice(
            id=invoice.id,
            client_id=invoice.client_id,
            client_name=client_name,
            amount_total=float(invoice.amount_total or 0),
            due_date=invoice.due_date,
            days_overdue=days_overdue(invoice.due_date, today),
            status=invoice.status,
        )
        return build_reminder_email(item, sender=sender, currency=currency)
