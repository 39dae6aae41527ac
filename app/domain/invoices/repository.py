"""Invoice repository - Database operations for invoices and their items"""

from typing import Optional

from sqlalchemy.orm import Session

from ...database import commit_or_raise
from ...models import Invoice, InvoiceItem


class InvoiceRepository:
    """Repository for invoice database operations"""

    @staticmethod
    def get_invoices(db: Session, org_id: str) -> list[Invoice]:
        return (
            db.query(Invoice)
            .filter(Invoice.org_id == org_id)
            .order_by(Invoice.created_at.desc())
            .all()
        )

    @staticmethod
    def get_unpaid(db: Session, org_id: str) -> list[Invoice]:
        """Sent or overdue invoices, earliest due date first"""
        return (
            db.query(Invoice)
            .filter(Invoice.org_id == org_id, Invoice.status.in_(("sent", "overdue")))
            .order_by(Invoice.due_date.asc())
            .all()
        )

    @staticmethod
    def get_invoice_by_id(db: Session, invoice_id: str, org_id: str) -> Optional[Invoice]:
        return (
            db.query(Invoice)
            .filter(Invoice.id == invoice_id, Invoice.org_id == org_id)
            .first()
        )

    @staticmethod
    def create_invoice(db: Session, org_id: str, **invoice_data) -> Invoice:
        invoice = Invoice(org_id=org_id, **invoice_data)
        db.add(invoice)
        commit_or_raise(db, "create invoice")
        db.refresh(invoice)
        return invoice

    @staticmethod
    def update_invoice(db: Session, invoice: Invoice, **updates) -> Invoice:
        for key, value in updates.items():
            if hasattr(invoice, key):
                setattr(invoice, key, value)
        commit_or_raise(db, "update invoice")
        db.refresh(invoice)
        return invoice

    @staticmethod
    def add_item(db: Session, invoice: Invoice, **item_data) -> InvoiceItem:
        """Append an item and refresh the invoice totals in the same commit"""
        item = InvoiceItem(
            org_id=invoice.org_id,
            invoice_id=invoice.id,
            line_no=len(invoice.items),
            **item_data,
        )
        invoice.items.append(item)
        recompute_totals(invoice)
        commit_or_raise(db, "add invoice item")
        db.refresh(item)
        return item


def recompute_totals(invoice: Invoice) -> None:
    subtotal = round(sum(item.amount for item in invoice.items), 2)
    invoice.amount_subtotal = subtotal
    invoice.amount_total = round(subtotal + (invoice.amount_tax or 0), 2)
