"""Invoice router - FastAPI endpoints for invoices and their items"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_org_id
from ...database import get_db
from .schemas import (
    InvoiceCreate,
    InvoiceItemCreate,
    InvoiceItemResponse,
    InvoiceResponse,
    InvoiceUpdate,
    ReminderEmail,
)
from .service import InvoiceService

router = APIRouter(prefix="/invoices", tags=["Invoices"])


def get_invoice_service(db: Session = Depends(get_db)) -> InvoiceService:
    """Dependency injection for InvoiceService"""
    return InvoiceService(db)


@router.get("", response_model=list[InvoiceResponse])
async def get_invoices(
    org_id: str = Depends(get_current_org_id),
    service: InvoiceService = Depends(get_invoice_service),
):
    return service.get_invoices(org_id)


@router.post("", response_model=InvoiceResponse)
async def create_invoice(
    data: InvoiceCreate,
    org_id: str = Depends(get_current_org_id),
    service: InvoiceService = Depends(get_invoice_service),
):
    return service.create_invoice(data, org_id)


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: str,
    org_id: str = Depends(get_current_org_id),
    service: InvoiceService = Depends(get_invoice_service),
):
    return service.get_invoice(invoice_id, org_id)


@router.patch("/{invoice_id}", response_model=InvoiceResponse)
async def update_invoice(
    invoice_id: str,
    data: InvoiceUpdate,
    org_id: str = Depends(get_current_org_id),
    service: InvoiceService = Depends(get_invoice_service),
):
    return service.update_invoice(invoice_id, data, org_id)


@router.get("/{invoice_id}/items", response_model=list[InvoiceItemResponse])
async def get_invoice_items(
    invoice_id: str,
    org_id: str = Depends(get_current_org_id),
    service: InvoiceService = Depends(get_invoice_service),
):
    return service.get_items(invoice_id, org_id)


@router.post("/{invoice_id}/items", response_model=InvoiceItemResponse)
async def add_invoice_item(
    invoice_id: str,
    data: InvoiceItemCreate,
    org_id: str = Depends(get_current_org_id),
    service: InvoiceService = Depends(get_invoice_service),
):
    return service.add_item(invoice_id, data, org_id)


@router.get("/{invoice_id}/reminder", response_model=ReminderEmail)
async def get_reminder_email(
    invoice_id: str,
    sender: Optional[str] = Query(None),
    currency: str = Query("EUR"),
    org_id: str = Depends(get_current_org_id),
    service: InvoiceService = Depends(get_invoice_service),
):
    """Draft a friendly payment reminder for an unpaid invoice"""
    return service.build_reminder(invoice_id, org_id, sender=sender, currency=currency)
