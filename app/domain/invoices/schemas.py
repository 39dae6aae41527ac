"""Invoice domain schemas"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ...shared.validators import INVOICE_STATUSES, validate_choice


class InvoiceCreate(BaseModel):
    client_id: Optional[str] = None
    due_date: Optional[date] = None
    notes: Optional[str] = None
    amount_tax: float = 0


class InvoiceUpdate(BaseModel):
    client_id: Optional[str] = None
    due_date: Optional[date] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    amount_tax: Optional[float] = None

    @field_validator("status")
    @classmethod
    def check_status(cls, v):
        return validate_choice(v, INVOICE_STATUSES, "Status")


class InvoiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    org_id: str
    client_id: Optional[str] = None
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    status: str
    notes: Optional[str] = None
    amount_subtotal: float
    amount_tax: float
    amount_total: float
    created_at: Optional[datetime] = None


class InvoiceItemCreate(BaseModel):
    description: str
    quantity: float = 1
    unit_price: float = 0

    @field_validator("description")
    @classmethod
    def check_description(cls, v):
        if not v or not v.strip():
            raise ValueError("Description is required")
        return v.strip()

    @field_validator("quantity")
    @classmethod
    def check_quantity(cls, v):
        if v <= 0:
            raise ValueError("Quantity must be greater than 0")
        return v


class InvoiceItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    invoice_id: str
    description: str
    quantity: float
    unit_price: float
    amount: float


class ReminderEmail(BaseModel):
    subject: str
    body: str
