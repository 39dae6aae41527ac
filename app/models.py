import uuid
from datetime import date

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_id():
    """Generate a UUID primary key"""
    return str(uuid.uuid4())


class Organization(Base):
    __tablename__ = "organizations"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    memberships = relationship("Membership", back_populates="organization")


class Profile(Base):
    __tablename__ = "profiles"

    # Same identifier as the hosted auth provider's user id
    id = Column(String(36), primary_key=True)
    full_name = Column(String(255), nullable=True)
    default_org_id = Column(String(36), ForeignKey("organizations.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    memberships = relationship("Membership", back_populates="profile")


class Membership(Base):
    __tablename__ = "memberships"

    user_id = Column(String(36), ForeignKey("profiles.id"), primary_key=True)
    org_id = Column(String(36), ForeignKey("organizations.id"), primary_key=True)
    role = Column(String(20), nullable=False, default="member")  # owner, member
    created_at = Column(DateTime, server_default=func.now())

    profile = relationship("Profile", back_populates="memberships")
    organization = relationship("Organization", back_populates="memberships")


class Client(Base):
    __tablename__ = "clients"

    id = Column(String(36), primary_key=True, default=generate_id)
    org_id = Column(String(36), ForeignKey("organizations.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    invoices = relationship("Invoice", back_populates="client")


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=generate_id)
    org_id = Column(String(36), ForeignKey("organizations.id"), nullable=False, index=True)
    client_id = Column(String(36), ForeignKey("clients.id"), nullable=True)
    name = Column(String(255), nullable=False)
    status = Column(String(20), default="active")  # active, paused, done, archived
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=True)
    due_date = Column(Date, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=generate_id)
    org_id = Column(String(36), ForeignKey("organizations.id"), nullable=False, index=True)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=True)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="todo")  # todo, doing, done, blocked
    priority = Column(String(20), nullable=False, default="medium")  # low, medium, high, urgent
    due_date = Column(Date, nullable=True, index=True)
    estimate_minutes = Column(Integer, nullable=True)
    position = Column(Integer, nullable=False, default=0)

    # Recurrence
    recur_rule = Column(String(20), nullable=True)  # WEEKLY, MONTHLY
    recur_interval = Column(Integer, nullable=True)
    recur_count = Column(Integer, nullable=True)
    recur_until = Column(Date, nullable=True)
    # Latest due date already materialized from this seed (opt-in tracking)
    recur_materialized_until = Column(Date, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(String(36), primary_key=True, default=generate_id)
    org_id = Column(String(36), ForeignKey("organizations.id"), nullable=False, index=True)
    client_id = Column(String(36), ForeignKey("clients.id"), nullable=True)
    issue_date = Column(Date, default=date.today)
    due_date = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default="draft")  # draft, sent, paid, overdue
    notes = Column(Text, nullable=True)
    amount_subtotal = Column(Float, nullable=False, default=0)
    amount_tax = Column(Float, nullable=False, default=0)
    amount_total = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())

    client = relationship("Client", back_populates="invoices")
    items = relationship(
        "InvoiceItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceItem.line_no",
    )


class InvoiceItem(Base):
    __tablename__ = "invoice_items"

    id = Column(String(36), primary_key=True, default=generate_id)
    org_id = Column(String(36), ForeignKey("organizations.id"), nullable=False, index=True)
    invoice_id = Column(String(36), ForeignKey("invoices.id"), nullable=False, index=True)
    description = Column(String(500), nullable=False)
    quantity = Column(Float, nullable=False, default=1)
    unit_price = Column(Float, nullable=False, default=0)
    amount = Column(Float, nullable=False, default=0)
    line_no = Column(Integer, nullable=False, default=0)  # insertion order within the invoice
    created_at = Column(DateTime, server_default=func.now())

    invoice = relationship("Invoice", back_populates="items")
