"""AI suggestion schemas - request context and response shapes"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


class FocusKpis(BaseModel):
    unpaidTotal: float = 0
    overdueCount: int = 0


class FocusTask(BaseModel):
    title: str
    status: Optional[str] = None
    priority: Optional[str] = None


class FocusOverdue(BaseModel):
    client_name: str = "Client"
    amount_total: float = 0
    days_overdue: int = 0


class FocusAIRequest(BaseModel):
    """Context for the daily focus plan"""

    kpis: FocusKpis = Field(default_factory=FocusKpis)
    todayTasks: list[FocusTask] = Field(default_factory=list)
    topOverdue: list[FocusOverdue] = Field(default_factory=list)


class FocusAction(BaseModel):
    label: str
    why: str = ""
    nav: Literal["invoices", "schedule", "leads", "tasks"] = "tasks"


class FocusAIResponse(BaseModel):
    headline: str = "Today's Focus"
    top_actions: list[FocusAction] = Field(default_factory=list)
    followups: list[str] = Field(default_factory=list)


class PreviousItem(BaseModel):
    description: str
    unit_price: float = 0


class RecentTask(BaseModel):
    title: str


class InvoiceAIRequest(BaseModel):
    """Context for a suggested invoice draft"""

    clientName: str = ""
    previousItems: list[PreviousItem] = Field(default_factory=list)
    recentTasks: list[RecentTask] = Field(default_factory=list)
    currency: str = "EUR"


class SuggestedItem(BaseModel):
    description: str
    quantity: float = 1
    unit_price: float = 0


class InvoiceAIResponse(BaseModel):
    due_in_days: int = 14
    items: list[SuggestedItem] = Field(default_factory=list)
    notes: str = ""
