"""Payment reminder emails for overdue invoices"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$", "GBP": "£"}


@dataclass
class OverdueInvoice:
    id: str
    client_id: Optional[str]
    client_name: str
    amount_total: float
    due_date: date
    days_overdue: int
    status: str = "overdue"


def format_currency(amount: float, currency: str = "EUR") -> str:
    symbol = CURRENCY_SYMBOLS.get(currency.upper())
    if symbol:
        return f"{symbol}{amount:,.2f}"
    return f"{amount:,.2f} {currency.upper()}"


def days_overdue(due_date: Optional[date], today: date) -> int:
    if due_date is None:
        return 0
    return max(0, (today - due_date).days)


def build_reminder_email(
    item: OverdueInvoice, sender: Optional[str] = None, currency: str = "EUR"
) -> dict:
    amount = format_currency(item.amount_total, currency)
    short_id = item.id[:6]
    subject = f"Friendly reminder: Invoice {short_id} ({amount})"
    body = "\n".join(
        [
            f"Subject: {subject}",
            "",
            f"Hi {item.client_name},",
            "",
            f"Hope you're well. This is a friendly reminder about invoice {short_id} for {amount},",
            f"which fell due on {item.due_date.isoformat()} ({item.days_overdue} day(s) overdue).",
            "",
            "Could you let me know the expected payment date? If you've already sent it, please ignore this.",
            "",
            "Thanks so much,",
            sender or "-",
        ]
    )
    return {"subject": subject, "body": body}
