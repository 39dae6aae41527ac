"""Shared validation utilities"""

import re
from typing import Optional

TASK_STATUSES = ("todo", "doing", "done", "blocked")
TASK_PRIORITIES = ("low", "medium", "high", "urgent")
INVOICE_STATUSES = ("draft", "sent", "paid", "overdue")
RECUR_RULES = ("WEEKLY", "MONTHLY")


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize an international phone number.

    Args:
        phone: Phone number string in various formats

    Returns:
        Digits with an optional leading "+", or None for blank input

    Raises:
        ValueError: If the number has fewer than 7 or more than 15 digits
    """
    if not phone or not phone.strip():
        return None

    phone = phone.strip()
    digits = re.sub(r"\D", "", phone)

    if not 7 <= len(digits) <= 15:
        raise ValueError("Phone number must have between 7 and 15 digits")

    return f"+{digits}" if phone.startswith("+") else digits


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address, or None for blank input

    Raises:
        ValueError: If email format is invalid
    """
    if not email or not email.strip():
        return None

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_choice(value: Optional[str], choices: tuple, label: str) -> Optional[str]:
    if value is None:
        return value
    if value not in choices:
        raise ValueError(f"{label} must be one of: {', '.join(choices)}")
    return value


def validate_positive(value: Optional[int], label: str) -> Optional[int]:
    if value is not None and value < 1:
        raise ValueError(f"{label} must be at least 1")
    return value
