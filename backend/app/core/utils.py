"""
Utility functions for the application.
"""
from typing import Any, Dict
from datetime import date, datetime, time
from decimal import Decimal, ROUND_HALF_UP

MONEY_QUANTUM = Decimal("0.01")


def quantize_money(value: Decimal) -> Decimal:
    """Round a monetary amount to the currency minor unit (half-up)."""
    return Decimal(value).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def start_of_day(day: date) -> datetime:
    """First instant of a calendar day."""
    return datetime.combine(day, time(0, 0, 0))


def end_of_day(day: date) -> datetime:
    """Last whole second of a calendar day (23:59:59), inclusive report bound."""
    return datetime.combine(day, time(23, 59, 59))


def format_display_date(value: date) -> str:
    """Format a date as '1 Oct 2026'."""
    return f"{value.day} {value.strftime('%b %Y')}"


def format_percent(value: Decimal) -> str:
    """Format a percentage without trailing zeros (15.00 -> '15', 12.50 -> '12.5')."""
    return format(Decimal(value).normalize(), "f")


def format_error(message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": message}
    if details:
        response["details"] = details
    return response
