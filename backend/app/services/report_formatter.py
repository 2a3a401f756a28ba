"""
Share-format rendering of settlement reports.
"""
from decimal import Decimal
from typing import Optional
from urllib.parse import quote
import re
from app.core.config import settings
from app.core.utils import format_display_date, format_percent
from app.schemas.settlement import SettlementReport

SEPARATOR = "—————————————"


def _money(symbol: str, value: Decimal) -> str:
    return f"{symbol}{value:.2f}"


def format_share_message(report: SettlementReport, currency_symbol: Optional[str] = None) -> str:
    """
    Render a report as the plain-text message sent to the restaurant.

    The labeled lines appear in a fixed order: period, order count, gross revenue,
    commission (with its percent), platform fee, transaction fee, a separator and
    net payable. Amounts always carry two decimals.
    """
    symbol = settings.CURRENCY_SYMBOL if currency_symbol is None else currency_symbol
    totals = report.totals
    period = (
        f"{format_display_date(report.period.start)} to "
        f"{format_display_date(report.period.end)}"
    )

    lines = [
        f"*Payment Report - {report.restaurant.name}*",
        "",
        f"📅 Period: {period}",
        f"📦 Total Orders: {report.order_count}",
        "",
        "💰 *Summary*",
        f"Gross Revenue: {_money(symbol, totals.gross_revenue)}",
        f"Commission ({format_percent(report.restaurant.commission_percent)}%): "
        f"-{_money(symbol, totals.total_commission)}",
        f"Platform Fee: -{_money(symbol, totals.total_platform_fee)}",
        f"Transaction Fee: -{_money(symbol, totals.total_transaction_fee)}",
        SEPARATOR,
        f"*Net Payable: {_money(symbol, totals.net_payable)}*",
        "",
        "Please confirm receipt of this report.",
    ]
    return "\n".join(lines)


def build_share_link(report: SettlementReport, message: str) -> str:
    """
    Build a wa.me link that opens a chat with the restaurant prefilled with `message`.
    Without a phone number on file the link lets the operator pick a contact.
    """
    digits = re.sub(r"\D", "", report.restaurant.phone or "")
    recipient = f"{settings.SHARE_PHONE_COUNTRY_CODE}{digits}" if digits else ""
    return f"https://wa.me/{recipient}?text={quote(message, safe='')}"
