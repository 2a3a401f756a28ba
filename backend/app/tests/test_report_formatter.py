"""
Tests for the shareable report rendering.
"""
from datetime import date, datetime
from decimal import Decimal
from urllib.parse import unquote
from app.models.order import OrderStatus
from app.schemas.fees import GlobalFeeSettings, RestaurantFeeProfile
from app.schemas.order import OrderRecord
from app.schemas.settlement import ReportPeriod
from app.services.report_formatter import SEPARATOR, build_share_link, format_share_message
from app.services.settlement_service import generate_report


def build_report(phone="98765-43210", commission="15", subtotals=("500", "300")):
    profile = RestaurantFeeProfile(
        restaurant_id=3,
        name="Spice Route",
        phone=phone,
        commission_percent=Decimal(commission),
        platform_fee_per_order=Decimal("5"),
        transaction_charge_percent=Decimal("0")
    )
    orders = [
        OrderRecord(
            id=n,
            order_number=f"ORD-{n:04d}",
            status=OrderStatus.DELIVERED,
            subtotal=Decimal(subtotal),
            created_at=datetime(2026, 10, 10, 12, 0),
            restaurant_id=3
        )
        for n, subtotal in enumerate(subtotals, start=1)
    ]
    fees = GlobalFeeSettings(platform_fee=Decimal("5"), transaction_fee_percent=Decimal("2"))
    period = ReportPeriod(start=date(2026, 10, 1), end=date(2026, 10, 31))
    return generate_report(orders, profile, fees, period)


def test_share_message_lines_in_order():
    """Labeled summary lines appear verbatim and in order."""
    message = format_share_message(build_report(), currency_symbol="₹")

    assert message.splitlines() == [
        "*Payment Report - Spice Route*",
        "",
        "📅 Period: 1 Oct 2026 to 31 Oct 2026",
        "📦 Total Orders: 2",
        "",
        "💰 *Summary*",
        "Gross Revenue: ₹800.00",
        "Commission (15%): -₹120.00",
        "Platform Fee: -₹10.00",
        "Transaction Fee: -₹16.00",
        SEPARATOR,
        "*Net Payable: ₹654.00*",
        "",
        "Please confirm receipt of this report.",
    ]


def test_share_message_keeps_fractional_percent():
    """Fractional commission keeps its significant digits only."""
    message = format_share_message(build_report(commission="12.50"), currency_symbol="$")
    assert "Commission (12.5%): -$100.00" in message


def test_share_message_for_empty_report():
    """An empty period still renders every line with zero amounts."""
    message = format_share_message(build_report(subtotals=()), currency_symbol="₹")
    assert "📦 Total Orders: 0" in message
    assert "*Net Payable: ₹0.00*" in message


def test_share_link_uses_country_code_and_phone_digits():
    """Non-digits are stripped and the configured country code is prefixed."""
    report = build_report()
    message = format_share_message(report)
    link = build_share_link(report, message)

    assert link.startswith("https://wa.me/919876543210?text=")
    assert unquote(link.split("?text=", 1)[1]) == message


def test_share_link_without_phone():
    """No recipient when the restaurant has no phone on file."""
    report = build_report(phone=None)
    assert build_share_link(report, "hi").startswith("https://wa.me/?text=")
