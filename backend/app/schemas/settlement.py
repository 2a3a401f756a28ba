"""
Pydantic schemas for settlement reports.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal


class SettlementLineItem(BaseModel):
    """Settlement figures for one delivered order."""
    order_number: str
    created_at: datetime
    subtotal: Decimal
    commission: Decimal
    platform_fee: Decimal
    transaction_fee: Decimal
    total_deductions: Decimal  # commission + platform_fee + transaction_fee
    net_payable: Decimal  # subtotal - total_deductions, may be negative
    is_negative: bool = False


class SettlementTotals(BaseModel):
    """Sums of every line item field over the period."""
    gross_revenue: Decimal = Decimal("0.00")
    total_commission: Decimal = Decimal("0.00")
    total_platform_fee: Decimal = Decimal("0.00")
    total_transaction_fee: Decimal = Decimal("0.00")
    total_deductions: Decimal = Decimal("0.00")
    net_payable: Decimal = Decimal("0.00")


class ReportPeriod(BaseModel):
    """Inclusive date range of a report."""
    start: date
    end: date


class ReportRestaurant(BaseModel):
    """Restaurant the report is addressed to."""
    id: int
    name: str
    phone: Optional[str] = None
    commission_percent: Decimal


class ReportFees(BaseModel):
    """Global fees the report was computed with."""
    platform_fee: Decimal
    transaction_fee_percent: Decimal


class SettlementReport(BaseModel):
    """Payout report for one restaurant over a period."""
    restaurant: ReportRestaurant
    period: ReportPeriod
    fee_settings: ReportFees
    line_items: List[SettlementLineItem]
    totals: SettlementTotals
    order_count: int
    avg_order_value: Decimal
    negative_order_numbers: List[str] = []  # Orders whose deductions exceed the subtotal


class SettlementShareResponse(BaseModel):
    """Schema for the shareable rendering of a report."""
    message: str
    share_link: str
