"""
Settlement service: per-order payout deductions and period reports.

compute_line_item() and generate_report() are pure functions of their inputs;
build_settlement_report() loads those inputs from the database.
"""
from sqlalchemy.orm import Session
from typing import Iterable
from datetime import date
from decimal import Decimal
import logging
from app.core.exceptions import ValidationError
from app.core.utils import end_of_day, quantize_money, start_of_day
from app.models.order import OrderStatus
from app.schemas.fees import GlobalFeeSettings, RestaurantFeeProfile
from app.schemas.order import OrderRecord
from app.schemas.settlement import (
    ReportFees, ReportPeriod, ReportRestaurant,
    SettlementLineItem, SettlementReport, SettlementTotals
)
from app.services.fee_service import get_fee_settings, get_restaurant_fee_profile
from app.services.order_service import list_delivered_orders

logger = logging.getLogger(__name__)

HUNDRED = Decimal(100)


def compute_line_item(
    order: OrderRecord,
    fee_profile: RestaurantFeeProfile,
    fee_settings: GlobalFeeSettings
) -> SettlementLineItem:
    """
    Calculate deductions and net payable for one delivered order.

    Percentage-based amounts are rounded to the currency minor unit; every other
    figure is an exact sum or difference of those, so
    total_deductions == commission + platform_fee + transaction_fee and
    net_payable == subtotal - total_deductions hold exactly.
    A negative net payable is returned as is and flagged, never clamped.
    """
    if order.status != OrderStatus.DELIVERED:
        raise ValidationError(
            f"Order {order.order_number} is {order.status.value}; only delivered orders are settled",
            details={"order_number": order.order_number, "status": order.status.value}
        )
    if order.subtotal < 0:
        raise ValidationError(f"Order {order.order_number} has a negative subtotal")

    subtotal = order.subtotal
    commission = quantize_money(subtotal * fee_profile.commission_percent / HUNDRED)
    # Flat per order, from the global settings rather than the restaurant record
    platform_fee = quantize_money(fee_settings.platform_fee)
    transaction_fee = quantize_money(subtotal * fee_settings.transaction_fee_percent / HUNDRED)
    total_deductions = commission + platform_fee + transaction_fee
    net_payable = subtotal - total_deductions

    return SettlementLineItem(
        order_number=order.order_number,
        created_at=order.created_at,
        subtotal=subtotal,
        commission=commission,
        platform_fee=platform_fee,
        transaction_fee=transaction_fee,
        total_deductions=total_deductions,
        net_payable=net_payable,
        is_negative=net_payable < 0
    )


def _check_period(start: date, end: date) -> None:
    if start > end:
        raise ValidationError(
            "Report start date must be on or before the end date",
            details={"start": start.isoformat(), "end": end.isoformat()}
        )


def generate_report(
    orders: Iterable[OrderRecord],
    fee_profile: RestaurantFeeProfile,
    fee_settings: GlobalFeeSettings,
    period: ReportPeriod
) -> SettlementReport:
    """
    Aggregate delivered orders of one restaurant into a settlement report.

    Orders are expected pre-filtered to the restaurant, delivered status and the
    period (end date inclusive through 23:59:59); anything outside that is
    rejected rather than silently dropped. Line items keep the input order.
    """
    _check_period(period.start, period.end)
    window_start = start_of_day(period.start)
    window_end = end_of_day(period.end)

    line_items = []
    totals = SettlementTotals()
    for order in orders:
        if order.restaurant_id != fee_profile.restaurant_id:
            raise ValidationError(
                f"Order {order.order_number} belongs to restaurant {order.restaurant_id}, "
                f"not {fee_profile.restaurant_id}"
            )
        if not (window_start <= order.created_at <= window_end):
            raise ValidationError(
                f"Order {order.order_number} was created outside the report period"
            )

        item = compute_line_item(order, fee_profile, fee_settings)
        line_items.append(item)

        totals.gross_revenue += item.subtotal
        totals.total_commission += item.commission
        totals.total_platform_fee += item.platform_fee
        totals.total_transaction_fee += item.transaction_fee
        totals.total_deductions += item.total_deductions
        totals.net_payable += item.net_payable

    order_count = len(line_items)
    if order_count:
        avg_order_value = quantize_money(totals.gross_revenue / order_count)
    else:
        avg_order_value = Decimal("0.00")

    negative = [item.order_number for item in line_items if item.is_negative]
    if negative:
        logger.warning(
            f"Restaurant {fee_profile.restaurant_id}: deductions exceed subtotal for orders {negative}"
        )

    return SettlementReport(
        restaurant=ReportRestaurant(
            id=fee_profile.restaurant_id,
            name=fee_profile.name,
            phone=fee_profile.phone,
            commission_percent=fee_profile.commission_percent
        ),
        period=period,
        fee_settings=ReportFees(
            platform_fee=fee_settings.platform_fee,
            transaction_fee_percent=fee_settings.transaction_fee_percent
        ),
        line_items=line_items,
        totals=totals,
        order_count=order_count,
        avg_order_value=avg_order_value,
        negative_order_numbers=negative
    )


def build_settlement_report(
    restaurant_id: int,
    start_date: date,
    end_date: date,
    db: Session
) -> SettlementReport:
    """
    Load a restaurant's delivered orders for the period and build its report.
    Raises NotFound for an unknown restaurant and ValidationError for a bad period.
    """
    _check_period(start_date, end_date)
    fee_profile = get_restaurant_fee_profile(restaurant_id, db)
    fee_settings = get_fee_settings(db)
    orders = list_delivered_orders(restaurant_id, start_date, end_date, db)

    report = generate_report(
        orders,
        fee_profile,
        fee_settings,
        ReportPeriod(start=start_date, end=end_date)
    )
    logger.info(
        f"Settlement report for restaurant {restaurant_id} "
        f"({start_date} - {end_date}): {report.order_count} orders, "
        f"net payable {report.totals.net_payable}"
    )
    return report
