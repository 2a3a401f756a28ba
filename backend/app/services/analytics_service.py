"""
Dashboard analytics over the order set.
"""
from sqlalchemy.orm import Session
from typing import Dict, Iterable, Optional
from decimal import Decimal
from app.core.utils import quantize_money
from app.db.session import upstream_errors
from app.models.order import Order, OrderStatus
from app.models.restaurant import Restaurant
from app.schemas.analytics import DashboardStats, RestaurantRevenue

TOP_RESTAURANTS = 5


def summarize_orders(
    orders: Iterable[Order],
    restaurant_names: Optional[Dict[int, str]] = None,
    total_restaurants: int = 0
) -> DashboardStats:
    """
    Compute dashboard figures from a set of orders.

    Revenue only counts delivered orders (sum of order totals). The average order
    value is revenue over the delivered count, 0 when nothing was delivered. The
    earlier web dashboard divided delivered revenue by every order in the set
    instead, counting open and cancelled orders in the denominator.
    """
    restaurant_names = restaurant_names or {}
    total_orders = 0
    delivered_count = 0
    total_revenue = Decimal("0.00")
    orders_by_status: Dict[str, int] = {}
    per_restaurant: Dict[int, RestaurantRevenue] = {}

    for order in orders:
        total_orders += 1
        status = OrderStatus(order.status).value
        orders_by_status[status] = orders_by_status.get(status, 0) + 1

        if status != OrderStatus.DELIVERED.value:
            continue
        amount = Decimal(order.total or 0)
        delivered_count += 1
        total_revenue += amount

        entry = per_restaurant.get(order.restaurant_id)
        if entry is None:
            entry = RestaurantRevenue(
                restaurant_id=order.restaurant_id,
                name=restaurant_names.get(order.restaurant_id, "Unknown"),
                revenue=Decimal("0.00"),
                orders=0
            )
            per_restaurant[order.restaurant_id] = entry
        entry.revenue += amount
        entry.orders += 1

    avg_order_value = (
        quantize_money(total_revenue / delivered_count) if delivered_count else Decimal("0.00")
    )
    top_restaurants = sorted(
        per_restaurant.values(),
        key=lambda r: (-r.revenue, r.restaurant_id)
    )[:TOP_RESTAURANTS]

    return DashboardStats(
        total_orders=total_orders,
        total_revenue=total_revenue,
        avg_order_value=avg_order_value,
        total_restaurants=total_restaurants,
        orders_by_status=orders_by_status,
        top_restaurants=top_restaurants
    )


def get_dashboard_stats(db: Session) -> DashboardStats:
    """Load every order and restaurant name and summarize them."""
    with upstream_errors(db, "load dashboard data"):
        restaurant_names = {r.id: r.name for r in db.query(Restaurant.id, Restaurant.name).all()}
        orders = db.query(Order).all()
    return summarize_orders(orders, restaurant_names, total_restaurants=len(restaurant_names))
