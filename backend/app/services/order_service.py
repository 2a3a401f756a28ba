"""
Order repository: lookups and filtered listings over stored orders.
"""
from sqlalchemy.orm import Session, joinedload, selectinload
from datetime import date
from typing import List, Optional
import pydantic
from app.core.config import settings
from app.core.exceptions import NotFound, ValidationError
from app.core.utils import end_of_day, start_of_day
from app.db.session import upstream_errors
from app.models.order import Order, OrderStatus
from app.schemas.order import OrderRecord


def to_order_record(order: Order) -> OrderRecord:
    """Convert a stored order into a validated OrderRecord."""
    try:
        return OrderRecord.model_validate(order)
    except pydantic.ValidationError as e:
        raise ValidationError(
            f"Order {order.order_number} has invalid data",
            details={"errors": e.errors(include_url=False, include_context=False, include_input=False)}
        ) from e


def get_order_model(order_id: int, db: Session) -> Order:
    """Load an order row with its items, or raise NotFound."""
    with upstream_errors(db, f"load order {order_id}"):
        order = db.query(Order).options(
            selectinload(Order.items),
            joinedload(Order.restaurant)
        ).filter(Order.id == order_id).first()
    if not order:
        raise NotFound("Order", order_id, message="Order not found")
    return order


def list_orders(
    db: Session,
    status: Optional[OrderStatus] = None,
    restaurant_id: Optional[int] = None,
    limit: Optional[int] = None
) -> List[Order]:
    """List orders newest first, optionally filtered by status and restaurant."""
    limit = limit or settings.ORDER_LIST_LIMIT
    with upstream_errors(db, "list orders"):
        query = db.query(Order).options(
            selectinload(Order.items),
            joinedload(Order.restaurant)
        )
        if status is not None:
            query = query.filter(Order.status == status)
        if restaurant_id is not None:
            query = query.filter(Order.restaurant_id == restaurant_id)

        return query.order_by(Order.created_at.desc(), Order.id.desc()).limit(limit).all()


def list_delivered_orders(
    restaurant_id: int,
    start_date: date,
    end_date: date,
    db: Session
) -> List[OrderRecord]:
    """
    Delivered orders of a restaurant created within [start_date, end_date].
    The end date is inclusive through 23:59:59. Newest first.
    """
    with upstream_errors(db, f"load delivered orders of restaurant {restaurant_id}"):
        orders = db.query(Order).options(
            selectinload(Order.items)
        ).filter(
            Order.restaurant_id == restaurant_id,
            Order.status == OrderStatus.DELIVERED,
            Order.created_at >= start_of_day(start_date),
            Order.created_at <= end_of_day(end_date)
        ).order_by(Order.created_at.desc(), Order.id.desc()).all()

    return [to_order_record(order) for order in orders]
