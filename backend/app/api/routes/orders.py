"""
Order management routes.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.models.order import Order
from app.schemas.order import (
    OrderResponse, StatusUpdateRequest, StatusUpdateAck, TransitionsResponse
)
from app.services.order_service import get_order_model, list_orders, to_order_record
from app.services.order_status_service import (
    allowed_transitions, is_terminal, parse_status, update_order_status
)

router = APIRouter(prefix="/orders", tags=["orders"])


def build_order_response(order: Order) -> OrderResponse:
    """Build order response with restaurant name and next valid statuses."""
    record = to_order_record(order)
    return OrderResponse(
        **record.model_dump(),
        restaurant_name=order.restaurant.name if order.restaurant else None,
        allowed_transitions=allowed_transitions(record.status)
    )


@router.get("", response_model=List[OrderResponse])
async def get_orders(
    status: Optional[str] = Query(None, description="Filter by status; omit or 'all' for every order"),
    restaurant_id: Optional[int] = None,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: Session = Depends(get_db)
):
    """List orders, newest first."""
    status_filter = parse_status(status) if status and status != "all" else None
    orders = list_orders(db, status=status_filter, restaurant_id=restaurant_id, limit=limit)
    return [build_order_response(order) for order in orders]


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    db: Session = Depends(get_db)
):
    """Get a single order with its items."""
    return build_order_response(get_order_model(order_id, db))


@router.get("/{order_id}/transitions", response_model=TransitionsResponse)
async def get_order_transitions(
    order_id: int,
    db: Session = Depends(get_db)
):
    """List the statuses an order can move to next."""
    order = to_order_record(get_order_model(order_id, db))
    return TransitionsResponse(
        order_id=order.id,
        status=order.status,
        is_terminal=is_terminal(order.status),
        allowed_transitions=allowed_transitions(order.status)
    )


@router.patch("/{order_id}/status", response_model=StatusUpdateAck)
async def change_order_status(
    order_id: int,
    update: StatusUpdateRequest,
    db: Session = Depends(get_db)
):
    """Move an order to a new status."""
    return update_order_status(
        order_id,
        update.status,
        db,
        expected_status=update.expected_status,
        expected_version=update.expected_version
    )
