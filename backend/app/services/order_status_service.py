"""
Order status state machine and the status update dispatcher.
"""
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Dict, FrozenSet, List, Optional, Union
import logging
from app.core.exceptions import ConflictError, InvalidTransition, UpstreamError, ValidationError
from app.models.order import Order, OrderStatus
from app.schemas.order import OrderRecord, StatusUpdateAck
from app.services.notification_service import OrderChangeEvent, notifier
from app.services.order_service import get_order_model, to_order_record

logger = logging.getLogger(__name__)

TERMINAL_STATUSES: FrozenSet[OrderStatus] = frozenset({
    OrderStatus.DELIVERED,
    OrderStatus.CANCELLED,
    OrderStatus.REJECTED,
})

# Forward progression; every non-terminal state may also be cancelled (added below)
_FORWARD_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.ACCEPTED, OrderStatus.REJECTED}),
    OrderStatus.ACCEPTED: frozenset({OrderStatus.PREPARING}),
    OrderStatus.PREPARING: frozenset({OrderStatus.READY}),
    OrderStatus.READY: frozenset({OrderStatus.ASSIGNED}),
    OrderStatus.ASSIGNED: frozenset({OrderStatus.PICKED_UP}),
    OrderStatus.PICKED_UP: frozenset({OrderStatus.ON_THE_WAY}),
    OrderStatus.ON_THE_WAY: frozenset({OrderStatus.DELIVERED}),
}

VALID_STATUS_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    status: (
        frozenset()
        if status in TERMINAL_STATUSES
        else _FORWARD_TRANSITIONS[status] | {OrderStatus.CANCELLED}
    )
    for status in OrderStatus
}


def parse_status(value: Union[str, OrderStatus]) -> OrderStatus:
    """Convert a raw status value into an OrderStatus, rejecting unknown values."""
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValidationError(
            f"'{value}' is not a valid order status.",
            details={"allowed": [s.value for s in OrderStatus]}
        )


def is_terminal(status: OrderStatus) -> bool:
    """Whether no further transition is permitted from this status."""
    return status in TERMINAL_STATUSES


def allowed_transitions(status: Union[str, OrderStatus]) -> List[OrderStatus]:
    """Statuses reachable in one step, in lifecycle order."""
    current = parse_status(status)
    reachable = VALID_STATUS_TRANSITIONS[current]
    return [s for s in OrderStatus if s in reachable]


def validate_transition(current: OrderStatus, requested: Union[str, OrderStatus]) -> OrderStatus:
    """
    Check that `requested` is reachable from `current`.
    Returns the parsed target status or raises InvalidTransition.
    """
    target = parse_status(requested)
    if is_terminal(current):
        raise InvalidTransition(
            current.value,
            target.value,
            message=f"Order is already {current.value}; no further status changes are allowed."
        )
    if target not in VALID_STATUS_TRANSITIONS[current]:
        raise InvalidTransition(current.value, target.value)
    return target


def transition(order: OrderRecord, requested_status: Union[str, OrderStatus]) -> OrderRecord:
    """
    Apply a status transition to an order.
    Returns a new OrderRecord; the input is left untouched and nothing is persisted.
    """
    target = validate_transition(order.status, requested_status)
    return order.model_copy(update={"status": target})


def update_order_status(
    order_id: int,
    new_status: Union[str, OrderStatus],
    db: Session,
    expected_status: Optional[Union[str, OrderStatus]] = None,
    expected_version: Optional[int] = None
) -> StatusUpdateAck:
    """
    Load an order, run the transition and persist it.

    The write only succeeds if the stored revision is still the one that was read,
    so two operators racing from stale views cannot overwrite each other. When the
    caller passes what it saw (expected_status / expected_version) that is checked
    first. Raises NotFound, ValidationError, InvalidTransition, ConflictError or
    UpstreamError; on any failure the order keeps its prior state.
    """
    order_model = get_order_model(order_id, db)
    current = to_order_record(order_model)

    if expected_status is not None and parse_status(expected_status) != current.status:
        logger.warning(
            f"Order {order_id} status conflict: expected {expected_status}, found {current.status.value}"
        )
        raise ConflictError(
            "Order status changed since it was loaded; refresh and try again.",
            details={"expected_status": str(expected_status), "current_status": current.status.value}
        )
    if expected_version is not None and expected_version != current.version:
        logger.warning(
            f"Order {order_id} version conflict: expected {expected_version}, found {current.version}"
        )
        raise ConflictError(
            "Order was modified since it was loaded; refresh and try again.",
            details={"expected_version": expected_version, "current_version": current.version}
        )

    try:
        updated = transition(current, new_status)
    except InvalidTransition as e:
        logger.warning(f"Rejected status change for order {order_id}: {e}")
        raise

    new_version = current.version + 1
    try:
        rowcount = db.query(Order).filter(
            Order.id == order_id,
            Order.version == current.version
        ).update(
            {"status": updated.status, "version": new_version},
            synchronize_session=False
        )
        if rowcount != 1:
            db.rollback()
            logger.warning(f"Order {order_id} was modified concurrently; status update rejected")
            raise ConflictError(
                "Order was modified by another operator; refresh and try again.",
                details={"expected_version": current.version}
            )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to persist status for order {order_id}: {e}", exc_info=True)
        raise UpstreamError("Failed to update order status") from e

    logger.info(
        f"Order {current.order_number} moved {current.status.value} -> {updated.status.value}"
    )

    event = OrderChangeEvent(
        order_id=order_id,
        restaurant_id=current.restaurant_id,
        previous_status=current.status,
        status=updated.status,
        version=new_version
    )
    notifier.publish("orders", event)
    notifier.publish(f"restaurant:{current.restaurant_id}", event)

    return StatusUpdateAck(
        order_id=order_id,
        previous_status=current.status,
        status=updated.status,
        version=new_version
    )
