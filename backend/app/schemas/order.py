"""
Pydantic schemas for Order entity.
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from datetime import datetime, timezone
from decimal import Decimal
from app.models.order import OrderStatus
from app.schemas.common import Money


class OrderItemRecord(BaseModel):
    """Order line item; subtotal is quantity * unit_price."""
    name: Optional[str] = None
    quantity: int = Field(gt=0)
    unit_price: Money
    subtotal: Optional[Money] = None
    note: Optional[str] = None

    @model_validator(mode="after")
    def check_subtotal(self):
        """Fill in subtotal when absent, reject it when it disagrees."""
        expected = self.unit_price * self.quantity
        if self.subtotal is None:
            self.subtotal = expected
        elif self.subtotal != expected:
            raise ValueError(
                f"Item subtotal {self.subtotal} does not match {self.quantity} x {self.unit_price}"
            )
        return self

    class Config:
        from_attributes = True


class OrderRecord(BaseModel):
    """Validated order as consumed by the status machine and settlement."""
    id: int
    order_number: str
    status: OrderStatus = OrderStatus.PENDING
    subtotal: Money
    delivery_fee: Money = Decimal(0)
    tax: Money = Decimal(0)
    total: Money = Decimal(0)
    payment_method: Optional[str] = None
    payment_status: Optional[str] = None
    created_at: datetime
    restaurant_id: int
    customer_id: Optional[int] = None
    address_id: Optional[int] = None
    version: int = 1
    items: List[OrderItemRecord] = []

    @field_validator("created_at")
    @classmethod
    def to_naive_utc(cls, value: datetime) -> datetime:
        """Stored timestamps are naive UTC; convert aware ones to match."""
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    class Config:
        from_attributes = True


class OrderResponse(OrderRecord):
    """Schema for order response."""
    restaurant_name: Optional[str] = None
    allowed_transitions: List[OrderStatus] = []


class StatusUpdateRequest(BaseModel):
    """Schema for an order status change.

    expected_status / expected_version carry what the operator saw; the update is
    rejected with a conflict when the stored order no longer matches.
    """
    status: str
    expected_status: Optional[str] = None
    expected_version: Optional[int] = None


class StatusUpdateAck(BaseModel):
    """Schema for a committed status change."""
    order_id: int
    previous_status: OrderStatus
    status: OrderStatus
    version: int


class TransitionsResponse(BaseModel):
    """Schema for the next states reachable from an order's current status."""
    order_id: int
    status: OrderStatus
    is_terminal: bool
    allowed_transitions: List[OrderStatus]
