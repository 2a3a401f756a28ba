"""
Order and order line item models.
"""
from sqlalchemy import Column, String, Numeric, ForeignKey, Integer, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from app.db.base import BaseModel
import enum


class OrderStatus(str, enum.Enum):
    """Order lifecycle status."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    PREPARING = "preparing"
    READY = "ready"
    ASSIGNED = "assigned"
    PICKED_UP = "picked_up"
    ON_THE_WAY = "on_the_way"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REJECTED = "rejected"


class Order(BaseModel):
    """Customer order placed with a restaurant."""
    __tablename__ = "orders"

    order_number = Column(String(50), unique=True, nullable=False, index=True)
    status = Column(
        SQLEnum(OrderStatus, values_callable=lambda e: [s.value for s in e]),
        default=OrderStatus.PENDING,
        nullable=False,
        index=True
    )
    subtotal = Column(Numeric(12, 2), nullable=False, default=0)
    delivery_fee = Column(Numeric(12, 2), nullable=False, default=0)
    tax = Column(Numeric(12, 2), nullable=False, default=0)
    total = Column(Numeric(12, 2), nullable=False, default=0)  # subtotal + delivery_fee + tax, precomputed upstream
    payment_method = Column(String(30), nullable=True)
    payment_status = Column(String(30), nullable=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)
    customer_id = Column(Integer, nullable=True, index=True)
    address_id = Column(Integer, nullable=True)
    version = Column(Integer, nullable=False, default=1)  # Bumped on every status write

    # Relationships
    restaurant = relationship("Restaurant", back_populates="orders")
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position"
    )


class OrderItem(BaseModel):
    """Line item of an order."""
    __tablename__ = "order_items"

    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)  # Order within the parent order
    name = Column(String(200), nullable=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    subtotal = Column(Numeric(12, 2), nullable=False)  # quantity * unit_price
    note = Column(Text, nullable=True)

    # Relationships
    order = relationship("Order", back_populates="items")
