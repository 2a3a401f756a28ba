"""Models package - Import all models for SQLAlchemy registration."""
from app.models.restaurant import Restaurant
from app.models.order import Order, OrderItem, OrderStatus
from app.models.fee_settings import FeeSettings

__all__ = [
    "Restaurant",
    "Order",
    "OrderItem",
    "OrderStatus",
    "FeeSettings",
]
