"""
Global fee settings model (single row).
"""
from sqlalchemy import Column, Numeric
from app.db.base import BaseModel


class FeeSettings(BaseModel):
    """Platform-wide fees applied to every settled order."""
    __tablename__ = "fee_settings"

    platform_fee = Column(Numeric(10, 2), nullable=False)  # Flat amount per order
    transaction_fee_percent = Column(Numeric(5, 2), nullable=False)  # Percent of order subtotal
