"""
Restaurant model carrying the restaurant's fee profile.
"""
from sqlalchemy import Column, String, Numeric, Boolean
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Restaurant(BaseModel):
    """Restaurant partner and its negotiated fee profile."""
    __tablename__ = "restaurants"

    name = Column(String(200), nullable=False, index=True)
    phone = Column(String(30), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    commission_percent = Column(Numeric(5, 2), nullable=False, default=15)
    # Declared per restaurant but not read by settlement, which uses fee_settings
    platform_fee_per_order = Column(Numeric(10, 2), nullable=False, default=5)
    transaction_charge_percent = Column(Numeric(5, 2), nullable=False, default=0)

    # Relationships
    orders = relationship("Order", back_populates="restaurant")
