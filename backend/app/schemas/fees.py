"""
Pydantic schemas for global fee settings and restaurant fee profiles.
"""
from pydantic import BaseModel
from typing import Optional
from app.schemas.common import Money, Percent


class GlobalFeeSettings(BaseModel):
    """Platform-wide fees applied to every settled order."""
    platform_fee: Money
    transaction_fee_percent: Percent

    class Config:
        from_attributes = True


class FeeSettingsUpdate(BaseModel):
    """Schema for fee settings update."""
    platform_fee: Optional[Money] = None
    transaction_fee_percent: Optional[Percent] = None


class RestaurantFeeProfile(BaseModel):
    """Restaurant fee profile.

    Only commission_percent feeds settlement. platform_fee_per_order and
    transaction_charge_percent are stored for the restaurant but settlement uses
    the global fee settings instead.
    """
    restaurant_id: int
    name: str
    phone: Optional[str] = None
    commission_percent: Percent
    platform_fee_per_order: Money
    transaction_charge_percent: Percent


class RestaurantFeeUpdate(BaseModel):
    """Schema for restaurant fee profile update."""
    commission_percent: Optional[Percent] = None
    platform_fee_per_order: Optional[Money] = None
    transaction_charge_percent: Optional[Percent] = None
