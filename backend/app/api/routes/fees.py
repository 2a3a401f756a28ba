"""
Fee settings and restaurant fee profile routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.schemas.fees import (
    GlobalFeeSettings, FeeSettingsUpdate,
    RestaurantFeeProfile, RestaurantFeeUpdate
)
from app.services.fee_service import (
    get_fee_settings, update_fee_settings,
    get_restaurant_fee_profile, update_restaurant_fees
)

router = APIRouter(tags=["fees"])


@router.get("/settings/fees", response_model=GlobalFeeSettings)
async def read_fee_settings(db: Session = Depends(get_db)):
    """Get global fee settings (defaults when never saved)."""
    return get_fee_settings(db)


@router.put("/settings/fees", response_model=GlobalFeeSettings)
async def save_fee_settings(
    fee_data: FeeSettingsUpdate,
    db: Session = Depends(get_db)
):
    """Set platform fee and/or transaction fee percent."""
    return update_fee_settings(fee_data, db)


@router.get("/restaurants/{restaurant_id}/fees", response_model=RestaurantFeeProfile)
async def read_restaurant_fees(
    restaurant_id: int,
    db: Session = Depends(get_db)
):
    """Get a restaurant's fee profile."""
    return get_restaurant_fee_profile(restaurant_id, db)


@router.patch("/restaurants/{restaurant_id}/fees", response_model=RestaurantFeeProfile)
async def edit_restaurant_fees(
    restaurant_id: int,
    fee_data: RestaurantFeeUpdate,
    db: Session = Depends(get_db)
):
    """Update a restaurant's commission and declared fees."""
    return update_restaurant_fees(restaurant_id, fee_data, db)
