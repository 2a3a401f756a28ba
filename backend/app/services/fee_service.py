"""
Fee service: global fee settings and restaurant fee profiles.
"""
from sqlalchemy.orm import Session
from decimal import Decimal
import logging
import pydantic
from app.core.config import settings
from app.core.exceptions import NotFound, ValidationError
from app.db.session import upstream_errors
from app.models.fee_settings import FeeSettings
from app.models.restaurant import Restaurant
from app.schemas.fees import (
    GlobalFeeSettings, FeeSettingsUpdate,
    RestaurantFeeProfile, RestaurantFeeUpdate
)

logger = logging.getLogger(__name__)


def default_fee_settings() -> GlobalFeeSettings:
    """Fee settings used when none have been saved."""
    return GlobalFeeSettings(
        platform_fee=settings.DEFAULT_PLATFORM_FEE,
        transaction_fee_percent=settings.DEFAULT_TRANSACTION_FEE_PERCENT
    )


def _validated(schema, data: dict, what: str):
    try:
        return schema.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError(
            f"Invalid {what}",
            details={"errors": e.errors(include_url=False, include_context=False, include_input=False)}
        ) from e


def get_fee_settings(db: Session) -> GlobalFeeSettings:
    """
    Get the global fee settings.
    Falls back to the configured defaults (5 per order, 2%) when no row exists.
    """
    with upstream_errors(db, "load fee settings"):
        row = db.query(FeeSettings).order_by(FeeSettings.id).first()
    if not row:
        logger.debug("No fee_settings row found, using defaults")
        return default_fee_settings()
    return _validated(
        GlobalFeeSettings,
        {"platform_fee": row.platform_fee, "transaction_fee_percent": row.transaction_fee_percent},
        "fee settings"
    )


def update_fee_settings(data: FeeSettingsUpdate, db: Session) -> GlobalFeeSettings:
    """Create or update the single fee settings row."""
    current = get_fee_settings(db)
    update_data = data.model_dump(exclude_unset=True, exclude_none=True)

    with upstream_errors(db, "save fee settings"):
        row = db.query(FeeSettings).order_by(FeeSettings.id).first()
        if not row:
            row = FeeSettings(
                platform_fee=current.platform_fee,
                transaction_fee_percent=current.transaction_fee_percent
            )
            db.add(row)

        for field, value in update_data.items():
            setattr(row, field, value)

        db.commit()
        db.refresh(row)
    logger.info(
        f"Fee settings updated: platform_fee={row.platform_fee}, "
        f"transaction_fee_percent={row.transaction_fee_percent}"
    )
    return GlobalFeeSettings.model_validate(row)


def _get_restaurant(restaurant_id: int, db: Session) -> Restaurant:
    with upstream_errors(db, f"load restaurant {restaurant_id}"):
        restaurant = db.query(Restaurant).filter(Restaurant.id == restaurant_id).first()
    if not restaurant:
        raise NotFound("Restaurant", restaurant_id, message="Restaurant not found")
    return restaurant


def _to_profile(restaurant: Restaurant) -> RestaurantFeeProfile:
    return _validated(
        RestaurantFeeProfile,
        {
            "restaurant_id": restaurant.id,
            "name": restaurant.name,
            "phone": restaurant.phone,
            "commission_percent": restaurant.commission_percent,
            "platform_fee_per_order": restaurant.platform_fee_per_order,
            "transaction_charge_percent": restaurant.transaction_charge_percent,
        },
        f"fee profile for restaurant {restaurant.id}"
    )


def get_restaurant_fee_profile(restaurant_id: int, db: Session) -> RestaurantFeeProfile:
    """Get a restaurant's fee profile or raise NotFound."""
    return _to_profile(_get_restaurant(restaurant_id, db))


def update_restaurant_fees(
    restaurant_id: int,
    data: RestaurantFeeUpdate,
    db: Session
) -> RestaurantFeeProfile:
    """Update one or more fee fields of a restaurant."""
    restaurant = _get_restaurant(restaurant_id, db)

    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    with upstream_errors(db, f"save fees of restaurant {restaurant_id}"):
        for field, value in update_data.items():
            setattr(restaurant, field, Decimal(value))

        db.commit()
        db.refresh(restaurant)
    logger.info(f"Restaurant {restaurant_id} fees updated: {sorted(update_data)}")
    return _to_profile(restaurant)
