"""
Tests for database failures surfacing as UpstreamError (502).
"""
import pytest
from decimal import Decimal
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from app.core.exceptions import UpstreamError
from app.db.session import get_db
from app.main import app
from app.models.restaurant import Restaurant
from app.schemas.fees import FeeSettingsUpdate, RestaurantFeeUpdate
from app.services.fee_service import get_fee_settings, update_fee_settings, update_restaurant_fees


def _database_locked(*args, **kwargs):
    raise OperationalError("COMMIT", {}, Exception("database is locked"))


@pytest.fixture
def broken_db(client, engine):
    """Route requests to a session whose queries all fail."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSession()
        db.query = _database_locked
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield client


def test_failed_fee_settings_commit_is_rolled_back(db_session, monkeypatch):
    """A failing commit raises UpstreamError and leaves the defaults in place."""
    monkeypatch.setattr(db_session, "commit", _database_locked)

    with pytest.raises(UpstreamError) as exc_info:
        update_fee_settings(FeeSettingsUpdate(platform_fee=Decimal("9.00")), db_session)

    assert exc_info.value.status_code == 502
    assert isinstance(exc_info.value.__cause__, OperationalError)
    assert get_fee_settings(db_session).platform_fee == Decimal("5")


def test_failed_restaurant_fee_commit_is_rolled_back(db_session, make_restaurant, monkeypatch):
    """The restaurant keeps its stored commission when the write fails."""
    restaurant = make_restaurant(commission_percent="15")
    monkeypatch.setattr(db_session, "commit", _database_locked)

    with pytest.raises(UpstreamError):
        update_restaurant_fees(
            restaurant.id,
            RestaurantFeeUpdate(commission_percent=Decimal("20")),
            db_session
        )

    stored = db_session.query(Restaurant).filter(Restaurant.id == restaurant.id).one()
    assert stored.commission_percent == Decimal("15")


@pytest.mark.parametrize("path, params", [
    ("/api/settings/fees", None),
    ("/api/restaurants/1/fees", None),
    ("/api/orders", None),
    ("/api/orders/1", None),
    ("/api/analytics/dashboard", None),
    ("/api/reports/settlement", {"restaurant_id": 1, "start_date": "2026-10-01", "end_date": "2026-10-31"}),
])
def test_read_failures_return_502(broken_db, path, params):
    """Failed lookups answer 502 with the standard error body."""
    response = broken_db.get(path, params=params)

    assert response.status_code == 502
    assert response.json()["error"].startswith("Failed to ")
    assert "detail" not in response.json()


def test_failed_fee_settings_write_returns_502(broken_db):
    """PUT /settings/fees reports a database failure as 502."""
    response = broken_db.put("/api/settings/fees", json={"platform_fee": "7.50"})
    assert response.status_code == 502
    assert response.json() == {"error": "Failed to load fee settings"}
