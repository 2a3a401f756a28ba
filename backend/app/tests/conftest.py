"""
Shared fixtures: in-memory database, API client and record factories.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from datetime import datetime
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models import Order, OrderItem, OrderStatus, Restaurant


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def make_restaurant(db_session):
    def _make(name="Spice Route", commission_percent="15", phone="98765 43210", **kwargs):
        restaurant = Restaurant(
            name=name,
            phone=phone,
            commission_percent=Decimal(commission_percent),
            platform_fee_per_order=Decimal(kwargs.pop("platform_fee_per_order", "5")),
            transaction_charge_percent=Decimal(kwargs.pop("transaction_charge_percent", "0")),
            **kwargs
        )
        db_session.add(restaurant)
        db_session.commit()
        db_session.refresh(restaurant)
        return restaurant
    return _make


@pytest.fixture
def make_order(db_session):
    counter = {"n": 0}

    def _make(restaurant, subtotal="100", status=OrderStatus.PENDING, created_at=None, items=None, **kwargs):
        counter["n"] += 1
        subtotal = Decimal(subtotal)
        delivery_fee = Decimal(kwargs.pop("delivery_fee", "30"))
        tax = Decimal(kwargs.pop("tax", "0"))
        order = Order(
            order_number=kwargs.pop("order_number", f"ORD-{counter['n']:04d}"),
            status=status,
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            tax=tax,
            total=subtotal + delivery_fee + tax,
            payment_method=kwargs.pop("payment_method", "cod"),
            payment_status=kwargs.pop("payment_status", "pending"),
            restaurant_id=restaurant.id,
            created_at=created_at or datetime(2026, 10, 5, 12, 0, 0),
            **kwargs
        )
        for position, (quantity, unit_price) in enumerate(items or [(1, subtotal)]):
            unit_price = Decimal(unit_price)
            order.items.append(OrderItem(
                position=position,
                name=f"Item {position + 1}",
                quantity=quantity,
                unit_price=unit_price,
                subtotal=unit_price * quantity
            ))
        db_session.add(order)
        db_session.commit()
        db_session.refresh(order)
        return order
    return _make
