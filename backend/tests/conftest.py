"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Must be set before any application module reads settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["DB_CREATE_ALL"] = "false"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.main import create_app
from rest_api.models import Admin, Base, Category, Menu, Order, OrderItem, RestaurantTable
from shared.infrastructure.db import get_db
from shared.security.auth import sign_admin_token
from shared.security.password import hash_password


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_EMAIL = "owner@bistro42.com"
ADMIN_PASSWORD = "testpass123"


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def app():
    """A fresh application (and so a fresh realtime hub) per test."""
    return create_app()


@pytest.fixture(scope="function")
def client(app, db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def hub(app):
    """The realtime hub owned by the test application."""
    return app.state.realtime


@pytest.fixture
def seed_admin(db_session):
    """Create the restaurant account with tenant id "42"."""
    admin = Admin(
        id="42",
        email=ADMIN_EMAIL,
        password=hash_password(ADMIN_PASSWORD),
        restaurant_name="Bistro 42",
        pricing_prefs={"currency": "USD"},
        billing_settings={"tax_rate": 0.1},
    )
    db_session.add(admin)
    db_session.commit()
    db_session.refresh(admin)
    return admin


@pytest.fixture
def other_admin(db_session):
    """A second tenant, for isolation checks."""
    admin = Admin(
        id="7",
        email="owner@trattoria7.com",
        password=hash_password("otherpass123"),
        restaurant_name="Trattoria 7",
    )
    db_session.add(admin)
    db_session.commit()
    db_session.refresh(admin)
    return admin


@pytest.fixture
def auth_headers(seed_admin):
    """Bearer headers for tenant "42"."""
    token = sign_admin_token(seed_admin.id, seed_admin.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(other_admin):
    token = sign_admin_token(other_admin.id, other_admin.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed_category(db_session):
    category = Category(name_en="Mains", name_ar="أطباق رئيسية")
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def seed_menu(db_session, seed_admin, seed_category):
    """An available menu item priced 12.50."""
    menu = Menu(
        user_id=seed_admin.id,
        category_id=seed_category.id,
        name_en="Grilled Chicken",
        price=Decimal("12.50"),
        available=True,
    )
    db_session.add(menu)
    db_session.commit()
    db_session.refresh(menu)
    return menu


@pytest.fixture
def seed_table(db_session, seed_admin):
    """Table "T1" of tenant "42", available."""
    table = RestaurantTable(admin_id=seed_admin.id, code="T1", capacity=4)
    db_session.add(table)
    db_session.commit()
    db_session.refresh(table)
    return table


@pytest.fixture
def seed_order(db_session, seed_admin, seed_table, seed_menu):
    """Pending order 17 of tenant "42" on table T1."""
    order = Order(
        id=17,
        admin_id=seed_admin.id,
        table_id=seed_table.id,
        total=Decimal("25.00"),
        status="pending",
        type="dine_in",
    )
    order.order_items.append(
        OrderItem(menu_id=seed_menu.id, quantity=2, price_at_order=Decimal("12.50"))
    )
    db_session.add(order)
    db_session.commit()
    db_session.refresh(order)
    return order
