import sys
from pathlib import Path

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Now import after path is set
from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db, enable_sqlite_pragmas
from domain.value_objects import OrderStatus, PaymentMethod
from models import ProductCategory, Product, CustomerDetails, ShoppingCart, ProductOrder


@pytest.fixture
def engine():
    """In-memory database shared by every session of one test"""
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    enable_sqlite_pragmas(engine)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Create in-memory database for testing"""
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client(engine):
    """API client whose requests use the test database"""
    from main import app

    TestingSession = sessionmaker(bind=engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _persist(session, entity):
    session.add(entity)
    session.commit()
    return entity


@pytest.fixture
def make_category(db_session):
    def _make(**overrides):
        fields = {"name": "AAAAAAAAAA", "description": "AAAAAAAAAA"}
        fields.update(overrides)
        return _persist(db_session, ProductCategory(**fields))
    return _make


@pytest.fixture
def make_product(db_session):
    def _make(**overrides):
        fields = {"name": "AAAAAAAAAA", "price": Decimal("10.00")}
        fields.update(overrides)
        return _persist(db_session, Product(**fields))
    return _make


@pytest.fixture
def make_customer(db_session):
    def _make(**overrides):
        fields = {"phone": "555-0100", "city": "Springfield", "country": "US"}
        fields.update(overrides)
        return _persist(db_session, CustomerDetails(**fields))
    return _make


@pytest.fixture
def make_cart(db_session, make_customer):
    def _make(customer=None, **overrides):
        fields = {
            "placed_date": datetime(2024, 1, 1, 12, 0, 0),
            "status": OrderStatus.PAID,
            "total_price": Decimal("50.00"),
            "payment_method": PaymentMethod.CREDIT_CARD,
            "payment_reference": "OLD123",
        }
        fields.update(overrides)
        customer = customer if customer is not None else make_customer()
        cart = ShoppingCart(**fields)
        db_session.add(cart)
        cart.customer_details = customer
        return _persist(db_session, cart)
    return _make


@pytest.fixture
def make_order(db_session, make_cart, make_product):
    def _make(cart=None, product=None, **overrides):
        fields = {"quantity": 1, "total_price": Decimal("10.00")}
        fields.update(overrides)
        cart = cart if cart is not None else make_cart()
        product = product if product is not None else make_product()
        order = ProductOrder(**fields)
        db_session.add(order)
        order.cart = cart
        order.product = product
        return _persist(db_session, order)
    return _make
