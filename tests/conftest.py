from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database.connection import Base, get_db
from app.enums.membership_tiers import MembershipTier
from app.enums.product_category import ProductCategory
from app.main import app as fastapi_app
from app.models.customer import Customer
from app.models.product import Product

TEST_DB_URL = "sqlite:///:memory:"

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db():
    # services commit for real, so every test gets fresh tables
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db):
    def override_get_db():
        yield db

    fastapi_app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(fastapi_app)
    finally:
        fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def make_product(db):
    counter = {"n": 0}

    def _make(
        price="25000.00",
        stock=100,
        name=None,
        category=ProductCategory.ELECTRONICS,
        active=True,
    ) -> Product:
        counter["n"] += 1
        product = Product(
            name=name or f"Test Product {counter['n']}",
            category=category,
            price=Decimal(price),
            stock=stock,
            active=active,
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture()
def make_customer(db):
    counter = {"n": 0}

    def _make(tier=MembershipTier.REGULAR, total_spent="0.00", name=None) -> Customer:
        counter["n"] += 1
        customer = Customer(
            name=name or f"Customer {counter['n']}",
            email=f"customer{counter['n']}@example.com",
            membership_tier=tier,
            total_spent=Decimal(total_spent),
            active=True,
        )
        db.add(customer)
        db.commit()
        db.refresh(customer)
        return customer

    return _make
