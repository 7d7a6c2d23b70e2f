"""
Pytest fixtures for the Acaia API tests.

Every test gets a fresh in-memory SQLite schema. Request handlers receive
their own session bound to the same connection, like in production.
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from acaia.db.database import Base, get_db
from acaia.main import app
from acaia.models import InventoryItem, Product, SeatingArea, Staff, StaffSession
from acaia.models.enums import ProductType, SeatingAreaType, StaffRole
from acaia.security import hash_pin

TEST_PIN = "123456"
# bcrypt is slow on purpose, hash once per run
TEST_PIN_HASH = hash_pin(TEST_PIN)

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Fresh schema per test"""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Test client with get_db pointed at the test engine"""
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def create_staff(db, name: str, role: str, is_active: bool = True) -> Staff:
    staff = Staff(name=name, role=role, pin_hash=TEST_PIN_HASH, is_active=is_active)
    db.add(staff)
    db.commit()
    return staff


def auth_headers(db, staff: Staff, expires_in: timedelta = timedelta(hours=1)) -> dict:
    """Issue a bearer token for a staff member"""
    token = f"test-token-{staff.id}-{staff.role}"
    db.add(StaffSession(
        token=token,
        staff_id=staff.id,
        expires_at=datetime.now(timezone.utc) + expires_in,
    ))
    db.commit()
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin(db_session):
    return create_staff(db_session, "Alice Admin", StaffRole.ADMIN)


@pytest.fixture
def server(db_session):
    return create_staff(db_session, "Sam Server", StaffRole.SERVER)


@pytest.fixture
def admin_headers(db_session, admin):
    return auth_headers(db_session, admin)


@pytest.fixture
def server_headers(db_session, server):
    return auth_headers(db_session, server)


@pytest.fixture
def cashier_headers(db_session):
    return auth_headers(db_session, create_staff(db_session, "Carla Cashier", StaffRole.CASHIER))


@pytest.fixture
def bartender_headers(db_session):
    return auth_headers(db_session, create_staff(db_session, "Bruno Bartender", StaffRole.BARTENDER))


@pytest.fixture
def seating_area(db_session):
    area = SeatingArea(
        name="Table 1 (T1)",
        type=SeatingAreaType.TABLE,
        capacity=4,
        reservation_cost=Decimal("10.00"),
        qr_code_token="a1b2c3d4e5f6a7b8c9d0",
        is_active=True,
    )
    db_session.add(area)
    db_session.commit()
    return area


@pytest.fixture
def other_seating_area(db_session):
    area = SeatingArea(
        name="Bar Seat 1 (B1)",
        type=SeatingAreaType.BAR_SEAT,
        capacity=1,
        reservation_cost=Decimal("0"),
        qr_code_token="0f1e2d3c4b5a69788796",
        is_active=True,
    )
    db_session.add(area)
    db_session.commit()
    return area


@pytest.fixture
def inventory_item(db_session):
    item = InventoryItem(
        name="Vodka",
        smallest_unit="ml",
        storage_unit_name="bottle",
        storage_unit_size_in_smallest=Decimal("1000"),
        reorder_threshold_in_smallest=Decimal("500"),
    )
    db_session.add(item)
    db_session.commit()
    return item


@pytest.fixture
def product(db_session, inventory_item):
    """15.00 drink deducting 5 ml per unit"""
    product = Product(
        name="Caipiroska",
        category="Cocktails",
        type=ProductType.DRINK,
        sale_price=Decimal("15.00"),
        cost_price=Decimal("4.50"),
        inventory_item_id=inventory_item.id,
        deduction_amount_in_smallest_unit=Decimal("5"),
        is_active=True,
    )
    db_session.add(product)
    db_session.commit()
    return product


@pytest.fixture
def untracked_product(db_session):
    """Product without an inventory link"""
    product = Product(
        name="Hookah",
        category="Hookah",
        type=ProductType.HOOKAH,
        sale_price=Decimal("80.00"),
        cost_price=Decimal("20.00"),
        is_active=True,
    )
    db_session.add(product)
    db_session.commit()
    return product
