"""
Database initialization script

    python -m acaia.db.init_db          create tables
    python -m acaia.db.init_db --seed   create tables and sample data
"""
import argparse
import logging
import secrets
from decimal import Decimal

from sqlalchemy.orm import Session

from acaia.db.database import Base, SessionLocal, engine
from acaia.logging_config import configure_logging
from acaia.models import InventoryItem, Product, SeatingArea, Staff, StockLedger
from acaia.models.enums import (
    ProductType, SeatingAreaType, StaffRole, StockMovementType, UnitOfMeasure
)
from acaia.security import hash_pin

logger = logging.getLogger(__name__)

DEFAULT_PIN = "123456"

SEATING_AREAS = [
    {"name": "Table 1 (T1)", "capacity": 4, "type": SeatingAreaType.TABLE, "reservation_cost": Decimal("10.00")},
    {"name": "Table 2 (T2)", "capacity": 4, "type": SeatingAreaType.TABLE, "reservation_cost": Decimal("10.00")},
    {"name": "Bar Seat 1 (B1)", "capacity": 1, "type": SeatingAreaType.BAR_SEAT, "reservation_cost": Decimal("0")},
    {"name": "Lounge Couch A", "capacity": 6, "type": SeatingAreaType.LOUNGE_SEAT, "reservation_cost": Decimal("25.00")},
    {"name": "DJ Booth", "capacity": 2, "type": SeatingAreaType.DJ_BOOTH, "reservation_cost": Decimal("0"),
     "is_active": False},
]


def init_db():
    """Create all tables"""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")


def seed(db: Session):
    """Insert sample data; rows that already exist are left alone"""
    manager = db.query(Staff).filter(Staff.name == "Manager").first()
    if manager is None:
        db.add(Staff(name="Manager", role=StaffRole.MANAGER, pin_hash=hash_pin(DEFAULT_PIN), is_active=True))
        logger.info("Created staff Manager (PIN %s)", DEFAULT_PIN)

    for data in SEATING_AREAS:
        if db.query(SeatingArea).filter(SeatingArea.name == data["name"]).first():
            continue
        area = SeatingArea(qr_code_token=secrets.token_hex(10), **data)
        db.add(area)
        logger.info("Created seating area %s (token %s)", area.name, area.qr_code_token)

    vodka = db.query(InventoryItem).filter(InventoryItem.name == "Vodka").first()
    if vodka is None:
        vodka = InventoryItem(
            name="Vodka",
            smallest_unit=UnitOfMeasure.ML,
            storage_unit_name="bottle",
            storage_unit_size_in_smallest=Decimal("1000"),
            reorder_threshold_in_smallest=Decimal("2000"),
        )
        db.add(vodka)
        db.flush()
        db.add(StockLedger(
            inventory_item_id=vodka.id,
            movement_type=StockMovementType.PURCHASE,
            quantity_change=Decimal("6000"),
            notes="Opening stock",
        ))

    products = [
        {"name": "Caipiroska", "category": "Cocktails", "type": ProductType.DRINK,
         "sale_price": Decimal("15.00"), "cost_price": Decimal("4.50"),
         "inventory_item_id": vodka.id, "deduction_amount_in_smallest_unit": Decimal("50")},
        {"name": "Vodka Shot", "category": "Shots", "type": ProductType.DRINK,
         "sale_price": Decimal("12.00"), "cost_price": Decimal("3.00"),
         "inventory_item_id": vodka.id, "deduction_amount_in_smallest_unit": Decimal("40")},
        {"name": "Hookah", "category": "Hookah", "type": ProductType.HOOKAH,
         "sale_price": Decimal("80.00"), "cost_price": Decimal("20.00")},
    ]
    for data in products:
        if db.query(Product).filter(Product.name == data["name"]).first():
            continue
        db.add(Product(is_active=True, **data))

    db.commit()
    logger.info("Seeding finished")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Initialize the Acaia database")
    parser.add_argument("--seed", action="store_true", help="insert sample staff, seating areas and products")
    args = parser.parse_args(argv)

    configure_logging()
    init_db()
    if args.seed:
        db = SessionLocal()
        try:
            seed(db)
        finally:
            db.close()


if __name__ == "__main__":
    main()
