"""
Inventory models
"""
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Index, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from acaia.db.database import Base


class InventoryItem(Base):
    """Stock-keeping unit tracked in its smallest unit of measure"""
    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    smallest_unit = Column(String(10), nullable=False, default="unit", comment="ml, g, unit")
    storage_unit_name = Column(String(50), nullable=True, comment="e.g. bottle, crate")
    storage_unit_size_in_smallest = Column(Numeric(12, 3), nullable=True)
    reorder_threshold_in_smallest = Column(Numeric(12, 3), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    products = relationship("Product", back_populates="inventory_item")
    ledger_entries = relationship("StockLedger", back_populates="inventory_item")


class StockLedger(Base):
    """Append-only signed stock movements; current stock is the sum"""
    __tablename__ = "stock_ledger"

    id = Column(Integer, primary_key=True, index=True)
    inventory_item_id = Column(Integer, ForeignKey("inventory_items.id"), nullable=False, index=True)
    movement_type = Column(String(20), nullable=False, comment="sale, purchase, adjustment, waste")
    quantity_change = Column(Numeric(12, 3), nullable=False, comment="Negative for deductions")
    notes = Column(Text, nullable=True)
    sale_id = Column(Integer, ForeignKey("sales.id"), nullable=True, index=True, comment="Set for sale-driven rows")
    staff_id = Column(Integer, ForeignKey("staff.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    inventory_item = relationship("InventoryItem", back_populates="ledger_entries")
    sale = relationship("Sale")

    __table_args__ = (
        Index("idx_stock_ledger_created_at", "created_at"),
    )
