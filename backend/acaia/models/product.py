"""
Product model
"""
from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from acaia.db.database import Base


class Product(Base):
    """Menu catalog entry"""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    category = Column(String(50), nullable=True)
    type = Column(String(20), nullable=False, default="OTHER", comment="DRINK, FOOD, HOOKAH, OTHER")
    sale_price = Column(Numeric(12, 2), nullable=False)
    cost_price = Column(Numeric(12, 2), nullable=False, default=0)
    inventory_item_id = Column(Integer, ForeignKey("inventory_items.id"), nullable=True, index=True)
    deduction_amount_in_smallest_unit = Column(Numeric(12, 3), nullable=True, comment="Stock used per unit sold")
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    inventory_item = relationship("InventoryItem", back_populates="products")
    sales = relationship("Sale", back_populates="product")

    __table_args__ = (
        Index("idx_products_name", "name"),
    )
