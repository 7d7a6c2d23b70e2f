"""
Sale and commission models
"""
from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, ForeignKey, Index, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from acaia.db.database import Base


class Sale(Base):
    """One immutable line item of an order"""
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    visit_id = Column(Integer, ForeignKey("visits.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    staff_id = Column(Integer, ForeignKey("staff.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    price_at_sale = Column(Numeric(12, 2), nullable=False, comment="Snapshot of the product sale price")
    total_amount = Column(Numeric(12, 2), nullable=False, comment="price_at_sale * quantity")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    visit = relationship("Visit", back_populates="sales")
    product = relationship("Product", back_populates="sales")
    staff = relationship("Staff", back_populates="sales")

    __table_args__ = (
        Index("idx_sales_created_at", "created_at"),
    )

    @property
    def product_name(self):
        return self.product.name if self.product else None

    @property
    def staff_name(self):
        return self.staff.name if self.staff else None


class StaffCommission(Base):
    """Commission owed to the staff member who processed an order"""
    __tablename__ = "staff_commissions"

    id = Column(Integer, primary_key=True, index=True)
    staff_id = Column(Integer, ForeignKey("staff.id"), nullable=False, index=True)
    commission_type = Column(String(20), nullable=False, default="sale")
    amount_earned = Column(Numeric(12, 2), nullable=False)
    related_sale_id = Column(Integer, ForeignKey("sales.id"), nullable=True)
    related_client_id = Column(Integer, ForeignKey("clients.id"), nullable=True)
    notes = Column(Text, nullable=True)
    is_paid_out = Column(Boolean, default=False, nullable=False, index=True)
    paid_out_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    staff = relationship("Staff", back_populates="commissions")
    related_sale = relationship("Sale")
    related_client = relationship("Client")

    @property
    def staff_name(self):
        return self.staff.name if self.staff else None

    @property
    def related_client_name(self):
        return self.related_client.name if self.related_client else None
