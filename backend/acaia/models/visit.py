"""
Visit model
"""
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Index, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from acaia.db.database import Base


class Visit(Base):
    """One continuous stay of a client, optionally bound to a seating area"""
    __tablename__ = "visits"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True, index=True, comment="May be backfilled")
    seating_area_id = Column(Integer, ForeignKey("seating_areas.id"), nullable=True, index=True)
    status = Column(String(20), nullable=False, default="open", comment="open, closed")
    entry_time = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    exit_time = Column(DateTime(timezone=True), nullable=True, comment="Set when the visit is closed")
    entry_fee_paid = Column(Numeric(12, 2), default=0, nullable=False)
    consumable_credit_total = Column(Numeric(12, 2), default=0, nullable=False)
    consumable_credit_remaining = Column(Numeric(12, 2), default=0, nullable=False)
    total_spent = Column(Numeric(12, 2), default=0, nullable=False, comment="Running total of this visit's sales")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    client = relationship("Client", back_populates="visits")
    seating_area = relationship("SeatingArea", back_populates="visits")
    sales = relationship("Sale", back_populates="visit", order_by="Sale.created_at")

    __table_args__ = (
        Index("idx_visits_status", "status"),
        # At most one open visit per seating area
        Index(
            "uq_visits_open_seating_area",
            "seating_area_id",
            unique=True,
            sqlite_where=text("status = 'open'"),
            postgresql_where=text("status = 'open'"),
        ),
    )

    @property
    def is_open(self) -> bool:
        return self.status == "open"

    @property
    def client_name(self):
        return self.client.name if self.client else None

    @property
    def seating_area_name(self):
        return self.seating_area.name if self.seating_area else None
