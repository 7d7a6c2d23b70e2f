"""
Client model
"""
from sqlalchemy import Column, Integer, String, Numeric, DateTime, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from acaia.db.database import Base


class Client(Base):
    """Venue guests; anonymous walk-ins get a generated name"""
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=True, comment="Generated for anonymous walk-ins")
    phone_number = Column(String(30), nullable=True, unique=True, comment="Unique when present")
    status = Column(String(20), default="new", nullable=False, comment="new, returning, regular, vip")
    lifetime_spend = Column(Numeric(12, 2), default=0, nullable=False, comment="Sum of all sales, only ever incremented")
    last_visit_spend = Column(Numeric(12, 2), default=0, nullable=False, comment="Spend of the most recent visit")
    last_visit_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    visits = relationship("Visit", back_populates="client", order_by="Visit.entry_time.desc()")

    __table_args__ = (
        Index("idx_clients_name", "name"),
    )

    @property
    def visit_count(self) -> int:
        return len(self.visits)
