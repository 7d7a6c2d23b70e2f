"""
Seating area model
"""
from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from acaia.db.database import Base


class SeatingArea(Base):
    """Tables, bar seats and lounges, each reachable through a QR token"""
    __tablename__ = "seating_areas"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    type = Column(String(20), nullable=False, default="TABLE", comment="TABLE, BAR_SEAT, LOUNGE_SEAT, DJ_BOOTH")
    capacity = Column(Integer, nullable=True)
    reservation_cost = Column(Numeric(12, 2), default=0, nullable=False)
    qr_code_token = Column(String(64), nullable=False, unique=True, comment="Printed on the table QR code")
    is_active = Column(Boolean, default=True, nullable=False, comment="Soft delete flag")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    visits = relationship("Visit", back_populates="seating_area")
