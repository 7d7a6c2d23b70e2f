"""
Staff models
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from acaia.db.database import Base


class Staff(Base):
    """Staff members who log in with a PIN"""
    __tablename__ = "staff"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True, comment="Display and login name")
    role = Column(String(20), nullable=False, comment="Admin, Manager, Server, Bartender, Cashier, DJ")
    pin_hash = Column(String(255), nullable=False, comment="bcrypt hash of the 6-digit PIN")
    is_active = Column(Boolean, default=True, nullable=False, comment="Inactive staff cannot log in")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    sessions = relationship("StaffSession", back_populates="staff", cascade="all, delete-orphan")
    sales = relationship("Sale", back_populates="staff")
    commissions = relationship("StaffCommission", back_populates="staff")


class StaffSession(Base):
    """Bearer tokens issued at login"""
    __tablename__ = "staff_sessions"

    id = Column(Integer, primary_key=True, index=True)
    token = Column(String(64), nullable=False, unique=True, comment="Opaque bearer token")
    staff_id = Column(Integer, ForeignKey("staff.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False, comment="Token is rejected after this instant")

    staff = relationship("Staff", back_populates="sessions")

    __table_args__ = (
        Index("idx_staff_sessions_expires_at", "expires_at"),
    )
