"""
Seating area schemas
"""
from datetime import datetime
from typing import Optional

from pydantic import Field, field_serializer

from acaia.schemas.common import CamelModel, Money, format_datetime_local


class SeatingAreaCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: str = Field(..., description="TABLE, BAR_SEAT, LOUNGE_SEAT, DJ_BOOTH")
    capacity: Optional[int] = Field(None, ge=0)
    reservation_cost: Money = Field(0, ge=0)


class SeatingAreaUpdate(CamelModel):
    name: Optional[str] = Field(None, max_length=100)
    type: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=0)
    reservation_cost: Optional[Money] = Field(None, ge=0)
    is_active: Optional[bool] = None


class SeatingAreaSummary(CamelModel):
    id: int
    name: str
    type: str


class ActiveVisitSummary(CamelModel):
    id: int
    client_id: Optional[int] = None
    client_name: Optional[str] = None


class SeatingAreaResponse(CamelModel):
    """Seating area with its QR token"""
    id: int
    name: str
    type: str
    capacity: Optional[int] = None
    reservation_cost: Money
    qr_code_token: str
    is_active: bool
    created_at: datetime
    active_visit: Optional[ActiveVisitSummary] = None

    @field_serializer("created_at")
    def serialize_datetime(self, dt: datetime) -> str:
        return format_datetime_local(dt)
