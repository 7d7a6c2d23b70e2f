"""
Visit schemas
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, field_serializer

from acaia.schemas.common import CamelModel, Money, format_datetime_local
from acaia.schemas.product import ProductResponse


class CheckInRequest(CamelModel):
    """Self check-in at the door"""
    name: Optional[str] = Field(None, max_length=100)
    phone_number: Optional[str] = Field(None, max_length=30)
    entry_fee_paid: Optional[Decimal] = Field(None, description="Defaults to the configured entry fee")


class CheckInResponse(CamelModel):
    visit_id: int
    client_name: Optional[str] = None
    message: str


class VisitResponse(CamelModel):
    """Visit with client and area names"""
    id: int
    client_id: Optional[int] = None
    client_name: Optional[str] = None
    seating_area_id: Optional[int] = None
    seating_area_name: Optional[str] = None
    status: str
    entry_time: datetime
    exit_time: Optional[datetime] = None
    entry_fee_paid: Money
    total_spent: Money

    @field_serializer("entry_time", "exit_time")
    def serialize_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return format_datetime_local(dt)


class LiveClient(CamelModel):
    visit_id: int
    client_id: Optional[int] = None
    name: str
    seating_area_id: Optional[int] = None
    seating_area_name: Optional[str] = None


class LiveData(CamelModel):
    clients: List[LiveClient]
    products: List[ProductResponse]
