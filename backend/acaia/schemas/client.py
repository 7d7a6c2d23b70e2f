"""
Client schemas
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_serializer

from acaia.schemas.common import CamelModel, Money, format_datetime_local
from acaia.schemas.sale import SaleResponse
from acaia.schemas.seating_area import SeatingAreaSummary


class ClientResponse(CamelModel):
    """Client record"""
    id: int
    name: Optional[str] = None
    phone_number: Optional[str] = None
    status: str
    lifetime_spend: Money
    last_visit_spend: Money
    last_visit_date: Optional[datetime] = None
    created_at: datetime

    @field_serializer("last_visit_date", "created_at")
    def serialize_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return format_datetime_local(dt)


class ClientVisit(CamelModel):
    """Visit entry in a client's history"""
    id: int
    status: str
    entry_time: datetime
    exit_time: Optional[datetime] = None
    total_spent: Money
    entry_fee_paid: Money
    seating_area: Optional[SeatingAreaSummary] = None
    sales: List[SaleResponse] = []

    @field_serializer("entry_time", "exit_time")
    def serialize_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return format_datetime_local(dt)


class ClientDetailResponse(ClientResponse):
    visit_count: int
    visits: List[ClientVisit] = []


class ClientUpdate(CamelModel):
    """Partial client update"""
    name: Optional[str] = Field(None, max_length=100)
    phone_number: Optional[str] = Field(None, max_length=30)
    status: Optional[str] = Field(None, description="new, returning, regular, vip")
