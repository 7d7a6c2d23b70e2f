"""
Staff schemas
"""
from datetime import datetime

from pydantic import Field, field_serializer

from acaia.schemas.common import CamelModel, format_datetime_local


class StaffCreate(CamelModel):
    name: str = Field(..., min_length=2, max_length=100)
    role: str = Field(..., description="Admin, Manager, Server, Bartender, Cashier, DJ")
    pin: str = Field(..., pattern=r"^\d{6}$", description="Exactly 6 digits")


class StaffResponse(CamelModel):
    """Staff member without the PIN hash"""
    id: int
    name: str
    role: str
    is_active: bool
    created_at: datetime

    @field_serializer("created_at")
    def serialize_datetime(self, dt: datetime) -> str:
        return format_datetime_local(dt)
