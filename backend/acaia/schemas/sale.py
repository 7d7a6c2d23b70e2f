"""
Order schemas
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_serializer

from acaia.schemas.common import CamelModel, Money, format_datetime_local


class CartItem(CamelModel):
    """One cart line"""
    product_id: int = Field(..., gt=0, description="Product ID")
    quantity: int = Field(..., ge=1, description="Units sold")


class CreateSaleRequest(CamelModel):
    """Order placed for a seating area"""
    seating_area_id: int = Field(..., gt=0, description="Seating area ID")
    cart: List[CartItem] = Field(..., min_length=1, description="Cart lines")


class SaleCreatedResponse(CamelModel):
    sales_created: int
    visit_id: int
    sale_ids: List[int]
    total_amount: Money


class SaleResponse(CamelModel):
    """Sale line with display names"""
    id: int
    visit_id: int
    product_id: int
    product_name: Optional[str] = None
    staff_id: int
    staff_name: Optional[str] = None
    quantity: int
    price_at_sale: Money
    total_amount: Money
    created_at: datetime

    @field_serializer("created_at")
    def serialize_datetime(self, dt: datetime) -> str:
        return format_datetime_local(dt)
