"""
Product schemas
"""
from datetime import datetime
from typing import Optional

from pydantic import Field, field_serializer

from acaia.schemas.common import CamelModel, Money, Quantity, format_datetime_local
from acaia.schemas.inventory import InventoryItemResponse


class ProductBase(CamelModel):
    """Fields shared by create and response"""
    name: str = Field(..., min_length=1, max_length=100)
    category: Optional[str] = Field(None, max_length=50)
    type: str = Field(..., description="DRINK, FOOD, HOOKAH, OTHER")
    sale_price: Money = Field(..., gt=0)
    cost_price: Money = Field(0, ge=0)
    inventory_item_id: Optional[int] = None


class ProductCreate(ProductBase):
    deduction_amount: Optional[Quantity] = Field(None, gt=0, description="Stock used per unit, defaults to 1")


class ProductUpdate(CamelModel):
    """Partial product update"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[str] = Field(None, max_length=50)
    type: Optional[str] = None
    sale_price: Optional[Money] = Field(None, gt=0)
    cost_price: Optional[Money] = Field(None, ge=0)
    inventory_item_id: Optional[int] = None
    deduction_amount: Optional[Quantity] = Field(None, gt=0)
    is_active: Optional[bool] = None


class ProductResponse(ProductBase):
    id: int
    deduction_amount_in_smallest_unit: Optional[Quantity] = None
    is_active: bool
    inventory_item: Optional[InventoryItemResponse] = None
    created_at: datetime

    @field_serializer("created_at")
    def serialize_datetime(self, dt: datetime) -> str:
        return format_datetime_local(dt)


class MenuProduct(CamelModel):
    id: int
    name: str
    category: Optional[str] = None
    type: str
    sale_price: Money
