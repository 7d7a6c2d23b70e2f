"""
Inventory and stock schemas
"""
from datetime import datetime
from typing import Optional

from pydantic import Field, field_serializer

from acaia.schemas.common import CamelModel, Quantity, format_datetime_local


class InventoryItemCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    smallest_unit: str = Field("unit", description="ml, g, unit")
    storage_unit_name: Optional[str] = Field(None, max_length=50)
    storage_unit_size_in_smallest: Optional[Quantity] = Field(None, gt=0)
    reorder_threshold_in_smallest: Optional[Quantity] = Field(None, ge=0)


class InventoryItemResponse(InventoryItemCreate):
    id: int
    created_at: datetime

    @field_serializer("created_at")
    def serialize_datetime(self, dt: datetime) -> str:
        return format_datetime_local(dt)


class StockMovementCreate(CamelModel):
    """Manual ledger entry"""
    inventory_item_id: int = Field(..., gt=0)
    movement_type: str = Field(..., description="purchase, adjustment, waste")
    quantity_change: Quantity
    notes: Optional[str] = Field(None, max_length=500)


class StockMovementResponse(CamelModel):
    id: int
    inventory_item_id: int
    movement_type: str
    quantity_change: Quantity
    notes: Optional[str] = None
    sale_id: Optional[int] = None
    staff_id: Optional[int] = None
    created_at: datetime

    @field_serializer("created_at")
    def serialize_datetime(self, dt: datetime) -> str:
        return format_datetime_local(dt)


class StockLevel(CamelModel):
    """Aggregated stock of one inventory item"""
    inventory_item_id: int
    name: str
    smallest_unit: str
    total_stock: Quantity
    reorder_threshold: Optional[Quantity] = None
    below_threshold: bool = False
