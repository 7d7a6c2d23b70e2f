"""
Inventory items and stock ledger API
"""
import logging
from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from acaia.api.deps import conflict_message, get_current_staff, require_roles
from acaia.db.database import get_db
from acaia.models.enums import StaffRole, StockMovementType, UnitOfMeasure
from acaia.models.inventory import InventoryItem, StockLedger
from acaia.schemas.common import ApiResponse, ok
from acaia.schemas.inventory import (
    InventoryItemCreate, InventoryItemResponse, StockLevel, StockMovementCreate, StockMovementResponse
)
from acaia.schemas.session import StaffContext

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Inventory"])

STOCK_ROLES = (StaffRole.ADMIN, StaffRole.MANAGER, StaffRole.BARTENDER)


@router.get("/inventory/items", response_model=ApiResponse[List[InventoryItemResponse]])
def get_inventory_items(
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(get_current_staff),
):
    items = db.query(InventoryItem).order_by(InventoryItem.name).all()
    return ok([InventoryItemResponse.model_validate(item) for item in items])


@router.post("/inventory/items", status_code=201, response_model=ApiResponse[InventoryItemResponse])
def create_inventory_item(
    request: InventoryItemCreate,
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(require_roles(StaffRole.ADMIN, StaffRole.MANAGER)),
):
    """Register a stock-keeping unit"""
    if request.smallest_unit not in UnitOfMeasure.ALL:
        raise HTTPException(status_code=400, detail=f"Invalid unit of measure: {request.smallest_unit}")

    item = InventoryItem(**request.model_dump())
    item.name = item.name.strip()
    db.add(item)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise HTTPException(status_code=409, detail=conflict_message(e, {"name": "inventory item name"}))
    db.refresh(item)
    return ok(InventoryItemResponse.model_validate(item))


@router.get("/stock", response_model=ApiResponse[List[StockLevel]])
def get_stock_levels(
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(get_current_staff),
):
    """Current stock of every inventory item, summed from the ledger"""
    totals = dict(
        db.query(StockLedger.inventory_item_id, func.sum(StockLedger.quantity_change))
        .group_by(StockLedger.inventory_item_id)
        .all()
    )

    levels = []
    for item in db.query(InventoryItem).order_by(InventoryItem.name).all():
        total = Decimal(totals.get(item.id) or 0).quantize(Decimal("0.001"))
        threshold = item.reorder_threshold_in_smallest
        levels.append(StockLevel(
            inventory_item_id=item.id,
            name=item.name,
            smallest_unit=item.smallest_unit,
            total_stock=total,
            reorder_threshold=threshold,
            below_threshold=threshold is not None and total < threshold,
        ))
    return ok(levels)


@router.post("/stock/movements", status_code=201, response_model=ApiResponse[StockMovementResponse])
def create_stock_movement(
    request: StockMovementCreate,
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(require_roles(*STOCK_ROLES)),
):
    """
    Append a manual ledger entry.

    Purchases must add stock and adjustments must be non-zero. Waste always
    removes stock, so a positive waste amount is negated.
    """
    if request.movement_type not in StockMovementType.MANUAL:
        raise HTTPException(
            status_code=400,
            detail=f"Movement type must be one of: {', '.join(StockMovementType.MANUAL)}",
        )

    quantity = Decimal(request.quantity_change)
    if request.movement_type == StockMovementType.PURCHASE and quantity <= 0:
        raise HTTPException(status_code=400, detail="Purchase quantity must be positive")
    if request.movement_type == StockMovementType.WASTE:
        if quantity == 0:
            raise HTTPException(status_code=400, detail="Waste quantity cannot be zero")
        quantity = -abs(quantity)
    if request.movement_type == StockMovementType.ADJUSTMENT and quantity == 0:
        raise HTTPException(status_code=400, detail="Adjustment quantity cannot be zero")

    item = db.query(InventoryItem).filter(InventoryItem.id == request.inventory_item_id).first()
    if not item:
        raise HTTPException(status_code=404, detail="Inventory item not found")

    entry = StockLedger(
        inventory_item_id=item.id,
        movement_type=request.movement_type,
        quantity_change=quantity,
        notes=request.notes,
        staff_id=staff.staff_id,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info("Stock %s of %s on item %s by staff %s", entry.movement_type, quantity, item.id, staff.staff_id)
    return ok(StockMovementResponse.model_validate(entry))
