"""
Product catalog API
"""
import logging
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload

from acaia.api.deps import get_current_staff, require_roles
from acaia.db.database import get_db
from acaia.models.enums import ProductType, StaffRole
from acaia.models.inventory import InventoryItem
from acaia.models.product import Product
from acaia.schemas.common import ApiResponse, ok
from acaia.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from acaia.schemas.session import StaffContext

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["Products"])

CATALOG_ROLES = (StaffRole.ADMIN, StaffRole.MANAGER)


def check_product_type(product_type: str):
    if product_type not in ProductType.ALL:
        raise HTTPException(status_code=400, detail=f"Invalid product type: {product_type}")


def check_inventory_item(db: Session, inventory_item_id: Optional[int]):
    if inventory_item_id is None:
        return
    exists = db.query(InventoryItem.id).filter(InventoryItem.id == inventory_item_id).first()
    if not exists:
        raise HTTPException(status_code=404, detail=f"Inventory item {inventory_item_id} not found")


def load_product(db: Session, product_id: int) -> Product:
    product = (
        db.query(Product)
        .options(joinedload(Product.inventory_item))
        .filter(Product.id == product_id)
        .first()
    )
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.get("", response_model=ApiResponse[List[ProductResponse]])
def get_products(
    product_type: Optional[str] = None,
    is_active: Optional[bool] = None,
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(get_current_staff),
):
    """Products ordered by type, category and name"""
    query = db.query(Product).options(joinedload(Product.inventory_item))

    if product_type:
        query = query.filter(Product.type == product_type)

    if is_active is not None:
        query = query.filter(Product.is_active == is_active)

    products = query.order_by(Product.type, Product.category, Product.name).all()
    return ok([ProductResponse.model_validate(product) for product in products])


@router.get("/{product_id}", response_model=ApiResponse[ProductResponse])
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(get_current_staff),
):
    return ok(ProductResponse.model_validate(load_product(db, product_id)))


@router.post("", status_code=201, response_model=ApiResponse[ProductResponse])
def create_product(
    request: ProductCreate,
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(require_roles(*CATALOG_ROLES)),
):
    """Create a product, optionally linked to an inventory item"""
    check_product_type(request.type)
    check_inventory_item(db, request.inventory_item_id)

    deduction = None
    if request.inventory_item_id is not None:
        deduction = request.deduction_amount if request.deduction_amount is not None else Decimal("1")

    product = Product(
        name=request.name.strip(),
        category=request.category,
        type=request.type,
        sale_price=request.sale_price,
        cost_price=request.cost_price,
        inventory_item_id=request.inventory_item_id,
        deduction_amount_in_smallest_unit=deduction,
        is_active=True,
    )
    db.add(product)
    db.commit()
    logger.info("Product %s created by staff %s", product.id, staff.staff_id)
    return ok(ProductResponse.model_validate(load_product(db, product.id)))


@router.put("/{product_id}", response_model=ApiResponse[ProductResponse])
def update_product(
    product_id: int,
    request: ProductUpdate,
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(require_roles(*CATALOG_ROLES)),
):
    """Partially update a product"""
    product = load_product(db, product_id)

    update_data = request.model_dump(exclude_unset=True)
    if not update_data:
        raise HTTPException(status_code=400, detail="No data provided for update")

    if "type" in update_data:
        check_product_type(update_data["type"])
    if "inventory_item_id" in update_data:
        check_inventory_item(db, update_data["inventory_item_id"])
    for required in ("name", "sale_price", "cost_price", "is_active"):
        if required in update_data and update_data[required] is None:
            raise HTTPException(status_code=400, detail=f"{required} cannot be null")

    if "deduction_amount" in update_data:
        update_data["deduction_amount_in_smallest_unit"] = update_data.pop("deduction_amount")
    if update_data.get("inventory_item_id") and not product.deduction_amount_in_smallest_unit \
            and "deduction_amount_in_smallest_unit" not in update_data:
        update_data["deduction_amount_in_smallest_unit"] = Decimal("1")

    for field, value in update_data.items():
        setattr(product, field, value)

    db.commit()
    db.expire_all()
    return ok(ProductResponse.model_validate(load_product(db, product_id)))
