"""
Seating area management API
"""
import logging
import secrets
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from acaia.api.deps import conflict_message, get_current_staff, require_roles
from acaia.db.database import get_db
from acaia.models.enums import SeatingAreaType, StaffRole, VisitStatus
from acaia.models.product import Product
from acaia.models.seating_area import SeatingArea
from acaia.models.visit import Visit
from acaia.schemas.common import ApiResponse, ok, serialize_decimals
from acaia.schemas.product import MenuProduct
from acaia.schemas.seating_area import (
    ActiveVisitSummary, SeatingAreaCreate, SeatingAreaResponse, SeatingAreaUpdate
)
from acaia.schemas.session import StaffContext
from acaia.schemas.visit import VisitResponse
from acaia.services.visits import resolve_active_visit

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/seating-areas", tags=["Seating areas"])
menu_router = APIRouter(prefix="/api/menu", tags=["Menu"])

CONFLICT_LABELS = {"qr_code_token": "QR token", "name": "seating area name"}


def generate_qr_token(length: int = 10) -> str:
    return secrets.token_hex(length)


def area_response(area: SeatingArea, open_visit: Visit = None) -> SeatingAreaResponse:
    response = SeatingAreaResponse.model_validate(area)
    if open_visit is not None:
        response.active_visit = ActiveVisitSummary(
            id=open_visit.id,
            client_id=open_visit.client_id,
            client_name=open_visit.client_name,
        )
    return response


def get_area_or_404(db: Session, area_id: int) -> SeatingArea:
    area = db.query(SeatingArea).filter(SeatingArea.id == area_id).first()
    if not area:
        raise HTTPException(status_code=404, detail="Seating area not found")
    return area


@router.get("", response_model=ApiResponse[List[SeatingAreaResponse]])
def get_seating_areas(
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(get_current_staff),
):
    """Active seating areas with their current visit"""
    areas = db.query(SeatingArea).filter(SeatingArea.is_active.is_(True)).order_by(SeatingArea.name).all()
    open_visits = db.query(Visit).options(joinedload(Visit.client)).filter(
        Visit.status == VisitStatus.OPEN,
        Visit.seating_area_id.in_([area.id for area in areas]),
    ).all()
    visits_by_area = {visit.seating_area_id: visit for visit in open_visits}
    return ok([area_response(area, visits_by_area.get(area.id)) for area in areas])


@router.post("", status_code=201, response_model=ApiResponse[SeatingAreaResponse])
def create_seating_area(
    request: SeatingAreaCreate,
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(require_roles(StaffRole.ADMIN, StaffRole.MANAGER)),
):
    """Create a seating area with a fresh QR token"""
    if request.type not in SeatingAreaType.ALL:
        raise HTTPException(status_code=400, detail=f"Invalid seating area type: {request.type}")

    area = SeatingArea(
        name=request.name.strip(),
        type=request.type,
        capacity=request.capacity,
        reservation_cost=request.reservation_cost,
        qr_code_token=generate_qr_token(),
        is_active=True,
    )
    db.add(area)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise HTTPException(status_code=409, detail=conflict_message(e, CONFLICT_LABELS))
    db.refresh(area)
    logger.info("Seating area %s created by staff %s", area.id, staff.staff_id)
    return ok(area_response(area))


@router.patch("/{area_id}", response_model=ApiResponse[SeatingAreaResponse])
def update_seating_area(
    area_id: int,
    request: SeatingAreaUpdate,
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(require_roles(StaffRole.ADMIN, StaffRole.MANAGER)),
):
    """Partially update a seating area"""
    update_data = request.model_dump(exclude_unset=True)
    if not update_data:
        raise HTTPException(status_code=400, detail="No data provided for update")

    area = get_area_or_404(db, area_id)

    if "name" in update_data:
        name = (update_data["name"] or "").strip()
        if not name:
            raise HTTPException(status_code=400, detail="Seating area name cannot be empty")
        update_data["name"] = name
    if "type" in update_data and update_data["type"] not in SeatingAreaType.ALL:
        raise HTTPException(status_code=400, detail=f"Invalid seating area type: {update_data['type']}")
    if "reservation_cost" in update_data and update_data["reservation_cost"] is None:
        update_data["reservation_cost"] = 0

    for field, value in update_data.items():
        setattr(area, field, value)

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise HTTPException(status_code=409, detail=conflict_message(e, CONFLICT_LABELS))
    db.refresh(area)
    return ok(area_response(area))


@router.delete("/{area_id}")
def delete_seating_area(
    area_id: int,
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(require_roles(StaffRole.ADMIN, StaffRole.MANAGER)),
):
    """Deactivate a seating area (soft delete)"""
    area = get_area_or_404(db, area_id)
    area.is_active = False
    db.commit()
    return ok({"message": f'Seating area "{area.name}" deactivated'})


@router.post("/{area_id}/visit", response_model=ApiResponse[VisitResponse])
def open_visit(
    area_id: int,
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(get_current_staff),
):
    """Return the open visit of a seating area, opening one if needed"""
    try:
        visit = resolve_active_visit(db, area_id)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(visit)
    return ok(VisitResponse.model_validate(visit))


@menu_router.get("/{token}")
def get_menu(token: str, db: Session = Depends(get_db)):
    """Public menu for the seating area behind a QR token"""
    area = db.query(SeatingArea).filter(
        SeatingArea.qr_code_token == token,
        SeatingArea.is_active.is_(True),
    ).first()
    if not area:
        raise HTTPException(status_code=404, detail="Invalid QR code")

    products = db.query(Product).filter(Product.is_active.is_(True)).order_by(
        Product.category, Product.name
    ).all()

    categories = {}
    for product in products:
        item = MenuProduct.model_validate(product).model_dump(mode="json", by_alias=True)
        categories.setdefault(product.category or "Other", []).append(item)

    return ok(serialize_decimals({
        "seatingArea": {
            "id": area.id,
            "name": area.name,
            "type": area.type,
            "reservationCost": area.reservation_cost,
        },
        "categories": [{"name": name, "products": items} for name, items in categories.items()],
    }))
