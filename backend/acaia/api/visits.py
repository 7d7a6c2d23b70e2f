"""
Visit API: door check-in, live floor view and visit closing
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from acaia.api.deps import conflict_message, get_current_staff
from acaia.config import settings
from acaia.db.database import get_db
from acaia.models.client import Client
from acaia.models.enums import ClientStatus, VisitStatus
from acaia.models.product import Product
from acaia.models.visit import Visit
from acaia.schemas.common import ApiResponse, ok
from acaia.schemas.product import ProductResponse
from acaia.schemas.session import StaffContext
from acaia.schemas.visit import CheckInRequest, CheckInResponse, LiveClient, LiveData, VisitResponse
from acaia.services.visits import close_visit

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Visits"])


@router.post("/check-in", status_code=201, response_model=ApiResponse[CheckInResponse])
def check_in(request: CheckInRequest, db: Session = Depends(get_db)):
    """
    Check a guest in at the door.

    A known phone number reuses the existing client. The visit starts
    without a seating area.
    """
    entry_fee = request.entry_fee_paid if request.entry_fee_paid is not None else settings.default_entry_fee
    if entry_fee < 0:
        raise HTTPException(status_code=400, detail="Entry fee cannot be negative")

    name = (request.name or "").strip()
    phone = (request.phone_number or "").strip() or None

    client = None
    if phone:
        client = db.query(Client).filter(Client.phone_number == phone).first()

    if client is None:
        client = Client(
            name=name if len(name) > 1 else None,
            phone_number=phone,
            status=ClientStatus.NEW,
            lifetime_spend=Decimal("0"),
            last_visit_spend=Decimal("0"),
        )
        db.add(client)
    elif len(name) > 1:
        client.name = name

    now = datetime.now(timezone.utc)
    try:
        db.flush()
        visit = Visit(
            client_id=client.id,
            seating_area_id=None,
            status=VisitStatus.OPEN,
            entry_time=now,
            entry_fee_paid=Decimal(entry_fee),
            consumable_credit_total=Decimal("0"),
            consumable_credit_remaining=Decimal("0"),
            total_spent=Decimal("0"),
        )
        db.add(visit)
        client.last_visit_date = now
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise HTTPException(status_code=409, detail=conflict_message(e, {"phone_number": "phone number"}))

    db.refresh(visit)
    logger.info("Checked in client %s on visit %s", client.id, visit.id)
    client_name = client.name or f"Anonymous (visit {visit.id})"
    return ok(CheckInResponse(
        visit_id=visit.id,
        client_name=client_name,
        message=f"Welcome, {client_name}!",
    ))


@router.get("/visits/active", response_model=ApiResponse[List[VisitResponse]])
def get_active_visits(
    query: Optional[str] = Query(None, description="Client name or phone"),
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(get_current_staff),
):
    """Open visits, newest first"""
    visits_query = (
        db.query(Visit)
        .options(joinedload(Visit.client), joinedload(Visit.seating_area))
        .filter(Visit.status == VisitStatus.OPEN)
    )
    if query:
        visits_query = visits_query.join(Client, Visit.client_id == Client.id).filter(
            or_(
                Client.name.like(f"%{query}%"),
                Client.phone_number.like(f"%{query}%"),
            )
        )
    visits = visits_query.order_by(Visit.entry_time.desc(), Visit.id.desc()).all()
    return ok([VisitResponse.model_validate(visit) for visit in visits])


@router.post("/visits/{visit_id}/close", response_model=ApiResponse[VisitResponse])
def close_visit_endpoint(
    visit_id: int,
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(get_current_staff),
):
    """Close an open visit and free its seating area"""
    visit = db.query(Visit).filter(Visit.id == visit_id).first()
    if not visit:
        raise HTTPException(status_code=404, detail="Visit not found")

    try:
        close_visit(db, visit)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(visit)
    logger.info("Visit %s closed by staff %s", visit.id, staff.staff_id)
    return ok(VisitResponse.model_validate(visit))


@router.get("/live", response_model=ApiResponse[LiveData])
def get_live_data(
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(get_current_staff),
):
    """Guests currently in the venue and the sellable catalog"""
    visits = (
        db.query(Visit)
        .options(joinedload(Visit.client), joinedload(Visit.seating_area))
        .filter(Visit.status == VisitStatus.OPEN)
        .order_by(Visit.entry_time.desc(), Visit.id.desc())
        .all()
    )
    clients = [
        LiveClient(
            visit_id=visit.id,
            client_id=visit.client_id,
            name=visit.client_name or f"Anonymous (visit {visit.id})",
            seating_area_id=visit.seating_area_id,
            seating_area_name=visit.seating_area_name,
        )
        for visit in visits
    ]

    products = (
        db.query(Product)
        .options(joinedload(Product.inventory_item))
        .filter(Product.is_active.is_(True))
        .order_by(Product.type, Product.category, Product.name)
        .all()
    )
    return ok(LiveData(
        clients=clients,
        products=[ProductResponse.model_validate(product) for product in products],
    ))
