"""
Client management API
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from acaia.api.deps import conflict_message, get_current_staff
from acaia.db.database import get_db
from acaia.models.client import Client
from acaia.models.enums import ClientStatus
from acaia.models.sale import Sale
from acaia.models.visit import Visit
from acaia.schemas.client import ClientDetailResponse, ClientResponse, ClientUpdate
from acaia.schemas.common import ApiResponse, ok
from acaia.schemas.session import StaffContext

router = APIRouter(prefix="/api/clients", tags=["Clients"])


@router.get("", response_model=ApiResponse[List[ClientResponse]])
def get_clients(
    skip: int = 0,
    limit: int = 100,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(get_current_staff),
):
    """Clients, most recent visitors first"""
    query = db.query(Client)

    if search:
        query = query.filter(
            or_(
                Client.name.like(f"%{search}%"),
                Client.phone_number.like(f"%{search}%")
            )
        )

    clients = query.order_by(Client.last_visit_date.desc(), Client.id.desc()).offset(skip).limit(limit).all()
    return ok([ClientResponse.model_validate(client) for client in clients])


@router.get("/{client_id}", response_model=ApiResponse[ClientDetailResponse])
def get_client(
    client_id: int,
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(get_current_staff),
):
    """Client with the full visit history"""
    client = (
        db.query(Client)
        .options(
            selectinload(Client.visits).joinedload(Visit.seating_area),
            selectinload(Client.visits).selectinload(Visit.sales).joinedload(Sale.product),
            selectinload(Client.visits).selectinload(Visit.sales).joinedload(Sale.staff),
        )
        .filter(Client.id == client_id)
        .first()
    )
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")

    return ok(ClientDetailResponse.model_validate(client))


@router.patch("/{client_id}", response_model=ApiResponse[ClientResponse])
def update_client(
    client_id: int,
    request: ClientUpdate,
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(get_current_staff),
):
    """Update name, phone number or status"""
    update_data = request.model_dump(exclude_unset=True)
    if not update_data:
        raise HTTPException(status_code=400, detail="No data provided for update")

    client = db.query(Client).filter(Client.id == client_id).first()
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")

    if "status" in update_data and update_data["status"] not in ClientStatus.ALL:
        raise HTTPException(status_code=400, detail=f"Invalid client status: {update_data['status']}")
    if "phone_number" in update_data:
        update_data["phone_number"] = (update_data["phone_number"] or "").strip() or None

    for field, value in update_data.items():
        setattr(client, field, value)

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise HTTPException(status_code=409, detail=conflict_message(e, {"phone_number": "phone number"}))
    db.refresh(client)
    return ok(ClientResponse.model_validate(client))
