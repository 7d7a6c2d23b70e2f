"""
Staff management API
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from acaia.api.deps import conflict_message, get_current_staff, require_roles
from acaia.db.database import get_db
from acaia.models.enums import StaffRole
from acaia.models.staff import Staff
from acaia.schemas.common import ApiResponse, ok
from acaia.schemas.session import StaffContext
from acaia.schemas.staff import StaffCreate, StaffResponse
from acaia.security import hash_pin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/staff", tags=["Staff"])


@router.get("", response_model=ApiResponse[List[StaffResponse]])
def get_staff(
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(get_current_staff),
):
    """Staff members, PIN hashes excluded"""
    members = db.query(Staff).order_by(Staff.name).all()
    return ok([StaffResponse.model_validate(member) for member in members])


@router.post("", status_code=201, response_model=ApiResponse[StaffResponse])
def create_staff(
    request: StaffCreate,
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(require_roles(StaffRole.ADMIN, StaffRole.MANAGER)),
):
    """Create a staff member with a 6-digit PIN"""
    if request.role not in StaffRole.ALL:
        raise HTTPException(status_code=400, detail=f"Invalid role: {request.role}")

    member = Staff(
        name=request.name.strip(),
        role=request.role,
        pin_hash=hash_pin(request.pin),
        is_active=True,
    )
    db.add(member)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise HTTPException(status_code=409, detail=conflict_message(e, {"name": "staff name"}))
    db.refresh(member)
    logger.info("Staff %s (%s) created by staff %s", member.id, member.role, staff.staff_id)
    return ok(StaffResponse.model_validate(member))
