"""
Staff login sessions
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from acaia.api.deps import get_current_staff, security
from acaia.db.database import get_db
from acaia.models.staff import Staff, StaffSession
from acaia.schemas.common import ApiResponse, ok
from acaia.schemas.session import LoginRequest, LoginResponse, SessionStaff, StaffContext
from acaia.security import new_session_token, session_expiry, verify_pin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/session", tags=["Session"])


@router.post("/login", response_model=ApiResponse[LoginResponse])
def login(request: LoginRequest, db: Session = Depends(get_db)):
    """Log in with staff name and PIN"""
    staff = db.query(Staff).filter(Staff.name == request.name.strip()).first()
    if not staff or not staff.is_active or not verify_pin(request.pin, staff.pin_hash):
        logger.info("Failed login for %r", request.name)
        raise HTTPException(status_code=401, detail="Invalid name or PIN")

    token = new_session_token()
    db.add(StaffSession(token=token, staff_id=staff.id, expires_at=session_expiry()))
    db.commit()

    logger.info("Staff %s logged in", staff.id)
    return ok(LoginResponse(
        token=token,
        staff=SessionStaff(id=staff.id, name=staff.name, role=staff.role),
    ))


@router.get("", response_model=ApiResponse[StaffContext])
def get_session(staff: StaffContext = Depends(get_current_staff)):
    """Current staff session"""
    return ok(staff)


@router.post("/logout")
def logout(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
):
    """Invalidate the bearer token"""
    if credentials and credentials.credentials:
        db.query(StaffSession).filter(StaffSession.token == credentials.credentials).delete()
        db.commit()
    return ok(message="Logged out")
