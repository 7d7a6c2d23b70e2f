"""
Shared route dependencies: staff authentication and role checks
"""
import logging
from datetime import datetime, timezone

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from acaia.db.database import get_db
from acaia.models.staff import StaffSession
from acaia.schemas.session import StaffContext
from acaia.security import as_utc

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_current_staff(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> StaffContext:
    """Resolve the bearer token to the logged-in staff member"""
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Not authenticated, please log in")

    session = db.query(StaffSession).filter(StaffSession.token == credentials.credentials).first()
    if not session or as_utc(session.expires_at) <= datetime.now(timezone.utc):
        raise HTTPException(status_code=401, detail="Session expired or invalid, please log in")

    staff = session.staff
    if not staff or not staff.is_active:
        raise HTTPException(status_code=401, detail="Staff account is inactive")

    return StaffContext(staff_id=staff.id, name=staff.name, role=staff.role, is_logged_in=True)


def require_roles(*roles: str):
    """Dependency factory allowing only the given roles"""
    allowed = set(roles)

    def dependency(staff: StaffContext = Depends(get_current_staff)) -> StaffContext:
        if staff.role not in allowed:
            logger.info("Staff %s with role %s denied (allowed: %s)", staff.staff_id, staff.role, ", ".join(sorted(allowed)))
            raise HTTPException(status_code=403, detail=f"Role {staff.role} is not allowed for this action")
        return staff

    return dependency


def conflict_message(exc: IntegrityError, labels: dict, default: str = "Record already exists") -> str:
    """Map a unique-constraint violation to a message naming the field"""
    text = str(exc.orig).lower()
    for column, label in labels.items():
        if column.lower() in text:
            return f"This {label} is already in use"
    return default
