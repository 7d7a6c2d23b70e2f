"""
Login and session schemas
"""
from pydantic import Field

from acaia.schemas.common import CamelModel


class LoginRequest(CamelModel):
    """PIN login"""
    name: str = Field(..., min_length=1, max_length=100, description="Staff name")
    pin: str = Field(..., min_length=1, max_length=20, description="6-digit PIN")


class StaffContext(CamelModel):
    """Resolved staff identity consumed by the routes"""
    staff_id: int
    name: str
    role: str
    is_logged_in: bool = True


class SessionStaff(CamelModel):
    id: int
    name: str
    role: str


class LoginResponse(CamelModel):
    token: str
    staff: SessionStaff
