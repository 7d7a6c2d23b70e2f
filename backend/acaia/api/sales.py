"""
Order API
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from acaia.api.deps import require_roles
from acaia.db.database import get_db
from acaia.exceptions import AcaiaError
from acaia.models.enums import StaffRole
from acaia.schemas.common import ApiResponse, ok
from acaia.schemas.sale import CreateSaleRequest, SaleCreatedResponse
from acaia.schemas.session import StaffContext
from acaia.services.sales import record_sale

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Orders"])

SALE_ROLES = (StaffRole.SERVER, StaffRole.BARTENDER, StaffRole.MANAGER, StaffRole.ADMIN)


@router.post("/orders", status_code=201, response_model=ApiResponse[SaleCreatedResponse])
@router.post("/sales", status_code=201, response_model=ApiResponse[SaleCreatedResponse])
def create_order(
    request: CreateSaleRequest,
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(require_roles(*SALE_ROLES)),
):
    """
    Record an order for a seating area.

    Opens an anonymous visit when the area has none. Sales, client spend,
    the staff commission and stock deductions commit together.
    """
    try:
        result = record_sale(db, staff, request.seating_area_id, request.cart)
    except AcaiaError:
        # Mapped to its own status by the application error handler
        raise
    except Exception as e:
        logger.exception("POST /api/orders failed for seating area %s", request.seating_area_id)
        raise HTTPException(status_code=500, detail=f"Error processing sale: {str(e)}")

    return ok(SaleCreatedResponse(
        sales_created=result.sales_created,
        visit_id=result.visit_id,
        sale_ids=result.sale_ids,
        total_amount=result.total_amount,
    ))
