"""
Staff commission API
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload

from acaia.api.deps import require_roles
from acaia.db.database import get_db
from acaia.models.enums import StaffRole
from acaia.models.sale import StaffCommission
from acaia.schemas.common import ApiResponse, ok
from acaia.schemas.financials import CommissionResponse, FinancialsData
from acaia.schemas.session import StaffContext

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/financials", tags=["Financials"])


@router.get("", response_model=ApiResponse[FinancialsData])
def get_financials(
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(require_roles(StaffRole.ADMIN)),
):
    """Unpaid staff commissions, oldest first"""
    commissions = (
        db.query(StaffCommission)
        .options(joinedload(StaffCommission.staff), joinedload(StaffCommission.related_client))
        .filter(StaffCommission.is_paid_out.is_(False))
        .order_by(StaffCommission.created_at.asc(), StaffCommission.id.asc())
        .all()
    )
    total_unpaid = sum((Decimal(c.amount_earned) for c in commissions), Decimal("0"))
    return ok(FinancialsData(
        staff_commissions=[CommissionResponse.model_validate(c) for c in commissions],
        total_unpaid=total_unpaid,
    ))


@router.post("/commissions/{commission_id}/payout", response_model=ApiResponse[CommissionResponse])
def pay_out_commission(
    commission_id: int,
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(require_roles(StaffRole.ADMIN)),
):
    """Mark a commission as paid out"""
    commission = db.query(StaffCommission).filter(StaffCommission.id == commission_id).first()
    if not commission:
        raise HTTPException(status_code=404, detail="Commission not found")
    if commission.is_paid_out:
        raise HTTPException(status_code=400, detail="Commission already paid out")

    commission.is_paid_out = True
    commission.paid_out_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(commission)
    logger.info("Commission %s paid out by staff %s", commission.id, staff.staff_id)
    return ok(CommissionResponse.model_validate(commission))
