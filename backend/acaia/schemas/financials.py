"""
Financial and report schemas
"""
from datetime import datetime
from typing import List, Optional

from pydantic import field_serializer

from acaia.schemas.common import CamelModel, Money, format_datetime_local


class CommissionResponse(CamelModel):
    """Commission with staff and client names"""
    id: int
    staff_id: int
    staff_name: Optional[str] = None
    commission_type: str
    amount_earned: Money
    related_sale_id: Optional[int] = None
    related_client_id: Optional[int] = None
    related_client_name: Optional[str] = None
    notes: Optional[str] = None
    is_paid_out: bool
    paid_out_at: Optional[datetime] = None
    created_at: datetime

    @field_serializer("paid_out_at", "created_at")
    def serialize_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return format_datetime_local(dt)


class FinancialsData(CamelModel):
    staff_commissions: List[CommissionResponse]
    total_unpaid: Money


class ReportKpis(CamelModel):
    total_revenue: Money
    total_sales: int
    avg_sale_value: Money
    new_clients: int


class SalesDataPoint(CamelModel):
    date: str
    revenue: Money


class ProductLeaderboardItem(CamelModel):
    product_id: int
    name: str
    total_quantity_sold: int


class ReportData(CamelModel):
    kpis: ReportKpis
    sales_over_time: List[SalesDataPoint]
    product_leaderboard: List[ProductLeaderboardItem]
