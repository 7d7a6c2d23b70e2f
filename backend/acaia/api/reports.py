"""
Business report API
"""
from collections import OrderedDict
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from acaia.api.deps import require_roles
from acaia.config import settings
from acaia.db.database import get_db
from acaia.models.client import Client
from acaia.models.enums import StaffRole
from acaia.models.product import Product
from acaia.models.sale import Sale
from acaia.schemas.common import ApiResponse, ok, quantize_money
from acaia.schemas.financials import (
    ProductLeaderboardItem, ReportData, ReportKpis, SalesDataPoint
)
from acaia.schemas.session import StaffContext

router = APIRouter(prefix="/api/reports", tags=["Reports"])

LEADERBOARD_SIZE = 5


def window_start(now: datetime = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now - timedelta(days=settings.report_window_days)


def sales_by_day(sales) -> list:
    """Daily revenue in the venue's timezone, oldest day first"""
    tz = ZoneInfo(settings.display_timezone)
    days = OrderedDict()
    for sale in sorted(sales, key=lambda s: s.created_at):
        created = sale.created_at
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        day = created.astimezone(tz).date()
        days[day] = days.get(day, Decimal("0")) + Decimal(sale.total_amount)
    return [
        SalesDataPoint(date=day.strftime("%d/%m/%Y"), revenue=revenue)
        for day, revenue in days.items()
    ]


@router.get("", response_model=ApiResponse[ReportData])
def get_reports(
    db: Session = Depends(get_db),
    staff: StaffContext = Depends(require_roles(StaffRole.ADMIN)),
):
    """KPIs, daily revenue and best-selling products over the report window"""
    since = window_start()

    sales = db.query(Sale).filter(Sale.created_at >= since).all()
    total_revenue = sum((Decimal(sale.total_amount) for sale in sales), Decimal("0"))
    total_sales = len(sales)
    new_clients = db.query(func.count(Client.id)).filter(Client.created_at >= since).scalar() or 0

    kpis = ReportKpis(
        total_revenue=total_revenue,
        total_sales=total_sales,
        avg_sale_value=quantize_money(total_revenue / (total_sales or 1)),
        new_clients=new_clients,
    )

    quantity_sold = func.sum(Sale.quantity).label("quantity_sold")
    top_products = (
        db.query(Product.id, Product.name, quantity_sold)
        .join(Sale, Sale.product_id == Product.id)
        .filter(Sale.created_at >= since)
        .group_by(Product.id, Product.name)
        .order_by(quantity_sold.desc(), Product.name)
        .limit(LEADERBOARD_SIZE)
        .all()
    )
    leaderboard = [
        ProductLeaderboardItem(product_id=row.id, name=row.name, total_quantity_sold=int(row.quantity_sold or 0))
        for row in top_products
    ]

    return ok(ReportData(
        kpis=kpis,
        sales_over_time=sales_by_day(sales),
        product_leaderboard=leaderboard,
    ))
