"""
Order processing: compose a cart into sale lines and persist the order

All effects of one order (sales, client spend, commission, stock deductions)
are written in a single database transaction.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from acaia.config import settings
from acaia.exceptions import UnknownProductError, ValidationError
from acaia.models.enums import StockMovementType
from acaia.models.client import Client
from acaia.models.inventory import StockLedger
from acaia.models.product import Product
from acaia.models.sale import Sale, StaffCommission
from acaia.models.visit import Visit
from acaia.schemas.common import quantize_money
from acaia.schemas.session import StaffContext
from acaia.services.visits import resolve_active_visit

logger = logging.getLogger(__name__)


@dataclass
class SaleLine:
    product: Product
    quantity: int
    price_at_sale: Decimal
    item_total: Decimal
    # Signed stock movement, None when the product has no deduction configured
    quantity_change: Optional[Decimal] = None


@dataclass
class SaleComposition:
    lines: List[SaleLine]
    total_amount: Decimal


@dataclass
class SaleResult:
    visit_id: int
    sale_ids: List[int]
    total_amount: Decimal
    commission_amount: Decimal
    ledger_entries: int = 0

    @property
    def sales_created(self) -> int:
        return len(self.sale_ids)


def compose_sale(db: Session, cart: Sequence) -> SaleComposition:
    """
    Price every cart line from the catalog.

    cart items expose product_id and quantity. Unknown products fail the
    whole cart before anything is written.
    """
    if not cart:
        raise ValidationError("Cart is empty")

    product_ids = {item.product_id for item in cart}
    products = db.query(Product).filter(Product.id.in_(product_ids)).all()
    product_map = {product.id: product for product in products}

    missing = product_ids - set(product_map)
    if missing:
        raise UnknownProductError(missing)

    lines = []
    total = Decimal("0")
    for item in cart:
        product = product_map[item.product_id]
        price_at_sale = Decimal(product.sale_price)
        item_total = price_at_sale * item.quantity
        total += item_total

        line = SaleLine(
            product=product,
            quantity=item.quantity,
            price_at_sale=price_at_sale,
            item_total=item_total,
        )
        deduction = product.deduction_amount_in_smallest_unit
        if product.inventory_item_id and deduction and deduction > 0:
            line.quantity_change = -(Decimal(deduction) * item.quantity)
        else:
            logger.warning(
                "Skipping stock deduction for product %s: missing inventory link or deduction amount",
                product.id,
            )
        lines.append(line)

    return SaleComposition(lines=lines, total_amount=total)


def commission_for(total: Decimal) -> Decimal:
    return quantize_money(total * settings.commission_rate)


def build_commission(staff: StaffContext, visit: Visit, total: Decimal, sale_ids: List[int]) -> StaffCommission:
    rate_pct = (settings.commission_rate * 100).normalize()
    area_name = visit.seating_area.name if visit.seating_area else f"seating area {visit.seating_area_id}"
    return StaffCommission(
        staff_id=staff.staff_id,
        commission_type="sale",
        amount_earned=commission_for(total),
        related_sale_id=sale_ids[0] if sale_ids else None,
        related_client_id=visit.client_id,
        notes=f"{rate_pct:f}% commission on sale of {quantize_money(total)} at {area_name}",
        is_paid_out=False,
    )


def write_sale(db: Session, staff: StaffContext, visit: Visit, composition: SaleComposition) -> SaleResult:
    """Persist an order inside the session's transaction; no commit here"""
    now = datetime.now(timezone.utc)

    # Rows are added one by one so every ledger entry can point at its sale
    sales = []
    for line in composition.lines:
        sale = Sale(
            visit_id=visit.id,
            product_id=line.product.id,
            staff_id=staff.staff_id,
            quantity=line.quantity,
            price_at_sale=line.price_at_sale,
            total_amount=line.item_total,
            created_at=now,
        )
        db.add(sale)
        sales.append(sale)
    db.flush()
    sale_ids = [sale.id for sale in sales]

    total = composition.total_amount
    # Counters are incremented in SQL so concurrent orders on one visit add up
    db.query(Visit).filter(Visit.id == visit.id).update(
        {Visit.total_spent: Visit.total_spent + total},
        synchronize_session=False,
    )
    visit_total = select(Visit.total_spent).where(Visit.id == visit.id).scalar_subquery()
    db.query(Client).filter(Client.id == visit.client_id).update(
        {
            Client.lifetime_spend: Client.lifetime_spend + total,
            Client.last_visit_spend: visit_total,
            Client.last_visit_date: now,
        },
        synchronize_session=False,
    )
    db.expire(visit, ["total_spent"])
    db.expire(visit.client, ["lifetime_spend", "last_visit_spend", "last_visit_date"])

    commission = build_commission(staff, visit, total, sale_ids)
    db.add(commission)

    ledger_entries = 0
    for line, sale in zip(composition.lines, sales):
        if line.quantity_change is None:
            continue
        db.add(StockLedger(
            inventory_item_id=line.product.inventory_item_id,
            movement_type=StockMovementType.SALE,
            quantity_change=line.quantity_change,
            notes=f"Sale of {line.quantity}x {line.product.name} (visit {visit.id})",
            sale_id=sale.id,
            staff_id=staff.staff_id,
            created_at=now,
        ))
        ledger_entries += 1

    db.flush()
    return SaleResult(
        visit_id=visit.id,
        sale_ids=sale_ids,
        total_amount=total,
        commission_amount=commission.amount_earned,
        ledger_entries=ledger_entries,
    )


def record_sale(db: Session, staff: StaffContext, seating_area_id: int, cart: Sequence) -> SaleResult:
    """
    Create an order for a seating area and commit it.

    The cart is validated before the visit is resolved, so a bad cart never
    opens a visit. Any failure rolls the whole order back.
    """
    try:
        composition = compose_sale(db, cart)
        visit = resolve_active_visit(db, seating_area_id)
        result = write_sale(db, staff, visit, composition)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Staff %s recorded %d sale(s) on visit %s, total %s, commission %s, %d stock deduction(s)",
        staff.staff_id, result.sales_created, result.visit_id, quantize_money(result.total_amount),
        result.commission_amount, result.ledger_entries,
    )
    return result
