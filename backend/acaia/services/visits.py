"""
Visit resolution for seating areas

A seating area has at most one open visit. Ordering against an empty area
opens an anonymous client and visit on the fly.
"""
import logging
import time
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from acaia.config import settings
from acaia.exceptions import NotFoundError, ValidationError, VisitConflictError, VisitResolutionError
from acaia.models.client import Client
from acaia.models.enums import ClientStatus, VisitStatus
from acaia.models.seating_area import SeatingArea
from acaia.models.visit import Visit

logger = logging.getLogger(__name__)


def anonymous_client_name() -> str:
    """Walk-in name with the last six digits of the epoch milliseconds"""
    suffix = str(int(time.time() * 1000))[-6:]
    return f"{settings.anonymous_client_prefix} #{suffix}"


def create_anonymous_client(db: Session) -> Client:
    client = Client(
        name=anonymous_client_name(),
        phone_number=None,
        status=ClientStatus.NEW,
        lifetime_spend=Decimal("0"),
        last_visit_spend=Decimal("0"),
    )
    db.add(client)
    db.flush()
    return client


def find_open_visit(db: Session, seating_area_id: int):
    return (
        db.query(Visit)
        .options(joinedload(Visit.client), joinedload(Visit.seating_area))
        .filter(Visit.seating_area_id == seating_area_id, Visit.status == VisitStatus.OPEN)
        .first()
    )


def resolve_active_visit(db: Session, seating_area_id: int) -> Visit:
    """
    Return the open visit of a seating area, opening one when there is none.

    Only flushes; the caller commits or rolls back. A concurrent request that
    opened a visit for the same area first wins: the unique index on open
    visits rejects this one with VisitConflictError.
    """
    area = db.query(SeatingArea).filter(SeatingArea.id == seating_area_id).first()
    if not area or not area.is_active:
        raise NotFoundError(f"Seating area {seating_area_id} not found")

    visit = find_open_visit(db, seating_area_id)

    if visit is None:
        try:
            client = create_anonymous_client(db)
            created = Visit(
                client_id=client.id,
                seating_area_id=seating_area_id,
                status=VisitStatus.OPEN,
                entry_time=datetime.now(timezone.utc),
                entry_fee_paid=Decimal("0"),
                consumable_credit_total=Decimal("0"),
                consumable_credit_remaining=Decimal("0"),
                total_spent=Decimal("0"),
            )
            db.add(created)
            db.flush()
        except IntegrityError as exc:
            logger.warning("Concurrent visit opening on seating area %s: %s", seating_area_id, exc.orig)
            raise VisitConflictError(seating_area_id) from exc

        logger.info("Opened visit %s for seating area %s (client %s)", created.id, seating_area_id, client.id)
        visit = find_open_visit(db, seating_area_id)
        if visit is None:
            raise VisitResolutionError(f"Failed to load the visit just opened for seating area {seating_area_id}")

    elif visit.client_id is None:
        client = create_anonymous_client(db)
        visit.client_id = client.id
        visit.client = client
        db.flush()
        logger.info("Attached anonymous client %s to visit %s", client.id, visit.id)

    if visit.client is None:
        raise VisitResolutionError(f"Client of visit {visit.id} not found")

    return visit


def close_visit(db: Session, visit: Visit) -> Visit:
    """Mark a visit as closed and promote a first-time client to returning"""
    if visit.status != VisitStatus.OPEN:
        raise ValidationError(f"Visit {visit.id} is already closed")

    visit.status = VisitStatus.CLOSED
    visit.exit_time = datetime.now(timezone.utc)
    if visit.client and visit.client.status == ClientStatus.NEW:
        visit.client.status = ClientStatus.RETURNING
    db.flush()
    return visit
