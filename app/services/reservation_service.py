import logging
import uuid
import datetime as dt
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError, ValidationFailed
from app.models.availability import ListingAvailability
from app.models.listing import Listing
from app.models.reservation import Reservation

logger = logging.getLogger(__name__)

STATUSES = ("pending", "confirmed", "cancelled", "completed")
BLOCKING_STATUSES = ("confirmed", "pending")
TRANSITIONS = {
    "pending": ("confirmed", "cancelled"),
    "confirmed": ("completed", "cancelled"),
    "cancelled": (),
    "completed": (),
}
REQUIRED_FIELDS = ("listing_id", "customer_name", "customer_email", "customer_phone", "start_date", "end_date")


def _as_date(value) -> Optional[dt.date]:
    if value is None or value == "":
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    try:
        return dt.date.fromisoformat(str(value)[:10])
    except ValueError:
        raise ValidationFailed(f"Invalid date: {value}")


def reservation_to_dict(r: Reservation, listing: Optional[Listing] = None) -> dict:
    out = {
        "id": r.id,
        "listing_id": r.listing_id,
        "customer_name": r.customer_name,
        "customer_email": r.customer_email,
        "customer_phone": r.customer_phone,
        "start_date": r.start_date.isoformat(),
        "end_date": r.end_date.isoformat(),
        "guests_count": r.guests_count,
        "total_price": r.total_price,
        "status": r.status,
        "special_requests": r.special_requests,
        "created_at": r.created_at.isoformat() if r.created_at else None,
        "updated_at": r.updated_at.isoformat() if r.updated_at else None,
    }
    if listing is not None:
        out["listings"] = {"id": listing.id, "name": listing.name, "slug": listing.slug}
    return out


def find_overlapping(db: Session, listing_id: str, start: dt.date, end: dt.date) -> Optional[Reservation]:
    """First blocking reservation whose [start, end] touches the requested range (inclusive bounds)."""
    return (
        db.query(Reservation)
        .filter(
            Reservation.listing_id == listing_id,
            Reservation.status.in_(BLOCKING_STATUSES),
            Reservation.start_date <= end,
            Reservation.end_date >= start,
        )
        .first()
    )


def quote_total(db: Session, listing: Listing, start: dt.date, end: dt.date) -> Optional[float]:
    """Sum of nightly prices for [start, end): per-date overrides first, listing daily price otherwise."""
    overrides = {
        a.date: a.price
        for a in db.query(ListingAvailability)
        .filter(
            ListingAvailability.listing_id == listing.id,
            ListingAvailability.date >= start,
            ListingAvailability.date < end,
        )
        .all()
        if a.price is not None
    }
    nights = (end - start).days
    total = 0.0
    for i in range(nights):
        day = start + dt.timedelta(days=i)
        price = overrides.get(day, listing.price_per_day)
        if price is None:
            return None
        total += float(price)
    return round(total, 2)


def create_reservation(db: Session, data: dict, today: Optional[dt.date] = None) -> Reservation:
    missing = [f for f in REQUIRED_FIELDS if not data.get(f)]
    if missing:
        raise ValidationFailed("Missing required fields: " + ", ".join(missing))

    start = _as_date(data["start_date"])
    end = _as_date(data["end_date"])
    today = today or dt.date.today()
    if start < today:
        raise ValidationFailed("Start date cannot be in the past")
    if end <= start:
        raise ValidationFailed("End date must be after start date")
    raw_guests = data.get("guests_count")
    try:
        guests = 1 if raw_guests in (None, "") else int(raw_guests)
    except (TypeError, ValueError):
        raise ValidationFailed("guests_count must be a number")
    if guests < 1:
        raise ValidationFailed("guests_count must be >= 1")

    # Lock the listing row so concurrent requests for the same listing serialize on the overlap check
    listing = db.execute(
        select(Listing).where(Listing.id == data["listing_id"]).with_for_update()
    ).scalar_one_or_none()
    if not listing or not listing.active:
        raise NotFoundError("Listing not found")

    if find_overlapping(db, listing.id, start, end):
        db.rollback()
        raise ConflictError("Selected dates are already reserved")

    # client-sent totals are ignored
    total = quote_total(db, listing, start, end)

    r = Reservation(
        id=str(uuid.uuid4()),
        listing_id=listing.id,
        customer_name=str(data["customer_name"]).strip(),
        customer_email=str(data["customer_email"]).strip().lower(),
        customer_phone=str(data["customer_phone"]).strip(),
        start_date=start,
        end_date=end,
        guests_count=guests,
        total_price=total,
        status="pending",
        special_requests=data.get("special_requests") or None,
    )
    db.add(r)
    db.commit()
    db.refresh(r)
    logger.info("reservation %s created for listing %s (%s..%s)", r.id, listing.id, start, end)
    return r


def list_reservations(db: Session, listing_id: Optional[str] = None, status: Optional[str] = None,
                      limit: int = 50, offset: int = 0) -> list[dict]:
    q = db.query(Reservation, Listing).outerjoin(Listing, Listing.id == Reservation.listing_id)
    if listing_id:
        q = q.filter(Reservation.listing_id == listing_id)
    if status:
        q = q.filter(Reservation.status == status)
    rows = (
        q.order_by(Reservation.created_at.desc())
        .offset(max(offset, 0))
        .limit(max(min(limit, 500), 1))
        .all()
    )
    return [reservation_to_dict(r, l) for r, l in rows]


def list_customer_reservations(db: Session, email: str) -> list[dict]:
    rows = (
        db.query(Reservation, Listing)
        .outerjoin(Listing, Listing.id == Reservation.listing_id)
        .filter(Reservation.customer_email == (email or "").strip().lower())
        .order_by(Reservation.start_date.desc())
        .all()
    )
    return [reservation_to_dict(r, l) for r, l in rows]


def update_reservation_status(db: Session, reservation_id: Optional[str], status: Optional[str]) -> Reservation:
    if not reservation_id or not status:
        raise ValidationFailed("id and status are required")
    if status not in STATUSES:
        raise ValidationFailed(f"Invalid status: {status}")
    r = db.get(Reservation, reservation_id)
    if not r:
        raise NotFoundError("Reservation not found")
    if status == r.status:
        return r
    if status not in TRANSITIONS.get(r.status, ()):
        raise ValidationFailed(f"Cannot change status from {r.status} to {status}")
    r.status = status
    r.updated_at = dt.datetime.now(dt.timezone.utc)
    db.commit()
    db.refresh(r)
    logger.info("reservation %s -> %s", r.id, status)
    return r
