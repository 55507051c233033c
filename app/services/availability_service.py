import uuid
import datetime as dt
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationFailed
from app.models.availability import ListingAvailability
from app.models.listing import Listing
from app.models.reservation import Reservation

BLOCKING_STATUSES = ("confirmed", "pending")


def availability_to_dict(row: ListingAvailability) -> dict:
    return {
        "id": row.id,
        "listing_id": row.listing_id,
        "date": row.date.isoformat(),
        "is_available": row.is_available,
        "price": row.price,
        "min_nights": row.min_nights,
        "notes": row.notes,
    }


def get_availability(db: Session, listing_id: Optional[str], start_date: Optional[dt.date] = None,
                     end_date: Optional[dt.date] = None) -> dict:
    """Availability rows of a listing plus the reservations that currently block dates in the window."""
    if not listing_id:
        raise ValidationFailed("listing_id is required")

    q = db.query(ListingAvailability).filter(ListingAvailability.listing_id == listing_id)
    if start_date:
        q = q.filter(ListingAvailability.date >= start_date)
    if end_date:
        q = q.filter(ListingAvailability.date <= end_date)
    rows = q.order_by(ListingAvailability.date.asc()).all()

    rq = db.query(Reservation).filter(
        Reservation.listing_id == listing_id,
        Reservation.status.in_(BLOCKING_STATUSES),
    )
    if start_date:
        rq = rq.filter(Reservation.end_date >= start_date)
    if end_date:
        rq = rq.filter(Reservation.start_date <= end_date)
    reservations = rq.order_by(Reservation.start_date.asc()).all()

    return {
        "availability": [availability_to_dict(r) for r in rows],
        "reservations": [
            {"start_date": r.start_date.isoformat(), "end_date": r.end_date.isoformat(), "status": r.status}
            for r in reservations
        ],
    }


def _upsert(db: Session, listing_id: str, date: dt.date, is_available: Optional[bool], price: Optional[float],
            min_nights: Optional[int], notes: Optional[str]) -> ListingAvailability:
    row = (
        db.query(ListingAvailability)
        .filter(ListingAvailability.listing_id == listing_id, ListingAvailability.date == date)
        .first()
    )
    if not row:
        row = ListingAvailability(id=str(uuid.uuid4()), listing_id=listing_id, date=date)
        db.add(row)
    row.is_available = True if is_available is None else bool(is_available)
    row.price = price
    row.min_nights = min_nights or 1
    row.notes = notes
    return row


def _require_listing(db: Session, listing_id: str) -> None:
    if not db.get(Listing, listing_id):
        raise NotFoundError("Listing not found")


def upsert_availability(db: Session, listing_id: Optional[str], date: Optional[dt.date], is_available: bool = True,
                        price: Optional[float] = None, min_nights: Optional[int] = 1,
                        notes: Optional[str] = None) -> ListingAvailability:
    if not listing_id or not date:
        raise ValidationFailed("listing_id and date are required")
    _require_listing(db, listing_id)
    row = _upsert(db, listing_id, date, is_available, price, min_nights, notes)
    db.commit()
    db.refresh(row)
    return row


def bulk_upsert_availability(db: Session, listing_id: Optional[str], updates: Optional[Iterable]) -> list[ListingAvailability]:
    """Upsert many dates in one transaction. `updates` items are dicts or objects with a `date` field."""
    updates = list(updates or [])
    if not listing_id or not updates:
        raise ValidationFailed("listing_id and updates are required")
    _require_listing(db, listing_id)

    rows = []
    seen = {}
    for u in updates:
        get = u.get if isinstance(u, dict) else (lambda k, _u=u: getattr(_u, k, None))
        date = get("date")
        if isinstance(date, str):
            try:
                date = dt.date.fromisoformat(date)
            except ValueError:
                raise ValidationFailed(f"Invalid date: {date}")
        if not date:
            raise ValidationFailed("each update needs a date")
        # last write wins for repeated dates
        if date in seen:
            rows.remove(seen[date])
        row = _upsert(db, listing_id, date, get("is_available"), get("price"), get("min_nights"), get("notes"))
        db.flush()
        seen[date] = row
        rows.append(row)
    db.commit()
    for r in rows:
        db.refresh(r)
    return sorted(rows, key=lambda r: r.date)
