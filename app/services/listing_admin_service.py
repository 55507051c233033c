import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError, ValidationFailed
from app.core.i18n import LOCALES, slugify
from app.core.serialization import row_to_dict
from app.models.availability import ListingAvailability
from app.models.car_segment import CarSegment
from app.models.listing import Listing, ListingI18n
from app.models.reservation import Reservation
from app.services.catalog_service import find_service, listing_image_urls

logger = logging.getLogger(__name__)

DUPLICATE_SLUG = "A listing with this slug already exists"
SAVE_CONFLICT = "Listing conflicts with existing data"

# request field -> model attribute
_FIELDS = {
    "name": "name",
    "slug": "slug",
    "description": "description",
    "location": "location",
    "images": "images",
    "storage_paths": "storage_paths",
    "storage_bucket": "storage_bucket",
    "features": "features",
    "metadata": "meta",
    "price_per_day": "price_per_day",
    "price_per_week": "price_per_week",
    "price_range_min": "price_range_min",
    "price_range_max": "price_range_max",
    "active": "active",
    "sort_order": "sort_order",
    "segment_id": "segment_id",
}

# back-office metadata inputs per service: (key, label, kind)
METADATA_FIELDS = {
    "car-rental": [
        ("brand", "Brand", "text"), ("model", "Model", "text"), ("year", "Year", "number"),
        ("transmission", "Transmission", "text"), ("fuel", "Fuel", "text"), ("doors", "Doors", "number"),
    ],
    "vip-transfer": [
        ("vehicleType", "Vehicle type", "text"), ("brand", "Brand", "text"), ("model", "Model", "text"),
        ("year", "Year", "number"), ("capacity", "Passengers", "number"), ("luggage", "Luggage", "number"),
        ("waitingTime", "Waiting time (min)", "number"), ("driverIncluded", "Driver included", "bool"),
    ],
    "boat-rental": [
        ("boatType", "Boat type", "text"), ("brand", "Brand", "text"), ("model", "Model", "text"),
        ("year", "Year", "number"), ("length", "Length (m)", "number"), ("cabins", "Cabins", "number"),
        ("bathrooms", "Bathrooms", "number"), ("capacity", "Guests", "number"),
        ("captainIncluded", "Captain included", "bool"),
    ],
    "villa-rental": [
        ("bedrooms", "Bedrooms", "number"), ("bathrooms", "Bathrooms", "number"), ("area", "Area (m²)", "number"),
        ("capacity", "Guests", "number"), ("pool", "Pool", "bool"), ("seaView", "Sea view", "bool"),
    ],
    "apart-rental": [
        ("bedrooms", "Bedrooms", "number"), ("bathrooms", "Bathrooms", "number"), ("area", "Area (m²)", "number"),
        ("floor", "Floor", "number"), ("furnished", "Furnished", "bool"), ("wifi", "Wi-Fi", "bool"),
        ("air", "Air conditioning", "bool"), ("parking", "Parking", "bool"),
    ],
    "properties-for-sale": [
        ("propertyType", "Property type", "text"), ("bedrooms", "Bedrooms", "number"),
        ("bathrooms", "Bathrooms", "number"), ("area", "Area (m²)", "number"), ("floors", "Floors", "number"),
        ("buildYear", "Build year", "number"), ("furnished", "Furnished", "bool"), ("pool", "Pool", "bool"),
        ("seaView", "Sea view", "bool"),
    ],
}


def metadata_fields(service_slug: Optional[str]) -> list[tuple[str, str, str]]:
    return METADATA_FIELDS.get(service_slug or "", [])


def _mirror_prices(data: dict) -> dict:
    """Fill missing range columns from the daily/weekly prices."""
    out = dict(data)
    if out.get("price_per_day") is not None and out.get("price_range_min") is None:
        out["price_range_min"] = out["price_per_day"]
    if out.get("price_per_week") is not None and out.get("price_range_max") is None:
        out["price_range_max"] = out["price_per_week"]
    return out


def admin_listing_dict(db: Session, listing: Listing) -> dict:
    out = row_to_dict(listing)
    out["image_urls"] = listing_image_urls(listing)
    out["listings_i18n"] = [
        {"locale": t.locale, "title": t.title, "description": t.description, "slug": t.slug}
        for t in db.query(ListingI18n).filter(ListingI18n.listing_id == listing.id).order_by(ListingI18n.locale).all()
    ]
    return out


def list_admin_listings(db: Session, service_slug: str) -> list[dict]:
    """All listings of a service, inactive included. Unknown service gives an empty list."""
    service = find_service(db, service_slug, include_inactive=True)
    if not service:
        return []
    rows = (
        db.query(Listing)
        .filter(Listing.service_id == service.id)
        .order_by(Listing.created_at.desc())
        .all()
    )
    return [admin_listing_dict(db, l) for l in rows]


def get_admin_listing(db: Session, listing_id: str, service_slug: Optional[str] = None) -> Listing:
    """Listing by id. With `service_slug`, the listing must also belong to that service."""
    listing = db.get(Listing, listing_id)
    if listing and service_slug is not None:
        service = find_service(db, service_slug, include_inactive=True)
        if not service or service.id != listing.service_id:
            listing = None
    if not listing:
        raise NotFoundError("Listing not found")
    return listing


def _slug_taken(db: Session, service_id: str, slug: str, exclude_id: Optional[str] = None) -> bool:
    q = db.query(Listing.id).filter(Listing.service_id == service_id, Listing.slug == slug)
    if exclude_id:
        q = q.filter(Listing.id != exclude_id)
    return q.first() is not None


def _upsert_translations(db: Session, listing: Listing, translations: dict) -> None:
    for locale, tr in (translations or {}).items():
        if locale not in LOCALES:
            raise ValidationFailed(f"Unsupported locale: {locale}")
        tr = tr if isinstance(tr, dict) else tr.model_dump()
        title = (tr.get("title") or "").strip()
        slug = (tr.get("slug") or "").strip() or slugify(title) or listing.slug
        row = (
            db.query(ListingI18n)
            .filter(ListingI18n.listing_id == listing.id, ListingI18n.locale == locale)
            .first()
        )
        if not row:
            row = ListingI18n(id=str(uuid.uuid4()), listing_id=listing.id, locale=locale)
            db.add(row)
        row.title = title
        row.description = tr.get("description")
        row.slug = slug


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if "uq_listings_service_slug" in str(e.orig) or "listings.slug" in str(e.orig):
            raise ConflictError(DUPLICATE_SLUG)
        logger.warning("listing write rejected: %s", e.orig)
        raise ConflictError(SAVE_CONFLICT)


def _check_segment(db: Session, segment_id: Optional[str]) -> None:
    if segment_id and not db.get(CarSegment, segment_id):
        raise ValidationFailed(f"Unknown segment_id: {segment_id}")


def _base_slug(data: dict) -> str:
    slug = slugify(data.get("slug") or "") or slugify(data["name"])
    # names in Cyrillic or Arabic script have no ASCII slug
    return slug or f"listing-{uuid.uuid4().hex[:8]}"


def create_listing(db: Session, service_slug: str, data: dict) -> Listing:
    service = find_service(db, service_slug, include_inactive=True)
    if not service:
        raise NotFoundError(f"Service not found for slug: {service_slug}")

    data = _mirror_prices(data)
    translations = data.pop("translations", None) or {}
    data["name"] = (data.get("name") or "").strip() or "Untitled"
    data["slug"] = _base_slug(data)
    _check_segment(db, data.get("segment_id"))
    if _slug_taken(db, service.id, data["slug"]):
        raise ConflictError(DUPLICATE_SLUG)

    now = datetime.now(timezone.utc)
    listing = Listing(id=str(uuid.uuid4()), service_id=service.id, created_at=now, updated_at=now)
    for key, attr in _FIELDS.items():
        if key in data:
            setattr(listing, attr, data[key])
    listing.storage_bucket = listing.storage_bucket or "listings"
    listing.segment_id = listing.segment_id or None
    db.add(listing)
    db.flush()
    _upsert_translations(db, listing, translations)
    _commit(db)
    db.refresh(listing)
    logger.info("listing %s created in %s", listing.slug, service.slug)
    return listing


def update_listing(db: Session, listing_id: str, data: dict, service_slug: Optional[str] = None) -> Listing:
    """Partial update: only keys present in `data` are written."""
    listing = get_admin_listing(db, listing_id, service_slug)
    data = _mirror_prices(data)
    translations = data.pop("translations", None)

    if "slug" in data:
        slug = slugify(data["slug"] or "")
        if not slug:
            raise ValidationFailed("slug cannot be empty")
        if _slug_taken(db, listing.service_id, slug, exclude_id=listing.id):
            raise ConflictError(DUPLICATE_SLUG)
        data["slug"] = slug
    if "name" in data and not (data["name"] or "").strip():
        raise ValidationFailed("name cannot be empty")
    if "segment_id" in data:
        data["segment_id"] = data["segment_id"] or None
        _check_segment(db, data["segment_id"])

    for key, attr in _FIELDS.items():
        if key in data:
            setattr(listing, attr, data[key])
    listing.updated_at = datetime.now(timezone.utc)
    if translations:
        _upsert_translations(db, listing, translations)
    _commit(db)
    db.refresh(listing)
    return listing


def delete_listing(db: Session, listing_id: str, service_slug: Optional[str] = None) -> None:
    listing = get_admin_listing(db, listing_id, service_slug)
    if db.query(Reservation.id).filter(Reservation.listing_id == listing.id).first():
        raise ConflictError("Listing has reservations; deactivate it instead")
    db.query(ListingI18n).filter(ListingI18n.listing_id == listing.id).delete(synchronize_session=False)
    db.query(ListingAvailability).filter(ListingAvailability.listing_id == listing.id).delete(synchronize_session=False)
    db.delete(listing)
    db.commit()
    logger.info("listing %s deleted", listing_id)
