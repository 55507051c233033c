import datetime as dt
from typing import Iterable, Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.core.i18n import pick_translation, localized_title, localized_description
from app.core.serialization import row_to_dict
from app.models.service import Service, ServiceI18n
from app.models.listing import Listing, ListingI18n
from app.models.car_segment import CarSegment, CarSegmentI18n
from app.models.availability import ListingAvailability
from app.services.storage_service import public_url

AVAILABILITY_WINDOW_DAYS = 90

# URL spelling (legacy or localized) -> canonical services.slug
SERVICE_ALIASES = {
    "rent-a-car": "car-rental",
    "arenda-avtomobiley": "car-rental",
    "arenda-avtomobilej": "car-rental",
    "arac-kiralama": "car-rental",
    "tekne-kiralama": "boat-rental",
    "villa-kiralama": "villa-rental",
    "apart-kiralama": "apart-rental",
    "apartment-rental": "apart-rental",
    "satilik-konutlar": "properties-for-sale",
    "nedvizhimost-na-prodazhu": "properties-for-sale",
    "aqarat-lilbay": "properties-for-sale",
}

CANONICAL_SERVICES = (
    "car-rental",
    "vip-transfer",
    "boat-rental",
    "villa-rental",
    "apart-rental",
    "properties-for-sale",
)

# UI tab ids -> car_segments.slug
SEGMENT_ALIASES = {
    "ekonomik": "economic",
    "economy": "economic",
    "economic": "economic",
    "orta": "mid-class",
    "mid": "mid-class",
    "mid-class": "mid-class",
    "middle": "mid-class",
    "premium": "premium",
    "ust": "premium",
    "luxury": "premium",
    "atv-jeep": "atv-jeep",
    "atv": "atv-jeep",
    "jeep": "atv-jeep",
    "komfort": "comfort",
    "comfort": "comfort",
    "comfort-class": "comfort",
}


def canonical_service_slug(slug: str) -> str:
    s = (slug or "").strip().lower()
    return SERVICE_ALIASES.get(s, s)


def canonical_segment_slug(value: str) -> str:
    v = (value or "").strip().lower()
    return SEGMENT_ALIASES.get(v, v)


def _split_csv(value: Optional[str]) -> list[str]:
    return [s.strip() for s in (value or "").split(",") if s.strip()]


def list_services(db: Session, locale: str) -> list[dict]:
    """Active services that have a translation for `locale`, ordered by sort_order.

    Inner join: a service without an i18n row for the locale is left out.
    """
    rows = (
        db.query(Service, ServiceI18n)
        .join(ServiceI18n, and_(ServiceI18n.service_id == Service.id, ServiceI18n.locale == locale))
        .filter(Service.active == True)
        .order_by(Service.sort_order.asc(), Service.slug.asc())
        .all()
    )
    return [
        {
            "id": s.id,
            "name": s.name,
            "slug": s.slug,
            "icon": s.icon,
            "sort_order": s.sort_order,
            "title": tr.title or s.name,
            "summary": tr.summary,
        }
        for s, tr in rows
    ]


def find_service(db: Session, slug: str, include_inactive: bool = False) -> Optional[Service]:
    """Resolve any known spelling of a service to its row (canonical slug, raw slug or localized slug)."""
    canonical = canonical_service_slug(slug)
    q = db.query(Service).filter(Service.slug.in_({canonical, slug}))
    if not include_inactive:
        q = q.filter(Service.active == True)
    service = q.order_by(Service.sort_order.asc()).first()
    if service:
        return service
    q = (
        db.query(Service)
        .join(ServiceI18n, ServiceI18n.service_id == Service.id)
        .filter(ServiceI18n.slug == slug)
    )
    if not include_inactive:
        q = q.filter(Service.active == True)
    return q.first()


def service_summary(db: Session, service: Service, locale: str) -> dict:
    tr = (
        db.query(ServiceI18n)
        .filter(ServiceI18n.service_id == service.id, ServiceI18n.locale == locale)
        .first()
    )
    return {
        "id": service.id,
        "name": service.name,
        "slug": service.slug,
        "icon": service.icon,
        "description": service.description,
        "title": (tr.title if tr and tr.title else service.name),
        "summary": tr.summary if tr else None,
        "body": tr.body if tr else None,
    }


def listing_image_urls(listing: Listing) -> list[str]:
    if listing.storage_paths:
        bucket = listing.storage_bucket or "listings"
        return [public_url(bucket, p) for p in listing.storage_paths]
    return list(listing.images or [])


def translations_by_listing(db: Session, listing_ids: Iterable[str]) -> dict[str, list[ListingI18n]]:
    ids = list(listing_ids)
    out: dict[str, list[ListingI18n]] = {i: [] for i in ids}
    if not ids:
        return out
    for tr in db.query(ListingI18n).filter(ListingI18n.listing_id.in_(ids)).all():
        out.setdefault(tr.listing_id, []).append(tr)
    return out


def _segments_by_id(db: Session, segment_ids: Iterable[Optional[str]]) -> dict[str, CarSegment]:
    ids = {s for s in segment_ids if s}
    if not ids:
        return {}
    return {s.id: s for s in db.query(CarSegment).filter(CarSegment.id.in_(ids)).all()}


def serialize_listing(listing: Listing, translations: list[ListingI18n], locale: str,
                      segment: Optional[CarSegment] = None) -> dict:
    tr = pick_translation(translations, locale)
    out = row_to_dict(listing)
    out["title"] = localized_title(listing.name, tr)
    out["localized_description"] = localized_description(listing.description, tr)
    out["localized_slug"] = (tr.slug if tr and tr.slug else listing.slug)
    out["image_urls"] = listing_image_urls(listing)
    out["car_segments"] = {"id": segment.id, "slug": segment.slug} if segment else None
    out["listings_i18n"] = [
        {"locale": t.locale, "title": t.title, "description": t.description, "slug": t.slug}
        for t in translations
    ]
    return out


def resolve_segment_ids(db: Session, segment: Optional[str] = None, segment_ids: Optional[str] = None) -> list[str]:
    ids = _split_csv(segment_ids)
    slugs = sorted({canonical_segment_slug(v) for v in _split_csv(segment)})
    if slugs:
        ids.extend(r.id for r in db.query(CarSegment).filter(CarSegment.slug.in_(slugs)).all())
    return ids


def list_listings(db: Session, service_slug: str, locale: str,
                  segment: Optional[str] = None, segment_ids: Optional[str] = None) -> dict:
    """Active listings of a service. Unknown or inactive service yields an empty result, not an error."""
    service = find_service(db, service_slug)
    if not service:
        return {"service": None, "listings": []}

    q = db.query(Listing).filter(Listing.service_id == service.id, Listing.active == True)
    ids = resolve_segment_ids(db, segment, segment_ids)
    if ids:
        q = q.filter(Listing.segment_id.in_(ids))
    listings = q.order_by(Listing.sort_order.asc(), Listing.created_at.asc()).all()

    trs = translations_by_listing(db, [l.id for l in listings])
    segments = _segments_by_id(db, [l.segment_id for l in listings])
    return {
        "service": service_summary(db, service, locale),
        "listings": [serialize_listing(l, trs.get(l.id, []), locale, segments.get(l.segment_id)) for l in listings],
    }


def _find_listing(db: Session, slug: str, service_id: Optional[str] = None) -> Optional[Listing]:
    q = db.query(Listing).filter(Listing.slug == slug, Listing.active == True)
    if service_id:
        q = q.filter(Listing.service_id == service_id)
    listing = q.first()
    if listing:
        return listing
    # localized slug override
    q = (
        db.query(Listing)
        .join(ListingI18n, ListingI18n.listing_id == Listing.id)
        .filter(ListingI18n.slug == slug, Listing.active == True)
    )
    if service_id:
        q = q.filter(Listing.service_id == service_id)
    return q.first()


def availability_window(db: Session, listing_id: str, today: Optional[dt.date] = None,
                        days: int = AVAILABILITY_WINDOW_DAYS) -> list[dict]:
    start = today or dt.date.today()
    end = start + dt.timedelta(days=days)
    rows = (
        db.query(ListingAvailability)
        .filter(
            ListingAvailability.listing_id == listing_id,
            ListingAvailability.date >= start,
            ListingAvailability.date <= end,
        )
        .order_by(ListingAvailability.date.asc())
        .all()
    )
    return [
        {"date": r.date.isoformat(), "is_available": r.is_available, "price": r.price, "min_nights": r.min_nights}
        for r in rows
    ]


def _listing_detail(db: Session, listing: Listing, service: Service, locale: str,
                    today: Optional[dt.date], days: int) -> dict:
    trs = translations_by_listing(db, [listing.id]).get(listing.id, [])
    segment = _segments_by_id(db, [listing.segment_id]).get(listing.segment_id)
    out = serialize_listing(listing, trs, locale, segment)
    out["services"] = {"id": service.id, "name": service.name, "slug": service.slug, "icon": service.icon}
    return {"listing": out, "availability": availability_window(db, listing.id, today=today, days=days)}


def get_listing_detail(db: Session, service_slug: str, slug: str, locale: str,
                       today: Optional[dt.date] = None, days: int = AVAILABILITY_WINDOW_DAYS) -> dict:
    service = find_service(db, service_slug)
    if not service:
        raise NotFoundError("Listing not found")
    listing = _find_listing(db, slug, service.id)
    if not listing:
        raise NotFoundError("Listing not found")
    return _listing_detail(db, listing, service, locale, today, days)


def get_listing_by_slug(db: Session, slug: str, locale: str,
                        today: Optional[dt.date] = None, days: int = AVAILABILITY_WINDOW_DAYS) -> dict:
    listing = _find_listing(db, slug)
    service = db.get(Service, listing.service_id) if listing else None
    if not listing or not service or not service.active:
        raise NotFoundError("Listing not found")
    return _listing_detail(db, listing, service, locale, today, days)


def list_car_segments(db: Session, locale: str) -> list[dict]:
    segments = db.query(CarSegment).order_by(CarSegment.sort_order.asc(), CarSegment.slug.asc()).all()
    if not segments:
        return []
    titles = {
        r.segment_id: r.title
        for r in db.query(CarSegmentI18n)
        .filter(CarSegmentI18n.locale == locale, CarSegmentI18n.segment_id.in_([s.id for s in segments]))
        .all()
        if r.title
    }
    return [{"id": s.id, "slug": s.slug, "title": titles.get(s.id)} for s in segments]
