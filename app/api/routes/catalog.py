from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import http_error
from app.core.errors import NotFoundError
from app.core.i18n import normalize_locale
from app.db.session import get_db
from app.services import catalog_service

router = APIRouter(tags=["catalog"])


@router.get("/services")
def services(locale: str = "tr", db: Session = Depends(get_db)):
    """Active services translated into `locale`."""
    return {"success": True, "services": catalog_service.list_services(db, normalize_locale(locale))}


@router.get("/car-segments")
def car_segments(locale: str = "tr", db: Session = Depends(get_db)):
    return {"success": True, "segments": catalog_service.list_car_segments(db, normalize_locale(locale))}


@router.get("/listings/{service}")
def listings(service: str, locale: str = "tr", segment: Optional[str] = None,
             segment_ids: Optional[str] = None, db: Session = Depends(get_db)):
    data = catalog_service.list_listings(
        db, service, normalize_locale(locale), segment=segment, segment_ids=segment_ids
    )
    return {"success": True, "data": data}


@router.get("/listings/{service}/{slug}")
def listing_detail(service: str, slug: str, locale: str = "tr", db: Session = Depends(get_db)):
    try:
        data = catalog_service.get_listing_detail(db, service, slug, normalize_locale(locale))
    except NotFoundError as e:
        raise http_error(e)
    return {"success": True, **data}
