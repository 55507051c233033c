import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_admin, http_error
from app.core.errors import ServiceError
from app.db.session import get_db, get_service_db
from app.models.admin_user import AdminUser
from app.schemas.availability import AvailabilityBulkIn, AvailabilityIn
from app.services import availability_service
from app.services.availability_service import availability_to_dict

router = APIRouter(tags=["availability"])


@router.get("/availability")
def get_availability(listing_id: Optional[str] = None, start_date: Optional[dt.date] = None,
                     end_date: Optional[dt.date] = None, db: Session = Depends(get_db)):
    try:
        return availability_service.get_availability(db, listing_id, start_date, end_date)
    except ServiceError as e:
        raise http_error(e)


@router.post("/availability")
def upsert_availability(body: AvailabilityIn, db: Session = Depends(get_service_db),
                        admin: AdminUser = Depends(get_current_admin)):
    try:
        row = availability_service.upsert_availability(
            db, body.listing_id, body.date, is_available=body.is_available,
            price=body.price, min_nights=body.min_nights, notes=body.notes,
        )
    except ServiceError as e:
        raise http_error(e)
    return {"success": True, "availability": availability_to_dict(row)}


@router.put("/availability")
def bulk_availability(body: AvailabilityBulkIn, db: Session = Depends(get_service_db),
                      admin: AdminUser = Depends(get_current_admin)):
    try:
        rows = availability_service.bulk_upsert_availability(db, body.listing_id, body.updates)
    except ServiceError as e:
        raise http_error(e)
    return {"success": True, "updated_count": len(rows), "availability": [availability_to_dict(r) for r in rows]}
