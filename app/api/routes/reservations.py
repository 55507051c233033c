from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_admin, http_error
from app.core.errors import ServiceError
from app.db.session import get_db, get_service_db
from app.models.admin_user import AdminUser
from app.schemas.reservation import ReservationCreate, ReservationStatusIn
from app.services import reservation_service
from app.services.reservation_service import reservation_to_dict

router = APIRouter(tags=["reservations"])


@router.post("/reservations", status_code=201)
def create_reservation(body: ReservationCreate, db: Session = Depends(get_db)):
    """Public reservation request. Always stored as `pending`."""
    try:
        r = reservation_service.create_reservation(db, body.model_dump())
    except ServiceError as e:
        raise http_error(e)
    return {"success": True, "reservation": reservation_to_dict(r)}


@router.get("/reservations")
def list_reservations(listing_id: Optional[str] = None, status: Optional[str] = None,
                      limit: int = 50, offset: int = 0,
                      db: Session = Depends(get_service_db),
                      admin: AdminUser = Depends(get_current_admin)):
    return {"reservations": reservation_service.list_reservations(db, listing_id, status, limit, offset)}


@router.patch("/reservations/{reservation_id}")
def update_status(reservation_id: str, body: ReservationStatusIn,
                  db: Session = Depends(get_service_db),
                  admin: AdminUser = Depends(get_current_admin)):
    try:
        r = reservation_service.update_reservation_status(db, reservation_id, body.status)
    except ServiceError as e:
        raise http_error(e)
    return {"success": True, "reservation": reservation_to_dict(r)}
