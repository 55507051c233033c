from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_admin, http_error
from app.core.errors import ServiceError
from app.db.session import get_service_db
from app.models.admin_user import AdminUser
from app.schemas.listing import ListingIn, ListingPatch
from app.services import listing_admin_service as svc

router = APIRouter(prefix="/admin/listings", tags=["admin-listings"])


@router.get("/{service}")
def list_listings(service: str, db: Session = Depends(get_service_db),
                  admin: AdminUser = Depends(get_current_admin)):
    return {"listings": svc.list_admin_listings(db, service)}


@router.post("/{service}", status_code=201)
def create_listing(service: str, body: ListingIn, db: Session = Depends(get_service_db),
                   admin: AdminUser = Depends(get_current_admin)):
    try:
        listing = svc.create_listing(db, service, body.model_dump())
    except ServiceError as e:
        raise http_error(e)
    return {"success": True, "listing": svc.admin_listing_dict(db, listing)}


@router.get("/{service}/{listing_id}")
def get_listing(service: str, listing_id: str, db: Session = Depends(get_service_db),
                admin: AdminUser = Depends(get_current_admin)):
    try:
        listing = svc.get_admin_listing(db, listing_id, service)
    except ServiceError as e:
        raise http_error(e)
    return {"listing": svc.admin_listing_dict(db, listing)}


@router.put("/{service}/{listing_id}")
def update_listing(service: str, listing_id: str, body: ListingPatch, db: Session = Depends(get_service_db),
                   admin: AdminUser = Depends(get_current_admin)):
    try:
        listing = svc.update_listing(db, listing_id, body.model_dump(exclude_unset=True), service)
    except ServiceError as e:
        raise http_error(e)
    return {"success": True, "listing": svc.admin_listing_dict(db, listing)}


@router.delete("/{service}/{listing_id}")
def delete_listing(service: str, listing_id: str, db: Session = Depends(get_service_db),
                   admin: AdminUser = Depends(get_current_admin)):
    try:
        svc.delete_listing(db, listing_id, service)
    except ServiceError as e:
        raise http_error(e)
    return {"success": True}
