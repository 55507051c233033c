"""Back-office pages under /admin. Every page re-validates the admin cookie."""
import datetime as dt
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.api.deps import admin_from_token
from app.api.routes.admin import set_admin_cookie
from app.core.config import settings
from app.core.errors import NotFoundError, ServiceError, ValidationFailed
from app.core.i18n import LOCALES
from app.core.security import ADMIN_SCOPE, create_access_token
from app.db.session import get_service_db
from app.models.listing import Listing
from app.models.reservation import Reservation
from app.models.service import Service
from app.services import (
    admin_service, availability_service, catalog_service, content_service, hero_service,
    listing_admin_service, reservation_service, storage_service,
)
from app.services.reservation_service import STATUSES, TRANSITIONS
from app.web.templating import form_data, form_with_files, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", include_in_schema=False)


def _admin(request: Request, db: Session):
    return admin_from_token(db, request.cookies.get(settings.ADMIN_COOKIE_NAME))


def _to_login():
    return RedirectResponse(url="/admin", status_code=303)


def _float(value) -> Optional[float]:
    value = (value or "").strip() if isinstance(value, str) else value
    if value in (None, ""):
        return None
    return float(value)


def _lines(value: Optional[str]) -> list[str]:
    return [line.strip() for line in (value or "").splitlines() if line.strip()]


@router.get("")
def login_page(request: Request, db: Session = Depends(get_service_db)):
    if _admin(request, db):
        return RedirectResponse(url="/admin/dashboard", status_code=303)
    return render(request, "admin/login.html", {"error": None})


@router.post("")
def login_submit(request: Request, form: dict = Depends(form_data), db: Session = Depends(get_service_db)):
    admin = admin_service.authenticate_admin(db, form.get("email", ""), form.get("password", ""))
    if not admin:
        return render(request, "admin/login.html", {"error": "Invalid email or password"}, status_code=401)
    resp = RedirectResponse(url="/admin/dashboard", status_code=303)
    set_admin_cookie(resp, create_access_token(admin.id, ADMIN_SCOPE))
    return resp


@router.get("/logout")
def logout():
    resp = _to_login()
    resp.delete_cookie(settings.ADMIN_COOKIE_NAME, path="/")
    return resp


@router.get("/dashboard")
def dashboard(request: Request, db: Session = Depends(get_service_db)):
    admin = _admin(request, db)
    if not admin:
        return _to_login()
    counts = {
        "services": db.query(func.count(Service.id)).scalar(),
        "listings": db.query(func.count(Listing.id)).scalar(),
        "active_listings": db.query(func.count(Listing.id)).filter(Listing.active == True).scalar(),
        "pending_reservations": db.query(func.count(Reservation.id)).filter(Reservation.status == "pending").scalar(),
        "campaigns": len(content_service.list_items(db, "campaigns", include_hidden=True)),
        "posts": len(content_service.list_items(db, "blog", include_hidden=True)),
    }
    recent = reservation_service.list_reservations(db, limit=10)
    return render(request, "admin/dashboard.html", {"admin": admin, "counts": counts, "recent": recent})


# listings

@router.get("/listings")
def listings_overview(request: Request, db: Session = Depends(get_service_db)):
    admin = _admin(request, db)
    if not admin:
        return _to_login()
    rows = (
        db.query(Service, func.count(Listing.id))
        .outerjoin(Listing, Listing.service_id == Service.id)
        .group_by(Service.id)
        .order_by(Service.sort_order.asc())
        .all()
    )
    return render(request, "admin/listings_index.html", {"admin": admin, "services": rows})


def _metadata_form(form: dict, fields) -> dict:
    meta = {}
    for key, label, kind in fields:
        raw = form.get(f"meta_{key}")
        if kind == "bool":
            meta[key] = raw in ("on", "true", "1")
            continue
        raw = (raw or "").strip()
        if kind == "number" and raw:
            try:
                meta[key] = int(raw) if raw.lstrip("-").isdigit() else float(raw)
            except ValueError:
                raise ValidationFailed(f"{label} must be a number")
        else:
            meta[key] = raw or None
    return meta


def _store_uploads(form: dict) -> list[str]:
    paths = []
    for upload in form.get("image_files") or []:
        if isinstance(upload, str):
            continue
        content = upload.file.read(settings.STORAGE_MAX_BYTES + 1)
        stored = storage_service.upload(
            "listings", content, upload.content_type or "", original_name=upload.filename or ""
        )
        paths.append(stored["path"])
    return paths


def _listing_form(form: dict, service_slug: Optional[str] = None, current_meta: Optional[dict] = None) -> dict:
    meta = dict(current_meta or {})
    meta.update(_metadata_form(form, listing_admin_service.metadata_fields(service_slug)))
    data = {
        "name": form.get("name", ""),
        "slug": form.get("slug", ""),
        "description": form.get("description") or None,
        "location": form.get("location") or None,
        "price_per_day": _float(form.get("price_per_day")),
        "price_per_week": _float(form.get("price_per_week")),
        "active": form.get("active") in ("on", "true", "1"),
        "sort_order": int(form.get("sort_order") or 0),
        "segment_id": form.get("segment_id") or None,
        "features": _lines(form.get("features")),
        "images": _lines(form.get("images")),
        "storage_paths": _lines(form.get("storage_paths")) + _store_uploads(form),
        "metadata": {k: v for k, v in meta.items() if v is not None},
        "translations": {},
    }
    for locale in LOCALES:
        title = (form.get(f"title_{locale}") or "").strip()
        if title:
            data["translations"][locale] = {
                "title": title,
                "description": form.get(f"description_{locale}") or None,
                "slug": form.get(f"slug_{locale}") or None,
            }
    return data


def _service_page(request: Request, db: Session, admin, service: str, status_code: int = 200, **ctx):
    svc = catalog_service.find_service(db, service, include_inactive=True)
    context = {
        "admin": admin,
        "service": svc,
        "service_path": service,
        "listings": listing_admin_service.list_admin_listings(db, service),
        "segments": catalog_service.list_car_segments(db, "tr") if svc and svc.slug == "car-rental" else [],
        "meta_fields": listing_admin_service.metadata_fields(svc.slug if svc else None),
        "editing": None,
        "error": None,
    }
    context.update(ctx)
    return render(request, "admin/listings.html", context, status_code=status_code)


@router.get("/listings/{service}")
def service_listings(request: Request, service: str, db: Session = Depends(get_service_db)):
    admin = _admin(request, db)
    if not admin:
        return _to_login()
    return _service_page(request, db, admin, service)


@router.post("/listings/{service}")
def create_listing(request: Request, service: str, form: dict = Depends(form_with_files),
                   db: Session = Depends(get_service_db)):
    admin = _admin(request, db)
    if not admin:
        return _to_login()
    svc = catalog_service.find_service(db, service, include_inactive=True)
    try:
        listing_admin_service.create_listing(db, service, _listing_form(form, svc.slug if svc else None))
    except ValueError as e:
        return _service_page(request, db, admin, service, status_code=getattr(e, "status_code", 400), error=str(e))
    return RedirectResponse(url=f"/admin/listings/{service}", status_code=303)


@router.get("/listings/{service}/{listing_id}/edit")
def edit_listing(request: Request, service: str, listing_id: str, db: Session = Depends(get_service_db)):
    admin = _admin(request, db)
    if not admin:
        return _to_login()
    try:
        listing = listing_admin_service.get_admin_listing(db, listing_id, service)
    except ServiceError:
        return RedirectResponse(url=f"/admin/listings/{service}", status_code=303)
    return _service_page(request, db, admin, service, editing=listing_admin_service.admin_listing_dict(db, listing))


@router.post("/listings/{service}/{listing_id}")
def update_listing(request: Request, service: str, listing_id: str, form: dict = Depends(form_with_files),
                   db: Session = Depends(get_service_db)):
    admin = _admin(request, db)
    if not admin:
        return _to_login()
    try:
        listing = listing_admin_service.get_admin_listing(db, listing_id, service)
        svc = db.get(Service, listing.service_id)
        # keys without a form input (vip-transfer routes and the like) survive the edit
        data = _listing_form(form, svc.slug if svc else None, current_meta=listing.meta)
        listing_admin_service.update_listing(db, listing_id, data, service)
    except ValueError as e:
        return _service_page(request, db, admin, service, status_code=getattr(e, "status_code", 400), error=str(e))
    return RedirectResponse(url=f"/admin/listings/{service}", status_code=303)


@router.post("/listings/{service}/{listing_id}/delete")
def delete_listing(request: Request, service: str, listing_id: str, db: Session = Depends(get_service_db)):
    admin = _admin(request, db)
    if not admin:
        return _to_login()
    try:
        listing_admin_service.delete_listing(db, listing_id, service)
    except ServiceError as e:
        return _service_page(request, db, admin, service, status_code=e.status_code, error=str(e))
    return RedirectResponse(url=f"/admin/listings/{service}", status_code=303)


# reservations

@router.get("/reservations")
def reservations(request: Request, status: Optional[str] = None, db: Session = Depends(get_service_db)):
    admin = _admin(request, db)
    if not admin:
        return _to_login()
    rows = reservation_service.list_reservations(db, status=status or None, limit=200)
    return render(request, "admin/reservations.html", {
        "admin": admin, "reservations": rows, "status": status, "statuses": STATUSES,
        "transitions": TRANSITIONS, "error": None,
    })


@router.post("/reservations/{reservation_id}/status")
def reservation_status(request: Request, reservation_id: str, form: dict = Depends(form_data),
                       db: Session = Depends(get_service_db)):
    admin = _admin(request, db)
    if not admin:
        return _to_login()
    try:
        reservation_service.update_reservation_status(db, reservation_id, form.get("status"))
    except ServiceError as e:
        rows = reservation_service.list_reservations(db, limit=200)
        return render(request, "admin/reservations.html", {
            "admin": admin, "reservations": rows, "status": None, "statuses": STATUSES,
            "transitions": TRANSITIONS, "error": str(e),
        }, status_code=e.status_code)
    return RedirectResponse(url="/admin/reservations", status_code=303)


# availability

def _availability_page(request: Request, db: Session, admin, listing_id: Optional[str], status_code: int = 200,
                       error: Optional[str] = None):
    listings = db.query(Listing).order_by(Listing.name.asc()).all()
    data = None
    if listing_id:
        today = dt.date.today()
        data = availability_service.get_availability(db, listing_id, today, today + dt.timedelta(days=90))
    return render(request, "admin/availability.html", {
        "admin": admin, "listings": listings, "listing_id": listing_id, "data": data, "error": error,
    }, status_code=status_code)


@router.get("/availability")
def availability(request: Request, listing_id: Optional[str] = None, db: Session = Depends(get_service_db)):
    admin = _admin(request, db)
    if not admin:
        return _to_login()
    return _availability_page(request, db, admin, listing_id)


@router.post("/availability")
def availability_submit(request: Request, form: dict = Depends(form_data), db: Session = Depends(get_service_db)):
    admin = _admin(request, db)
    if not admin:
        return _to_login()
    listing_id = form.get("listing_id")
    try:
        date = dt.date.fromisoformat(form.get("date") or "") if form.get("date") else None
        availability_service.upsert_availability(
            db, listing_id, date,
            is_available=form.get("is_available") in ("on", "true", "1"),
            price=_float(form.get("price")),
            min_nights=int(form.get("min_nights") or 1),
            notes=form.get("notes") or None,
        )
    except ValueError as e:
        return _availability_page(request, db, admin, listing_id, status_code=getattr(e, "status_code", 400), error=str(e))
    return RedirectResponse(url=f"/admin/availability?listing_id={listing_id}", status_code=303)


# content

@router.get("/content")
def content(request: Request, db: Session = Depends(get_service_db)):
    admin = _admin(request, db)
    if not admin:
        return _to_login()
    return render(request, "admin/content.html", {
        "admin": admin,
        "campaigns": content_service.list_items(db, "campaigns", include_hidden=True),
        "posts": content_service.list_items(db, "blog", include_hidden=True),
        "pages": content_service.list_items(db, "pages", include_hidden=True),
    })


@router.post("/content/{kind}/{item_id}/delete")
def content_delete(request: Request, kind: str, item_id: str, db: Session = Depends(get_service_db)):
    admin = _admin(request, db)
    if not admin:
        return _to_login()
    back = "/admin/faq" if kind in ("faqs", "general-faqs") else "/admin/content"
    try:
        content_service.delete_item(db, kind, item_id)
    except NotFoundError:
        logger.info("content %s/%s already deleted", kind, item_id)
    return RedirectResponse(url=back, status_code=303)


# FAQ manager

def _faq_page(request: Request, db: Session, admin, status_code: int = 200, error: Optional[str] = None):
    return render(request, "admin/faq.html", {
        "admin": admin,
        "faqs": content_service.list_items(db, "faqs", include_hidden=True),
        "general": content_service.list_items(db, "general-faqs", include_hidden=True),
        "services": db.query(Service).order_by(Service.sort_order.asc()).all(),
        "error": error,
    }, status_code=status_code)


@router.get("/faq")
def faq(request: Request, db: Session = Depends(get_service_db)):
    admin = _admin(request, db)
    if not admin:
        return _to_login()
    return _faq_page(request, db, admin)


@router.post("/faq")
def faq_create(request: Request, form: dict = Depends(form_data), db: Session = Depends(get_service_db)):
    admin = _admin(request, db)
    if not admin:
        return _to_login()
    kind = "faqs" if form.get("service_type") else "general-faqs"
    data = {k: (v or None) for k, v in form.items() if k.startswith(("question_", "answer_"))}
    order = int(form.get("order") or 0)
    if kind == "faqs":
        data.update(service_type=form["service_type"], sort_order=order, active=True)
    else:
        data.update(display_order=order, published=True)
    try:
        content_service.create_item(db, kind, data)
    except ServiceError as e:
        return _faq_page(request, db, admin, status_code=e.status_code, error=str(e))
    return RedirectResponse(url="/admin/faq", status_code=303)


# hero settings

@router.get("/settings")
def settings_page(request: Request, db: Session = Depends(get_service_db)):
    admin = _admin(request, db)
    if not admin:
        return _to_login()
    return render(request, "admin/settings.html", {"admin": admin, "hero": hero_service.get_hero(db), "saved": False})


@router.post("/settings")
def settings_submit(request: Request, form: dict = Depends(form_data), db: Session = Depends(get_service_db)):
    admin = _admin(request, db)
    if not admin:
        return _to_login()
    hero = hero_service.set_hero(db, {
        "video_url": form.get("video_url") or None,
        "fallback_image_url": form.get("fallback_image_url") or None,
        "is_active": form.get("is_active") in ("on", "true", "1"),
        "title": form.get("title") or None,
        "subtitle": form.get("subtitle") or None,
    })
    return render(request, "admin/settings.html", {"admin": admin, "hero": hero, "saved": True})
