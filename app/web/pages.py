"""Locale-prefixed public pages (/tr, /en, /ru, /ar)."""
import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.api.deps import customer_from_token
from app.core.config import settings
from app.core.errors import NotFoundError, ServiceError
from app.core.i18n import DEFAULT_LOCALE, LOCALES, t
from app.core.security import CUSTOMER_SCOPE, create_access_token
from app.db.session import get_db
from app.services import catalog_service, content_service, customer_service, hero_service, reservation_service
from app.web.templating import form_data, render

router = APIRouter(include_in_schema=False)


def _locale(locale: str) -> str:
    if locale not in LOCALES:
        raise HTTPException(status_code=404, detail="Not found")
    return locale


def _page(request: Request, db: Session, locale: str, name: str, status_code: int = 200, **ctx):
    """Render with the header/footer context every public page needs."""
    path = request.url.path
    rest = path[len(locale) + 1:] if path.startswith(f"/{locale}") else ""
    context = {
        "locale": locale,
        "nav_services": catalog_service.list_services(db, locale),
        "customer": customer_from_token(db, request.cookies.get(settings.CUSTOMER_COOKIE_NAME)),
        "lang_links": {l: f"/{l}{rest}" for l in LOCALES},
    }
    context.update(ctx)
    return render(request, name, context, status_code=status_code)


@router.get("/")
def root():
    return RedirectResponse(url=f"/{DEFAULT_LOCALE}", status_code=307)


@router.get("/{locale}")
def home(request: Request, locale: str, db: Session = Depends(get_db)):
    locale = _locale(locale)
    campaigns = content_service.list_items(db, "campaigns", {"featured": "true"})
    return _page(
        request, db, locale, "home.html",
        hero=hero_service.get_hero(db),
        services=catalog_service.list_services(db, locale),
        campaigns=campaigns[:3],
    )


@router.get("/{locale}/blog")
def blog_list(request: Request, locale: str, category: Optional[str] = None, db: Session = Depends(get_db)):
    locale = _locale(locale)
    posts = content_service.list_items(db, "blog", {"category": category})
    return _page(request, db, locale, "blog_list.html", posts=posts, category=category)


@router.get("/{locale}/blog/{slug}")
def blog_post(request: Request, locale: str, slug: str, db: Session = Depends(get_db)):
    locale = _locale(locale)
    posts = content_service.list_items(db, "blog", {"slug": slug})
    if not posts:
        raise HTTPException(status_code=404, detail="Post not found")
    return _page(request, db, locale, "blog_post.html", post=posts[0])


@router.get("/{locale}/sss")
def faq(request: Request, locale: str, db: Session = Depends(get_db)):
    locale = _locale(locale)
    general = content_service.list_items(db, "general-faqs")
    by_service = {}
    for f in content_service.list_items(db, "faqs"):
        by_service.setdefault(f.service_type, []).append(f)
    return _page(request, db, locale, "faq.html", general=general, by_service=by_service)


@router.get("/{locale}/kampanyalar")
def campaigns(request: Request, locale: str, db: Session = Depends(get_db)):
    locale = _locale(locale)
    return _page(request, db, locale, "campaigns.html", campaigns=content_service.list_items(db, "campaigns"))


@router.get("/{locale}/auth")
def auth_page(request: Request, locale: str, db: Session = Depends(get_db)):
    locale = _locale(locale)
    return _page(request, db, locale, "auth.html", error=None, mode="login")


@router.post("/{locale}/auth")
def auth_submit(request: Request, locale: str, form: dict = Depends(form_data), db: Session = Depends(get_db)):
    locale = _locale(locale)
    mode = form.get("mode") or "login"
    error = None
    user = None
    if mode == "signup":
        try:
            user = customer_service.signup(
                db, form.get("email", ""), form.get("password", ""), form.get("full_name", ""), form.get("phone", "")
            )
        except ServiceError as e:
            error = str(e)
    else:
        user = customer_service.authenticate(db, form.get("email", ""), form.get("password", ""))
        if not user:
            error = t(locale, "auth.error")
    if not user:
        return _page(request, db, locale, "auth.html", status_code=400, error=error, mode=mode)

    resp = RedirectResponse(url=f"/{locale}/profile", status_code=303)
    resp.set_cookie(
        settings.CUSTOMER_COOKIE_NAME,
        create_access_token(user.id, CUSTOMER_SCOPE),
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )
    return resp


@router.get("/{locale}/profile")
def profile(request: Request, locale: str, db: Session = Depends(get_db)):
    locale = _locale(locale)
    user = customer_from_token(db, request.cookies.get(settings.CUSTOMER_COOKIE_NAME))
    if not user:
        return RedirectResponse(url=f"/{locale}/auth", status_code=303)
    reservations = reservation_service.list_customer_reservations(db, user.email)
    return _page(request, db, locale, "profile.html", user=user, reservations=reservations)


@router.get("/{locale}/logout")
def logout(locale: str):
    locale = _locale(locale)
    resp = RedirectResponse(url=f"/{locale}", status_code=303)
    resp.delete_cookie(settings.CUSTOMER_COOKIE_NAME)
    return resp


@router.get("/{locale}/listings/{slug}")
def listing_by_slug(request: Request, locale: str, slug: str, db: Session = Depends(get_db)):
    locale = _locale(locale)
    try:
        data = catalog_service.get_listing_by_slug(db, slug, locale)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Listing not found")
    return _detail(request, db, locale, data)


@router.get("/{locale}/{service}")
def catalog(request: Request, locale: str, service: str, segment: Optional[str] = None,
            db: Session = Depends(get_db)):
    locale = _locale(locale)
    data = catalog_service.list_listings(db, service, locale, segment=segment)
    if not data["service"]:
        raise HTTPException(status_code=404, detail="Service not found")
    slug = data["service"]["slug"]
    segments = catalog_service.list_car_segments(db, locale) if slug == "car-rental" else []
    faqs = content_service.list_items(db, "faqs", {"service": slug})
    return _page(
        request, db, locale, "catalog.html",
        service=data["service"],
        listings=data["listings"],
        segments=segments,
        active_segment=catalog_service.canonical_segment_slug(segment) if segment else None,
        faqs=faqs,
        # links keep the alias the visitor arrived with
        service_path=service,
    )


def _detail(request: Request, db: Session, locale: str, data: dict, status_code: int = 200, **ctx):
    ctx.setdefault("form", {})
    ctx.setdefault("error", None)
    ctx.setdefault("success", False)
    return _page(
        request, db, locale, "listing.html", status_code=status_code,
        listing=data["listing"],
        availability=data["availability"],
        today=dt.date.today().isoformat(),
        **ctx,
    )


@router.get("/{locale}/{service}/{slug}")
def listing_detail(request: Request, locale: str, service: str, slug: str, db: Session = Depends(get_db)):
    locale = _locale(locale)
    try:
        data = catalog_service.get_listing_detail(db, service, slug, locale)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Listing not found")
    return _detail(request, db, locale, data)


@router.post("/{locale}/{service}/{slug}")
def reserve(request: Request, locale: str, service: str, slug: str, form: dict = Depends(form_data),
            db: Session = Depends(get_db)):
    locale = _locale(locale)
    try:
        data = catalog_service.get_listing_detail(db, service, slug, locale)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Listing not found")

    payload = {k: (form.get(k) or None) for k in (
        "customer_name", "customer_email", "customer_phone", "start_date", "end_date",
        "guests_count", "special_requests",
    )}
    payload["listing_id"] = data["listing"]["id"]
    try:
        reservation_service.create_reservation(db, payload)
    except ServiceError as e:
        error = t(locale, "reservation.conflict") if e.status_code == 409 else str(e)
        return _detail(request, db, locale, data, status_code=e.status_code, form=form, error=error)
    return _detail(request, db, locale, data, success=True)
