from fastapi import APIRouter, Depends, HTTPException, Response
from jose import JWTError
from sqlalchemy.orm import Session

from app.api.deps import get_current_admin, http_error, require_admin_roles
from app.core.config import settings
from app.core.errors import ServiceError
from app.core.i18n import normalize_locale
from app.core.security import (
    ADMIN_SCOPE, create_access_token, create_refresh_token, decode_token, hash_password, verify_password,
)
from app.db.session import get_service_db
from app.models.admin_user import AdminUser
from app.schemas.auth import AdminCreateRequest, AdminLoginResponse, LoginRequest, PasswordTestRequest, RefreshRequest, TokenPair
from app.services import admin_service, catalog_service

router = APIRouter(prefix="/admin", tags=["admin"])


def set_admin_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.ADMIN_COOKIE_NAME,
        token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="strict",
        secure=settings.COOKIE_SECURE,
        path="/",
    )


@router.post("/login", response_model=AdminLoginResponse)
@router.post("/login-db", response_model=AdminLoginResponse, include_in_schema=False)
@router.post("/login-simple", response_model=AdminLoginResponse, include_in_schema=False)
def login(body: LoginRequest, response: Response, db: Session = Depends(get_service_db)):
    if not body.email.strip() or not body.password:
        raise HTTPException(status_code=400, detail="Email and password are required")
    admin = admin_service.authenticate_admin(db, body.email, body.password)
    if not admin:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    access = create_access_token(admin.id, ADMIN_SCOPE)
    set_admin_cookie(response, access)
    return {
        "success": True,
        "access_token": access,
        "refresh_token": create_refresh_token(admin.id, ADMIN_SCOPE),
        "admin": admin_service.admin_to_out(admin),
    }


@router.post("/refresh", response_model=TokenPair)
def refresh(body: RefreshRequest, response: Response, db: Session = Depends(get_service_db)):
    try:
        payload = decode_token(body.refresh_token)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid refresh token")
    if payload.get("type") != "refresh" or payload.get("scope") != ADMIN_SCOPE:
        raise HTTPException(status_code=401, detail="Invalid refresh token")
    admin = db.get(AdminUser, payload.get("sub"))
    if not admin or not admin.active:
        raise HTTPException(status_code=401, detail="Admin not found or inactive")
    access = create_access_token(admin.id, ADMIN_SCOPE)
    set_admin_cookie(response, access)
    return TokenPair(access_token=access, refresh_token=create_refresh_token(admin.id, ADMIN_SCOPE))


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(settings.ADMIN_COOKIE_NAME, path="/")
    return {"success": True}


@router.get("/me")
def me(admin: AdminUser = Depends(get_current_admin)):
    return {"success": True, "admin": admin_service.admin_to_out(admin)}


@router.get("/auth")
def auth_check(admin: AdminUser = Depends(get_current_admin)):
    return {"success": True, "message": "Authenticated"}


@router.post("/create")
def create_admin(body: AdminCreateRequest, db: Session = Depends(get_service_db),
                 admin: AdminUser = Depends(require_admin_roles("super_admin"))):
    """Create an admin, or update the one with the same email."""
    try:
        created, is_new = admin_service.upsert_admin(db, body.email, body.password, body.full_name, body.role)
    except ServiceError as e:
        raise http_error(e)
    return {
        "success": True,
        "created": is_new,
        "message": "Admin user created" if is_new else "Admin user updated",
        "admin": admin_service.admin_to_out(created),
    }


@router.get("/check")
def check(db: Session = Depends(get_service_db), admin: AdminUser = Depends(get_current_admin)):
    admins = admin_service.list_admins(db)
    return {"success": True, "adminCount": len(admins), "admins": admins}


@router.post("/test-password")
def test_password(body: PasswordTestRequest, admin: AdminUser = Depends(get_current_admin)):
    """Diagnostic: hash a password and optionally check it against a supplied hash."""
    new_hash = hash_password(body.password)
    out = {
        "success": True,
        "tests": {
            "newHash": {"hash": new_hash, "matches": verify_password(body.password, new_hash)},
        },
    }
    if body.hash:
        out["tests"]["suppliedHash"] = {"hash": body.hash, "matches": verify_password(body.password, body.hash)}
    return out


@router.get("/car-segments")
def car_segments(locale: str = "tr", db: Session = Depends(get_service_db),
                 admin: AdminUser = Depends(get_current_admin)):
    return {"segments": catalog_service.list_car_segments(db, normalize_locale(locale))}
