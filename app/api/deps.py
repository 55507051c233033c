from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import ServiceError
from app.core.security import ADMIN_SCOPE, CUSTOMER_SCOPE, decode_token
from app.db.session import get_db, get_service_db
from app.models.admin_user import AdminUser
from app.models.user import User

bearer = HTTPBearer(auto_error=False)


def http_error(e: ServiceError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=str(e))


def _subject(token: Optional[str], scope: str) -> Optional[str]:
    """`sub` of a valid access token with the given scope, else None."""
    if not token:
        return None
    try:
        payload = decode_token(token)
    except JWTError:
        return None
    if payload.get("type") != "access" or payload.get("scope") != scope:
        return None
    return payload.get("sub")


def admin_from_token(db: Session, token: Optional[str]) -> Optional[AdminUser]:
    admin_id = _subject(token, ADMIN_SCOPE)
    if not admin_id:
        return None
    admin = db.get(AdminUser, admin_id)
    if not admin or not admin.active:
        return None
    return admin


def customer_from_token(db: Session, token: Optional[str]) -> Optional[User]:
    user_id = _subject(token, CUSTOMER_SCOPE)
    if not user_id:
        return None
    user = db.get(User, user_id)
    if not user or not user.is_active:
        return None
    return user


def _token(request: Request, creds: HTTPAuthorizationCredentials | None, cookie_name: str) -> Optional[str]:
    if creds:
        return creds.credentials
    return request.cookies.get(cookie_name)


def get_current_admin(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_service_db),
) -> AdminUser:
    """Admin from a Bearer token or the HttpOnly admin cookie; re-loaded on every request."""
    token = _token(request, creds, settings.ADMIN_COOKIE_NAME)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    admin = admin_from_token(db, token)
    if not admin:
        raise HTTPException(status_code=401, detail="Invalid token or inactive admin")
    return admin


def require_admin_roles(*roles: str):
    def _guard(admin: AdminUser = Depends(get_current_admin)) -> AdminUser:
        if admin.role not in roles:
            raise HTTPException(status_code=403, detail="Forbidden")
        return admin
    return _guard


def get_current_customer(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> User:
    user = customer_from_token(db, _token(request, creds, settings.CUSTOMER_COOKIE_NAME))
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user
