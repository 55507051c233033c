import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import ValidationFailed
from app.core.security import hash_password, verify_password
from app.models.admin_user import AdminUser

logger = logging.getLogger(__name__)

ROLES = ("super_admin", "admin", "manager")


def admin_to_out(a: AdminUser) -> dict:
    """Admin record without password_hash."""
    return {
        "id": a.id,
        "email": a.email,
        "full_name": a.full_name or "",
        "role": a.role,
        "active": bool(a.active),
        "last_login_at": a.last_login_at.isoformat() if a.last_login_at else None,
    }


def get_admin_by_email(db: Session, email: str) -> Optional[AdminUser]:
    return db.query(AdminUser).filter(AdminUser.email == (email or "").strip().lower()).first()


def authenticate_admin(db: Session, email: str, password: str) -> Optional[AdminUser]:
    """Return the admin on success, None otherwise. Inactive admins never authenticate."""
    admin = get_admin_by_email(db, email)
    if not admin or not admin.active:
        return None
    if not verify_password(password or "", admin.password_hash):
        return None
    admin.last_login_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(admin)
    logger.info("admin login %s", admin.email)
    return admin


def upsert_admin(db: Session, email: str, password: str, full_name: str = "", role: str = "admin",
                 active: bool = True) -> tuple[AdminUser, bool]:
    """Create the admin or update the existing one with the same email. Returns (admin, created)."""
    email = (email or "").strip().lower()
    if not email or "@" not in email:
        raise ValidationFailed("A valid email is required")
    if not password or len(password) < 8:
        raise ValidationFailed("Password must be at least 8 characters")
    if role not in ROLES:
        raise ValidationFailed(f"Invalid role: {role}")

    admin = get_admin_by_email(db, email)
    created = admin is None
    now = datetime.now(timezone.utc)
    if created:
        admin = AdminUser(id=str(uuid.uuid4()), email=email, created_at=now)
        db.add(admin)
    admin.password_hash = hash_password(password)
    admin.full_name = full_name or admin.full_name or ""
    admin.role = role
    admin.active = active
    admin.updated_at = now
    db.commit()
    db.refresh(admin)
    logger.info("admin %s %s (%s)", "created" if created else "updated", email, role)
    return admin, created


def list_admins(db: Session) -> list[dict]:
    return [admin_to_out(a) for a in db.query(AdminUser).order_by(AdminUser.created_at.asc()).all()]
