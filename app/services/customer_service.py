import uuid
from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import ConflictError, ValidationFailed
from app.core.security import hash_password, verify_password
from app.models.user import User


def user_to_out(u: User) -> dict:
    return {"id": u.id, "email": u.email, "full_name": u.full_name, "phone": u.phone, "role": u.role}


def signup(db: Session, email: str, password: str, full_name: str = "", phone: str = "") -> User:
    email = (email or "").strip().lower()
    if not email or "@" not in email:
        raise ValidationFailed("A valid email is required")
    if not password or len(password) < 6:
        raise ValidationFailed("Password must be at least 6 characters")
    if db.query(User).filter(User.email == email).first():
        raise ConflictError("Email already registered")
    user = User(
        id=str(uuid.uuid4()),
        email=email,
        full_name=(full_name or "").strip(),
        phone=(phone or "").strip(),
        role="customer",
        password_hash=hash_password(password),
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    user = db.query(User).filter(User.email == (email or "").strip().lower()).first()
    if not user or not user.is_active or not verify_password(password or "", user.password_hash):
        return None
    return user
