from fastapi import APIRouter, Depends, HTTPException
from jose import JWTError
from sqlalchemy.orm import Session

from app.api.deps import get_current_customer, http_error
from app.core.errors import ServiceError
from app.core.security import CUSTOMER_SCOPE, create_access_token, create_refresh_token, decode_token
from app.db.session import get_db
from app.models.user import User
from app.schemas.auth import LoginRequest, RefreshRequest, SignupRequest, TokenPair
from app.services import customer_service, reservation_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _tokens(user: User) -> TokenPair:
    return TokenPair(
        access_token=create_access_token(user.id, CUSTOMER_SCOPE),
        refresh_token=create_refresh_token(user.id, CUSTOMER_SCOPE),
    )


@router.post("/signup", response_model=TokenPair, status_code=201)
def signup(body: SignupRequest, db: Session = Depends(get_db)):
    try:
        user = customer_service.signup(db, body.email, body.password, body.full_name, body.phone)
    except ServiceError as e:
        raise http_error(e)
    return _tokens(user)


@router.post("/login", response_model=TokenPair)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    user = customer_service.authenticate(db, body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return _tokens(user)


@router.post("/refresh", response_model=TokenPair)
def refresh(body: RefreshRequest, db: Session = Depends(get_db)):
    try:
        payload = decode_token(body.refresh_token)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid refresh token")
    if payload.get("type") != "refresh" or payload.get("scope") != CUSTOMER_SCOPE:
        raise HTTPException(status_code=401, detail="Invalid refresh token")
    user = db.get(User, payload.get("sub"))
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="User not found or inactive")
    return _tokens(user)


@router.get("/me")
def me(user: User = Depends(get_current_customer)):
    return customer_service.user_to_out(user)


@router.get("/me/reservations")
def my_reservations(user: User = Depends(get_current_customer), db: Session = Depends(get_db)):
    return {"reservations": reservation_service.list_customer_reservations(db, user.email)}
