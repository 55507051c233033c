from pydantic import BaseModel
from typing import Optional

class LoginRequest(BaseModel):
    email: str  # plain str to allow .local and other dev domains
    password: str

class RefreshRequest(BaseModel):
    refresh_token: str

class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"

class AdminOut(BaseModel):
    """Admin record as exposed to clients; never carries password_hash."""
    id: str
    email: str
    full_name: str = ""
    role: str
    active: bool
    last_login_at: Optional[str] = None

class AdminLoginResponse(TokenPair):
    success: bool = True
    admin: AdminOut

class AdminCreateRequest(BaseModel):
    email: str
    password: str
    full_name: str = ""
    role: str = "admin"

class PasswordTestRequest(BaseModel):
    password: str
    hash: Optional[str] = None

class SignupRequest(BaseModel):
    email: str
    password: str
    full_name: str = ""
    phone: str = ""
