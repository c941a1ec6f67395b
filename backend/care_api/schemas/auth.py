from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    # Optional so blank/missing fields reach the service and get per-field messages
    email: Optional[str] = None
    password: Optional[str] = None


class RegisterRequest(LoginRequest):
    name: Optional[str] = None


class UserPublic(BaseModel):
    """User projection safe to return to clients (no password hash)."""
    id: int
    email: str
    name: Optional[str] = None
    role: str
    is_admin: bool = False
    department: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AuthResult(BaseModel):
    token: str
    user: UserPublic


class CurrentUserResponse(BaseModel):
    id: int
    email: str
    role: str
    is_admin: bool
    expires_at: Optional[datetime] = None
