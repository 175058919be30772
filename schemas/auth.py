from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from models.user import User, UserRole


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    user_id: str
    email: str
    issued_at: datetime
    expires_at: datetime


class RegisterRequest(BaseModel):
    name: Optional[str] = Field(default=None, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserDisplay(BaseModel):
    id: str
    name: Optional[str] = None
    email: str
    image: Optional[str] = None
    role: UserRole
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserDisplay":
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            image=user.image,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class AuthResponse(BaseModel):
    message: str
    user: UserDisplay
    token: str


class VerifyResponse(BaseModel):
    user: UserDisplay


class MessageResponse(BaseModel):
    message: str
