from __future__ import annotations

from enum import Enum
from typing import Optional

from .base import MongoModel


class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class User(MongoModel):
    name: Optional[str] = None
    email: str
    image: Optional[str] = None
    role: UserRole = UserRole.USER
    # Accounts created through an external provider carry no password
    password_hash: Optional[str] = None
