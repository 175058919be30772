from __future__ import annotations

# Re-export key service classes for convenient imports
from .auth import AuthService
from .passwords import PasswordHasher
from .tokens import TokenCodec

__all__ = ["AuthService", "PasswordHasher", "TokenCodec"]
