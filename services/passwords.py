from __future__ import annotations

import logging
from typing import Optional

from passlib.context import CryptContext


logger = logging.getLogger(__name__)


class PasswordHasher:
    """bcrypt via passlib; ``verify`` compares in constant time."""

    def __init__(self, rounds: int = 12) -> None:
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        if not hashed_password:
            return False
        try:
            return self._context.verify(plain_password, hashed_password)
        except ValueError:
            # Stored value is not a recognisable bcrypt hash
            logger.warning("auth.password_hash_unrecognised")
            return False
