from __future__ import annotations

import logging
from typing import Optional, Tuple

from core.errors import DuplicateEmail, InvalidCredentials
from models.user import User, UserRole
from repositories.users import UserRepository, normalize_email
from services.passwords import PasswordHasher
from services.tokens import TokenCodec


logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, users: UserRepository, codec: TokenCodec, hasher: PasswordHasher) -> None:
        self.users = users
        self.codec = codec
        self.hasher = hasher

    def issue_token(self, user: User) -> str:
        return self.codec.mint(str(user.id), user.email)

    async def register(self, *, email: str, password: str, name: Optional[str] = None) -> Tuple[User, str]:
        email = normalize_email(email)
        if await self.users.find_by_email(email) is not None:
            logger.info("auth.register_duplicate", extra={"email": email})
            raise DuplicateEmail()

        user = await self.users.create(
            email=email,
            name=name,
            password_hash=self.hasher.hash(password),
            role=UserRole.USER,
        )
        logger.info("auth.register_success", extra={"user_id": str(user.id), "email": email})
        return user, self.issue_token(user)

    async def authenticate(self, email: str, password: str) -> User:
        email = normalize_email(email)
        user = await self.users.find_by_email(email)
        # Same error for every failure so callers cannot probe which accounts exist
        if user is None or not user.password_hash:
            logger.warning("auth.login_user_not_found", extra={"email": email})
            raise InvalidCredentials()
        if not self.hasher.verify(password, user.password_hash):
            logger.warning("auth.login_invalid_password", extra={"email": email})
            raise InvalidCredentials()
        return user

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        user = await self.authenticate(email, password)
        logger.info("auth.login_success", extra={"user_id": str(user.id), "email": user.email})
        return user, self.issue_token(user)
