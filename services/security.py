from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from core.errors import AuthError, MissingToken, UnknownUser
from models.user import User
from repositories.users import UserRepository
from services.deps import get_token_codec, get_user_repository
from services.tokens import TokenCodec


# auto_error=False so a missing header surfaces as MissingToken rather than FastAPI's own 401
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)
logger = logging.getLogger(__name__)


async def authenticate_token(token: Optional[str], codec: TokenCodec, users: UserRepository) -> User:
    if not token:
        raise MissingToken()

    try:
        claims = codec.verify(token)
    except AuthError as exc:
        logger.warning("auth.token_rejected", extra={"reason": type(exc).__name__})
        raise

    user = await users.find_by_id(claims.user_id)
    if user is None:
        logger.warning("auth.user_not_found_for_token", extra={"user_id": claims.user_id})
        raise UnknownUser()
    return user


async def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    codec: TokenCodec = Depends(get_token_codec),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    user = await authenticate_token(token, codec, users)
    request.state.user = user
    return user
