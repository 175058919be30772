from __future__ import annotations

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from db.database import get_database
from repositories.activities import ActivityRepository
from repositories.game_sessions import GameSessionRepository
from repositories.users import UserRepository
from services.auth import AuthService
from services.passwords import PasswordHasher
from services.tokens import TokenCodec


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_user_repository(db: AsyncIOMotorDatabase = Depends(get_database)) -> UserRepository:
    return UserRepository(db)


def get_activity_repository(db: AsyncIOMotorDatabase = Depends(get_database)) -> ActivityRepository:
    return ActivityRepository(db)


def get_game_session_repository(db: AsyncIOMotorDatabase = Depends(get_database)) -> GameSessionRepository:
    return GameSessionRepository(db)


def get_auth_service(
    users: UserRepository = Depends(get_user_repository),
    codec: TokenCodec = Depends(get_token_codec),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthService:
    return AuthService(users, codec, hasher)
