from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import OAuth2PasswordRequestForm

from services.deps import get_auth_service
from models.user import User
from schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    Token,
    UserDisplay,
    VerifyResponse,
)
from services.auth import AuthService
from services.security import get_current_user


router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, auth: AuthService = Depends(get_auth_service)) -> AuthResponse:
    user, token = await auth.register(email=payload.email, password=payload.password, name=payload.name)
    return AuthResponse(message="Registration successful", user=UserDisplay.from_user(user), token=token)


@router.post("/login", response_model=AuthResponse)
async def login(request: Request, payload: LoginRequest, auth: AuthService = Depends(get_auth_service)) -> AuthResponse:
    logger.info(
        "auth.login_request",
        extra={"path": str(request.url.path), "user_agent": request.headers.get("user-agent")},
    )
    user, token = await auth.login(payload.email, payload.password)
    return AuthResponse(message="Login successful", user=UserDisplay.from_user(user), token=token)


@router.post("/token", response_model=Token)
async def token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    auth: AuthService = Depends(get_auth_service),
) -> Token:
    _, access_token = await auth.login(form_data.username, form_data.password)
    return Token(access_token=access_token)


@router.get("/verify", response_model=VerifyResponse)
async def verify(current_user: User = Depends(get_current_user)) -> VerifyResponse:
    return VerifyResponse(user=UserDisplay.from_user(current_user))


@router.post("/logout", response_model=MessageResponse)
async def logout() -> MessageResponse:
    # Tokens are stateless; the client discards its copy
    return MessageResponse(message="Logout successful")
