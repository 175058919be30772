from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from motor.motor_asyncio import AsyncIOMotorDatabase

from api.router import api_router
from core.config import AppSettings, get_settings
from core.errors import register_exception_handlers
from core.logging_config import configure_logging
from db.database import database_for, open_client
from repositories.users import UserRepository
from services.passwords import PasswordHasher
from services.tokens import TokenCodec


logger = logging.getLogger(__name__)

SERVICE_NAME = "EduCreate Backend API"
API_VERSION = "1.0.0"


def _check_secret(settings: AppSettings) -> None:
    if not settings.uses_default_secret:
        return
    if settings.environment == "production":
        raise RuntimeError("JWT_SECRET_KEY must be set when ENVIRONMENT=production")
    logger.warning("auth.default_secret_in_use", extra={"environment": settings.environment})


def create_app(
    settings: Optional[AppSettings] = None,
    *,
    database: Optional[AsyncIOMotorDatabase] = None,
    token_codec: Optional[TokenCodec] = None,
) -> FastAPI:
    settings = settings or get_settings()
    _check_secret(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        client = None
        if app.state.database is None:
            client = open_client(settings)
            app.state.database = database_for(client, settings)
            logger.info("db.client_opened", extra={"database": settings.database_name})
        try:
            await UserRepository(app.state.database).ensure_indexes()
            yield
        finally:
            if client is not None:
                client.close()
                app.state.database = None
                logger.info("db.client_closed")

    app = FastAPI(title=SERVICE_NAME, version=API_VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.token_codec = token_codec or TokenCodec.from_settings(settings)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "http.request",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                "client": request.client.host if request.client else None,
            },
        )
        return response

    register_exception_handlers(app, debug=settings.is_development)
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
        }

    @app.get("/api/test")
    async def api_test() -> dict[str, str]:
        return {
            "status": "success",
            "message": "API test endpoint is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": API_VERSION,
        }

    logger.info("Application initialized", extra={"environment": settings.environment})
    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
