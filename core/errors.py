from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto a JSON ``{"error": ...}`` response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class MissingToken(AuthError):
    message = "Authentication token not provided"


class InvalidToken(AuthError):
    message = "Invalid token"


class TokenExpired(AuthError):
    message = "Token has expired"


class UnknownUser(AuthError):
    message = "User does not exist"


class InvalidCredentials(AuthError):
    message = "Incorrect email or password"


class DuplicateEmail(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User already exists"


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Resource not found"


class StoreFailure(AppError):
    message = "Database operation failed"


def _server_error_body(exc: Exception, debug: bool) -> Dict[str, Any]:
    return {
        "error": "Internal server error",
        "message": str(exc) if debug else "Something went wrong",
    }


def register_exception_handlers(app: FastAPI, *, debug: bool) -> None:
    @app.exception_handler(AppError)
    async def _app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "app.store_failure",
                extra={"path": request.url.path, "error": str(exc.__cause__ or exc)},
            )
            return JSONResponse(status_code=exc.status_code, content=_server_error_body(exc.__cause__ or exc, debug))
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = [
            {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        logger.info("app.validation_failed", extra={"path": request.url.path, "details": details})
        return JSONResponse(
            status_code=ValidationFailed.status_code,
            content={"error": ValidationFailed.message, "details": details},
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unrouted paths and unrouted methods on known paths both read as a missing endpoint
        if (exc.status_code, exc.detail) in ((404, "Not Found"), (405, "Method Not Allowed")):
            return JSONResponse(status_code=404, content={"error": "API endpoint not found"})
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("app.unhandled_error", extra={"path": request.url.path})
        return JSONResponse(status_code=500, content=_server_error_body(exc, debug))
