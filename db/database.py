from __future__ import annotations

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from core.config import AppSettings


def open_client(settings: AppSettings, *, appname: str = "educreate-api") -> AsyncIOMotorClient:
    # Construction does not connect; the driver dials lazily on first operation.
    return AsyncIOMotorClient(settings.mongo_uri, appname=appname, tz_aware=True)


def database_for(client: AsyncIOMotorClient, settings: AppSettings) -> AsyncIOMotorDatabase:
    return client[settings.database_name]


async def get_database(request: Request) -> AsyncIOMotorDatabase:
    db = getattr(request.app.state, "database", None)
    if db is None:
        raise RuntimeError("Database handle is not initialised; is the app lifespan running?")
    return db
