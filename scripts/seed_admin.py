from __future__ import annotations

import asyncio
import os

from motor.motor_asyncio import AsyncIOMotorDatabase

from core.config import get_settings
from db.database import database_for, open_client
from models.user import User, UserRole
from repositories.users import UserRepository
from services.passwords import PasswordHasher


async def upsert_admin(
    db: AsyncIOMotorDatabase, *, email: str, password: str, hasher: PasswordHasher, name: str = "Admin"
) -> User:
    users = UserRepository(db)
    await users.ensure_indexes()
    existing = await users.find_by_email(email)
    if existing is not None:
        return existing
    return await users.create(
        email=email,
        name=name,
        password_hash=hasher.hash(password),
        role=UserRole.ADMIN,
    )


async def _run() -> None:
    settings = get_settings()
    client = open_client(settings, appname="educreate-seed")
    try:
        admin = await upsert_admin(
            database_for(client, settings),
            name=os.getenv("ADMIN_NAME", "Admin"),
            email=os.getenv("ADMIN_EMAIL", "admin@example.com"),
            password=os.getenv("ADMIN_PASSWORD", "password"),
            hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
        )
    finally:
        client.close()
    print("Seeded admin:", {"id": admin.id, "email": admin.email, "role": admin.role.value})


if __name__ == "__main__":
    asyncio.run(_run())
