from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pymongo.errors import DuplicateKeyError

from core.errors import DuplicateEmail
from models.user import User, UserRole
from repositories.base import BaseRepository, as_object_id, store_errors


logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserRepository(BaseRepository):
    """Credential store: the only place user documents are read or written."""

    collection = "users"

    async def ensure_indexes(self) -> None:
        with store_errors("users.create_index"):
            await self._coll.create_index("email", unique=True)

    async def find_by_id(self, user_id: Any) -> Optional[User]:
        return User.from_doc(await self.find_one_by_id(user_id))

    async def find_by_email(self, email: str) -> Optional[User]:
        return User.from_doc(await self.find_one({"email": normalize_email(email)}))

    async def create(
        self,
        *,
        email: str,
        password_hash: Optional[str],
        name: Optional[str] = None,
        role: UserRole = UserRole.USER,
        image: Optional[str] = None,
    ) -> User:
        doc: Dict[str, Any] = {
            "name": name,
            "email": normalize_email(email),
            "image": image,
            "role": role.value,
            "password_hash": password_hash,
        }
        try:
            stored = await self.insert_one(doc)
        except DuplicateKeyError as exc:
            # A concurrent registration won the race past find_by_email
            raise DuplicateEmail() from exc
        logger.info("users.created", extra={"user_id": str(stored["_id"]), "role": role.value})
        return User.model_validate(stored)

    async def update(self, user_id: Any, fields: Dict[str, Any]) -> Optional[User]:
        oid = as_object_id(user_id)
        if oid is None:
            return None
        if "email" in fields:
            fields = {**fields, "email": normalize_email(fields["email"])}
        try:
            matched = not fields or await self.update_one({"_id": oid}, fields)
        except DuplicateKeyError as exc:
            raise DuplicateEmail() from exc
        if not matched:
            return None
        return await self.find_by_id(oid)
