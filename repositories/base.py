from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Sequence

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from core.errors import StoreFailure


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_object_id(value: Any) -> Optional[ObjectId]:
    """Coerce ``value`` to an ObjectId, or None when it cannot be one."""
    if isinstance(value, ObjectId):
        return value
    if value is None or not ObjectId.is_valid(str(value)):
        return None
    return ObjectId(str(value))


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except DuplicateKeyError:
        # Unique-index violations are a caller concern, not a store outage
        raise
    except PyMongoError as exc:
        raise StoreFailure(f"{operation} failed") from exc


class BaseRepository:
    collection: str = ""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.db = db

    @property
    def _coll(self):
        return self.db[self.collection]

    async def find_many(
        self,
        query: Dict[str, Any] | None = None,
        *,
        sort: Optional[Sequence[tuple[str, int]]] = None,
        limit: Optional[int] = None,
        skip: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        with store_errors(f"{self.collection}.find"):
            cursor = self._coll.find(query or {})
            if sort:
                cursor = cursor.sort(list(sort))
            if skip:
                cursor = cursor.skip(skip)
            if limit:
                cursor = cursor.limit(limit)
            return [doc async for doc in cursor]

    async def count_many(self, query: Dict[str, Any] | None = None) -> int:
        with store_errors(f"{self.collection}.count"):
            return await self._coll.count_documents(query or {})

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with store_errors(f"{self.collection}.find_one"):
            return await self._coll.find_one(query)

    async def find_one_by_id(self, doc_id: Any) -> Optional[Dict[str, Any]]:
        oid = as_object_id(doc_id)
        if oid is None:
            return None
        return await self.find_one({"_id": oid})

    async def insert_one(self, doc: Dict[str, Any], *, with_timestamps: bool = True) -> Dict[str, Any]:
        # Never persist a null _id; MongoDB will auto-generate one
        doc = {k: v for k, v in doc.items() if not (k == "_id" and v is None)}

        if with_timestamps:
            now = utcnow()
            doc.setdefault("created_at", now)
            doc.setdefault("updated_at", now)
        with store_errors(f"{self.collection}.insert"):
            result = await self._coll.insert_one(doc)
        doc["_id"] = result.inserted_id
        return doc

    async def update_one(
        self,
        filter_query: Dict[str, Any],
        fields: Dict[str, Any],
        *,
        touch_updated_at: bool = True,
    ) -> bool:
        """Apply ``fields`` with ``$set``; returns whether a document matched."""
        set_part = dict(fields)
        if touch_updated_at:
            set_part["updated_at"] = utcnow()
        with store_errors(f"{self.collection}.update"):
            result = await self._coll.update_one(filter_query, {"$set": set_part})
        return result.matched_count > 0

    async def delete_one(self, query: Dict[str, Any]) -> bool:
        with store_errors(f"{self.collection}.delete"):
            result = await self._coll.delete_one(query)
        return result.deleted_count > 0
