from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from pymongo import DESCENDING

from models.activity import Activity, ActivityStatus
from repositories.base import BaseRepository, as_object_id


class ActivityRepository(BaseRepository):
    collection = "activities"

    @staticmethod
    def _owned(activity_id: Any, user_id: str) -> Optional[Dict[str, Any]]:
        oid = as_object_id(activity_id)
        if oid is None:
            return None
        return {"_id": oid, "user_id": user_id}

    async def list_for_user(
        self,
        user_id: str,
        *,
        page: int = 1,
        limit: int = 10,
        status: Optional[ActivityStatus] = None,
    ) -> Tuple[List[Activity], int]:
        query: Dict[str, Any] = {"user_id": user_id}
        if status is not None:
            query["status"] = status.value
        docs = await self.find_many(
            query,
            sort=[("updated_at", DESCENDING)],
            skip=(page - 1) * limit,
            limit=limit,
        )
        total = await self.count_many(query)
        return [Activity.model_validate(d) for d in docs], total

    async def count_for_user(self, user_id: str) -> int:
        return await self.count_many({"user_id": user_id})

    async def get_for_user(self, activity_id: Any, user_id: str) -> Optional[Activity]:
        query = self._owned(activity_id, user_id)
        if query is None:
            return None
        return Activity.from_doc(await self.find_one(query))

    async def create(self, user_id: str, fields: Dict[str, Any]) -> Activity:
        doc = {
            **fields,
            "user_id": user_id,
            "status": ActivityStatus.DRAFT.value,
        }
        stored = await self.insert_one(doc)
        return Activity.model_validate(stored)

    async def update_for_user(self, activity_id: Any, user_id: str, fields: Dict[str, Any]) -> Optional[Activity]:
        query = self._owned(activity_id, user_id)
        if query is None:
            return None
        if not await self.update_one(query, fields):
            return None
        return Activity.from_doc(await self.find_one(query))

    async def delete_for_user(self, activity_id: Any, user_id: str) -> bool:
        query = self._owned(activity_id, user_id)
        if query is None:
            return False
        return await self.delete_one(query)
