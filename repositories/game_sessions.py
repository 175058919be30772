from __future__ import annotations

from typing import Any, Dict, List, Optional

from pymongo import DESCENDING

from models.game_session import GameSession
from repositories.base import BaseRepository, as_object_id, utcnow


class GameSessionRepository(BaseRepository):
    collection = "game_sessions"

    async def get(self, session_id: Any) -> Optional[GameSession]:
        return GameSession.from_doc(await self.find_one_by_id(session_id))

    async def list_for_user(self, user_id: str) -> List[GameSession]:
        docs = await self.find_many({"user_id": user_id}, sort=[("start_time", DESCENDING)])
        return [GameSession.model_validate(d) for d in docs]

    async def create(self, fields: Dict[str, Any]) -> GameSession:
        doc = dict(fields)
        if doc.get("start_time") is None:
            doc["start_time"] = utcnow()
        stored = await self.insert_one(doc)
        return GameSession.model_validate(stored)

    async def update(self, session_id: Any, fields: Dict[str, Any]) -> Optional[GameSession]:
        oid = as_object_id(session_id)
        if oid is None:
            return None
        if not await self.update_one({"_id": oid}, fields):
            return None
        return await self.get(oid)

    async def user_totals(self, user_id: str) -> Dict[str, Any]:
        sessions = await self.find_many({"user_id": user_id})
        total_score = sum(s.get("score") or 0 for s in sessions)
        return {
            "total_sessions": len(sessions),
            "total_score": total_score,
            "average_score": (total_score / len(sessions)) if sessions else 0,
        }

    async def overall_totals(self) -> Dict[str, Any]:
        # Summed in Python to stay tolerant of sessions missing counters
        sessions = await self.find_many({})
        total_sessions = len(sessions)
        score = sum(s.get("score") or 0 for s in sessions)
        answered = sum(s.get("questions_answered") or 0 for s in sessions)
        correct = sum(s.get("correct_answers") or 0 for s in sessions)
        return {
            "total_sessions": total_sessions,
            "average_score": (score / total_sessions) if total_sessions else 0,
            "total_questions": answered,
            "overall_accuracy": (correct / answered * 100.0) if answered else 0,
        }
