from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field

from .base import MongoModel


DEFAULT_GAME_TYPE = "shimozurdo"


class GameSession(MongoModel):
    # Anonymous play is allowed, so the owner is optional
    user_id: Optional[str] = None
    game_type: str = DEFAULT_GAME_TYPE
    score: int = 0
    questions_answered: int = 0
    correct_answers: int = 0
    wrong_answers: int = 0
    vocabulary: List[Any] = Field(default_factory=list)
    memory_data: List[Any] = Field(default_factory=list)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
