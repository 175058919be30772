from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from models.game_session import DEFAULT_GAME_TYPE, GameSession


class GameSessionCreate(BaseModel):
    user_id: Optional[str] = None
    game_type: str = DEFAULT_GAME_TYPE
    score: int = 0
    questions_answered: int = Field(default=0, ge=0)
    correct_answers: int = Field(default=0, ge=0)
    wrong_answers: int = Field(default=0, ge=0)
    vocabulary: List[Any] = Field(default_factory=list)
    memory_data: List[Any] = Field(default_factory=list)
    start_time: Optional[datetime] = None


class GameSessionUpdate(BaseModel):
    game_type: Optional[str] = None
    score: Optional[int] = None
    questions_answered: Optional[int] = Field(default=None, ge=0)
    correct_answers: Optional[int] = Field(default=None, ge=0)
    wrong_answers: Optional[int] = Field(default=None, ge=0)
    vocabulary: Optional[List[Any]] = None
    memory_data: Optional[List[Any]] = None
    end_time: Optional[datetime] = None

    @field_validator(
        "game_type", "score", "questions_answered", "correct_answers", "wrong_answers", "vocabulary", "memory_data"
    )
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("must not be null")
        return value


class GameSessionDisplay(BaseModel):
    id: str
    user_id: Optional[str] = None
    game_type: str
    score: int
    questions_answered: int
    correct_answers: int
    wrong_answers: int
    vocabulary: List[Any]
    memory_data: List[Any]
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_session(cls, session: GameSession) -> "GameSessionDisplay":
        return cls.model_validate(session.model_dump())


class OverallGameStats(BaseModel):
    total_sessions: int
    average_score: float
    total_questions: int
    overall_accuracy: float


class GameSessionCreated(BaseModel):
    session_id: str
    message: str


class GameSessionUpdated(BaseModel):
    message: str
    session: GameSessionDisplay
