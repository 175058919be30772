from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from schemas.auth import UserDisplay


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=100)
    image: Optional[str] = None


class ProfileUpdateResponse(BaseModel):
    message: str
    user: UserDisplay


class UserSummary(BaseModel):
    id: str
    name: Optional[str] = None
    email: str


class UserStats(BaseModel):
    activity_count: int
    total_sessions: int
    total_score: int
    average_score: float


class UserStatsResponse(BaseModel):
    user: UserSummary
    stats: UserStats
