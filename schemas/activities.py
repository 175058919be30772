from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from models.activity import Activity, ActivityStatus


class ActivityCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    content: Dict[str, Any] = Field(default_factory=dict)
    template_id: Optional[str] = None
    game_template_id: Optional[str] = None
    difficulty: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class ActivityUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    content: Optional[Dict[str, Any]] = None
    template_id: Optional[str] = None
    game_template_id: Optional[str] = None
    difficulty: Optional[str] = None
    tags: Optional[List[str]] = None
    status: Optional[ActivityStatus] = None

    @field_validator("title", "content", "tags", "status")
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        # Omit a field to leave it unchanged; these columns cannot be cleared
        if value is None:
            raise ValueError("must not be null")
        return value


class ActivityDisplay(BaseModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    content: Dict[str, Any]
    template_id: Optional[str] = None
    game_template_id: Optional[str] = None
    difficulty: Optional[str] = None
    tags: List[str]
    status: ActivityStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_activity(cls, activity: Activity) -> "ActivityDisplay":
        return cls.model_validate(activity.model_dump())


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class ActivityListResponse(BaseModel):
    activities: List[ActivityDisplay]
    pagination: Pagination


class ActivityResponse(BaseModel):
    message: str
    activity: ActivityDisplay
