from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import MongoModel, PyObjectId


class ActivityStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class Activity(MongoModel):
    user_id: PyObjectId
    title: str
    description: Optional[str] = None
    content: Dict[str, Any] = Field(default_factory=dict)
    template_id: Optional[str] = None
    game_template_id: Optional[str] = None
    difficulty: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    status: ActivityStatus = ActivityStatus.DRAFT
