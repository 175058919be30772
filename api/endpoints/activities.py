from __future__ import annotations

from math import ceil
from typing import Optional

import logging
from fastapi import APIRouter, Depends, Query, status

from services.deps import get_activity_repository
from core.errors import NotFound
from models.activity import ActivityStatus
from models.user import User
from repositories.activities import ActivityRepository
from schemas.activities import (
    ActivityCreate,
    ActivityDisplay,
    ActivityListResponse,
    ActivityResponse,
    ActivityUpdate,
    Pagination,
)
from schemas.auth import MessageResponse
from services.security import get_current_user


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/activities", tags=["activities"])

ACTIVITY_NOT_FOUND = "Activity not found"


@router.get("", response_model=ActivityListResponse)
async def list_activities(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status_filter: Optional[ActivityStatus] = Query(None, alias="status"),
    current_user: User = Depends(get_current_user),
    repo: ActivityRepository = Depends(get_activity_repository),
) -> ActivityListResponse:
    items, total = await repo.list_for_user(str(current_user.id), page=page, limit=limit, status=status_filter)
    return ActivityListResponse(
        activities=[ActivityDisplay.from_activity(a) for a in items],
        pagination=Pagination(page=page, limit=limit, total=total, pages=ceil(total / limit)),
    )


@router.get("/{activity_id}", response_model=ActivityDisplay)
async def get_activity(
    activity_id: str,
    current_user: User = Depends(get_current_user),
    repo: ActivityRepository = Depends(get_activity_repository),
) -> ActivityDisplay:
    activity = await repo.get_for_user(activity_id, str(current_user.id))
    if activity is None:
        raise NotFound(ACTIVITY_NOT_FOUND)
    return ActivityDisplay.from_activity(activity)


@router.post("", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED)
async def create_activity(
    payload: ActivityCreate,
    current_user: User = Depends(get_current_user),
    repo: ActivityRepository = Depends(get_activity_repository),
) -> ActivityResponse:
    activity = await repo.create(str(current_user.id), payload.model_dump())
    logger.info("activities.created", extra={"activity_id": str(activity.id), "user_id": str(current_user.id)})
    return ActivityResponse(message="Activity created", activity=ActivityDisplay.from_activity(activity))


@router.put("/{activity_id}", response_model=ActivityResponse)
async def update_activity(
    activity_id: str,
    payload: ActivityUpdate,
    current_user: User = Depends(get_current_user),
    repo: ActivityRepository = Depends(get_activity_repository),
) -> ActivityResponse:
    fields = payload.model_dump(exclude_unset=True, mode="json")
    activity = await repo.update_for_user(activity_id, str(current_user.id), fields)
    if activity is None:
        raise NotFound(ACTIVITY_NOT_FOUND)
    return ActivityResponse(message="Activity updated", activity=ActivityDisplay.from_activity(activity))


@router.delete("/{activity_id}", response_model=MessageResponse)
async def delete_activity(
    activity_id: str,
    current_user: User = Depends(get_current_user),
    repo: ActivityRepository = Depends(get_activity_repository),
) -> MessageResponse:
    if not await repo.delete_for_user(activity_id, str(current_user.id)):
        raise NotFound(ACTIVITY_NOT_FOUND)
    logger.info("activities.deleted", extra={"activity_id": activity_id, "user_id": str(current_user.id)})
    return MessageResponse(message="Activity deleted")
