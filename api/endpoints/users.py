from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from services.deps import get_activity_repository, get_game_session_repository, get_user_repository
from core.errors import UnknownUser
from models.user import User
from repositories.activities import ActivityRepository
from repositories.game_sessions import GameSessionRepository
from repositories.users import UserRepository
from schemas.auth import UserDisplay
from schemas.users import ProfileUpdate, ProfileUpdateResponse, UserStats, UserStatsResponse, UserSummary
from services.security import get_current_user


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


@router.get("/profile", response_model=UserDisplay)
async def read_profile(current_user: User = Depends(get_current_user)) -> UserDisplay:
    return UserDisplay.from_user(current_user)


@router.put("/profile", response_model=ProfileUpdateResponse)
async def update_profile(
    payload: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
) -> ProfileUpdateResponse:
    # Empty strings leave the stored value untouched
    fields = {k: v for k, v in payload.model_dump().items() if v}
    updated = await users.update(current_user.id, fields)
    if updated is None:
        raise UnknownUser()
    logger.info("users.profile_updated", extra={"user_id": str(updated.id), "fields": sorted(fields)})
    return ProfileUpdateResponse(message="Profile updated", user=UserDisplay.from_user(updated))


@router.get("/stats", response_model=UserStatsResponse)
async def read_stats(
    current_user: User = Depends(get_current_user),
    activities: ActivityRepository = Depends(get_activity_repository),
    sessions: GameSessionRepository = Depends(get_game_session_repository),
) -> UserStatsResponse:
    user_id = str(current_user.id)
    activity_count = await activities.count_for_user(user_id)
    totals = await sessions.user_totals(user_id)
    return UserStatsResponse(
        user=UserSummary(id=user_id, name=current_user.name, email=current_user.email),
        stats=UserStats(activity_count=activity_count, **totals),
    )
