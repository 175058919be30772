from __future__ import annotations

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query, status

from services.deps import get_game_session_repository
from core.errors import NotFound
from repositories.game_sessions import GameSessionRepository
from schemas.games import (
    GameSessionCreate,
    GameSessionCreated,
    GameSessionDisplay,
    GameSessionUpdate,
    GameSessionUpdated,
    OverallGameStats,
)


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/games", tags=["games"])

SESSION_NOT_FOUND = "Game session not found"


@router.get("/stats", response_model=Union[GameSessionDisplay, List[GameSessionDisplay], OverallGameStats])
async def read_stats(
    session_id: Optional[str] = Query(None, alias="sessionId"),
    user_id: Optional[str] = Query(None, alias="userId"),
    repo: GameSessionRepository = Depends(get_game_session_repository),
):
    if session_id:
        session = await repo.get(session_id)
        if session is None:
            raise NotFound(SESSION_NOT_FOUND)
        return GameSessionDisplay.from_session(session)
    if user_id:
        return [GameSessionDisplay.from_session(s) for s in await repo.list_for_user(user_id)]
    return OverallGameStats(**await repo.overall_totals())


@router.post("/stats", response_model=GameSessionCreated, status_code=status.HTTP_201_CREATED)
async def save_stats(
    payload: GameSessionCreate,
    repo: GameSessionRepository = Depends(get_game_session_repository),
) -> GameSessionCreated:
    session = await repo.create(payload.model_dump())
    logger.info("games.session_saved", extra={"session_id": str(session.id), "game_type": session.game_type})
    return GameSessionCreated(session_id=str(session.id), message="Game stats saved")


@router.put("/stats/{session_id}", response_model=GameSessionUpdated)
async def update_stats(
    session_id: str,
    payload: GameSessionUpdate,
    repo: GameSessionRepository = Depends(get_game_session_repository),
) -> GameSessionUpdated:
    session = await repo.update(session_id, payload.model_dump(exclude_unset=True))
    if session is None:
        raise NotFound(SESSION_NOT_FOUND)
    return GameSessionUpdated(message="Game stats updated", session=GameSessionDisplay.from_session(session))
