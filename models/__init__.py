from .user import User, UserRole
from .activity import Activity, ActivityStatus
from .game_session import GameSession

__all__ = [
    "User",
    "UserRole",
    "Activity",
    "ActivityStatus",
    "GameSession",
]
