from __future__ import annotations

from fastapi import APIRouter

from api.endpoints import activities as activities_endpoints
from api.endpoints import auth as auth_endpoints
from api.endpoints import games as games_endpoints
from api.endpoints import users as users_endpoints


api_router = APIRouter()

api_router.include_router(auth_endpoints.router)
api_router.include_router(games_endpoints.router)
api_router.include_router(users_endpoints.router)
api_router.include_router(activities_endpoints.router)
