from fastapi import APIRouter

from pgclock.api.routes import clock, utils

api_router = APIRouter()
api_router.include_router(clock.router)
api_router.include_router(utils.router)
