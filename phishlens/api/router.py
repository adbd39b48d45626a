"""Master API router — includes all sub-routers."""

from fastapi import APIRouter

from .routes.analysis import router as analysis_router
from .routes.learning import router as learning_router

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(analysis_router)
api_router.include_router(learning_router)
