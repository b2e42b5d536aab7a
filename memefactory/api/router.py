from fastapi import APIRouter

from memefactory.api.generate import router as generate_router
from memefactory.api.story import router as story_router
from memefactory.api.trends import router as trends_router

api_router = APIRouter()

# API routes at /api/*
api_router.include_router(trends_router, prefix="/api", tags=["trends"])
api_router.include_router(story_router, prefix="/api", tags=["story"])
api_router.include_router(generate_router, prefix="/api", tags=["generate"])
