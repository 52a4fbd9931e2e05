"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from moodspace.api.routes import auth, generate, moods, dashboard

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(generate.router)
api_router.include_router(moods.router)
api_router.include_router(dashboard.router)
