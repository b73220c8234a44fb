"""
Main API router that includes all /api route modules.
"""
from fastapi import APIRouter
from tracknest.api.routes import users, profile, entries, groups

api_router = APIRouter()

# Include all route modules
api_router.include_router(users.router)
api_router.include_router(profile.router)
api_router.include_router(entries.router)
api_router.include_router(groups.router)
