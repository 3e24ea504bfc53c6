from fastapi import APIRouter

from app.api.routes import feedback, ideas, profile, utils

api_router = APIRouter()
api_router.include_router(utils.router)
api_router.include_router(ideas.router)
api_router.include_router(feedback.router)
api_router.include_router(profile.router)
