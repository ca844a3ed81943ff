"""STEM Tutor - API Router."""
from fastapi import APIRouter

from stem_tutor.api.routes.flashcards import router as flashcards_router
from stem_tutor.api.routes.health import router as health_router
from stem_tutor.api.routes.progress import router as progress_router
from stem_tutor.api.routes.subjects import router as subjects_router

api_router = APIRouter()

api_router.include_router(flashcards_router)
api_router.include_router(subjects_router)
api_router.include_router(progress_router)
api_router.include_router(health_router)
