"""
STEM Tutor - Health API Router
"""
from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health")
async def api_health_check():
    """Liveness check. Does not touch storage."""
    return {"status": "OK", "message": "STEM Tutor Backend is running"}
