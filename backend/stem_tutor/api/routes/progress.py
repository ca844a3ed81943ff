"""
STEM Tutor - Progress API Router
"""
from fastapi import APIRouter

from stem_tutor.api.deps import Progress
from stem_tutor.schemas.progress import ProgressResponse, ProgressUpdate

router = APIRouter(prefix="/progress", tags=["Progress"])


@router.get("", response_model=ProgressResponse)
async def get_progress(service: Progress):
    """Get the progress record."""
    return await service.get_progress()


@router.put("", response_model=ProgressResponse)
async def update_progress(data: ProgressUpdate, service: Progress):
    """
    Merge-update progress.
    
    Fields not in the body are preserved exactly.
    """
    return await service.update_progress(data)
