"""
STEM Tutor - Progress Service
Merge-updates for the single installation-wide progress record
"""
import logging

from stem_tutor.core.store import DEFAULT_PROGRESS, PROGRESS, RecordStore, StoreReadError
from stem_tutor.schemas.progress import ProgressUpdate

logger = logging.getLogger(__name__)


class ProgressService:
    """Service for the progress singleton."""
    
    def __init__(self, store: RecordStore):
        self.store = store
    
    async def _load(self, missing_ok: bool = False) -> dict:
        if missing_ok:
            progress = await self.store.read_or(PROGRESS, dict(DEFAULT_PROGRESS))
        else:
            progress = await self.store.read(PROGRESS)
        if not isinstance(progress, dict):
            raise StoreReadError(PROGRESS, "expected a JSON object")
        return progress
    
    async def get_progress(self) -> dict:
        return await self._load()
    
    async def update_progress(self, data: ProgressUpdate) -> dict:
        """
        Shallow-merge the supplied fields over the stored record, or over
        the defaults when no record has been written yet.
        """
        changes = data.changes()
        async with self.store.lock(PROGRESS):
            current = await self._load(missing_ok=True)
            updated = {**current, **changes}
            await self.store.write(PROGRESS, updated)
        
        if changes:
            logger.info("Progress updated: %s", ", ".join(sorted(changes)))
        return updated
