"""
STEM Tutor - Client
API client, durable key-value cache and the view-state controllers that
sit on top of them.
"""
from stem_tutor.client.api import ApiError, TutorApiClient
from stem_tutor.client.bosses import BossArena
from stem_tutor.client.cache import CollectionCache
from stem_tutor.client.courses import CourseCatalog, CourseView, format_time
from stem_tutor.client.flashcards import FlashcardDeck
from stem_tutor.client.sidebar import Sidebar
from stem_tutor.client.skills import SkillStatus, SkillTree
from stem_tutor.client.storage import LocalStorage

__all__ = [
    "ApiError",
    "TutorApiClient",
    "LocalStorage",
    "CollectionCache",
    "CourseCatalog",
    "CourseView",
    "format_time",
    "SkillTree",
    "SkillStatus",
    "Sidebar",
    "FlashcardDeck",
    "BossArena",
]
