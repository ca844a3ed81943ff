"""
STEM Tutor - Course Catalog
State behind the course builder: the course list, edits, module completion
and the list -> course -> module navigation.
"""
import logging
import uuid
from enum import Enum
from typing import Any, Dict, List, Optional

from stem_tutor.client.cache import COURSES_KEY, CollectionCache, bundled_seed
from stem_tutor.client.models import Course, CourseDifficulty, CourseModule, ModuleType
from stem_tutor.client.storage import LocalStorage
from stem_tutor.core.clock import utc_now
from stem_tutor.core.config import settings

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {"title", "description", "subject", "difficulty", "tags"}


class CourseView(str, Enum):
    """Which screen the course builder is showing."""
    LIST = "list"
    COURSE = "course"
    MODULE = "module"


def format_time(minutes: int) -> str:
    """90 -> '1h 30m', 45 -> '45m'."""
    hours, mins = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def parse_tags(text: str) -> List[str]:
    """Split comma-separated tag text, dropping blanks."""
    return [tag.strip() for tag in text.split(",") if tag.strip()]


def completed_count(course: Course) -> int:
    return sum(1 for module in course.modules if module.completed)


class CourseCatalog:
    """
    Courses are client-only: every mutation is written straight back to the
    cache and nothing is sent to the server.
    """

    def __init__(self, cache: CollectionCache[Course]):
        self.cache = cache
        self.courses: List[Course] = []
        self.selected_id: Optional[str] = None
        self.viewing_module_id: Optional[str] = None

    @classmethod
    def from_storage(cls, storage: LocalStorage, seed: str | None = None) -> "CourseCatalog":
        """
        Catalog over the ``courses`` key.

        The seed is ``seed``, else ``SAMPLE_COURSES_SOURCE``, else the bundled sample.
        """
        source = seed or settings.SAMPLE_COURSES_SOURCE or bundled_seed("sample-courses.json")
        return cls(CollectionCache(storage, COURSES_KEY, Course, seed=source))

    async def load(self) -> List[Course]:
        self.courses = await self.cache.load()
        return self.courses

    async def reload_samples(self) -> List[Course]:
        """Throw away local courses and start again from the seed."""
        self.cache.clear()
        self.back_to_list()
        self.courses = await self.cache.load()
        logger.info("Reloaded %d sample courses", len(self.courses))
        return self.courses

    def _persist(self) -> None:
        self.cache.save(self.courses)

    def get(self, course_id: str) -> Course:
        for course in self.courses:
            if course.id == course_id:
                return course
        raise KeyError(course_id)

    # Mutations

    def create_course(
        self,
        title: str,
        description: str = "",
        subject: str = "math",
        difficulty: CourseDifficulty = "beginner",
        tags: str = "",
    ) -> Course:
        course = Course(
            id=uuid.uuid4().hex,
            title=title,
            description=description,
            subject=subject,
            difficulty=difficulty,
            tags=parse_tags(tags),
            created=utc_now(),
        )
        self.courses.append(course)
        self._persist()
        return course

    def edit_course(self, course_id: str, **fields: Any) -> Course:
        """
        Change title, description, subject, difficulty or tags.

        ``tags`` may be a list or comma-separated text.
        """
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot edit course fields: {sorted(unknown)}")
        if isinstance(fields.get("tags"), str):
            fields["tags"] = parse_tags(fields["tags"])

        index = self.courses.index(self.get(course_id))
        data = self.courses[index].model_dump()
        data.update(fields)
        self.courses[index] = Course.model_validate(data)
        self._persist()
        return self.courses[index]

    def delete_course(self, course_id: str) -> bool:
        remaining = [course for course in self.courses if course.id != course_id]
        if len(remaining) == len(self.courses):
            return False
        self.courses = remaining
        if self.selected_id == course_id:
            self.back_to_list()
        self._persist()
        return True

    def toggle_share(self, course_id: str) -> Course:
        course = self.get(course_id)
        course.is_shared = not course.is_shared
        self._persist()
        return course

    def add_module(
        self,
        course_id: str,
        title: str,
        description: str = "",
        type: ModuleType = "lesson",
        estimated_time: int = 0,
        content: Optional[Dict[str, Any]] = None,
    ) -> CourseModule:
        course = self.get(course_id)
        module = CourseModule(
            id=uuid.uuid4().hex,
            title=title,
            description=description,
            type=type,
            estimated_time=estimated_time,
            content=content,
        )
        course.modules.append(module)
        self._recalculate(course)
        self._persist()
        return module

    def set_module_completed(self, course_id: str, module_id: str, completed: bool = True) -> Course:
        course = self.get(course_id)
        for module in course.modules:
            if module.id == module_id:
                module.completed = completed
                break
        else:
            raise KeyError(module_id)
        self._recalculate(course)
        self._persist()
        return course

    @staticmethod
    def _recalculate(course: Course) -> None:
        course.total_time = sum(module.estimated_time for module in course.modules)
        if course.modules:
            course.progress = round(completed_count(course) * 100 / len(course.modules))
        else:
            course.progress = 0

    # Navigation

    @property
    def view(self) -> CourseView:
        if self.viewing_module_id is not None:
            return CourseView.MODULE
        if self.selected_id is not None:
            return CourseView.COURSE
        return CourseView.LIST

    @property
    def selected_course(self) -> Optional[Course]:
        if self.selected_id is None:
            return None
        try:
            return self.get(self.selected_id)
        except KeyError:
            return None

    @property
    def viewing_module(self) -> Optional[CourseModule]:
        course = self.selected_course
        if course is None or self.viewing_module_id is None:
            return None
        return next((m for m in course.modules if m.id == self.viewing_module_id), None)

    def select_course(self, course_id: str) -> Course:
        course = self.get(course_id)
        self.selected_id = course.id
        self.viewing_module_id = None
        return course

    def open_module(self, module_id: str) -> bool:
        """Show a module's content. Modules without content stay in the list."""
        course = self.selected_course
        if course is None:
            return False
        module = next((m for m in course.modules if m.id == module_id), None)
        if module is None or not module.content:
            return False
        self.viewing_module_id = module.id
        return True

    def close_module(self) -> None:
        self.viewing_module_id = None

    def back_to_list(self) -> None:
        self.selected_id = None
        self.viewing_module_id = None
