"""Contracts the progress loader and service depend on.

The Cassandra repositories satisfy these structurally; tests can pass any
object with the same async methods.
"""

from collections.abc import Iterable
from typing import Protocol

from src.content.models import Chapter, GameModule, Lesson

from .models import CompletionRecord


class ContentSource(Protocol):
    """Read access to published content."""

    async def find_published_chapters_ordered(self) -> list[Chapter]:
        """Published chapters, ordered."""
        ...

    async def find_published_lessons_ordered(self, chapter_id: str) -> list[Lesson]:
        """Published lessons of a chapter, ordered."""
        ...

    async def find_modules(self, lesson_id: str) -> list[GameModule]:
        """Modules of a lesson."""
        ...

    async def get_module(self, module_id: str) -> GameModule | None:
        """Single module by id."""
        ...


class CompletionSource(Protocol):
    """Read/write access to a learner's completion records."""

    async def find_completion_records(
        self, user_id: str, target_ids: Iterable[str]
    ) -> list[CompletionRecord]:
        """Records of the user for the given module ids."""
        ...

    async def upsert(
        self, user_id: str, target_id: str, is_completed: bool
    ) -> CompletionRecord:
        """Insert or overwrite a record."""
        ...
