"""Read access to published learning content.

The repository returns entities in storage order; callers that depend on
sequence (the progress loader) sort explicitly.
"""

from typing import TYPE_CHECKING

from src.content.models import Chapter, GameModule, Lesson


if TYPE_CHECKING:
    from cassandra.cluster import Session


class ContentRepository:
    """Cassandra-backed content reads."""

    def __init__(self, session: "Session", keyspace: str):
        """Initialize with Cassandra session."""
        self.session = session
        self.keyspace = keyspace
        self._prepare_statements()

    def _prepare_statements(self) -> None:
        """Prepare CQL statements for efficient execution."""
        self._list_chapters = self.session.prepare(f"""
            SELECT * FROM {self.keyspace}.chapters
        """)  # noqa: S608

        self._list_chapter_lessons = self.session.prepare(f"""
            SELECT * FROM {self.keyspace}.lessons_by_chapter
            WHERE chapter_id = ?
        """)  # noqa: S608

        self._list_lesson_modules = self.session.prepare(f"""
            SELECT * FROM {self.keyspace}.game_modules_by_lesson
            WHERE lesson_id = ?
        """)  # noqa: S608

        self._get_module = self.session.prepare(f"""
            SELECT * FROM {self.keyspace}.game_modules
            WHERE id = ?
        """)  # noqa: S608

    async def find_published_chapters_ordered(self) -> list[Chapter]:
        """Published chapters sorted by (order, id)."""
        rows = await self.session.aexecute(self._list_chapters)
        chapters = [Chapter.from_row(row) for row in rows]
        return sorted(
            (c for c in chapters if c.is_published), key=lambda c: c.sort_key
        )

    async def find_published_lessons_ordered(self, chapter_id: str) -> list[Lesson]:
        """Published lessons of a chapter sorted by (order or 0, id)."""
        rows = await self.session.aexecute(self._list_chapter_lessons, [chapter_id])
        lessons = [Lesson.from_row(row) for row in rows]
        return sorted(
            (lesson for lesson in lessons if lesson.is_published),
            key=lambda lesson: lesson.sort_key,
        )

    async def find_modules(self, lesson_id: str) -> list[GameModule]:
        """Modules of a lesson sorted by (order, created_at, id)."""
        rows = await self.session.aexecute(self._list_lesson_modules, [lesson_id])
        return sorted(
            (GameModule.from_row(row) for row in rows), key=lambda m: m.sort_key
        )

    async def get_module(self, module_id: str) -> GameModule | None:
        """Get a single module by id."""
        result = await self.session.aexecute(self._get_module, [module_id])
        row = result.one()
        return GameModule.from_lookup_row(row) if row else None
