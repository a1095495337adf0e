"""Content snapshot loader.

Builds the ordered chapter -> lesson -> module tree for one learner and
attaches the learner's completion facts. Lookups per chapter and per lesson
are independent reads and run concurrently; ordering is restored afterwards
because the engine relies on sequence.
"""

import asyncio

import structlog

from src.content.models import Chapter, GameModule, Lesson

from .protocols import CompletionSource, ContentSource
from .snapshot import ContentSnapshot, SnapshotChapter, SnapshotLesson


logger = structlog.get_logger(__name__)


class ContentSnapshotLoader:
    """Load a learner's content snapshot from the repositories."""

    def __init__(
        self,
        content_repository: ContentSource,
        completion_repository: CompletionSource,
    ):
        self.content_repository = content_repository
        self.completion_repository = completion_repository

    async def load(self, user_id: str) -> ContentSnapshot:
        """Load published content and the user's completions.

        Args:
            user_id: Learner id (already validated by the caller)

        Returns:
            ContentSnapshot with chapters, lessons and module ids in order
        """
        chapters = [
            c
            for c in await self.content_repository.find_published_chapters_ordered()
            if c.is_published
        ]
        chapters.sort(key=lambda c: c.sort_key)

        lessons_per_chapter = await asyncio.gather(
            *(self._load_lessons(chapter) for chapter in chapters)
        )

        all_lessons = [lesson for lessons in lessons_per_chapter for lesson in lessons]
        modules_per_lesson = await asyncio.gather(
            *(self._load_modules(lesson) for lesson in all_lessons)
        )
        modules_by_lesson = {
            lesson.id: modules
            for lesson, modules in zip(all_lessons, modules_per_lesson, strict=True)
        }

        module_ids = {m.id for modules in modules_per_lesson for m in modules}
        records = await self.completion_repository.find_completion_records(
            user_id, module_ids
        )
        # Records outside the snapshot are ignored
        completed_ids = frozenset(
            r.target_id for r in records if r.is_completed and r.target_id in module_ids
        )

        snapshot = ContentSnapshot(
            user_id=user_id,
            chapters=tuple(
                SnapshotChapter(
                    id=chapter.id,
                    title=chapter.title,
                    description=chapter.description,
                    order=chapter.order,
                    lessons=tuple(
                        self._to_snapshot_lesson(
                            lesson, modules_by_lesson[lesson.id], completed_ids
                        )
                        for lesson in lessons
                    ),
                )
                for chapter, lessons in zip(chapters, lessons_per_chapter, strict=True)
            ),
        )

        logger.debug(
            "content_snapshot_loaded",
            chapters=len(snapshot.chapters),
            lessons=len(all_lessons),
            modules=len(module_ids),
            completed_modules=len(completed_ids),
        )

        return snapshot

    async def _load_lessons(self, chapter: Chapter) -> list[Lesson]:
        lessons = await self.content_repository.find_published_lessons_ordered(
            chapter.id
        )
        kept: list[Lesson] = []
        for lesson in lessons:
            if not lesson.is_published:
                continue
            if lesson.chapter_id != chapter.id:
                logger.warning(
                    "orphaned_lesson_skipped",
                    lesson_id=lesson.id,
                    chapter_id=chapter.id,
                    lesson_chapter_id=lesson.chapter_id,
                )
                continue
            kept.append(lesson)
        kept.sort(key=lambda lesson: lesson.sort_key)
        return kept

    async def _load_modules(self, lesson: Lesson) -> list[GameModule]:
        modules = await self.content_repository.find_modules(lesson.id)
        kept: list[GameModule] = []
        for module in modules:
            if module.lesson_id != lesson.id:
                logger.warning(
                    "orphaned_module_skipped",
                    module_id=module.id,
                    lesson_id=lesson.id,
                    module_lesson_id=module.lesson_id,
                )
                continue
            kept.append(module)
        kept.sort(key=lambda m: m.sort_key)
        return kept

    @staticmethod
    def _to_snapshot_lesson(
        lesson: Lesson,
        modules: list[GameModule],
        completed_ids: frozenset[str],
    ) -> SnapshotLesson:
        module_ids = tuple(m.id for m in modules)
        return SnapshotLesson(
            id=lesson.id,
            title=lesson.title,
            description=lesson.description,
            order=lesson.order or 0,
            module_ids=module_ids,
            completed_module_ids=completed_ids.intersection(module_ids),
        )
