"""In-memory repositories and snapshot builders for progress tests."""

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from src.content.models import Chapter, GameModule, Lesson
from src.progress.models import CompletionRecord
from src.progress.snapshot import ContentSnapshot, SnapshotChapter, SnapshotLesson


BASE_TIME = datetime(2024, 1, 1, tzinfo=UTC)


class InMemoryContentRepository:
    """Content source backed by plain lists, returned in insertion order."""

    def __init__(self) -> None:
        self.chapters: list[Chapter] = []
        self.lessons: dict[str, list[Lesson]] = {}
        self.modules: dict[str, list[GameModule]] = {}
        self.calls: list[tuple[str, str | None]] = []

    def add_chapter(
        self, chapter_id: str, order: int, is_published: bool = True
    ) -> Chapter:
        chapter = Chapter(
            id=chapter_id,
            title=f"Chapter {chapter_id}",
            description=f"About {chapter_id}",
            order=order,
            is_published=is_published,
        )
        self.chapters.append(chapter)
        return chapter

    def add_lesson(
        self,
        chapter_id: str,
        lesson_id: str,
        order: int | None,
        is_published: bool = True,
        listed_under: str | None = None,
    ) -> Lesson:
        lesson = Lesson(
            id=lesson_id,
            chapter_id=chapter_id,
            title=f"Lesson {lesson_id}",
            description=f"About {lesson_id}",
            order=order,
            is_published=is_published,
        )
        self.lessons.setdefault(listed_under or chapter_id, []).append(lesson)
        return lesson

    def add_modules(
        self,
        lesson_id: str,
        module_ids: Iterable[str],
        listed_under: str | None = None,
    ) -> list[GameModule]:
        bucket = self.modules.setdefault(listed_under or lesson_id, [])
        created = []
        for module_id in module_ids:
            module = GameModule(
                id=module_id,
                lesson_id=lesson_id,
                created_at=BASE_TIME + timedelta(minutes=len(bucket)),
            )
            bucket.append(module)
            created.append(module)
        return created

    async def find_published_chapters_ordered(self) -> list[Chapter]:
        self.calls.append(("chapters", None))
        return list(self.chapters)

    async def find_published_lessons_ordered(self, chapter_id: str) -> list[Lesson]:
        self.calls.append(("lessons", chapter_id))
        return list(self.lessons.get(chapter_id, []))

    async def find_modules(self, lesson_id: str) -> list[GameModule]:
        self.calls.append(("modules", lesson_id))
        return list(self.modules.get(lesson_id, []))

    async def get_module(self, module_id: str) -> GameModule | None:
        for modules in self.modules.values():
            for module in modules:
                if module.id == module_id:
                    return module
        return None


class InMemoryCompletionRepository:
    """Completion source keyed by (user_id, module_id); upserts overwrite."""

    def __init__(self) -> None:
        self.records: dict[tuple[str, str], CompletionRecord] = {}

    def complete(self, user_id: str, *module_ids: str, is_completed: bool = True):
        for module_id in module_ids:
            self.records[(user_id, module_id)] = CompletionRecord(
                user_id=user_id, target_id=module_id, is_completed=is_completed
            )

    async def find_completion_records(
        self, user_id: str, target_ids: Iterable[str]
    ) -> list[CompletionRecord]:
        wanted = set(target_ids)
        return [
            record
            for (uid, module_id), record in self.records.items()
            if uid == user_id and module_id in wanted
        ]

    async def upsert(
        self, user_id: str, target_id: str, is_completed: bool
    ) -> CompletionRecord:
        record = CompletionRecord(
            user_id=user_id, target_id=target_id, is_completed=is_completed
        )
        self.records[(user_id, target_id)] = record
        return record



def make_lesson(
    lesson_id: str,
    modules: int,
    completed: int = 0,
    order: int = 0,
) -> SnapshotLesson:
    """Snapshot lesson with ``modules`` modules, the first ``completed`` done."""
    module_ids = tuple(f"{lesson_id}-m{i}" for i in range(modules))
    return SnapshotLesson(
        id=lesson_id,
        title=f"Lesson {lesson_id}",
        description="",
        order=order,
        module_ids=module_ids,
        completed_module_ids=frozenset(module_ids[:completed]),
    )


def make_chapter(
    chapter_id: str, *lessons: SnapshotLesson, order: int = 0
) -> SnapshotChapter:
    return SnapshotChapter(
        id=chapter_id,
        title=f"Chapter {chapter_id}",
        description="",
        order=order,
        lessons=tuple(lessons),
    )


def make_snapshot(*chapters: SnapshotChapter, user_id: str = "user-1") -> ContentSnapshot:
    return ContentSnapshot(user_id=user_id, chapters=tuple(chapters))
