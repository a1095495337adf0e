"""Progress computation over a content snapshot.

Decides, for one learner, which chapters and lessons are locked, unlocked,
in progress or completed. Every function here is pure: same snapshot in,
same summaries out.

Rules:
- A lesson is completed when it has at least one module and every module
  has a completion record for the learner.
- A chapter is completed when it has at least one lesson and every lesson
  is completed.
- The first chapter is always unlocked; any other chapter is unlocked when
  the previous chapter is completed.
- The first lesson of a chapter is unlocked when its chapter is unlocked;
  any other lesson is unlocked when the previous lesson is completed.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from .models import ChapterStatus, LessonStatus
from .snapshot import ContentSnapshot, SnapshotChapter, SnapshotLesson


# ==============================================================================
# Result Types
# ==============================================================================


@dataclass(frozen=True, slots=True)
class ModuleCompletion:
    """Module counts for one lesson."""

    completed_modules: int
    total_modules: int

    @property
    def is_completed(self) -> bool:
        # A lesson without modules can never be done
        return self.total_modules > 0 and self.completed_modules == self.total_modules


@dataclass(frozen=True, slots=True)
class LessonResolution:
    lesson_id: str
    status: LessonStatus
    is_unlocked: bool
    completion: ModuleCompletion


@dataclass(frozen=True, slots=True)
class ChapterResolution:
    chapter_id: str
    status: ChapterStatus
    is_unlocked: bool
    is_completed: bool
    completed_lessons: int
    total_lessons: int


@dataclass(frozen=True, slots=True)
class LessonSummary:
    """Lesson fields plus the learner's derived state."""

    id: str
    title: str
    description: str
    order: int
    status: LessonStatus
    game_module_id: str | None
    completed_modules: int
    total_modules: int


@dataclass(frozen=True, slots=True)
class ChapterSummary:
    """Chapter fields plus the learner's derived state and lesson summaries."""

    id: str
    title: str
    description: str
    order: int
    status: ChapterStatus
    completed_lessons: int
    total_lessons: int
    lessons: tuple[LessonSummary, ...]


# ==============================================================================
# Evaluation
# ==============================================================================


def evaluate_lesson(lesson: SnapshotLesson) -> ModuleCompletion:
    """Count the lesson's modules and how many the learner completed."""
    completed = sum(
        1 for module_id in lesson.module_ids if module_id in lesson.completed_module_ids
    )
    return ModuleCompletion(
        completed_modules=completed,
        total_modules=len(lesson.module_ids),
    )


def resolve_lessons(
    completions: Sequence[ModuleCompletion],
    chapter_unlocked: bool,
    lesson_ids: Sequence[str],
) -> list[LessonResolution]:
    """Resolve lesson statuses inside one chapter.

    Args:
        completions: Per-lesson module counts, in lesson order
        chapter_unlocked: Unlock state of the owning chapter
        lesson_ids: Lesson ids aligned with ``completions``

    Returns:
        One resolution per lesson, same order
    """
    resolutions: list[LessonResolution] = []
    for index, (lesson_id, completion) in enumerate(
        zip(lesson_ids, completions, strict=True)
    ):
        if index == 0:
            unlocked = chapter_unlocked
        else:
            unlocked = completions[index - 1].is_completed

        if completion.is_completed:
            status = LessonStatus.COMPLETED
        elif unlocked:
            status = LessonStatus.UNLOCKED
        else:
            status = LessonStatus.LOCKED

        resolutions.append(
            LessonResolution(
                lesson_id=lesson_id,
                status=status,
                is_unlocked=unlocked,
                completion=completion,
            )
        )
    return resolutions


def resolve_chapters(
    chapters: Sequence[SnapshotChapter],
    completions: Sequence[Sequence[ModuleCompletion]],
) -> list[ChapterResolution]:
    """Resolve chapter statuses in global order.

    A chapter's unlock state depends only on the previous chapter, never on
    its own lessons.
    """
    resolutions: list[ChapterResolution] = []
    previous_completed = False

    for index, (chapter, lesson_completions) in enumerate(
        zip(chapters, completions, strict=True)
    ):
        total = len(lesson_completions)
        completed = sum(1 for c in lesson_completions if c.is_completed)
        is_completed = total > 0 and completed == total
        is_unlocked = index == 0 or previous_completed

        if is_completed:
            status = ChapterStatus.COMPLETED
        elif completed > 0:
            status = ChapterStatus.IN_PROGRESS
        elif is_unlocked:
            status = ChapterStatus.UNLOCKED
        else:
            status = ChapterStatus.LOCKED

        resolutions.append(
            ChapterResolution(
                chapter_id=chapter.id,
                status=status,
                is_unlocked=is_unlocked,
                is_completed=is_completed,
                completed_lessons=completed,
                total_lessons=total,
            )
        )
        previous_completed = is_completed

    return resolutions


# ==============================================================================
# Aggregation
# ==============================================================================


def aggregate(
    chapters: Sequence[SnapshotChapter],
    chapter_resolutions: Sequence[ChapterResolution],
    lesson_resolutions: Sequence[Sequence[LessonResolution]],
) -> list[ChapterSummary]:
    """Assemble chapter summaries embedding their lesson summaries."""
    summaries: list[ChapterSummary] = []
    for chapter, chapter_res, lessons_res in zip(
        chapters, chapter_resolutions, lesson_resolutions, strict=True
    ):
        lessons = tuple(
            LessonSummary(
                id=lesson.id,
                title=lesson.title,
                description=lesson.description,
                order=lesson.order,
                status=res.status,
                game_module_id=lesson.module_ids[0] if lesson.module_ids else None,
                completed_modules=res.completion.completed_modules,
                total_modules=res.completion.total_modules,
            )
            for lesson, res in zip(chapter.lessons, lessons_res, strict=True)
        )
        summaries.append(
            ChapterSummary(
                id=chapter.id,
                title=chapter.title,
                description=chapter.description,
                order=chapter.order,
                status=chapter_res.status,
                completed_lessons=chapter_res.completed_lessons,
                total_lessons=chapter_res.total_lessons,
                lessons=lessons,
            )
        )
    return summaries


def compute_progress(snapshot: ContentSnapshot) -> list[ChapterSummary]:
    """Compute the learner's ordered chapter summaries from a snapshot."""
    completions = [
        [evaluate_lesson(lesson) for lesson in chapter.lessons]
        for chapter in snapshot.chapters
    ]
    chapter_resolutions = resolve_chapters(snapshot.chapters, completions)
    lesson_resolutions = [
        resolve_lessons(
            chapter_completions,
            chapter_res.is_unlocked,
            [lesson.id for lesson in chapter.lessons],
        )
        for chapter, chapter_completions, chapter_res in zip(
            snapshot.chapters, completions, chapter_resolutions, strict=True
        )
    ]
    return aggregate(snapshot.chapters, chapter_resolutions, lesson_resolutions)
