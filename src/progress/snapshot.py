"""In-memory content snapshot for one learner.

Produced by the loader, consumed by the engine. Sequences are already in
their final order; the engine never re-sorts.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class SnapshotLesson:
    """A published lesson with its ordered module ids and the learner's completions."""

    id: str
    title: str
    description: str
    order: int
    module_ids: tuple[str, ...] = ()
    completed_module_ids: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True, slots=True)
class SnapshotChapter:
    """A published chapter with its ordered lessons."""

    id: str
    title: str
    description: str
    order: int
    lessons: tuple[SnapshotLesson, ...] = ()


@dataclass(frozen=True, slots=True)
class ContentSnapshot:
    """Ordered published content plus one learner's completion facts."""

    user_id: str
    chapters: tuple[SnapshotChapter, ...] = ()
