"""Database models for learning content.

Cassandra table definitions for:
- Chapters: top-level content groups, globally ordered
- Lessons: per-chapter lookup table, ordered within the chapter
- Game modules: per-lesson lookup table plus a by-id table

Content is authored elsewhere; this service only reads it. Ordering is
stored as a plain column (``position``) because a lesson may have no explicit
order, so final ordering is always applied in Python by the loader.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any


class GameType(str, Enum):
    """Interaction type of a game module (payload is opaque here)."""

    MCQ = "mcq"
    FILL_IN_THE_BLANKS = "fill_in_the_blanks"
    TRUE_OR_FALSE = "true_or_false"
    MATCH = "match"
    CHOOSE_AN_ORDER = "choose_an_order"
    GAUGE = "gauge"


def ensure_utc_aware(dt: datetime | None) -> datetime | None:
    """Ensure datetime is UTC-aware (Cassandra returns naive datetimes)."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


# ==============================================================================
# CQL Table Definitions
# ==============================================================================

CHAPTERS_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.chapters (
    id TEXT PRIMARY KEY,
    title TEXT,
    description TEXT,
    position INT,
    is_published BOOLEAN,
    created_at TIMESTAMP,
    updated_at TIMESTAMP
)
"""

# Lessons of a chapter - partitioned by chapter_id
LESSONS_BY_CHAPTER_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.lessons_by_chapter (
    chapter_id TEXT,
    lesson_id TEXT,
    title TEXT,
    description TEXT,
    position INT,
    is_published BOOLEAN,
    created_at TIMESTAMP,
    PRIMARY KEY (chapter_id, lesson_id)
)
"""

# Modules of a lesson - partitioned by lesson_id
GAME_MODULES_BY_LESSON_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.game_modules_by_lesson (
    lesson_id TEXT,
    module_id TEXT,
    game_type TEXT,
    position INT,
    created_at TIMESTAMP,
    PRIMARY KEY (lesson_id, module_id)
)
"""

# Lookup: module by id (used when recording a completion)
GAME_MODULES_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.game_modules (
    id TEXT PRIMARY KEY,
    lesson_id TEXT,
    game_type TEXT,
    position INT,
    created_at TIMESTAMP
)
"""

CONTENT_TABLES_CQL = [
    CHAPTERS_TABLE_CQL,
    LESSONS_BY_CHAPTER_TABLE_CQL,
    GAME_MODULES_BY_LESSON_TABLE_CQL,
    GAME_MODULES_TABLE_CQL,
]


# ==============================================================================
# Entity Classes
# ==============================================================================


class Chapter:
    """Top-level content group.

    Attributes:
        id: Opaque chapter id
        title: Display title
        description: Display description
        order: Global position among chapters (unique, enforced by authoring)
        is_published: Only published chapters are visible to learners
    """

    def __init__(
        self,
        id: str,
        title: str,
        description: str,
        order: int,
        is_published: bool = False,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self.id = id
        self.title = title
        self.description = description
        self.order = order
        self.is_published = is_published
        self.created_at = ensure_utc_aware(created_at) or datetime.now(UTC)
        self.updated_at = ensure_utc_aware(updated_at)

    @property
    def sort_key(self) -> tuple[int, str]:
        """Stable ordering key: order, then id as tie-break."""
        return (self.order, self.id)

    @classmethod
    def from_row(cls, row: Any) -> "Chapter":
        """Create Chapter instance from Cassandra row."""
        return cls(
            id=row.id,
            title=row.title or "",
            description=row.description or "",
            order=row.position or 0,
            is_published=bool(row.is_published),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def __repr__(self) -> str:
        return f"<Chapter {self.id} order={self.order}>"


class Lesson:
    """Learning unit inside a chapter.

    ``order`` may be missing for lessons created without an explicit
    position; such lessons sort as order 0.
    """

    def __init__(
        self,
        id: str,
        chapter_id: str,
        title: str,
        description: str,
        order: int | None = None,
        is_published: bool = False,
        created_at: datetime | None = None,
    ):
        self.id = id
        self.chapter_id = chapter_id
        self.title = title
        self.description = description
        self.order = order
        self.is_published = is_published
        self.created_at = ensure_utc_aware(created_at) or datetime.now(UTC)

    @property
    def sort_key(self) -> tuple[int, str]:
        return (self.order or 0, self.id)

    @classmethod
    def from_row(cls, row: Any) -> "Lesson":
        """Create Lesson instance from a lessons_by_chapter row."""
        return cls(
            id=row.lesson_id,
            chapter_id=row.chapter_id,
            title=row.title or "",
            description=row.description or "",
            order=row.position,
            is_published=bool(row.is_published),
            created_at=row.created_at,
        )

    def __repr__(self) -> str:
        return f"<Lesson {self.id} chapter={self.chapter_id} order={self.order}>"


class GameModule:
    """One answerable interaction inside a lesson."""

    def __init__(
        self,
        id: str,
        lesson_id: str,
        game_type: str = GameType.MCQ.value,
        order: int | None = None,
        created_at: datetime | None = None,
    ):
        self.id = id
        self.lesson_id = lesson_id
        self.game_type = game_type
        self.order = order
        self.created_at = ensure_utc_aware(created_at) or datetime.now(UTC)

    @property
    def sort_key(self) -> tuple[int, datetime, str]:
        """Explicit order first, then creation time, then id."""
        return (self.order or 0, self.created_at, self.id)

    @classmethod
    def from_row(cls, row: Any) -> "GameModule":
        """Create GameModule from a game_modules_by_lesson row."""
        return cls(
            id=row.module_id,
            lesson_id=row.lesson_id,
            game_type=row.game_type or GameType.MCQ.value,
            order=row.position,
            created_at=row.created_at,
        )

    @classmethod
    def from_lookup_row(cls, row: Any) -> "GameModule":
        """Create GameModule from a game_modules (by id) row."""
        return cls(
            id=row.id,
            lesson_id=row.lesson_id,
            game_type=row.game_type or GameType.MCQ.value,
            order=row.position,
            created_at=row.created_at,
        )

    def __repr__(self) -> str:
        return f"<GameModule {self.id} lesson={self.lesson_id} {self.game_type}>"
