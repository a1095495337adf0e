"""Database models for learner progress.

Cassandra table definitions for:
- Module progression: one completion record per (user, module)

A re-attempt overwrites the row (Cassandra INSERT is an upsert), so the
stored value is always the latest completion state.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from src.content.models import ensure_utc_aware


class ChapterStatus(str, Enum):
    """Chapter status as seen by a learner."""

    LOCKED = "LOCKED"
    UNLOCKED = "UNLOCKED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class LessonStatus(str, Enum):
    """Lesson status as seen by a learner."""

    LOCKED = "LOCKED"
    UNLOCKED = "UNLOCKED"
    COMPLETED = "COMPLETED"


# ==============================================================================
# CQL Table Definitions
# ==============================================================================

# Partition key: user_id so a learner's whole history is one partition read
MODULE_PROGRESSION_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.module_progression (
    user_id TEXT,
    module_id TEXT,
    is_completed BOOLEAN,
    created_at TIMESTAMP,
    updated_at TIMESTAMP,
    PRIMARY KEY (user_id, module_id)
) WITH CLUSTERING ORDER BY (module_id ASC)
"""

PROGRESS_TABLES_CQL = [
    MODULE_PROGRESSION_TABLE_CQL,
]


# ==============================================================================
# Entity Classes
# ==============================================================================


class CompletionRecord:
    """Fact that a user completed (or failed) a game module.

    Attributes:
        user_id: Learner id
        target_id: Game module id
        is_completed: Latest completion state
        created_at: First time the module was recorded for the user
        updated_at: Last time the record changed
    """

    def __init__(
        self,
        user_id: str,
        target_id: str,
        is_completed: bool,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self.user_id = user_id
        self.target_id = target_id
        self.is_completed = is_completed
        self.created_at = ensure_utc_aware(created_at) or datetime.now(UTC)
        self.updated_at = ensure_utc_aware(updated_at) or self.created_at

    @classmethod
    def from_row(cls, row: Any) -> "CompletionRecord":
        """Create CompletionRecord instance from Cassandra row."""
        return cls(
            user_id=row.user_id,
            target_id=row.module_id,
            is_completed=bool(row.is_completed),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def __repr__(self) -> str:
        return (
            f"<CompletionRecord user={self.user_id} module={self.target_id} "
            f"completed={self.is_completed}>"
        )
