"""Learner progress module.

Provides:
- Completion records (one per learner and game module)
- Content snapshot loading
- Chapter/lesson unlock and completion computation
- Progress API endpoints
"""

from .models import (
    PROGRESS_TABLES_CQL,
    ChapterStatus,
    CompletionRecord,
    LessonStatus,
)


__all__ = [
    "PROGRESS_TABLES_CQL",
    "ChapterStatus",
    "CompletionRecord",
    "LessonStatus",
]
