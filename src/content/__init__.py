"""Learning content (chapters, lessons, game modules).

Provides:
- Entities and CQL table definitions
- Read-only Cassandra repository used by progress computation
"""

from .models import (
    CONTENT_TABLES_CQL,
    Chapter,
    GameModule,
    GameType,
    Lesson,
)
from .repository import ContentRepository


__all__ = [
    "CONTENT_TABLES_CQL",
    "Chapter",
    "ContentRepository",
    "GameModule",
    "GameType",
    "Lesson",
]
