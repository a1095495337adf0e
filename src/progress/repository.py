"""Completion record persistence."""

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import structlog

from .models import CompletionRecord


if TYPE_CHECKING:
    from cassandra.cluster import Session

logger = structlog.get_logger(__name__)


class CompletionRepository:
    """Cassandra-backed completion records, one row per (user, module)."""

    def __init__(self, session: "Session", keyspace: str):
        """Initialize with Cassandra session."""
        self.session = session
        self.keyspace = keyspace
        self._prepare_statements()

    def _prepare_statements(self) -> None:
        """Prepare CQL statements for efficient execution."""
        self._find_records = self.session.prepare(f"""
            SELECT * FROM {self.keyspace}.module_progression
            WHERE user_id = ? AND module_id IN ?
        """)  # noqa: S608

        self._get_record = self.session.prepare(f"""
            SELECT * FROM {self.keyspace}.module_progression
            WHERE user_id = ? AND module_id = ?
        """)  # noqa: S608

        self._upsert_record = self.session.prepare(f"""
            INSERT INTO {self.keyspace}.module_progression
            (user_id, module_id, is_completed, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?)
        """)  # noqa: S608

    async def find_completion_records(
        self, user_id: str, target_ids: Iterable[str]
    ) -> list[CompletionRecord]:
        """Get the user's records for the given module ids.

        Module ids without a record are simply absent from the result.
        """
        ids = sorted(set(target_ids))
        if not ids:
            return []
        rows = await self.session.aexecute(self._find_records, [user_id, ids])
        return [CompletionRecord.from_row(row) for row in rows]

    async def get_record(self, user_id: str, target_id: str) -> CompletionRecord | None:
        """Get a single record."""
        result = await self.session.aexecute(self._get_record, [user_id, target_id])
        row = result.one()
        return CompletionRecord.from_row(row) if row else None

    async def upsert(
        self, user_id: str, target_id: str, is_completed: bool
    ) -> CompletionRecord:
        """Insert or overwrite the record; the latest value is authoritative."""
        now = datetime.now(UTC)
        existing = await self.get_record(user_id, target_id)

        record = CompletionRecord(
            user_id=user_id,
            target_id=target_id,
            is_completed=is_completed,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )

        await self.session.aexecute(
            self._upsert_record,
            [
                record.user_id,
                record.target_id,
                record.is_completed,
                record.created_at,
                record.updated_at,
            ],
        )

        logger.debug(
            "completion_record_upserted",
            module_id=target_id,
            is_completed=is_completed,
            replaced=existing is not None,
        )

        return record
