"""Learner progress service layer.

Business logic for:
- Computing a learner's chapter/lesson progress
- Recording module completions
"""

from dataclasses import dataclass

import structlog

from .engine import ChapterSummary, compute_progress
from .loader import ContentSnapshotLoader
from .models import ChapterStatus, CompletionRecord
from .protocols import CompletionSource, ContentSource


logger = structlog.get_logger(__name__)


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class ProgressError(Exception):
    """Base progress error."""

    def __init__(self, message: str, code: str = "progress_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class InvalidUserError(ProgressError):
    """Missing or blank user id."""

    def __init__(self, message: str = "User ID is required"):
        super().__init__(message, "invalid_user")


class GameModuleNotFoundError(ProgressError):
    """Game module does not exist."""

    def __init__(self, module_id: str):
        super().__init__(
            f"Game module with id {module_id} not found", "module_not_found"
        )


@dataclass(frozen=True, slots=True)
class ModuleCompletionResult:
    """Stored record plus where the module sits in its lesson."""

    record: CompletionRecord
    next_game_module_id: str | None
    current_game_module_index: int
    total_game_modules: int


def _require_user_id(user_id: str | None) -> str:
    if user_id is None or not str(user_id).strip():
        raise InvalidUserError
    return str(user_id)


# ==============================================================================
# Progress Service
# ==============================================================================


class ProgressService:
    """Service for learner progress."""

    def __init__(
        self,
        content_repository: ContentSource,
        completion_repository: CompletionSource,
    ):
        self.content_repository = content_repository
        self.completion_repository = completion_repository
        self.loader = ContentSnapshotLoader(content_repository, completion_repository)

    async def get_user_chapters(self, user_id: str | None) -> list[ChapterSummary]:
        """Get the learner's ordered chapter summaries.

        Args:
            user_id: Learner id

        Returns:
            Chapter summaries in chapter order, each embedding its lessons

        Raises:
            InvalidUserError: If user_id is missing or blank
        """
        user_id = _require_user_id(user_id)

        snapshot = await self.loader.load(user_id)
        summaries = compute_progress(snapshot)

        logger.info(
            "user_progress_computed",
            chapters_total=len(summaries),
            chapters_completed=sum(
                1 for s in summaries if s.status == ChapterStatus.COMPLETED
            ),
        )

        return summaries

    async def complete_module(
        self,
        user_id: str | None,
        module_id: str,
        is_completed: bool = True,
    ) -> ModuleCompletionResult:
        """Record the learner's latest completion state for a module.

        Returns:
            The stored record with the next module of the lesson (or None
            after the last one), the module's 0-based index and the lesson's
            module count

        Raises:
            InvalidUserError: If user_id is missing or blank
            GameModuleNotFoundError: If the module does not exist
        """
        user_id = _require_user_id(user_id)

        module = await self.content_repository.get_module(module_id)
        if module is None:
            raise GameModuleNotFoundError(module_id)

        record = await self.completion_repository.upsert(
            user_id, module.id, is_completed
        )

        logger.info(
            "module_completion_recorded",
            module_id=module.id,
            lesson_id=module.lesson_id,
            is_completed=is_completed,
        )

        siblings = sorted(
            await self.content_repository.find_modules(module.lesson_id),
            key=lambda m: m.sort_key,
        )
        module_ids = [m.id for m in siblings]
        index = module_ids.index(module.id) if module.id in module_ids else -1
        next_id = (
            module_ids[index + 1] if 0 <= index < len(module_ids) - 1 else None
        )

        return ModuleCompletionResult(
            record=record,
            next_game_module_id=next_id,
            current_game_module_index=max(0, index),
            total_game_modules=len(module_ids),
        )
