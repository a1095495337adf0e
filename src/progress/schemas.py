"""Pydantic schemas for learner progress.

Responses are serialized with camelCase field names (``completedLessons``,
``gameModuleId``) to match the payloads the frontend already consumes.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .engine import ChapterSummary, LessonSummary
from .models import ChapterStatus, LessonStatus
from .service import ModuleCompletionResult


class CamelModel(BaseModel):
    """Base model with camelCase aliases, accepting either form on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==============================================================================
# Chapter Progress Schemas
# ==============================================================================


class LessonSummaryResponse(CamelModel):
    """Lesson with the learner's status."""

    id: str
    title: str
    description: str
    order: int
    status: LessonStatus
    game_module_id: str | None = Field(
        None, description="First module of the lesson, null if it has none"
    )
    completed_modules: int = 0
    total_modules: int = 0

    @classmethod
    def from_summary(cls, summary: LessonSummary) -> "LessonSummaryResponse":
        """Create response from an engine summary."""
        return cls(
            id=summary.id,
            title=summary.title,
            description=summary.description,
            order=summary.order,
            status=summary.status,
            game_module_id=summary.game_module_id,
            completed_modules=summary.completed_modules,
            total_modules=summary.total_modules,
        )


class ChapterSummaryResponse(CamelModel):
    """Chapter with the learner's status and lesson summaries."""

    id: str
    title: str
    description: str
    order: int
    status: ChapterStatus
    completed_lessons: int
    total_lessons: int
    lessons: list[LessonSummaryResponse] = []

    @classmethod
    def from_summary(cls, summary: ChapterSummary) -> "ChapterSummaryResponse":
        """Create response from an engine summary."""
        return cls(
            id=summary.id,
            title=summary.title,
            description=summary.description,
            order=summary.order,
            status=summary.status,
            completed_lessons=summary.completed_lessons,
            total_lessons=summary.total_lessons,
            lessons=[LessonSummaryResponse.from_summary(s) for s in summary.lessons],
        )


# ==============================================================================
# Module Completion Schemas
# ==============================================================================


class CompleteModuleRequest(CamelModel):
    """Request to record the learner's completion state for a module."""

    is_completed: bool = Field(True, description="Latest completion state")


class CompletionRecordResponse(CamelModel):
    """Stored completion record with navigation inside the lesson."""

    module_id: str
    is_completed: bool
    updated_at: datetime
    next_game_module_id: str | None = Field(
        None, description="Next module of the lesson, null after the last one"
    )
    current_game_module_index: int = Field(0, description="0-based module index")
    total_game_modules: int = 0

    @classmethod
    def from_result(
        cls, result: ModuleCompletionResult
    ) -> "CompletionRecordResponse":
        """Create response from a service result."""
        return cls(
            module_id=result.record.target_id,
            is_completed=result.record.is_completed,
            updated_at=result.record.updated_at,
            next_game_module_id=result.next_game_module_id,
            current_game_module_index=result.current_game_module_index,
            total_game_modules=result.total_game_modules,
        )
