"""Fixtures for progress tests."""

import pytest

from fakes import InMemoryCompletionRepository, InMemoryContentRepository


@pytest.fixture
def content_repository() -> InMemoryContentRepository:
    return InMemoryContentRepository()


@pytest.fixture
def completion_repository() -> InMemoryCompletionRepository:
    return InMemoryCompletionRepository()


@pytest.fixture
def two_chapter_catalog(
    content_repository: InMemoryContentRepository,
) -> InMemoryContentRepository:
    """ch-1: l-1 (m-1a, m-1b), l-2 (m-2a, m-2b); ch-2: l-3 (m-3a)."""
    content_repository.add_chapter("ch-1", order=1)
    content_repository.add_chapter("ch-2", order=2)
    content_repository.add_lesson("ch-1", "l-1", order=1)
    content_repository.add_lesson("ch-1", "l-2", order=2)
    content_repository.add_lesson("ch-2", "l-3", order=1)
    content_repository.add_modules("l-1", ["m-1a", "m-1b"])
    content_repository.add_modules("l-2", ["m-2a", "m-2b"])
    content_repository.add_modules("l-3", ["m-3a"])
    return content_repository
