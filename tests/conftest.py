"""Shared test fixtures."""

import os
import tempfile
from collections.abc import Iterator
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient


# Settings are cached on first use, so the environment is fixed before any
# application module is imported.
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="lessonpath-logs-"))
os.environ.setdefault("LOG_LEVEL", "WARNING")


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Test client running the app lifespan without a database."""
    from src.main import app

    with (
        patch(
            "src.main.init_async_cassandra",
            AsyncMock(side_effect=ConnectionError("no database in tests")),
        ),
        TestClient(app) as test_client,
    ):
        yield test_client


@pytest.fixture
def user_id() -> str:
    """A learner id."""
    return f"user-{uuid4().hex[:8]}"


@pytest.fixture
def access_token(user_id: str) -> str:
    """Valid access token for ``user_id``."""
    from auth_tokens import make_access_token

    return make_access_token({"sub": user_id})


@pytest.fixture
def auth_headers(access_token: str) -> dict[str, str]:
    """Authorization header for ``user_id``."""
    return {"Authorization": f"Bearer {access_token}"}
