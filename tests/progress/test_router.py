"""Tests for the progress API endpoints."""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from src.config import get_settings
from src.progress.service import InvalidUserError, ProgressService

from auth_tokens import make_access_token
from fakes import InMemoryCompletionRepository, InMemoryContentRepository


@pytest.fixture
def service(
    client: TestClient,
    two_chapter_catalog: InMemoryContentRepository,
    completion_repository: InMemoryCompletionRepository,
) -> ProgressService:
    """Real service over in-memory repositories, installed on the app."""
    progress_service = ProgressService(two_chapter_catalog, completion_repository)
    client.app.state.progress_service = progress_service
    return progress_service


class TestAuthentication:
    """Both endpoints require a valid bearer token."""

    def test_missing_token(self, client: TestClient, service):
        response = client.get("/v1/progress/chapters")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_malformed_token(self, client: TestClient, service):
        response = client.get(
            "/v1/progress/chapters", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid or expired token"

    def test_expired_token(self, client: TestClient, service, user_id: str):
        token = make_access_token({"sub": user_id}, timedelta(seconds=-1))

        response = client.post(
            "/v1/progress/modules/m-1a/complete",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 401


class TestGetChapters:
    """Tests for GET /v1/progress/chapters."""

    def test_service_unavailable_without_database(
        self, client: TestClient, auth_headers
    ):
        response = client.get("/v1/progress/chapters", headers=auth_headers)

        assert response.status_code == 503

    def test_camel_case_payload(self, client: TestClient, service, auth_headers):
        response = client.get("/v1/progress/chapters", headers=auth_headers)

        assert response.status_code == 200
        chapters = response.json()
        assert [c["id"] for c in chapters] == ["ch-1", "ch-2"]
        first = chapters[0]
        assert first["status"] == "UNLOCKED"
        assert first["completedLessons"] == 0
        assert first["totalLessons"] == 2
        lesson = first["lessons"][0]
        assert lesson["status"] == "UNLOCKED"
        assert lesson["gameModuleId"] == "m-1a"
        assert lesson["totalModules"] == 2
        assert chapters[1]["status"] == "LOCKED"

    def test_reflects_recorded_completions(
        self,
        client: TestClient,
        service,
        completion_repository: InMemoryCompletionRepository,
        user_id: str,
        auth_headers,
    ):
        completion_repository.complete(user_id, "m-1a", "m-1b")

        response = client.get("/v1/progress/chapters", headers=auth_headers)

        first = response.json()[0]
        assert first["status"] == "IN_PROGRESS"
        assert [lesson["status"] for lesson in first["lessons"]] == [
            "COMPLETED",
            "UNLOCKED",
        ]

    def test_progress_error_maps_to_400(self, client: TestClient, auth_headers):
        mock_service = Mock(spec=ProgressService)
        mock_service.get_user_chapters = AsyncMock(side_effect=InvalidUserError())
        client.app.state.progress_service = mock_service

        response = client.get("/v1/progress/chapters", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "User ID is required"

    def test_slow_computation_times_out(
        self, client: TestClient, auth_headers, monkeypatch
    ):
        async def never_finishes(user_id):
            await asyncio.sleep(5)

        mock_service = Mock(spec=ProgressService)
        mock_service.get_user_chapters = never_finishes
        client.app.state.progress_service = mock_service
        monkeypatch.setattr(get_settings(), "progress_request_timeout_seconds", 0.05)

        response = client.get("/v1/progress/chapters", headers=auth_headers)

        assert response.status_code == 504


class TestCompleteModule:
    """Tests for POST /v1/progress/modules/{module_id}/complete."""

    def test_records_completion(
        self,
        client: TestClient,
        service,
        completion_repository: InMemoryCompletionRepository,
        user_id: str,
        auth_headers,
    ):
        response = client.post(
            "/v1/progress/modules/m-1a/complete", headers=auth_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["moduleId"] == "m-1a"
        assert data["isCompleted"] is True
        assert "updatedAt" in data
        assert data["nextGameModuleId"] == "m-1b"
        assert data["currentGameModuleIndex"] == 0
        assert data["totalGameModules"] == 2
        assert completion_repository.records[(user_id, "m-1a")].is_completed

    def test_records_failed_attempt(
        self,
        client: TestClient,
        service,
        completion_repository: InMemoryCompletionRepository,
        user_id: str,
        auth_headers,
    ):
        response = client.post(
            "/v1/progress/modules/m-1a/complete",
            headers=auth_headers,
            json={"isCompleted": False},
        )

        assert response.status_code == 200
        assert response.json()["isCompleted"] is False
        assert not completion_repository.records[(user_id, "m-1a")].is_completed

    def test_unknown_module(self, client: TestClient, service, auth_headers):
        response = client.post(
            "/v1/progress/modules/m-missing/complete", headers=auth_headers
        )

        assert response.status_code == 404
        assert "m-missing" in response.json()["message"]

    def test_invalid_body(self, client: TestClient, service, auth_headers):
        response = client.post(
            "/v1/progress/modules/m-1a/complete",
            headers=auth_headers,
            json={"isCompleted": "maybe"},
        )

        assert response.status_code == 422
