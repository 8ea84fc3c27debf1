"""Tests for the volunteer project endpoints."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.dependencies import get_project_repository
from api.errors import register_exception_handlers
from api.routers.projects import router
from sandwich.models import Project

STAMP = "2025-03-01T12:00:00+00:00"


def make_project(project_id: int = 1, **fields) -> Project:
    values = {"title": "Pantry drive", "created_at": STAMP, "updated_at": STAMP}
    values.update(fields)
    return Project(id=project_id, **values)


@pytest.fixture
def repository() -> Mock:
    return Mock()


@pytest.fixture
def client(repository: Mock) -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(router)
    app.dependency_overrides[get_project_repository] = lambda: repository
    return TestClient(app)


class TestListAndCreate:
    def test_list(self, client: TestClient, repository: Mock) -> None:
        repository.get_all.return_value = [make_project(1), make_project(2, title="Coat drive", status="completed")]

        response = client.get("/api/projects")

        assert response.status_code == 200
        data = response.json()
        assert [project["title"] for project in data] == ["Pantry drive", "Coat drive"]
        assert data[0]["status"] == "available"
        assert data[0]["createdAt"] == STAMP

    def test_create(self, client: TestClient, repository: Mock) -> None:
        repository.create.return_value = make_project(3, title="Bake sale", priority="high")

        response = client.post("/api/projects", json={"title": "Bake sale", "priority": "high"})

        assert response.status_code == 201
        assert response.json()["id"] == 3
        payload = repository.create.call_args[0][0]
        assert payload["title"] == "Bake sale"
        assert payload["status"] == "available"

    def test_create_requires_title(self, client: TestClient, repository: Mock) -> None:
        response = client.post("/api/projects", json={"description": "no title"})

        assert response.status_code == 400
        repository.create.assert_not_called()

    def test_list_failure_is_500(self, client: TestClient, repository: Mock) -> None:
        repository.get_all.side_effect = RuntimeError("store unavailable")

        response = client.get("/api/projects")

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to fetch projects"}


class TestClaim:
    def test_claim_with_assignee(self, client: TestClient, repository: Mock) -> None:
        repository.claim.return_value = make_project(1, status="in_progress", assignee_name="Dana")

        response = client.post("/api/projects/1/claim", json={"assigneeName": "Dana"})

        assert response.status_code == 200
        assert response.json()["status"] == "in_progress"
        repository.claim.assert_called_once_with(1, "Dana")

    def test_claim_without_body_uses_default_assignee(self, client: TestClient, repository: Mock) -> None:
        repository.claim.return_value = make_project(1, status="in_progress", assignee_name="You")

        client.post("/api/projects/1/claim")

        repository.claim.assert_called_once_with(1, "You")

    def test_claim_missing_project(self, client: TestClient, repository: Mock) -> None:
        repository.claim.return_value = None

        response = client.post("/api/projects/9/claim", json={"assigneeName": "Dana"})

        assert response.status_code == 404
        assert response.json() == {"message": "Project not found"}


class TestUpdateAndDelete:
    def test_update_ignores_client_timestamps(self, client: TestClient, repository: Mock) -> None:
        repository.update.return_value = make_project(1, status="completed")

        response = client.patch(
            "/api/projects/1",
            json={"status": "completed", "createdAt": "1999-01-01", "updatedAt": "1999-01-01"},
        )

        assert response.status_code == 200
        repository.update.assert_called_once_with(1, {"status": "completed"})

    def test_update_missing(self, client: TestClient, repository: Mock) -> None:
        repository.update.return_value = None

        assert client.put("/api/projects/9", json={"title": "Renamed"}).status_code == 404

    def test_delete(self, client: TestClient, repository: Mock) -> None:
        repository.delete.return_value = True

        assert client.delete("/api/projects/1").status_code == 204

    def test_delete_missing(self, client: TestClient, repository: Mock) -> None:
        repository.delete.return_value = False

        response = client.delete("/api/projects/1")

        assert response.status_code == 404
        assert response.json() == {"message": "Project not found"}
