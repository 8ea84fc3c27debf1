"""Tests for application assembly and error response shaping."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_query_cache, get_reconciler
from api.errors import DEFAULT_VALIDATION_MESSAGE, validation_message
from api.main import create_app
from sandwich.duplicates import DuplicateReconciler
from sandwich.query_cache import QueryCache
from tests.factories import FakeCollectionStore, make_collection


@pytest.fixture
def store() -> FakeCollectionStore:
    return FakeCollectionStore([make_collection(1), make_collection(2), make_collection(3, "Beta")])


@pytest.fixture
def client(store: FakeCollectionStore) -> TestClient:
    app = create_app()
    cache = QueryCache()
    app.dependency_overrides[get_reconciler] = lambda: DuplicateReconciler(store)
    app.dependency_overrides[get_query_cache] = lambda: cache
    # No context manager: the lifespan (PocketBase login) is not run
    return TestClient(app)


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "sandwich-api"}


def test_fixed_collection_paths_win_over_record_ids(client: TestClient, store: FakeCollectionStore) -> None:
    response = client.request("DELETE", "/api/sandwich-collections/batch-delete", json={"ids": [3]})

    assert response.status_code == 200
    assert response.json()["deletedCount"] == 1
    assert store.delete_calls == [3]


def test_analyze_route_is_mounted(client: TestClient) -> None:
    response = client.get("/api/sandwich-collections/analyze-duplicates")

    assert response.status_code == 200
    assert response.json()["duplicateGroups"] == 1


def test_unknown_route_uses_message_shape(client: TestClient) -> None:
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}


class TestValidationMessage:
    def test_uses_first_custom_validator_message(self) -> None:
        errors = [
            {"type": "missing", "loc": ("body", "hostName"), "msg": "Field required"},
            {
                "type": "value_error",
                "loc": ("body", "ids"),
                "msg": "Value error",
                "ctx": {"error": ValueError("Invalid or empty IDs array")},
            },
        ]

        assert validation_message(errors) == "Invalid or empty IDs array"

    def test_falls_back_to_generic_message(self) -> None:
        errors = [{"type": "int_parsing", "loc": ("query", "page"), "msg": "Input should be a valid integer"}]

        assert validation_message(errors) == DEFAULT_VALIDATION_MESSAGE


def test_reconciler_dependency_uses_settings(mock_pocketbase) -> None:
    from api.dependencies import get_collection_repository, get_reconciler
    from api.settings import Settings

    settings = Settings(_env_file=None, max_reported_errors=2, og_host_name="OG Project")

    reconciler = get_reconciler(get_collection_repository(mock_pocketbase), settings)
    report = reconciler.analyze()

    assert reconciler.max_errors == 2
    assert reconciler.og_matcher.og_host_name == "OG Project"
    assert report.total_collections == 0
    mock_pocketbase.collection.assert_called_with("sandwich_collections")
