"""
Root test configuration for the sandwich tracker.

- PocketBase is patched for every test, so nothing opens a network connection
  (set SKIP_MOCKING=true to run against a real server).
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest

# Project root on sys.path so `api`, `sandwich` and `tests.factories` import
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def create_mock_pocketbase() -> Mock:
    """A PocketBase stand-in whose collections are empty."""
    collection = Mock()
    collection.auth_with_password.return_value = True
    collection.get_full_list.return_value = []
    collection.get_list.return_value = SimpleNamespace(items=[], total_items=0, total_pages=1, page=1, per_page=30)

    client = Mock()
    client.collection.return_value = collection
    client.auth_store.base_token = "mock-token"
    return client


@pytest.fixture
def mock_pocketbase() -> Mock:
    return create_mock_pocketbase()


@pytest.fixture(autouse=True)
def mock_all_external_services():
    """Patch the PocketBase client classes for every test."""
    if os.environ.get("SKIP_MOCKING") == "true":
        yield {}
        return

    client = create_mock_pocketbase()
    with patch("pocketbase.PocketBase", return_value=client), patch("pocketbase.Client", return_value=client):
        yield {"pocketbase": client}

