"""Shared test fixtures for uicatalog."""

from __future__ import annotations

from pathlib import Path

import pytest

from uicatalog.catalog.engine import CatalogEngine
from uicatalog.storage.document import JsonDocumentStore, MemoryDocumentStore


@pytest.fixture(autouse=True)
def activity_log_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep MCP activity logging inside the test's temp dir."""
    path = tmp_path / "activity.jsonl"
    monkeypatch.setenv("UICATALOG_LOG_PATH", str(path))
    return path


@pytest.fixture
def catalog_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "db.json"


@pytest.fixture
def store(catalog_path: Path) -> JsonDocumentStore:
    return JsonDocumentStore(catalog_path)


@pytest.fixture
def engine(store: JsonDocumentStore) -> CatalogEngine:
    return CatalogEngine(store)


@pytest.fixture
def memory_store() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture
def sample_component() -> dict:
    return {
        "name": "Button",
        "description": "Primary call-to-action button with loading state.",
        "filePath": "src/components/ui/Button.tsx",
        "usageExample": '<Button variant="primary" loading={isSaving}>Save</Button>',
    }


@pytest.fixture
def sample_api() -> dict:
    return {
        "name": "Get Users",
        "endpoint": "/api/users",
        "method": "GET",
        "description": "Returns the paginated list of users.",
        "responseBody": {"users": "User[]", "nextCursor": "string | null"},
    }


@pytest.fixture
def sample_env_var() -> dict:
    return {
        "name": "NEXT_PUBLIC_API_URL",
        "description": "Base URL of the backend API.",
        "isPublic": True,
    }


@pytest.fixture
def populated_engine(
    engine: CatalogEngine,
    sample_component: dict,
    sample_api: dict,
    sample_env_var: dict,
) -> CatalogEngine:
    """Engine whose catalog already holds a few records."""
    engine.create("components", sample_component)
    engine.create(
        "components",
        {
            "name": "Card",
            "description": "Flexible content container.",
            "filePath": "src/components/ui/Card.tsx",
        },
    )
    engine.create("apis", sample_api)
    engine.create("environment", sample_env_var)
    engine.create(
        "conventions",
        {"rule": "no-default-export", "description": "Use named exports for components."},
    )
    return engine
