"""Integration tests for the HTTP API."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from uicatalog.api.app import create_app
from uicatalog.catalog.registry import COLLECTION_KEYS
from uicatalog.config import Config
from uicatalog.storage.document import JsonDocumentStore


@pytest.fixture
def client(store: JsonDocumentStore) -> TestClient:
    return TestClient(create_app(Config(), store=store))


class TestRoot:
    def test_directory_lists_every_collection(self, client: TestClient):
        resp = client.get("/")
        assert resp.status_code == 200
        endpoints = resp.json()["endpoints"]
        assert list(endpoints) == list(COLLECTION_KEYS)
        assert endpoints["style-guide"]["update"] == "/style-guide/:id (PUT)"

    def test_health(self, client: TestClient):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_openapi_documents_routes(self, client: TestClient):
        paths = client.get("/openapi.json").json()["paths"]
        assert "/components" in paths
        assert "/conventions/{record_id}" in paths


class TestApiScenario:
    def test_create_list_update_delete(self, client: TestClient):
        resp = client.post(
            "/apis",
            json={
                "name": "Get Users",
                "endpoint": "/api/users",
                "method": "GET",
                "description": "Returns all users",
                "responseBody": {"users": "User[]"},
            },
        )
        assert resp.status_code == 201
        created = resp.json()
        api_id = created["id"]

        listing = client.get("/apis").json()
        assert listing == [
            {
                "id": api_id,
                "name": "Get Users",
                "description": "Returns all users",
                "endpoint": "/api/users",
                "method": "GET",
            }
        ]

        resp = client.put(f"/apis/{api_id}", json={"method": "POST"})
        assert resp.status_code == 200
        assert resp.json() == {**created, "method": "POST"}

        resp = client.delete(f"/apis/{api_id}")
        assert resp.status_code == 204
        assert resp.content == b""

        resp = client.get(f"/apis/{api_id}")
        assert resp.status_code == 404
        assert api_id in resp.json()["detail"]


class TestErrors:
    def test_create_missing_fields(self, client: TestClient):
        resp = client.post("/components", json={"name": "X"})
        assert resp.status_code == 400
        assert "filePath" in resp.json()["detail"]
        assert client.get("/components").json() == []

    def test_create_bad_method(self, client: TestClient):
        resp = client.post(
            "/apis",
            json={"name": "n", "endpoint": "/e", "method": "YEET", "description": "d"},
        )
        assert resp.status_code == 400

    def test_update_not_found(self, client: TestClient):
        resp = client.put("/hooks/missing", json={"name": "useX"})
        assert resp.status_code == 404

    def test_update_blanking_required_field(self, client: TestClient):
        created = client.post("/conventions", json={"rule": "r", "description": "d"}).json()
        resp = client.put(f"/conventions/{created['id']}", json={"rule": ""})
        assert resp.status_code == 400

    def test_delete_not_found(self, client: TestClient):
        assert client.delete("/state/missing").status_code == 404

    def test_non_object_body_rejected(self, client: TestClient):
        resp = client.post("/components", json=["not", "an", "object"])
        assert resp.status_code == 422

    def test_unknown_collection(self, client: TestClient):
        assert client.get("/widgets").status_code == 404

    def test_store_failure_is_500(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        app = create_app(Config(), store=JsonDocumentStore(blocker / "db.json"))
        client = TestClient(app)
        resp = client.post("/conventions", json={"rule": "r", "description": "d"})
        assert resp.status_code == 500
        assert "blocker" in resp.json()["detail"]


class TestCollections:
    def test_style_guide_full_records(self, client: TestClient):
        payload = {
            "element": "Button",
            "description": "Primary button",
            "className": "btn btn-primary",
            "usageExample": "<button className='btn btn-primary'>",
        }
        created = client.post("/style-guide", json=payload).json()
        assert client.get("/style-guide").json() == [created]
        assert client.get(f"/style-guide/{created['id']}").json() == created

    def test_component_list_is_projected(self, client: TestClient, sample_component: dict):
        client.post("/components", json=sample_component)
        [summary] = client.get("/components").json()
        assert set(summary) == {"id", "name", "description"}

    def test_environment_boolean_survives(self, client: TestClient):
        created = client.post(
            "/environment",
            json={"name": "SECRET", "description": "server only", "isPublic": False},
        ).json()
        assert client.get(f"/environment/{created['id']}").json()["isPublic"] is False

    def test_http_and_engine_share_document(self, client: TestClient, catalog_path: Path):
        client.post("/hooks", json={
            "name": "useAuth",
            "filePath": "src/hooks/useAuth.ts",
            "description": "Current session",
            "usage": "const { user } = useAuth()",
        })
        assert catalog_path.exists()
        assert len(JsonDocumentStore(catalog_path).load()["hooks"]) == 1
