"""Integration tests for the REST API."""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from floorplan.application import ServiceFactory
from floorplan.application.factory import reset_factory, set_factory
from floorplan.application.serialization import dump_layout
from floorplan.domain import Layout
from floorplan.web import create_app


@pytest.fixture
def client(factory: ServiceFactory) -> Iterator[TestClient]:
    """API client backed by temporary storage."""
    set_factory(factory)
    with TestClient(create_app()) as test_client:
        yield test_client
    reset_factory()


@pytest.fixture
def document(sample_layout: Layout) -> dict[str, Any]:
    return dump_layout(sample_layout)


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestLayoutEndpoints:
    """Tests for /api/layouts."""

    def test_empty_list(self, client: TestClient) -> None:
        response = client.get("/api/layouts")
        assert response.status_code == 200
        assert response.json() == {"layouts": []}

    def test_save_get_list_delete(
        self, client: TestClient, document: dict[str, Any], layouts_dir: Path
    ) -> None:
        response = client.post("/api/layouts/main-office", json=document)
        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert (layouts_dir / "main-office.json").is_file()

        response = client.get("/api/layouts/main-office")
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Main Office"
        assert len(body["entities"]) == 6
        assert body["updatedAt"] != document["updatedAt"]

        (summary,) = client.get("/api/layouts").json()["layouts"]
        assert summary["slug"] == "main-office"
        assert summary["entityCount"] == 6

        response = client.delete("/api/layouts/main-office")
        assert response.status_code == 200
        assert client.get("/api/layouts/main-office").status_code == 404

    def test_path_slug_wins_over_body(self, client: TestClient, document: dict[str, Any]) -> None:
        client.post("/api/layouts/copy-of-office", json=document)
        body = client.get("/api/layouts/copy-of-office").json()
        assert body["slug"] == "copy-of-office"

    def test_not_found_body(self, client: TestClient) -> None:
        response = client.get("/api/layouts/nope")
        assert response.status_code == 404
        assert response.json() == {
            "error": "Layout not found: nope",
            "error_type": "not_found",
            "details": {"slug": "nope"},
        }

    def test_delete_missing(self, client: TestClient) -> None:
        assert client.delete("/api/layouts/nope").status_code == 404

    def test_invalid_document(self, client: TestClient, document: dict[str, Any]) -> None:
        document["entities"].append({"type": "stairs", "id": "s1"})

        response = client.post("/api/layouts/main-office", json=document)

        assert response.status_code == 422
        body = response.json()
        assert body["error_type"] == "validation"
        assert body["details"][0]["path"].startswith("entities[6]")

    def test_duplicate_ids_rejected(self, client: TestClient, document: dict[str, Any]) -> None:
        document["entities"].append(dict(document["entities"][0]))
        response = client.post("/api/layouts/main-office", json=document)
        assert response.status_code == 422
        assert "wall-1" in response.json()["error"]

    def test_auto_save_creates_backup(
        self, client: TestClient, document: dict[str, Any], repository
    ) -> None:
        client.post("/api/layouts/main-office", json=document)
        client.post("/api/layouts/main-office", json=document)
        assert repository.list_backups("main-office") == []

        response = client.post("/api/layouts/main-office?autoSave=true", json=document)

        assert response.status_code == 200
        assert len(repository.list_backups("main-office")) == 1


class TestPresetEndpoints:
    def test_default_presets(self, client: TestClient) -> None:
        response = client.get("/api/layouts/presets")
        assert response.status_code == 200
        presets = response.json()["presets"]
        assert presets["custom"] == []
        assert presets["desks"][0]["objectType"] == "desk"

    def test_save_presets(self, client: TestClient) -> None:
        data = client.get("/api/layouts/presets").json()
        data["presets"]["custom"].append(
            {"name": "Plotter", "objectType": "rect", "width": 50, "height": 30}
        )

        response = client.post("/api/layouts/presets", json=data)

        assert response.status_code == 200
        saved = client.get("/api/layouts/presets").json()["presets"]["custom"]
        assert [p["name"] for p in saved] == ["Plotter"]

    def test_invalid_presets(self, client: TestClient) -> None:
        data = {"presets": {"desks": [{"name": "Bad", "objectType": "desk", "width": -1, "height": 1}]}}
        response = client.post("/api/layouts/presets", json=data)
        assert response.status_code == 422
        assert response.json()["details"][0]["path"] == "presets.desks[0].width"


class TestExportEndpoints:
    """Tests for /api/export."""

    def test_export_and_list(
        self, client: TestClient, document: dict[str, Any], exports_dir: Path
    ) -> None:
        client.post("/api/layouts/main-office", json=document)

        response = client.post(
            "/api/export/main-office",
            json={"formats": ["svg", "png"], "dpi": 72, "includeGrid": False},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "files": ["main-office.svg", "main-office.png"],
        }
        assert (exports_dir / "main-office" / "main-office.png").is_file()

        listed = client.get("/api/export/main-office").json()
        assert listed == {"exports": ["main-office.png", "main-office.svg"]}

    def test_export_defaults_to_svg(self, client: TestClient, document: dict[str, Any]) -> None:
        client.post("/api/layouts/main-office", json=document)
        response = client.post("/api/export/main-office", json={})
        assert response.json()["files"] == ["main-office.svg"]

    def test_export_missing_layout(self, client: TestClient) -> None:
        response = client.post("/api/export/nope", json={})
        assert response.status_code == 404

    def test_unknown_format_rejected(self, client: TestClient, document: dict[str, Any]) -> None:
        client.post("/api/layouts/main-office", json=document)
        response = client.post("/api/export/main-office", json={"formats": ["gif"]})
        assert response.status_code == 422

    def test_list_without_exports(self, client: TestClient) -> None:
        assert client.get("/api/export/nope").json() == {"exports": []}
