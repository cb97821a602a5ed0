"""Tests for the FastAPI application."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from erp_migration.api.main import app
from erp_migration.api.routes import runs as runs_route
from erp_migration.api.storage import run_storage
from erp_migration.errors import CircuitOpenError
from erp_migration.objects.business_partner import BusinessPartnerMigrationObject
from erp_migration.objects.finance import BankMasterMigrationObject


@pytest.fixture
def client():
    run_storage.clear()
    with TestClient(app) as test_client:
        yield test_client
    run_storage.clear()


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


class TestObjects:
    def test_list(self, client):
        data = client.get("/api/objects").json()
        assert data["total"] == 42
        by_id = {o["object_id"]: o for o in data["objects"]}
        assert by_id["GL_BALANCE"]["dependencies"] == ["GL_ACCOUNT_MASTER"]
        assert by_id["BANK_MASTER"]["dependencies"] == []

    def test_detail(self, client):
        data = client.get("/api/objects/GL_ACCOUNT_MASTER").json()
        assert data["mapping_count"] == len(data["mappings"])
        assert data["mappings"][-1] == {
            "source": None,
            "target": "MigrationObjectId",
            "convert": None,
            "default": "GL_ACCOUNT_MASTER",
            "value_map": None,
        }
        assert "required" in data["quality_checks"]

    def test_unknown(self, client):
        assert client.get("/api/objects/NOPE").status_code == 404
        response = client.post("/api/objects/NOPE/preview", json={"source_records": []})
        assert response.status_code == 404


class TestPreview:
    def test_preview_maps_and_checks(self, client):
        records = BankMasterMigrationObject().extract_mock()[:3]
        response = client.post("/api/objects/BANK_MASTER/preview", json={"source_records": records})
        assert response.status_code == 200
        data = response.json()
        assert data["object_id"] == "BANK_MASTER"
        assert len(data["transformed"]) == 3
        assert data["transformed"][0]["MigrationObjectId"] == "BANK_MASTER"
        assert data["quality"]["total_records"] == 3

    def test_preview_runs_hook(self, client):
        records = BusinessPartnerMigrationObject().extract_mock()
        data = client.post(
            "/api/objects/BUSINESS_PARTNER/preview", json={"source_records": records}
        ).json()
        assert len(data["transformed"]) == 80
        assert data["extra"]["merged_count"] == 5

    def test_preview_without_hook(self, client):
        records = BusinessPartnerMigrationObject().extract_mock()
        data = client.post(
            "/api/objects/BUSINESS_PARTNER/preview",
            json={"source_records": records, "run_hook": False},
        ).json()
        assert len(data["transformed"]) == 85
        assert data["extra"] == {}

    def test_missing_required_fields_reported(self, client):
        data = client.post(
            "/api/objects/BANK_MASTER/preview", json={"source_records": [{}]}
        ).json()
        assert data["quality"]["failed"] is True
        assert data["quality"]["error_count"] > 0


class TestWaves:
    def test_all(self, client):
        data = client.get("/api/waves").json()
        assert data["total"] == 42
        assert data["waves"][0][:3] == ["GL_ACCOUNT_MASTER", "BANK_MASTER", "MATERIAL_MASTER"]
        assert len(data["execution_order"]) == 42

    def test_subset(self, client):
        data = client.get("/api/waves", params=[("object_ids", "GL_BALANCE"), ("object_ids", "GL_ACCOUNT_MASTER")]).json()
        assert data["waves"] == [["GL_ACCOUNT_MASTER"], ["GL_BALANCE"]]

    def test_unknown(self, client):
        assert client.get("/api/waves", params={"object_ids": "NOPE"}).status_code == 404


class TestRuns:
    def test_create_and_fetch(self, client):
        response = client.post("/api/runs", json={"object_ids": ["GL_ACCOUNT_MASTER", "GL_BALANCE"]})
        assert response.status_code == 200
        run = response.json()
        assert run["stats"]["total"] == 2
        assert run["stats"]["failed"] == 0
        assert [r["object_id"] for r in run["results"]] == ["GL_ACCOUNT_MASTER", "GL_BALANCE"]

        listing = client.get("/api/runs").json()
        assert listing["total"] == 1
        assert listing["runs"][0]["id"] == run["id"]
        assert listing["runs"][0]["completed"] == 2

        assert client.get(f"/api/runs/{run['id']}").json()["id"] == run["id"]

    def test_unknown_objects(self, client):
        response = client.post("/api/runs", json={"object_ids": ["GL_BALANCE", "NOPE"]})
        assert response.status_code == 404
        assert "NOPE" in response.json()["detail"]

    def test_invalid_request(self, client):
        assert client.post("/api/runs", json={"max_concurrency": 0}).status_code == 422
        assert client.post("/api/runs", json={"load_error_rate": 2}).status_code == 422

    def test_live_without_access_path(self, client, monkeypatch):
        for name in ("PRODUCT", "MODE", "ION_BASE_URL", "DB_TYPE"):
            monkeypatch.delenv(name, raising=False)
        response = client.post("/api/runs", json={"object_ids": ["BANK_MASTER"], "mode": "live"})
        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INFOR_CONFIG"

    def test_live_connect_failure_disconnects(self, client, monkeypatch):
        adapter = MagicMock()
        adapter.connect.side_effect = CircuitOpenError("circuit open for ion")
        monkeypatch.setattr(runs_route, "create_adapter", lambda settings: adapter)
        response = client.post("/api/runs", json={"object_ids": ["BANK_MASTER"], "mode": "live"})
        assert response.status_code == 502
        assert response.json()["detail"]["error"] == "CircuitOpenError"
        adapter.disconnect.assert_called_once()
        assert client.get("/api/runs").json()["total"] == 0

    def test_run_not_found(self, client):
        assert client.get("/api/runs/nope").status_code == 404
