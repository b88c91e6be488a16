"""Tests for the HTTP API."""

from __future__ import annotations

from pathlib import Path

import pytest

pytest.importorskip("fastapi")
pytest.importorskip("httpx")

from fastapi.testclient import TestClient  # noqa: E402

from surfacemap.config import SurfaceMapConfig  # noqa: E402
from surfacemap.web.app import create_app  # noqa: E402


@pytest.fixture
def client(tmp_path: Path):
    config = SurfaceMapConfig(
        data_dir=tmp_path / "data",
        config_dir=tmp_path / "config",
    )
    with TestClient(create_app(config)) as c:
        yield c


def test_manifest(client):
    resp = client.get("/api/manifest")
    assert resp.status_code == 200
    assert resp.json()["name"] == "surfacemap/attack-surface"


def test_scan_tool(client, sample_app_dir: Path):
    resp = client.post(
        "/api/tools/scan",
        json={"input": {"workspace_root": str(sample_app_dir)}},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["files_scanned"] == 3
    assert any(f["rule_id"] == "ATTACK-003" for f in body["findings"])


def test_scan_tool_missing_workspace(client, tmp_path: Path):
    resp = client.post("/api/tools/scan", json={"workspace_root": str(tmp_path / "x")})
    assert resp.status_code == 404


def test_create_and_fetch_scan(client, sample_app_dir: Path):
    resp = client.post("/api/scans", json={"directory": str(sample_app_dir)})
    assert resp.status_code == 200
    created = resp.json()
    assert created["finding_count"] > 0

    listing = client.get("/api/scans").json()
    assert [s["id"] for s in listing] == [created["id"]]

    stored = client.get(f"/api/scans/{created['id']}").json()
    assert len(stored["findings"]) == created["finding_count"]


def test_scan_not_found(client):
    resp = client.get("/api/scans/missing")
    assert resp.status_code == 404
