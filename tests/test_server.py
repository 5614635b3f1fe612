"""Tests for the HTTP view of the asset store."""
from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from rts_assets.config import AssetConfig
from rts_assets.server import create_app
from rts_assets.session import AssetSession

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


@pytest.fixture()
def client(tmp_path: Path) -> TestClient:
    session = AssetSession(AssetConfig(asset_root=tmp_path, load_custom_assets=False))
    asyncio.run(session.bootstrap())
    return TestClient(create_app(session))


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["assets"] > 17


def test_status(client: TestClient) -> None:
    payload = client.get("/assets").json()
    assert set(payload) == {"units", "buildings", "terrain", "effects"}
    assert payload["terrain"] == 5


def test_category_dump(client: TestClient) -> None:
    payload = client.get("/assets/units").json()
    assert payload["tank"] == [64, 64]
    assert payload["tank_red"] == [64, 64]
    assert client.get("/assets/sounds").status_code == 404


def test_asset_png(client: TestClient) -> None:
    response = client.get("/assets/buildings/hq.png")
    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.content.startswith(PNG_MAGIC)
    assert client.get("/assets/buildings/mammoth.png").status_code == 404
    assert client.get("/assets/sounds/boom.png").status_code == 404


def test_requests_before_startup_report_unavailable() -> None:
    client = TestClient(create_app())
    assert client.get("/health").json() == {"status": "starting", "assets": 0}
    assert client.get("/assets").status_code == 503
