"""Tests for concurrent asset loading and failure isolation."""
from __future__ import annotations

import asyncio
import io
from pathlib import Path

import pygame
import pytest

from rts_assets import config
from rts_assets.loader import AssetLoader, LoadError, decode_image, default_requests, team_requests
from rts_assets.models import Category, LoadOutcome, LoadRequest, Team
from rts_assets.placeholders import create_placeholder


def _write_png(path: Path, color: tuple, size: tuple = (16, 16)) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    surface = pygame.Surface(size, pygame.SRCALPHA)
    surface.fill(color)
    pygame.image.save(surface, str(path))
    return path


def test_load_one_stores_image(store, tmp_path: Path) -> None:
    path = _write_png(tmp_path / "units" / "tank.png", (10, 20, 30, 255), (20, 12))
    loader = AssetLoader(store)
    image = asyncio.run(loader.load_one(LoadRequest(str(path), Category.UNITS, "tank")))
    assert image.size == (20, 12)
    assert image.pixel_at(3, 3) == (10, 20, 30, 255)
    assert store.get(Category.UNITS, "tank") == image
    assert loader.outcome() == LoadOutcome(loaded=1, failed=0)


def test_load_one_accepts_file_uri(store, tmp_path: Path) -> None:
    path = _write_png(tmp_path / "grass.png", (0, 200, 0, 255))
    loader = AssetLoader(store)
    asyncio.run(loader.load_one(LoadRequest(path.as_uri(), Category.TERRAIN, "grass")))
    assert store.has(Category.TERRAIN, "grass")


def test_failed_load_keeps_previous_entry(store, tmp_path: Path) -> None:
    previous = create_placeholder("#2255dd", 48, 48)
    store.put(Category.UNITS, "tank", previous)
    loader = AssetLoader(store)
    with pytest.raises(LoadError) as excinfo:
        asyncio.run(loader.load_one(LoadRequest(str(tmp_path / "missing.png"), Category.UNITS, "tank")))
    assert excinfo.value.path.endswith("missing.png")
    assert store.get(Category.UNITS, "tank") is previous
    assert loader.outcome() == LoadOutcome(loaded=0, failed=1)


def test_load_many_isolates_failures(store, tmp_path: Path) -> None:
    good = [
        LoadRequest(str(_write_png(tmp_path / f"{name}.png", (50, 60, 70, 255))), Category.UNITS, name)
        for name in ("infantry", "scout", "artillery")
    ]
    corrupt = tmp_path / "corrupt.png"
    corrupt.write_bytes(b"this is not an image")
    bad = [
        LoadRequest(str(tmp_path / "nope.png"), Category.BUILDINGS, "hq"),
        LoadRequest(str(corrupt), Category.BUILDINGS, "barracks"),
    ]
    loader = AssetLoader(store)
    outcome = asyncio.run(loader.load_many(bad[:1] + good + bad[1:]))
    assert outcome == LoadOutcome(loaded=3, failed=2)
    assert set(store.list_category(Category.UNITS)) == {"infantry", "scout", "artillery"}
    assert store.list_category(Category.BUILDINGS) == {}
    assert len(store) == 3


def test_load_many_runs_requests_concurrently(store) -> None:
    image_bytes = {}
    started = []

    async def scenario() -> LoadOutcome:
        all_started = asyncio.Event()
        surface = pygame.Surface((4, 4), pygame.SRCALPHA)
        surface.fill((1, 2, 3, 255))
        buffer = io.BytesIO()
        pygame.image.save(surface, buffer, "tile.png")
        image_bytes["png"] = buffer.getvalue()

        async def fetcher(path: str) -> bytes:
            started.append(path)
            if len(started) == 3:
                all_started.set()
            # Every fetch waits for the others; a sequential loader would time out.
            await asyncio.wait_for(all_started.wait(), timeout=2)
            if path == "broken":
                raise ConnectionError("unreachable")
            return image_bytes["png"]

        loader = AssetLoader(store, fetcher=fetcher)
        requests = [
            LoadRequest("a", Category.TERRAIN, "grass"),
            LoadRequest("broken", Category.TERRAIN, "sand"),
            LoadRequest("b", Category.TERRAIN, "rock"),
        ]
        return await loader.load_many(requests)

    outcome = asyncio.run(scenario())
    assert outcome == LoadOutcome(loaded=2, failed=1)
    assert sorted(started) == ["a", "b", "broken"]
    assert store.has(Category.TERRAIN, "grass")
    assert not store.has(Category.TERRAIN, "sand")


def test_counters_accumulate_across_batches(store, tmp_path: Path) -> None:
    path = _write_png(tmp_path / "hq.png", (9, 9, 9, 255))
    loader = AssetLoader(store)
    asyncio.run(loader.load_many([LoadRequest(str(path), Category.BUILDINGS, "hq")]))
    outcome = asyncio.run(
        loader.load_many(
            [
                LoadRequest(str(path), Category.BUILDINGS, "factory"),
                LoadRequest(str(tmp_path / "gone.png"), Category.BUILDINGS, "turret"),
            ]
        )
    )
    assert outcome == LoadOutcome(loaded=2, failed=1)
    assert AssetLoader(store).outcome() == LoadOutcome()


def test_decode_rejects_empty_data() -> None:
    with pytest.raises(LoadError):
        decode_image(b"", "empty.png")


def test_default_requests_cover_catalog(tmp_path: Path) -> None:
    requests = default_requests(tmp_path)
    assert len(requests) == len(config.UNIT_NAMES) + len(config.BUILDING_NAMES) + len(config.TERRAIN_NAMES)
    first = requests[0]
    assert first.category is Category.UNITS
    assert first.path == (tmp_path / "units" / f"{first.name}.png").as_posix()
    assert {r.name for r in requests if r.category is Category.TERRAIN} == set(config.TERRAIN_NAMES)


def test_team_requests_follow_variant_names(tmp_path: Path) -> None:
    blue = team_requests(tmp_path, Team.BLUE)
    red = team_requests(tmp_path, Team.RED)
    blue_tank = next(r for r in blue if r.name == "tank")
    red_tank = next(r for r in red if r.name == "tank_red")
    assert blue_tank.path.endswith("units/tank_blue.png")
    assert red_tank.path.endswith("units/tank_red.png")
    assert all(r.category in {Category.UNITS, Category.BUILDINGS} for r in red)


def test_load_request_from_dict() -> None:
    request = LoadRequest.from_dict({"path": "assets/units/tank.png", "category": "units", "name": "tank"})
    assert request.category is Category.UNITS
    with pytest.raises(ValueError):
        LoadRequest.from_dict({"path": "x.png", "category": "sounds", "name": "boom"})


def test_string_categories_are_normalized(store) -> None:
    surface = pygame.Surface((6, 6), pygame.SRCALPHA)
    surface.fill((40, 50, 60, 255))
    buffer = io.BytesIO()
    pygame.image.save(surface, buffer, "unit.png")
    png = buffer.getvalue()

    async def fetcher(path: str) -> bytes:
        return png

    requests = [LoadRequest("a", "units", "tank"), LoadRequest("b", "units", "scout")]
    assert all(request.category is Category.UNITS for request in requests)
    outcome = asyncio.run(AssetLoader(store, fetcher=fetcher).load_many(requests))
    assert outcome == LoadOutcome(loaded=2, failed=0)
    assert set(store.list_category(Category.UNITS)) == {"tank", "scout"}
    with pytest.raises(ValueError):
        LoadRequest("c", "sounds", "boom")
