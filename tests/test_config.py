"""Tests for settings loading."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from rts_assets.config import ASSET_ROOT, AssetConfig, load_config


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    assert load_config(tmp_path / "settings.json") == AssetConfig()


def test_partial_file_overrides_known_fields(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"asset_root": "art", "use_sprites": False, "terrain_seed": 7, "window": [800, 600]}),
        encoding="utf-8",
    )
    settings = load_config(path)
    assert settings.asset_root == Path("art")
    assert settings.use_sprites is False
    assert settings.terrain_seed == 7
    assert settings.primary_color == "#4488ff"


def test_defaults() -> None:
    settings = AssetConfig()
    assert settings.asset_root == ASSET_ROOT
    assert settings.load_custom_assets is True


@pytest.mark.parametrize(
    "overrides",
    [
        {"primary_color": "blue"},
        {"secondary_color": "#12345"},
        {"primary_color": "#FF4444"},
        {"terrain_seed": -1},
    ],
)
def test_invalid_settings_are_rejected(tmp_path: Path, overrides: dict) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(overrides), encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_non_object_file_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


@pytest.mark.parametrize("seed", ["7", 1.5, True])
def test_non_integer_seed_is_rejected(seed) -> None:
    with pytest.raises(ValueError):
        AssetConfig(terrain_seed=seed).validate()


def test_non_string_colour_is_rejected() -> None:
    with pytest.raises(ValueError):
        AssetConfig(primary_color=0x4488FF).validate()
