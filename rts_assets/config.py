"""Configuration constants and settings for the asset subsystem.

The catalogs below are shared by the loader's default request list, the
sprite synthesizer and the placeholder factory so that every source of
imagery agrees on the names a renderer may ask for.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Tuple

ASSET_ROOT = Path("assets")
IMAGE_EXTENSION = ".png"

# Team palettes. The first entry is the primary team.
PRIMARY_COLOR = "#4488ff"
SECONDARY_COLOR = "#ff4444"

UNIT_NAMES: Tuple[str, ...] = (
    "infantry",
    "tank",
    "harvester",
    "artillery",
    "scout",
    "rocket_soldier",
)

BUILDING_NAMES: Tuple[str, ...] = (
    "hq",
    "barracks",
    "factory",
    "derrick",
    "turret",
    "power_plant",
)

TERRAIN_NAMES: Tuple[str, ...] = ("grass", "sand", "rock", "water", "hills")

# Placeholder colours keyed by asset name.
UNIT_PLACEHOLDER_COLORS: Dict[str, str] = {
    "infantry": "#4488ff",
    "tank": "#2255dd",
    "harvester": "#66aaff",
    "artillery": "#1133bb",
    "scout": "#88ccff",
    "rocket_soldier": "#0099ff",
}

BUILDING_PLACEHOLDER_COLORS: Dict[str, str] = {
    "hq": "#4488ff",
    "barracks": "#2255dd",
    "factory": "#1133bb",
    "derrick": "#66aaff",
    "turret": "#88ccff",
    "power_plant": "#0099ff",
}

TERRAIN_COLORS: Dict[str, str] = {
    "grass": "#3d5c3d",
    "sand": "#a08050",
    "rock": "#606060",
    "water": "#304060",
    "hills": "#5d7c4d",
}

PLACEHOLDER_DEFAULT_SIZE = (32, 32)
UNIT_PLACEHOLDER_SIZE = (48, 48)
BUILDING_PLACEHOLDER_SIZE = (64, 64)
TERRAIN_PLACEHOLDER_SIZE = (64, 64)
PLACEHOLDER_BORDER_COLOR = "#ffffff"
PLACEHOLDER_BORDER_WIDTH = 2

TERRAIN_TILE_SIZE = 64
TERRAIN_CELL_SIZE = 4  # pixels per noise sample
TERRAIN_SHADE_RANGE = 20  # percent either side of the base colour

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


@dataclass(frozen=True)
class AssetConfig:
    """Settings describing how a session populates its asset store.

    Attributes
    ----------
    asset_root:
        Directory holding custom art laid out as ``<category>/<name>.png``.
    primary_color:
        Hex colour of the primary team. Its sprites are stored under the
        plain entity names.
    secondary_color:
        Hex colour of the secondary team. Its sprites are stored under the
        ``_red`` suffixed names.
    use_sprites:
        When false the procedural synthesis pass is skipped and only
        placeholders and custom files are used.
    load_custom_assets:
        Whether to attempt loading custom art from ``asset_root``.
    terrain_seed:
        Seed for the noise texture of synthesized terrain tiles.
    """

    asset_root: Path = ASSET_ROOT
    primary_color: str = PRIMARY_COLOR
    secondary_color: str = SECONDARY_COLOR
    use_sprites: bool = True
    load_custom_assets: bool = True
    terrain_seed: int = 0

    def validate(self) -> None:
        for color in (self.primary_color, self.secondary_color):
            if not isinstance(color, str) or not _HEX_COLOR.match(color):
                raise ValueError(f"Invalid hex colour: {color!r}")
        if self.primary_color.lower() == self.secondary_color.lower():
            raise ValueError("Team colours must differ")
        if isinstance(self.terrain_seed, bool) or not isinstance(self.terrain_seed, int):
            raise ValueError(f"Terrain seed must be an integer, got {self.terrain_seed!r}")
        if self.terrain_seed < 0:
            raise ValueError("Terrain seed must be non-negative")


def load_config(path: Path) -> AssetConfig:
    """Read ``AssetConfig`` values from a JSON file, falling back to defaults."""

    values: Dict[str, Any] = {}
    if path.exists():
        with path.open("r", encoding="utf-8") as handle:
            values = json.load(handle)
        if not isinstance(values, dict):
            raise ValueError(f"{path} must hold a JSON object, got {type(values).__name__}")
    known = {field.name for field in fields(AssetConfig)}
    settings = {key: value for key, value in values.items() if key in known}
    if "asset_root" in settings:
        settings["asset_root"] = Path(settings["asset_root"])
    config = AssetConfig(**settings)
    config.validate()
    return config
