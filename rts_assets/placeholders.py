"""Flat coloured fallback images for keys that have no art."""
from __future__ import annotations

import logging
from typing import Dict, Mapping, Tuple

from . import config
from .models import AssetKey, Category, ColorLike, ImageHandle
from .store import AssetStore
from .surface import PygameSurface, SurfaceFactory

LOGGER = logging.getLogger(__name__)

PLACEHOLDER_CATALOG: Mapping[Category, Tuple[Mapping[str, str], Tuple[int, int]]] = {
    Category.UNITS: (config.UNIT_PLACEHOLDER_COLORS, config.UNIT_PLACEHOLDER_SIZE),
    Category.BUILDINGS: (config.BUILDING_PLACEHOLDER_COLORS, config.BUILDING_PLACEHOLDER_SIZE),
    Category.TERRAIN: (config.TERRAIN_COLORS, config.TERRAIN_PLACEHOLDER_SIZE),
}


def create_placeholder(
    color: ColorLike = config.PRIMARY_COLOR,
    width: int = config.PLACEHOLDER_DEFAULT_SIZE[0],
    height: int = config.PLACEHOLDER_DEFAULT_SIZE[1],
    factory: SurfaceFactory = PygameSurface,
) -> ImageHandle:
    """A ``color`` filled rectangle inside a white border."""

    border = config.PLACEHOLDER_BORDER_WIDTH
    surface = factory(width, height)
    surface.fill_rect(0, 0, width, height, color)
    # Strokes are drawn inside the rectangle, so the border starts at the image edge.
    surface.stroke_rect(0, 0, width, height, config.PLACEHOLDER_BORDER_COLOR, border)
    return surface.export_image()


def populate_placeholders(store: AssetStore, only_missing: bool = False) -> Dict[AssetKey, ImageHandle]:
    """Insert the fixed placeholder catalog for units, buildings and terrain.

    By default every catalog entry is written, so call this before any
    synthesis or loading pass. With ``only_missing`` the keys that already
    hold an image are left untouched.
    """

    written: Dict[AssetKey, ImageHandle] = {}
    for category, (colors, (width, height)) in PLACEHOLDER_CATALOG.items():
        for name, color in colors.items():
            if only_missing and store.has(category, name):
                continue
            image = create_placeholder(color, width, height)
            store.put(category, name, image)
            written[AssetKey(category, name)] = image
    LOGGER.debug("Placeholder assets created: %d", len(written))
    return written
