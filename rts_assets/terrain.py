"""Noise-textured terrain tiles.

Each tile is a grid of flat cells whose shade follows 2D Perlin noise,
which gives ground tiles a mottled look while staying fully determined by
the base colour and the seed.
"""
from __future__ import annotations

import logging
from typing import Dict

import noise

from . import config
from .colors import shade
from .models import AssetKey, Category, ColorLike, ColorSpec, ImageHandle
from .store import AssetStore
from .surface import PygameSurface, SurfaceFactory

LOGGER = logging.getLogger(__name__)

NOISE_SCALE = 0.18
OCTAVES = 4
PERSISTENCE = 0.5
LACUNARITY = 2.0


def cell_shade(x: int, y: int, seed: int) -> int:
    """Percent shade for grid cell ``(x, y)``, within the configured range."""

    value = noise.pnoise2(
        x * NOISE_SCALE,
        y * NOISE_SCALE,
        octaves=OCTAVES,
        persistence=PERSISTENCE,
        lacunarity=LACUNARITY,
        repeatx=1024,
        repeaty=1024,
        base=seed,
    )
    value = max(-1.0, min(1.0, value))
    return int(value * config.TERRAIN_SHADE_RANGE)


def generate_terrain_tile(
    color: ColorLike,
    seed: int = 0,
    size: int = config.TERRAIN_TILE_SIZE,
    factory: SurfaceFactory = PygameSurface,
) -> ImageHandle:
    color = ColorSpec.parse(color)
    cell = config.TERRAIN_CELL_SIZE
    surface = factory(size, size)
    surface.fill_rect(0, 0, size, size, color)
    for row in range(size // cell):
        for col in range(size // cell):
            percent = cell_shade(col, row, seed)
            if percent:
                surface.fill_rect(col * cell, row * cell, cell, cell, shade(color, percent))
    return surface.export_image()


def generate_terrain(store: AssetStore, seed: int = 0) -> Dict[AssetKey, ImageHandle]:
    """Store one textured tile for every catalog terrain type."""

    images: Dict[AssetKey, ImageHandle] = {}
    for index, name in enumerate(config.TERRAIN_NAMES):
        # Offset the noise base per terrain type so tiles do not share a pattern.
        image = generate_terrain_tile(config.TERRAIN_COLORS[name], seed=seed + index)
        store.put(Category.TERRAIN, name, image)
        images[AssetKey(Category.TERRAIN, name)] = image
    LOGGER.info("Generated %d terrain tiles (seed %d)", len(images), seed)
    return images
