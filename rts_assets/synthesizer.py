"""Procedural sprite recipes for units, buildings and effects.

Every ``generate_*`` function is a pure function of one colour: it draws a
layered composition (ground shadow, base shape, shading passes, then
ornaments) onto a fresh surface and returns the finished image. Draw order
is the layering order, so the sequence of calls inside a recipe matters.
"""
from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Callable, Dict, Tuple

from . import config
from .colors import shade
from .models import AssetKey, Category, ColorLike, ColorSpec, ImageHandle
from .surface import DrawingSurface, PygameSurface, SurfaceFactory, translucent

if TYPE_CHECKING:
    from .store import AssetStore

LOGGER = logging.getLogger(__name__)

Recipe = Callable[..., ImageHandle]

BLACK = "#000000"
SKIN = "#d4a574"
GUNMETAL = "#333333"
LAUNCHER = "#555555"
STEEL = "#666666"
WINDOW = "#88ccff"
BEACON = "#ffff00"
BEACON_GLOW = "#ffff88"
AMBER = "#ffaa00"
POWER_LIGHT = "#00ff00"
SMOKE = "#646464"

FULL_TURN = math.pi * 2


def _canvas(factory: SurfaceFactory, size: int, y_offset: float = 0) -> Tuple[DrawingSurface, float, float]:
    surface = factory(size, size)
    return surface, size / 2, size / 2 + y_offset


def _shadow(s: DrawingSurface, cx: float, cy: float, rx: float, ry: float, alpha: float = 0.3) -> None:
    with translucent(s, alpha):
        s.fill_ellipse(cx, cy, rx, ry, BLACK)


# ---------------------------------------------------------------------------
# Shared parts
# ---------------------------------------------------------------------------
def _tracked_hull(
    s: DrawingSurface,
    color: ColorSpec,
    cx: float,
    cy: float,
    half_width: float,
    top: float,
    height: float,
    dark_height: float,
    light_top: float,
    light_height: float,
    track_width: float,
    track_span: Tuple[float, float],
) -> None:
    """Hull rectangle with a dark upper band, a lit lower band and side tracks."""

    s.fill_rect(cx - half_width, cy + top, half_width * 2, height, color)
    s.fill_rect(cx - half_width, cy + top, half_width * 2, dark_height, shade(color, -20))
    s.fill_rect(cx - half_width, cy + light_top, half_width * 2, light_height, shade(color, 15))
    track = shade(color, -40)
    for x in (cx - half_width, cx + half_width):
        s.stroke_line(x, cy + track_span[0], x, cy + track_span[1], track, track_width)


def _turret(s: DrawingSurface, color: ColorSpec, cx: float, cy: float, outer: float, inner: float) -> None:
    s.fill_circle(cx, cy, outer, shade(color, -15))
    s.fill_circle(cx, cy, inner, color)


def _soldier(s: DrawingSurface, color: ColorSpec, cx: float, cy: float, helmet_shade: int) -> None:
    _shadow(s, cx, cy + 6, 8, 3)
    s.fill_rect(cx - 5, cy + 2, 10, 10, color)
    s.fill_rect(cx - 5, cy + 2, 10, 3, shade(color, -20))
    s.fill_circle(cx, cy - 2, 4, SKIN)
    s.fill_arc(cx, cy - 3, 5, math.pi, 0, shade(color, helmet_shade))


def _structure(s: DrawingSurface, color: ColorSpec, cx: float, cy: float, frame_shade: int) -> None:
    """Shadowed two-tone block shared by the mid-sized buildings."""

    _shadow(s, cx, cy + 11, 18, 7)
    s.fill_rect(cx - 14, cy - 4, 28, 20, shade(color, frame_shade))
    s.fill_rect(cx - 12, cy - 2, 24, 18, color)


# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------
def generate_light_tank(color: ColorLike = config.PRIMARY_COLOR, factory: SurfaceFactory = PygameSurface) -> ImageHandle:
    color = ColorSpec.parse(color)
    s, cx, cy = _canvas(factory, 56)
    _shadow(s, cx, cy + 6, 12, 4, alpha=0.2)
    _tracked_hull(s, color, cx, cy, 10, -3, 10, 4, 4, 3, 1.5, (-1, 6))
    _turret(s, color, cx, cy - 2, 5, 3.5)
    s.stroke_line(cx + 4, cy - 2, cx + 11, cy - 3, shade(color, -40), 2)
    return s.export_image()


def generate_medium_tank(color: ColorLike = config.PRIMARY_COLOR, factory: SurfaceFactory = PygameSurface) -> ImageHandle:
    color = ColorSpec.parse(color)
    s, cx, cy = _canvas(factory, 64)
    _shadow(s, cx, cy + 8, 16, 6)
    _tracked_hull(s, color, cx, cy, 14, -4, 14, 5, 5, 4, 2, (-2, 8))
    _turret(s, color, cx, cy - 3, 8, 6)
    s.fill_circle(cx - 2, cy - 5, 3, shade(color, 20))
    s.stroke_line(cx + 6, cy - 3, cx + 16, cy - 5, shade(color, -40), 2.5)
    s.fill_circle(cx + 16, cy - 5, 1.5, shade(color, -50))
    return s.export_image()


def generate_heavy_tank(color: ColorLike = config.PRIMARY_COLOR, factory: SurfaceFactory = PygameSurface) -> ImageHandle:
    color = ColorSpec.parse(color)
    s, cx, cy = _canvas(factory, 72)
    _shadow(s, cx, cy + 10, 20, 8, alpha=0.4)
    _tracked_hull(s, color, cx, cy, 18, -5, 16, 6, 6, 5, 3, (-2, 10))
    _turret(s, color, cx, cy - 4, 10, 7.5)
    s.fill_circle(cx - 3, cy - 7, 4, shade(color, 20))
    s.stroke_line(cx + 7, cy - 4, cx + 20, cy - 6, shade(color, -40), 3)
    s.fill_circle(cx + 20, cy - 6, 2, shade(color, -50))
    return s.export_image()


def generate_flak(color: ColorLike = config.PRIMARY_COLOR, factory: SurfaceFactory = PygameSurface) -> ImageHandle:
    color = ColorSpec.parse(color)
    s, cx, cy = _canvas(factory, 56)
    _shadow(s, cx, cy + 7, 14, 5, alpha=0.25)
    _tracked_hull(s, color, cx, cy, 11, -3, 11, 4, 4, 3, 1.5, (-1, 6))
    _turret(s, color, cx, cy - 2, 6, 4.5)
    guns = shade(color, -40)
    s.stroke_line(cx + 3, cy - 5, cx + 10, cy - 8, guns, 1.5)
    s.stroke_line(cx + 3, cy + 1, cx + 10, cy + 4, guns, 1.5)
    return s.export_image()


def generate_infantry(color: ColorLike = config.PRIMARY_COLOR, factory: SurfaceFactory = PygameSurface) -> ImageHandle:
    color = ColorSpec.parse(color)
    s, cx, cy = _canvas(factory, 48)
    _soldier(s, color, cx, cy, helmet_shade=-30)
    s.stroke_line(cx + 5, cy, cx + 12, cy - 3, GUNMETAL, 1.5)
    s.fill_rect(cx + 11, cy - 4, 2, 2, GUNMETAL)
    with translucent(s, 0.5):
        s.fill_rect(cx - 3, cy + 3, 4, 2, shade(color, 30))
    return s.export_image()


def generate_rocket_soldier(color: ColorLike = config.PRIMARY_COLOR, factory: SurfaceFactory = PygameSurface) -> ImageHandle:
    color = ColorSpec.parse(color)
    s, cx, cy = _canvas(factory, 48)
    _soldier(s, color, cx, cy, helmet_shade=-35)
    s.stroke_line(cx + 3, cy - 6, cx + 3, cy - 10, shade(color, -50), 1)
    s.fill_rect(cx + 4, cy - 2, 2, 10, LAUNCHER)
    s.fill_rect(cx + 6, cy, 2, 7, LAUNCHER)
    s.stroke_line(cx + 7, cy - 1, cx + 13, cy - 4, STEEL, 1.5)
    s.stroke_line(cx + 7, cy + 3, cx + 13, cy, STEEL, 1.5)
    return s.export_image()


def generate_harvester(color: ColorLike = config.PRIMARY_COLOR, factory: SurfaceFactory = PygameSurface) -> ImageHandle:
    color = ColorSpec.parse(color)
    s, cx, cy = _canvas(factory, 56)
    _shadow(s, cx, cy + 6, 14, 5)
    s.fill_ellipse(cx, cy + 1, 12, 9, color)
    s.fill_ellipse(cx - 3, cy - 3, 6, 4, shade(color, 20))
    # cargo container
    s.fill_rect(cx - 8, cy - 8, 16, 6, shade(color, -25))
    s.fill_rect(cx - 8, cy - 6, 16, 5, color)
    s.stroke_rect(cx - 8, cy - 6, 16, 5, shade(color, -40), 1)
    s.fill_circle(cx - 8, cy + 8, 2, GUNMETAL)
    s.fill_circle(cx + 8, cy + 8, 2, GUNMETAL)
    return s.export_image()


def generate_artillery(color: ColorLike = config.PRIMARY_COLOR, factory: SurfaceFactory = PygameSurface) -> ImageHandle:
    color = ColorSpec.parse(color)
    s, cx, cy = _canvas(factory, 52)
    _shadow(s, cx, cy + 6, 12, 4)
    s.fill_circle(cx, cy + 2, 10, color)
    s.fill_arc(cx, cy + 2, 10, 0, math.pi, shade(color, -25))
    s.stroke_line(cx + 8, cy + 2, cx + 20, cy - 8, shade(color, -40), 3)
    s.fill_circle(cx + 8, cy + 2, 2, shade(color, -50))
    s.stroke_line(cx + 6, cy + 5, cx + 16, cy - 6, shade(color, -30), 1)
    return s.export_image()


def generate_scout(color: ColorLike = config.PRIMARY_COLOR, factory: SurfaceFactory = PygameSurface) -> ImageHandle:
    color = ColorSpec.parse(color)
    s, cx, cy = _canvas(factory, 44)
    _shadow(s, cx, cy + 5, 7, 2.5)
    s.fill_polygon([(cx - 6, cy), (cx + 8, cy - 2), (cx + 8, cy + 4), (cx - 6, cy + 6)], color)
    s.fill_rect(cx - 4, cy + 1, 6, 2, shade(color, 25))
    s.fill_circle(cx - 2, cy + 1, 2, STEEL)
    trail = shade(color, -40)
    for offset in range(-2, 3):
        s.stroke_line(cx - 10, cy + 1 + offset, cx - 14, cy + offset, trail, 1)
    return s.export_image()


# ---------------------------------------------------------------------------
# Buildings
# ---------------------------------------------------------------------------
def generate_hq(color: ColorLike = config.PRIMARY_COLOR, factory: SurfaceFactory = PygameSurface) -> ImageHandle:
    color = ColorSpec.parse(color)
    s, cx, cy = _canvas(factory, 72)
    _shadow(s, cx, cy + 12, 20, 8)
    s.fill_rect(cx - 16, cy - 8, 32, 22, shade(color, -25))
    s.fill_rect(cx - 14, cy - 6, 28, 20, color)
    s.fill_polygon([(cx - 14, cy - 6), (cx, cy - 12), (cx + 14, cy - 6)], shade(color, -35))
    s.fill_rect(cx - 12, cy - 7, 24, 2, shade(color, 20))
    # command antenna with beacon
    s.stroke_line(cx + 8, cy - 10, cx + 8, cy - 20, shade(color, -50), 2)
    s.fill_circle(cx + 8, cy - 20, 2.5, BEACON)
    with translucent(s, 0.4):
        s.fill_circle(cx + 8, cy - 20, 4, BEACON_GLOW)
    for x in (cx - 10, cx - 1, cx + 8):
        s.fill_rect(x, cy - 2, 3, 3, WINDOW)
    s.fill_rect(cx - 3, cy + 8, 6, 8, shade(color, -40))
    s.stroke_rect(cx - 3, cy + 8, 6, 8, shade(color, -50), 1)
    return s.export_image()


def generate_barracks(color: ColorLike = config.PRIMARY_COLOR, factory: SurfaceFactory = PygameSurface) -> ImageHandle:
    color = ColorSpec.parse(color)
    s, cx, cy = _canvas(factory, 68)
    _structure(s, color, cx, cy, frame_shade=-20)
    s.fill_polygon([(cx - 12, cy - 2), (cx, cy - 8), (cx + 12, cy - 2)], shade(color, -30))
    yard = shade(color, -40)
    for row in range(4):
        s.stroke_line(cx - 8, cy + 2 + row * 3, cx + 8, cy + 2 + row * 3, yard, 1.5)
    s.fill_rect(cx - 8, cy + 10, 16, 6, shade(color, -45))
    s.stroke_rect(cx - 8, cy + 10, 16, 6, shade(color, -50), 1.5)
    s.stroke_line(cx + 12, cy - 4, cx + 12, cy - 10, shade(color, -50), 1)
    s.fill_rect(cx + 12, cy - 10, 5, 3, shade(color, 30))
    return s.export_image()


def generate_factory(color: ColorLike = config.PRIMARY_COLOR, factory: SurfaceFactory = PygameSurface) -> ImageHandle:
    color = ColorSpec.parse(color)
    s, cx, cy = _canvas(factory, 68)
    _structure(s, color, cx, cy, frame_shade=-25)
    line = shade(color, -45)
    for row in range(3):
        s.stroke_line(cx - 10, cy + 2 + row * 4, cx + 10, cy + 2 + row * 4, line, 2)
    s.fill_rect(cx + 10, cy - 10, 4, 12, shade(color, -40))
    with translucent(s, 0.3):
        s.fill_circle(cx + 12, cy - 12, 3, SMOKE)
    for x in (cx - 8, cx - 2, cx + 4):
        s.fill_rect(x, cy + 2, 2, 2, WINDOW)
    return s.export_image()


def generate_derrick(color: ColorLike = config.PRIMARY_COLOR, factory: SurfaceFactory = PygameSurface) -> ImageHandle:
    color = ColorSpec.parse(color)
    s, cx, cy = _canvas(factory, 64, y_offset=2)
    _shadow(s, cx, cy + 10, 16, 6)
    # oil tank
    s.fill_ellipse(cx, cy + 8, 12, 4, shade(color, -30))
    s.fill_ellipse(cx, cy + 6, 12, 4, color)
    tower = shade(color, -35)
    s.stroke_line(cx - 2, cy + 6, cx - 6, cy - 12, tower, 2)
    s.stroke_line(cx + 2, cy + 6, cx + 6, cy - 12, tower, 2)
    s.fill_rect(cx - 4, cy - 12, 8, 4, shade(color, -25))
    s.fill_rect(cx - 3, cy - 10, 6, 2, color)
    s.stroke_line(cx, cy - 10, cx + 2, cy - 16, shade(color, -40), 2)
    s.fill_circle(cx - 3, cy - 14, 2, shade(color, -50))
    s.fill_rect(cx - 8, cy + 8, 16, 2, AMBER)
    return s.export_image()


def generate_turret(color: ColorLike = config.PRIMARY_COLOR, factory: SurfaceFactory = PygameSurface) -> ImageHandle:
    color = ColorSpec.parse(color)
    s, cx, cy = _canvas(factory, 60)
    _shadow(s, cx, cy + 8, 14, 5)
    s.fill_circle(cx, cy + 2, 14, shade(color, -30))
    s.fill_circle(cx, cy + 2, 12, color)
    s.fill_circle(cx, cy - 2, 10, shade(color, -35))
    s.fill_circle(cx, cy - 2, 8, shade(color, -15))
    s.stroke_line(cx - 2, cy - 2, cx - 18, cy, shade(color, -50), 3)
    s.fill_circle(cx - 2, cy - 2, 2, shade(color, -50))
    s.stroke_line(cx + 8, cy - 4, cx + 8, cy - 10, shade(color, -40), 1)
    s.fill_circle(cx + 8, cy - 10, 1, shade(color, -50))
    return s.export_image()


def generate_power_plant(color: ColorLike = config.PRIMARY_COLOR, factory: SurfaceFactory = PygameSurface) -> ImageHandle:
    color = ColorSpec.parse(color)
    s, cx, cy = _canvas(factory, 68)
    _structure(s, color, cx, cy, frame_shade=-25)
    panel = shade(color, -40)
    for col in range(3):
        for row in range(2):
            s.stroke_rect(cx - 8 + col * 7, cy + row * 7, 5, 5, panel, 1)
    s.stroke_line(cx - 12, cy - 2, cx - 18, cy - 6, AMBER, 1.5)
    s.stroke_line(cx + 12, cy - 2, cx + 18, cy - 6, AMBER, 1.5)
    s.fill_circle(cx - 6, cy + 4, 1.5, POWER_LIGHT)
    s.fill_circle(cx + 6, cy + 4, 1.5, POWER_LIGHT)
    return s.export_image()


# ---------------------------------------------------------------------------
# Effects
# ---------------------------------------------------------------------------
def generate_explosion(color: ColorLike = "#ff8800", factory: SurfaceFactory = PygameSurface) -> ImageHandle:
    color = ColorSpec.parse(color)
    s, cx, cy = _canvas(factory, 48)
    with translucent(s, 0.35):
        s.fill_circle(cx, cy, 20, shade(color, 30))
    s.fill_circle(cx, cy, 14, color)
    s.fill_circle(cx - 1, cy - 1, 10, shade(color, 30))
    s.fill_circle(cx - 2, cy - 2, 5, shade(color, 60))
    return s.export_image()


def generate_muzzle_flash(color: ColorLike = "#ffdd55", factory: SurfaceFactory = PygameSurface) -> ImageHandle:
    color = ColorSpec.parse(color)
    s, cx, cy = _canvas(factory, 24)
    points = []
    for index in range(16):
        radius = 10 if index % 2 == 0 else 4
        angle = FULL_TURN * index / 16
        points.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    s.fill_polygon(points, color)
    s.fill_circle(cx, cy, 3, shade(color, 40))
    return s.export_image()


def generate_smoke(color: ColorLike = "#777777", factory: SurfaceFactory = PygameSurface) -> ImageHandle:
    color = ColorSpec.parse(color)
    s, cx, cy = _canvas(factory, 40)
    with translucent(s, 0.5):
        s.fill_circle(cx - 6, cy + 3, 9, color)
        s.fill_circle(cx + 6, cy + 2, 8, shade(color, -10))
        s.fill_circle(cx, cy - 5, 10, color)
    with translucent(s, 0.3):
        s.fill_circle(cx - 2, cy - 7, 5, shade(color, 25))
    return s.export_image()


# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------
UNIT_RECIPES: Dict[str, Recipe] = {
    "infantry": generate_infantry,
    "light_tank": generate_light_tank,
    "medium_tank": generate_medium_tank,
    "heavy_tank": generate_heavy_tank,
    "tank": generate_medium_tank,  # generic name used by the loader catalog
    "harvester": generate_harvester,
    "artillery": generate_artillery,
    "flak": generate_flak,
    "scout": generate_scout,
    "rocket_soldier": generate_rocket_soldier,
}

BUILDING_RECIPES: Dict[str, Recipe] = {
    "hq": generate_hq,
    "barracks": generate_barracks,
    "factory": generate_factory,
    "derrick": generate_derrick,
    "turret": generate_turret,
    "power_plant": generate_power_plant,
}

EFFECT_RECIPES: Dict[str, Tuple[Recipe, str]] = {
    "explosion": (generate_explosion, "#ff8800"),
    "muzzle_flash": (generate_muzzle_flash, "#ffdd55"),
    "smoke": (generate_smoke, "#777777"),
}

TEAM_RECIPES: Dict[Category, Dict[str, Recipe]] = {
    Category.UNITS: UNIT_RECIPES,
    Category.BUILDINGS: BUILDING_RECIPES,
}


def synthesize_all(color: ColorLike) -> Dict[AssetKey, ImageHandle]:
    """Run every unit and building recipe with ``color``."""

    color = ColorSpec.parse(color)
    images: Dict[AssetKey, ImageHandle] = {}
    for category, recipes in TEAM_RECIPES.items():
        for name, recipe in recipes.items():
            LOGGER.debug("Synthesizing %s/%s in %s", category.value, name, color.hex)
            images[AssetKey(category, name)] = recipe(color)
    return images


def generate_all(store: "AssetStore", color: ColorLike) -> Dict[AssetKey, ImageHandle]:
    """Synthesize every unit and building with ``color`` into ``store``.

    Returns the images that were written, keyed by their store address.
    """

    LOGGER.info("Generating sprites with colour %s", ColorSpec.parse(color).hex)
    images = synthesize_all(color)
    for key, image in images.items():
        store.put(key.category, key.name, image)
    LOGGER.info("Generated %d sprites", len(images))
    return images


def generate_effects(store: "AssetStore") -> Dict[AssetKey, ImageHandle]:
    images: Dict[AssetKey, ImageHandle] = {}
    for name, (recipe, color) in EFFECT_RECIPES.items():
        image = recipe(color)
        store.put(Category.EFFECTS, name, image)
        images[AssetKey(Category.EFFECTS, name)] = image
    LOGGER.info("Generated %d effect sprites", len(images))
    return images
