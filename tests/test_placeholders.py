"""Tests for the placeholder catalog."""
from __future__ import annotations

from rts_assets import config
from rts_assets.models import Category, ColorSpec
from rts_assets.placeholders import create_placeholder, populate_placeholders
from rts_assets.synthesizer import generate_medium_tank

WHITE = (255, 255, 255, 255)


def test_placeholder_has_white_border() -> None:
    image = create_placeholder("#2255dd", 48, 48)
    assert image.size == (48, 48)
    assert image.pixel_at(0, 0) == WHITE
    assert image.pixel_at(1, 1) == WHITE
    assert image.pixel_at(47, 47) == WHITE
    assert image.pixel_at(0, 24) == WHITE
    assert image.pixel_at(2, 2) == ColorSpec.from_hex("#2255dd").rgba()
    assert image.pixel_at(24, 24) == ColorSpec.from_hex("#2255dd").rgba()


def test_default_size() -> None:
    assert create_placeholder().size == config.PLACEHOLDER_DEFAULT_SIZE


def test_catalog_names_and_sizes(store) -> None:
    written = populate_placeholders(store)
    assert len(written) == 17
    assert set(store.list_category(Category.UNITS)) == set(config.UNIT_NAMES)
    assert set(store.list_category(Category.BUILDINGS)) == set(config.BUILDING_NAMES)
    assert set(store.list_category(Category.TERRAIN)) == set(config.TERRAIN_NAMES)
    assert store.list_category(Category.EFFECTS) == {}
    assert store.get(Category.UNITS, "scout").size == (48, 48)
    assert store.get(Category.BUILDINGS, "derrick").size == (64, 64)
    assert store.get(Category.TERRAIN, "water").size == (64, 64)
    assert store.get(Category.TERRAIN, "water").pixel_at(32, 32) == ColorSpec.from_hex("#304060").rgba()


def test_populate_overwrites_by_default(store) -> None:
    sprite = generate_medium_tank("#4488ff")
    store.put(Category.UNITS, "tank", sprite)
    populate_placeholders(store)
    assert store.get(Category.UNITS, "tank") != sprite


def test_only_missing_keeps_existing_images(store) -> None:
    sprite = generate_medium_tank("#4488ff")
    store.put(Category.UNITS, "tank", sprite)
    written = populate_placeholders(store, only_missing=True)
    assert store.get(Category.UNITS, "tank") is sprite
    assert len(written) == 16
