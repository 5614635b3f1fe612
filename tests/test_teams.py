"""Tests for team-coloured sprite generation."""
from __future__ import annotations

import pytest

from rts_assets.models import AssetKey, Category, Team
from rts_assets.synthesizer import BUILDING_RECIPES, UNIT_RECIPES, generate_medium_tank
from rts_assets.teams import DEFAULT_PALETTES, TeamPalette, generate_team, palettes_for

BLUE = (0x44, 0x88, 0xFF, 255)
RED = (0xFF, 0x44, 0x44, 255)


def test_both_teams_present_for_every_recipe(store) -> None:
    generate_team(store)
    for category, recipes in ((Category.UNITS, UNIT_RECIPES), (Category.BUILDINGS, BUILDING_RECIPES)):
        for name in recipes:
            assert store.has(category, name)
            assert store.has(category, f"{name}_red")


def test_plain_names_hold_the_primary_team(store) -> None:
    generate_team(store)
    assert store.get(Category.UNITS, "tank").pixel_at(22, 35) == BLUE
    assert store.get(Category.UNITS, "tank_red").pixel_at(22, 35) == RED
    assert store.get(Category.UNITS, "tank") == generate_medium_tank("#4488ff")


def test_primary_team_has_no_suffixed_keys(store) -> None:
    generate_team(store)
    names = set(store.list_category(Category.UNITS)) | set(store.list_category(Category.BUILDINGS))
    assert not any(name.endswith("_blue") for name in names)


def test_result_is_keyed_by_final_address(store) -> None:
    result = generate_team(store)
    assert set(result) == {Team.BLUE, Team.RED}
    assert AssetKey(Category.UNITS, "tank") in result[Team.BLUE]
    assert AssetKey(Category.UNITS, "tank_red") in result[Team.RED]
    for key, image in result[Team.RED].items():
        assert store.get(key.category, key.name) == image


def test_custom_palettes(store) -> None:
    generate_team(store, palettes_for("#00ff00", "#ff00ff"))
    assert store.get(Category.UNITS, "tank").pixel_at(22, 35) == (0, 255, 0, 255)
    assert store.get(Category.UNITS, "tank_red").pixel_at(22, 35) == (255, 0, 255, 255)


def test_palette_validation(store) -> None:
    with pytest.raises(ValueError):
        generate_team(store, ())
    with pytest.raises(ValueError):
        generate_team(store, (DEFAULT_PALETTES[0], TeamPalette.of(Team.BLUE, "#123456")))
    assert len(store) == 0


def test_variant_names() -> None:
    assert Team.RED.variant_name("tank") == "tank_red"
    assert AssetKey(Category.BUILDINGS, "hq").variant(Team.BLUE) == AssetKey(Category.BUILDINGS, "hq_blue")
