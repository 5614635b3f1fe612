"""Team-coloured sprite sets.

The primary team's sprites live under the plain entity names and every
other team's under ``<name><suffix>`` (``tank_red``). Synthesis always
writes plain names, so each secondary pass is captured and re-stored under
its suffixed names before the primary images are put back.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Sequence

from . import config
from .models import AssetKey, ColorLike, ColorSpec, ImageHandle, Team
from .store import AssetStore
from .synthesizer import generate_all

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class TeamPalette:
    team: Team
    color: ColorSpec

    @classmethod
    def of(cls, team: Team, color: ColorLike) -> "TeamPalette":
        return cls(team=team, color=ColorSpec.parse(color))


DEFAULT_PALETTES: tuple[TeamPalette, ...] = (
    TeamPalette.of(Team.BLUE, config.PRIMARY_COLOR),
    TeamPalette.of(Team.RED, config.SECONDARY_COLOR),
)


def palettes_for(primary_color: ColorLike, secondary_color: ColorLike) -> tuple[TeamPalette, ...]:
    return (
        TeamPalette.of(Team.BLUE, primary_color),
        TeamPalette.of(Team.RED, secondary_color),
    )


def generate_team(
    store: AssetStore, palettes: Sequence[TeamPalette] = DEFAULT_PALETTES
) -> Dict[Team, Dict[AssetKey, ImageHandle]]:
    """Synthesize every palette and leave the store holding all team variants.

    The first palette is primary. Returns the images of each team keyed by
    the address they were finally stored under.
    """

    if not palettes:
        raise ValueError("At least one team palette is required")
    primary, *secondaries = palettes
    if any(palette.team is primary.team for palette in secondaries):
        raise ValueError("Team palettes must name distinct teams")

    LOGGER.info("Generating %s team sprites", primary.team.value)
    primary_images = generate_all(store, primary.color)
    result: Dict[Team, Dict[AssetKey, ImageHandle]] = {primary.team: dict(primary_images)}

    for palette in secondaries:
        LOGGER.info("Generating %s team sprites", palette.team.value)
        images = generate_all(store, palette.color)
        variants: Dict[AssetKey, ImageHandle] = {}
        for key, image in images.items():
            variant = key.variant(palette.team)
            store.put(variant.category, variant.name, image)
            variants[variant] = image
        result[palette.team] = variants

    # The secondary passes overwrote the plain names; put the primary team back.
    for key, image in primary_images.items():
        store.put(key.category, key.name, image)
    LOGGER.info("Team sprites generated for %d teams", len(result))
    return result
