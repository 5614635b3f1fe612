"""Startup orchestration for one game session's asset store."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .config import AssetConfig
from .loader import AssetLoader, Fetcher, default_requests
from .models import ImageHandle, LoadOutcome, LoadRequest, Team
from .placeholders import populate_placeholders
from .store import AssetStore, CategoryLike
from .synthesizer import generate_effects
from .teams import generate_team, palettes_for
from .terrain import generate_terrain

LOGGER = logging.getLogger(__name__)


@dataclass
class AssetSession:
    """Owns the store and loader of a session and fills them on startup.

    Population order is also precedence order: placeholders first, then
    synthesized sprites, then custom files. Each later source overrides the
    earlier ones key by key.
    """

    config: AssetConfig = field(default_factory=AssetConfig)
    fetcher: Optional[Fetcher] = None
    store: AssetStore = field(default_factory=AssetStore)
    loader: AssetLoader = field(init=False)
    use_sprites: bool = field(init=False)

    def __post_init__(self) -> None:
        self.config.validate()
        self.loader = AssetLoader(self.store, fetcher=self.fetcher)
        self.use_sprites = self.config.use_sprites

    async def bootstrap(self, requests: Optional[Iterable[LoadRequest]] = None) -> LoadOutcome:
        """Populate the store; ``requests`` defaults to the custom-art catalog."""

        populate_placeholders(self.store)
        if self.use_sprites:
            self.synthesize()
        if self.config.load_custom_assets:
            batch = list(requests) if requests is not None else default_requests(self.config.asset_root)
            LOGGER.info("Loading %d asset definitions", len(batch))
            outcome = await self.loader.load_many(batch)
            if outcome.failed:
                LOGGER.warning("%d assets failed to load (using fallbacks)", outcome.failed)
        LOGGER.info("Asset store ready with %d images", len(self.store))
        return self.loader.outcome()

    def synthesize(self) -> None:
        generate_team(self.store, palettes_for(self.config.primary_color, self.config.secondary_color))
        generate_terrain(self.store, seed=self.config.terrain_seed)
        generate_effects(self.store)

    def toggle_graphics_mode(self, use_sprites: Optional[bool] = None) -> bool:
        """Flip (or set) whether procedural sprites are used on the next bootstrap."""

        self.use_sprites = (not self.use_sprites) if use_sprites is None else use_sprites
        LOGGER.info("Switched to %s graphics mode", "sprite-based" if self.use_sprites else "placeholder")
        return self.use_sprites

    def resolve(self, category: CategoryLike, name: str, team: Optional[Team] = None) -> Optional[ImageHandle]:
        """Look up a team variant, falling back to the plain name."""

        if team is not None:
            image = self.store.get(category, team.variant_name(name))
            if image is not None:
                return image
        return self.store.get(category, name)
