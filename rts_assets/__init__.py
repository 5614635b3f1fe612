"""Asset resource management for the RTS client.

Named sprites for units, buildings, terrain and effects are resolved from
one keyed store. The store is filled from external image files, from
procedural sprite recipes or from flat placeholders, so a usable image
exists for every catalog name even when no art ships with the game.
"""

from .colors import shade
from .config import AssetConfig, load_config
from .loader import AssetLoader, LoadError, default_requests, team_requests
from .models import AssetKey, Category, ColorSpec, ImageHandle, LoadOutcome, LoadRequest, Team
from .placeholders import create_placeholder, populate_placeholders
from .session import AssetSession
from .store import AssetStore
from .surface import SynthesisError
from .synthesizer import generate_all, generate_effects
from .teams import TeamPalette, generate_team
from .terrain import generate_terrain

__all__ = [
    "AssetConfig",
    "AssetKey",
    "AssetLoader",
    "AssetSession",
    "AssetStore",
    "Category",
    "ColorSpec",
    "ImageHandle",
    "LoadError",
    "LoadOutcome",
    "LoadRequest",
    "SynthesisError",
    "Team",
    "TeamPalette",
    "create_placeholder",
    "default_requests",
    "generate_all",
    "generate_effects",
    "generate_team",
    "generate_terrain",
    "load_config",
    "populate_placeholders",
    "shade",
    "team_requests",
]
