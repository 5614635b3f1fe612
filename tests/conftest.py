from __future__ import annotations

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest  # noqa: E402

from rts_assets.store import AssetStore  # noqa: E402


@pytest.fixture()
def store() -> AssetStore:
    return AssetStore()
