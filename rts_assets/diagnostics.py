"""Informational reports about what a store currently holds."""
from __future__ import annotations

import logging
from typing import Dict, Tuple

from .models import Category
from .store import AssetStore

LOGGER = logging.getLogger(__name__)


def status_report(store: AssetStore) -> Dict[str, int]:
    """Asset count per category, keyed by category name."""

    return {category.value: count for category, count in store.counts().items()}


def asset_dump(store: AssetStore) -> Dict[str, Dict[str, Tuple[int, int]]]:
    """``{category: {name: (width, height)}}`` for every stored image."""

    return {
        category.value: {name: image.size for name, image in sorted(store.list_category(category).items())}
        for category in Category
    }


def log_status(store: AssetStore) -> Dict[str, int]:
    status = status_report(store)
    LOGGER.info("Currently loaded: %s", status)
    return status


def log_asset_dump(store: AssetStore) -> None:
    for category, assets in asset_dump(store).items():
        LOGGER.info("%s (%d)", category.upper(), len(assets))
        for name, (width, height) in assets.items():
            LOGGER.info("  - %s: %dx%dpx", name, width, height)
