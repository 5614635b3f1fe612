"""Concurrent loading of external image files into an :class:`AssetStore`."""
from __future__ import annotations

import asyncio
import io
import logging
from pathlib import Path
from typing import Awaitable, Callable, Iterable, List, Optional, Sequence
from urllib.parse import unquote, urlparse

import pygame

from . import config
from .models import Category, ImageHandle, LoadOutcome, LoadRequest, Team
from .store import AssetStore

LOGGER = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[bytes]]


class LoadError(RuntimeError):
    """An external image could not be fetched or decoded."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to load {path}: {reason}")
        self.path = path
        self.reason = reason


def _local_path(locator: str) -> Path:
    parsed = urlparse(locator)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    return Path(locator)


async def read_file(locator: str) -> bytes:
    """Default fetcher: read a local path or ``file://`` URI off the event loop."""

    return await asyncio.to_thread(_local_path(locator).read_bytes)


def decode_image(data: bytes, path: str = "") -> ImageHandle:
    """Decode encoded image bytes (PNG, JPEG, ...) into an RGBA handle."""

    if not data:
        raise LoadError(path, "empty file")
    try:
        surface = pygame.image.load(io.BytesIO(data), Path(path).name or "image.png")
        return ImageHandle.from_surface(surface)
    except (pygame.error, ValueError) as exc:
        raise LoadError(path, f"cannot decode image ({exc})") from exc


class AssetLoader:
    """Loads images into a store and counts successes and failures.

    The counters belong to the loader instance and only ever grow; a fresh
    count needs a fresh loader.
    """

    def __init__(self, store: AssetStore, fetcher: Optional[Fetcher] = None) -> None:
        self.store = store
        self._fetch: Fetcher = fetcher or read_file
        self.loaded_count = 0
        self.failed_count = 0

    def outcome(self) -> LoadOutcome:
        return LoadOutcome(loaded=self.loaded_count, failed=self.failed_count)

    async def load_one(self, request: LoadRequest) -> ImageHandle:
        """Fetch, decode and store one image.

        Raises :class:`LoadError` on failure, in which case nothing is
        written and any previous entry for the key stays in place.
        """

        try:
            image = decode_image(await self._fetch_bytes(request.path), request.path)
        except LoadError as exc:
            self.failed_count += 1
            LOGGER.warning("Failed to load asset %s: %s", request.path, exc.reason)
            raise
        self.store.put(request.category, request.name, image)
        self.loaded_count += 1
        LOGGER.debug("Loaded %s/%s from %s", request.category.value, request.name, request.path)
        return image

    async def load_many(self, requests: Iterable[LoadRequest]) -> LoadOutcome:
        """Start every request at once and wait for all of them to settle.

        A failing request never affects the others. The returned counters
        are read only after the whole batch has finished.
        """

        batch: List[LoadRequest] = list(requests)
        tasks = [asyncio.create_task(self.load_one(request)) for request in batch]
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for result in results:
            # LoadErrors were already counted and logged by load_one.
            if isinstance(result, BaseException) and not isinstance(result, LoadError):
                raise result
        outcome = self.outcome()
        LOGGER.info(
            "Asset batch of %d settled: %d loaded, %d failed in total",
            len(batch),
            outcome.loaded,
            outcome.failed,
        )
        return outcome

    async def _fetch_bytes(self, path: str) -> bytes:
        try:
            return await self._fetch(path)
        except LoadError:
            raise
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # fetchers are external code; any failure means unreachable
            raise LoadError(path, str(exc) or type(exc).__name__) from exc


# ---------------------------------------------------------------------------
# Request catalogs
# ---------------------------------------------------------------------------
def _request(root: Path, category: Category, file_stem: str, name: str) -> LoadRequest:
    path = root / category.value / f"{file_stem}{config.IMAGE_EXTENSION}"
    return LoadRequest(path=path.as_posix(), category=category, name=name)


def default_requests(root: Path = config.ASSET_ROOT) -> List[LoadRequest]:
    """Custom art for every catalog unit, building and terrain tile."""

    catalog: Sequence[tuple[Category, Sequence[str]]] = (
        (Category.UNITS, config.UNIT_NAMES),
        (Category.BUILDINGS, config.BUILDING_NAMES),
        (Category.TERRAIN, config.TERRAIN_NAMES),
    )
    return [_request(root, category, name, name) for category, names in catalog for name in names]


def team_requests(root: Path, team: Team, primary: Team = Team.BLUE) -> List[LoadRequest]:
    """Team-specific art stored as ``<category>/<name><suffix>.png``.

    Primary team files land on the plain names, every other team on the
    suffixed names, matching the layout of synthesized team sprites.
    """

    requests = []
    for category, names in ((Category.UNITS, config.UNIT_NAMES), (Category.BUILDINGS, config.BUILDING_NAMES)):
        for name in names:
            key_name = name if team is primary else team.variant_name(name)
            requests.append(_request(root, category, team.variant_name(name), key_name))
    return requests
