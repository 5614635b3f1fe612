"""Keyed image cache partitioned by asset category."""
from __future__ import annotations

from typing import Dict, Iterator, Optional, Union

from .models import AssetKey, Category, ImageHandle

CategoryLike = Union[Category, str]


def _coerce(category: CategoryLike) -> Optional[Category]:
    if isinstance(category, Category):
        return category
    try:
        return Category(category)
    except ValueError:
        return None


class AssetStore:
    """Maps ``(category, name)`` to exactly one image.

    ``put`` is the only mutator and always replaces. Reads are total:
    an unknown category or name is reported as absent, never raised.
    """

    def __init__(self) -> None:
        self._assets: Dict[Category, Dict[str, ImageHandle]] = {category: {} for category in Category}

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def put(self, category: CategoryLike, name: str, image: ImageHandle) -> None:
        resolved = _coerce(category)
        if resolved is None:
            raise ValueError(f"Unknown asset category: {category!r}")
        if not isinstance(image, ImageHandle):
            raise TypeError(f"Expected ImageHandle, got {type(image).__name__}")
        self._assets[resolved][name] = image

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get(self, category: CategoryLike, name: str) -> Optional[ImageHandle]:
        resolved = _coerce(category)
        if resolved is None:
            return None
        return self._assets[resolved].get(name)

    def has(self, category: CategoryLike, name: str) -> bool:
        return self.get(category, name) is not None

    def list_category(self, category: CategoryLike) -> Dict[str, ImageHandle]:
        """Return a snapshot of one category; changing it leaves the store intact."""

        resolved = _coerce(category)
        if resolved is None:
            return {}
        return dict(self._assets[resolved])

    def counts(self) -> Dict[Category, int]:
        return {category: len(images) for category, images in self._assets.items()}

    def keys(self) -> Iterator[AssetKey]:
        for category, images in self._assets.items():
            for name in images:
                yield AssetKey(category, name)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, AssetKey) and self.has(key.category, key.name)

    def __len__(self) -> int:
        return sum(len(images) for images in self._assets.values())
