"""Value types shared by every part of the asset subsystem."""
from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Tuple, Union

import pygame

RGB = Tuple[int, int, int]
RGBA = Tuple[int, int, int, int]


class Category(str, Enum):
    """Closed set of asset kinds a store is partitioned into."""

    UNITS = "units"
    BUILDINGS = "buildings"
    TERRAIN = "terrain"
    EFFECTS = "effects"


class Team(str, Enum):
    """Team palettes. Values double as the variant name suffix stem."""

    BLUE = "blue"
    RED = "red"

    @property
    def suffix(self) -> str:
        return f"_{self.value}"

    def variant_name(self, base_name: str) -> str:
        return f"{base_name}{self.suffix}"


@dataclass(frozen=True, slots=True)
class ColorSpec:
    """Immutable 8-bit RGB colour."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not isinstance(channel, int) or not 0 <= channel <= 255:
                raise ValueError(f"Colour channels must be integers in [0, 255], got {channel!r}")

    @classmethod
    def from_hex(cls, value: str) -> "ColorSpec":
        """Parse ``#rrggbb`` or the short ``#rgb`` form."""

        digits = value[1:] if value.startswith("#") else value
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        if len(digits) != 6:
            raise ValueError(f"Invalid hex colour: {value!r}")
        try:
            return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
        except ValueError as exc:
            raise ValueError(f"Invalid hex colour: {value!r}") from exc

    @classmethod
    def parse(cls, value: "ColorLike") -> "ColorSpec":
        if isinstance(value, ColorSpec):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        r, g, b = value
        return cls(r, g, b)

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    @property
    def rgb(self) -> RGB:
        return (self.r, self.g, self.b)

    def rgba(self, alpha: int = 255) -> RGBA:
        return (self.r, self.g, self.b, alpha)


ColorLike = Union[ColorSpec, str, Tuple[int, int, int]]


@dataclass(frozen=True, slots=True)
class AssetKey:
    """Address of an image inside the store."""

    category: Category
    name: str

    def variant(self, team: Team) -> "AssetKey":
        return AssetKey(self.category, team.variant_name(self.name))


@dataclass(frozen=True)
class ImageHandle:
    """Immutable RGBA raster.

    ``pixels`` holds ``width * height * 4`` bytes in row-major RGBA order.
    Two handles compare equal exactly when their sizes and pixels match.
    """

    width: int
    height: int
    pixels: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Image dimensions must be positive")
        if len(self.pixels) != self.width * self.height * 4:
            raise ValueError("Pixel buffer does not match image dimensions")

    @classmethod
    def from_surface(cls, surface: pygame.Surface) -> "ImageHandle":
        width, height = surface.get_size()
        return cls(width=width, height=height, pixels=pygame.image.tobytes(surface, "RGBA"))

    def to_surface(self) -> pygame.Surface:
        """Return a fresh surface; mutating it never affects the handle."""

        return pygame.image.frombytes(self.pixels, self.size, "RGBA")

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def pixel_at(self, x: int, y: int) -> RGBA:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        offset = (y * self.width + x) * 4
        r, g, b, a = self.pixels[offset : offset + 4]
        return (r, g, b, a)

    def digest(self) -> str:
        hasher = hashlib.sha256()
        hasher.update(f"{self.width}x{self.height}".encode("ascii"))
        hasher.update(self.pixels)
        return hasher.hexdigest()


@dataclass(frozen=True, slots=True)
class LoadRequest:
    """Declarative unit of loading work: fetch ``path`` into ``(category, name)``."""

    path: str
    category: Category
    name: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "category", Category(self.category))

    @classmethod
    def from_dict(cls, payload: Mapping[str, str]) -> "LoadRequest":
        return cls(
            path=str(payload["path"]),
            category=payload["category"],
            name=str(payload["name"]),
        )

    @property
    def key(self) -> AssetKey:
        return AssetKey(self.category, self.name)


@dataclass(frozen=True, slots=True)
class LoadOutcome:
    """Aggregate counters of a loader session."""

    loaded: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.loaded + self.failed

    def as_dict(self) -> Dict[str, int]:
        return {"loaded": self.loaded, "failed": self.failed}
