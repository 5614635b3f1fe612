"""Offscreen drawing surfaces used by the sprite recipes.

Recipes only talk to the :class:`DrawingSurface` protocol. The default
backend rasterises with ``pygame.draw`` onto a per-pixel-alpha surface and
needs no display, so it runs unchanged in headless servers and tests.
"""
from __future__ import annotations

import contextlib
import math
from typing import Callable, Iterable, Iterator, Protocol, Tuple

import pygame

from .models import ColorLike, ColorSpec, ImageHandle, RGBA

Point = Tuple[float, float]

ARC_SEGMENTS = 32


class SynthesisError(RuntimeError):
    """A drawing primitive failed. Always a bug in the calling recipe."""


class DrawingSurface(Protocol):
    """Vector drawing operations a sprite recipe may use.

    Later operations occlude earlier ones. ``set_alpha`` sets a global
    opacity in ``[0, 1]`` applied to every following primitive.
    """

    width: int
    height: int

    def fill_rect(self, x: float, y: float, w: float, h: float, color: ColorLike) -> None: ...

    def stroke_rect(
        self, x: float, y: float, w: float, h: float, color: ColorLike, width: float = 1
    ) -> None: ...

    def fill_circle(self, cx: float, cy: float, radius: float, color: ColorLike) -> None: ...

    def fill_ellipse(self, cx: float, cy: float, rx: float, ry: float, color: ColorLike) -> None: ...

    def fill_arc(
        self, cx: float, cy: float, radius: float, start: float, end: float, color: ColorLike
    ) -> None: ...

    def stroke_line(
        self, x1: float, y1: float, x2: float, y2: float, color: ColorLike, width: float = 1
    ) -> None: ...

    def fill_polygon(self, points: Iterable[Point], color: ColorLike) -> None: ...

    def set_alpha(self, alpha: float) -> None: ...

    def export_image(self) -> ImageHandle: ...


SurfaceFactory = Callable[[int, int], DrawingSurface]


def _px(value: float) -> int:
    return math.floor(value + 0.5)


def _line_width(width: float) -> int:
    return max(1, _px(width))


def _rect(x: float, y: float, w: float, h: float) -> pygame.Rect:
    return pygame.Rect(_px(x), _px(y), _px(w), _px(h))


@contextlib.contextmanager
def translucent(surface: DrawingSurface, alpha: float) -> Iterator[DrawingSurface]:
    """Draw with ``alpha`` opacity inside the block, then return to opaque."""

    surface.set_alpha(alpha)
    try:
        yield surface
    finally:
        surface.set_alpha(1.0)


def arc_points(cx: float, cy: float, radius: float, start: float, end: float) -> list[Point]:
    """Points along a clockwise (screen space) arc from ``start`` to ``end`` radians."""

    sweep = end - start
    if sweep <= 0:
        sweep += 2 * math.pi
    points = []
    for step in range(ARC_SEGMENTS + 1):
        angle = start + sweep * step / ARC_SEGMENTS
        points.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    return points


class PygameSurface:
    """Software raster backend built on ``pygame.draw``."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise SynthesisError(f"Surface size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._canvas = pygame.Surface((width, height), pygame.SRCALPHA)
        self._alpha = 1.0

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    def set_alpha(self, alpha: float) -> None:
        if not 0.0 <= alpha <= 1.0:
            raise SynthesisError(f"Alpha must be within [0, 1], got {alpha}")
        self._alpha = alpha

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------
    def fill_rect(self, x: float, y: float, w: float, h: float, color: ColorLike) -> None:
        self._draw(color, lambda target, rgba: pygame.draw.rect(target, rgba, _rect(x, y, w, h)))

    def stroke_rect(
        self, x: float, y: float, w: float, h: float, color: ColorLike, width: float = 1
    ) -> None:
        self._draw(
            color,
            lambda target, rgba: pygame.draw.rect(target, rgba, _rect(x, y, w, h), _line_width(width)),
        )

    def fill_circle(self, cx: float, cy: float, radius: float, color: ColorLike) -> None:
        self._draw(color, lambda target, rgba: pygame.draw.circle(target, rgba, (cx, cy), radius))

    def fill_ellipse(self, cx: float, cy: float, rx: float, ry: float, color: ColorLike) -> None:
        self._draw(
            color,
            lambda target, rgba: pygame.draw.ellipse(target, rgba, _rect(cx - rx, cy - ry, 2 * rx, 2 * ry)),
        )

    def fill_arc(
        self, cx: float, cy: float, radius: float, start: float, end: float, color: ColorLike
    ) -> None:
        # The arc is closed by the chord between its end points.
        self.fill_polygon(arc_points(cx, cy, radius, start, end), color)

    def stroke_line(
        self, x1: float, y1: float, x2: float, y2: float, color: ColorLike, width: float = 1
    ) -> None:
        self._draw(
            color,
            lambda target, rgba: pygame.draw.line(target, rgba, (x1, y1), (x2, y2), _line_width(width)),
        )

    def fill_polygon(self, points: Iterable[Point], color: ColorLike) -> None:
        vertices = list(points)
        if len(vertices) < 3:
            raise SynthesisError("A polygon needs at least three vertices")
        self._draw(color, lambda target, rgba: pygame.draw.polygon(target, rgba, vertices))

    def export_image(self) -> ImageHandle:
        return ImageHandle.from_surface(self._canvas)

    # ------------------------------------------------------------------
    # Compositing
    # ------------------------------------------------------------------
    def _draw(self, color: ColorLike, primitive: Callable[[pygame.Surface, RGBA], object]) -> None:
        try:
            rgba = ColorSpec.parse(color).rgba(_px(self._alpha * 255))
            if rgba[3] == 255:
                primitive(self._canvas, rgba)
                return
            # Translucent draws go through a scratch layer so they blend
            # with what is already on the canvas instead of replacing it.
            layer = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
            primitive(layer, rgba)
            self._canvas.blit(layer, (0, 0))
        except (pygame.error, TypeError, ValueError) as exc:
            raise SynthesisError(f"Drawing primitive failed: {exc}") from exc
