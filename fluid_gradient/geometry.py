"""Blob geometry and the random draws that produce new blob targets.

Coordinates are unit-normalized: (0, 0) is one corner of the canvas and
(1, 1) the opposite one. A blob centre is always kept inside that square,
while its edge (centre displaced by the offset) may fall outside it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from fluid_gradient.random_source import SeededRandom


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class Point2D:
    x: float
    y: float

    def capped(self) -> Point2D:
        return Point2D(_clamp(self.x, 0.0, 1.0), _clamp(self.y, 0.0, 1.0))

    def displace(self, by: Point2D) -> Point2D:
        return Point2D(self.x + by.x, self.y + by.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, values: tuple[float, ...]) -> Point2D:
        return cls(float(values[0]), float(values[1]))


@dataclass(frozen=True)
class BlobGeometry:
    """Gradient focal point plus the vector from it to the outer edge."""

    center: Point2D
    offset: Point2D

    @property
    def end_point(self) -> Point2D:
        return self.center.displace(self.offset)


def safe_aspect_ratio(width: float, height: float) -> float:
    """Return `width / height`; a zero height yields a non-finite ratio."""
    width = float(width)
    height = float(height)
    if height == 0.0:
        return math.nan if width == 0.0 else math.copysign(math.inf, width)
    return width / height


def effective_aspect_ratio(aspect_ratio: float) -> float:
    ratio = float(aspect_ratio)
    if not math.isfinite(ratio):
        ratio = 1.0
    return max(ratio, 1.0)


def random_position(rng: SeededRandom) -> Point2D:
    return Point2D(rng.uniform(0.0, 1.0), rng.uniform(0.0, 1.0)).capped()


def random_offset(rng: SeededRandom, aspect_ratio: float) -> Point2D:
    """Draw an edge offset; y scales with the canvas aspect and a random factor.

    Canvases taller than wide are treated as square so blobs never become
    narrower than tall relative to the canvas.
    """
    size = rng.percent(15, 75, 100)
    ratio = effective_aspect_ratio(aspect_ratio) * rng.percent(25, 175, 100)
    return Point2D(size, size * ratio)


def random_opacity(rng: SeededRandom) -> float:
    return rng.percent(5, 10, 10)


def random_geometry(rng: SeededRandom, aspect_ratio: float) -> BlobGeometry:
    center = random_position(rng)
    offset = random_offset(rng, aspect_ratio)
    return BlobGeometry(center=center, offset=offset)
