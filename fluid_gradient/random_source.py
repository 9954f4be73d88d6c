"""Deterministic random source shared by every blob in a scene."""

from __future__ import annotations

import hashlib
import math
import random

from fluid_gradient.errors import InvalidRange


def derive_seed(seed: int, index: int) -> int:
    """Derive a child seed from a parent seed and a blob index."""
    key = f"{int(seed)}:{int(index)}"
    return int(hashlib.sha256(key.encode()).hexdigest()[:16], 16)


class SeededRandom:
    """Mersenne Twister stream that can be reset to reproduce a sequence.

    A scene owns exactly one instance and draws every position, size, opacity
    and timer period from it, so a fixed seed replays the whole animation.
    The stream is not synchronized; draw from it on one thread only, or hand
    each parallel worker its own `substream`.
    """

    def __init__(self, seed: int = 0) -> None:
        self._rng = random.Random()
        self._seed = 0
        self.seed(seed)

    @property
    def current_seed(self) -> int:
        return self._seed

    def seed(self, value: int) -> None:
        self._seed = int(value)
        self._rng.seed(self._seed)

    def uniform(self, low: float, high: float) -> float:
        low = float(low)
        high = float(high)
        if not (math.isfinite(low) and math.isfinite(high)):
            raise InvalidRange(f"range bounds must be finite: [{low}, {high}]")
        if low > high:
            raise InvalidRange(f"range is empty: low {low} > high {high}")
        return self._rng.uniform(low, high)

    def percent(self, lowest: float, highest: float, scale: float) -> float:
        """Draw over `[lowest, highest]` and divide by `scale`.

        Geometry ranges are expressed on integer scales (15..75 of 100 for a
        size, 5..10 of 10 for an opacity); this keeps them readable.
        """
        return self.uniform(lowest, highest) / float(scale)

    def substream(self, index: int) -> SeededRandom:
        return SeededRandom(derive_seed(self._seed, index))
