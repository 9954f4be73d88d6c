"""Per-blob transition scheduling.

Every blob runs its own repeating timer whose period is drawn from the scene
random source, so blobs never move in unison. When the timer fires the blob
gets a fresh random target and springs towards it.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Callable

from fluid_gradient.blob import Blob
from fluid_gradient.geometry import random_geometry
from fluid_gradient.geometry import random_opacity
from fluid_gradient.random_source import SeededRandom
from fluid_gradient.spring import SpringInterpolator

logger = logging.getLogger(__name__)

PERIOD_RANGE: tuple[float, float] = (0.8, 1.2)


class AnimatorState(Enum):
    IDLE = "idle"
    TRANSITIONING = "transitioning"
    STOPPED = "stopped"


class BlobAnimator:
    def __init__(self, blob: Blob, rng: SeededRandom) -> None:
        self.blob = blob
        self._rng = rng
        self._state = AnimatorState.STOPPED
        self._interpolator: SpringInterpolator | None = None
        self._period_s: float | None = None
        self._next_due_s: float | None = None

    @property
    def state(self) -> AnimatorState:
        return self._state

    @property
    def period_s(self) -> float | None:
        return self._period_s

    @property
    def next_due_s(self) -> float | None:
        return self._next_due_s

    def cancel(self) -> None:
        """Forget the pending trigger and any in-flight springs."""
        self._period_s = None
        self._next_due_s = None
        self.blob.cancel_animations()
        if self._state is AnimatorState.TRANSITIONING:
            self._state = AnimatorState.IDLE

    def stop(self) -> None:
        self.cancel()
        self._interpolator = None
        self._state = AnimatorState.STOPPED

    def restart(self, speed: float, now_s: float) -> None:
        self.cancel()
        interpolator = SpringInterpolator.for_speed(speed)
        if interpolator is None:
            self._interpolator = None
            self._state = AnimatorState.STOPPED
            return
        self._interpolator = interpolator
        low, high = PERIOD_RANGE
        self._period_s = self._rng.uniform(low, high) / interpolator.speed
        self._next_due_s = float(now_s) + self._period_s
        self._state = AnimatorState.IDLE

    def advance(
        self,
        now_s: float,
        *,
        is_visible: Callable[[], bool],
        aspect_ratio: float,
    ) -> bool:
        """Run the scheduled transition if due; return True if one started.

        Missed occurrences are coalesced into a single trigger. A trigger that
        lands while the canvas is hidden is skipped, and the blob waits for
        its next occurrence.
        """
        now_s = float(now_s)
        if self._state is AnimatorState.TRANSITIONING and self.blob.settle(now_s):
            self._state = AnimatorState.IDLE

        if (
            self._state is AnimatorState.STOPPED
            or self._interpolator is None
            or self._period_s is None
            or self._next_due_s is None
            or now_s < self._next_due_s
        ):
            return False

        missed = math.floor((now_s - self._next_due_s) / self._period_s) + 1
        due = self._next_due_s + missed * self._period_s
        if due <= now_s:
            due = math.nextafter(now_s, math.inf)
        self._next_due_s = due

        if not is_visible():
            logger.debug(
                "blob trigger skipped while hidden (next at %.3fs)", self._next_due_s
            )
            return False

        self._transition(now_s, aspect_ratio, self._interpolator)
        return True

    def _transition(
        self, now_s: float, aspect_ratio: float, interpolator: SpringInterpolator
    ) -> None:
        geometry = random_geometry(self._rng, aspect_ratio)
        opacity = random_opacity(self._rng)
        self.blob.animate_to(
            geometry, opacity, interpolator=interpolator, now_s=now_s
        )
        self._state = AnimatorState.TRANSITIONING
