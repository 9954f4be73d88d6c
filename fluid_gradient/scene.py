"""Two-layer fluid gradient scene.

A scene owns a base layer and a highlight layer of blobs, keeps them in step
with the colour lists a consumer supplies, and produces one `SceneFrame` per
`tick` for a renderer to rasterize. All randomness comes from a single seeded
source, so the same seed and the same sequence of calls replay the same
animation.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable
from typing import Iterable
from typing import Sequence
from typing import Union

from PySide6.QtGui import QColor

from fluid_gradient.animator import BlobAnimator
from fluid_gradient.blob import Blob
from fluid_gradient.colors import ColorStops
from fluid_gradient.colors import to_qcolor
from fluid_gradient.geometry import Point2D
from fluid_gradient.geometry import random_geometry
from fluid_gradient.geometry import safe_aspect_ratio
from fluid_gradient.random_source import SeededRandom

logger = logging.getLogger(__name__)

ColorList = Sequence[Union[QColor, str]]


@dataclass(frozen=True)
class BlobFrame:
    center: Point2D
    edge_offset: Point2D
    end_point: Point2D
    opacity: float
    color_stops: ColorStops


@dataclass(frozen=True)
class LayerFrame:
    name: str
    blend_mode: str
    blobs: tuple[BlobFrame, ...]


@dataclass(frozen=True)
class SceneFrame:
    time_s: float
    base: LayerFrame
    highlight: LayerFrame

    @property
    def layers(self) -> tuple[LayerFrame, LayerFrame]:
        return (self.base, self.highlight)


class Layer:
    """Ordered blobs composited together; position matches colour index."""

    def __init__(self, name: str, blend_mode: str) -> None:
        self.name = name
        self.blend_mode = blend_mode
        self.animators: list[BlobAnimator] = []

    def __len__(self) -> int:
        return len(self.animators)

    @property
    def blobs(self) -> list[Blob]:
        return [animator.blob for animator in self.animators]

    def frame(self, now_s: float) -> LayerFrame:
        frames = []
        for blob in self.blobs:
            center = blob.presented_center(now_s)
            offset = blob.presented_offset(now_s)
            frames.append(
                BlobFrame(
                    center=center,
                    edge_offset=offset,
                    end_point=center.displace(offset),
                    opacity=blob.presented_opacity(now_s),
                    color_stops=blob.stops,
                )
            )
        return LayerFrame(
            name=self.name, blend_mode=self.blend_mode, blobs=tuple(frames)
        )


def _always_visible() -> bool:
    return True


class GradientScene:
    def __init__(
        self,
        seed: int = 0,
        *,
        clock: Callable[[], float] = time.monotonic,
        is_visible: Callable[[], bool] | None = None,
        aspect_ratio: float = 1.0,
    ) -> None:
        self._rng = SeededRandom(seed)
        self._clock = clock
        self._is_visible = is_visible or _always_visible
        self._aspect_ratio = float(aspect_ratio)
        self._speed = 0.0
        self._closed = False
        self._canvas_metric: float | None = None
        self._metric_subscribers: list[Callable[[float], None]] = []

        self.base = Layer("base", "normal")
        self.highlight = Layer("highlight", "overlay")

    @property
    def rng(self) -> SeededRandom:
        return self._rng

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def aspect_ratio(self) -> float:
        return self._aspect_ratio

    @property
    def canvas_metric(self) -> float | None:
        return self._canvas_metric

    @property
    def closed(self) -> bool:
        return self._closed

    def animators(self) -> Iterable[BlobAnimator]:
        yield from self.base.animators
        yield from self.highlight.animators

    def reconcile(self, layer: Layer, desired_colors: ColorList) -> None:
        """Match `layer` to `desired_colors` by position.

        Surviving blobs only change colour; extra blobs are dropped from the
        end; missing blobs are appended with random geometry. Reordering the
        colours recolours blobs in place rather than moving them.
        """
        if self._closed:
            logger.debug("reconcile ignored on closed scene")
            return
        colors = [to_qcolor(color) for color in desired_colors]
        old_count = len(layer.animators)
        new_count = len(colors)

        if new_count < old_count:
            for animator in layer.animators[new_count:]:
                animator.stop()
            del layer.animators[new_count:]

        now_s = None
        for index, color in enumerate(colors):
            if index < old_count:
                layer.animators[index].blob.set_color(color)
                continue
            blob = Blob(color, random_geometry(self._rng, self._aspect_ratio))
            animator = BlobAnimator(blob, self._rng)
            if self._speed > 0.0:
                if now_s is None:
                    now_s = float(self._clock())
                animator.restart(self._speed, now_s)
            layer.animators.append(animator)

        logger.debug(
            "reconciled %s layer: %d -> %d blobs", layer.name, old_count, new_count
        )

    def set_layers(self, base_colors: ColorList, highlight_colors: ColorList) -> None:
        self.reconcile(self.base, base_colors)
        self.reconcile(self.highlight, highlight_colors)

    def set_speed(self, speed: float, now_s: float | None = None) -> None:
        """Replace every blob schedule; a speed of zero or less pauses the scene."""
        if self._closed:
            logger.debug("set_speed ignored on closed scene")
            return
        self._speed = float(speed)
        now_s = float(self._clock()) if now_s is None else float(now_s)
        for animator in self.animators():
            animator.restart(self._speed, now_s)
        if self._speed > 0.0:
            logger.debug("scene speed set to %.3f", self._speed)
        else:
            logger.debug("scene paused (speed %.3f)", self._speed)

    def set_aspect_ratio(self, aspect_ratio: float) -> None:
        """Aspect ratio used for geometry drawn from now on."""
        if self._closed:
            logger.debug("set_aspect_ratio ignored on closed scene")
            return
        self._aspect_ratio = float(aspect_ratio)

    def set_canvas_size(self, width: float, height: float) -> None:
        if self._closed:
            logger.debug("set_canvas_size ignored on closed scene")
            return
        self._aspect_ratio = safe_aspect_ratio(width, height)
        metric = float(min(width, height))
        if metric == self._canvas_metric:
            return
        self._canvas_metric = metric
        for callback in list(self._metric_subscribers):
            callback(metric)

    def subscribe_canvas_metric(
        self, callback: Callable[[float], None]
    ) -> Callable[[], None]:
        """Register for `min(width, height)` changes; returns an unsubscribe."""
        self._metric_subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._metric_subscribers:
                self._metric_subscribers.remove(callback)

        return _unsubscribe

    def tick(self, now_s: float | None = None) -> SceneFrame:
        now_s = float(self._clock()) if now_s is None else float(now_s)
        if not self._closed:
            for animator in self.animators():
                animator.advance(
                    now_s,
                    is_visible=self._is_visible,
                    aspect_ratio=self._aspect_ratio,
                )
        return SceneFrame(
            time_s=now_s,
            base=self.base.frame(now_s),
            highlight=self.highlight.frame(now_s),
        )

    def close(self) -> None:
        if self._closed:
            return
        for animator in self.animators():
            animator.stop()
        self.base.animators.clear()
        self.highlight.animators.clear()
        self._metric_subscribers.clear()
        self._speed = 0.0
        self._closed = True
        logger.debug("scene closed")


def create_scene(
    seed: int = 0,
    *,
    blobs: ColorList = (),
    highlights: ColorList = (),
    speed: float = 1.0,
    clock: Callable[[], float] = time.monotonic,
    is_visible: Callable[[], bool] | None = None,
    aspect_ratio: float = 1.0,
) -> GradientScene:
    """Build a scene, populate both layers, then start it at `speed`."""
    scene = GradientScene(
        seed, clock=clock, is_visible=is_visible, aspect_ratio=aspect_ratio
    )
    scene.set_layers(blobs, highlights)
    scene.set_speed(speed)
    return scene
