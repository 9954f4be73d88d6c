from __future__ import annotations

from PySide6.QtGui import QColor

from fluid_gradient.colors import ColorStops
from fluid_gradient.colors import color_stops
from fluid_gradient.colors import to_qcolor
from fluid_gradient.geometry import BlobGeometry
from fluid_gradient.geometry import Point2D
from fluid_gradient.spring import SpringInterpolator
from fluid_gradient.spring import SpringTrajectory


class Blob:
    """One radial-gradient blob.

    `geometry` and `opacity` are the logical state: always the latest target.
    The spring trajectories only shape what a renderer sees between targets;
    sample them through the `presented_*` methods.
    """

    def __init__(
        self, color: QColor | str, geometry: BlobGeometry, opacity: float = 1.0
    ) -> None:
        self.geometry = geometry
        self.opacity = float(opacity)
        self._color = to_qcolor(color)
        self._stops = color_stops(self._color)
        self._center_anim: SpringTrajectory | None = None
        self._offset_anim: SpringTrajectory | None = None
        self._opacity_anim: SpringTrajectory | None = None

    @property
    def color(self) -> QColor:
        return QColor(self._color)

    @property
    def stops(self) -> ColorStops:
        return self._stops

    def set_color(self, color: QColor | str) -> None:
        self._color = to_qcolor(color)
        self._stops = color_stops(self._color)

    def is_animating(self, now_s: float | None = None) -> bool:
        anims = self._trajectories()
        if not anims:
            return False
        if now_s is None:
            return True
        return any(not anim.finished(now_s) for anim in anims)

    def presented_center(self, now_s: float) -> Point2D:
        if self._center_anim is None:
            return self.geometry.center
        return Point2D.from_tuple(self._center_anim.sample(now_s))

    def presented_offset(self, now_s: float) -> Point2D:
        if self._offset_anim is None:
            return self.geometry.offset
        return Point2D.from_tuple(self._offset_anim.sample(now_s))

    def presented_opacity(self, now_s: float) -> float:
        if self._opacity_anim is None:
            return self.opacity
        return float(self._opacity_anim.sample(now_s))

    def animate_to(
        self,
        geometry: BlobGeometry,
        opacity: float,
        *,
        interpolator: SpringInterpolator,
        now_s: float,
    ) -> None:
        # Springs restart from what is on screen, not from the previous target.
        center_from = self.presented_center(now_s)
        offset_from = self.presented_offset(now_s)
        opacity_from = self.presented_opacity(now_s)

        self._center_anim = interpolator.start(
            center_from.as_tuple(), geometry.center.as_tuple(), now_s
        )
        self._offset_anim = interpolator.start(
            offset_from.as_tuple(), geometry.offset.as_tuple(), now_s
        )
        self._opacity_anim = interpolator.start(opacity_from, float(opacity), now_s)

        self.geometry = geometry
        self.opacity = float(opacity)

    def settle(self, now_s: float) -> bool:
        """Drop trajectories that have finished; return True when none remain."""
        if self._center_anim is not None and self._center_anim.finished(now_s):
            self._center_anim = None
        if self._offset_anim is not None and self._offset_anim.finished(now_s):
            self._offset_anim = None
        if self._opacity_anim is not None and self._opacity_anim.finished(now_s):
            self._opacity_anim = None
        return not self._trajectories()

    def cancel_animations(self) -> None:
        self._center_anim = None
        self._offset_anim = None
        self._opacity_anim = None

    def _trajectories(self) -> list[SpringTrajectory]:
        return [
            anim
            for anim in (self._center_anim, self._offset_anim, self._opacity_anim)
            if anim is not None
        ]
