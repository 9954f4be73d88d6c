from __future__ import annotations

import logging

from PySide6.QtCore import QObject
from PySide6.QtCore import QTimer
from PySide6.QtCore import Signal

from fluid_gradient.scene import GradientScene
from fluid_gradient.scene import SceneFrame

logger = logging.getLogger(__name__)


class GradientDriver(QObject):
    """Ticks a scene from the Qt event loop and publishes the frames.

    Connect `frame_ready` to whatever rasterizes the blobs and
    `canvas_metric_changed` to whatever derives a blur radius.
    """

    frame_ready = Signal(object)
    canvas_metric_changed = Signal(float)

    DEFAULT_INTERVAL_MS = 16

    def __init__(
        self,
        scene: GradientScene,
        *,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._scene = scene
        self._last_frame: SceneFrame | None = None
        self._timer = QTimer(self)
        self._timer.setInterval(max(1, int(interval_ms)))
        self._timer.timeout.connect(self._on_timeout)
        self._unsubscribe = scene.subscribe_canvas_metric(
            self.canvas_metric_changed.emit
        )

    @property
    def scene(self) -> GradientScene:
        return self._scene

    @property
    def last_frame(self) -> SceneFrame | None:
        return self._last_frame

    def is_running(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        if self._scene.closed:
            logger.debug("driver start ignored: scene closed")
            return
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def resize(self, width: float, height: float) -> None:
        self._scene.set_canvas_size(width, height)

    def close(self) -> None:
        self._timer.stop()
        self._unsubscribe()
        self._scene.close()

    def _on_timeout(self) -> None:
        self._last_frame = self._scene.tick()
        self.frame_ready.emit(self._last_frame)
