"""Shared test fixtures and utilities."""

from __future__ import annotations

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start_s: float = 0.0) -> None:
        self.now_s = float(start_s)

    def __call__(self) -> float:
        return self.now_s

    def advance(self, dt_s: float) -> float:
        self.now_s += float(dt_s)
        return self.now_s


class Visibility:
    def __init__(self, visible: bool = True) -> None:
        self.visible = visible
        self.queries = 0

    def __call__(self) -> bool:
        self.queries += 1
        return self.visible


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def visibility() -> Visibility:
    return Visibility()


@pytest.fixture
def qt_app():
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


def geometry_snapshot(layer) -> list[tuple[float, float, float, float, float]]:
    """Logical (center, offset, opacity) per blob of a layer."""
    return [
        (
            blob.geometry.center.x,
            blob.geometry.center.y,
            blob.geometry.offset.x,
            blob.geometry.offset.y,
            blob.opacity,
        )
        for blob in layer.blobs
    ]


def frame_snapshot(frame) -> list[tuple[str, int, float, float, float, float, float]]:
    rows = []
    for layer in frame.layers:
        for index, blob in enumerate(layer.blobs):
            rows.append(
                (
                    layer.name,
                    index,
                    blob.center.x,
                    blob.center.y,
                    blob.edge_offset.x,
                    blob.edge_offset.y,
                    blob.opacity,
                )
            )
    return rows
