from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtGui import QColor

STOP_LOCATIONS: tuple[float, float, float] = (0.0, 0.9, 1.0)


@dataclass(frozen=True)
class ColorStops:
    """Radial ramp for one blob: solid centre fading out at the edge."""

    colors: tuple[QColor, QColor, QColor]
    locations: tuple[float, float, float] = STOP_LOCATIONS


def to_qcolor(color: QColor | str) -> QColor:
    c = QColor(color)
    if not c.isValid():
        raise ValueError(f"Unrecognized color: {color!r}")
    return c


def color_stops(color: QColor | str) -> ColorStops:
    c = to_qcolor(color)
    transparent = QColor(c)
    transparent.setAlpha(0)
    return ColorStops(colors=(QColor(c), QColor(c), transparent))
