"""Damped-spring interpolation between two blob states.

The trajectory follows a unit mass-spring-damper released from rest:

    m x'' + c x' + k x = 0,    x(0) = 1,    x'(0) = 0

and maps the normalized displacement onto the value range, so the value
starts at `from` and settles on `to`. Higher speeds lower the mass and
shorten the nominal duration, which makes transitions snappier.

The spring is critically damped and stiff enough to have settled within
its duration; the residual displacement at the end is removed so the curve
lands on `to` exactly when the duration runs out.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from fluid_gradient.errors import InvalidState

SpringValue = Union[float, tuple[float, ...]]

MASS_FACTOR = 10.0
DAMPING_RATIO = 1.0
# Natural frequency times duration; e^-12 * 13 leaves < 1e-4 of the travel.
SETTLE_FACTOR = 12.0


@dataclass(frozen=True)
class SpringParameters:
    mass: float
    stiffness: float
    damping: float
    duration_s: float

    @classmethod
    def for_speed(cls, speed: float) -> SpringParameters:
        speed = float(speed)
        mass = MASS_FACTOR / speed
        stiffness = mass * (SETTLE_FACTOR * speed) ** 2
        return cls(
            mass=mass,
            stiffness=stiffness,
            damping=2.0 * DAMPING_RATIO * math.sqrt(stiffness * mass),
            duration_s=1.0 / speed,
        )

    @property
    def natural_frequency(self) -> float:
        return math.sqrt(self.stiffness / self.mass)

    @property
    def damping_ratio(self) -> float:
        return self.damping / (2.0 * math.sqrt(self.stiffness * self.mass))

    def displacement(self, t: float) -> float:
        """Normalized displacement at `t` seconds; 1 at rest start, 0 settled."""
        if t <= 0.0:
            return 1.0
        w0 = self.natural_frequency
        zeta = self.damping_ratio
        if math.isclose(zeta, 1.0, rel_tol=1e-9):
            return math.exp(-w0 * t) * (1.0 + w0 * t)
        if zeta < 1.0:
            wd = w0 * math.sqrt(1.0 - zeta * zeta)
            envelope = math.exp(-zeta * w0 * t)
            return envelope * (
                math.cos(wd * t) + (zeta * w0 / wd) * math.sin(wd * t)
            )
        root = math.sqrt(zeta * zeta - 1.0)
        r1 = -w0 * (zeta - root)
        r2 = -w0 * (zeta + root)
        return (r2 * math.exp(r1 * t) - r1 * math.exp(r2 * t)) / (r2 - r1)

    def progress(self, t: float) -> float:
        """Displacement rescaled to reach exactly 0 at `duration_s`."""
        if t >= self.duration_s:
            return 0.0
        residual = self.displacement(self.duration_s)
        if residual >= 1.0:
            return self.displacement(t)
        return (self.displacement(t) - residual) / (1.0 - residual)


def _as_components(value: SpringValue, label: str) -> tuple[float, ...]:
    if isinstance(value, tuple):
        components = tuple(float(v) for v in value)
    else:
        components = (float(value),)
    if not components:
        raise InvalidState(f"{label} value has no components")
    for component in components:
        if not math.isfinite(component):
            raise InvalidState(f"{label} value is not finite: {value!r}")
    return components


class SpringTrajectory:
    """Time-sampled path from one value to another along a damped spring."""

    def __init__(
        self,
        from_value: SpringValue,
        to_value: SpringValue,
        *,
        start_s: float,
        params: SpringParameters,
    ) -> None:
        start = _as_components(from_value, "from")
        end = _as_components(to_value, "to")
        if len(start) != len(end):
            raise InvalidState(
                f"from/to component counts differ: {len(start)} != {len(end)}"
            )
        self._scalar = not isinstance(to_value, tuple)
        self._from = start
        self._to = end
        self.start_s = float(start_s)
        self.params = params

    @property
    def end_s(self) -> float:
        return self.start_s + self.params.duration_s

    @property
    def target(self) -> SpringValue:
        return self._shape(self._to)

    def finished(self, now_s: float) -> bool:
        return float(now_s) >= self.end_s

    def sample(self, now_s: float) -> SpringValue:
        now_s = float(now_s)
        if now_s <= self.start_s:
            return self._shape(self._from)
        if now_s >= self.end_s:
            return self._shape(self._to)
        x = self.params.progress(now_s - self.start_s)
        return self._shape(
            tuple(b + (a - b) * x for a, b in zip(self._from, self._to))
        )

    def _shape(self, components: tuple[float, ...]) -> SpringValue:
        return components[0] if self._scalar else components


class SpringInterpolator:
    """Starts spring trajectories for a given animation speed."""

    def __init__(self, speed: float) -> None:
        self.speed = float(speed)
        if not math.isfinite(self.speed) or self.speed <= 0.0:
            raise ValueError(f"spring speed must be positive: {speed!r}")
        self.params = SpringParameters.for_speed(self.speed)

    @classmethod
    def for_speed(cls, speed: float) -> SpringInterpolator | None:
        speed = float(speed)
        if not math.isfinite(speed) or speed <= 0.0:
            return None
        return cls(speed)

    def start(
        self, from_value: SpringValue, to_value: SpringValue, now_s: float
    ) -> SpringTrajectory:
        return SpringTrajectory(
            from_value, to_value, start_s=now_s, params=self.params
        )
