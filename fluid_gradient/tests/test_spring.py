from __future__ import annotations

import math

import pytest

from fluid_gradient.errors import InvalidState
from fluid_gradient.spring import SpringInterpolator, SpringParameters, SpringTrajectory


def test_parameters_follow_speed() -> None:
    params = SpringParameters.for_speed(2.0)

    assert params.mass == pytest.approx(5.0)
    assert params.duration_s == pytest.approx(0.5)
    assert params.stiffness == pytest.approx(2880.0)
    assert params.damping == pytest.approx(240.0)
    assert params.damping_ratio == pytest.approx(1.0)


@pytest.mark.parametrize("speed", [0.0, -1.0, math.nan])
def test_non_positive_speed_starts_nothing(speed: float) -> None:
    assert SpringInterpolator.for_speed(speed) is None


def test_constructor_rejects_non_positive_speed() -> None:
    with pytest.raises(ValueError):
        SpringInterpolator(0.0)


def test_scalar_trajectory_endpoints() -> None:
    spring = SpringInterpolator(1.0)
    trajectory = spring.start(0.5, 1.0, now_s=10.0)

    assert trajectory.sample(9.0) == 0.5
    assert trajectory.sample(10.0) == 0.5
    assert trajectory.sample(11.0) == 1.0
    assert trajectory.sample(50.0) == 1.0
    assert trajectory.target == 1.0


def test_vector_trajectory_interpolates_each_component() -> None:
    trajectory = SpringInterpolator(1.0).start((0.0, 1.0), (1.0, 0.0), now_s=0.0)

    x, y = trajectory.sample(0.5)

    assert isinstance(trajectory.sample(0.5), tuple)
    assert x == pytest.approx(1.0 - y)
    assert trajectory.sample(1.0) == (1.0, 0.0)


def test_trajectory_moves_towards_target() -> None:
    trajectory = SpringInterpolator(1.0).start(0.0, 1.0, now_s=0.0)

    early = trajectory.sample(0.05)
    later = trajectory.sample(0.4)

    assert 0.0 < early < later


def test_faster_speed_is_shorter() -> None:
    slow = SpringInterpolator(0.5).start(0.0, 1.0, now_s=0.0)
    fast = SpringInterpolator(4.0).start(0.0, 1.0, now_s=0.0)

    assert slow.end_s == pytest.approx(2.0)
    assert fast.end_s == pytest.approx(0.25)
    assert fast.finished(0.3)
    assert not slow.finished(0.3)


@pytest.mark.parametrize(
    "mass,damping",
    [
        (10.0, 50.0),  # under-damped
        (6.25, 50.0),  # critically damped
        (1.0, 50.0),  # over-damped
    ],
)
def test_displacement_starts_at_rest_and_decays(mass: float, damping: float) -> None:
    params = SpringParameters(
        mass=mass, stiffness=100.0, damping=damping, duration_s=10.0
    )

    assert params.displacement(0.0) == 1.0
    assert params.displacement(1e-6) == pytest.approx(1.0, abs=1e-6)
    assert abs(params.displacement(8.0)) < 0.05


@pytest.mark.parametrize("speed", [0.25, 0.5, 1.0, 2.0, 8.0])
def test_trajectory_has_settled_before_it_ends(speed: float) -> None:
    trajectory = SpringInterpolator(speed).start(0.0, 1.0, now_s=3.0)

    assert trajectory.params.damping_ratio == pytest.approx(1.0)
    assert abs(trajectory.sample(trajectory.end_s - 1e-9) - 1.0) < 1e-3
    assert trajectory.params.progress(trajectory.params.duration_s * 0.999) > 0.0


def test_sample_at_end_returns_target_exactly() -> None:
    trajectory = SpringInterpolator(3.0).start((0.1, 0.7), (0.9, 0.2), now_s=0.1)

    assert trajectory.finished(trajectory.end_s)
    assert trajectory.sample(trajectory.end_s) == (0.9, 0.2)


def test_critical_damping_ratio() -> None:
    params = SpringParameters(mass=6.25, stiffness=100.0, damping=50.0, duration_s=1.0)

    assert params.damping_ratio == pytest.approx(1.0)


@pytest.mark.parametrize(
    "from_value,to_value",
    [
        (math.nan, 1.0),
        (0.0, math.inf),
        ((0.0, math.nan), (1.0, 1.0)),
    ],
)
def test_non_finite_values_are_invalid(from_value, to_value) -> None:
    with pytest.raises(InvalidState):
        SpringInterpolator(1.0).start(from_value, to_value, now_s=0.0)


def test_mismatched_components_are_invalid() -> None:
    with pytest.raises(InvalidState):
        SpringTrajectory(
            (0.0, 0.0),
            (1.0, 1.0, 1.0),
            start_s=0.0,
            params=SpringParameters.for_speed(1.0),
        )
