"""
Circular Motion Projection Tests
================================

Kinematics of the rotating phase model, the SHM projection, the
propagation ring and the plot history.

Run: python -m pytest tests/waves/test_circular.py -v

Oct 2026
"""

import numpy as np
import pytest

from wavefield.circular import (
    CircularMotionProjector,
    PlotHistory,
    phase_difference,
    project,
)


# =============================================================================
# M1: Kinematics
# =============================================================================

@pytest.mark.parametrize("rotation", [0.0, 30.0, 90.0])
def test_position_is_periodic(rotation):
    """M1.1: position(t) == position(t + T) for any t."""
    proj = CircularMotionProjector(period=4.0, radius=60.0, rotation_angle=rotation,
                                   phase_offset=0.3)
    t = np.linspace(-3.0, 17.0, 101)
    np.testing.assert_allclose(proj.position(t), proj.position(t + 4.0), atol=1e-9)


def test_velocity_and_acceleration_magnitudes():
    """M1.2: |v| = ωr and a = -ω² · position on the face-on circle."""
    proj = CircularMotionProjector(period=2.0, radius=5.0)
    t = np.linspace(0.0, 2.0, 17)
    w = proj.angular_frequency

    speed = np.linalg.norm(proj.velocity(t), axis=-1)
    np.testing.assert_allclose(speed, w * 5.0)
    np.testing.assert_allclose(proj.acceleration(t), -w**2 * proj.position(t), atol=1e-12)


def test_angle_convention():
    """M1.3: θ(t) = -(t/T)·2π + φ₀ (clockwise on screen)."""
    proj = CircularMotionProjector(period=4.0, radius=1.0, phase_offset=0.5)
    assert float(proj.angle(1.0)) == pytest.approx(-np.pi / 2 + 0.5)
    np.testing.assert_allclose(proj.position(0.0), [np.cos(0.5), np.sin(0.5)])


def test_edge_on_projection_is_shm():
    """M1.4: at 90° the x-component vanishes and y is r·sin θ."""
    proj = CircularMotionProjector(period=3.0, radius=10.0, rotation_angle=90.0)
    t = np.linspace(0.0, 6.0, 31)
    pos = proj.position(t)
    assert np.all(np.abs(pos[:, 0]) < 1e-9)
    np.testing.assert_allclose(pos[:, 1], 10.0 * np.sin(proj.angle(t)))


def test_projection_scales_x_only():
    """M1.5: tilt α scales x by cos α and leaves y alone."""
    v = np.array([[2.0, 3.0], [-1.0, 4.0]])
    out = project(v, 60.0)
    np.testing.assert_allclose(out[:, 0], v[:, 0] * 0.5)
    np.testing.assert_allclose(out[:, 1], v[:, 1])


def test_state_bundles_all_quantities():
    proj = CircularMotionProjector(period=1.0, radius=2.0, rotation_angle=45.0)
    state = proj.state(0.3)
    np.testing.assert_allclose(state.position, proj.position(0.3))
    np.testing.assert_allclose(state.velocity, proj.velocity(0.3))
    np.testing.assert_allclose(state.acceleration, proj.acceleration(0.3))


# =============================================================================
# M2: Propagation ring
# =============================================================================

def test_ring_at_rest_before_start():
    """M2.1: at t = 0 every point sits at the rest angle."""
    proj = CircularMotionProjector(period=4.0, radius=60.0, rotation_angle=0.0)
    positions, angles = proj.ring_points(0.0, 24)
    assert np.all(angles == 0.0)
    np.testing.assert_allclose(positions, np.tile([60.0, 0.0], (24, 1)))


def test_ring_front_reaches_half_the_points():
    """M2.2: at t = T/2 only points with delay < T/2 have started."""
    proj = CircularMotionProjector(period=4.0, radius=60.0)
    _, angles = proj.ring_points(2.0, 24)
    assert np.all(angles[:12] != 0.0)
    assert np.all(angles[12:] == 0.0)


def test_ring_point_zero_follows_projector():
    """M2.3: point 0 has no delay and matches position(t)."""
    proj = CircularMotionProjector(period=4.0, radius=60.0, rotation_angle=30.0)
    positions, _ = proj.ring_points(1.3, 24)
    np.testing.assert_allclose(positions[0], proj.position(1.3))


def test_ring_delay_is_phase_lag():
    """M2.4: once moving, point i lags point 0 by (i/N)·2π."""
    proj = CircularMotionProjector(period=4.0, radius=1.0)
    _, angles = proj.ring_points(7.0, 8)
    for i in range(8):
        lag = angles[i] - angles[0]
        assert np.mod(lag, 2 * np.pi) == pytest.approx(phase_difference(i, 8), abs=1e-9)


def test_trailing_ring_waits_one_period():
    """M2.5: offset = T keeps the whole ring still for the first period."""
    proj = CircularMotionProjector(period=4.0, radius=60.0)
    _, angles = proj.ring_points(3.9, 24, offset=4.0)
    assert np.all(angles == 0.0)
    _, angles = proj.ring_points(4.5, 24, offset=4.0)
    assert angles[0] != 0.0


def test_phase_difference_values():
    assert phase_difference(6, 24) == pytest.approx(np.pi / 2)
    assert phase_difference(24, 24) == pytest.approx(0.0)
    assert phase_difference(0, 24) == 0.0


def test_theta_and_period_fraction():
    proj = CircularMotionProjector(period=4.0, radius=1.0)
    assert proj.theta_degrees(1.0) == pytest.approx(90.0)
    assert proj.theta_degrees(5.0) == pytest.approx(90.0)
    assert proj.period_fraction(10.0) == (2, 4)
    assert proj.period_fraction(0.0) == (0, 0)


# =============================================================================
# M3: Plot history
# =============================================================================

def test_history_samples_every_thirty_second_of_a_period():
    """M3.1: one sample per period/32 of clock time."""
    proj = CircularMotionProjector(period=4.0, radius=60.0, rotation_angle=90.0)
    history = PlotHistory(proj, "position")
    dt = 4.0 / 64
    for k in range(1, 65):
        history.update(k * dt)
    assert len(history.samples) == 32
    np.testing.assert_allclose(history.values, proj.position(history.times)[:, 1])


def test_history_clears_when_time_runs_backwards():
    """M3.2: a wrap (time decreasing) restarts the plot."""
    proj = CircularMotionProjector(period=1.0, radius=1.0)
    history = PlotHistory(proj, "velocity")
    for k in range(1, 40):
        history.update(k * 0.05)
    assert len(history.samples) > 0
    history.update(0.01)
    assert len(history.samples) == 0


@pytest.mark.parametrize("quantity, factor", [
    ("position", 0),
    ("velocity", 1),
    ("acceleration", 2),
])
def test_history_scale(quantity, factor):
    """M3.3: scale is r·ω^n for position / velocity / acceleration."""
    proj = CircularMotionProjector(period=2.0, radius=3.0)
    history = PlotHistory(proj, quantity)
    assert history.scale == pytest.approx(3.0 * proj.angular_frequency**factor)


def test_history_rejects_unknown_quantity():
    proj = CircularMotionProjector(period=2.0, radius=3.0)
    with pytest.raises(ValueError, match="quantity"):
        PlotHistory(proj, "jerk")
