"""
Circular Motion Projection
==========================

Uniform circular motion and its projection onto simple harmonic motion.

THEORY:
    A point rotating clockwise (screen convention) with period T:

        θ(t) = -(t/T)·2π + φ₀,     ω = 2π/T

        position     = r (cos θ, sin θ)
        velocity     = ω r (sin θ, cos θ)
        acceleration = -ω² r (cos θ, sin θ)

    Tilting the plane of rotation by α (0° - 90°) about the vertical axis
    scales every x-component by cos α. At α = 90° only the y-component is
    left: 1-D simple harmonic motion is the edge-on view of the circle.

PROPAGATION RING:
    N oscillators along a line, oscillator i delayed by (i/N)·T. Oscillator i
    only starts once t > delay_i + offset; before that it is held at the
    rest angle. The ring therefore shows a transverse wave front travelling
    along the line, one wavelength per N points.

Oct 2026
"""

from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from .constants import PLOT_SAMPLES_PER_PERIOD, PLOT_TIME_EPSILON


@dataclass
class MotionState:
    """Projected kinematic state. Arrays are (..., 2) for (x, y)."""
    angle: np.ndarray
    position: np.ndarray
    velocity: np.ndarray
    acceleration: np.ndarray


def project(vectors: np.ndarray, rotation_angle: float) -> np.ndarray:
    """
    Scale the x-component of (..., 2) vectors by cos(rotation_angle).

    Args:
        vectors: (..., 2) array
        rotation_angle: tilt in degrees, 0 = face-on circle, 90 = edge-on line
    """
    out = np.array(vectors, dtype=float, copy=True)
    out[..., 0] *= np.cos(np.deg2rad(rotation_angle))
    return out


def phase_difference(index: int, num_points: int) -> float:
    """Phase lag of ring point `index` behind point 0, in [0, 2π)."""
    return (index / num_points * 2 * np.pi) % (2 * np.pi)


class CircularMotionProjector:
    """
    Maps simulation time to a projected rotating-phase state.

    Args:
        period: rotation period T (> 0, caller-enforced)
        radius: circle radius r
        rotation_angle: projection tilt in degrees
        phase_offset: φ₀ in radians
    """

    def __init__(self, period: float, radius: float,
                 rotation_angle: float = 0.0,
                 phase_offset: float = 0.0):
        self.period = period
        self.radius = radius
        self.rotation_angle = rotation_angle
        self.phase_offset = phase_offset

    @property
    def angular_frequency(self) -> float:
        return 2 * np.pi / self.period

    def angle(self, t):
        return -(np.asarray(t, dtype=float) / self.period) * 2 * np.pi + self.phase_offset

    def _unit(self, angle) -> Tuple[np.ndarray, np.ndarray]:
        return np.cos(angle), np.sin(angle)

    def position(self, t) -> np.ndarray:
        c, s = self._unit(self.angle(t))
        return project(np.stack([self.radius * c, self.radius * s], axis=-1),
                       self.rotation_angle)

    def velocity(self, t) -> np.ndarray:
        c, s = self._unit(self.angle(t))
        w_r = self.angular_frequency * self.radius
        return project(np.stack([w_r * s, w_r * c], axis=-1), self.rotation_angle)

    def acceleration(self, t) -> np.ndarray:
        c, s = self._unit(self.angle(t))
        w2_r = self.angular_frequency**2 * self.radius
        return project(np.stack([-w2_r * c, -w2_r * s], axis=-1), self.rotation_angle)

    def state(self, t) -> MotionState:
        """Angle, position, velocity and acceleration at t (scalar or array)."""
        return MotionState(
            angle=self.angle(t),
            position=self.position(t),
            velocity=self.velocity(t),
            acceleration=self.acceleration(t),
        )

    def ring_points(self, t: float, num_points: int,
                    offset: float = 0.0) -> Tuple[np.ndarray, np.ndarray]:
        """
        Phase-delayed points of the propagation ring.

        delay_i = (i/N)·T, effective_i = max(0, t - delay_i - offset).
        A point whose effective time is still 0 sits at the rest angle φ₀.

        Returns:
            positions: (N, 2) projected positions
            angles: (N,) angles in radians
        """
        i = np.arange(num_points)
        delay = i / num_points * self.period
        effective = np.maximum(0.0, t - delay - offset)
        angles = np.where(effective > 0, self.angle(effective), self.phase_offset)
        positions = np.stack([self.radius * np.cos(angles),
                              self.radius * np.sin(angles)], axis=-1)
        return project(positions, self.rotation_angle), angles

    def theta_degrees(self, t: float) -> float:
        """Rotation swept in the current turn, degrees in [0, 360)."""
        return (t / self.period * 360.0) % 360.0

    def period_fraction(self, t: float) -> Tuple[int, int]:
        """Elapsed time as (whole periods, eighths of a period)."""
        turns = t / self.period
        return int(np.floor(turns)), int(np.floor((turns * 8) % 8))


# =============================================================================
# PLOT HISTORY
# =============================================================================

QUANTITIES = ("position", "velocity", "acceleration")


@dataclass
class PlotHistory:
    """
    Time series of one projected quantity (y-component), sampled every
    period/32 of simulation time.

    Clears itself when time runs backwards (clock wrap or reset).
    """
    projector: CircularMotionProjector
    quantity: str = "position"
    samples_per_period: int = PLOT_SAMPLES_PER_PERIOD
    samples: List[Tuple[float, float]] = field(default_factory=list)
    _last_time: float = 0.0

    def __post_init__(self):
        if self.quantity not in QUANTITIES:
            raise ValueError(f"quantity must be one of {QUANTITIES}, got {self.quantity!r}")

    @property
    def interval(self) -> float:
        return self.projector.period / self.samples_per_period

    @property
    def scale(self) -> float:
        """Peak magnitude of the quantity: r, ω·r or ω²·r."""
        w = self.projector.angular_frequency
        r = self.projector.radius
        return {"position": r, "velocity": w * r, "acceleration": w * w * r}[self.quantity]

    def value(self, t: float) -> float:
        return float(getattr(self.projector, self.quantity)(t)[1])

    def update(self, t: float) -> bool:
        """
        Record a sample if a new interval has been entered.

        Returns:
            True if a sample was appended
        """
        if t < self._last_time:
            self.samples.clear()
        self._last_time = t

        n_intervals = int(np.floor((t + PLOT_TIME_EPSILON) / self.interval))
        if n_intervals > len(self.samples):
            self.samples.append((t, self.value(t)))
            return True
        return False

    def clear(self):
        self.samples.clear()
        self._last_time = 0.0

    @property
    def times(self) -> np.ndarray:
        return np.array([s[0] for s in self.samples], dtype=float)

    @property
    def values(self) -> np.ndarray:
        return np.array([s[1] for s in self.samples], dtype=float)
