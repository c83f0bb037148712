"""
Two-Wave Interference and Beats
===============================

Two 1-D travelling waves drawn side by side with their rotating phasors.

    y_j(x, t) = r · sin(2π f_j (x / (W · s · 10) - t) + φ_j)

with display width W, spatial scale s and phase φ_j given in degrees. The
combined wave is the pointwise sum; the combined phasor is the vector sum
of the two phasor tips, whose y-component equals the combined wave at x = 0.

Equal frequencies: a fixed phase difference gives static interference,
|c1 + c2| = 2r |cos(Δφ/2)|. Unequal frequencies: the phasor sum breathes
at the beat frequency |f1 - f2|.

Oct 2026
"""

from typing import Optional, Tuple

import numpy as np

from .circular import CircularMotionProjector
from .constants import BEAT_NUM_POINTS, BEAT_RADIUS, BEAT_WAVE_WIDTH


class TwoWaveInterference:
    """
    Args:
        frequency1, frequency2: > 0
        phase1, phase2: degrees
        scale: spatial scale of the wave plot (> 0)
        radius: wave amplitude and phasor radius
    """

    def __init__(self, frequency1: float = 100.0, frequency2: float = 100.0,
                 phase1: float = 0.0, phase2: float = 0.0,
                 scale: float = 1.0,
                 radius: float = BEAT_RADIUS,
                 num_points: int = BEAT_NUM_POINTS,
                 width: float = BEAT_WAVE_WIDTH):
        if not (frequency1 > 0 and frequency2 > 0):
            raise ValueError(f"Frequencies must be > 0, got {frequency1}, {frequency2}")
        self.frequency1 = frequency1
        self.frequency2 = frequency2
        self.phase1 = phase1
        self.phase2 = phase2
        self.scale = scale
        self.radius = radius
        self.num_points = num_points
        self.width = width

    @property
    def x(self) -> np.ndarray:
        """Sample positions, centred on 0."""
        return (np.arange(self.num_points) / (self.num_points - 1) - 0.5) * self.width

    @property
    def marker_index(self) -> int:
        """Sample used for the moving marker dots."""
        return (self.num_points - 1) // 2

    @property
    def beat_frequency(self) -> float:
        return abs(self.frequency1 - self.frequency2)

    def wave(self, frequency: float, phase: float, t: float,
             x: Optional[np.ndarray] = None) -> np.ndarray:
        x = self.x if x is None else np.asarray(x, dtype=float)
        return self.radius * np.sin(2 * np.pi * frequency * (x / self.width / self.scale / 10 - t)
                                    + np.deg2rad(phase))

    def profiles(self, t: float) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Wave 1, wave 2 and their sum over x."""
        w1 = self.wave(self.frequency1, self.phase1, t)
        w2 = self.wave(self.frequency2, self.phase2, t)
        return w1, w2, w1 + w2

    def projectors(self) -> Tuple[CircularMotionProjector, CircularMotionProjector]:
        return (
            CircularMotionProjector(1.0 / self.frequency1, self.radius,
                                    phase_offset=np.deg2rad(self.phase1)),
            CircularMotionProjector(1.0 / self.frequency2, self.radius,
                                    phase_offset=np.deg2rad(self.phase2)),
        )

    def phasors(self, t: float) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Phasor tips (x, y) of both waves and their vector sum."""
        p1, p2 = self.projectors()
        c1 = p1.position(t)
        c2 = p2.position(t)
        return c1, c2, c1 + c2
