"""
Refraction at a Planar Boundary
===============================

One point source near a vertical boundary x = b separating two
homogeneous media with propagation speeds v1 = 1/n1 (x <= b) and
v2 = 1/n2 (x > b).

MODEL:
    The source side is the near medium (speed v_n, k_n = ω/v_n), the other
    side the far medium (v_f, k_f = ω/v_f), with ω = 2π/T. For the default
    source at x_s < b these are medium 1 and medium 2. A source at x_s > b
    swaps the roles, so the wave always radiates from where the source is.

    near side: direct radial wave
        y = A sin(k_n·|p - s| - ω t)

    far side: the sample is reached through the boundary point (b, z) at
    its own transverse position
        θ_i   = atan2(z - z_s, |b - x_s|)        incident angle
        sin θ_r = (v_f/v_n) · sin θ_i            Snell's law
        d1    = |(b, z) - s|                     path in the near medium
        d2    = |x - b| / cos θ_r                refracted path to the sample
        y     = A sin(k_n·d1 + k_f·d2 - ω t)

    At x -> b, d2 -> 0 and d1 -> |p - s|, so the two branches join without
    a phase jump for any n1, n2.

TOTAL INTERNAL REFLECTION:
    If |(v_f/v_n) · sin θ_i| >= 1 there is no transmitted wave. Such samples
    get displacement 0 and are flagged undefined; no NaN/inf is produced.
    (|s| = 1 is grazing emergence, cos θ_r = 0, also treated as undefined.)

EXACT RAY (probe):
    ray_path() finds the true boundary crossing of the ray from the source
    to a point on the far side by Fermat's principle, minimising
        τ(z_c) = |(b, z_c) - s| / v_n + |p - (b, z_c)| / v_f
    dτ/dz_c = sin θ1/v_n - sin θ2/v_f is monotone in z_c, so its root is
    bracketed by [min(z_s, z), max(z_s, z)] and found with brentq.
    Points on the source side get the straight ray timed with v_n, so the
    ray phase equals the grid phase there.

Oct 2026
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np
from scipy.optimize import brentq

from .constants import (
    DEFAULT_AMPLITUDE,
    RAY_XTOL,
    REFRACTION_SOURCE_POSITION,
    ZERO_OFFSET_THRESHOLD,
)


@dataclass(frozen=True)
class RefractionMedium:
    """Boundary position and the propagation speeds on either side."""
    boundary_x: float
    speed1: float
    speed2: float

    @classmethod
    def from_indices(cls, n1: float, n2: float, boundary_x: float = 0.0) -> "RefractionMedium":
        if not (n1 > 0 and n2 > 0):
            raise ValueError(f"Refractive indices must be > 0, got n1={n1}, n2={n2}")
        return cls(boundary_x=boundary_x, speed1=1.0 / n1, speed2=1.0 / n2)

    @property
    def speed_ratio(self) -> float:
        """v2/v1 = n1/n2, the factor in Snell's law going from medium 1 to 2."""
        return self.speed2 / self.speed1

    def critical_angle(self) -> Optional[float]:
        """
        Incident angle (radians) beyond which nothing crosses from medium 1
        into medium 2.

        None when v2 <= v1 (always transmits).
        """
        if self.speed_ratio <= 1.0:
            return None
        return float(np.arcsin(1.0 / self.speed_ratio))


@dataclass
class RayPath:
    """Fermat ray from the source to a point."""
    crossing: Tuple[float, float]   # boundary point (b, z_c), or the point itself on the source side
    incident_angle: float           # radians, from the boundary normal
    refracted_angle: float          # radians; equals incident_angle on the source side
    travel_time: float              # path length / speed, summed over media
    phase: float                    # ω · travel_time


class RefractionField:
    """
    Field of a single source refracted at a planar boundary.

    Args:
        medium: RefractionMedium
        period: T > 0 (caller-enforced)
        source_position: (x, z) of the source, on either side of the boundary
        amplitude: constant amplitude (no attenuation in this demo)
    """

    def __init__(self, medium: RefractionMedium, period: float,
                 source_position: Tuple[float, float] = REFRACTION_SOURCE_POSITION,
                 amplitude: float = DEFAULT_AMPLITUDE):
        self.medium = medium
        self.period = period
        self.source_position = (float(source_position[0]), float(source_position[1]))
        self.amplitude = amplitude

    @property
    def omega(self) -> float:
        return 2 * np.pi / self.period

    @property
    def k1(self) -> float:
        return self.omega / self.medium.speed1

    @property
    def k2(self) -> float:
        return self.omega / self.medium.speed2

    @property
    def source_in_medium1(self) -> bool:
        return self.source_position[0] <= self.medium.boundary_x

    @property
    def near_speed(self) -> float:
        """Speed of the medium holding the source."""
        return self.medium.speed1 if self.source_in_medium1 else self.medium.speed2

    @property
    def far_speed(self) -> float:
        return self.medium.speed2 if self.source_in_medium1 else self.medium.speed1

    @property
    def speed_ratio(self) -> float:
        """v_far / v_near, the Snell factor for waves leaving the source side."""
        return self.far_speed / self.near_speed

    def on_source_side(self, x) -> np.ndarray:
        offset = np.asarray(x, dtype=float) - self.medium.boundary_x
        return offset <= 0 if self.source_in_medium1 else offset >= 0

    # -----------------------------------------------------------------
    # Spatial phase
    # -----------------------------------------------------------------

    def spatial_phase(self, points: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Time-independent phase k·path at (..., 2) points.

        Returns:
            phase: (...,) with 0 where undefined
            defined: (...,) bool, False beyond the critical angle
        """
        points = np.asarray(points, dtype=float)
        x = points[..., 0]
        z = points[..., 1]
        xs, zs = self.source_position
        b = self.medium.boundary_x
        k_near = self.omega / self.near_speed
        k_far = self.omega / self.far_speed

        phase = np.zeros(x.shape)
        defined = np.ones(x.shape, dtype=bool)

        near = self.on_source_side(x)
        phase[near] = k_near * np.hypot(x[near] - xs, z[near] - zs)

        far = ~near
        xf = x[far]
        zf = z[far]
        theta_i = np.arctan2(zf - zs, abs(b - xs))
        sin_r = self.speed_ratio * np.sin(theta_i)
        transmitted = np.abs(sin_r) < 1.0

        cos_r = np.sqrt(1.0 - np.minimum(sin_r * sin_r, 1.0))
        d1 = np.hypot(b - xs, zf - zs)
        d2 = np.divide(np.abs(xf - b), cos_r, out=np.zeros_like(xf), where=transmitted)
        phase[far] = np.where(transmitted, k_near * d1 + k_far * d2, 0.0)
        defined[far] = transmitted

        return phase, defined

    def refracted_angle(self, incident_angle) -> np.ndarray:
        """
        Snell's law, sin θ_r = (v_far/v_near) sin θ_i.

        Clipped into the arcsin domain; transmits() gives the TIR mask.
        """
        s = self.speed_ratio * np.sin(incident_angle)
        return np.arcsin(np.clip(s, -1.0, 1.0))

    def transmits(self, incident_angle) -> np.ndarray:
        return np.abs(self.speed_ratio * np.sin(incident_angle)) < 1.0

    # -----------------------------------------------------------------
    # Evaluation
    # -----------------------------------------------------------------

    def evaluate(self, points: np.ndarray, t: float) -> Tuple[np.ndarray, np.ndarray]:
        """
        Displacement at (..., 2) points and time t.

        Returns:
            displacement: (...,), 0 where undefined
            defined: (...,) bool
        """
        phase, defined = self.spatial_phase(points)
        y = np.where(defined, self.amplitude * np.sin(phase - self.omega * t), 0.0)
        return y, defined

    def precompute(self, points: np.ndarray) -> Dict[str, np.ndarray]:
        flat = np.asarray(points, dtype=float).reshape(-1, 2)
        phase, defined = self.spatial_phase(flat)
        return {'spatial_phase': phase, 'defined': defined, 'undefined': ~defined}

    def evaluate_into(self, cache: Dict[str, np.ndarray], t: float,
                      out: np.ndarray, defined: Optional[np.ndarray] = None):
        np.subtract(cache['spatial_phase'], self.omega * t, out=out)
        np.sin(out, out=out)
        np.multiply(out, self.amplitude, out=out)
        out[cache['undefined']] = 0.0
        if defined is not None:
            defined[:] = cache['defined']

    # -----------------------------------------------------------------
    # Exact ray
    # -----------------------------------------------------------------

    def ray_path(self, point: Tuple[float, float]) -> RayPath:
        """
        Ray from the source to an (x, z) point obeying Fermat's principle.

        On the source side this is the straight line in the near medium.
        """
        x, z = float(point[0]), float(point[1])
        xs, zs = self.source_position
        b = self.medium.boundary_x
        v_near, v_far = self.near_speed, self.far_speed

        if self.on_source_side(x):
            length = np.hypot(x - xs, z - zs)
            angle = float(np.arctan2(z - zs, abs(x - xs)))
            tau = float(length / v_near)
            return RayPath((x, z), angle, angle, tau, float(self.omega * tau))

        a1 = abs(b - xs)
        a2 = abs(x - b)

        def dtau(zc):
            return ((zc - zs) / (v_near * np.hypot(a1, zc - zs))
                    - (z - zc) / (v_far * np.hypot(a2, z - zc)))

        # On-axis point, or a source sitting on the boundary
        if abs(z - zs) < ZERO_OFFSET_THRESHOLD or a1 < ZERO_OFFSET_THRESHOLD:
            zc = zs
        else:
            zc = brentq(dtau, min(zs, z), max(zs, z), xtol=RAY_XTOL)

        d1 = np.hypot(a1, zc - zs)
        d2 = np.hypot(a2, z - zc)
        tau = d1 / v_near + d2 / v_far
        return RayPath(
            crossing=(b, float(zc)),
            incident_angle=float(np.arctan2(zc - zs, a1)),
            refracted_angle=float(np.arctan2(z - zc, a2)),
            travel_time=float(tau),
            phase=float(self.omega * tau),
        )
