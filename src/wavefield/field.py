"""
Point Source Field and Superposition
====================================

Scalar displacement field of N oscillating point sources on the (x, z)
plane, and the pre-allocated sampling grid the demos redraw every frame.

MODEL:
    For source i at s_i with period T_i, phase φ_i and base amplitude A_i:

        d_i(p)  = |p - s_i|
        A_i(d)  = A_i · exp(-d · attenuation / 300)
        y_i     = A_i(d_i) · sin(d_i · k_i - ω·t + φ_i),   k_i = 1/T_i

    with ω the animation speed. The field is the strict linear sum

        Y(p, t) = Σ_i y_i(p, t)

    (no clipping, no normalization, no special two-source path).

    Note k = 1/T is the model's own convention, not 2π/λ.

GRID:
    FieldGrid samples a (resolution+1)² lattice over [-extent/2, extent/2]².
    Its buffers are allocated once per resolution and overwritten in place
    each tick. Everything that does not depend on t (distances, attenuated
    amplitudes, the spatial part of the phase) is cached per configuration
    epoch, so a tick is one sin() over the cached phases. Cached and
    uncached evaluation agree to floating precision.

EVALUATOR PROTOCOL (used by FieldGrid):
    precompute(points)                    -> cache dict
    evaluate_into(cache, t, out, defined) -> None, fills out/defined in place

Oct 2026
"""

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

import numpy as np
from scipy.spatial.distance import cdist

from .constants import (
    ATTENUATION_LENGTH_SCALE,
    BELOW_THRESHOLD,
    COLOR_RANGE,
    DEFAULT_AMPLITUDE,
    DEFAULT_EXTENT,
    GRADIENT,
    GRADIENT_GREEN,
    LINE_SEGMENTS,
    UNDEFINED,
)


@dataclass(frozen=True)
class WaveSource:
    """
    Point origin of a periodic disturbance.

    Immutable per configuration epoch; replaced wholesale on edits.
    """
    position: Tuple[float, float]
    period: float
    phase_offset: float = 0.0
    base_amplitude: float = DEFAULT_AMPLITUDE

    def __post_init__(self):
        if not self.period > 0:
            raise ValueError(f"Source period must be > 0, got {self.period}")

    @property
    def wavenumber(self) -> float:
        return 1.0 / self.period


def two_source_layout(source_distance: float, period: float,
                      phase_shift: float = 0.0,
                      amplitude: float = DEFAULT_AMPLITUDE) -> Tuple[WaveSource, WaveSource]:
    """
    The interference pair: source 1 at (+d/2, 0), source 2 at (-d/2, 0)
    lagging by phase_shift.
    """
    return (
        WaveSource((source_distance / 2, 0.0), period, 0.0, amplitude),
        WaveSource((-source_distance / 2, 0.0), period, phase_shift, amplitude),
    )


# =============================================================================
# SINGLE SOURCE
# =============================================================================

def planar_distance(points: np.ndarray, position: Tuple[float, float]) -> np.ndarray:
    """Distance from (..., 2) points to an (x, z) position."""
    points = np.asarray(points, dtype=float)
    return np.hypot(points[..., 0] - position[0], points[..., 1] - position[1])


def attenuated_amplitude(distance, base_amplitude: float, attenuation: float):
    """
    A0 · exp(-d · attenuation / 300).

    Non-increasing in d for attenuation >= 0; constant for attenuation = 0.
    Continuous at d = 0.
    """
    return base_amplitude * np.exp(-np.asarray(distance, dtype=float)
                                   * attenuation / ATTENUATION_LENGTH_SCALE)


def source_displacement(source: WaveSource, points: np.ndarray, t: float,
                        attenuation: float = 0.0,
                        angular_speed: float = 1.0) -> np.ndarray:
    """
    Contribution of one source at (..., 2) points and time t.

    Returns:
        (...,) displacement
    """
    d = planar_distance(points, source.position)
    amplitude = attenuated_amplitude(d, source.base_amplitude, attenuation)
    return amplitude * np.sin(d * source.wavenumber + source.phase_offset
                              - angular_speed * t)


def sample_line(source: WaveSource, end: Tuple[float, float], t: float,
                attenuation: float = 0.0, angular_speed: float = 1.0,
                segments: int = LINE_SEGMENTS) -> Tuple[np.ndarray, np.ndarray]:
    """
    One source's wave along the segment source -> end.

    Used to draw the individual waves arriving at a probe point.

    Returns:
        points: (segments+1, 2)
        displacement: (segments+1,)
    """
    s = np.linspace(0.0, 1.0, segments + 1)[:, None]
    start = np.asarray(source.position, dtype=float)
    points = start + s * (np.asarray(end, dtype=float) - start)
    return points, source_displacement(source, points, t, attenuation, angular_speed)


# =============================================================================
# SUPERPOSITION
# =============================================================================

class PointSourceField:
    """
    Superposition of independent point sources.

    Args:
        sources: WaveSource sequence (any length, including 0)
        attenuation: >= 0
        angular_speed: ω, the animation speed parameter
    """

    def __init__(self, sources: Sequence[WaveSource],
                 attenuation: float = 0.0,
                 angular_speed: float = 1.0):
        self.sources = tuple(sources)
        self.attenuation = attenuation
        self.angular_speed = angular_speed

        self.positions = np.array([s.position for s in self.sources], dtype=float).reshape(-1, 2)
        self.wavenumbers = np.array([s.wavenumber for s in self.sources], dtype=float)
        self.phase_offsets = np.array([s.phase_offset for s in self.sources], dtype=float)
        self.base_amplitudes = np.array([s.base_amplitude for s in self.sources], dtype=float)

    def contribution(self, index: int, points: np.ndarray, t: float) -> np.ndarray:
        return source_displacement(self.sources[index], points, t,
                                   self.attenuation, self.angular_speed)

    def evaluate(self, points: np.ndarray, t: float) -> np.ndarray:
        """
        Y(p, t) = Σ y_i(p, t) at (..., 2) points.

        Pure: same inputs give the same output, nothing is carried over.
        """
        points = np.asarray(points, dtype=float)
        total = np.zeros(points.shape[:-1])
        for i in range(len(self.sources)):
            total += self.contribution(i, points, t)
        return total

    def distances(self, points: np.ndarray) -> np.ndarray:
        """(P, N) distance matrix from flattened points to every source."""
        flat = np.asarray(points, dtype=float).reshape(-1, 2)
        if len(self.sources) == 0:
            return np.empty((len(flat), 0))
        return cdist(flat, self.positions)

    # -----------------------------------------------------------------
    # Grid protocol
    # -----------------------------------------------------------------

    def precompute(self, points: np.ndarray) -> Dict[str, np.ndarray]:
        """
        Time-independent part of the field at flattened points.

        Returns:
            dict with 'amplitude' (P, N), 'spatial_phase' (P, N) = d·k + φ,
            and a 'scratch' (P, N) buffer reused by evaluate_into
        """
        d = self.distances(points)
        amplitude = attenuated_amplitude(d, 1.0, self.attenuation) * self.base_amplitudes
        spatial_phase = d * self.wavenumbers + self.phase_offsets
        return {
            'amplitude': amplitude,
            'spatial_phase': spatial_phase,
            'scratch': np.empty_like(spatial_phase),
        }

    def evaluate_into(self, cache: Dict[str, np.ndarray], t: float,
                      out: np.ndarray, defined: Optional[np.ndarray] = None):
        """Write Y(p, t) for the cached points into out, without allocating."""
        scratch = cache['scratch']
        np.subtract(cache['spatial_phase'], self.angular_speed * t, out=scratch)
        np.sin(scratch, out=scratch)
        np.multiply(scratch, cache['amplitude'], out=scratch)
        np.sum(scratch, axis=1, out=out)
        if defined is not None:
            defined.fill(True)


# =============================================================================
# COLOUR CLASSIFICATION
# =============================================================================

def classify_colors(displacement: np.ndarray, black_threshold: float,
                    defined: Optional[np.ndarray] = None,
                    colors: Optional[np.ndarray] = None,
                    category: Optional[np.ndarray] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Tag each sample and give it an RGB colour. Never re-evaluates the field.

        UNDEFINED        no transmitted wave          -> (0, 0, 0)
        BELOW_THRESHOLD  |Y| < black_threshold        -> (0, 0, 0)
        GRADIENT         v = (Y + 2)/4 clipped [0, 1] -> (v, 0.5, 1 - v)

    Args:
        displacement: (P,) values
        black_threshold: >= 0 (0 disables the neutral marker)
        defined: optional (P,) bool, False for undefined samples
        colors, category: optional (P, 3) / (P,) output buffers

    Returns:
        colors, category
    """
    y = np.asarray(displacement, dtype=float)
    if colors is None:
        colors = np.empty(y.shape + (3,))
    if category is None:
        category = np.empty(y.shape, dtype=np.int8)

    v = np.clip((y + COLOR_RANGE) / (2 * COLOR_RANGE), 0.0, 1.0)
    colors[..., 0] = v
    colors[..., 1] = GRADIENT_GREEN
    colors[..., 2] = 1.0 - v
    category[...] = GRADIENT

    below = np.abs(y) < black_threshold
    colors[below] = 0.0
    category[below] = BELOW_THRESHOLD

    if defined is not None:
        undefined = ~np.asarray(defined, dtype=bool)
        colors[undefined] = 0.0
        category[undefined] = UNDEFINED

    return colors, category


# =============================================================================
# SAMPLING GRID
# =============================================================================

def _readonly(array: np.ndarray) -> np.ndarray:
    view = array.view()
    view.flags.writeable = False
    return view


class FieldGrid:
    """
    Pre-allocated (resolution+1)² sampling grid.

    The grid exclusively owns its buffers and overwrites them in update().
    Accessors return read-only views, valid until the next update.
    """

    def __init__(self, resolution: int, extent: float = DEFAULT_EXTENT):
        self.resolution = None
        self.extent = extent
        self._evaluator = None
        self._cache = None
        self.resize(resolution)

    def resize(self, resolution: int, extent: Optional[float] = None):
        """Reallocate only if the resolution or extent actually changed."""
        extent = self.extent if extent is None else extent
        if resolution == self.resolution and extent == self.extent:
            return
        self.resolution = int(resolution)
        self.extent = extent

        n = self.resolution + 1
        axis = np.linspace(-extent / 2, extent / 2, n)
        X, Z = np.meshgrid(axis, axis)
        self._points = np.stack([X.ravel(), Z.ravel()], axis=-1)

        P = n * n
        self._displacement = np.zeros(P)
        self._colors = np.zeros((P, 3))
        self._category = np.full(P, GRADIENT, dtype=np.int8)
        self._defined = np.ones(P, dtype=bool)

        # Cache depended on the old points
        if self._evaluator is not None:
            self._cache = self._evaluator.precompute(self._points)

    @property
    def shape(self) -> Tuple[int, int]:
        n = self.resolution + 1
        return (n, n)

    @property
    def sample_count(self) -> int:
        return len(self._points)

    def bind(self, evaluator):
        """Attach the evaluator of a new configuration epoch."""
        self._evaluator = evaluator
        self._cache = evaluator.precompute(self._points)

    def update(self, t: float, black_threshold: float = 0.0):
        """Recompute displacement and colours in place for time t."""
        if self._evaluator is None:
            raise RuntimeError("FieldGrid.update() called before bind()")
        self._evaluator.evaluate_into(self._cache, t, self._displacement, self._defined)
        classify_colors(self._displacement, black_threshold, self._defined,
                        colors=self._colors, category=self._category)

    @property
    def points(self) -> np.ndarray:
        return _readonly(self._points)

    @property
    def displacement(self) -> np.ndarray:
        return _readonly(self._displacement)

    @property
    def colors(self) -> np.ndarray:
        return _readonly(self._colors)

    @property
    def category(self) -> np.ndarray:
        return _readonly(self._category)

    @property
    def defined(self) -> np.ndarray:
        return _readonly(self._defined)
