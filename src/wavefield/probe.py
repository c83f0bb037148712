"""
Interference Probe
==================

Path-length analysis at a user-selected point between two sources.

    d1, d2      planar distances (height ignored, (x, y, z) -> (x, z))
    difference  |d1 - d2|
    wavelength  speed · period          (model convention)
    Δ/λ         = integer_part + fractional_part,  fractional_part ∈ [0, 1)

Δ/λ close to an integer marks constructive interference of in-phase
sources, close to a half-integer destructive.

If wavelength <= 0 every wavelength-unit field is None and defined=False.

Oct 2026
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .constants import INTERFERENCE_TOLERANCE
from .field import WaveSource, source_displacement


@dataclass(frozen=True)
class ProbeResult:
    selected_point: Tuple[float, float, float]
    distance1: float
    distance2: float
    difference: float
    wavelength: float
    distance1_in_wavelengths: Optional[float]
    distance2_in_wavelengths: Optional[float]
    difference_in_wavelengths: Optional[float]
    integer_part: Optional[int]
    fractional_part: Optional[float]
    defined: bool = True


def decompose(value: float) -> Tuple[int, float]:
    """Split value into floor and remainder, remainder in [0, 1)."""
    integer_part = int(np.floor(value))
    fractional_part = float(value - integer_part)
    if fractional_part >= 1.0:
        integer_part += 1
        fractional_part = 0.0
    return integer_part, fractional_part


def analyze_point(point: Sequence[float], sources: Sequence[WaveSource],
                  speed: float, period: float) -> ProbeResult:
    """
    Distances from an (x, y, z) point to two sources, in wavelength units.

    Raises:
        ValueError: unless exactly two sources are given
    """
    if len(sources) != 2:
        raise ValueError(f"Probe needs exactly two sources, got {len(sources)}")

    x, y, z = (float(c) for c in point)
    s1, s2 = sources
    d1 = float(np.hypot(x - s1.position[0], z - s1.position[1]))
    d2 = float(np.hypot(x - s2.position[0], z - s2.position[1]))
    difference = abs(d1 - d2)
    wavelength = speed * period

    if not wavelength > 0:
        return ProbeResult(
            selected_point=(x, y, z),
            distance1=d1, distance2=d2, difference=difference,
            wavelength=wavelength,
            distance1_in_wavelengths=None,
            distance2_in_wavelengths=None,
            difference_in_wavelengths=None,
            integer_part=None,
            fractional_part=None,
            defined=False,
        )

    diff_wl = difference / wavelength
    integer_part, fractional_part = decompose(diff_wl)
    return ProbeResult(
        selected_point=(x, y, z),
        distance1=d1, distance2=d2, difference=difference,
        wavelength=wavelength,
        distance1_in_wavelengths=d1 / wavelength,
        distance2_in_wavelengths=d2 / wavelength,
        difference_in_wavelengths=diff_wl,
        integer_part=integer_part,
        fractional_part=fractional_part,
    )


def interference_kind(result: ProbeResult,
                      tolerance: float = INTERFERENCE_TOLERANCE) -> Optional[str]:
    """
    'constructive', 'destructive' or 'intermediate' from the path difference.

    Phase shift between the sources is not folded in. None if undefined.
    """
    if not result.defined:
        return None
    f = result.fractional_part
    if f <= tolerance or f >= 1.0 - tolerance:
        return "constructive"
    if abs(f - 0.5) <= tolerance:
        return "destructive"
    return "intermediate"


class ProbeAnalyzer:
    """
    Holds the current probe selection.

    select_point() replaces the previous result, clear() drops it. While a
    point is selected, record() appends the composite displacement to trace.
    """

    def __init__(self):
        self.result: Optional[ProbeResult] = None
        self.trace: List[Tuple[float, float]] = []

    @property
    def active(self) -> bool:
        return self.result is not None

    def select_point(self, point: Sequence[float], sources: Sequence[WaveSource],
                     speed: float, period: float) -> ProbeResult:
        self.result = analyze_point(point, sources, speed, period)
        self.trace.clear()
        return self.result

    def clear(self):
        self.result = None
        self.trace.clear()

    def clear_trace(self):
        self.trace.clear()

    def composite_displacement(self, sources: Sequence[WaveSource], t: float,
                               attenuation: float = 0.0,
                               angular_speed: float = 1.0) -> Tuple[float, List[float]]:
        """
        Superposed displacement at the selected point.

        Returns:
            (total, per-source parts); (0.0, []) when nothing is selected
        """
        if self.result is None:
            return 0.0, []
        x, _, z = self.result.selected_point
        p = np.array([x, z])
        parts = [float(source_displacement(s, p, t, attenuation, angular_speed))
                 for s in sources]
        return float(sum(parts)), parts

    def record(self, sources: Sequence[WaveSource], t: float,
               attenuation: float = 0.0, angular_speed: float = 1.0) -> Optional[float]:
        if self.result is None:
            return None
        total, _ = self.composite_displacement(sources, t, attenuation, angular_speed)
        self.trace.append((t, total))
        return total
