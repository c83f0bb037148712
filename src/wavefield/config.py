"""
Simulation Configuration
========================

The configuration surface handed to the wave-field core by its UI.

One immutable SimulationConfig is live per configuration epoch. Parameter
edits produce a new validated copy (replace) which the simulation picks up
on its next tick; nothing downstream tracks individual fields.

BOUNDS:
    period > 0, speed > 0            (wavenumber 1/period, wavelength speed*period)
    attenuation >= 0                 (amplitude non-increasing in distance)
    black_threshold >= 0
    refractive_index1/2 >= 1         (medium speed = 1/n)
    grid_resolution >= 1             ((resolution+1)^2 samples)
    0 <= rotation_angle <= 90        (degrees, circular view projection)
    num_points >= 1                  (ring size)
    radius, extent, time_scale > 0
    beat_frequency1/2, beat_scale > 0    (two-wave page; phases in degrees)

Evaluators never re-check these; validate() or clamped() at the boundary
is the caller contract.

Oct 2026
"""

import warnings
from dataclasses import dataclass, fields, replace as dc_replace
from typing import Optional

from .circular import QUANTITIES
from .constants import (
    DEFAULT_AMPLITUDE,
    DEFAULT_EXTENT,
    DEFAULT_WRAP_CYCLES,
)


MODES = ("interference", "refraction", "circular", "beats")

# (field, lower, upper, lower_is_strict)
_BOUNDS = (
    ("period", 0.0, None, True),
    ("speed", 0.0, None, True),
    ("attenuation", 0.0, None, False),
    ("black_threshold", 0.0, None, False),
    ("refractive_index1", 1.0, None, False),
    ("refractive_index2", 1.0, None, False),
    ("grid_resolution", 1, None, False),
    ("rotation_angle", 0.0, 90.0, False),
    ("num_points", 1, None, False),
    ("radius", 0.0, None, True),
    ("amplitude", 0.0, None, False),
    ("extent", 0.0, None, True),
    ("time_scale", 0.0, None, True),
    ("beat_frequency1", 0.0, None, True),
    ("beat_frequency2", 0.0, None, True),
    ("beat_scale", 0.0, None, True),
)

# Smallest value substituted for a strictly positive option when clamping
_STRICT_MINIMUM = {
    "period": 0.1,
    "speed": 0.1,
    "radius": 1.0,
    "extent": 1.0,
    "time_scale": 0.1,
    "beat_frequency1": 1.0,
    "beat_frequency2": 1.0,
    "beat_scale": 0.1,
}


@dataclass(frozen=True)
class SimulationConfig:
    """
    Configuration of every demo page.

    Defaults are those of the interactive demo pages. phase_shift is in
    radians, rotation_angle in degrees.
    """
    mode: str = "interference"
    period: float = 1.0
    speed: float = 2.0
    source_distance: float = 20.0
    attenuation: float = 20.0
    black_threshold: float = 0.0
    phase_shift: float = 0.0
    refractive_index1: float = 1.0
    refractive_index2: float = 1.5
    boundary_x: float = 0.0
    grid_resolution: int = 200
    rotation_angle: float = 90.0
    num_points: int = 24
    radius: float = 60.0
    amplitude: float = DEFAULT_AMPLITUDE
    extent: float = DEFAULT_EXTENT
    time_scale: float = 1.0
    wrap_cycles: Optional[int] = DEFAULT_WRAP_CYCLES
    beat_frequency1: float = 100.0
    beat_frequency2: float = 100.0
    beat_phase1: float = 0.0
    beat_phase2: float = 0.0
    beat_scale: float = 1.0
    plot_quantity: str = "position"

    # -----------------------------------------------------------------
    # Derived quantities
    # -----------------------------------------------------------------

    @property
    def wavelength(self) -> float:
        """speed * period (model convention, not SI)."""
        return self.speed * self.period

    @property
    def wavenumber(self) -> float:
        """1 / period (model convention, not 2*pi/lambda)."""
        return 1.0 / self.period

    @property
    def speed1(self) -> float:
        return 1.0 / self.refractive_index1

    @property
    def speed2(self) -> float:
        return 1.0 / self.refractive_index2

    @property
    def wrap_period(self) -> Optional[float]:
        if self.wrap_cycles is None:
            return None
        return self.wrap_cycles * self.period

    # -----------------------------------------------------------------
    # Validation
    # -----------------------------------------------------------------

    def validate(self) -> "SimulationConfig":
        """
        Check every bound. Returns self so calls can be chained.

        Raises:
            ValueError: naming the first field out of range
        """
        if self.mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}, got {self.mode!r}")
        if self.plot_quantity not in QUANTITIES:
            raise ValueError(f"plot_quantity must be one of {QUANTITIES}, got {self.plot_quantity!r}")

        for name, lower, upper, strict in _BOUNDS:
            value = getattr(self, name)
            if strict and not value > lower:
                raise ValueError(f"{name} must be > {lower}, got {value}")
            if not strict and not value >= lower:
                raise ValueError(f"{name} must be >= {lower}, got {value}")
            if upper is not None and value > upper:
                raise ValueError(f"{name} must be <= {upper}, got {value}")

        for name in ("grid_resolution", "num_points"):
            if int(getattr(self, name)) != getattr(self, name):
                raise ValueError(f"{name} must be an integer, got {getattr(self, name)}")

        if self.wrap_cycles is not None and self.wrap_cycles <= 0:
            raise ValueError(f"wrap_cycles must be > 0 or None, got {self.wrap_cycles}")

        return self

    def clamped(self) -> "SimulationConfig":
        """
        Copy with every bounded option pulled back into range.

        Emits a RuntimeWarning listing the adjusted options. The mode is not
        clamped (an unknown mode still raises).
        """
        changes = {}
        for name, lower, upper, strict in _BOUNDS:
            value = getattr(self, name)
            if strict and not value > lower:
                changes[name] = _STRICT_MINIMUM[name]
            elif not strict and value < lower:
                changes[name] = lower
            elif upper is not None and value > upper:
                changes[name] = upper

        for name in ("grid_resolution", "num_points"):
            value = changes.get(name, getattr(self, name))
            if int(value) != value:
                changes[name] = max(1, int(round(value)))

        if self.wrap_cycles is not None and self.wrap_cycles <= 0:
            changes["wrap_cycles"] = None

        if not changes:
            return self.validate()

        summary = ", ".join(f"{k}: {getattr(self, k)} -> {v}" for k, v in changes.items())
        warnings.warn(f"Configuration clamped ({summary})", RuntimeWarning, stacklevel=2)
        return dc_replace(self, **changes).validate()

    def replace(self, **changes) -> "SimulationConfig":
        """Validated copy with the given options changed."""
        return dc_replace(self, **changes).validate()

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}
