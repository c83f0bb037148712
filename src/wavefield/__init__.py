"""
Wave Field Core
===============

Deterministic, time-parameterized wave demos: circular motion and simple
harmonic motion, two-source interference, refraction at a boundary.

Modules:
    constants    - Numerical constants and defaults
    config       - SimulationConfig (configuration surface, validation)
    clock        - SimulationClock (advance, wrap, pause, reset)
    circular     - CircularMotionProjector, propagation ring, PlotHistory
    field        - WaveSource, PointSourceField, FieldGrid, colour classes
    refraction   - RefractionMedium, RefractionField, Fermat ray path
    probe        - ProbeAnalyzer (path difference in wavelengths)
    interference - TwoWaveInterference (1-D waves, phasors, beats)
    simulation   - WaveSimulation (tick / frame / probe orchestration)

Conventions:
    wavenumber = 1/period, wavelength = speed * period (not SI)
    the core is strictly 2-D: positions are (x, z); displacement is the
    third axis and belongs to the renderer

Oct 2026
"""

# Constants (import first, used by other modules)
from .constants import (
    ATTENUATION_LENGTH_SCALE,
    DEFAULT_AMPLITUDE,
    BELOW_THRESHOLD,
    GRADIENT,
    UNDEFINED,
    REFRACTION_SOURCE_POSITION,
)

from .config import SimulationConfig, MODES

from .clock import SimulationClock

from .circular import (
    CircularMotionProjector,
    MotionState,
    PlotHistory,
    phase_difference,
    project,
)

from .field import (
    WaveSource,
    PointSourceField,
    FieldGrid,
    two_source_layout,
    planar_distance,
    attenuated_amplitude,
    source_displacement,
    sample_line,
    classify_colors,
)

from .refraction import (
    RefractionMedium,
    RefractionField,
    RayPath,
)

from .probe import (
    ProbeAnalyzer,
    ProbeResult,
    analyze_point,
    decompose,
    interference_kind,
)

from .interference import TwoWaveInterference

from .simulation import WaveSimulation, Frame
