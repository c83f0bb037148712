"""
Wave Simulation Driver
======================

Frame-driven orchestration of the demos around one SimulationConfig.

CONTROL FLOW:
    host scheduler -> tick(dt)
        paused?                    -> return the last frame untouched
        clock.advance(dt)
        pending configuration?     -> rebuild sources / evaluator / caches
        recompute for the mode     -> grid buffers, ring, plot, phasors
        probe selected?            -> append composite displacement
        -> Frame (read-only views, valid until the next tick)

    select_point() / ray_to() / clear_probe() are out-of-band events between
    ticks. A staged configuration they apply is recomputed into frame() at
    once, so the frame never lags the config while paused.

MODES:
    interference  two attenuated point sources on a (resolution+1)² grid
    refraction    one source, planar boundary, Snell's law
    circular      circular motion / SHM projection with propagation ring
    beats         two 1-D waves and their phasors

Execution is single threaded; nothing here blocks or schedules.

Oct 2026
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .circular import CircularMotionProjector, MotionState, PlotHistory
from .clock import SimulationClock
from .config import SimulationConfig
from .constants import BEAT_FRAME_RATE, BEAT_TIME_STEP, REFRACTION_SOURCE_POSITION
from .field import FieldGrid, PointSourceField, WaveSource, sample_line, two_source_layout
from .interference import TwoWaveInterference
from .probe import ProbeAnalyzer, ProbeResult
from .refraction import RayPath, RefractionField, RefractionMedium


GRID_MODES = ("interference", "refraction")


@dataclass
class Frame:
    """
    Per-tick output handed to the renderer.

    Grid arrays are read-only views of buffers owned by the simulation and
    are None outside the grid modes.
    """
    time: float
    mode: str
    epoch: int
    displacement: Optional[np.ndarray] = None
    colors: Optional[np.ndarray] = None
    category: Optional[np.ndarray] = None
    defined: Optional[np.ndarray] = None
    source_states: Optional[List[MotionState]] = None
    probe: Optional[ProbeResult] = None
    probe_displacement: Optional[float] = None
    probe_lines: Optional[List[Tuple[np.ndarray, np.ndarray]]] = None
    ring: Optional[Tuple[np.ndarray, np.ndarray]] = None
    trailing_ring: Optional[Tuple[np.ndarray, np.ndarray]] = None
    plot: Optional[Tuple[np.ndarray, np.ndarray]] = None
    profiles: Optional[Tuple[np.ndarray, np.ndarray, np.ndarray]] = None
    phasors: Optional[Tuple[np.ndarray, np.ndarray, np.ndarray]] = None


class WaveSimulation:
    """
    Owns the clock, the field grid and the probe for one demo page.

    Args:
        config: SimulationConfig (validated here; invalid raises ValueError)
    """

    def __init__(self, config: Optional[SimulationConfig] = None):
        config = (config if config is not None else SimulationConfig()).validate()

        self.config = config
        self.epoch = 0
        self.clock = SimulationClock(speed=self._clock_speed(config),
                                     wrap_period=self._wrap_period(config))
        self.grid = FieldGrid(config.grid_resolution, config.extent)
        self.probe = ProbeAnalyzer()
        self.history: Optional[PlotHistory] = None
        self._pending: Optional[SimulationConfig] = None
        self._frame: Optional[Frame] = None

        self.clock.on_reset(self._on_clock_reset)
        self._build(config)
        self._recompute()

    # -----------------------------------------------------------------
    # Configuration
    # -----------------------------------------------------------------

    @staticmethod
    def _clock_speed(config: SimulationConfig) -> float:
        if config.mode == "beats":
            return BEAT_TIME_STEP * BEAT_FRAME_RATE * config.speed * config.time_scale
        return config.time_scale

    @staticmethod
    def _wrap_period(config: SimulationConfig) -> Optional[float]:
        if config.mode in ("interference", "circular"):
            return config.wrap_period
        return None

    def configure(self, **changes) -> SimulationConfig:
        """
        Stage a new configuration epoch; applied at the next tick.

        Raises:
            ValueError / TypeError: invalid or unknown option (nothing staged)
        """
        base = self._pending if self._pending is not None else self.config
        self._pending = base.replace(**changes)
        return self._pending

    def _sync(self) -> bool:
        """Apply a staged configuration. Returns True if one was applied."""
        if self._pending is None:
            return False
        config, self._pending = self._pending, None
        mode_changed = config.mode != self.config.mode
        self.config = config
        self.clock.speed = self._clock_speed(config)
        self.clock.set_wrap_period(self._wrap_period(config))
        if mode_changed:
            self.probe.clear()
            self.clock.reset()
        self._build(config)
        return True

    def _sync_out_of_band(self):
        """Apply staged edits between ticks, keeping frame() in step with them."""
        if self._sync():
            self._recompute()

    def _build(self, config: SimulationConfig):
        self.epoch += 1
        self.sources: Tuple[WaveSource, ...] = ()
        self.evaluator = None
        self.projector = None
        self.history = None
        self.beats = None

        if config.mode == "interference":
            self.sources = two_source_layout(config.source_distance, config.period,
                                             config.phase_shift, config.amplitude)
            self.evaluator = PointSourceField(self.sources, config.attenuation,
                                              angular_speed=config.speed)
        elif config.mode == "refraction":
            medium = RefractionMedium.from_indices(config.refractive_index1,
                                                   config.refractive_index2,
                                                   config.boundary_x)
            self.evaluator = RefractionField(medium, config.period,
                                             REFRACTION_SOURCE_POSITION, config.amplitude)
            self.sources = (WaveSource(REFRACTION_SOURCE_POSITION, config.period,
                                       0.0, config.amplitude),)
        elif config.mode == "circular":
            self.projector = CircularMotionProjector(config.period, config.radius,
                                                     config.rotation_angle)
            self.history = PlotHistory(self.projector, config.plot_quantity)
        else:
            self.beats = TwoWaveInterference(config.beat_frequency1, config.beat_frequency2,
                                             config.beat_phase1, config.beat_phase2,
                                             config.beat_scale, config.radius)

        if self.evaluator is not None:
            self.grid.resize(config.grid_resolution, config.extent)
            self.grid.bind(self.evaluator)

        # Wavelength may have changed under an existing selection
        if self.probe.active and config.mode == "interference":
            self.probe.select_point(self.probe.result.selected_point, self.sources,
                                    config.speed, config.period)

    # -----------------------------------------------------------------
    # Per-tick
    # -----------------------------------------------------------------

    def tick(self, dt: float) -> Frame:
        """Advance one frame. While paused the previous frame is returned as is."""
        if not self.clock.running:
            return self._frame
        self.clock.advance(dt)
        self._sync()
        self._recompute()
        return self._frame

    def frame(self) -> Frame:
        return self._frame

    def _source_projector(self, source: WaveSource) -> CircularMotionProjector:
        """
        Rotating phase of a source, matched to the field at the source.

        Interference sources oscillate at ω = speed, the refraction source at
        ω = 2π/T; the circle radius is the source amplitude.
        """
        c = self.config
        if c.mode == "interference":
            period = 2 * np.pi / c.speed
        else:
            period = source.period
        return CircularMotionProjector(period, source.base_amplitude, c.rotation_angle,
                                       source.phase_offset)

    def _source_states(self, t: float) -> List[MotionState]:
        return [self._source_projector(s).state(t) for s in self.sources]

    def _recompute(self):
        c = self.config
        t = self.clock.time
        frame = Frame(time=t, mode=c.mode, epoch=self.epoch)

        if c.mode in GRID_MODES:
            self.grid.update(t, c.black_threshold)
            frame.displacement = self.grid.displacement
            frame.colors = self.grid.colors
            frame.category = self.grid.category
            frame.defined = self.grid.defined
            frame.source_states = self._source_states(t)

        if c.mode == "interference" and self.probe.active:
            frame.probe = self.probe.result
            frame.probe_displacement = self.probe.record(self.sources, t, c.attenuation, c.speed)
            x, _, z = self.probe.result.selected_point
            frame.probe_lines = [sample_line(s, (x, z), t, c.attenuation, c.speed)
                                 for s in self.sources]

        if c.mode == "circular":
            frame.source_states = [self.projector.state(t)]
            frame.ring = self.projector.ring_points(t, c.num_points)
            frame.trailing_ring = self.projector.ring_points(t, c.num_points, offset=c.period)
            self.history.update(t)
            frame.plot = (self.history.times, self.history.values)

        if c.mode == "beats":
            frame.profiles = self.beats.profiles(t)
            frame.phasors = self.beats.phasors(t)
            frame.source_states = [p.state(t) for p in self.beats.projectors()]

        self._frame = frame

    # -----------------------------------------------------------------
    # Out-of-band events
    # -----------------------------------------------------------------

    def select_point(self, x: float, y: float, z: float) -> ProbeResult:
        """
        Analyse path lengths to the two interference sources.

        Raises:
            ValueError: outside the interference mode
        """
        self._sync_out_of_band()
        if self.config.mode != "interference":
            raise ValueError(f"Point selection needs the interference mode, not {self.config.mode!r}")
        return self.probe.select_point((x, y, z), self.sources,
                                       self.config.speed, self.config.period)

    def clear_probe(self):
        self.probe.clear()

    def ray_to(self, x: float, z: float) -> RayPath:
        """Fermat ray from the refraction source to (x, z)."""
        self._sync_out_of_band()
        if self.config.mode != "refraction":
            raise ValueError(f"Ray tracing needs the refraction mode, not {self.config.mode!r}")
        return self.evaluator.ray_path((x, z))

    def set_running(self, running: bool):
        self.clock.set_running(running)

    def toggle(self) -> bool:
        return self.clock.toggle()

    def reset(self):
        """Back to t = 0, dropping plot history and probe trace."""
        self._sync()
        self.clock.reset()
        self._recompute()

    def _on_clock_reset(self):
        if self.history is not None:
            self.history.clear()
        self.probe.clear_trace()
