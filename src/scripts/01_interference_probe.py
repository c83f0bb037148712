#!/usr/bin/env python3
"""
Two-Source Interference Probe Table
===================================

QUESTION: Where between two in-phase sources is the path difference a
whole number of wavelengths (constructive) or a half-integer (destructive)?

INPUTS
------

  - Sources at (+d/2, 0) and (-d/2, 0), d = 20
  - period T = 1, speed = 2  ->  wavelength λ = speed · T = 2
  - Probe points on the source axis and off axis

OUTPUTS
-------

  - d1, d2, |d1 - d2| / λ, its integer and fractional parts
  - Classification (constructive / destructive / intermediate)
  - Composite displacement at t = 0 with the default attenuation

EXPECTED OUTPUT (axis points):
        x      z |     d1     d2 |   Δ/λ  int  frac | kind
      0.0    0.0 |  10.00  10.00 |  0.000    0 0.000 | constructive
      0.5    0.0 |   9.50  10.50 |  0.500    0 0.500 | destructive
      1.0    0.0 |   9.00  11.00 |  1.000    1 0.000 | constructive
     10.0    0.0 |   0.00  20.00 | 10.000   10 0.000 | constructive

Oct 2026
"""

import sys
from pathlib import Path


def _find_src():
    """Find src/ by looking for the wavefield/ package."""
    current = Path(__file__).resolve().parent
    for _ in range(10):
        candidate = current / 'src'
        if (candidate / 'wavefield').is_dir():
            return candidate
        if (current / 'wavefield').is_dir():
            return current
        current = current.parent
    raise RuntimeError("Cannot find src/wavefield directory")

sys.path.insert(0, str(_find_src()))

from wavefield import SimulationConfig, WaveSimulation, interference_kind


AXIS_POINTS = [(0.0, 0.0), (0.5, 0.0), (1.0, 0.0), (10.0, 0.0)]
OFF_AXIS_POINTS = [(0.0, 10.0), (5.0, 5.0), (-7.0, 12.0), (3.0, -20.0)]


def run_probe_table(config: SimulationConfig, points):
    """
    Probe each (x, z) point and print one table row.

    Returns list of ProbeResult.
    """
    sim = WaveSimulation(config)

    print(f"{'x':>7} {'z':>6} | {'d1':>6} {'d2':>6} | {'Δ/λ':>6} {'int':>4} {'frac':>5} | kind")
    print("-"*70)

    results = []
    for x, z in points:
        result = sim.select_point(x, 0.0, z)
        frame = sim.tick(0.0)
        kind = interference_kind(result) or "undefined"
        print(f"{x:7.1f} {z:6.1f} | {result.distance1:6.2f} {result.distance2:6.2f} | "
              f"{result.difference_in_wavelengths:6.3f} {result.integer_part:4d} "
              f"{result.fractional_part:5.3f} | {kind:<12} y={frame.probe_displacement:+.3f}")
        results.append(result)

    print()
    return results


def main():
    config = SimulationConfig(grid_resolution=50)

    print("="*70)
    print("TWO-SOURCE INTERFERENCE PROBE")
    print("="*70)
    print()
    print(f"d = {config.source_distance}, T = {config.period}, speed = {config.speed}"
          f"  ->  λ = {config.wavelength}")
    print()

    print("ON AXIS")
    axis = run_probe_table(config, AXIS_POINTS)
    print("OFF AXIS")
    run_probe_table(config, OFF_AXIS_POINTS)

    kinds = [interference_kind(r) for r in axis]
    assert kinds == ["constructive", "destructive", "constructive", "constructive"], kinds
    print("✓ Axis points classified as expected")
    return axis


if __name__ == "__main__":
    main()
