#!/usr/bin/env python3
"""
Circular Motion / SHM State Table
=================================

QUESTION: Does the projected circular motion reproduce simple harmonic
motion, and how far has the propagation ring's front travelled?

INPUTS
------

  - period T = 4, radius r = 60
  - rotation angle 90° (edge-on: pure SHM) and 30° (tilted)
  - ring of N = 24 points, delay_i = (i/N)·T

OUTPUTS
-------

  - θ, position, velocity and acceleration (y-components) every T/8
  - Number of ring points already moving
  - Check a_y = -ω² · y (SHM)

EXPECTED OUTPUT (90°, first rows):
       t   θ [°] | periods eighths |      y      v_y      a_y | moving
    0.00    0.00 |       0       0 |   0.00    94.25    -0.00 |  0/24
    0.50   45.00 |       0       1 | -42.43    66.64   104.68 |  3/24

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

import numpy as np
from wavefield import CircularMotionProjector


PERIOD = 4.0
RADIUS = 60.0
NUM_POINTS = 24


def state_table(rotation_angle: float, n_rows: int = 17):
    proj = CircularMotionProjector(PERIOD, RADIUS, rotation_angle)
    w = proj.angular_frequency

    print(f"ROTATION {rotation_angle:.0f}°")
    print(f"{'t':>6} {'θ [°]':>7} | {'periods':>7} {'eighths':>7} | "
          f"{'y':>6} {'v_y':>8} {'a_y':>8} | moving")
    print("-"*70)

    worst = 0.0
    for t in np.arange(n_rows) * PERIOD / 8:
        state = proj.state(t)
        turns, eighths = proj.period_fraction(t)
        moving = int(np.count_nonzero(np.arange(NUM_POINTS) / NUM_POINTS * PERIOD < t))
        y, vy, ay = state.position[1], state.velocity[1], state.acceleration[1]
        worst = max(worst, abs(ay + w**2 * y))
        print(f"{t:6.2f} {proj.theta_degrees(t):7.2f} | {turns:7d} {eighths:7d} | "
              f"{y:6.2f} {vy:8.2f} {ay:8.2f} | {moving:2d}/{NUM_POINTS}")

    print()
    print(f"max |a_y + ω² y| = {worst:.2e}")
    print()
    return worst


def main():
    print("="*70)
    print("CIRCULAR MOTION / SHM STATE TABLE")
    print("="*70)
    print()
    print(f"T = {PERIOD}, r = {RADIUS}, ω = 2π/T = {2 * np.pi / PERIOD:.4f}")
    print()

    residuals = [state_table(angle) for angle in (90.0, 30.0)]
    assert max(residuals) < 1e-9
    print("✓ Projected motion is simple harmonic in y")


if __name__ == "__main__":
    main()
