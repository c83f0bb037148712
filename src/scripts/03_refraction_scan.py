#!/usr/bin/env python3
"""
Refraction Scan
===============

QUESTION: How does the transmitted field change with the index contrast,
and does the Fermat ray obey Snell's law?

INPUTS
------

  - Source at (-20, 0), boundary at x = 0, period T = 1
  - n1 = 1.0 fixed, n2 ∈ {0.6, 0.8, 1.0, 1.5, 2.0}; n2 < n1 enters the
    faster medium and has a critical angle
  - Probe point (15, 12) in the second medium

OUTPUTS
-------

  - Critical angle (degrees) or '-' when every ray transmits
  - Fraction of undefined (TIR) samples on the default 70 x 70 grid
  - Boundary crossing z_c of the Fermat ray and the Snell residual
        |sin θ1 / v1 - sin θ2 / v2|
  - Largest displacement jump across x = 0

n2 < 1 is outside the UI range (indices >= 1) and is built here directly
from RefractionMedium to show the TIR branch.

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
from wavefield import FieldGrid, RefractionField, RefractionMedium


N1 = 1.0
N2_VALUES = [0.6, 0.8, 1.0, 1.5, 2.0]
PROBE = (15.0, 12.0)


def boundary_jump(field: RefractionField, t: float = 0.3, eps: float = 1e-7) -> float:
    """Max |y(b⁺) - y(b⁻)| along the boundary over the defined samples."""
    b = field.medium.boundary_x
    z = np.linspace(-35.0, 35.0, 141)
    left, ok_left = field.evaluate(np.stack([np.full_like(z, b - eps), z], axis=-1), t)
    right, ok_right = field.evaluate(np.stack([np.full_like(z, b + eps), z], axis=-1), t)
    both = ok_left & ok_right
    if not np.any(both):
        return 0.0
    return float(np.max(np.abs(left[both] - right[both])))


def scan(resolution: int = 140):
    print("="*70)
    print("REFRACTION SCAN")
    print("="*70)
    print()
    print(f"{'n2':>5} {'v2/v1':>6} {'θc':>7} | {'undef':>6} | {'z_c':>7} {'snell':>9} | {'jump':>9}")
    print("-"*70)

    grid = FieldGrid(resolution)
    rows = []
    for n2 in N2_VALUES:
        medium = RefractionMedium.from_indices(N1, n2)
        field = RefractionField(medium, period=1.0)
        grid.bind(field)
        grid.update(0.0)

        undefined = 1.0 - np.count_nonzero(grid.defined) / grid.sample_count
        theta_c = medium.critical_angle()
        theta_str = f"{np.degrees(theta_c):6.2f}°" if theta_c is not None else "      -"

        ray = field.ray_path(PROBE)
        residual = abs(np.sin(ray.incident_angle) / medium.speed1
                       - np.sin(ray.refracted_angle) / medium.speed2)
        jump = boundary_jump(field)

        print(f"{n2:5.2f} {medium.speed_ratio:6.3f} {theta_str} | {undefined:6.1%} | "
              f"{ray.crossing[1]:7.3f} {residual:9.2e} | {jump:9.2e}")
        rows.append((n2, undefined, ray, residual, jump))

    print()
    worst = max(r[3] for r in rows)
    print(f"Worst Snell residual: {worst:.2e}")
    print(f"Worst boundary jump:  {max(r[4] for r in rows):.2e}")
    return rows


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Scan refraction across index contrasts")
    parser.add_argument("--resolution", type=int, default=140, help="Grid resolution")
    args = parser.parse_args()

    scan(args.resolution)
