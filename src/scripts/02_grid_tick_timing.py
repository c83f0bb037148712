#!/usr/bin/env python3
"""
Grid Tick Timing
================

QUESTION: How long does one animation tick of the full field grid take
at the resolutions the demo pages offer?

INPUTS
------

  - Interference mode: two attenuated sources
  - Refraction mode: one source, boundary at x = 0, n1 = 1.5, n2 = 1.0
    (exercises the undefined / TIR path)
  - grid_resolution ∈ {50, 100, 200, 400}

OUTPUTS
-------

  - Samples per tick, mean milliseconds per tick, undefined sample count
  - Whether a 60 fps budget (16.7 ms) is met

Each tick reuses the grid buffers and the per-epoch spatial cache, so the
per-tick cost is one sin() per sample and source plus colour classification.

Oct 2026
"""

import sys
import time
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
from wavefield import SimulationConfig, WaveSimulation


RESOLUTIONS = [50, 100, 200, 400]
FRAME_BUDGET_MS = 1000.0 / 60.0


def time_ticks(config: SimulationConfig, n_ticks: int = 30) -> dict:
    """Mean wall time per tick after one warm-up tick."""
    sim = WaveSimulation(config)
    sim.tick(1 / 60)

    start = time.perf_counter()
    for _ in range(n_ticks):
        frame = sim.tick(1 / 60)
    elapsed = time.perf_counter() - start

    return {
        'samples': frame.displacement.size,
        'ms_per_tick': elapsed / n_ticks * 1e3,
        'undefined': int(np.count_nonzero(~frame.defined)),
        'finite': bool(np.all(np.isfinite(frame.displacement))),
    }


def run_timing(n_ticks: int = 30):
    print("="*70)
    print("GRID TICK TIMING")
    print("="*70)
    print()
    print(f"{'mode':<13} {'res':>5} {'samples':>9} | {'ms/tick':>8} {'undef':>7} | {'60 fps':<6}")
    print("-"*70)

    rows = []
    for mode in ("interference", "refraction"):
        for res in RESOLUTIONS:
            config = SimulationConfig(mode=mode, grid_resolution=res,
                                      refractive_index1=1.5, refractive_index2=1.0)
            r = time_ticks(config, n_ticks)
            ok = "✓" if r['ms_per_tick'] < FRAME_BUDGET_MS else "✗"
            print(f"{mode:<13} {res:5d} {r['samples']:9d} | {r['ms_per_tick']:8.2f} "
                  f"{r['undefined']:7d} | {ok}")
            assert r['finite'], f"non-finite displacement ({mode}, res={res})"
            rows.append((mode, res, r))
        print()

    return rows


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Time grid ticks across resolutions")
    parser.add_argument("--ticks", type=int, default=30, help="Ticks averaged per row")
    args = parser.parse_args()

    run_timing(args.ticks)
