"""Pytest configuration and shared fixtures for the wave-field tests."""
import sys
from pathlib import Path

import numpy as np
import pytest


def pytest_configure(config):
    """Add src/ to path before any test imports."""
    src_root = Path(__file__).parent.parent.parent
    if str(src_root) not in sys.path:
        sys.path.insert(0, str(src_root))


# Also do it at module level for import ordering
src_root = Path(__file__).parent.parent.parent
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))


from wavefield.field import WaveSource, two_source_layout  # noqa: E402


@pytest.fixture(scope='module')
def source_pair():
    """Interference pair of the default page: d=20, T=1, no phase shift."""
    return two_source_layout(source_distance=20.0, period=1.0)


@pytest.fixture(scope='module')
def random_points():
    rng = np.random.default_rng(42)
    return rng.uniform(-35.0, 35.0, size=(200, 2))


@pytest.fixture(scope='module')
def off_axis_source():
    return WaveSource(position=(3.0, -7.5), period=0.7, phase_offset=1.1, base_amplitude=1.3)

