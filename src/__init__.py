"""
wavefield source tree: the simulation package, its scripts and tests.

Fails early on a numerical stack older than the one declared in
pyproject.toml (brentq xtol, cdist on (N, 2) float arrays).
"""

import numpy
import scipy

_MINIMUM_VERSIONS = ((numpy, (1, 20)), (scipy, (1, 7)))


def _release(version: str):
    return tuple(int(p) for p in version.split('.')[:2] if p.isdigit())


for _module, _minimum in _MINIMUM_VERSIONS:
    if _release(_module.__version__) < _minimum:
        raise ImportError(f"wavefield needs {_module.__name__} >= "
                          f"{'.'.join(map(str, _minimum))}, got {_module.__version__}")
