"""
Pytest Configuration
====================

Loaded by pytest before the suite under tests/. Puts src/ on sys.path so
the wavefield package imports from a plain checkout, and prints the
numerical stack in the session header (timing results depend on it).

Usage:
    cd src
    pytest tests/ -v
    pytest tests/ -m "not slow"
"""

import sys
from pathlib import Path

src_root = Path(__file__).parent
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))


def pytest_report_header(config):
    import numpy as np
    import scipy
    return f"wavefield stack: numpy {np.__version__}, scipy {scipy.__version__}"
