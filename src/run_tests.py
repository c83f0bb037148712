#!/usr/bin/env python3
"""
Run All Tests
=============

Portable test runner for the wave-field core. Works from any location:
    python3 src/run_tests.py

Or from within src/:
    python3 run_tests.py [--fast]

--fast deselects the timing tests marked slow.
"""

import os
import subprocess
import sys
from pathlib import Path


def main(argv=None):
    """Run all tests."""
    argv = sys.argv[1:] if argv is None else argv

    src_root = Path(__file__).parent.resolve()

    env = os.environ.copy()
    pythonpath = env.get('PYTHONPATH', '')
    if pythonpath:
        env['PYTHONPATH'] = f"{src_root}{os.pathsep}{pythonpath}"
    else:
        env['PYTHONPATH'] = str(src_root)

    cmd = [sys.executable, '-m', 'pytest', 'tests/', '-v', '--tb=short']
    if '--fast' in argv:
        cmd += ['-m', 'not slow']

    result = subprocess.run(cmd, cwd=src_root, env=env)
    return result.returncode


if __name__ == '__main__':
    sys.exit(main())
