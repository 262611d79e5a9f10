"""
Development Runner
==================
Starts the diagram straight from a source checkout.

The 'src' directory is put in front of 'sys.path', so 'earthcurve' resolves
to the working tree even when an older copy is installed.

Usage:
    $ python run.py
    $ EARTHCURVE_LOG_LEVEL=debug python run.py
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / 'src'))

from earthcurve.main import main

if __name__ == "__main__":
    main()
