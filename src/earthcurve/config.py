"""
Configuration & Constants
=========================
This module serves as the central registry for numerical tolerances and
diagram defaults.

Why is this file needed?
------------------------
Consistency: the geometry core, the controllers and the tests all share the
same thresholds instead of scattering magic numbers.

Exports:
    FLAT_CONTROL_EPSILON (float): |control| below this renders a flat Earth.
    MOTION_EPSILON_SQ (float): squared pointer motion treated as no motion.
    PIN_EPSILON (float): minimal distance between a pin and a dragged point.
"""

# Numerical tolerances
FLAT_CONTROL_EPSILON: float = 1e-4
MOTION_EPSILON_SQ: float = 1e-12
PIN_EPSILON: float = 1e-6

# Curvature control: +1 globe, 0 flat, -1 hollow Earth
CONTROL_RANGE: tuple[float, float] = (-1.0, 1.0)
DEFAULT_CONTROL: float = 1.0
CONTROL_PRESETS: dict[str, float] = {
    "Globe": 1.0,
    "Flat": 0.0,
    "Hollow": -1.0,
}

# Drawing
OUTLINE_SAMPLES: int = 181
RAY_LENGTH: float = 0.35
HANDLE_ENDPOINTS: dict[str, tuple[float, float]] = {
    "a": (-1.2, -0.6),
    "b": (1.2, -0.6),
}

# Keys in the navigation history state
CONTROL_KEY: str = "control"
VIEW_KEY: str = "view"
MAX_HISTORY_ENTRIES: int = 200

LOG_LEVEL_ENV: str = "EARTHCURVE_LOG_LEVEL"
