"""
Shared fixtures for the earthcurve tests.

Provides seeded random case generators for the property tests, fresh
diagram state and a controller wired to it.
"""
import sys
import os

import numpy as np
import pytest

# Ensure src is on the path when the package is not installed
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from earthcurve.model.geometry_primitives import Coordinate


# ── Random cases ────────────────────────────────────────────────────────

N_CASES = 50
COORD_RANGE = 100.0


def make_rng(seed):
    return np.random.default_rng(seed)


def random_coordinate(rng, low=-COORD_RANGE, high=COORD_RANGE):
    x, y = rng.uniform(low, high, size=2)
    return Coordinate(float(x), float(y))


def random_coordinates(seed, count, n_cases=N_CASES, min_distance=1.0):
    """
    ``n_cases`` tuples of ``count`` random coordinates, no two of which lie
    closer than ``min_distance`` to each other.
    """
    rng = make_rng(seed)
    cases = []
    while len(cases) < n_cases:
        points = [random_coordinate(rng) for _ in range(count)]
        if all(
            p.distance_to(q) >= min_distance
            for i, p in enumerate(points) for q in points[i + 1:]
        ):
            cases.append(tuple(points))
    return cases


def assert_coordinates_close(actual, expected, rel=1e-7, abs_=1e-6):
    assert actual.x == pytest.approx(expected.x, rel=rel, abs=abs_)
    assert actual.y == pytest.approx(expected.y, rel=rel, abs=abs_)


# ── State fixtures ──────────────────────────────────────────────────────

@pytest.fixture
def history():
    from earthcurve.model.state import NavigationHistory
    return NavigationHistory()


@pytest.fixture
def diagram_state(history):
    from earthcurve.model.state import DiagramState
    return DiagramState(history)


@pytest.fixture
def controller(diagram_state):
    from earthcurve.controller.diagram import DiagramController
    return DiagramController(diagram_state, endpoints={"a": (-1.0, 0.0), "b": (1.0, 0.0)})
