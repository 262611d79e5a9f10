"""
Earth Cross-Section
===================
Maps a single curvature control value to the geometry of the Earth's
surface as drawn in the diagram.

    +1: Globe Earth
     0: Flat Earth
    -1: Hollow Earth

The flat case is a straight line of unit width. Every other value is a
circular segment whose path length stays constant, so animating the
control value morphs the outline smoothly between the hypotheses.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union, TYPE_CHECKING
import logging
import math

import numpy as np

from earthcurve.config import FLAT_CONTROL_EPSILON, OUTLINE_SAMPLES
from earthcurve.model.geometry_primitives import Coordinate

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class EarthType(Enum):
    FLAT = "flat"
    CURVED = "curved"


class CurvatureType(Enum):
    CONVEX = "convex"
    CONCAVE = "concave"


@dataclass(frozen=True)
class SurfaceAt:
    """A point on the surface and the unit normal pointing away from the interior."""
    point: Coordinate
    normal: Coordinate

    @property
    def tangent(self) -> Coordinate:
        """Unit tangent, pointing from north towards south along the surface."""
        return Coordinate(self.normal.y, -self.normal.x)


@dataclass(frozen=True)
class FlatEarthParams:
    surface_at: Callable[[float], SurfaceAt]
    width: float
    height: float

    type = EarthType.FLAT

    def outline(self, n_points: int = OUTLINE_SAMPLES) -> npt.NDArray[np.float64]:
        return _sample_outline(self.surface_at, n_points)


@dataclass(frozen=True)
class CurvedEarthParams:
    curvature_type: CurvatureType
    surface_at: Callable[[float], SurfaceAt]
    width: float
    height: float
    segment_angle: float
    circle_scale: float
    circle_offset: float

    type = EarthType.CURVED

    @property
    def center(self) -> Coordinate:
        """Center of the circle the surface lies on."""
        return Coordinate(0.0, self.circle_offset)

    def outline(self, n_points: int = OUTLINE_SAMPLES) -> npt.NDArray[np.float64]:
        return _sample_outline(self.surface_at, n_points)


EarthParams = Union[FlatEarthParams, CurvedEarthParams]


def _sample_outline(surface_at: Callable[[float], SurfaceAt], n_points: int) -> npt.NDArray[np.float64]:
    """Sample the surface from latitude -90 to 90 into an (N, 2) polyline."""
    if n_points < 2:
        raise ValueError(f"An outline needs at least 2 points, got {n_points}.")
    latitudes = np.linspace(-90.0, 90.0, n_points)
    return np.array([surface_at(float(lat)).point.to_tuple() for lat in latitudes])


def _flat_surface_at(latitude: float) -> SurfaceAt:
    return SurfaceAt(
        point=Coordinate(-latitude / 90, 0.0),
        normal=Coordinate(0.0, 1.0),
    )


def compute_parameters(control: float) -> EarthParams:
    """
    Compute the cross-section geometry for a curvature control value.

    Args:
        control: Curvature control. Positive values bend the surface into a
            globe, negative values into a hollow Earth. Not clamped.

    Returns:
        FlatEarthParams when |control| is below FLAT_CONTROL_EPSILON,
        CurvedEarthParams otherwise.
    """
    if abs(control) < FLAT_CONTROL_EPSILON:
        logger.debug(f"control={control}: flat Earth")
        return FlatEarthParams(surface_at=_flat_surface_at, width=1.0, height=0.0)

    curvature_type = CurvatureType.CONVEX if control >= 0 else CurvatureType.CONCAVE
    sign = float(np.sign(control))

    # Given a segment angle a, drawing the segment with a constant width would
    # need circle_scale = 1 / sin(a). The segment height is then
    #
    #     height = (1 - cos(a)) / sin(a) = tan(a/2)   =>   a = 2 atan(height)
    #
    # so taking the control as that height moves smoothly. The segment is
    # scaled by 1 / a though, which keeps the path length constant instead.
    segment_angle = 2 * math.atan(abs(control))
    circle_scale = 1.0 / segment_angle
    earth_width = circle_scale * math.sin(segment_angle)
    earth_height = sign * circle_scale * (1 - math.cos(segment_angle))
    circle_offset = float(np.sign(earth_height)) * -circle_scale + 0.5 * earth_height

    def surface_at(latitude: float) -> SurfaceAt:
        angle = sign * ((latitude / 90) * segment_angle + 0.5 * math.pi)
        c_angle = math.cos(angle)
        s_angle = math.sin(angle)
        return SurfaceAt(
            point=Coordinate(circle_scale * c_angle, circle_offset + circle_scale * s_angle),
            normal=Coordinate(sign * c_angle, sign * s_angle),
        )

    logger.debug(
        f"control={control}: {curvature_type.value} Earth, "
        f"segment_angle={segment_angle:.6f}, circle_scale={circle_scale:.6f}"
    )
    return CurvedEarthParams(
        curvature_type=curvature_type,
        surface_at=surface_at,
        width=earth_width,
        height=earth_height,
        segment_angle=segment_angle,
        circle_scale=circle_scale,
        circle_offset=circle_offset,
    )
