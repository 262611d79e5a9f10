"""
Sun-angle observations.

Each record is a stick of known height measured together with the length
of its shadow at local noon. Shadows are negative where they point south.
Source: a crowd-sourced spreadsheet of equinox measurements.
"""
from __future__ import annotations

from dataclasses import dataclass
import math

from earthcurve.config import RAY_LENGTH
from earthcurve.model.earth import EarthParams
from earthcurve.model.geometry_primitives import Coordinate


@dataclass(frozen=True)
class Observation:
    latitude: float
    angle: float  # sun elevation above the horizon, radians


# (latitude, stick height, shadow length)
RAW_OBSERVATIONS: tuple[tuple[float, float, float], ...] = (
    (-45.2, 1001, -2575),
    (-41.8, 75, -170),
    (-37.8, 425, -773),
    (-35.2, 58.2, -97.6),
    (-30, 1.2, -1.6),
    (-27.4, 14.7, -18),
    (-27.2, 1300, -1520),
    (34, 23.4, 3.95),
    (34, 12, 1.81),
    (34.1, 118.55, 21.6),
    (37, 69, 16),
    (37.8, 48, 12),
    (42, 30, 11.5),
    (44.1, 62.5, 23),
    (44.2, 60, 22.6),
    (45.4, 110, 47),
    (45.6, 12, 4.73),
    (47, 51, 23.5),
    (50.9, 150, 82),
    (51.5, 31.8, 16.7),
    (52.2, 293, 162.4),
    (52.3, 210, 116.6),
    (52.5, 150.7, 84.5),
    (53.4, 152, 92),
    (53.6, 121.4, 69.5),
    (53.8, 42.5, 21.8),
    (59.2, 119.5, 86),
    (59.4, 150, 110),
    (61.5, 80, 61.8),
    (61.5, 1692, 1242),
    (66.9, 79.5, 75),
)


def observation_from_shadow(latitude: float, stick_height: float, shadow_length: float) -> Observation:
    return Observation(latitude=latitude, angle=math.atan2(stick_height, shadow_length))


OBSERVATIONS: tuple[Observation, ...] = tuple(
    observation_from_shadow(latitude, stick_height, shadow_length)
    for latitude, stick_height, shadow_length in RAW_OBSERVATIONS
)


def observation_ray(
    params: EarthParams,
    observation: Observation,
    length: float = RAY_LENGTH
) -> tuple[Coordinate, Coordinate]:
    """
    Segment pointing from the observer towards the sun.

    The ray leaves the surface point at the observation's latitude, tilted
    from the local tangent (towards the south) by the sun elevation angle.

    Returns:
        (start, end) coordinates in diagram space.
    """
    surface = params.surface_at(observation.latitude)
    direction = (
        surface.tangent * math.cos(observation.angle)
        + surface.normal * math.sin(observation.angle)
    )
    return surface.point, surface.point + direction * length


def observation_rays(
    params: EarthParams,
    observations: tuple[Observation, ...] = OBSERVATIONS,
    length: float = RAY_LENGTH
) -> list[tuple[Coordinate, Coordinate]]:
    return [observation_ray(params, obs, length) for obs in observations]
