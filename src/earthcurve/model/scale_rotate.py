"""
Pin-Scale-Rotate Composition
============================
Turns drag gestures on a handle into an affine transform.

Each step describes a point being dragged from ``prev_pos`` to ``pos``
while another point, the pin, stays put. The only similarity transform
that does this scales and rotates about the pin. A sequence of steps is
folded into one transform, in order.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable
import logging
import math

from earthcurve.config import MOTION_EPSILON_SQ, PIN_EPSILON
from earthcurve.exceptions import DegenerateStepError
from earthcurve.model.geometry_primitives import AffineTransform, Coordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScaleRotateStep:
    pin: Coordinate
    pos: Coordinate
    prev_pos: Coordinate

    def inverted(self) -> ScaleRotateStep:
        """The step that undoes this one."""
        return ScaleRotateStep(pin=self.pin, pos=self.prev_pos, prev_pos=self.pos)


def step_transform(step: ScaleRotateStep) -> AffineTransform:
    """
    Transform for a single step, or identity when the point did not move.

    Raises:
        DegenerateStepError: if ``pos`` or ``prev_pos`` lies on the pin.
    """
    pin, pos, prev_pos = step.pin, step.pos, step.prev_pos
    if (pos - prev_pos).squared_magnitude < MOTION_EPSILON_SQ:
        return AffineTransform.identity()

    pos_o = pos - pin
    prev_pos_o = prev_pos - pin

    length = pos_o.magnitude
    prev_length = prev_pos_o.magnitude
    if length < PIN_EPSILON or prev_length < PIN_EPSILON:
        raise DegenerateStepError(length, prev_length)

    scale_factor = length / prev_length
    # Raw difference of atan2 results, not wrapped into (-pi, pi]
    angle_diff = math.atan2(pos_o.y, pos_o.x) - math.atan2(prev_pos_o.y, prev_pos_o.x)

    translate_to_origin = AffineTransform.translation(-pin.x, -pin.y)
    return (
        translate_to_origin
        .pre_multiply(AffineTransform.scaling(scale_factor))
        .pre_multiply(AffineTransform.rotation(angle_diff))
        .pre_multiply(AffineTransform.translation(pin.x, pin.y))
    )


def scale_rotate(steps: Iterable[ScaleRotateStep]) -> AffineTransform:
    """
    Apply a sequence of transformations where each scales and rotates by a
    point moving about a pinned point.

    Each step in the sequence is specified in the same coordinate space, and
    later steps apply after earlier ones.

    Args:
        steps: The drag steps, oldest first.

    Returns:
        The composed transform. Identity for an empty sequence.

    Raises:
        DegenerateStepError: if any step has its point within PIN_EPSILON of
            its pin. Nothing is returned for the steps processed so far.
    """
    matrix = AffineTransform.identity()
    count = 0
    for count, step in enumerate(steps, start=1):
        matrix = matrix.pre_multiply(step_transform(step))
    logger.debug(f"Composed {count} scale/rotate steps: {matrix.to_svg()}")
    return matrix
