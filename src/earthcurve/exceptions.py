"""Exception types raised by the earthcurve package."""
from __future__ import annotations


class EarthCurveError(Exception):
    """Base class for all errors raised by earthcurve."""


class DegenerateStepError(EarthCurveError, ValueError):
    """A scale/rotate step whose dragged point sits on top of its pin."""

    def __init__(self, length: float, prev_length: float) -> None:
        self.length = length
        self.prev_length = prev_length
        super().__init__(
            f"Extremely small length: length={length} prevLength={prev_length}"
        )


class SingularTransformError(EarthCurveError, ValueError):
    """Raised when inverting a transform whose linear part is singular."""


class InvalidElementError(EarthCurveError, TypeError):
    """Drag behaviour attached to something that is not a graphics item."""


class MissingStateError(EarthCurveError, KeyError):
    """A history store update found no previous value to update."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"No previous state to update for key '{key}'")

    def __str__(self) -> str:
        # KeyError quotes its argument, keep the message readable instead
        return self.args[0]
