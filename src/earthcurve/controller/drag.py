"""
Pointer drag tracking.

Turns raw press/move/release/cancel notifications into drag events that
carry both the pointer position and the delta since the previous event.
Positions are expected in diagram coordinates already; the view converts
them before calling in.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Union
import logging

from earthcurve.model.geometry_primitives import Coordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DragStart:
    position: Coordinate


@dataclass(frozen=True)
class DragMove:
    position: Coordinate
    delta: Coordinate


@dataclass(frozen=True)
class DragEnd:
    position: Coordinate
    delta: Coordinate


@dataclass(frozen=True)
class DragCancel:
    original: Coordinate
    delta: Coordinate


DragEvent = Union[DragStart, DragMove, DragEnd, DragCancel]
DragListener = Callable[[DragEvent], None]


class DragTracker:
    """State machine for a single draggable element."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._listeners: list[DragListener] = []
        self._original: Optional[Coordinate] = None
        self._previous: Optional[Coordinate] = None

    @property
    def active(self) -> bool:
        return self._original is not None

    def connect(self, listener: DragListener) -> None:
        self._listeners.append(listener)

    def disconnect(self, listener: DragListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def press(self, position: Coordinate) -> None:
        self._original = position
        self._previous = position
        self._emit(DragStart(position=position))

    def move(self, position: Coordinate) -> None:
        if self._previous is None:
            return
        delta = position - self._previous
        self._previous = position
        self._emit(DragMove(position=position, delta=delta))

    def release(self, position: Coordinate) -> None:
        if self._previous is None:
            return
        delta = position - self._previous
        self._reset()
        self._emit(DragEnd(position=position, delta=delta))

    def cancel(self) -> None:
        """Abort the drag; the delta leads back to where it started."""
        if self._original is None or self._previous is None:
            return
        original = self._original
        delta = original - self._previous
        self._reset()
        self._emit(DragCancel(original=original, delta=delta))

    def _reset(self) -> None:
        self._original = None
        self._previous = None

    def _emit(self, event: DragEvent) -> None:
        logger.debug(f"Drag '{self.name}': {event}")
        for listener in list(self._listeners):
            listener(event)
