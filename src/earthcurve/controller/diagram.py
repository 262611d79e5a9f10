"""
Diagram Controller
==================
Connects user gestures to the diagram state.

Why is this file needed?
------------------------
1. Gestures: dragging one end of the ruler scales and rotates the whole
   diagram about the other end. The controller turns drag events into
   pin-scale-rotate steps and folds them into the stored view transform.
2. History: a gesture produces exactly one Undo entry. The first change of
   a gesture pushes a new history entry; the following changes replace it.
3. Geometry for the views: outlines and rays come out already transformed,
   so the views only have to draw.
"""
from __future__ import annotations

from functools import partial
from typing import Optional, TYPE_CHECKING
import logging

from earthcurve.config import HANDLE_ENDPOINTS, OUTLINE_SAMPLES, RAY_LENGTH
from earthcurve.controller.drag import DragCancel, DragEnd, DragEvent, DragMove, DragStart, DragTracker
from earthcurve.exceptions import DegenerateStepError
from earthcurve.model.earth import EarthParams, compute_parameters
from earthcurve.model.geometry_primitives import AffineTransform, Coordinate
from earthcurve.model.observations import OBSERVATIONS, Observation, observation_rays
from earthcurve.model.scale_rotate import ScaleRotateStep, scale_rotate
from earthcurve.model.state import DiagramState, HistoryStore, IDENTITY_COMPONENTS, ViewComponents

if TYPE_CHECKING:
    import numpy as np
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class DiagramController:
    def __init__(
        self,
        state: DiagramState,
        endpoints: Optional[dict[str, tuple[float, float]]] = None,
        observations: tuple[Observation, ...] = OBSERVATIONS
    ) -> None:
        self.state = state
        self.observations = observations

        endpoints = endpoints if endpoints is not None else HANDLE_ENDPOINTS
        if len(endpoints) != 2:
            raise ValueError(f"The ruler needs exactly two endpoints, got {len(endpoints)}.")
        self._endpoints: dict[str, Coordinate] = {
            name: Coordinate(float(x), float(y)) for name, (x, y) in endpoints.items()
        }

        self._trackers: dict[str, DragTracker] = {}
        for name in self._endpoints:
            tracker = DragTracker(name)
            tracker.connect(partial(self.drag_endpoint, name))
            self._trackers[name] = tracker

        self._push_pending: bool = False
        self._drag_start_view: Optional[ViewComponents] = None

    # ------------------------------------------------------------------------------
    # Curvature
    # ------------------------------------------------------------------------------

    @property
    def control(self) -> float:
        value = self.state.control.value
        return 0.0 if value is None else value

    def set_control(self, value: float, push: bool = False) -> None:
        value = float(value)
        if push:
            self.state.control.push_set(value)
        else:
            self._write(self.state.control, value)

    def earth_params(self) -> EarthParams:
        return compute_parameters(self.control)

    # ------------------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------------------

    def begin_gesture(self) -> None:
        """The next change creates a new history entry."""
        self._push_pending = True

    def end_gesture(self) -> None:
        self._push_pending = False

    @property
    def endpoint_names(self) -> list[str]:
        return list(self._endpoints)

    def tracker(self, name: str) -> DragTracker:
        return self._trackers[name]

    def handle_position(self, name: str) -> Coordinate:
        return self.state.view_transform.apply(self._endpoints[name])

    def drag_endpoint(self, name: str, event: DragEvent) -> None:
        """Scale and rotate the view about the endpoint that is not dragged."""
        if isinstance(event, DragStart):
            self._drag_start_view = self.state.view.value
            self.begin_gesture()
        elif isinstance(event, (DragMove, DragEnd)):
            self._apply_drag(name, event.position, event.delta)
            if isinstance(event, DragEnd):
                self._drag_start_view = None
                self.end_gesture()
        elif isinstance(event, DragCancel):
            if self._drag_start_view is not None:
                self.state.view.set(self._drag_start_view)
                logger.debug(f"Drag of '{name}' cancelled, view restored.")
            self._drag_start_view = None
            self.end_gesture()

    def _apply_drag(self, name: str, position: Coordinate, delta: Coordinate) -> None:
        step = ScaleRotateStep(
            pin=self.handle_position(self._other(name)),
            pos=position,
            prev_pos=position - delta,
        )
        try:
            transform = scale_rotate([step])
        except DegenerateStepError as e:
            logger.warning(f"Ignoring drag of '{name}': {e}")
            return
        view = self.state.view_transform.pre_multiply(transform)
        self._write(self.state.view, view.components())

    def _other(self, name: str) -> str:
        for other in self._endpoints:
            if other != name:
                return other
        raise KeyError(name)

    def reset_view(self) -> None:
        self.state.view.push_set(IDENTITY_COMPONENTS)
        logger.info("View reset.")

    def _write(self, store: HistoryStore, value) -> None:
        if self._push_pending and value != store.value:
            store.push_set(value)
            self._push_pending = False
        else:
            store.set(value)

    # ------------------------------------------------------------------------------
    # Undo / Redo
    # ------------------------------------------------------------------------------

    def can_undo(self) -> bool:
        return self.state.history.can_go_back()

    def can_redo(self) -> bool:
        return self.state.history.can_go_forward()

    def undo(self) -> bool:
        return self.state.history.back()

    def redo(self) -> bool:
        return self.state.history.forward()

    # ------------------------------------------------------------------------------
    # Geometry for drawing
    # ------------------------------------------------------------------------------

    @property
    def view_transform(self) -> AffineTransform:
        return self.state.view_transform

    def earth_outline(self, n_points: int = OUTLINE_SAMPLES) -> npt.NDArray[np.float64]:
        """Surface polyline in view coordinates, (N, 2)."""
        return self.view_transform.apply_many(self.earth_params().outline(n_points))

    def observation_rays(self, length: float = RAY_LENGTH) -> list[tuple[Coordinate, Coordinate]]:
        """Sun rays in view coordinates as (start, end) pairs."""
        view = self.view_transform
        return [
            (view.apply(start), view.apply(end))
            for start, end in observation_rays(self.earth_params(), self.observations, length)
        ]
