from __future__ import annotations

import logging

from PySide6.QtCore import QEvent, QPointF, QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QPainter, QPainterPath, QPen, QTransform
from PySide6.QtWidgets import (
    QGraphicsEllipseItem, QGraphicsItem, QGraphicsLineItem, QGraphicsScene, QGraphicsView, QWidget
)

from earthcurve.controller.diagram import DiagramController
from earthcurve.controller.drag import DragTracker
from earthcurve.exceptions import InvalidElementError
from earthcurve.model.geometry_primitives import Coordinate

logger = logging.getLogger(__name__)

SCENE_EXTENT = 2.6  # half size of the visible diagram area, diagram units
HANDLE_RADIUS_PX = 7.0

EARTH_COLOR = QColor("#2a6f97")
RAY_COLOR = QColor("#f4a259")
RULER_COLOR = QColor("#6c757d")
HANDLE_COLOR = QColor("#e63946")


def _cosmetic_pen(color: QColor, width: float) -> QPen:
    pen = QPen(color, width)
    pen.setCosmetic(True)  # constant pixel width regardless of zoom
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    return pen


def _to_coordinate(point: QPointF) -> Coordinate:
    return Coordinate(point.x(), point.y())


# -------------------------------------------------------------------------------
# Drag support
# -------------------------------------------------------------------------------

class _DragFilter(QGraphicsItem):
    """Invisible item forwarding the mouse events of another item to a tracker."""

    def __init__(self, tracker: DragTracker) -> None:
        super().__init__()
        self.tracker = tracker
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemHasNoContents, True)

    def boundingRect(self) -> QRectF:
        return QRectF()

    def paint(self, painter, option, widget=None) -> None:
        pass

    def sceneEventFilter(self, watched: QGraphicsItem, event: QEvent) -> bool:
        event_type = event.type()
        if event_type == QEvent.Type.GraphicsSceneMousePress:
            if event.button() != Qt.MouseButton.LeftButton:
                return False
            self.tracker.press(_to_coordinate(event.scenePos()))
            event.accept()
            return True
        if event_type == QEvent.Type.GraphicsSceneMouseMove:
            self.tracker.move(_to_coordinate(event.scenePos()))
            return True
        if event_type == QEvent.Type.GraphicsSceneMouseRelease:
            if event.button() != Qt.MouseButton.LeftButton:
                return False
            self.tracker.release(_to_coordinate(event.scenePos()))
            return True
        if event_type == QEvent.Type.UngrabMouse:
            # Losing the grab mid-drag (e.g. a popup) cancels the drag
            self.tracker.cancel()
        return False


def draggable(item: QGraphicsItem, tracker: DragTracker) -> _DragFilter:
    """
    Make ``item`` report drags to ``tracker``.

    The item must already be part of a scene. Positions are reported in
    scene coordinates.

    Raises:
        InvalidElementError: if ``item`` is not a QGraphicsItem in a scene.
    """
    if not isinstance(item, QGraphicsItem):
        raise InvalidElementError("Only QGraphicsItems are supported")
    scene = item.scene()
    if scene is None:
        raise InvalidElementError("The item has to be added to a scene first")

    drag_filter = _DragFilter(tracker)
    scene.addItem(drag_filter)
    item.installSceneEventFilter(drag_filter)
    item.setCursor(Qt.CursorShape.OpenHandCursor)
    logger.debug(f"Drag handling attached for '{tracker.name}'.")
    return drag_filter


# -------------------------------------------------------------------------------
# Diagram widget
# -------------------------------------------------------------------------------

class DiagramView(QGraphicsView):
    """
    Cross-section of the Earth with the observed sun rays, and two handles
    at the ends of a ruler that scale and rotate the whole drawing.

    The scene uses diagram coordinates directly (y pointing up); the view
    transform flips and scales them to pixels.
    """
    def __init__(self, controller: DiagramController, parent: QWidget | None = None) -> None:
        super().__init__(parent=parent)
        self.controller = controller

        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)

        self._scene = QGraphicsScene(self)
        self._scene.setSceneRect(QRectF(-SCENE_EXTENT, -SCENE_EXTENT, 2 * SCENE_EXTENT, 2 * SCENE_EXTENT))
        self._scene.setBackgroundBrush(QBrush(QColor("white")))
        self.setScene(self._scene)

        self._earth_item = self._scene.addPath(QPainterPath(), _cosmetic_pen(EARTH_COLOR, 3.0))
        self._ray_items: list[QGraphicsLineItem] = [
            self._scene.addLine(0.0, 0.0, 0.0, 0.0, _cosmetic_pen(RAY_COLOR, 1.5))
            for _ in controller.observations
        ]
        self._ruler_item = self._scene.addLine(0.0, 0.0, 0.0, 0.0, _cosmetic_pen(RULER_COLOR, 1.0))

        self._handles: dict[str, QGraphicsEllipseItem] = {}
        self._drag_filters: dict[str, _DragFilter] = {}
        for name in controller.endpoint_names:
            handle = QGraphicsEllipseItem(-HANDLE_RADIUS_PX, -HANDLE_RADIUS_PX, 2 * HANDLE_RADIUS_PX, 2 * HANDLE_RADIUS_PX)
            handle.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIgnoresTransformations, True)
            handle.setBrush(QBrush(HANDLE_COLOR))
            handle.setPen(QPen(Qt.PenStyle.NoPen))
            handle.setZValue(10)
            handle.setToolTip("Drag to scale and rotate the diagram")
            self._scene.addItem(handle)
            self._handles[name] = handle
            self._drag_filters[name] = draggable(handle, controller.tracker(name))

        # Items exist now, subscribing triggers the first redraw
        state = controller.state
        self._unsubscribers = [
            state.control.subscribe(lambda _value: self.redraw()),
            state.view.subscribe(lambda _value: self.redraw()),
        ]

    def shutdown(self) -> None:
        """Stop listening to the state stores."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def redraw(self) -> None:
        outline = self.controller.earth_outline()
        path = QPainterPath(QPointF(*outline[0]))
        for x, y in outline[1:]:
            path.lineTo(x, y)
        self._earth_item.setPath(path)

        for item, (start, end) in zip(self._ray_items, self.controller.observation_rays()):
            item.setLine(start.x, start.y, end.x, end.y)

        positions = {name: self.controller.handle_position(name) for name in self._handles}
        for name, handle in self._handles.items():
            handle.setPos(positions[name].x, positions[name].y)
        a, b = (positions[name] for name in self._handles)
        self._ruler_item.setLine(a.x, a.y, b.x, b.y)

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        size = min(self.viewport().width(), self.viewport().height())
        if size <= 0:
            return
        pixels_per_unit = size / (2 * SCENE_EXTENT)
        self.setTransform(QTransform.fromScale(pixels_per_unit, -pixels_per_unit))
        self.centerOn(0.0, 0.0)
