"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the diagram and the
curvature controls.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (like Edit -> Undo) to the controller.
"""
import logging

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QSlider, QLabel,
    QPushButton, QFileDialog, QMessageBox
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence

from earthcurve.config import CONTROL_PRESETS, CONTROL_RANGE
from earthcurve.controller.diagram import DiagramController
from earthcurve.view.diagram_view import DiagramView
from earthcurve.view.export import export_diagram

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Earth Curvature"
SLIDER_STEPS_PER_UNIT = 100


class MainWindow(QMainWindow):
    def __init__(self, controller: DiagramController) -> None:
        super().__init__()
        self.controller = controller

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(900, 900)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QVBoxLayout(main_widget)

        # --- 1. DIAGRAM ---
        self.diagram = DiagramView(controller)
        main_layout.addWidget(self.diagram, stretch=1)

        # --- 2. CURVATURE CONTROLS ---
        controls = QHBoxLayout()
        main_layout.addLayout(controls)

        controls.addWidget(QLabel("Hollow"))
        self.slider = QSlider(Qt.Horizontal)
        low, high = CONTROL_RANGE
        self.slider.setRange(round(low * SLIDER_STEPS_PER_UNIT), round(high * SLIDER_STEPS_PER_UNIT))
        self.slider.setToolTip("Curvature: -1 hollow Earth, 0 flat Earth, +1 globe")
        controls.addWidget(self.slider, stretch=1)
        controls.addWidget(QLabel("Globe"))

        self.value_label = QLabel()
        self.value_label.setMinimumWidth(50)
        controls.addWidget(self.value_label)

        for name, value in CONTROL_PRESETS.items():
            button = QPushButton(name)
            button.clicked.connect(lambda _checked=False, v=value: self.controller.set_control(v, push=True))
            controls.addWidget(button)

        self.slider.sliderPressed.connect(self.controller.begin_gesture)
        self.slider.sliderReleased.connect(self.controller.end_gesture)
        self.slider.valueChanged.connect(self._on_slider_changed)

        self._create_menu()

        # Keep widgets in sync with the state (also on Undo/Redo)
        state = controller.state
        self._unsubscribers = [
            state.control.subscribe(self._on_control_changed),
            state.view.subscribe(lambda _value: self._update_history_actions()),
        ]

    def _create_menu(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        export_action = QAction("&Export...", self)
        export_action.setShortcut("Ctrl+E")
        export_action.triggered.connect(self.on_export)
        file_menu.addAction(export_action)
        file_menu.addSeparator()
        exit_action = QAction("&Quit", self)
        exit_action.setShortcut(QKeySequence.Quit)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        edit_menu = menu_bar.addMenu("&Edit")
        self.undo_action = QAction("&Undo", self)
        self.undo_action.setShortcut(QKeySequence.Undo)
        self.undo_action.triggered.connect(self.controller.undo)
        edit_menu.addAction(self.undo_action)

        self.redo_action = QAction("&Redo", self)
        self.redo_action.setShortcut(QKeySequence.Redo)
        self.redo_action.triggered.connect(self.controller.redo)
        edit_menu.addAction(self.redo_action)

        edit_menu.addSeparator()
        reset_action = QAction("Reset &View", self)
        reset_action.setShortcut("Ctrl+0")
        reset_action.triggered.connect(self.controller.reset_view)
        edit_menu.addAction(reset_action)

    # ------------------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------------------

    def _on_slider_changed(self, position: int) -> None:
        # Keyboard and wheel changes are single steps, dragging is one gesture
        self.controller.set_control(position / SLIDER_STEPS_PER_UNIT, push=not self.slider.isSliderDown())

    def _on_control_changed(self, value: float) -> None:
        self.slider.blockSignals(True)
        self.slider.setValue(round(value * SLIDER_STEPS_PER_UNIT))
        self.slider.blockSignals(False)
        self.value_label.setText(f"{value:+.2f}")
        self._update_history_actions()

    def _update_history_actions(self) -> None:
        self.undo_action.setEnabled(self.controller.can_undo())
        self.redo_action.setEnabled(self.controller.can_redo())

    def on_export(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Diagram", "diagram.svg", "SVG (*.svg);;PNG (*.png);;PDF (*.pdf)"
        )
        if not path:
            return
        try:
            export_diagram(self.controller, path)
        except (OSError, ValueError) as e:
            logger.error(f"Export failed: {e}")
            QMessageBox.critical(self, "Export Error", f"Could not export diagram:\n{e}")

    def closeEvent(self, event) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self.diagram.shutdown()
        super().closeEvent(event)
