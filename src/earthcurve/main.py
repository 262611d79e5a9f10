"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) pieces and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the Data Model (DiagramState).
2. Instantiates the Controller that edits it.
3. Instantiates the Main Window (View), passing the controller in.
"""
import logging
import os
import sys

from PySide6.QtWidgets import QApplication

from earthcurve.config import LOG_LEVEL_ENV
from earthcurve.controller.diagram import DiagramController
from earthcurve.logging_config import level_from_name, setup_logging
from earthcurve.model.state import DiagramState
from earthcurve.view.main_window import MainWindow, VISIBLE_APP_NAME

logger = logging.getLogger(__name__)


def main() -> None:
    # 1. Setup Logging, e.g. EARTHCURVE_LOG_LEVEL=debug during development
    setup_logging(level=level_from_name(os.environ.get(LOG_LEVEL_ENV)))

    # 2. Create the Qt Application
    app = QApplication(sys.argv)
    app.setApplicationName(VISIBLE_APP_NAME)

    # 3. Initialize the Data Model and its Controller
    state = DiagramState()
    controller = DiagramController(state)

    # 4. Initialize the Main Window
    window = MainWindow(controller)
    window.show()

    # 5. Start Event Loop
    logger.info("Starting event loop.")
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
