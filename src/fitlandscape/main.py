"""
Application Initialization
==========================
This module wires the session, the controller and the main window together
and starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the SessionState and the SessionController that owns it.
2. Generates the startup dataset (and its error surface).
3. Instantiates the Main Window (View), passing the controller.
4. Restores the persisted camera so the surface opens where it was left.
"""
import logging
import os
import sys

import pyqtgraph as pg
from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QCoreApplication, QSettings

from fitlandscape.config import ORG_ID, APP_ID, VISIBLE_APP_NAME
from fitlandscape.controller.session import SessionController
from fitlandscape.logging_config import setup_logging
from fitlandscape.model.state import SessionState
from fitlandscape.view.camera_settings import load_camera
from fitlandscape.view.main_window import MainWindow

logger = logging.getLogger(__name__)

pg.setConfigOption("background", "w")
pg.setConfigOption("foreground", "k")


def create_app() -> QApplication:
    """Create and configure the QApplication instance."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setApplicationName(APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication(sys.argv)
    app.setApplicationDisplayName(VISIBLE_APP_NAME)
    return app


def main() -> None:
    # Use logging.DEBUG to follow every slider update
    setup_logging(level=logging.INFO)

    app = create_app()

    state = SessionState(camera=load_camera())
    controller = SessionController(state)
    controller.regenerate_dataset()

    window = MainWindow(controller)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
