"""
Main Application Window
=======================
The primary GUI container: parameter panel on the left, the fit scatter and
the RMSE surface on the right.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects the panel signals to the SessionController and pushes
   the recomputed values into the plots. Slider moves take the cheap path
   (point error + projection); only a regeneration rebuilds the surface.
"""
import logging

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QSplitter, QMessageBox, QLabel
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction

from fitlandscape.config import VISIBLE_APP_NAME
from fitlandscape.controller.session import SessionController
from fitlandscape.model.errors import FitLandscapeError
from fitlandscape.model.state import CameraOrientation
from fitlandscape.view.camera_settings import save_camera
from fitlandscape.view.panels.parameters import ParametersControlPanel
from fitlandscape.view.widgets.plot_3d import SurfaceWidget
from fitlandscape.view.widgets.plot_fit import FitScatterWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, controller: SessionController) -> None:
        super().__init__()
        self.controller = controller
        self.state = controller.state

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 800)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)

        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        header = QLabel("Adjust the sliders to see how different beta values affect the plots")
        header.setAlignment(Qt.AlignCenter)
        header.setStyleSheet("padding: 6px;")
        main_layout.addWidget(header)

        splitter = QSplitter(Qt.Horizontal)
        main_layout.addWidget(splitter)

        # --- LEFT SIDE: Controls ---
        self.params_panel = ParametersControlPanel(self.state)
        splitter.addWidget(self.params_panel)

        # --- RIGHT SIDE: Scatter | Surface ---
        plots = QSplitter(Qt.Horizontal)
        self.scatter = FitScatterWidget()
        self.visualizer = SurfaceWidget()
        plots.addWidget(self.scatter)
        plots.addWidget(self.visualizer)
        plots.setSizes([500, 550])
        splitter.addWidget(plots)

        splitter.setSizes([320, 1080])

        # --- SIGNAL CONNECTIONS ---
        self.params_panel.beta_changed.connect(self.on_beta_changed)
        self.params_panel.regenerate_requested.connect(self.on_regenerate_requested)
        self.visualizer.camera_changed.connect(self.on_camera_changed)

        self._create_actions()
        self._create_menus()

        # Initial Render
        self.refresh_all()

    def _create_actions(self) -> None:
        self.act_regenerate = QAction("Regenerate Dataset", self)
        self.act_regenerate.setShortcut("Ctrl+R")
        self.act_regenerate.triggered.connect(self.params_panel.on_regenerate_clicked)

        self.act_new_session = QAction("New Session", self)
        self.act_new_session.setShortcut("Ctrl+N")
        self.act_new_session.triggered.connect(self.on_new_session)

        self.act_reset_camera = QAction("Reset Camera", self)
        self.act_reset_camera.triggered.connect(self.on_reset_camera)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_new_session)
        file_menu.addAction(self.act_regenerate)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        view_menu = menu_bar.addMenu("&View")
        view_menu.addAction(self.act_reset_camera)

    # --- SLOTS ---

    def on_beta_changed(self, beta1: float, beta2: float) -> None:
        """Cheap path: point error + projection, the surface stays as is."""
        try:
            self.controller.set_beta(beta1, beta2)
        except FitLandscapeError as e:
            logger.error(f"Coefficient update failed: {e}")
            self.params_panel.set_status(str(e), "red")
            return

        self.params_panel.load_from_state()
        self._refresh_scatter()
        self.visualizer.update_marker(self.state.beta, self.state.point_error)

    def on_regenerate_requested(self, n_points: int, noise_scale: float) -> None:
        self._sync_camera()
        self.params_panel.set_busy(True)
        self.params_panel.set_status("Generating dataset...")
        self.params_panel.repaint()
        try:
            dataset = self.controller.regenerate_dataset(n=n_points, noise_scale=noise_scale)
            self.params_panel.set_status(f"Dataset: {dataset.n_points} points ✓", "green")
        except FitLandscapeError as e:
            logger.error(f"Dataset regeneration failed: {e}")
            self.params_panel.set_status("Regeneration failed", "red")
            QMessageBox.critical(self, "Dataset Error", str(e))
        finally:
            self.params_panel.set_busy(False)

        self.refresh_all()

    def on_new_session(self) -> None:
        self._sync_camera()
        try:
            self.controller.new_session()
            self.params_panel.set_status("New session started", "green")
        except FitLandscapeError as e:
            logger.error(f"New session failed: {e}")
            QMessageBox.critical(self, "Dataset Error", str(e))

        self.refresh_all()

    def on_camera_changed(self, camera: CameraOrientation) -> None:
        self.controller.set_camera(camera)

    def on_reset_camera(self) -> None:
        self.controller.set_camera(CameraOrientation())
        self.visualizer.apply_camera(self.state.camera)

    # --- HELPER METHODS ---

    def refresh_all(self) -> None:
        """Redraw every view from the session state, re-applying the stored camera."""
        self.params_panel.load_from_state()
        self._refresh_scatter()
        self.visualizer.update_scene(
            self.state.surface,
            self.state.beta,
            self.state.point_error,
            self.state.camera,
        )

    def _sync_camera(self) -> None:
        # Camera moves inside the debounce window or from the keyboard emit nothing
        self.controller.set_camera(self.visualizer.capture_camera())

    def _refresh_scatter(self) -> None:
        if not self.state.has_data:
            self.scatter.clear()
            return
        self.scatter.update_projection(self.controller.project_fit(), self.state.beta)

    def closeEvent(self, event, /) -> None:
        """Persist the camera and shut the plotter down."""
        save_camera(self.visualizer.camera_orientation())

        if self.visualizer and self.visualizer.plotter:
            self.visualizer.plotter.close()

        event.accept()
