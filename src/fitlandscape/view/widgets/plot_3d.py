"""
3D Visualization Widget (PyVista Wrapper) - RMSE Surface
"""

from __future__ import annotations

from typing import Optional, Tuple

import logging
import numpy as np
import numpy.typing as npt

from PySide6.QtWidgets import QWidget, QVBoxLayout
from PySide6.QtCore import QTimer, Signal

from pyvistaqt import QtInteractor
import pyvista as pv

from fitlandscape.model.coefficients import CoefficientPair
from fitlandscape.model.state import CameraOrientation
from fitlandscape.model.surface import ErrorSurface

logger = logging.getLogger(__name__)

# The surface is drawn inside a unit box centred at the origin so the camera
# eye/up/center vectors keep the same meaning whatever the RMSE magnitude is.
SCENE_HALF_SIZE = 0.5

AxisRange = Tuple[float, float]


def _to_scene(values: npt.ArrayLike, axis_range: AxisRange) -> npt.NDArray[np.float64]:
    lo, hi = axis_range
    mid = 0.5 * (lo + hi)
    half = 0.5 * (hi - lo)
    if half <= 0.0:
        half = 1.0
    return (np.asarray(values, dtype=np.float64) - mid) / half * SCENE_HALF_SIZE


class SurfaceWidget(QWidget):
    # Emitted (debounced) after the user rotates/zooms/pans the view
    camera_changed = Signal(object)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self.plotter.set_background("white")

        # --- Actors state ---
        self._surface_actor: Optional[pv.Actor] = None
        self._marker_actor: Optional[pv.Actor] = None

        # --- Data cache ---
        # Surface is rebuilt only when a different ErrorSurface object arrives
        self._cached_surface: Optional[ErrorSurface] = None
        self._ranges: Optional[Tuple[AxisRange, AxisRange, AxisRange]] = None

        # Debounce camera notifications on interaction
        self._camera_timer = QTimer(self)
        self._camera_timer.setSingleShot(True)
        self._camera_timer.setInterval(100)
        self._camera_timer.timeout.connect(self._emit_camera)
        self._attach_observers()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def update_scene(
        self,
        surface: Optional[ErrorSurface],
        beta: CoefficientPair,
        point_error: Optional[float],
        camera: CameraOrientation,
    ) -> None:
        """
        Refreshes the layers of the surface view:
        1. Surface (cached, rebuilt only for a new ErrorSurface)
        2. Marker at the selected coefficient pair
        3. Camera, re-applied from the session so a redraw never resets it
        """
        if surface is None:
            self._clear_surface_layer()
            self._clear_marker_layer()
        else:
            self._update_surface_layer(surface)
            self._update_marker_layer(beta, point_error)

        self.apply_camera(camera, render=False)
        self.plotter.render()

    def update_marker(self, beta: CoefficientPair, point_error: Optional[float]) -> None:
        """Cheap path for slider drags: move the marker, keep everything else."""
        self._update_marker_layer(beta, point_error)
        self.plotter.render()

    def camera_orientation(self) -> CameraOrientation:
        position, focal_point, view_up = self.plotter.camera_position
        return CameraOrientation(
            eye=tuple(float(v) for v in position),
            up=tuple(float(v) for v in view_up),
            center=tuple(float(v) for v in focal_point),
        )

    def capture_camera(self) -> CameraOrientation:
        """Current camera, read now. A pending debounced emit is dropped."""
        self._camera_timer.stop()
        return self.camera_orientation()

    def apply_camera(self, camera: CameraOrientation, render: bool = True) -> None:
        self.plotter.camera_position = [camera.eye, camera.center, camera.up]
        if render:
            self.plotter.render()

    # ------------------------------------------------------------------------------
    # Internal: Layer Management
    # ------------------------------------------------------------------------------

    def _update_surface_layer(self, surface: ErrorSurface) -> None:
        if self._cached_surface is surface and self._surface_actor is not None:
            return

        self._clear_surface_layer()
        self._cached_surface = surface

        b1_range = (float(surface.beta1_samples[0]), float(surface.beta1_samples[-1]))
        b2_range = (float(surface.beta2_samples[0]), float(surface.beta2_samples[-1]))
        z_range = (float(np.min(surface.values)), float(np.max(surface.values)))
        self._ranges = (b1_range, b2_range, z_range)

        b1, b2 = np.meshgrid(surface.beta1_samples, surface.beta2_samples, indexing="ij")
        grid = pv.StructuredGrid(
            _to_scene(b1, b1_range),
            _to_scene(b2, b2_range),
            _to_scene(surface.values, z_range),
        )
        grid.point_data["RMSE"] = np.asarray(surface.values).ravel(order="F")

        self._surface_actor = self.plotter.add_mesh(
            grid,
            scalars="RMSE",
            cmap="RdBu",
            opacity=0.5,
            scalar_bar_args={
                "title": "RMSE",
                "vertical": True,
                "fmt": "%.1f",
                "position_x": 0.85,
                "position_y": 0.3,
            },
            show_edges=False,
        )

        self.plotter.show_bounds(
            bounds=[-SCENE_HALF_SIZE, SCENE_HALF_SIZE] * 3,
            axes_ranges=[*b1_range, *b2_range, *z_range],
            xtitle="Beta1",
            ytitle="Beta2",
            ztitle="RMSE",
            grid="back",
            location="outer",
            color="black",
        )
        logger.info(f"Surface layer rebuilt ({surface.shape[0]}x{surface.shape[1]}).")

    def _update_marker_layer(self, beta: CoefficientPair, point_error: Optional[float]) -> None:
        if self._ranges is None or point_error is None:
            self._clear_marker_layer()
            return

        if self._marker_actor is None:
            # Sphere at the origin, moved around through the actor position
            self._marker_actor = self.plotter.add_mesh(
                pv.Sphere(radius=0.015, center=(0.0, 0.0, 0.0)),
                color="red",
                pickable=False,
                reset_camera=False,
            )

        b1_range, b2_range, z_range = self._ranges
        self._marker_actor.position = (
            float(_to_scene(beta.beta1, b1_range)),
            float(_to_scene(beta.beta2, b2_range)),
            float(_to_scene(point_error, z_range)),
        )

    def _clear_surface_layer(self) -> None:
        if self._surface_actor is not None:
            self.plotter.remove_actor(self._surface_actor)
            self._surface_actor = None
            self.plotter.remove_scalar_bar("RMSE", render=False)
            self.plotter.remove_bounds_axes()
        self._cached_surface = None
        self._ranges = None

    def _clear_marker_layer(self) -> None:
        if self._marker_actor is not None:
            self.plotter.remove_actor(self._marker_actor)
            self._marker_actor = None

    # ------------------------------------------------------------------------------
    # Internal: Observers
    # ------------------------------------------------------------------------------

    def _attach_observers(self) -> None:
        iren = self.plotter.iren
        iren.add_observer("EndInteractionEvent", lambda *_: self._camera_timer.start())
        iren.add_observer("MouseWheelForwardEvent", lambda *_: self._camera_timer.start())
        iren.add_observer("MouseWheelBackwardEvent", lambda *_: self._camera_timer.start())

    def _emit_camera(self) -> None:
        self.camera_changed.emit(self.camera_orientation())
