"""
Session State (Data Model)
==========================
This module defines the central data structure for a running session.

Why is this file needed?
------------------------
1. State Management: It holds the current dataset, the selected coefficient
   pair, the derived error surface and the camera in one place.
2. Explicit ownership: The state is created by the caller (the GUI bootstrap
   or the CLI) and passed to the SessionController. Nothing in the core
   reads module-level globals.
3. Decoupling: Views read from this object; the controller writes to it.

Classes:
    CameraOrientation: eye/up/center vectors owned by the rendering layer.
    SessionState: The main container class.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, TYPE_CHECKING

from fitlandscape.config import (
    DEFAULT_N_POINTS, DEFAULT_NOISE_SCALE,
    DEFAULT_CAMERA_EYE, DEFAULT_CAMERA_UP, DEFAULT_CAMERA_CENTER,
)
from fitlandscape.model.coefficients import CoefficientPair, GROUND_TRUTH

if TYPE_CHECKING:
    from fitlandscape.model.dataset import Dataset
    from fitlandscape.model.surface import ErrorSurface

logger = logging.getLogger(__name__)

Vector3 = tuple[float, float, float]


def _as_vector3(value: Any, name: str) -> Vector3:
    components = [float(v) for v in value]
    if len(components) != 3:
        raise ValueError(f"Camera '{name}' must have 3 components, got {len(components)}.")
    return components[0], components[1], components[2]


@dataclass(frozen=True)
class CameraOrientation:
    """
    Opaque 3-axis camera state of the surface view.

    The core stores it but never interprets it; only the rendering layer
    reads and writes it.
    """
    eye: Vector3 = DEFAULT_CAMERA_EYE
    up: Vector3 = DEFAULT_CAMERA_UP
    center: Vector3 = DEFAULT_CAMERA_CENTER

    def to_dict(self) -> Dict[str, list[float]]:
        return {"eye": list(self.eye), "up": list(self.up), "center": list(self.center)}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> CameraOrientation:
        return CameraOrientation(
            eye=_as_vector3(data["eye"], "eye"),
            up=_as_vector3(data["up"], "up"),
            center=_as_vector3(data["center"], "center"),
        )


@dataclass
class SessionState:
    """
    Holds the entire state of one exploration session.
    Pass this instance to the SessionController and the Views.
    """
    # Generation settings used by the next regeneration
    n_points: int = DEFAULT_N_POINTS
    noise_scale: float = DEFAULT_NOISE_SCALE

    dataset: Optional[Dataset] = None
    beta: CoefficientPair = GROUND_TRUTH

    # Derived state, always computed from `dataset`
    surface: Optional[ErrorSurface] = None
    point_error: Optional[float] = None

    camera: CameraOrientation = field(default_factory=CameraOrientation)

    @property
    def has_data(self) -> bool:
        return self.dataset is not None and not self.dataset.is_empty

    def reset(self) -> None:
        """Clear all data for a new session. The camera is kept on purpose."""
        self.n_points = DEFAULT_N_POINTS
        self.noise_scale = DEFAULT_NOISE_SCALE
        self.dataset = None
        self.beta = GROUND_TRUTH
        self.surface = None
        self.point_error = None
        logger.info("Session state has been reset.")
