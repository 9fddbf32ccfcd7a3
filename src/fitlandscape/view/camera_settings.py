"""
Camera Persistence
Stores the last surface camera in QSettings so it survives restarts.
"""
from __future__ import annotations

import json
import logging

from PySide6.QtCore import QSettings

from fitlandscape.model.state import CameraOrientation

logger = logging.getLogger(__name__)

CAMERA_KEY = "view/camera"


def load_camera() -> CameraOrientation:
    """Last saved camera, or the default orientation if none/invalid."""
    raw = QSettings().value(CAMERA_KEY, "", type=str)
    if not raw:
        return CameraOrientation()
    try:
        return CameraOrientation.from_dict(json.loads(raw))
    except (ValueError, KeyError, TypeError) as e:
        logger.warning(f"Ignoring stored camera '{raw}': {e}")
        return CameraOrientation()


def save_camera(camera: CameraOrientation) -> None:
    QSettings().setValue(CAMERA_KEY, json.dumps(camera.to_dict()))
