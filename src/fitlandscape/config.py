"""
Configuration & Constants
=========================
This module serves as the central registry for the numeric defaults and
fixed bounds used across the application.

Why is this file needed?
------------------------
1. Single source: the slider bounds, the grid bounds and the generator
   defaults must agree between the model, the controller and the widgets.
2. Presentation constants (identity line, default camera) are fixed values,
   not derived from data, so they live here instead of inside the views.

Exports:
    DEFAULT_N_POINTS (int): Number of samples in a freshly generated dataset.
    DEFAULT_NOISE_SCALE (float): Full width of the uniform noise interval.
    GRID_START, GRID_STOP, GRID_STEP (float): Default error surface grid.
"""
from __future__ import annotations

# --- Data generation ---
DEFAULT_N_POINTS: int = 100
# Full width of the symmetric noise interval, i.e. noise ~ U[-5, 5]
DEFAULT_NOISE_SCALE: float = 10.0
PREDICTOR_LOW: float = -10.0
PREDICTOR_HIGH: float = 10.0
GROUND_TRUTH_BETA1: float = 3.0
GROUND_TRUTH_BETA2: float = 2.0

# --- Slider bounds (UI driven coefficient updates) ---
BETA_MIN: float = -10.0
BETA_MAX: float = 10.0
BETA_STEP: float = 0.1

# --- Error surface grid ---
GRID_START: float = -10.0
GRID_STOP: float = 10.0
GRID_STEP: float = 0.5

# --- Rendering ---
# Endpoints of the perfect-fit reference line: ((x0, y0), (x1, y1))
IDENTITY_LINE: tuple[tuple[float, float], tuple[float, float]] = ((-50.0, -50.0), (50.0, 50.0))

DEFAULT_CAMERA_EYE: tuple[float, float, float] = (1.25, 1.25, 1.25)
DEFAULT_CAMERA_UP: tuple[float, float, float] = (0.0, 0.0, 1.0)
DEFAULT_CAMERA_CENTER: tuple[float, float, float] = (0.0, 0.0, 0.0)

# --- Application identity (QSettings) ---
ORG_ID: str = "fitlandscape"
APP_ID: str = "fitlandscape"
VISIBLE_APP_NAME: str = "Fit Landscape Explorer"
