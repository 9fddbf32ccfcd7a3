"""
Coefficient Pair
================
The two linear-model weights (beta1, beta2) being explored.

As a mathematical input to the metric the pair is unconstrained. When it is
driven by the sliders it is clamped to the slider bounds and snapped to the
slider step, see `CoefficientPair.from_slider`.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from fitlandscape.config import (
    BETA_MIN, BETA_MAX, BETA_STEP, GROUND_TRUTH_BETA1, GROUND_TRUTH_BETA2
)
from fitlandscape.model.errors import InvalidParameterError


def snap_to_step(value: float, low: float, high: float, step: float) -> float:
    """
    Clamp `value` into [low, high] and round it to the nearest multiple of
    `step` measured from `low`.

    Args:
        value: Raw value (e.g. from a slider or a spin box).
        low: Lower bound (inclusive).
        high: Upper bound (inclusive).
        step: Granularity, must be positive.

    Returns:
        The snapped value, always inside [low, high].
    """
    if not math.isfinite(value):
        raise InvalidParameterError(f"Coefficient must be finite, got {value}.")
    clamped = min(max(value, low), high)
    n_steps = round((clamped - low) / step)
    # Round away binary noise so 0.1 steps stay printable as 0.1 steps
    snapped = round(low + n_steps * step, 10)
    return min(max(snapped, low), high)


@dataclass(frozen=True)
class CoefficientPair:
    beta1: float
    beta2: float

    @classmethod
    def from_slider(cls, beta1: float, beta2: float) -> CoefficientPair:
        """Build a pair from UI values, clamped to [-10, 10] at step 0.1."""
        return cls(
            beta1=snap_to_step(float(beta1), BETA_MIN, BETA_MAX, BETA_STEP),
            beta2=snap_to_step(float(beta2), BETA_MIN, BETA_MAX, BETA_STEP),
        )

    def __str__(self) -> str:
        return f"(β1={self.beta1:g}, β2={self.beta2:g})"


GROUND_TRUTH = CoefficientPair(GROUND_TRUTH_BETA1, GROUND_TRUTH_BETA2)
