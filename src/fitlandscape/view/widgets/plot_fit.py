"""Predicted-vs-actual scatter plot (pyqtgraph)."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import numpy as np
import pyqtgraph as pg
from PySide6.QtWidgets import QWidget, QVBoxLayout
from PySide6.QtCore import Qt

from fitlandscape.model.projection import IDENTITY_LINE

if TYPE_CHECKING:
    import numpy.typing as npt
    from fitlandscape.model.coefficients import CoefficientPair


logger = logging.getLogger(__name__)


class FitScatterWidget(QWidget):
    """Scatter of predicted vs. actual values with a dashed perfect-fit line."""

    POINT_COLOR = "navy"
    IDENTITY_COLOR = "r"

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.plot_widget = pg.PlotWidget(background="w")
        self.plot_widget.setLabel("bottom", "Predicted Values")
        self.plot_widget.setLabel("left", "Actual Values")
        self.plot_widget.showGrid(x=True, y=True, alpha=0.3)
        layout.addWidget(self.plot_widget)

        (x0, y0), (x1, y1) = IDENTITY_LINE
        self._identity_item = pg.PlotDataItem(
            [x0, x1], [y0, y1],
            pen=pg.mkPen(self.IDENTITY_COLOR, width=2, style=Qt.DashLine),
        )
        self.plot_widget.addItem(self._identity_item)

        self._scatter_item = pg.ScatterPlotItem(
            size=8, pen=None, brush=pg.mkBrush(self.POINT_COLOR)
        )
        self.plot_widget.addItem(self._scatter_item)

    def update_projection(self, pairs: npt.NDArray[np.float64], beta: CoefficientPair) -> None:
        """
        Redraw the points.

        Args:
            pairs: (N, 2) array of (predicted, actual). An empty array simply
                   clears the points.
            beta: Coefficients the prediction was made with (title only).
        """
        pairs = np.asarray(pairs, dtype=np.float64).reshape(-1, 2)
        if pairs.shape[0] == 0:
            self._scatter_item.clear()
        else:
            self._scatter_item.setData(x=pairs[:, 0], y=pairs[:, 1])
        self.plot_widget.setTitle(f"Scatter Plot (Beta1: {beta.beta1:g}, Beta2: {beta.beta2:g})")

    def clear(self) -> None:
        self._scatter_item.clear()
        self.plot_widget.setTitle("Scatter Plot")
