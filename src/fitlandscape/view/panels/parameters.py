"""
Parameters Control Panel
========================
Left-side panel with the two coefficient sliders and the dataset
regeneration controls.
"""
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QSlider, QGroupBox, QFormLayout,
    QSpinBox, QDoubleSpinBox
)
from PySide6.QtCore import Qt, Signal

from fitlandscape.config import BETA_MIN, BETA_MAX, BETA_STEP
from fitlandscape.model.state import SessionState

# QSlider only works with integers, one tick = one BETA_STEP
_TICKS_PER_UNIT = round(1.0 / BETA_STEP)


def _to_ticks(value: float) -> int:
    return int(round(value * _TICKS_PER_UNIT))


def _from_ticks(ticks: int) -> float:
    return ticks / _TICKS_PER_UNIT


class BetaSlider(QWidget):
    """Labelled horizontal slider for one coefficient."""
    value_changed = Signal(float)

    def __init__(self, title: str, value: float) -> None:
        super().__init__()
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        layout.addWidget(QLabel(title))

        self.slider = QSlider(Qt.Horizontal)
        self.slider.setRange(_to_ticks(BETA_MIN), _to_ticks(BETA_MAX))
        self.slider.setSingleStep(1)
        self.slider.setPageStep(10)
        self.slider.setValue(_to_ticks(value))
        self.slider.valueChanged.connect(self._on_slider_moved)
        layout.addWidget(self.slider, stretch=1)

        self.lbl_value = QLabel(f"{value:.1f}")
        self.lbl_value.setMinimumWidth(40)
        self.lbl_value.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        layout.addWidget(self.lbl_value)

    def value(self) -> float:
        return _from_ticks(self.slider.value())

    def set_value(self, value: float) -> None:
        """Move the slider without emitting `value_changed`."""
        self.slider.blockSignals(True)
        try:
            self.slider.setValue(_to_ticks(value))
        finally:
            self.slider.blockSignals(False)
        self.lbl_value.setText(f"{self.value():.1f}")

    def _on_slider_moved(self, ticks: int) -> None:
        value = _from_ticks(ticks)
        self.lbl_value.setText(f"{value:.1f}")
        self.value_changed.emit(value)


class ParametersControlPanel(QWidget):
    # (beta1, beta2) as shown on the sliders
    beta_changed = Signal(float, float)
    # (number of points, noise width)
    regenerate_requested = Signal(int, float)

    def __init__(self, session_state: SessionState) -> None:
        super().__init__()
        self.state = session_state

        layout = QVBoxLayout(self)

        # --- Coefficients ---
        grp_beta = QGroupBox("Adjust Beta1 & Beta2")
        l_beta = QVBoxLayout(grp_beta)

        self.slider_beta1 = BetaSlider("Beta 1", self.state.beta.beta1)
        self.slider_beta1.value_changed.connect(self._emit_beta)
        l_beta.addWidget(self.slider_beta1)

        self.slider_beta2 = BetaSlider("Beta 2", self.state.beta.beta2)
        self.slider_beta2.value_changed.connect(self._emit_beta)
        l_beta.addWidget(self.slider_beta2)

        self.lbl_error = QLabel("RMSE: -")
        self.lbl_error.setAlignment(Qt.AlignCenter)
        self.lbl_error.setStyleSheet("font-weight: bold;")
        l_beta.addWidget(self.lbl_error)

        layout.addWidget(grp_beta)

        # --- Dataset ---
        grp_data = QGroupBox("Dataset")
        form_data = QFormLayout(grp_data)

        self.spin_points = QSpinBox()
        self.spin_points.setRange(1, 100_000)
        self.spin_points.setValue(self.state.n_points)
        form_data.addRow("Number of points:", self.spin_points)

        self.spin_noise = QDoubleSpinBox()
        self.spin_noise.setDecimals(1)
        self.spin_noise.setRange(0.0, 1000.0)
        self.spin_noise.setSingleStep(1.0)
        self.spin_noise.setValue(self.state.noise_scale)
        self.spin_noise.setToolTip("Full width of the uniform noise interval (10 means ±5).")
        form_data.addRow("Noise width:", self.spin_noise)

        self.btn_regenerate = QPushButton("Regenerate Dataset")
        self.btn_regenerate.setMinimumHeight(40)
        self.btn_regenerate.clicked.connect(self.on_regenerate_clicked)
        form_data.addRow(self.btn_regenerate)

        layout.addWidget(grp_data)

        # --- Status Info ---
        self.lbl_status = QLabel("")
        self.lbl_status.setAlignment(Qt.AlignCenter)
        self.lbl_status.setStyleSheet("color: gray;")
        self.lbl_status.setWordWrap(True)
        layout.addWidget(self.lbl_status)

        layout.addStretch()

    # --- SLOTS ---

    def _emit_beta(self, *_) -> None:
        self.beta_changed.emit(self.slider_beta1.value(), self.slider_beta2.value())

    def on_regenerate_clicked(self) -> None:
        self.regenerate_requested.emit(self.spin_points.value(), self.spin_noise.value())

    # --- STATE SYNC ---

    def set_busy(self, busy: bool) -> None:
        """Block user input while the dataset and surface are being rebuilt."""
        self.btn_regenerate.setEnabled(not busy)
        self.slider_beta1.setEnabled(not busy)
        self.slider_beta2.setEnabled(not busy)

    def set_status(self, text: str, color: str = "gray") -> None:
        self.lbl_status.setText(text)
        self.lbl_status.setStyleSheet(f"color: {color};")

    def load_from_state(self) -> None:
        """Push the session values back into the widgets (after clamping/snapping)."""
        self.slider_beta1.set_value(self.state.beta.beta1)
        self.slider_beta2.set_value(self.state.beta.beta2)
        self.spin_points.setValue(self.state.n_points)
        self.spin_noise.setValue(self.state.noise_scale)
        if self.state.point_error is None:
            self.lbl_error.setText("RMSE: -")
        else:
            self.lbl_error.setText(f"RMSE: {self.state.point_error:.4f}")
