from __future__ import annotations

import logging

from PySide6.QtCore import Slot
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QGroupBox, QLabel, QGridLayout,
    QSizePolicy, QDoubleSpinBox, QPushButton
)

from volumenavigator.controller.navigator import PlaneSnapshot, VolumeNavigator

logger = logging.getLogger(__name__)

AXES = ("x", "y", "z")


class PlanePanel(QWidget):
    """
    Plane information (equation, normal, point) plus translation and rotation
    controls. Each control applies the difference from its previous value and
    commits it: keyboard tracking is off, so a value change is a finished edit
    (Enter, arrow click or wheel step).
    """
    def __init__(self, navigator: VolumeNavigator, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.navigator = navigator
        self._previous: dict[str, float] = {}
        self._spins: dict[str, QDoubleSpinBox] = {}
        self._action_buttons: list[QPushButton] = []

        self.layout_box = QVBoxLayout(self)

        # --- Plane information ---
        info_box = QGroupBox(self.tr("Plane information"), self)
        info_grid = QGridLayout(info_box)
        self.lbl_equation = QLabel(self)
        self.lbl_normal = QLabel(self)
        self.lbl_point = QLabel(self)
        for row, (label, widget) in enumerate((
            ("Plane equation", self.lbl_equation),
            ("Normal vector", self.lbl_normal),
            ("Point", self.lbl_point),
        )):
            info_grid.addWidget(QLabel(self.tr(label), self), row, 0)
            info_grid.addWidget(widget, row, 1)
        self.layout_box.addWidget(info_box)

        # --- Translation / Rotation ---
        diagonal = navigator.box_diagonal
        trans_box = QGroupBox(self.tr("Plane translation"), self)
        trans_grid = QGridLayout(trans_box)
        for row, axis in enumerate(AXES):
            self._add_spin(trans_grid, row, f"trans_{axis}", axis, -diagonal, diagonal, step=1.0)
        self.layout_box.addWidget(trans_box)

        rot_box = QGroupBox(self.tr("Plane rotation"), self)
        rot_grid = QGridLayout(rot_box)
        for row, axis in enumerate(AXES):
            self._add_spin(rot_grid, row, f"rot_{axis}", axis, -180.0, 180.0, step=1.0, suffix="°")
        self.layout_box.addWidget(rot_box)

        self.actions_box = QGroupBox(self.tr("Actions"), self)
        self.actions_layout = QVBoxLayout(self.actions_box)
        self.layout_box.addWidget(self.actions_box)
        self.layout_box.addStretch()

        self.rebuild_actions()
        self.navigator.plane_changed.connect(self._refresh_info)
        self._refresh_info(self.navigator.snapshot())

    # ---- utilities ----

    def _add_spin(
        self,
        grid: QGridLayout,
        row: int,
        key: str,
        label: str,
        min_value: float,
        max_value: float,
        *,
        step: float = 1.0,
        suffix: str = ""
    ) -> QDoubleSpinBox:
        grid.addWidget(QLabel(label, self), row, 0)
        w = QDoubleSpinBox(self)
        w.setRange(min_value, max_value)
        w.setSingleStep(step)
        w.setDecimals(2)
        w.setValue(0.0)
        w.setKeyboardTracking(False)
        w.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        if suffix:
            w.setSuffix(f" {suffix}")
        w.valueChanged.connect(lambda value, k=key: self._on_value_changed(k, value))
        grid.addWidget(w, row, 1)
        self._spins[key] = w
        self._previous[key] = 0.0
        return w

    def rebuild_actions(self) -> None:
        """Show one button per action registered on the navigator."""
        for btn in self._action_buttons:
            self.actions_layout.removeWidget(btn)
            btn.deleteLater()
        self._action_buttons = []
        for name, callback in self.navigator.actions().items():
            btn = QPushButton(name, self.actions_box)
            btn.clicked.connect(lambda _checked=False, cb=callback: cb())
            self.actions_layout.addWidget(btn)
            self._action_buttons.append(btn)
        self.actions_box.setVisible(bool(self._action_buttons))

    # ---- slots ----

    def _on_value_changed(self, key: str, value: float) -> None:
        diff = value - self._previous[key]
        self._previous[key] = value
        kind, axis = key.split("_")
        vector = [diff if a == axis else 0.0 for a in AXES]
        if kind == "trans":
            self.navigator.translate_plane(vector)
        else:
            self.navigator.rotate_plane_degree(*vector)

    @Slot(object)
    def _refresh_info(self, _snapshot: PlaneSnapshot) -> None:
        self.lbl_equation.setText(self.navigator.equation_literal())
        self.lbl_normal.setText(self.navigator.normal_literal())
        self.lbl_point.setText(self.navigator.point_literal())
