"""
Main Application Window
=======================
The primary GUI container: the plane panel on the left and the shared 3D view
on the right.
"""
from typing import Callable

from PySide6.QtWidgets import QMainWindow, QSplitter
from PySide6.QtCore import Qt

from volumenavigator.controller.navigator import VolumeNavigator
from volumenavigator.view.panels.plane_panel import PlanePanel
from volumenavigator.view.widgets.plot_3d import NavigatorPlotWidget


VISIBLE_APP_NAME = "Volume Navigator"

class MainWindow(QMainWindow):
    def __init__(self, navigator: VolumeNavigator) -> None:
        super().__init__()
        self.navigator = navigator
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        # --- LEFT SIDE: Plane controls ---
        self.plane_panel = PlanePanel(self.navigator)
        splitter.addWidget(self.plane_panel)

        # --- RIGHT SIDE: 3D view + gimbal ---
        self.visualizer = NavigatorPlotWidget(self.navigator)
        splitter.addWidget(self.visualizer)

        # Set initial proportions (1 part sidebar : 4 parts 3D view)
        splitter.setSizes([350, 1050])

    def add_action(self, name: str, callback: Callable[[], None]) -> None:
        """Register a named action on the navigator and show it as a button."""
        self.navigator.add_action(name, callback)
        self.plane_panel.rebuild_actions()

    def closeEvent(self, event) -> None:
        self.visualizer.plotter.close()
        super().closeEvent(event)
