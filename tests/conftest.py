import os

import numpy as np
import pytest
from PySide6.QtWidgets import QApplication

from volumenavigator.controller.collaborator import RayHit
from volumenavigator.controller.navigator import VolumeNavigator


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    # widgets need a QApplication, offscreen keeps the suite headless
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QApplication.instance() or QApplication([])
    yield app


class FakeView:
    """
    Orthographic camera looking from `position` to `target`. Projects to pixels
    with the origin top-left and y pointing down; `hits` is what cast_ray returns.
    """

    def __init__(self, position, target, up=(0.0, 1.0, 0.0), size=(400, 400), scale=1.0):
        self.position = np.asarray(position, dtype=float)
        self.target = np.asarray(target, dtype=float)
        forward = self.target - self.position
        self.forward = forward / np.linalg.norm(forward)
        right = np.cross(self.forward, up)
        self.right = right / np.linalg.norm(right)
        self.up = np.cross(self.right, self.forward)
        self.size = size
        self.scale = scale
        self.hits: list[RayHit] = []
        self.navigation_enabled = True
        self.navigation_calls: list[bool] = []

    def project_to_screen(self, point, normalized=False):
        rel = np.asarray(point, dtype=float) - self.target
        x = float(np.dot(rel, self.right)) * self.scale
        y = float(np.dot(rel, self.up)) * self.scale
        w, h = self.size
        if normalized:
            return 2.0 * x / w, 2.0 * y / h
        return w / 2.0 + x, h / 2.0 - y

    def cast_ray(self, pointer):
        return list(self.hits)

    def camera_position(self):
        return self.position.copy()

    def camera_to_target_direction(self):
        return self.forward.copy()

    def set_navigation_enabled(self, enabled):
        self.navigation_enabled = enabled
        self.navigation_calls.append(enabled)


@pytest.fixture
def cube_navigator():
    return VolumeNavigator({"xSize": 100, "ySize": 100, "zSize": 100})


@pytest.fixture
def front_view():
    # looking down -z at the box center
    return FakeView(position=(50.0, 50.0, 300.0), target=(50.0, 50.0, 50.0))


@pytest.fixture
def back_view():
    # same box seen from the opposite side
    return FakeView(position=(50.0, 50.0, -200.0), target=(50.0, 50.0, 50.0))


@pytest.fixture
def side_view():
    # looking down -x, so a z-normal shows up horizontally on screen
    return FakeView(position=(300.0, 50.0, 50.0), target=(50.0, 50.0, 50.0))


@pytest.fixture
def make_view():
    return FakeView
