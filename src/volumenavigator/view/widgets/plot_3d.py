"""
3D Visualization Widget (PyVista Wrapper)

Renders the outer box, the inner box, the intersection polygon and the gimbal,
and forwards left-button pointer events to the `GimbalController`.
"""

from __future__ import annotations

from typing import Optional, Dict, Sequence

import logging
import numpy as np
import numpy.typing as npt

from PySide6.QtWidgets import QWidget, QVBoxLayout

from pyvistaqt import QtInteractor
import pyvista as pv
from vtkmodules.vtkInteractionStyle import vtkInteractorStyleUser
from vtkmodules.vtkRenderingCore import vtkCellPicker

from volumenavigator import config
from volumenavigator.controller.collaborator import RayHit
from volumenavigator.controller.gimbal_controller import GimbalController
from volumenavigator.controller.navigator import PlaneSnapshot, VolumeNavigator
from volumenavigator.model.geometry_utils import normalize
from volumenavigator.model.gimbal import HandleId
from volumenavigator.view.widgets.vtk_utils import VtkUtils

logger = logging.getLogger(__name__)

# VTK fires observers with higher priority first, the interactor style sits at 0
POINTER_OBSERVER_PRIORITY = 10.0


class NavigatorPlotWidget(QWidget):
    def __init__(self, navigator: VolumeNavigator, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.navigator = navigator

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._vtk_utils = VtkUtils()
        self.controller = GimbalController(navigator, self)

        # --- Actors state ---
        self._polygon_actors: list[pv.Actor] = []
        self._gimbal_actors: Dict[HandleId, list[pv.Actor]] = {}
        self._navigation_style = None

        self._picker = vtkCellPicker()
        self._picker.SetTolerance(0.002)
        self._picker.PickFromListOn()

        self._init_plotter()
        self._draw_boxes()
        self._attach_observers()

        self.navigator.plane_changed.connect(self._on_plane_changed)
        self.navigator.plane_committed.connect(self._on_plane_changed)
        self.update_scene()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def update_scene(self) -> None:
        """Rebuild the polygon and gimbal layers from the navigator and render."""
        self._update_polygon_layer()
        self._update_gimbal_layer()
        self.plotter.render()

    # ------------------------------------------------------------------------------
    # ViewCollaborator
    # ------------------------------------------------------------------------------

    def project_to_screen(self, point: Sequence[float], normalized: bool = False) -> tuple[float, float]:
        renderer = self.plotter.renderer
        x, y, z = (float(v) for v in point)
        renderer.SetWorldPoint(x, y, z, 1.0)
        renderer.WorldToDisplay()
        dx, dy, _ = renderer.GetDisplayPoint()
        width, height = self.plotter.render_window.GetSize()
        if normalized:
            return 2.0 * dx / max(width, 1) - 1.0, 2.0 * dy / max(height, 1) - 1.0
        return dx, height - dy

    def cast_ray(self, pointer: tuple[float, float]) -> list[RayHit]:
        actor_to_handle = {
            actor: handle for handle, actors in self._gimbal_actors.items() for actor in actors
        }
        if not actor_to_handle:
            return []

        self._picker.InitializePickList()
        for actor in actor_to_handle:
            self._picker.AddPickList(actor)

        _, height = self.plotter.render_window.GetSize()
        if not self._picker.Pick(pointer[0], height - pointer[1], 0.0, self.plotter.renderer):
            return []

        handle = actor_to_handle.get(self._picker.GetActor())
        if handle is None:
            return []
        point = tuple(float(v) for v in self._picker.GetPickPosition())
        distance = float(np.linalg.norm(np.subtract(point, self.camera_position())))
        return [RayHit(handle_id=handle.value, point=point, distance=distance)]

    def camera_position(self) -> npt.NDArray[np.float64]:
        return np.asarray(self.plotter.camera.position, dtype=np.float64)

    def camera_to_target_direction(self) -> npt.NDArray[np.float64]:
        focal = np.asarray(self.plotter.camera.focal_point, dtype=np.float64)
        return normalize(focal - self.camera_position())

    def set_navigation_enabled(self, enabled: bool) -> None:
        interactor = self.plotter.iren.interactor
        if not enabled and self._navigation_style is None:
            # swap in a style that ignores the mouse, the pointer observers keep working
            self._navigation_style = interactor.GetInteractorStyle()
            interactor.SetInteractorStyle(vtkInteractorStyleUser())
        elif enabled and self._navigation_style is not None:
            interactor.SetInteractorStyle(self._navigation_style)
            self._navigation_style = None

    # ------------------------------------------------------------------------------
    # Internal: Layer Management
    # ------------------------------------------------------------------------------

    def _draw_boxes(self) -> None:
        outer = self.navigator.outer_box
        self.plotter.add_mesh(
            self._vtk_utils.box_to_polydata(outer),
            color=config.OUTER_BOX_COLOR,
            opacity=config.OUTER_BOX_OPACITY,
            pickable=False,
            show_edges=True,
        )
        inner = self.navigator.inner_box
        if inner is not None:
            self.plotter.add_mesh(
                self._vtk_utils.box_to_polydata(inner),
                color=config.INNER_BOX_COLOR,
                opacity=config.INNER_BOX_OPACITY,
                pickable=False,
            )

    def _update_polygon_layer(self) -> None:
        for actor in self._polygon_actors:
            self.plotter.remove_actor(actor, render=False)
        self._polygon_actors.clear()

        polygon = self.navigator.polygon
        if polygon.is_empty:
            return

        try:
            fill = self.plotter.add_mesh(
                self._vtk_utils.polygon_to_polydata(polygon, self.navigator.plane),
                color=config.POLYGON_COLOR,
                opacity=config.POLYGON_OPACITY,
                pickable=False,
                lighting=False,
            )
            outline = self.plotter.add_mesh(
                self._vtk_utils.polygon_outline(polygon),
                color=config.POLYGON_COLOR,
                line_width=2,
                pickable=False,
            )
            markers = self.plotter.add_points(
                np.asarray(polygon.vertices),
                color=config.VERTEX_COLOR,
                point_size=8,
                render_points_as_spheres=True,
                pickable=False,
            )
            self._polygon_actors.extend([fill, outline, markers])
        except Exception as e:
            logger.exception(f"Failed to draw the intersection polygon: {e}")

    def _update_gimbal_layer(self) -> None:
        for actors in self._gimbal_actors.values():
            for actor in actors:
                self.plotter.remove_actor(actor, render=False)
        self._gimbal_actors = {}

        gimbal = self.navigator.gimbal
        if not self.navigator.handles_visible:
            return

        diagonal = self.navigator.box_diagonal
        normal = self.navigator.plane.normal()
        arrow_length = config.GIMBAL_ARROW_LENGTH * diagonal
        try:
            self._gimbal_actors[HandleId.TRANSLATE] = [
                self.plotter.add_mesh(
                    self._vtk_utils.arrow_polydata(gimbal.center, direction, arrow_length),
                    color=config.GIMBAL_ARROW_COLOR,
                    pickable=True,
                )
                for direction in (normal, -normal)
            ]
            for handle, key in ((HandleId.ROTATE_X, "x"), (HandleId.ROTATE_Y, "y"), (HandleId.ROTATE_Z, "z")):
                ring = self._vtk_utils.ring_polydata(
                    gimbal.center, gimbal.ring_normal(handle), config.GIMBAL_RING_RADIUS * diagonal
                )
                self._gimbal_actors[handle] = [
                    self.plotter.add_mesh(ring, color=config.GIMBAL_RING_COLORS[key], pickable=True)
                ]
        except Exception as e:
            logger.exception(f"Failed to draw the gimbal: {e}")

    def _on_plane_changed(self, _snapshot: PlaneSnapshot) -> None:
        self.update_scene()

    # ------------------------------------------------------------------------------
    # Internal: Setup & Observers
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        box = self.navigator.outer_box
        diagonal = box.diagonal
        self.plotter.set_background("white")
        self.plotter.add_axes()
        self.plotter.camera_position = [
            (-diagonal, 1.5 * diagonal, 2.0 * diagonal),
            tuple(box.center),
            (0.0, 1.0, 0.0),
        ]

    def _attach_observers(self) -> None:
        interactor = self.plotter.iren.interactor
        interactor.AddObserver("LeftButtonPressEvent", self._on_left_press, POINTER_OBSERVER_PRIORITY)
        interactor.AddObserver("MouseMoveEvent", self._on_mouse_move, POINTER_OBSERVER_PRIORITY)
        interactor.AddObserver("LeftButtonReleaseEvent", self._on_left_release, POINTER_OBSERVER_PRIORITY)

    def _event_pointer(self, interactor) -> tuple[float, float]:
        x, y = interactor.GetEventPosition()
        _, height = self.plotter.render_window.GetSize()
        return float(x), float(height - y)

    def _on_left_press(self, interactor, _event) -> None:
        self.controller.pointer_down(self._event_pointer(interactor))

    def _on_mouse_move(self, interactor, _event) -> None:
        self.controller.pointer_move(self._event_pointer(interactor))

    def _on_left_release(self, interactor, _event) -> None:
        self.controller.pointer_up(self._event_pointer(interactor))
