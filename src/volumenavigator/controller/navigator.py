"""
Volume Navigator (Store)
========================
Central state of the widget: the outer/inner boxes, the cutting plane, the
current intersection polygon and the gimbal.

Why is this file needed?
------------------------
1. Single writer: every plane mutation (API call, control panel, gimbal drag)
   goes through this object, which recomputes the polygon from scratch.
2. Events: Views subscribe to `plane_changed` (in-progress) and
   `plane_committed` (finished) instead of polling.
3. Public API: The getters/setters other code uses to drive the plane.

Classes:
    PlaneSnapshot: Immutable copy of the plane state sent with every signal.
    VolumeNavigator: The QObject store.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from PySide6.QtCore import QObject, Signal

from volumenavigator.config import EQUATION_DECIMALS
from volumenavigator.controller.manipulation import ManipulationStateMachine
from volumenavigator.model.box import Box, build_edges
from volumenavigator.model.geometry_utils import deg2rad, round_values
from volumenavigator.model.gimbal import Gimbal
from volumenavigator.model.intersection import IntersectionPolygon, compute_polygon
from volumenavigator.model.plane import PlaneModel

logger = logging.getLogger(__name__)

BoxOptions = Union[Box, Mapping[str, Any]]
Point3 = tuple[float, float, float]


@dataclass(frozen=True)
class PlaneSnapshot:
    equation: tuple[float, float, float, float]
    normal: Point3
    point: Point3
    polygon: tuple[Point3, ...]


def _format_number(value: float) -> str:
    text = f"{value:.{EQUATION_DECIMALS}f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


class VolumeNavigator(QObject):
    """
    Pass this instance to the view, the control panel and the gimbal controller.
    """
    plane_changed = Signal(object)
    plane_committed = Signal(object)

    def __init__(
        self,
        outer_box: BoxOptions,
        inner_box: Optional[BoxOptions] = None,
        parent: Optional[QObject] = None
    ) -> None:
        super().__init__(parent)
        self.outer_box: Box = outer_box if isinstance(outer_box, Box) else Box.from_options(outer_box)
        if self.outer_box.origin.any():
            raise ValueError("The outer box is anchored at the world origin, it cannot have an origin offset.")
        self.inner_box: Optional[Box] = None
        if inner_box is not None:
            self.inner_box = inner_box if isinstance(inner_box, Box) else Box.from_options(inner_box)

        self.edges = build_edges(self.outer_box)
        self.plane = PlaneModel(normal=(0.0, 0.0, 1.0), point=self.outer_box.center)
        self.gimbal = Gimbal()
        self.manipulation = ManipulationStateMachine()
        self._polygon = IntersectionPolygon()

        self._on_change_callback: Optional[Callable[[], None]] = None
        self._on_finish_change_callback: Optional[Callable[[], None]] = None
        self._actions: dict[str, Callable[[], None]] = {}

        self.plane_changed.connect(self._run_change_callback)
        self.plane_committed.connect(self._run_finish_change_callback)

        self._recompute()
        logger.info(f"Volume navigator created for box {self.outer_box.size.tolist()}.")

    # ------------------------------------------------------------------------------
    # Getters
    # ------------------------------------------------------------------------------

    @property
    def polygon(self) -> IntersectionPolygon:
        return self._polygon

    @property
    def box_diagonal(self) -> float:
        return self.outer_box.diagonal

    @property
    def handles_visible(self) -> bool:
        """The gimbal is drawn and pickable only while the plane cuts the box."""
        return self.gimbal.visible and not self._polygon.is_empty

    def get_plane_equation(self) -> tuple[float, float, float, float]:
        """(a, b, c, d) of a*x + b*y + c*z + d = 0, rounded for display."""
        return self.plane.equation()

    def get_plane_normal(self) -> list[float]:
        return self.plane.normal().tolist()

    def get_plane_point(self) -> list[float]:
        return self.plane.anchor().tolist()

    def get_plane_polygon(self) -> list[list[float]]:
        """Ordered polygon vertices (a copy). Empty when the plane misses the box."""
        return self._polygon.to_list()

    def snapshot(self) -> PlaneSnapshot:
        return PlaneSnapshot(
            equation=self.plane.equation(),
            normal=tuple(self.plane.normal().tolist()),
            point=tuple(self.plane.anchor().tolist()),
            polygon=tuple(tuple(p) for p in self._polygon.to_list()),
        )

    def equation_literal(self) -> str:
        a, b, c, d = (_format_number(v) for v in self.plane.equation())
        return f"{a}x + {b}y + {c}z + {d} = 0"

    def normal_literal(self) -> str:
        return self._vector_literal(self.plane.normal())

    def point_literal(self) -> str:
        return self._vector_literal(self.plane.anchor())

    @staticmethod
    def _vector_literal(values: Sequence[float]) -> str:
        x, y, z = (_format_number(v) for v in round_values(values, EQUATION_DECIMALS))
        return f"({x} ; {y} ; {z})"

    # ------------------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------------------

    def set_plane(self, normal: Sequence[float], point: Sequence[float], commit: bool = True) -> None:
        """
        Raises:
            PlaneError: On a zero normal; the plane and the polygon are left as they were.
        """
        self.plane.set_from_normal_and_point(normal, point)
        self.refresh(commit=commit)

    def set_plane_point(self, point: Sequence[float], commit: bool = True) -> None:
        self.plane.set_point(point)
        self.refresh(commit=commit)

    def set_plane_normal(self, normal: Sequence[float], commit: bool = True) -> None:
        self.plane.set_normal(normal)
        self.refresh(commit=commit)

    def translate_plane(self, delta: Sequence[float], commit: bool = True) -> None:
        self.plane.translate(delta)
        self.refresh(commit=commit)

    def rotate_plane_degree(self, ax: float, ay: float, az: float, commit: bool = True) -> None:
        """Rotate about the world X, then Y, then Z axis, around the plane anchor."""
        self.plane.rotate(deg2rad(ax), deg2rad(ay), deg2rad(az))
        self.refresh(commit=commit)

    def refresh(self, commit: bool = False) -> None:
        """Recompute the polygon after the plane changed and notify listeners."""
        self._recompute()
        self.plane_changed.emit(self.snapshot())
        if commit:
            self.commit()

    def commit(self) -> None:
        self.plane_committed.emit(self.snapshot())

    def recenter_gimbal(self) -> None:
        self.gimbal.recenter(self._polygon.centroid)

    def _recompute(self) -> None:
        self._polygon = compute_polygon(self.plane, self.edges, self.outer_box)
        # while dragging the gimbal stays under the pointer (even outside the box),
        # it is recentered on release
        if not self.manipulation.is_grabbed:
            self.recenter_gimbal()

    # ------------------------------------------------------------------------------
    # Callbacks & actions
    # ------------------------------------------------------------------------------

    def set_on_change_callback(self, cb: Optional[Callable[[], None]]) -> None:
        """Called with no arguments on every in-progress change."""
        self._on_change_callback = cb

    def set_on_finish_change_callback(self, cb: Optional[Callable[[], None]]) -> None:
        """Called with no arguments when a change is committed."""
        self._on_finish_change_callback = cb

    def _run_change_callback(self, _snapshot: PlaneSnapshot) -> None:
        if self._on_change_callback:
            self._on_change_callback()

    def _run_finish_change_callback(self, _snapshot: PlaneSnapshot) -> None:
        if self._on_finish_change_callback:
            self._on_finish_change_callback()

    def add_action(self, name: str, callback: Callable[[], None]) -> None:
        """Register a named user action, shown as a button by the control panel."""
        if name in self._actions:
            raise ValueError(f"Action '{name}' already exists.")
        self._actions[name] = callback

    def actions(self) -> dict[str, Callable[[], None]]:
        return dict(self._actions)
