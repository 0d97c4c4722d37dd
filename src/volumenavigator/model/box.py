"""
Box Volumes and Edge Set
========================
The outer box is anchored at the world origin and spans
[0, x_size] x [0, y_size] x [0, z_size]. The inner box carries an origin
offset and is only displayed, it never takes part in the intersection.

Classes:
    Box: Immutable axis-aligned box dimensions (+ origin offset).
    BoxEdge: One of the 12 edges as (direction, origin).
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Any, Mapping, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Box:
    x_size: float
    y_size: float
    z_size: float
    x_origin: float = 0.0
    y_origin: float = 0.0
    z_origin: float = 0.0

    def __post_init__(self) -> None:
        for name in ("x_size", "y_size", "z_size"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0.0:
                logger.error(f"Rejected box with {name}={value}.")
                raise ValueError(f"Box {name} must be a positive finite number, got {value}.")
        for name in ("x_origin", "y_origin", "z_origin"):
            value = getattr(self, name)
            if not math.isfinite(value):
                logger.error(f"Rejected box with {name}={value}.")
                raise ValueError(f"Box {name} must be finite.")

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> Box:
        """
        Build a box from the widget option dictionary:
        {xSize, ySize, zSize} and optionally {xOrigin, yOrigin, zOrigin}.
        """
        try:
            return cls(
                x_size=float(options["xSize"]),
                y_size=float(options["ySize"]),
                z_size=float(options["zSize"]),
                x_origin=float(options.get("xOrigin", 0.0)),
                y_origin=float(options.get("yOrigin", 0.0)),
                z_origin=float(options.get("zOrigin", 0.0)),
            )
        except KeyError as e:
            logger.error(f"Box options are missing key {e}.")
            raise ValueError(f"Missing box option {e}.") from e

    @property
    def size(self) -> npt.NDArray[np.float64]:
        return np.array([self.x_size, self.y_size, self.z_size])

    @property
    def origin(self) -> npt.NDArray[np.float64]:
        return np.array([self.x_origin, self.y_origin, self.z_origin])

    @property
    def center(self) -> npt.NDArray[np.float64]:
        return self.origin + self.size / 2.0

    @property
    def diagonal(self) -> float:
        return float(np.linalg.norm(self.size))

    def bounds(self) -> tuple[float, float, float, float, float, float]:
        """(x_min, x_max, y_min, y_max, z_min, z_max), the PyVista bounds order."""
        lo = self.origin
        hi = lo + self.size
        return float(lo[0]), float(hi[0]), float(lo[1]), float(hi[1]), float(lo[2]), float(hi[2])

    def contains(self, point: npt.NDArray[np.float64], tolerance: float = 0.0) -> bool:
        """Closed (boundary-inclusive) containment test, widened by `tolerance` on every side."""
        lo = self.origin - tolerance
        hi = self.origin + self.size + tolerance
        return bool(np.all(point >= lo) and np.all(point <= hi))

    def snap_to_faces(self, point: npt.NDArray[np.float64], tolerance: float) -> npt.NDArray[np.float64]:
        """
        Coordinates within `tolerance` of a face are set exactly onto it, the rest
        is clipped into the box. Hits on one corner computed from different edges
        then compare equal.
        """
        lo = self.origin
        hi = lo + self.size
        snapped = np.clip(np.asarray(point, dtype=np.float64), lo, hi)
        snapped = np.where(np.abs(snapped - lo) <= tolerance, lo, snapped)
        return np.where(np.abs(snapped - hi) <= tolerance, hi, snapped)


@dataclass(frozen=True)
class BoxEdge:
    """An edge as the segment origin + t * direction, t in [0, 1]."""
    direction: tuple[float, float, float]
    origin: tuple[float, float, float]

    def point_at(self, t: float) -> npt.NDArray[np.float64]:
        return np.asarray(self.origin) + t * np.asarray(self.direction)


def build_edges(box: Box) -> tuple[BoxEdge, ...]:
    """
    The 12 edges of the box spanning [0, x_size] x [0, y_size] x [0, z_size].

    Every edge runs along one axis (direction = axis unit vector * size) and starts
    on the low side of that axis. For each axis the 4 starting corners are the
    combinations of {0, size} on the two other axes, so no two edges coincide and
    every corner touches exactly 3 edges.
    """
    size = (box.x_size, box.y_size, box.z_size)
    edges: list[BoxEdge] = []
    for axis in range(3):
        direction = [0.0, 0.0, 0.0]
        direction[axis] = size[axis]
        others = [i for i in range(3) if i != axis]
        for first in (0.0, size[others[0]]):
            for second in (0.0, size[others[1]]):
                origin = [0.0, 0.0, 0.0]
                origin[others[0]] = first
                origin[others[1]] = second
                edges.append(BoxEdge(direction=tuple(direction), origin=tuple(origin)))
    return tuple(edges)
