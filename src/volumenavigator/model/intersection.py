"""
Plane / Box Intersection
========================
Computes, orders and triangulates the polygon where the cutting plane crosses
the outer box.

The polygon is rebuilt from scratch on every call. Its vertex count changes
between 0 and 6 as the plane moves, so there is nothing worth patching
incrementally.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Optional, Sequence, TYPE_CHECKING

import numpy as np

from volumenavigator.model.box import Box, BoxEdge
from volumenavigator.model.geometry_utils import signed_angle
from volumenavigator.model.plane import PlaneModel

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

BOUNDS_EPSILON: float = 1e-12


@dataclass(frozen=True, eq=False)
class IntersectionPolygon:
    """
    Ordered polygon vertices (N, 3) with N in 3..6, plus the fan triangulation
    around the centroid. An empty polygon has no vertices and no triangles.
    """
    vertices: npt.NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 3)))

    @property
    def is_empty(self) -> bool:
        return len(self.vertices) < 3

    def __len__(self) -> int:
        return len(self.vertices)

    @property
    def centroid(self) -> Optional[npt.NDArray[np.float64]]:
        if self.is_empty:
            return None
        return self.vertices.mean(axis=0)

    def triangles(self) -> npt.NDArray[np.float64]:
        """
        Fan triangulation from the centroid: one triangle per consecutive vertex
        pair plus the closing triangle (last, first).

        Returns:
            Array of shape (N, 3, 3): N triangles of 3 points each.
        """
        if self.is_empty:
            return np.empty((0, 3, 3))
        c = self.centroid
        nxt = np.roll(self.vertices, -1, axis=0)
        return np.stack([np.broadcast_to(c, self.vertices.shape), self.vertices, nxt], axis=1)

    def plane_coordinates(self, plane: PlaneModel) -> npt.NDArray[np.float64]:
        """Vertices in the plane's (u, v) basis relative to its anchor, shape (N, 2)."""
        if self.is_empty:
            return np.empty((0, 2))
        u, v, _ = plane.basis()
        rel = self.vertices - plane.anchor()
        return np.column_stack((rel @ u, rel @ v))

    def to_list(self) -> list[list[float]]:
        return self.vertices.tolist()


def edge_intersections(plane: PlaneModel, edges: Sequence[BoxEdge]) -> list[npt.NDArray[np.float64]]:
    """
    Points where the lines carrying `edges` meet the plane.

    Substituting origin + t * direction into a*x + b*y + c*z + d = 0 gives
    t * (n . direction) = -(n . origin + d). Edges parallel to the plane have a zero
    coefficient and are skipped, the perpendicular edges next to them catch the
    crossing instead. Non-finite points are dropped.
    """
    coeffs = plane.coefficients()
    n, d = coeffs[:3], coeffs[3]
    points = []
    for edge in edges:
        denom = float(np.dot(n, edge.direction))
        if denom == 0.0:
            continue
        with np.errstate(all="ignore"):
            t = -(float(np.dot(n, edge.origin)) + d) / denom
            point = edge.point_at(t)
        if not np.all(np.isfinite(point)):
            continue
        points.append(point)
    return points


def order_polygon(points: npt.NDArray[np.float64], normal: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """
    Sort coplanar points around their centroid by signed angle from the first
    centroid->point ray, the sign being taken from the plane normal.
    """
    centroid = points.mean(axis=0)
    rays = points - centroid
    angles = [signed_angle(rays[0], ray, normal) for ray in rays]
    order = np.argsort(np.asarray(angles), kind="stable")
    return points[order]


def is_degenerate(points: npt.NDArray[np.float64], tolerance: float) -> bool:
    """True when the points span no area: all coincident or on one line."""
    rel = points - points.mean(axis=0)
    singular = np.linalg.svd(rel, compute_uv=False)
    return len(singular) < 2 or float(singular[1]) <= tolerance


def compute_polygon(plane: PlaneModel, edges: Sequence[BoxEdge], box: Box) -> IntersectionPolygon:
    """
    Polygon where `plane` crosses the box described by `edges` / `box`.

    Points outside the closed box bounds are discarded. Coordinates within
    tolerance of a face are snapped onto it and points closer than the tolerance
    are merged, so a corner reached from several edges counts once. Fewer than
    3 points, or points on a single line (the plane only touches a corner or an
    edge), give an empty polygon.
    """
    # absorbs rounding on hits that land exactly on a face or a corner
    eps = BOUNDS_EPSILON * box.diagonal

    kept: list[npt.NDArray[np.float64]] = []
    for point in edge_intersections(plane, edges):
        if not box.contains(point, tolerance=eps):
            continue
        point = box.snap_to_faces(point, eps)
        if any(np.allclose(point, other, rtol=0.0, atol=eps) for other in kept):
            continue
        kept.append(point)

    if len(kept) < 3 or is_degenerate(np.array(kept), eps):
        logger.debug(f"Plane does not cut the box ({len(kept)} distinct points).")
        return IntersectionPolygon()

    vertices = order_polygon(np.array(kept), plane.normal())
    return IntersectionPolygon(vertices=vertices)
