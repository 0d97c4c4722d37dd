"""
VTK and Geometry Utilities
Helper functions converting navigator geometry into PyVista data.
"""
from typing import Optional

import numpy as np
import numpy.typing as npt
import pyvista as pv

import logging

from volumenavigator.model.box import Box
from volumenavigator.model.intersection import IntersectionPolygon
from volumenavigator.model.plane import PlaneModel

logger = logging.getLogger(__name__)

class VtkUtils:
    @staticmethod
    def box_to_polydata(box: Box) -> pv.PolyData:
        """Axis-aligned box surface spanning the box bounds."""
        return pv.Box(bounds=box.bounds())

    @staticmethod
    def polygon_to_polydata(polygon: IntersectionPolygon, plane: Optional[PlaneModel] = None) -> pv.PolyData:
        """
        Mesh of the polygon's centroid fan (`IntersectionPolygon.triangles`).

        Every triangle gets its own 3 points. When `plane` is given the points carry
        texture coordinates: the in-plane (u, v) position scaled to [0, 1] over the
        polygon's extent.

        Returns:
            PolyData with N triangles, or an empty PolyData for an empty polygon.
        """
        if polygon.is_empty:
            return pv.PolyData()

        triangles = polygon.triangles()
        n = len(triangles)
        points = triangles.reshape(-1, 3)
        faces = np.column_stack([np.full(n, 3), np.arange(3 * n).reshape(n, 3)])
        mesh = pv.PolyData(points, faces.ravel().astype(np.int_))

        if plane is not None:
            uv = polygon.plane_coordinates(plane)
            fan_uv = np.stack([
                np.broadcast_to(uv.mean(axis=0), uv.shape), uv, np.roll(uv, -1, axis=0)
            ], axis=1).reshape(-1, 2)
            low = fan_uv.min(axis=0)
            extent = fan_uv.max(axis=0) - low
            mesh.active_texture_coordinates = (fan_uv - low) / np.where(extent > 0.0, extent, 1.0)
        return mesh

    @staticmethod
    def polygon_outline(polygon: IntersectionPolygon) -> pv.PolyData:
        """Closed polyline through the polygon vertices."""
        if polygon.is_empty:
            return pv.PolyData()
        n = len(polygon)
        pd = pv.PolyData(np.asarray(polygon.vertices, dtype=np.float64))
        pd.lines = np.hstack([[n + 1], np.arange(n, dtype=np.int_), [0]])
        return pd

    @staticmethod
    def ring_polydata(
        center: npt.NDArray[np.float64],
        axis: npt.NDArray[np.float64],
        radius: float,
        width_ratio: float = 0.12
    ) -> pv.PolyData:
        """Flat annulus around `axis`, used as a pickable rotation ring."""
        return pv.Disc(
            center=tuple(center),
            inner=radius * (1.0 - width_ratio),
            outer=radius,
            normal=tuple(axis),
            r_res=1,
            c_res=72,
        )

    @staticmethod
    def arrow_polydata(
        center: npt.NDArray[np.float64],
        direction: npt.NDArray[np.float64],
        length: float
    ) -> pv.PolyData:
        """Single arrow from `center` along `direction`."""
        return pv.Arrow(
            start=tuple(center),
            direction=tuple(direction),
            scale=length,
            tip_length=0.25,
            tip_radius=0.08,
            shaft_radius=0.025,
        )
