"""
Plane Model
===========
The cutting plane, stored as an explicit anchor point + orthonormal basis.

The implicit equation (a, b, c, d) with a*x + b*y + c*z + d = 0 is derived
from the anchor and the normal after every mutation, so translating and
rotating never have to solve a 3-point system.

Classes:
    PlaneError: Raised when a plane cannot be constructed.
    PlaneModel: Anchor, basis (u, v, n) and derived equation.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from volumenavigator.config import EQUATION_DECIMALS
from volumenavigator.model.geometry_utils import (
    Vector3, as_vector3, normalize, axis_rotation_matrix, euler_xyz_matrix, round_values
)

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class PlaneError(ValueError):
    """Invalid plane definition (zero or non-finite normal, non-finite point)."""


class PlaneModel:
    """
    Plane with anchor P, unit normal n and in-plane unit vectors u, v such that
    (u, v, n) is a right-handed orthonormal basis.
    """

    def __init__(self, normal: Vector3 = (0.0, 0.0, 1.0), point: Vector3 = (0.0, 0.0, 0.0)) -> None:
        self._point: npt.NDArray[np.float64] = np.zeros(3)
        self._normal: npt.NDArray[np.float64] = np.array([0.0, 0.0, 1.0])
        self._u: npt.NDArray[np.float64] = np.array([1.0, 0.0, 0.0])
        self._v: npt.NDArray[np.float64] = np.array([0.0, 1.0, 0.0])
        self._equation: npt.NDArray[np.float64] = np.array([0.0, 0.0, 1.0, 0.0])
        self.set_from_normal_and_point(normal, point)

    # ------------------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------------------

    def set_from_normal_and_point(self, normal: Vector3, point: Vector3) -> None:
        """
        Rebuild the plane from a normal and a point.

        A second point Q is found by solving the plane equation for one coordinate,
        trying z, then y, then x, whichever has a non-zero normal component. Then
        u = normalize(Q - P) and v = normalize(n x u).

        Raises:
            PlaneError: If the normal is the zero vector or any value is not finite.
                The plane is left unchanged.
        """
        try:
            n = as_vector3(normal)
            p = as_vector3(point)
        except ValueError as e:
            raise PlaneError(str(e)) from e

        if not (np.all(np.isfinite(n)) and np.all(np.isfinite(p))):
            logger.error(f"Rejected plane with non-finite values: normal={n}, point={p}")
            raise PlaneError("Plane normal and point must be finite.")

        norm = float(np.linalg.norm(n))
        if norm == 0.0:
            logger.error("Rejected plane with a zero-length normal.")
            raise PlaneError("Plane normal must not be the zero vector.")
        n = n / norm

        q = self._second_point(n, p)
        u = normalize(q - p)
        v = normalize(np.cross(n, u))

        self._normal = n
        self._point = p
        self._u = u
        self._v = v
        self._update_equation()
        logger.debug(f"Plane set: normal={self._normal}, point={self._point}")

    def set_point(self, point: Vector3) -> None:
        self.set_from_normal_and_point(self._normal, point)

    def set_normal(self, normal: Vector3) -> None:
        self.set_from_normal_and_point(normal, self._point)

    def translate(self, delta: Vector3) -> None:
        """Shift the anchor by `delta`. The basis is untouched."""
        self._point = self._point + as_vector3(delta)
        self._update_equation()

    def rotate(self, ax: float, ay: float, az: float) -> None:
        """
        Rotate the basis about the world X, Y then Z axes (radians),
        around the plane's own anchor.
        """
        self._apply_rotation(euler_xyz_matrix(ax, ay, az), pivot=None)

    def rotate_about_axis(self, axis: Vector3, angle_rad: float, pivot: Vector3 | None = None) -> None:
        """
        Rotate around an arbitrary direction passing through `pivot`
        (the anchor when omitted). The anchor follows the rotation, so the
        plane keeps passing through the pivot.
        """
        self._apply_rotation(axis_rotation_matrix(axis, angle_rad), pivot=pivot)

    def _apply_rotation(self, matrix: npt.NDArray[np.float64], pivot: Vector3 | None) -> None:
        if pivot is not None:
            c = as_vector3(pivot)
            self._point = c + matrix @ (self._point - c)
        # renormalize to keep drift from repeated small rotations out of the basis
        self._normal = normalize(matrix @ self._normal)
        self._u = normalize(matrix @ self._u)
        self._v = normalize(np.cross(self._normal, self._u))
        self._update_equation()

    # ------------------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------------------

    def normal(self) -> npt.NDArray[np.float64]:
        return self._normal.copy()

    def anchor(self) -> npt.NDArray[np.float64]:
        return self._point.copy()

    def basis(self) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """(u, v, n)"""
        return self._u.copy(), self._v.copy(), self._normal.copy()

    def coefficients(self) -> npt.NDArray[np.float64]:
        """Full precision (a, b, c, d), used for the intersection math."""
        return self._equation.copy()

    def equation(self) -> tuple[float, float, float, float]:
        """(a, b, c, d) rounded to EQUATION_DECIMALS for display."""
        return round_values(self._equation, EQUATION_DECIMALS)

    def signed_distance(self, point: Vector3) -> float:
        a, b, c, d = self._equation
        x, y, z = as_vector3(point)
        return float(a * x + b * y + c * z + d)

    # ------------------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------------------

    def _update_equation(self) -> None:
        a, b, c = self._normal
        d = -float(np.dot(self._normal, self._point))
        self._equation = np.array([a, b, c, d])

    @staticmethod
    def _second_point(n: npt.NDArray[np.float64], p: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        a, b, c = n
        d = -float(np.dot(n, p))
        if c != 0.0:
            x, y = p[0] + 1.0, p[1]
            return np.array([x, y, -(a * x + b * y + d) / c])
        if b != 0.0:
            x, z = p[0] + 1.0, p[2]
            return np.array([x, -(a * x + c * z + d) / b, z])
        y, z = p[1] + 1.0, p[2]
        return np.array([-(b * y + c * z + d) / a, y, z])

    def __repr__(self) -> str:
        return f"PlaneModel(normal={self._normal.tolist()}, point={self._point.tolist()})"
