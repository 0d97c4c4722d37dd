from __future__ import annotations

from typing import Sequence, TYPE_CHECKING

from math import pi, acos
import numpy as np

if TYPE_CHECKING:
    from numpy import typing as npt

Vector3 = Sequence[float]

def deg2rad(degrees: float) -> float:
    return degrees * pi / 180

def as_vector3(values: Vector3) -> npt.NDArray[np.float64]:
    """
    Convert a 3-sequence into a float64 array of shape (3,).

    Raises:
        ValueError: If the input does not hold exactly three values.
    """
    arr = np.asarray(values, dtype=np.float64).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"Expected 3 components, got {arr.shape[0]}.")
    return arr

def normalize(v: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Return v / |v|, or a zero vector when |v| is zero."""
    norm = float(np.linalg.norm(v))
    if norm == 0.0:
        return np.zeros_like(v, dtype=np.float64)
    return np.asarray(v, dtype=np.float64) / norm

def signed_angle(
    a: npt.NDArray[np.float64],
    b: npt.NDArray[np.float64],
    reference_normal: npt.NDArray[np.float64]
) -> float:
    """
    Signed angle (radians) from direction `a` to direction `b`.

    The magnitude is acos of the dot product of the normalized inputs, the sign is
    positive when cross(a, b) points the same way as `reference_normal` and negative
    otherwise. 2D inputs are lifted to z=0, so (0, 0, 1) is the natural reference
    for screen-space vectors.

    Args:
        a: Reference direction (2D or 3D).
        b: Measured direction (2D or 3D).
        reference_normal: Direction that defines the positive turning sense.

    Returns:
        Angle in [-pi, pi]. Zero if either input has zero length.
    """
    a3 = _lift(a)
    b3 = _lift(b)
    a3 = normalize(a3)
    b3 = normalize(b3)
    if not a3.any() or not b3.any():
        return 0.0

    # clip protects acos from dot products like 1.0000000002
    magnitude = acos(float(np.clip(np.dot(a3, b3), -1.0, 1.0)))
    sign = 1.0 if float(np.dot(np.cross(a3, b3), _lift(reference_normal))) > 0 else -1.0
    return sign * magnitude

def _lift(v: Sequence[float]) -> npt.NDArray[np.float64]:
    arr = np.asarray(v, dtype=np.float64).reshape(-1)
    if arr.shape == (2,):
        return np.array([arr[0], arr[1], 0.0])
    return arr

def axis_rotation_matrix(axis: Vector3, angle_rad: float) -> npt.NDArray[np.float64]:
    """
    Rotation matrix (3, 3) about an arbitrary axis through the origin (Rodrigues).
    Positive angles follow the right-hand rule around `axis`.
    """
    k = normalize(as_vector3(axis))
    if not k.any():
        return np.eye(3)
    K = np.array([
        [0.0, -k[2], k[1]],
        [k[2], 0.0, -k[0]],
        [-k[1], k[0], 0.0],
    ])
    return np.eye(3) + np.sin(angle_rad) * K + (1.0 - np.cos(angle_rad)) * (K @ K)

def euler_xyz_matrix(ax: float, ay: float, az: float) -> npt.NDArray[np.float64]:
    """
    Combined rotation for angles (radians) about the world X, Y and Z axes,
    applied in that order: R = Rz @ Ry @ Rx.
    """
    rx = axis_rotation_matrix((1.0, 0.0, 0.0), ax)
    ry = axis_rotation_matrix((0.0, 1.0, 0.0), ay)
    rz = axis_rotation_matrix((0.0, 0.0, 1.0), az)
    return rz @ ry @ rx


def round_values(values: Sequence[float], decimals: int) -> tuple[float, ...]:
    """Round for display. Negative zero is folded to 0.0 so "-0.0" never shows up."""
    return tuple(float(round(float(v), decimals)) + 0.0 for v in values)
