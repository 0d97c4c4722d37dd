"""
Gimbal (plane manipulator) state.

The gimbal sits on the centroid of the intersection polygon and owns one
translation arrow along the plane normal plus three rotation rings. The rings
turn together with the plane, so their axes are the columns of `orientation`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, TYPE_CHECKING

import numpy as np

from volumenavigator.model.geometry_utils import axis_rotation_matrix, normalize

if TYPE_CHECKING:
    import numpy.typing as npt


class HandleId(str, Enum):
    """Names of the pickable gimbal handles, shared with the view actors."""
    TRANSLATE = "gimbal_translate"
    ROTATE_X = "gimbal_ring_x"
    ROTATE_Y = "gimbal_ring_y"
    ROTATE_Z = "gimbal_ring_z"

    @property
    def axis_index(self) -> Optional[int]:
        return {HandleId.ROTATE_X: 0, HandleId.ROTATE_Y: 1, HandleId.ROTATE_Z: 2}.get(self)

    @classmethod
    def parse(cls, name: str) -> Optional[HandleId]:
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass
class Gimbal:
    center: Optional[npt.NDArray[np.float64]] = None
    orientation: npt.NDArray[np.float64] = field(default_factory=lambda: np.eye(3))

    @property
    def visible(self) -> bool:
        return self.center is not None

    def ring_normal(self, handle: HandleId) -> npt.NDArray[np.float64]:
        """Current world-space axis of a rotation ring."""
        index = handle.axis_index
        if index is None:
            raise ValueError(f"{handle.value} is not a rotation ring.")
        return self.orientation[:, index].copy()

    def rotate(self, axis: npt.NDArray[np.float64], angle_rad: float) -> None:
        self.orientation = axis_rotation_matrix(axis, angle_rad) @ self.orientation
        # re-orthonormalize (Gram-Schmidt) so the ring axes do not drift apart
        x = normalize(self.orientation[:, 0])
        y = normalize(self.orientation[:, 1] - np.dot(self.orientation[:, 1], x) * x)
        self.orientation = np.column_stack((x, y, np.cross(x, y)))

    def translate(self, delta: npt.NDArray[np.float64]) -> None:
        if self.center is not None:
            self.center = self.center + delta

    def recenter(self, centroid: Optional[npt.NDArray[np.float64]]) -> None:
        """Move onto a new polygon centroid, or hide when there is no polygon."""
        self.center = None if centroid is None else np.asarray(centroid, dtype=np.float64).copy()
