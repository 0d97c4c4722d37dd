"""
Capabilities the interaction code consumes from the rendering layer.

View space is in pixels with the origin at the top-left corner and y growing
downward, for both pointer positions and projected points.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np
    import numpy.typing as npt


@dataclass(frozen=True)
class RayHit:
    """One pickable actor crossed by the pointer ray."""
    handle_id: str
    point: tuple[float, float, float]
    distance: float


class ViewCollaborator(Protocol):
    def project_to_screen(self, point: Sequence[float], normalized: bool = False) -> tuple[float, float]:
        """World point -> view space (pixels), or NDC in [-1, 1] when `normalized`."""
        ...

    def cast_ray(self, pointer: tuple[float, float]) -> list[RayHit]:
        """Handles under the pointer, nearest first."""
        ...

    def camera_position(self) -> npt.NDArray[np.float64]:
        ...

    def camera_to_target_direction(self) -> npt.NDArray[np.float64]:
        """Unit vector from the camera toward its focal point."""
        ...

    def set_navigation_enabled(self, enabled: bool) -> None:
        """Turn the default camera orbit/pan/zoom gestures on or off."""
        ...
