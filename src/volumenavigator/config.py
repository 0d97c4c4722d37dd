"""
Configuration & Global Constants
================================
This module serves as the central registry for display precision, default
box dimensions and display styling.

Why is this file needed?
------------------------
1. Consistency: The model, the controller and the view agree on one display precision
   instead of scattering magic numbers.
2. Styling: Colours and opacities of the scene live in one place.

Exports:
    EQUATION_DECIMALS (int): Decimal digits of externally reported plane values.
    DEFAULT_OUTER_BOX (dict): Outer box options used by the standalone app.
    DEFAULT_INNER_BOX (dict): Inner box options used by the standalone app.
"""
from typing import Dict

# Precision
EQUATION_DECIMALS: int = 4

# Standalone application defaults (same shape as the widget options)
DEFAULT_OUTER_BOX: Dict[str, float] = {
    "xSize": 100.0,
    "ySize": 100.0,
    "zSize": 100.0,
}
DEFAULT_INNER_BOX: Dict[str, float] = {
    "xSize": 60.0,
    "ySize": 70.0,
    "zSize": 50.0,
    "xOrigin": 20.0,
    "yOrigin": 15.0,
    "zOrigin": 25.0,
}

# Scene styling
OUTER_BOX_COLOR: str = "#c489ed"
OUTER_BOX_OPACITY: float = 0.3
INNER_BOX_COLOR: str = "#0059ff"
INNER_BOX_OPACITY: float = 0.2
POLYGON_COLOR: str = "#ff0000"
POLYGON_OPACITY: float = 0.4
VERTEX_COLOR: str = "black"

# Gimbal styling, sizes are fractions of the outer box diagonal
GIMBAL_RING_RADIUS: float = 0.12
GIMBAL_ARROW_LENGTH: float = 0.25
GIMBAL_RING_COLORS: Dict[str, str] = {
    "x": "#ff3030",
    "y": "#30c030",
    "z": "#3060ff",
}
GIMBAL_ARROW_COLOR: str = "#ffaa00"
