"""Type definitions and aliases for tracklet transformation."""

import numpy as np
import numpy.typing as npt

# Coordinate types
Position3D = tuple[float, float, float]
Rotation3D = tuple[float, float, float]

# Affine transforms are stored as 3x4 float64 arrays [R | t]
Matrix3x4 = npt.NDArray[np.float64]

__all__ = [
    "Position3D",
    "Rotation3D",
    "Matrix3x4",
]
