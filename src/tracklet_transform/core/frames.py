"""Coordinate frame transformations between chamber-local and tracking frames.

Transforms are affine maps stored as 3x4 float64 arrays ``[R | t]`` with
``p_out = R @ p_in + t``. Rotations are Z-Y-X Euler rotations, translations are
in centimeters.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .types import Matrix3x4, Position3D, Rotation3D
from .units import deg_to_rad


@dataclass(frozen=True, eq=False)
class Affine3D:
    """3-D affine transformation, rotation block followed by translation."""

    matrix: Matrix3x4

    def __post_init__(self) -> None:
        m = np.array(self.matrix, dtype=np.float64)
        if m.shape != (3, 4):
            raise ValueError(f"Affine matrix must have shape (3, 4), got {m.shape}")
        m.setflags(write=False)
        object.__setattr__(self, "matrix", m)

    @property
    def rotation(self) -> np.ndarray:
        return self.matrix[:, :3]

    @property
    def translation(self) -> np.ndarray:
        return self.matrix[:, 3]

    def apply(self, point) -> np.ndarray:  # type: ignore[no-untyped-def]
        """Apply the transform to points of shape (3,) or (N, 3)."""
        p = np.asarray(point, dtype=np.float64)
        return p @ self.rotation.T + self.translation


def compose(
    rotation_deg: Rotation3D = (0.0, 0.0, 0.0),
    translation: Position3D = (0.0, 0.0, 0.0),
) -> Affine3D:
    """Compose a Z-Y-X Euler rotation and a translation.

    Args:
        rotation_deg: Euler angles (rz, ry, rx) in degrees, applied Z first
        translation: Translation (x, y, z) in centimeters

    Returns:
        Affine3D with R = Rz * Ry * Rx
    """
    rz, ry, rx = (deg_to_rad(a) for a in rotation_deg)

    cz, sz = np.cos(rz), np.sin(rz)
    cy, sy = np.cos(ry), np.sin(ry)
    cx, sx = np.cos(rx), np.sin(rx)

    R = np.array(
        [
            [cy * cz, sx * sy * cz - cx * sz, cx * sy * cz + sx * sz],
            [cy * sz, sx * sy * sz + cx * cz, cx * sy * sz - sx * cz],
            [-sy, sx * cy, cx * cy],
        ],
        dtype=np.float64,
    )
    t = np.asarray(translation, dtype=np.float64).reshape(3, 1)
    return Affine3D(np.hstack([R, t]))


__all__ = [
    "Affine3D",
    "compose",
]
