"""Table-driven geometry service.

Provides pad-plane layouts and the local-to-tracking transformation of every
configured chamber, plus the chamber height constants needed by the
transformer. The service is immutable once built and may be shared.
"""

from __future__ import annotations

from dataclasses import dataclass

from .core.config import GeometryConfig
from .core.constants import N_CHAMBER_PER_SEC, N_LAYER
from .core.errors import UnknownDetectorError
from .core.frames import Affine3D, compose
from .core.logging import get_logger

logger = get_logger(__name__)


def get_layer(detector: int) -> int:
    return detector % N_LAYER


def get_stack(detector: int) -> int:
    return (detector % N_CHAMBER_PER_SEC) // N_LAYER


@dataclass(frozen=True)
class PadPlane:
    """Pad rows of one (layer, stack).

    Row positions are the upper row edges along z. Row 0 starts at
    ``+length / 2`` and positions decrease with the row index.
    """

    layer: int
    stack: int
    width_ipad: float
    row_sizes: tuple[float, ...]

    @property
    def nrows(self) -> int:
        return len(self.row_sizes)

    @property
    def length(self) -> float:
        return float(sum(self.row_sizes))

    def get_row_size(self, row: int) -> float:
        return self.row_sizes[row]

    def get_row_pos(self, row: int) -> float:
        return self.length / 2.0 - float(sum(self.row_sizes[:row]))


class GeometryService:
    """Read-only geometry lookups built from a GeometryConfig."""

    def __init__(self, config: GeometryConfig):
        self.config = config
        self._pad_planes: dict[tuple[int, int], PadPlane] = {
            (p.layer, p.stack): PadPlane(
                layer=p.layer,
                stack=p.stack,
                width_ipad=p.width_ipad,
                row_sizes=tuple(p.resolved_row_sizes()),
            )
            for p in config.pad_planes
        }
        self._matrices: dict[int, Affine3D] = {}
        for chamber in config.chambers:
            if chamber.matrix is not None:
                self._matrices[chamber.detector] = Affine3D(chamber.matrix)
            else:
                self._matrices[chamber.detector] = compose(
                    chamber.rotation_deg, chamber.translation
                )

        logger.info(
            "Geometry loaded",
            {"pad_planes": len(self._pad_planes), "chambers": len(self._matrices)},
        )

    @property
    def drift_height(self) -> float:
        """Height of the drift region (cathode plane offset)."""
        return self.config.drift_height

    @property
    def anode_half_height(self) -> float:
        """Half height of the amplification region."""
        return self.config.anode_half_height

    @property
    def drift_reference_offset(self) -> float:
        """Distance of the reference plane below the cathode plane."""
        return self.config.drift_reference_offset

    @property
    def detectors(self) -> list[int]:
        return sorted(self._matrices)

    def pad_plane(self, detector: int) -> PadPlane:
        """Pad plane of a detector.

        Raises:
            UnknownDetectorError: If no pad plane is configured for its layer and stack
        """
        try:
            return self._pad_planes[self._key(detector)]
        except KeyError:
            raise UnknownDetectorError(detector, "pad plane") from None

    def local_to_tracking(self, detector: int) -> Affine3D:
        """Transformation from the chamber-local to the tracking frame.

        Raises:
            UnknownDetectorError: If no matrix is configured for the detector
        """
        try:
            return self._matrices[detector]
        except KeyError:
            raise UnknownDetectorError(detector) from None

    @staticmethod
    def _key(detector: int) -> tuple[int, int]:
        return get_layer(detector), get_stack(detector)


__all__ = [
    "PadPlane",
    "GeometryService",
    "get_layer",
    "get_stack",
]
