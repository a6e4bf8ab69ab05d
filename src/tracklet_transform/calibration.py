"""Table-driven calibration service.

Per-chamber drift velocity, Lorentz angle, and t0 with configured defaults
for chambers that have no dedicated entry.
"""

from __future__ import annotations

from .core.config import CalibrationConfig
from .core.constants import MAX_CHAMBER
from .core.errors import CalibrationError


class CalibrationService:
    """Read-only calibration lookups built from a CalibrationConfig."""

    def __init__(self, config: CalibrationConfig):
        self.config = config

    def vdrift(self, detector: int) -> float:
        """Drift velocity in cm/us."""
        self._check(detector)
        return self.config.vdrift.get(detector, self.config.vdrift_default)

    def exb(self, detector: int) -> float:
        """Lorentz angle in rad."""
        self._check(detector)
        return self.config.exb.get(detector, self.config.exb_default)

    def t0(self, chamber: int) -> float:
        """Timing offset, expressed as a shift along the drift axis in cm."""
        self._check(chamber)
        return self.config.t0.get(chamber, self.config.t0_default)

    @staticmethod
    def _check(detector: int) -> None:
        if not 0 <= detector < MAX_CHAMBER:
            raise CalibrationError(f"Chamber index {detector} outside [0, {MAX_CHAMBER})")


__all__ = ["CalibrationService"]
