"""Transformation of raw tracklets into calibrated space points.

The chamber-local frame has x along the drift direction with x = 0 at the
anode wire plane, y along the pad columns and z along the pad rows. The
tracking frame is reached with the per-chamber local-to-tracking matrix of the
geometry service.

``TrackletTransformer.init()`` must be called once before any transformation.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from .calibration import CalibrationService
from .core.config import RunConfig, TransformerConfig
from .core.constants import (
    ADD_BIT_SHIFT_SLOPE,
    GRANULARITY_TRKL_POS,
    GRANULARITY_TRKL_SLOPE,
    NBITS_TRKL_POS,
    NCOLMCM,
    PAD_REFERENCE_INDEX,
    PAD_ROW_ALIGNMENT,
    SHARED_PAD_CORRECTION,
    TIMEBIN_DRIFT_START,
    XTB0,
)
from .core.logging import get_logger
from .core.types import Position3D
from .core.units import US_PER_TIMEBIN, us_to_timebins
from .decoding import get_decoder
from .geometry import GeometryService, PadPlane
from .tracklet import CalibratedTracklet, RawTracklet, to_single

logger = get_logger(__name__)


@dataclass(frozen=True)
class TransformerState:
    """Chamber reference planes cached at initialization."""

    x_cathode: float
    x_anode: float
    x_drift: float
    x_tb0: float


class TrackletTransformer:
    """Decode, calibrate and transform tracklets one at a time."""

    def __init__(
        self,
        geometry: GeometryService,
        calibration: CalibrationService,
        config: TransformerConfig | None = None,
    ):
        self.geometry = geometry
        self.calibration = calibration
        self.config = config or TransformerConfig()
        self._decode = get_decoder(self.config.decoding)
        self.state: TransformerState | None = None

    @classmethod
    def from_config(cls, config: RunConfig) -> TrackletTransformer:
        """Build the services of a run configuration and initialize a transformer."""
        transformer = cls(
            GeometryService(config.geometry),
            CalibrationService(config.calibration),
            config.transformer,
        )
        transformer.init()
        return transformer

    def init(self) -> TransformerState:
        """Cache the reference planes from the geometry service."""
        drift_height = np.float32(self.geometry.drift_height)
        anode_half_height = np.float32(self.geometry.anode_half_height)
        self.state = TransformerState(
            x_cathode=float(drift_height),
            x_anode=float(drift_height + anode_half_height),
            # below the cathode to limit error propagation from the tracklet fit and vdrift
            x_drift=to_single(float(drift_height) - self.geometry.drift_reference_offset),
            x_tb0=XTB0,
        )
        logger.info(
            "Tracklet transformer initialized",
            {
                "x_cathode": self.state.x_cathode,
                "x_anode": self.state.x_anode,
                "x_drift": self.state.x_drift,
                "decoding": self.config.decoding.value,
            },
        )
        return self.state

    @property
    def x_drift(self) -> float:
        return self.state.x_drift

    def decode(self, tracklet: RawTracklet) -> tuple[int, int]:
        """Signed (position, slope) of a tracklet in the configured encoding."""
        return self._decode(tracklet)

    def calculate_y(self, hcid: int, column: int, position: int, pad_plane: PadPlane) -> float:
        """Local y from the MCM column, the half-chamber side and the position.

        With the shared-pad correction enabled (the default), position 0 of
        column 0 on side A gives ``pad_width * -63``, otherwise ``pad_width * -62``.
        The offset within the half chamber is summed in single precision.
        """
        pad_width = pad_plane.width_ipad
        side = hcid % 2
        half_range = 1 << (NBITS_TRKL_POS - 1)
        # the MCM center sits at half the position range
        position += half_range
        pad_offset = np.float32(position - half_range) * np.float32(GRANULARITY_TRKL_POS)
        pad_offset += np.float32(NCOLMCM * (4 * side + column))
        pad = float(pad_offset) + PAD_ROW_ALIGNMENT
        if self.config.shared_pad_correction:
            pad -= SHARED_PAD_CORRECTION
        return to_single(pad_width * (pad - PAD_REFERENCE_INDEX))

    @staticmethod
    def calculate_z(padrow: int, pad_plane: PadPlane) -> float:
        """Lower edge of a pad row relative to the middle row."""
        row_pos = pad_plane.get_row_pos(padrow)
        row_size = pad_plane.get_row_size(padrow)
        middle_row_pos = pad_plane.get_row_pos(pad_plane.nrows // 2)
        return to_single(row_pos - row_size / 2.0 - middle_row_pos)

    def calculate_dy(self, detector: int, slope: int, pad_plane: PadPlane) -> float:
        """Deflection over the drift region corrected for the Lorentz angle.

        The sign convention of the Lorentz angle and the axis along which the
        drift velocity is measured are taken from the calibration as they are.
        """
        pad_width = pad_plane.width_ipad
        vdrift = np.float32(self.calibration.vdrift(detector))
        exb = to_single(self.calibration.exb(detector))

        # number of timebins in the drift region, drift time in single precision
        drift_time = np.float32(self.state.x_cathode) / vdrift
        drift_timebins = us_to_timebins(float(drift_time))
        raw_dy = slope * drift_timebins * pad_width * GRANULARITY_TRKL_SLOPE / ADD_BIT_SHIFT_SLOPE

        lorentz_correction = math.tan(exb) * self.state.x_anode
        return to_single(raw_dy - lorentz_correction)

    def calibrate_x(self, detector: int, x: float) -> float:
        """Shift x by the t0 of the reference chamber.

        The reference chamber holds the average over all chambers; ``detector``
        is accepted for a future chamber-wise correction.
        """
        t0_correction = to_single(self.calibration.t0(self.config.t0_reference_chamber))
        return to_single(x + t0_correction)

    def transform_l2t(self, detector: int, point: Position3D) -> Position3D:
        """Apply the local-to-tracking matrix of a detector to a point."""
        matrix = self.geometry.local_to_tracking(detector)
        gx, gy, gz = matrix.apply(point)
        return (to_single(gx), to_single(gy), to_single(gz))

    def transform_tracklet(
        self, tracklet: RawTracklet, tracking_frame: bool = True
    ) -> CalibratedTracklet:
        """Calibrated point and dy of a tracklet.

        Args:
            tracklet: Raw tracklet word
            tracking_frame: Return the point in the tracking frame instead of
                the chamber-local frame

        Raises:
            UnknownDetectorError: If the geometry has no entry for the detector
        """
        detector = tracklet.detector
        position, slope = self.decode(tracklet)

        pad_plane = self.geometry.pad_plane(detector)

        x = to_single(self.x_drift)
        y = self.calculate_y(tracklet.hcid, tracklet.column, position, pad_plane)
        z = self.calculate_z(tracklet.padrow, pad_plane)

        dy = self.calculate_dy(detector, slope, pad_plane)

        calibrated_x = self.calibrate_x(detector, x)

        # TODO: correct y for the x calibration once chamber-wise t0 is available
        if tracking_frame:
            gx, gy, gz = self.transform_l2t(detector, (calibrated_x, y, z))
            if logger.is_enabled_for(logging.DEBUG):
                logger.debug("Tracklet in tracking frame", {"x": gx, "y": gy, "z": gz})
            return CalibratedTracklet(gx, gy, gz, dy)
        return CalibratedTracklet(calibrated_x, y, z, dy)

    def get_timebin(self, detector: int, x: float) -> float:
        """Timebin of a local x position.

        x = 0 at the anode wire plane and increases toward the pad plane.
        The amplification region uses a rough linear estimate.
        """
        vdrift = to_single(self.calibration.vdrift(detector))
        anode_half_height = self.geometry.anode_half_height

        if x < -anode_half_height:
            return TIMEBIN_DRIFT_START - (x + anode_half_height) / (vdrift * US_PER_TIMEBIN)
        return TIMEBIN_DRIFT_START - 1.0 + abs(x)


__all__ = [
    "TransformerState",
    "TrackletTransformer",
]
