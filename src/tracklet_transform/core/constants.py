"""Detector and front-end constants used by tracklet decoding and calibration.

Granularities are the single-precision values of the front-end definitions.
Together with the single-precision steps of the transformer they make decoded
coordinates match the downstream reconstruction bit for bit.
"""

import numpy as np

# Chamber layout
N_SECTOR = 18
N_STACK = 5
N_LAYER = 6
N_CHAMBER_PER_SEC = N_STACK * N_LAYER
MAX_CHAMBER = N_SECTOR * N_CHAMBER_PER_SEC

# Readout
NCOLMCM = 18  # pad columns read out by one MCM

# Tracklet word field widths
NBITS_TRKL_POS = 11
NBITS_TRKL_SLOPE = 8

GRANULARITY_TRKL_POS = float(np.float32(1.0 / 75))  # pads per position bin
GRANULARITY_TRKL_SLOPE = float(np.float32(1.0 / 1000))  # pads per timebin per slope bin
ADD_BIT_SHIFT_SLOPE = 1 << 3

# Y reconstruction offsets (in pads)
PAD_ROW_ALIGNMENT = 10.0
SHARED_PAD_CORRECTION = 1.0
PAD_REFERENCE_INDEX = 72

# Calibration references
T0_REFERENCE_CHAMBER = 435  # average t0 over all chambers is stored here
TIMEBIN_DRIFT_START = 4.0  # start of the drift region in timebins
XTB0 = -100.0

__all__ = [
    "N_SECTOR",
    "N_STACK",
    "N_LAYER",
    "N_CHAMBER_PER_SEC",
    "MAX_CHAMBER",
    "NCOLMCM",
    "NBITS_TRKL_POS",
    "NBITS_TRKL_SLOPE",
    "GRANULARITY_TRKL_POS",
    "GRANULARITY_TRKL_SLOPE",
    "ADD_BIT_SHIFT_SLOPE",
    "PAD_ROW_ALIGNMENT",
    "SHARED_PAD_CORRECTION",
    "PAD_REFERENCE_INDEX",
    "T0_REFERENCE_CHAMBER",
    "TIMEBIN_DRIFT_START",
    "XTB0",
]
