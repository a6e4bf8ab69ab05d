"""Tracklet transformation package.

Convert bit-packed detector tracklets into calibrated space points with a
transverse deviation, in the chamber-local or the tracking frame.
"""

__version__ = "0.1.0"

__all__ = [
    "cli",
    "core",
    "calibration",
    "decoding",
    "geometry",
    "tracklet",
    "transformer",
]
