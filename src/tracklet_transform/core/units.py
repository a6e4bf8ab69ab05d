"""Unit conversion utilities for tracklet transformation.

Lengths are in centimeters, drift velocities in cm/us. One timebin of the
front-end sampling is 100 ns.
"""

import math

US_PER_TIMEBIN = 0.1
TIMEBINS_PER_US = 10.0


def us_to_timebins(value: float | int) -> float:
    """Convert microseconds to timebins."""
    return float(value) * TIMEBINS_PER_US


def deg_to_rad(value: float | int) -> float:
    """Convert degrees to radians."""
    return float(value) * math.pi / 180.0


def rad_to_deg(value: float | int) -> float:
    """Convert radians to degrees."""
    return float(value) * 180.0 / math.pi


__all__ = [
    "US_PER_TIMEBIN",
    "TIMEBINS_PER_US",
    "us_to_timebins",
    "deg_to_rad",
    "rad_to_deg",
]
