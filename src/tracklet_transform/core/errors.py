"""Custom exception types for tracklet transformation."""


class TrackletTransformError(Exception):
    """Base exception for all tracklet transformation errors."""

    pass


class ConfigError(TrackletTransformError):
    """Configuration-related errors."""

    pass


class GeometryError(TrackletTransformError):
    """Geometry lookup errors."""

    pass


class UnknownDetectorError(GeometryError, KeyError):
    """No pad plane or transformation matrix for a detector id."""

    def __init__(self, detector: int, what: str = "transformation matrix"):
        super().__init__(f"No {what} for detector {detector}")
        self.detector = detector

    def __str__(self) -> str:
        return self.args[0]


class CalibrationError(TrackletTransformError):
    """Calibration lookup errors."""

    pass


__all__ = [
    "TrackletTransformError",
    "ConfigError",
    "GeometryError",
    "UnknownDetectorError",
    "CalibrationError",
]
