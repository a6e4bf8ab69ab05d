"""Configuration models and I/O for tracklet transformation.

Pydantic models for geometry tables, calibration tables, and transformer
settings with YAML/JSON I/O. Lengths are in centimeters, angles of the
Lorentz deflection in radians, chamber rotations in degrees.
"""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from ..decoding import DecodingMode
from .constants import MAX_CHAMBER, N_LAYER, N_STACK, T0_REFERENCE_CHAMBER


class PadPlaneConfig(BaseModel):
    """Pad-plane layout shared by all chambers of one (layer, stack)."""

    layer: int = Field(ge=0, lt=N_LAYER, description="Layer index")
    stack: int = Field(ge=0, lt=N_STACK, description="Stack index")
    width_ipad: float = Field(gt=0, description="Width of the inner pads in cm")
    row_sizes: list[float] | None = Field(
        default=None, description="Length of every pad row in cm, row 0 first"
    )
    nrows: int | None = Field(default=None, gt=0, description="Number of uniform pad rows")
    row_size: float | None = Field(default=None, gt=0, description="Length of uniform pad rows")

    @model_validator(mode="after")
    def validate_rows(self) -> PadPlaneConfig:
        """Ensure the rows are given either explicitly or as a uniform layout."""
        if self.row_sizes is None:
            if self.nrows is None or self.row_size is None:
                raise ValueError("Pad plane must specify row_sizes or both nrows and row_size")
        elif not self.row_sizes or any(s <= 0 for s in self.row_sizes):
            raise ValueError(f"All pad row sizes must be positive, got {self.row_sizes}")
        return self

    def resolved_row_sizes(self) -> list[float]:
        if self.row_sizes is not None:
            return list(self.row_sizes)
        return [float(self.row_size)] * int(self.nrows)


class ChamberConfig(BaseModel):
    """Local-to-tracking transformation of one chamber."""

    detector: int = Field(ge=0, lt=MAX_CHAMBER, description="Chamber index")
    matrix: list[list[float]] | None = Field(
        default=None, description="Explicit 3x4 affine matrix [R | t]"
    )
    rotation_deg: tuple[float, float, float] = Field(
        default=(0.0, 0.0, 0.0), description="Rotation (rz, ry, rx) in degrees"
    )
    translation: tuple[float, float, float] = Field(
        default=(0.0, 0.0, 0.0), description="Translation (x, y, z) in cm"
    )

    @field_validator("matrix")
    @classmethod
    def validate_matrix(cls, v: list[list[float]] | None) -> list[list[float]] | None:
        if v is not None and (len(v) != 3 or any(len(row) != 4 for row in v)):
            raise ValueError("Chamber matrix must be 3 rows of 4 values")
        return v


class GeometryConfig(BaseModel):
    """Chamber geometry tables."""

    drift_height: float = Field(default=3.0, gt=0, description="Drift region height in cm")
    anode_half_height: float = Field(
        default=0.35, gt=0, description="Half height of the amplification region in cm"
    )
    drift_reference_offset: float = Field(
        default=0.5, ge=0, description="Distance of the reference plane below the cathode in cm"
    )
    pad_planes: list[PadPlaneConfig] = Field(default_factory=list, description="Pad planes")
    chambers: list[ChamberConfig] = Field(default_factory=list, description="Chamber matrices")

    @model_validator(mode="after")
    def validate_unique(self) -> GeometryConfig:
        keys = [(p.layer, p.stack) for p in self.pad_planes]
        if len(keys) != len(set(keys)):
            raise ValueError("Duplicate (layer, stack) pad plane entries")
        dets = [c.detector for c in self.chambers]
        if len(dets) != len(set(dets)):
            raise ValueError("Duplicate chamber entries")
        return self


class CalibrationConfig(BaseModel):
    """Drift velocity, Lorentz angle, and t0 tables."""

    vdrift_default: float = Field(default=1.546, gt=0, description="Drift velocity in cm/us")
    exb_default: float = Field(default=0.0, description="Lorentz angle in rad")
    t0_default: float = Field(default=0.0, description="Timing offset in cm")
    vdrift: dict[int, float] = Field(default_factory=dict, description="Per-chamber drift velocity")
    exb: dict[int, float] = Field(default_factory=dict, description="Per-chamber Lorentz angle")
    t0: dict[int, float] = Field(default_factory=dict, description="Per-chamber timing offset")

    @field_validator("vdrift")
    @classmethod
    def validate_vdrift(cls, v: dict[int, float]) -> dict[int, float]:
        bad = {det: val for det, val in v.items() if val <= 0}
        if bad:
            raise ValueError(f"Drift velocities must be positive, got {bad}")
        return v


class TransformerConfig(BaseModel):
    """Settings of the tracklet transformer."""

    decoding: DecodingMode = Field(
        default=DecodingMode.DIRECT, description="Encoding of position and slope fields"
    )
    t0_reference_chamber: int = Field(
        default=T0_REFERENCE_CHAMBER, ge=0, lt=MAX_CHAMBER, description="Chamber holding t0"
    )
    shared_pad_correction: bool = Field(
        default=True, description="Subtract one pad for MCM shared pads"
    )


class RunConfig(BaseModel):
    """Complete configuration."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    calibration: CalibrationConfig = Field(default_factory=CalibrationConfig)
    transformer: TransformerConfig = Field(default_factory=TransformerConfig)


def load_config(path: str | Path) -> RunConfig:
    """Load configuration from YAML or JSON file.

    Args:
        path: Path to configuration file

    Returns:
        Validated RunConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        if path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    return RunConfig(**(data or {}))


def save_config(config: RunConfig, path: str | Path) -> None:
    """Save configuration to YAML or JSON file.

    Args:
        config: Configuration to save
        path: Output file path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_unset=True)

    with open(path, "w") as f:
        if path.suffix.lower() in [".yaml", ".yml"]:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(data, f, indent=2)


def round_trip_config(config: RunConfig) -> RunConfig:
    """Serialize a configuration to YAML and read it back."""
    data = config.model_dump(mode="json", exclude_unset=True)
    yaml_str = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    return RunConfig(**yaml.safe_load(yaml_str))


__all__ = [
    "PadPlaneConfig",
    "ChamberConfig",
    "GeometryConfig",
    "CalibrationConfig",
    "TransformerConfig",
    "RunConfig",
    "load_config",
    "save_config",
    "round_trip_config",
]
