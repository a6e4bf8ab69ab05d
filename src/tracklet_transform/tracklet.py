"""Tracklet records.

A raw tracklet is one 64-bit word written by the front-end electronics::

    63-60 format | 59-49 hcid | 48-45 padrow | 44-43 column | 42-32 position
    31-24 slope  | 23-16 Q2   | 15-8 Q1      | 7-0 Q0
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .core.constants import NBITS_TRKL_POS, NBITS_TRKL_SLOPE
from .decoding import field_mask, sign_extend

# (shift, width) of every field in the word
_FIELDS = {
    "format": (60, 4),
    "hcid": (49, 11),
    "padrow": (45, 4),
    "column": (43, 2),
    "position": (32, NBITS_TRKL_POS),
    "slope": (24, NBITS_TRKL_SLOPE),
    "q2": (16, 8),
    "q1": (8, 8),
    "q0": (0, 8),
}

WORD_MASK = (1 << 64) - 1


def _get(word: int, name: str) -> int:
    shift, width = _FIELDS[name]
    return (word >> shift) & field_mask(width)


@dataclass(frozen=True, slots=True)
class RawTracklet:
    """Immutable view of a 64-bit tracklet word."""

    word: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "word", int(self.word) & WORD_MASK)

    @classmethod
    def from_fields(
        cls,
        hcid: int,
        padrow: int,
        column: int,
        position: int,
        slope: int,
        q0: int = 0,
        q1: int = 0,
        q2: int = 0,
        format: int = 0,
    ) -> RawTracklet:
        """Pack fields into a word. Every value is masked to its field width."""
        values = {
            "format": format,
            "hcid": hcid,
            "padrow": padrow,
            "column": column,
            "position": position,
            "slope": slope,
            "q2": q2,
            "q1": q1,
            "q0": q0,
        }
        word = 0
        for name, value in values.items():
            shift, width = _FIELDS[name]
            word |= (int(value) & field_mask(width)) << shift
        return cls(word)

    @property
    def format(self) -> int:
        return _get(self.word, "format")

    @property
    def hcid(self) -> int:
        return _get(self.word, "hcid")

    @property
    def detector(self) -> int:
        return self.hcid // 2

    @property
    def side(self) -> int:
        """Half-chamber side, 0 for A and 1 for B."""
        return self.hcid % 2

    @property
    def padrow(self) -> int:
        return _get(self.word, "padrow")

    @property
    def column(self) -> int:
        """MCM column within the half-chamber."""
        return _get(self.word, "column")

    @property
    def position(self) -> int:
        return _get(self.word, "position")

    @property
    def slope(self) -> int:
        return _get(self.word, "slope")

    @property
    def position_signed(self) -> int:
        return sign_extend(self.position, NBITS_TRKL_POS)

    @property
    def slope_signed(self) -> int:
        return sign_extend(self.slope, NBITS_TRKL_SLOPE)

    @property
    def q0(self) -> int:
        return _get(self.word, "q0")

    @property
    def q1(self) -> int:
        return _get(self.word, "q1")

    @property
    def q2(self) -> int:
        return _get(self.word, "q2")

    def __repr__(self) -> str:
        return (
            f"RawTracklet(0x{self.word:016x}: hcid={self.hcid} padrow={self.padrow} "
            f"column={self.column} position={self.position} slope={self.slope})"
        )


def to_single(value: float) -> float:
    """Round a value to single precision."""
    return float(np.float32(value))


@dataclass(frozen=True, slots=True)
class CalibratedTracklet:
    """Calibrated space point and transverse deviation of a tracklet."""

    x: float
    y: float
    z: float
    dy: float

    def __post_init__(self) -> None:
        for name in ("x", "y", "z", "dy"):
            object.__setattr__(self, name, to_single(getattr(self, name)))

    @property
    def position(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z, "dy": self.dy}


__all__ = [
    "WORD_MASK",
    "RawTracklet",
    "CalibratedTracklet",
    "to_single",
]
