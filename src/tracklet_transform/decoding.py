"""Decoding of the signed position and slope fields of a tracklet.

Two encodings exist for the same logical value:

- ``xor``: the legacy raw format stores the field with its most significant
  bit flipped relative to two's complement.
- ``direct``: the record accessor already returns the sign-extended value.

Both decoders are bijections from ``[0, 2**n)`` onto ``[-2**(n-1), 2**(n-1))``.
Bit patterns are never rejected.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

from .core.constants import NBITS_TRKL_POS, NBITS_TRKL_SLOPE
from .core.errors import ConfigError

if TYPE_CHECKING:
    from .tracklet import RawTracklet


class DecodingMode(str, Enum):
    """Encoding convention of the position and slope fields."""

    XOR = "xor"
    DIRECT = "direct"


def field_mask(nbits: int) -> int:
    return (1 << nbits) - 1


def sign_extend(raw: int, nbits: int) -> int:
    """Interpret the low ``nbits`` of ``raw`` as a two's complement number."""
    value = raw & field_mask(nbits)
    if value & (1 << (nbits - 1)):
        value = -((~(value - 1)) & field_mask(nbits))
    return value


def decode_xor(raw: int, nbits: int) -> int:
    """Decode a field stored with its most significant bit flipped."""
    return sign_extend(raw ^ (1 << (nbits - 1)), nbits)


def encode_direct(value: int, nbits: int) -> int:
    """Two's complement bit pattern of ``value`` over ``nbits``."""
    return value & field_mask(nbits)


def encode_xor(value: int, nbits: int) -> int:
    """Legacy bit pattern of ``value``, the inverse of :func:`decode_xor`."""
    return encode_direct(value, nbits) ^ (1 << (nbits - 1))


def _decode_xor_fields(tracklet: RawTracklet) -> tuple[int, int]:
    return (
        decode_xor(tracklet.position, NBITS_TRKL_POS),
        decode_xor(tracklet.slope, NBITS_TRKL_SLOPE),
    )


def _decode_direct_fields(tracklet: RawTracklet) -> tuple[int, int]:
    return tracklet.position_signed, tracklet.slope_signed


FieldDecoder = Callable[["RawTracklet"], tuple[int, int]]

_DECODERS: dict[DecodingMode, FieldDecoder] = {
    DecodingMode.XOR: _decode_xor_fields,
    DecodingMode.DIRECT: _decode_direct_fields,
}


def get_decoder(mode: DecodingMode | str) -> FieldDecoder:
    """Return the ``(position, slope)`` decoder for an encoding mode.

    Raises:
        ConfigError: If the mode is not a supported encoding
    """
    try:
        return _DECODERS[DecodingMode(mode)]
    except ValueError as e:
        supported = ", ".join(m.value for m in DecodingMode)
        raise ConfigError(f"Unsupported decoding mode {mode!r}, expected one of: {supported}") from e


__all__ = [
    "DecodingMode",
    "FieldDecoder",
    "field_mask",
    "sign_extend",
    "decode_xor",
    "encode_direct",
    "encode_xor",
    "get_decoder",
]
