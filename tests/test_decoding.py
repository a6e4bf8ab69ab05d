"""Tests for the position and slope field decoders."""

import pytest

from tracklet_transform.core.constants import NBITS_TRKL_POS, NBITS_TRKL_SLOPE
from tracklet_transform.core.errors import ConfigError
from tracklet_transform.decoding import (
    DecodingMode,
    decode_xor,
    encode_direct,
    encode_xor,
    get_decoder,
    sign_extend,
)
from tracklet_transform.tracklet import RawTracklet


@pytest.mark.parametrize("nbits", [NBITS_TRKL_POS, NBITS_TRKL_SLOPE])
def test_xor_decoding_is_bijective(nbits):
    """Every bit pattern decodes to a distinct value in the signed range."""
    decoded = [decode_xor(raw, nbits) for raw in range(1 << nbits)]

    assert sorted(decoded) == list(range(-(1 << (nbits - 1)), 1 << (nbits - 1)))
    for raw, value in enumerate(decoded):
        assert encode_xor(value, nbits) == raw


@pytest.mark.parametrize("nbits", [NBITS_TRKL_POS, NBITS_TRKL_SLOPE])
def test_direct_decoding_is_bijective(nbits):
    decoded = [sign_extend(raw, nbits) for raw in range(1 << nbits)]

    assert min(decoded) == -(1 << (nbits - 1))
    assert max(decoded) == (1 << (nbits - 1)) - 1
    assert len(set(decoded)) == 1 << nbits
    for raw, value in enumerate(decoded):
        assert encode_direct(value, nbits) == raw


def test_sign_extend_values():
    assert sign_extend(0, 8) == 0
    assert sign_extend(0x7F, 8) == 127
    assert sign_extend(0x80, 8) == -128
    assert sign_extend(0xFF, 8) == -1
    assert sign_extend(0x7FF, 11) == -1
    assert sign_extend(0x400, 11) == -1024
    assert sign_extend(0x3FF, 11) == 1023


def test_sign_extend_ignores_high_bits():
    assert sign_extend(0x1FF, 8) == -1


def test_xor_values():
    """The legacy format stores zero as the MSB-only pattern."""
    assert decode_xor(0x80, 8) == 0
    assert decode_xor(0x00, 8) == -128
    assert decode_xor(0xFF, 8) == 127
    assert decode_xor(0x7F, 8) == -1
    assert decode_xor(0x400, 11) == 0
    assert decode_xor(0x3FF, 11) == -1


@pytest.mark.parametrize("position,slope", [(0, 0), (-75, 12), (1023, -128), (-1024, 127)])
def test_modes_agree_on_matching_patterns(position, slope):
    direct = RawTracklet.from_fields(
        hcid=4,
        padrow=1,
        column=1,
        position=encode_direct(position, NBITS_TRKL_POS),
        slope=encode_direct(slope, NBITS_TRKL_SLOPE),
    )
    legacy = RawTracklet.from_fields(
        hcid=4,
        padrow=1,
        column=1,
        position=encode_xor(position, NBITS_TRKL_POS),
        slope=encode_xor(slope, NBITS_TRKL_SLOPE),
    )

    assert get_decoder(DecodingMode.DIRECT)(direct) == (position, slope)
    assert get_decoder(DecodingMode.XOR)(legacy) == (position, slope)


def test_get_decoder_accepts_strings():
    assert get_decoder("xor") is get_decoder(DecodingMode.XOR)
    assert get_decoder("direct") is get_decoder(DecodingMode.DIRECT)


@pytest.mark.parametrize("mode", ["legacy", "", None, True])
def test_get_decoder_rejects_unknown_mode(mode):
    with pytest.raises(ConfigError, match="Unsupported decoding mode"):
        get_decoder(mode)
