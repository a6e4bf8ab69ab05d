"""Tests for tracklet word packing and unpacking."""

import pytest

from tracklet_transform.tracklet import CalibratedTracklet, RawTracklet, to_single


def test_from_fields_round_trip():
    t = RawTracklet.from_fields(
        hcid=1079, padrow=15, column=3, position=0x7FF, slope=0xFF, q0=1, q1=2, q2=3, format=5
    )

    assert t.hcid == 1079
    assert t.detector == 539
    assert t.side == 1
    assert t.padrow == 15
    assert t.column == 3
    assert t.position == 0x7FF
    assert t.slope == 0xFF
    assert (t.q0, t.q1, t.q2) == (1, 2, 3)
    assert t.format == 5


def test_word_layout():
    t = RawTracklet.from_fields(hcid=7, padrow=5, column=2, position=-75, slope=12)

    assert t.word == 0x000EB7B50C000000
    assert t.position == 2048 - 75
    assert t.position_signed == -75
    assert t.slope_signed == 12


def test_word_constructor():
    t = RawTracklet(0x000EB7B50C000000)

    assert t.detector == 3
    assert t.side == 1
    assert t.padrow == 5
    assert t.column == 2


def test_fields_are_masked():
    t = RawTracklet.from_fields(hcid=0, padrow=16, column=4, position=2048, slope=256)

    assert t.word == 0
    assert RawTracklet(1 << 64).word == 0


def test_negative_slope():
    t = RawTracklet.from_fields(hcid=0, padrow=0, column=0, position=0, slope=-3)

    assert t.slope == 253
    assert t.slope_signed == -3


def test_tracklet_is_immutable():
    t = RawTracklet(0)
    with pytest.raises(AttributeError):
        t.word = 1  # type: ignore[misc]


def test_calibrated_tracklet_single_precision():
    c = CalibratedTracklet(0.1, 0.2, 0.3, 0.4)

    assert c.x == to_single(0.1)
    assert c.x != 0.1
    assert c.position == (c.x, c.y, c.z)
    assert c.to_dict() == {"x": c.x, "y": c.y, "z": c.z, "dy": c.dy}
