"""Tests for the bit and byte primitives."""

import pytest

from lifxcontrol.exceptions import MalformedInputError
from lifxcontrol.io.convert import (
    int_to_bits, bits_to_int, bitstr_to_u32, write_le, read_le, extract,
    as_hex, as_ascii, as_boolean,
)


def test_int_to_bits_msb_first():
    assert int_to_bits(0b10, 2) == [True, False]
    assert int_to_bits(1024, 12) == [False, True] + [False] * 10


def test_int_to_bits_rejects_overflow():
    """A value wider than its field must not be silently truncated."""
    with pytest.raises(ValueError):
        int_to_bits(4, 2)
    with pytest.raises(ValueError):
        int_to_bits(-1, 6)


def test_bits_to_int_folds_in_order():
    assert bits_to_int([False, False, True, True] + int_to_bits(1024, 12)) == 0x3400
    assert bits_to_int([]) == 0


def test_bitstr_to_u32():
    assert bitstr_to_u32("1101110101111100") == 56700


def test_as_boolean():
    assert as_boolean(bytes([221, 124])) == "1101110101111100"


def test_as_boolean_feeds_bitstr_to_u32():
    # Port 56700 as it appears little-endian on the wire, reversed to big-endian
    wire = (56700).to_bytes(2, "little")
    assert bitstr_to_u32(as_boolean(wire[::-1])) == 56700


def test_as_ascii():
    assert as_ascii(bytes([76, 73, 70, 88, 86, 50])) == "LIFXV2"


def test_as_ascii_strips_trailing_nuls():
    assert as_ascii(b"LIFX\x00\x00") == "LIFX"


def test_as_hex():
    assert as_hex(bytes([209, 114, 214, 20, 224, 14, 0, 0])) == "D1:72:D6:14:E0:0E:00:00"
    assert as_hex(b"") == ""


def test_extract():
    data = bytes([41, 42, 43, 44, 45, 46, 47, 48, 49])
    assert extract(data, 2, 3) == bytes([43, 44, 45])


def test_extract_past_end_raises():
    with pytest.raises(MalformedInputError):
        extract(bytes(4), 2, 3)


def test_write_le():
    assert write_le(56700, 2) == b"\x7c\xdd"
    assert write_le(321, 4) == b"\x41\x01\x00\x00"
    assert write_le(0, 8) == bytes(8)


def test_write_le_rejects_overflow():
    with pytest.raises(ValueError):
        write_le(0x10000, 2)
    with pytest.raises(ValueError):
        write_le(-1, 1)


def test_read_le():
    assert read_le(b"\x00\x7c\xdd\x00", 1, 2) == 56700
    with pytest.raises(MalformedInputError):
        read_le(b"\x00", 0, 2)
