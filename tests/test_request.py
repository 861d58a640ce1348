"""Tests for the request encoder."""

import pytest

from lifxcontrol.io.request import (
    encode, Request, Header, Frame, FrameAddress, ProtocolHeader, MessageType,
    SetPowerPayload, SetColorPayload, target_from_mac,
)

MAC_TARGET = bytes([0xD1, 0x72, 0xD6, 0x14, 0xE0, 0x0E, 0x00, 0x00])

DISCOVERY = (
    b"\x24\x00"                    # size 36
    + b"\x00\x34"                  # origin 0, tagged, addressable, protocol 1024
    + b"\x41\x01\x00\x00"          # source 321
    + bytes(8)                     # target
    + bytes(6)                     # reserved
    + b"\x00"                      # flags
    + b"\x9c"                      # sequence 156
    + bytes(8)                     # reserved
    + b"\x02\x00"                  # GetService
    + b"\x00\x00"                  # reserved
)


def make_header(message_type=MessageType.GET_SERVICE, tagged=False, target=bytes(8), ack=False, res=False):
    return Header(
        frame=Frame(tagged=tagged, source=321),
        frame_address=FrameAddress(target=target, ack_required=ack, res_required=res, sequence=156),
        protocol_header=ProtocolHeader(message_type=message_type),
    )


# ============================
# Header layout
# ============================

def test_discovery_header_bytes():
    assert encode(make_header(tagged=True)) == DISCOVERY


def test_size_field_matches_length():
    for header, payload in [
        (make_header(tagged=True), None),
        (make_header(MessageType.SET_POWER, target=MAC_TARGET), SetPowerPayload(level=0xFFFF)),
        (make_header(MessageType.SET_COLOR, target=MAC_TARGET), SetColorPayload(1, 2, 3, 3500)),
    ]:
        wire = encode(header, payload)
        assert int.from_bytes(wire[0:2], "little") == len(wire)


def test_untagged_frame_bits():
    wire = encode(make_header(MessageType.GET, target=MAC_TARGET))
    assert wire[2:4] == b"\x00\x14"


def test_origin_occupies_top_bits():
    header = make_header()
    header.frame = Frame(origin=0b11, source=321)
    assert encode(header)[2:4] == b"\x00\xd4"


def test_target_is_written_reversed():
    wire = encode(make_header(MessageType.GET, target=MAC_TARGET))
    assert wire[8:16] == bytes([0x00, 0x00, 0x0E, 0xE0, 0x14, 0xD6, 0x72, 0xD1])


def test_reserved_is_written_reversed():
    header = make_header()
    header.frame_address = FrameAddress(reserved=bytes([1, 2, 3, 4, 5, 6]))
    assert encode(header)[16:22] == bytes([6, 5, 4, 3, 2, 1])


@pytest.mark.parametrize("ack, res, flags", [
    (False, False, 0x00),
    (True, False, 0x02),
    (False, True, 0x01),
    (True, True, 0x03),
])
def test_flag_byte(ack, res, flags):
    wire = encode(make_header(ack=ack, res=res))
    assert wire[22] == flags
    assert wire[23] == 156


def test_message_type_is_little_endian():
    wire = encode(make_header(MessageType.LIGHT_STATE))
    assert wire[32:34] == b"\x6b\x00"


# ============================
# Payloads
# ============================

def test_set_power_payload():
    wire = encode(make_header(MessageType.SET_POWER, target=MAC_TARGET, ack=True), SetPowerPayload(level=0xFFFF))
    assert len(wire) == 39
    assert wire[36:] == b"\x00\xff\xff"


def test_set_color_payload():
    payload = SetColorPayload(hue=18204, saturation=0x8000, brightness=0xFFFF, kelvin=3500, duration=1000)
    wire = encode(make_header(MessageType.SET_COLOR, target=MAC_TARGET, ack=True), payload)
    assert wire[0:2] == b"\x31\x00"
    assert wire[36:] == bytes([
        0x00,               # reserved
        0x1C, 0x47,         # hue 100 degrees
        0x00, 0x80,         # saturation 50%
        0xFF, 0xFF,         # brightness 100%
        0xAC, 0x0D,         # kelvin 3500
        0xE8, 0x03, 0x00, 0x00,  # duration 1000 ms
    ])


def test_raw_payload_bytes_pass_through():
    raw = b"\x00\x00\x00"
    assert encode(make_header(MessageType.SET_POWER), raw)[36:] == raw


def test_raw_payload_of_wrong_size_raises():
    with pytest.raises(ValueError):
        encode(make_header(MessageType.SET_COLOR), b"\x00\x01")


def test_payload_must_match_message_type():
    with pytest.raises(ValueError):
        encode(make_header(MessageType.SET_COLOR), SetPowerPayload(level=0))


def test_payload_word_overflow_raises():
    with pytest.raises(ValueError):
        encode(make_header(MessageType.SET_POWER), SetPowerPayload(level=0x10000))


# ============================
# Validation
# ============================

@pytest.mark.parametrize("kwargs", [
    {"protocol": 1025},
    {"addressable": False},
    {"origin": 4},
    {"source": 0x100000000},
])
def test_invalid_frame_raises(kwargs):
    with pytest.raises(ValueError):
        Frame(**kwargs)


@pytest.mark.parametrize("kwargs", [
    {"target": bytes(6)},
    {"reserved": bytes(8)},
    {"sequence": 256},
    {"reserved_2": 64},
])
def test_invalid_frame_address_raises(kwargs):
    with pytest.raises(ValueError):
        FrameAddress(**kwargs)


# ============================
# Helpers
# ============================

def test_target_from_mac():
    assert target_from_mac("d1:72:d6:14:e0:0e") == MAC_TARGET
    assert target_from_mac("D1:72:D6:14:E0:0E:00:00") == MAC_TARGET
    assert target_from_mac(MAC_TARGET[:6]) == MAC_TARGET


def test_target_from_mac_rejects_bad_input():
    with pytest.raises(ValueError):
        target_from_mac("not a mac")
    with pytest.raises(ValueError):
        target_from_mac(bytes(9))


def test_request_records_raw_sent():
    request = Request(header=make_header(tagged=True))
    assert request.message_type == MessageType.GET_SERVICE
    assert request.to_bytes() == DISCOVERY
    assert request.raw_sent == DISCOVERY
