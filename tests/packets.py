"""Canned LIFX replies for the decoder and transport tests."""

import struct

MAC = bytes([209, 114, 214, 20, 224, 14, 0, 0])
FIRMWARE = bytes([76, 73, 70, 88, 86, 50])  # "LIFXV2"


def make_reply(message_type: int,
               payload: bytes = b"",
               source: int = 321,
               mac: bytes = MAC,
               firmware: bytes = FIRMWARE,
               sequence: int = 156,
               timestamp: int = 0,
               reserved_2: bytes = b"\x00\x00") -> bytes:
    """Build a reply laid out the way a bulb sends it, with a correct size field."""
    body = (
        bytes(2)
        + (0x1400).to_bytes(2, "little")  # addressable, protocol 1024
        + source.to_bytes(4, "little")
        + mac
        + firmware
        + b"\x00"
        + bytes([sequence])
        + timestamp.to_bytes(8, "little")
        + message_type.to_bytes(2, "little")
        + reserved_2
        + payload
    )
    return len(body).to_bytes(2, "little") + body[2:]


def state_service_payload(service: int = 1, port: int = 56700, trailing: bytes = b"") -> bytes:
    return struct.pack("<BI", service, port) + trailing


def light_state_payload(hue: int, saturation: int, brightness: int, kelvin: int,
                        power: int = 0xFFFF, label: bytes = b"Kitchen") -> bytes:
    return (struct.pack("<HHHH", hue, saturation, brightness, kelvin)
            + bytes(2)
            + struct.pack("<H", power)
            + label.ljust(32, b"\x00")
            + bytes(8))
