"""
LIFX wire-level request encoder.

This module turns a structured request into the exact bytes sent to a bulb.

Header layout (36 bytes, little-endian throughout):

    +------+--------------------------------+---------+
    | Size | origin|tagged|addr|protocol    | Source  |   Frame (8 bytes)
    | 2 B  | 2b    |1b    |1b  |12b         | 4 B     |
    +------+--------------------------------+---------+
    | Target | Reserved | res6|ack|res | Sequence      |   FrameAddress (16 bytes)
    | 8 B    | 6 B      | 1 B          | 1 B           |
    +--------+----------+--------------+---------------+
    | Reserved  | Message type | Reserved              |   ProtocolHeader (12 bytes)
    | 8 B       | 2 B          | 2 B                   |
    +-----------+--------------+-----------------------+

followed by a payload whose shape depends on the message type.

Example usage:
    header = Header(
        frame=Frame(tagged=True, source=321),
        frame_address=FrameAddress(sequence=156),
        protocol_header=ProtocolHeader(message_type=MessageType.GET_SERVICE),
    )
    wire = encode(header)
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

from .convert import Bit, int_to_bits, bits_to_int, write_le


class MessageType(IntEnum):
    """Message types understood by this library"""
    GET_SERVICE = 2
    STATE_SERVICE = 3
    GET_POWER = 20
    SET_POWER = 21
    GET = 101
    SET_COLOR = 102
    LIGHT_STATE = 107


class Service(IntEnum):
    """Service codes carried in a StateService reply"""
    UDP = 1


class HeaderConst:
    """Constants for the LIFX header"""
    HEADER_SIZE = 36
    PROTOCOL = 1024
    TARGET_SIZE = 8
    RESERVED_SIZE = 6
    MAX_MESSAGE_SIZE = 0xFFFF


@dataclass
class Frame:
    """First 8 bytes of the header. `size` is computed by encode()."""
    tagged: bool = False
    source: int = 0
    origin: int = 0
    addressable: bool = True
    protocol: int = HeaderConst.PROTOCOL

    def __post_init__(self):
        if not self.addressable:
            raise ValueError("Frame.addressable must be True")
        if self.protocol != HeaderConst.PROTOCOL:
            raise ValueError(f"Frame.protocol must be {HeaderConst.PROTOCOL}, got {self.protocol}")
        if not 0 <= self.origin <= 0b11:
            raise ValueError(f"Frame.origin must be 0-3, got {self.origin}")
        if not 0 <= self.source <= 0xFFFFFFFF:
            raise ValueError(f"Frame.source must be 0-4294967295, got {self.source}")

    def bits(self) -> list[Bit]:
        """origin(2) tagged(1) addressable(1) protocol(12), origin most significant"""
        return int_to_bits(self.origin, 2) + [self.tagged, self.addressable] + int_to_bits(self.protocol, 12)


@dataclass
class FrameAddress:
    """Middle 16 bytes of the header. An all-zero target means every device."""
    target: bytes = bytes(HeaderConst.TARGET_SIZE)
    ack_required: bool = False
    res_required: bool = False
    sequence: int = 0
    reserved: bytes = bytes(HeaderConst.RESERVED_SIZE)
    reserved_2: int = 0

    def __post_init__(self):
        self.target = bytes(self.target)
        self.reserved = bytes(self.reserved)
        if len(self.target) != HeaderConst.TARGET_SIZE:
            raise ValueError(f"FrameAddress.target must be exactly {HeaderConst.TARGET_SIZE} bytes, got {len(self.target)}")
        if len(self.reserved) != HeaderConst.RESERVED_SIZE:
            raise ValueError(f"FrameAddress.reserved must be exactly {HeaderConst.RESERVED_SIZE} bytes, got {len(self.reserved)}")
        if not 0 <= self.reserved_2 <= 0b111111:
            raise ValueError(f"FrameAddress.reserved_2 must be 0-63, got {self.reserved_2}")
        if not 0 <= self.sequence <= 0xFF:
            raise ValueError(f"FrameAddress.sequence must be 0-255, got {self.sequence}")

    def flag_bits(self) -> list[Bit]:
        """reserved_2(6) ack_required(1) res_required(1)"""
        return int_to_bits(self.reserved_2, 6) + [self.ack_required, self.res_required]


@dataclass
class ProtocolHeader:
    """Final 12 bytes of the header"""
    message_type: int
    reserved: int = 0
    reserved_2: int = 0


@dataclass
class Header:
    frame: Frame
    frame_address: FrameAddress
    protocol_header: ProtocolHeader


def target_from_mac(mac: str | bytes) -> bytes:
    """Left-justify a 6 or 8 byte hardware address into an 8 byte target.

    Accepts raw bytes or text such as "d0:73:d5:12:34:56".
    """
    if isinstance(mac, str):
        try:
            mac = bytes.fromhex(mac.replace(":", "").replace("-", ""))
        except ValueError:
            raise ValueError(f"Invalid MAC address: {mac!r}")
    if len(mac) > HeaderConst.TARGET_SIZE:
        raise ValueError(f"MAC address must be at most {HeaderConst.TARGET_SIZE} bytes, got {len(mac)}")
    return bytes(mac) + bytes(HeaderConst.TARGET_SIZE - len(mac))


# Payloads

@dataclass
class SetPowerPayload:
    """SetPower (21): reserved u8, level u16"""
    level: int
    reserved: int = 0

    SIZE = 3

    def to_bytes(self) -> bytes:
        return write_le(self.reserved, 1) + write_le(self.level, 2)


@dataclass
class SetColorPayload:
    """SetColor (102): reserved u8, hue/saturation/brightness/kelvin u16, duration u32 (ms)

    Colour values are wire words; see lifxcontrol.api.colour for conversions.
    """
    hue: int
    saturation: int
    brightness: int
    kelvin: int
    duration: int = 0
    reserved: int = 0

    SIZE = 13

    def to_bytes(self) -> bytes:
        return (write_le(self.reserved, 1)
                + write_le(self.hue, 2)
                + write_le(self.saturation, 2)
                + write_le(self.brightness, 2)
                + write_le(self.kelvin, 2)
                + write_le(self.duration, 4))


Payload = SetPowerPayload | SetColorPayload

# Exact payload length for every message type that carries one
PAYLOAD_SIZES: dict[int, int] = {
    MessageType.SET_POWER: SetPowerPayload.SIZE,
    MessageType.SET_COLOR: SetColorPayload.SIZE,
}


def _payload_bytes(message_type: int, payload: Optional[Payload | bytes]) -> bytes:
    if payload is None:
        return b""
    if isinstance(payload, (SetPowerPayload, SetColorPayload)):
        expected_type = MessageType.SET_POWER if isinstance(payload, SetPowerPayload) else MessageType.SET_COLOR
        if message_type != expected_type:
            raise ValueError(f"{type(payload).__name__} cannot be sent as message type {message_type}")
        return payload.to_bytes()
    # Raw bytes are assumed to already be in wire layout
    data = bytes(payload)
    expected = PAYLOAD_SIZES.get(message_type)
    if data and expected is not None and len(data) != expected:
        raise ValueError(f"Payload for message type {message_type} must be exactly {expected} bytes, got {len(data)}")
    return data


def encode(header: Header, payload: Optional[Payload | bytes] = None) -> bytes:
    """Serialize a header and payload into a complete message"""
    frame = header.frame
    address = header.frame_address
    protocol = header.protocol_header

    buf = bytearray(2)  # size, written last
    buf += write_le(bits_to_int(frame.bits()), 2)
    buf += write_le(frame.source, 4)

    # Multi-element fields go out in reverse of their in-memory order
    buf += address.target[::-1]
    buf += address.reserved[::-1]
    buf += write_le(bits_to_int(address.flag_bits()), 1)
    buf += write_le(address.sequence, 1)

    buf += write_le(protocol.reserved, 8)
    buf += write_le(protocol.message_type, 2)
    buf += write_le(protocol.reserved_2, 2)

    buf += _payload_bytes(protocol.message_type, payload)

    if len(buf) > HeaderConst.MAX_MESSAGE_SIZE:
        raise ValueError(f"Message of {len(buf)} bytes exceeds the 16-bit size field")
    buf[0:2] = write_le(len(buf), 2)
    return bytes(buf)


@dataclass
class Request:
    """A header and payload waiting to be sent"""
    header: Header
    payload: Optional[Payload | bytes] = None
    raw_sent: Optional[bytes] = field(default=None, repr=False)

    @property
    def message_type(self) -> int:
        return self.header.protocol_header.message_type

    def to_bytes(self) -> bytes:
        self.raw_sent = encode(self.header, self.payload)
        return self.raw_sent
