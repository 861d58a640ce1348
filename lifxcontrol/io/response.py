"""
LIFX wire-level response decoder.

decode() is a pure projection of a received datagram onto a Response. Header
fields are rendered as text, the way they are printed for diagnostics, and
the payload is selected by the message type carried in the header.

Only two reply shapes are modelled (StateService and LightState). Anything
else comes back as an UnrecognizedPayload with the header intact. Trailing
payload bytes that the library does not interpret are passed through as hex
("unknown" / "body") without checking them against the message type.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .convert import extract, read_le, as_hex, as_ascii
from .request import MessageType, Service, HeaderConst

logger = logging.getLogger(__name__)


@dataclass
class StateServicePayload:
    """StateService (3)"""
    service: str
    port: str
    unknown: str

    def service_type(self) -> Optional[Service]:
        """The advertised service, or None for a code this library does not know"""
        try:
            return Service(int(self.service))
        except ValueError:
            return None


@dataclass
class StatePayload:
    """LightState (107). Colour fields are wire words rendered as decimal."""
    body: str
    hue: str
    saturation: str
    brightness: str
    kelvin: str

    def words(self) -> tuple[int, int, int, int]:
        return int(self.hue), int(self.saturation), int(self.brightness), int(self.kelvin)


@dataclass
class UnrecognizedPayload:
    """Any message type without a modelled payload"""
    message_type: int


ResponsePayload = StateServicePayload | StatePayload | UnrecognizedPayload


@dataclass
class Response:
    size: str
    source: str
    mac_address: str
    firmware: str
    sequence_number: str
    reserved_1: str  # timestamp
    message_type: str
    reserved_2: str
    payload: ResponsePayload
    raw_rcvd: bytes = field(default=b"", repr=False)


def _parse_state_service(data: bytes) -> StateServicePayload:
    service = read_le(data, 36, 1)
    port = read_le(data, 37, 4)
    return StateServicePayload(
        service=str(service),
        port=str(port),
        unknown=as_hex(data[41:]),
    )


def _parse_light_state(data: bytes) -> StatePayload:
    return StatePayload(
        body=as_hex(data[HeaderConst.HEADER_SIZE:]),
        hue=str(read_le(data, 36, 2)),
        saturation=str(read_le(data, 38, 2)),
        brightness=str(read_le(data, 40, 2)),
        kelvin=str(read_le(data, 42, 2)),
    )


def decode(data: bytes) -> Response:
    """Decode a received datagram. Raises MalformedInputError if it is truncated.

    Multi-byte fields are read little-endian, except the trailing reserved
    field (offset 34), which is read big-endian in wire order: bytes
    [0x01, 0x02] render as "258", not as the joined byte values "12".
    """
    data = bytes(data)
    extract(data, 0, HeaderConst.HEADER_SIZE)

    message_type = read_le(data, 32, 2)
    match message_type:
        case MessageType.STATE_SERVICE:
            payload = _parse_state_service(data)
        case MessageType.LIGHT_STATE:
            payload = _parse_light_state(data)
        case _:
            logger.debug(f"No payload decoder for message type {message_type}, returning header only")
            payload = UnrecognizedPayload(message_type=message_type)

    return Response(
        size=str(read_le(data, 0, 2)),
        source=str(read_le(data, 4, 4)),
        mac_address=as_hex(extract(data, 8, 8)),
        firmware=as_ascii(extract(data, 16, 6)),
        sequence_number=str(read_le(data, 23, 1)),
        reserved_1=str(read_le(data, 24, 8)),
        message_type=str(message_type),
        reserved_2=str(int.from_bytes(extract(data, 34, 2), byteorder="big")),
        payload=payload,
        raw_rcvd=data,
    )
