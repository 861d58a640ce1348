"""
Wire-level protocol implementation.

This module contains the lowest-level communication components:
- encode() and the header dataclasses - request serialization
- decode() and Response - reply parsing
- LifxClient - raw UDP communication
"""

from .request import (
    encode, Request, Header, Frame, FrameAddress, ProtocolHeader, MessageType, Service, HeaderConst,
    SetPowerPayload, SetColorPayload, target_from_mac,
)
from .response import decode, Response, StateServicePayload, StatePayload, UnrecognizedPayload
from .client import LifxClient, ClientConst, broadcast_address

__all__ = [
    "encode",
    "decode",
    "Request",
    "Header",
    "Frame",
    "FrameAddress",
    "ProtocolHeader",
    "MessageType",
    "Service",
    "HeaderConst",
    "SetPowerPayload",
    "SetColorPayload",
    "target_from_mac",
    "Response",
    "StateServicePayload",
    "StatePayload",
    "UnrecognizedPayload",
    "LifxClient",
    "ClientConst",
    "broadcast_address",
]
