"""
lifxcontrol Python Library

A Python library for discovering and controlling LIFX lights over the LAN protocol.

This library provides three distinct layers of abstraction:

1. **io**: Wire-level protocol implementation (header encoding, reply decoding, UDP)
2. **api**: LIFX requests using io (discover, power, colour state) and colour conversions
3. **interface**: Pythonic interface to lights using api (high-level objects)

Example usage:
    import lifxcontrol

    # High-level interface (recommended for most users)
    async with lifxcontrol.LifxControl(lifxcontrol.load_config("config.yaml")) as lifx:
        light = await lifx.discover()
        await light.set_colour("crimson", duration=1000)

    # Low-level API access (for advanced users)
    async with lifxcontrol.LifxProtocol(subnet="192.168.1.0/24") as protocol:
        device = await protocol.get_service()
        device = await protocol.get_device_state(device)
"""

# High-level interface (recommended for most users)
from .interface import LifxControl, LifxLight

# API-level models
from .api import LifxProtocol, Device, HSB, HSBK, Const, get_colour, rgb_to_hsb, NAMED_COLOURS
from .api import hue_degrees_to_word, hue_word_to_degrees, percent_to_word, word_to_percent
from .api import saturation_percent_to_word, brightness_percent_to_word

# Low-level models
from .io import encode, decode, Request, Header, Frame, FrameAddress, ProtocolHeader, MessageType, Service
from .io import Response, StateServicePayload, StatePayload, UnrecognizedPayload, LifxClient

# Configuration and exceptions
from .config import LifxConfig, load_config
from .exceptions import LifxError, MalformedInputError, InvalidColourValueError, UnknownColourNameError, LifxConfigurationError

# Utilities
from .utils import run_with_keyboard_interrupt

__version__ = "0.1.0"

# Public API - these are the main classes users should import
__all__ = [
    # High-level interface (recommended)
    "LifxControl",
    "LifxLight",

    # API-level models (for advanced users)
    "LifxProtocol",
    "Device",
    "HSB",
    "HSBK",
    "Const",
    "get_colour",
    "rgb_to_hsb",
    "NAMED_COLOURS",
    "hue_degrees_to_word",
    "hue_word_to_degrees",
    "percent_to_word",
    "word_to_percent",
    "saturation_percent_to_word",
    "brightness_percent_to_word",

    # Low-level models (for advanced users)
    "encode",
    "decode",
    "Request",
    "Header",
    "Frame",
    "FrameAddress",
    "ProtocolHeader",
    "MessageType",
    "Service",
    "Response",
    "StateServicePayload",
    "StatePayload",
    "UnrecognizedPayload",
    "LifxClient",

    # Configuration
    "LifxConfig",
    "load_config",

    # Exceptions
    "LifxError",
    "MalformedInputError",
    "InvalidColourValueError",
    "UnknownColourNameError",
    "LifxConfigurationError",

    # Utilities
    "run_with_keyboard_interrupt",
]
