"""
API-level models and protocol implementation.

This module contains models and types that belong to the API layer:
- LifxProtocol (builds and sends the discover/power/state requests)
- Device (a bulb paired with its latest decoded reply)
- HSB, HSBK and the colour unit conversions
- Constants used by the API layer
"""

from .colour import (
    HSB, HSBK, NAMED_COLOURS, get_colour, rgb_to_hsb,
    hue_degrees_to_word, hue_word_to_degrees, percent_to_word, word_to_percent,
    saturation_percent_to_word, brightness_percent_to_word,
)
from .models import Device
from .protocol import LifxProtocol
from .types import Const

__all__ = [
    # API-level models
    "Device",
    "LifxProtocol",
    "HSB",
    "HSBK",

    # Colour helpers
    "NAMED_COLOURS",
    "get_colour",
    "rgb_to_hsb",
    "hue_degrees_to_word",
    "hue_word_to_degrees",
    "percent_to_word",
    "word_to_percent",
    "saturation_percent_to_word",
    "brightness_percent_to_word",

    # API-level constants
    "Const",
]
