"""
Colour values and unit conversions.

The protocol carries hue, saturation and brightness as 16-bit words. Hue is
0-360 degrees scaled onto 0-65535; saturation and brightness are 0-100
percent scaled the same way.

Converting to a word rounds half up; converting back truncates, so the two
are not inverses: 100 degrees goes out as 18204 and comes back as 99.
"""

import math
from dataclasses import dataclass
from typing import Self

from ..exceptions import InvalidColourValueError, UnknownColourNameError


WORD_MAX = 0xFFFF
HUE_MAX = 360
PERCENT_MAX = 100
CHANNEL_MAX = 255


def _check_range(name: str, value: float, maximum: int):
    if not 0 <= value <= maximum:
        raise InvalidColourValueError(f"{name} must be between 0 and {maximum}, received {value}")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def hue_degrees_to_word(degrees: float) -> int:
    _check_range("Hue", degrees, HUE_MAX)
    return _round_half_up(degrees * WORD_MAX / HUE_MAX)


def hue_word_to_degrees(word: int) -> int:
    _check_range("Hue word", word, WORD_MAX)
    return word * HUE_MAX // WORD_MAX


def percent_to_word(percent: float) -> int:
    _check_range("Percent", percent, PERCENT_MAX)
    return _round_half_up(percent * WORD_MAX / PERCENT_MAX)


def word_to_percent(word: int) -> int:
    _check_range("Percent word", word, WORD_MAX)
    return word * PERCENT_MAX // WORD_MAX


def saturation_percent_to_word(percent: float) -> int:
    return percent_to_word(percent)


def brightness_percent_to_word(percent: float) -> int:
    return percent_to_word(percent)


@dataclass(frozen=True)
class HSB:
    """Hue in degrees, saturation and brightness in percent"""
    hue: int
    saturation: int
    brightness: int

    def __post_init__(self):
        _check_range("Hue", self.hue, HUE_MAX)
        _check_range("Saturation", self.saturation, PERCENT_MAX)
        _check_range("Brightness", self.brightness, PERCENT_MAX)


@dataclass(frozen=True)
class HSBK:
    """HSB plus a whitepoint in kelvin, which only matters when saturation is near 0"""
    hue: int
    saturation: int
    brightness: int
    kelvin: int

    def __post_init__(self):
        _check_range("Hue", self.hue, HUE_MAX)
        _check_range("Saturation", self.saturation, PERCENT_MAX)
        _check_range("Brightness", self.brightness, PERCENT_MAX)
        _check_range("Kelvin", self.kelvin, WORD_MAX)

    @classmethod
    def from_hsb(cls, hsb: HSB, kelvin: int) -> Self:
        return cls(hue=hsb.hue, saturation=hsb.saturation, brightness=hsb.brightness, kelvin=kelvin)

    @classmethod
    def from_words(cls, hue: int, saturation: int, brightness: int, kelvin: int) -> Self:
        return cls(
            hue=hue_word_to_degrees(hue),
            saturation=word_to_percent(saturation),
            brightness=word_to_percent(brightness),
            kelvin=kelvin,
        )

    def to_words(self) -> tuple[int, int, int, int]:
        return (
            hue_degrees_to_word(self.hue),
            saturation_percent_to_word(self.saturation),
            brightness_percent_to_word(self.brightness),
            self.kelvin,
        )

    def hsb(self) -> HSB:
        return HSB(hue=self.hue, saturation=self.saturation, brightness=self.brightness)


def rgb_to_hsb(r: int, g: int, b: int) -> HSB:
    """Convert 8-bit RGB to HSB, truncating each component.

    When several channels share the maximum, red wins over green and green over blue.
    """
    _check_range("R", r, CHANNEL_MAX)
    _check_range("G", g, CHANNEL_MAX)
    _check_range("B", b, CHANNEL_MAX)

    high = max(r, g, b)
    low = min(r, g, b)
    delta = high - low

    if delta == 0:
        hue = 0.0
    elif high == r:
        hue = 60 * (g - b) / delta
        if hue < 0:
            hue += 360
    elif high == g:
        hue = 60 * (b - r) / delta + 120
    else:
        hue = 60 * (r - g) / delta + 240

    saturation = 0 if high == 0 else delta * 100 // high
    brightness = high * 100 // CHANNEL_MAX
    return HSB(hue=int(hue), saturation=saturation, brightness=brightness)


BEIGE = HSB(60, 10, 96)
BLUE = HSB(240, 100, 100)
CHARTREUSE = HSB(90, 100, 100)
CORAL = HSB(16, 68, 100)
CORNFLOWER = HSB(218, 57, 92)
CRIMSON = HSB(348, 90, 86)
CYAN = HSB(180, 100, 100)
DEEP_SKY_BLUE = HSB(195, 100, 100)
GREEN = HSB(120, 100, 100)
MAGENTA = HSB(300, 100, 100)
ORANGE = HSB(30, 100, 100)
PINK = HSB(330, 100, 100)
PURPLE = HSB(270, 100, 100)
RED = HSB(0, 100, 100)
SLATE_GRAY = HSB(210, 22, 56)
WHITE = HSB(0, 0, 100)
YELLOW = HSB(60, 100, 100)

NAMED_COLOURS: dict[str, HSB] = {
    "beige": BEIGE,
    "blue": BLUE,
    "chartreuse": CHARTREUSE,
    "coral": CORAL,
    "cornflower": CORNFLOWER,
    "crimson": CRIMSON,
    "cyan": CYAN,
    "deep_sky_blue": DEEP_SKY_BLUE,
    "green": GREEN,
    "magenta": MAGENTA,
    "orange": ORANGE,
    "pink": PINK,
    "purple": PURPLE,
    "red": RED,
    "slate_gray": SLATE_GRAY,
    "white": WHITE,
    "yellow": YELLOW,
}


def get_colour(name: str) -> HSB:
    """Look up a named colour. Raises UnknownColourNameError for names not in the table."""
    try:
        return NAMED_COLOURS[name]
    except KeyError:
        raise UnknownColourNameError(f"Unknown colour name: {name!r}") from None
