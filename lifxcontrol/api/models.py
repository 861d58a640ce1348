"""
API-level models.

A Device pairs the address a reply came from with the decoded reply itself.
Each exchange produces a new Device; nothing is kept from earlier replies.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..io import Response, StatePayload, target_from_mac
from .colour import HSBK


@dataclass(frozen=True)
class Device:
    """A bulb as last seen on the network"""
    host: str
    port: int
    response: Optional[Response] = None

    @property
    def addr(self) -> Tuple[str, int]:
        return (self.host, self.port)

    @property
    def mac_address(self) -> Optional[str]:
        return self.response.mac_address if self.response else None

    @property
    def target(self) -> bytes:
        """8-byte target for addressing this device; all zeros if its MAC is unknown"""
        if self.mac_address is None:
            return bytes(8)
        return target_from_mac(self.mac_address)

    def colour(self) -> Optional[HSBK]:
        """Colour reported by the last reply, if it was a LightState"""
        if self.response is None or not isinstance(self.response.payload, StatePayload):
            return None
        return HSBK.from_words(*self.response.payload.words())
