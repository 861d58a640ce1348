import logging
from typing import Optional

from ..api import LifxProtocol, Device, HSB, HSBK, Const, get_colour
from ..config import LifxConfig
from ..io import ClientConst, StateServicePayload

"""
===================================================================================
This module takes the LIFX API and provides a higher level interface
intended for use in a control interface or home automation script.
===================================================================================

Terms:
LifxProtocol = A class which implements the LIFX LAN requests using lifxcontrol.io.
Device = A bulb's address paired with its most recent decoded reply.
LifxLight = A handle on one bulb that keeps the latest Device for you.
"""


class LifxControl:
    def __init__(self,
                 config: Optional[LifxConfig] = None,
                 logger: Optional[logging.Logger] = None):
        self.config = config or LifxConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.protocol: LifxProtocol = LifxProtocol(
            subnet=self.config.subnet,
            port=self.config.port,
            timeout=self.config.timeout,
            source=self.config.source,
            sequence=self.config.sequence,
            logger=self.logger,
            print_traffic=self.config.print_traffic,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.protocol.aclose()

    async def discover(self) -> "LifxLight":
        """Broadcast a discovery request and return the first light to answer."""
        device = await self.protocol.get_service()
        payload = device.response.payload
        service = payload.service_type() if isinstance(payload, StateServicePayload) else None
        if service is None:
            self.logger.warning(f"{device.host}:{device.port} answered discovery without a known service")
        self.logger.info(f"Discovered {device.mac_address} at {device.host}:{device.port} ({service})")
        return LifxLight(protocol=self.protocol, device=device)

    def light(self, host: str, port: Optional[int] = None) -> "LifxLight":
        """A light at a known address, without discovery."""
        device = Device(host=host, port=port or self.config.port or ClientConst.PORT)
        return LifxLight(protocol=self.protocol, device=device)

    def configured_lights(self) -> "list[LifxLight]":
        """Lights listed under `devices` in the configuration."""
        return [self.light(d["host"], d.get("port")) for d in self.config.devices]


class LifxLight:
    def __init__(self, protocol: LifxProtocol, device: Device):
        self.protocol = protocol
        self.device = device
        self.colour: Optional[HSBK] = device.colour()

    def __repr__(self) -> str:
        return f"LifxLight({self.device.host}:{self.device.port}, mac={self.device.mac_address}, colour={self.colour})"

    def _update(self, device: Device) -> Device:
        self.device = device
        colour = device.colour()
        if colour is not None:
            self.colour = colour
        return device

    async def refresh(self) -> Optional[HSBK]:
        """Ask the light for its state and return its current colour."""
        self._update(await self.protocol.get_device_state(self.device))
        return self.colour

    async def turn_on(self) -> Device:
        return self._update(await self.protocol.set_device_on(self.device))

    async def turn_off(self) -> Device:
        return self._update(await self.protocol.set_device_off(self.device))

    async def set_power(self, level: int) -> Device:
        return self._update(await self.protocol.set_device_power_state(self.device, level))

    async def set_colour(self,
                         colour: HSB | str,
                         kelvin: int = Const.DEFAULT_KELVIN,
                         duration: int = Const.DEFAULT_DURATION) -> Device:
        """Set the light to an HSB value or a named colour, fading over `duration` ms."""
        hsb = get_colour(colour) if isinstance(colour, str) else colour
        return self._update(await self.protocol.set_device_state(self.device, hsb, kelvin, duration))
