import logging
from typing import Optional

from colorama import Fore, Style

from ..io import (
    LifxClient, ClientConst, broadcast_address, encode, decode,
    Header, Frame, FrameAddress, ProtocolHeader, MessageType,
    SetPowerPayload, SetColorPayload,
)
from .colour import HSB, hue_degrees_to_word, saturation_percent_to_word, brightness_percent_to_word
from .models import Device
from .types import Const
from ..exceptions import MalformedInputError

"""
===================================================================================
This module implements the LIFX LAN requests using lifxcontrol.io.
===================================================================================

Every public request method builds a header, encodes it, performs exactly one
exchange through LifxClient and returns a fresh Device holding the decoded
reply. Nothing is retried. Timeouts, socket errors and decode errors reach
the caller unchanged after being logged.
"""


_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())


class LifxProtocol:

    def __init__(self,
                 subnet: str = "255.255.255.255",
                 port: int = ClientConst.PORT,
                 timeout: float = ClientConst.DEFAULT_TIMEOUT,
                 source: int = Const.DEFAULT_SOURCE,
                 sequence: int = Const.DEFAULT_SEQUENCE,
                 logger: Optional[logging.Logger] = None,
                 print_traffic: bool = False):
        self.logger = logger or _logger
        self.subnet = subnet
        self.port = port
        self.timeout = timeout
        self.source = source
        self.sequence = sequence
        self.print_traffic = print_traffic
        self.client: Optional[LifxClient] = None

    async def __aenter__(self):
        """Async context manager entry"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.aclose()

    async def aclose(self):
        if self.client and self.client.is_connected():
            await self.client.close()
        self.client = None

    # ============================
    # HEADERS
    # ============================

    def _header(self, message_type: MessageType, target: Optional[bytes] = None, ack_required: bool = False) -> Header:
        # No target means discovery: tagged and addressed to every device
        tagged = target is None
        return Header(
            frame=Frame(tagged=tagged, source=self.source),
            frame_address=FrameAddress(
                target=bytes(8) if tagged else target,
                ack_required=ack_required,
                res_required=False,
                sequence=self.sequence,
            ),
            protocol_header=ProtocolHeader(message_type=message_type),
        )

    def build_get_service(self) -> bytes:
        return encode(self._header(MessageType.GET_SERVICE))

    def build_get_device_power_state(self, device: Device) -> bytes:
        return encode(self._header(MessageType.GET_POWER, device.target))

    def build_set_device_power_state(self, device: Device, power_level: int) -> bytes:
        if not 0 <= power_level <= 0xFFFF:
            raise ValueError(f"Power level must be between 0 and 65535, got {power_level}")
        return encode(self._header(MessageType.SET_POWER, device.target, ack_required=True),
                      SetPowerPayload(level=power_level))

    def build_get_device_state(self, device: Device) -> bytes:
        return encode(self._header(MessageType.GET, device.target))

    def build_set_device_state(self, device: Device, hsb: HSB, kelvin: int = Const.DEFAULT_KELVIN, duration: int = Const.DEFAULT_DURATION) -> bytes:
        if not 0 <= kelvin <= 0xFFFF:
            raise ValueError(f"Kelvin must be between 0 and 65535, got {kelvin}")
        if not 0 <= duration <= 0xFFFFFFFF:
            raise ValueError(f"Duration must be between 0 and 4294967295 ms, got {duration}")
        payload = SetColorPayload(
            hue=hue_degrees_to_word(hsb.hue),
            saturation=saturation_percent_to_word(hsb.saturation),
            brightness=brightness_percent_to_word(hsb.brightness),
            kelvin=kelvin,
            duration=duration,
        )
        return encode(self._header(MessageType.SET_COLOR, device.target, ack_required=True), payload)

    # ============================
    # PACKET SENDING
    # ============================

    async def _send(self, wire: bytes, addr: tuple[str, int]) -> Device:
        if self.client is None or not self.client.is_connected():
            self.client = await LifxClient.create(logger=self.logger)

        try:
            data, reply_addr = await self.client.send_request(wire, addr, timeout=self.timeout)
        except TimeoutError:
            self.logger.error(f"No reply from {addr[0]}:{addr[1]} after {self.timeout:.1f}s [{', '.join(f'0x{b:02X}' for b in wire)}]")
            raise
        except OSError as e:
            self.logger.error(f"Failed to send to {addr[0]}:{addr[1]}: {e}")
            raise

        if self.print_traffic:
            exchange = self.client.last_exchange
            rtt_ms = exchange.rtt_ms if exchange and exchange.rtt_ms is not None else 0
            print(Fore.MAGENTA + f"REQUEST: [{', '.join(f'0x{b:02X}' for b in wire)}]  "
                + Fore.WHITE + Style.DIM + f"RTT: {rtt_ms:.0f}ms".ljust(10)
                + Style.BRIGHT + Fore.CYAN + f"  RESPONSE: [{', '.join(f'0x{b:02X}' for b in data)}]"
                + Style.RESET_ALL)

        try:
            response = decode(data)
        except MalformedInputError as e:
            self.logger.error(f"Malformed reply from {reply_addr[0]}:{reply_addr[1]}: {e}")
            raise

        return Device(host=reply_addr[0], port=reply_addr[1], response=response)

    # ============================
    # REQUESTS
    # ============================

    async def get_service(self) -> Device:
        """Broadcast a discovery request and return the first device to answer."""
        addr = (broadcast_address(self.subnet), self.port)
        return await self._send(self.build_get_service(), addr)

    async def get_device_power_state(self, device: Device) -> Device:
        return await self._send(self.build_get_device_power_state(device), device.addr)

    async def set_device_power_state(self, device: Device, power_level: int) -> Device:
        return await self._send(self.build_set_device_power_state(device, power_level), device.addr)

    async def set_device_on(self, device: Device) -> Device:
        return await self.set_device_power_state(device, Const.POWER_ON)

    async def set_device_off(self, device: Device) -> Device:
        return await self.set_device_power_state(device, Const.POWER_OFF)

    async def get_device_state(self, device: Device) -> Device:
        return await self._send(self.build_get_device_state(device), device.addr)

    async def set_device_state(self, device: Device, hsb: HSB, kelvin: int = Const.DEFAULT_KELVIN, duration: int = Const.DEFAULT_DURATION) -> Device:
        return await self._send(self.build_set_device_state(device, hsb, kelvin, duration), device.addr)
