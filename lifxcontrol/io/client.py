"""
LIFX wire-level UDP client.

This module implements the transport side of the LIFX LAN protocol using asyncio.
It contains the LifxClient class for sending one datagram and receiving the reply.

Terms:
- Request = A UDP packet sent by the Client to a bulb (or broadcast to all bulbs)
- Reply = The first datagram received after a Request
- Client = A class which sends Requests and receives Replies

Exactly one exchange is outstanding at any time. There are no retries; a
missing reply raises TimeoutError and a socket failure raises OSError, both
unmodified.

Example usage:
async def main():
    client = await LifxClient.create()
    async with client:
        data, addr = await client.send_request(wire, (broadcast_address("192.168.1.0/24"), 56700))
        print(addr, data.hex())

asyncio.run(main())
"""

import asyncio
import ipaddress
import logging
import time
from dataclasses import dataclass, field
from typing import Optional, Self, Tuple


class ClientConst:
    """Constants for the LifxClient"""
    PORT = 56700
    DEFAULT_TIMEOUT = 3.0
    MIN_TIMEOUT = 0.01
    MAX_TIMEOUT = 30.0


@dataclass
class Exchange:
    """Timing of the last request/reply pair, used for traffic printing"""
    raw_sent: bytes
    addr: Tuple[str, int]
    sent_at: float = field(default_factory=time.time)
    raw_rcvd: Optional[bytes] = None
    reply_addr: Optional[Tuple[str, int]] = None
    received_at: Optional[float] = None

    @property
    def rtt_ms(self) -> Optional[float]:
        if self.received_at is None:
            return None
        return (self.received_at - self.sent_at) * 1000


def broadcast_address(subnet: str) -> str:
    """Broadcast address for a subnet.

    "192.168.1.0/24" -> network broadcast; a bare address has its last octet set to 255.
    """
    if "/" in subnet:
        network = ipaddress.ip_network(subnet, strict=False)
        return str(network.broadcast_address)
    octets = ipaddress.IPv4Address(subnet).packed
    return str(ipaddress.IPv4Address(octets[:3] + b"\xff"))


class LifxReplyProtocol(asyncio.DatagramProtocol):
    def __init__(self, reply_handler, error_handler, logger: Optional[logging.Logger] = None):
        self.reply_handler = reply_handler
        self.error_handler = error_handler
        self.logger = logger or logging.getLogger(__name__)
        self.transport: Optional[asyncio.transports.DatagramTransport] = None

    def connection_made(self, transport):
        self.transport = transport

    def datagram_received(self, data, addr):
        self.reply_handler(data, addr)

    def error_received(self, exc):
        self.logger.error(f"Reply protocol error: {exc}")
        self.error_handler(exc)

    def connection_lost(self, exc):
        if exc:
            self.logger.error(f"Reply connection lost: {exc}")
        else:
            self.logger.info("Reply connection closed")


class LifxClient:
    """
    Sends a request to a bulb (unicast) or to every bulb (broadcast) and returns
    the first datagram received in reply.
    """

    def __init__(self,
                 local_addr: Tuple[str, int] = ("0.0.0.0", 0),
                 logger: Optional[logging.Logger] = None):
        self.local_addr = local_addr
        self.logger = logger or logging.getLogger(__name__)
        self._transport: Optional[asyncio.transports.DatagramTransport] = None
        self._pending: Optional[asyncio.Future] = None
        self._lock = asyncio.Lock()
        self._closed = False
        self.last_exchange: Optional[Exchange] = None

    @classmethod
    async def create(cls,
                     local_addr: Tuple[str, int] = ("0.0.0.0", 0),
                     logger: Optional[logging.Logger] = None) -> Self:
        self = cls(local_addr, logger)
        loop = asyncio.get_running_loop()
        transport, protocol = await loop.create_datagram_endpoint(
            lambda: LifxReplyProtocol(self._receive_reply, self._receive_error, self.logger),
            local_addr=local_addr,
            allow_broadcast=True,
        )
        self._transport = transport
        self.logger.info(f"LIFX client bound to {transport.get_extra_info('sockname')}")
        return self

    async def send_request(self,
                           wire: bytes,
                           addr: Tuple[str, int],
                           *,
                           timeout: Optional[float] = None) -> Tuple[bytes, Tuple[str, int]]:
        if self._closed: raise RuntimeError("Client is closed")
        if self._transport is None: raise RuntimeError("Client has no transport, use LifxClient.create()")

        if timeout is None: timeout = ClientConst.DEFAULT_TIMEOUT
        timeout = max(ClientConst.MIN_TIMEOUT, min(timeout, ClientConst.MAX_TIMEOUT))

        async with self._lock:
            loop = asyncio.get_running_loop()
            fut: asyncio.Future = loop.create_future()
            self._pending = fut
            exchange = Exchange(raw_sent=bytes(wire), addr=addr)
            self.last_exchange = exchange
            try:
                self._transport.sendto(exchange.raw_sent, addr)
                data, reply_addr = await asyncio.wait_for(fut, timeout=timeout)
                exchange.raw_rcvd = data
                exchange.reply_addr = reply_addr
                exchange.received_at = time.time()
                return data, reply_addr
            finally:
                self._pending = None
                if not fut.done():
                    fut.cancel()

    def _receive_reply(self, datagram: bytes, addr: Tuple[str, int]):
        fut = self._pending
        if fut is None or fut.done():
            self.logger.debug(f"Dropping unsolicited datagram from {addr[0]}:{addr[1]} ({len(datagram)} bytes)")
            return
        fut.set_result((bytes(datagram), (addr[0], addr[1])))

    def _receive_error(self, exc: Exception):
        # A failed sendto is reported here, not raised from sendto()
        fut = self._pending
        if fut is not None and not fut.done():
            fut.set_exception(exc)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def is_connected(self) -> bool:
        """Check if client is bound and open"""
        return self._transport is not None and not self._closed

    async def close(self):
        """Close the client"""
        if self._transport:
            self._transport.close()
            self._closed = True
