import asyncio
from typing import Callable, Optional

import pytest_asyncio


class FakeBulb(asyncio.DatagramProtocol):
    """A UDP endpoint on 127.0.0.1 that answers each datagram via `responder`."""

    def __init__(self, responder: Callable[[bytes], Optional[bytes]]):
        self.responder = responder
        self.received: list[bytes] = []
        self.transport: Optional[asyncio.DatagramTransport] = None

    def connection_made(self, transport):
        self.transport = transport

    def datagram_received(self, data, addr):
        self.received.append(data)
        reply = self.responder(data)
        if reply is not None:
            self.transport.sendto(reply, addr)

    @property
    def port(self) -> int:
        return self.transport.get_extra_info("sockname")[1]


@pytest_asyncio.fixture
async def fake_bulb():
    """Factory fixture: `bulb = await fake_bulb(responder)`"""
    bulbs: list[FakeBulb] = []

    async def start(responder: Callable[[bytes], Optional[bytes]]) -> FakeBulb:
        loop = asyncio.get_running_loop()
        _, bulb = await loop.create_datagram_endpoint(
            lambda: FakeBulb(responder),
            local_addr=("127.0.0.1", 0),
        )
        bulbs.append(bulb)
        return bulb

    yield start

    for bulb in bulbs:
        bulb.transport.close()
