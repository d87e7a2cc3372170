"""Controllable stand-in for FloodlightAPI used in ordering tests."""

import asyncio
from dataclasses import dataclass, field
from typing import Callable, Optional

from floodlight.devices.codec import FloodlightState
from floodlight.devices.errors import RequestTimeoutError


@dataclass
class PendingRead:
    """One get_light call whose outcome the test decides."""

    timeout: float
    on_late_result: Optional[Callable[[FloodlightState], None]]
    future: asyncio.Future

    def respond(self, state: FloodlightState) -> None:
        self.future.set_result(state)

    def time_out(self) -> None:
        self.future.set_exception(RequestTimeoutError("simulated timeout"))


@dataclass
class FakeFloodlightAPI:
    """Records get_light calls and lets the test settle them in any order.

    Attributes:
        reads: Pending reads in call order
        writes: Values passed to the set_* methods
        echo: Optional override for what writes return
        write_gate: When set, writes wait for this event before answering
    """

    reads: list[PendingRead] = field(default_factory=list)
    writes: list[tuple[str, object]] = field(default_factory=list)
    echo: Optional[object] = None
    write_gate: Optional[asyncio.Event] = None

    async def get_light(self, timeout, on_late_result=None) -> FloodlightState:
        read = PendingRead(timeout, on_late_result, asyncio.get_running_loop().create_future())
        self.reads.append(read)
        return await read.future

    async def _hold_write(self) -> None:
        if self.write_gate is not None:
            await self.write_gate.wait()

    async def set_light_on(self, on: bool) -> bool:
        self.writes.append(("on", on))
        await self._hold_write()
        return on if self.echo is None else self.echo

    async def set_light_brightness(self, brightness: int) -> int:
        self.writes.append(("brightness", brightness))
        await self._hold_write()
        return brightness if self.echo is None else self.echo

    async def set_light(self, state: FloodlightState) -> FloodlightState:
        self.writes.append(("state", state))
        await self._hold_write()
        return state if self.echo is None else self.echo

    async def get_device_info(self, timeout):
        raise NotImplementedError

    async def close(self) -> None:
        pass

    async def wait_for_reads(self, count: int) -> None:
        while len(self.reads) < count:
            await asyncio.sleep(0)

    async def wait_for_writes(self, count: int) -> None:
        while len(self.writes) < count:
            await asyncio.sleep(0)
