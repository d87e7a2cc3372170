"""Last-known-good floodlight state with timeout fallback."""

import itertools
import logging
from dataclasses import replace
from typing import Callable, Optional

from floodlight.accessory.context import AccessoryContext
from floodlight.devices.api import FloodlightAPI
from floodlight.devices.codec import DeviceIdentity, FloodlightState
from floodlight.devices.errors import RequestTimeoutError

logger = logging.getLogger(__name__)

# Hub-driven reads must come back fast; startup reads may block.
INTERACTIVE_READ_TIMEOUT = 0.3
POLL_READ_TIMEOUT = 1.5
STARTUP_READ_TIMEOUT = 10.0


class AccessoryStateCache:
    """Caches the device state for one accessory.

    Reads that time out return the cached value instead of failing. Every
    other error, and every write failure, propagates to the caller.

    Reads take a sequence number when they start, writes when the device
    acknowledges them. A response is merged only if it is newer than the last
    merged one, so a slow read can never overwrite the result of a read that
    started after it, nor of a write that completed after it started.
    """

    def __init__(
        self,
        api: FloodlightAPI,
        context: AccessoryContext,
        listener: Optional[Callable[[FloodlightState], None]] = None,
    ):
        self._api = api
        self._context = context
        self._listener = listener
        self._sequence = itertools.count(1)
        self._last_merged = 0

    @property
    def state(self) -> FloodlightState:
        return self._context.state

    @property
    def identity(self) -> Optional[DeviceIdentity]:
        return self._context.identity

    def _merge(self, seq: int, state: FloodlightState) -> bool:
        if seq <= self._last_merged:
            logger.debug(f"Discarding stale state from request {seq}: {state}")
            return False
        self._last_merged = seq
        previous = self._context.state
        self._context.state = state
        if state != previous and self._listener is not None:
            self._listener(state)
        return True

    async def get_state(self, timeout: float = INTERACTIVE_READ_TIMEOUT) -> FloodlightState:
        """Read the device, falling back to the cached state on timeout."""
        seq = next(self._sequence)

        def merge_late(state: FloodlightState) -> None:
            self._merge(seq, state)

        try:
            fresh = await self._api.get_light(timeout=timeout, on_late_result=merge_late)
        except RequestTimeoutError:
            logger.debug(
                f"Timeout getting state from {self._context.name}. Reusing last known value."
            )
            return self._context.state
        self._merge(seq, fresh)
        return fresh

    async def set_on(self, on: bool) -> bool:
        value = await self._api.set_light_on(on)
        self._merge(next(self._sequence), replace(self._context.state, on=value))
        return value

    async def set_brightness(self, brightness: int) -> int:
        value = await self._api.set_light_brightness(brightness)
        self._merge(next(self._sequence), replace(self._context.state, brightness=value))
        return value

    async def set_state(self, state: FloodlightState) -> FloodlightState:
        value = await self._api.set_light(state)
        self._merge(next(self._sequence), value)
        return value

    async def get_identity(self, timeout: float = STARTUP_READ_TIMEOUT) -> DeviceIdentity:
        """Return the device identity, fetching it only if the context lacks it."""
        if self._context.identity is None:
            self._context.identity = await self._api.get_device_info(timeout=timeout)
            logger.info(f"Fetched identity for {self._context.name}: {self._context.identity}")
        return self._context.identity
