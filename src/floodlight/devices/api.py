"""Typed operations against the floodlight's local HTTP API."""

import logging
from typing import Any, Callable, Optional

import aiohttp

from floodlight.devices.codec import (
    DeviceIdentity,
    FloodlightState,
    brightness_to_wire,
    on_to_wire,
    state_to_wire,
    wire_to_changes,
    wire_to_identity,
    wire_to_state,
)
from floodlight.devices.transport import DEFAULT_TIMEOUT, DeviceTransport

logger = logging.getLogger(__name__)

GET_MEDIA_CONFIG = "/API10/getMediaConfig"
SET_MEDIA_CONFIG = "/API10/setMediaConfig"
GET_DEVICE_INFO = "/API10/getDeviceInfo"

WRITE_TIMEOUT = 10.0


class FloodlightAPI:
    """Device API for one floodlight endpoint."""

    def __init__(
        self,
        host: str,
        port: int,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.transport = DeviceTransport(host, port, session=session)

    async def get_light(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        on_late_result: Optional[Callable[[FloodlightState], None]] = None,
    ) -> FloodlightState:
        """Read the current lighting state.

        Args:
            timeout: Seconds to wait before giving up with RequestTimeoutError
            on_late_result: Called with the decoded state if the device
                answers after the timeout already fired
        """
        late = None
        if on_late_result is not None:
            def late(payload: Any) -> None:
                on_late_result(wire_to_state(payload))

        payload = await self.transport.request(
            "GET", GET_MEDIA_CONFIG, timeout=timeout, on_late_result=late
        )
        return wire_to_state(payload)

    async def post_media_config(self, attrs: dict[str, Any]) -> dict[str, Any]:
        """POST a (possibly partial) set of wire attributes, return the echo."""
        payload = await self.transport.request(
            "POST", SET_MEDIA_CONFIG, attrs, timeout=WRITE_TIMEOUT
        )
        return payload

    async def set_light(self, state: FloodlightState) -> FloodlightState:
        logger.info(f"Setting light to on={state.on} brightness={state.brightness}")
        payload = await self.post_media_config(state_to_wire(state))
        return FloodlightState(**{**state.to_dict(), **wire_to_changes(payload)})

    async def set_light_on(self, on: bool) -> bool:
        logger.info(f"Turning floodlight {'ON' if on else 'OFF'}")
        payload = await self.post_media_config(on_to_wire(on))
        return wire_to_changes(payload).get("on", on)

    async def set_light_brightness(self, brightness: int) -> int:
        logger.info(f"Setting brightness to {brightness}")
        payload = await self.post_media_config(brightness_to_wire(brightness))
        return wire_to_changes(payload).get("brightness", brightness)

    async def get_device_info(self, timeout: float = DEFAULT_TIMEOUT) -> DeviceIdentity:
        payload = await self.transport.request("GET", GET_DEVICE_INFO, timeout=timeout)
        return wire_to_identity(payload)

    async def close(self) -> None:
        await self.transport.close()
