"""Floodlight accessory exposed to the hub."""

import logging
from typing import Optional

from floodlight.accessory.context import AccessoryContext
from floodlight.accessory.poller import PollingDriver
from floodlight.accessory.state_cache import (
    INTERACTIVE_READ_TIMEOUT,
    STARTUP_READ_TIMEOUT,
    AccessoryStateCache,
)
from floodlight.devices.api import FloodlightAPI
from floodlight.devices.codec import DeviceIdentity, FloodlightState
from floodlight.devices.errors import FloodlightError
from floodlight.hub.service import Characteristic, HubService

logger = logging.getLogger(__name__)

DEFAULT_IDENTITY = DeviceIdentity(
    manufacturer="Default-Manufacturer",
    model="Default-Model",
    serial="Default-Serial",
)


class FloodlightAccessory:
    """One floodlight registered with the hub as a lightbulb service.

    Registers get/set handlers for On and Brightness on construction. Call
    :meth:`initialize` once to load identity and initial state, and
    :meth:`close` when the hub shuts down.
    """

    def __init__(
        self,
        context: AccessoryContext,
        service: HubService,
        api: Optional[FloodlightAPI] = None,
        poll_interval: Optional[float] = None,
        read_timeout: float = INTERACTIVE_READ_TIMEOUT,
    ):
        self.context = context
        self.service = service
        self.read_timeout = read_timeout
        self.api = api or FloodlightAPI(context.endpoint.host, context.endpoint.port)
        self.cache = AccessoryStateCache(self.api, context, listener=self._push_state)
        self.poller = (
            PollingDriver(self.cache, self._push_state, interval=poll_interval)
            if poll_interval
            else None
        )

        self._set_identity(context.identity or DEFAULT_IDENTITY)
        service.set_characteristic(Characteristic.NAME, context.name)

        service.on_get(Characteristic.ON, self.get_on)
        service.on_set(Characteristic.ON, self.set_on)
        service.on_get(Characteristic.BRIGHTNESS, self.get_brightness)
        service.on_set(Characteristic.BRIGHTNESS, self.set_brightness)

    def _set_identity(self, identity: DeviceIdentity) -> None:
        self.service.set_characteristic(Characteristic.MANUFACTURER, identity.manufacturer)
        self.service.set_characteristic(Characteristic.MODEL, identity.model)
        self.service.set_characteristic(Characteristic.SERIAL_NUMBER, identity.serial)

    def _push_state(self, state: FloodlightState) -> None:
        self.service.update_characteristic(Characteristic.ON, state.on)
        self.service.update_characteristic(Characteristic.BRIGHTNESS, state.brightness)

    async def initialize(self) -> None:
        """Populate identity and initial state; failures are logged, not raised."""
        try:
            self._set_identity(await self.cache.get_identity(timeout=STARTUP_READ_TIMEOUT))
        except FloodlightError as e:
            logger.error(f"Error getting device info for {self.context.name} -> {e}")

        try:
            self._push_state(await self.cache.get_state(timeout=STARTUP_READ_TIMEOUT))
        except FloodlightError as e:
            logger.error(f"Error getting initial state for {self.context.name} -> {e}")

        if self.poller is not None:
            self.poller.start()

    async def get_on(self) -> bool:
        state = await self.cache.get_state(timeout=self.read_timeout)
        return state.on

    async def set_on(self, value) -> bool:
        logger.debug(f"Setting Characteristic On -> {value}")
        result = await self.cache.set_on(bool(value))
        logger.debug(f"Set Characteristic On -> {result}")
        return result

    async def get_brightness(self) -> int:
        state = await self.cache.get_state(timeout=self.read_timeout)
        return state.brightness

    async def set_brightness(self, value) -> int:
        logger.debug(f"Setting Characteristic Brightness -> {value}")
        result = await self.cache.set_brightness(int(value))
        logger.debug(f"Set Characteristic Brightness -> {result}")
        return result

    async def close(self) -> None:
        if self.poller is not None:
            await self.poller.stop()
        await self.api.close()
