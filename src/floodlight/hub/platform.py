"""Floodlight platform: restores cached accessories and creates new ones."""

import logging
import uuid
from typing import Callable, Optional

from floodlight.accessory.accessory import FloodlightAccessory
from floodlight.accessory.context import AccessoryContext
from floodlight.hub.config import DeviceConfig, PlatformConfig
from floodlight.hub.service import HubService
from floodlight.hub.store import AccessoryStore

logger = logging.getLogger(__name__)


def accessory_uuid(host: str) -> str:
    """Stable accessory ID derived from the device host."""
    return str(uuid.uuid5(uuid.NAMESPACE_DNS, host))


class FloodlightPlatform:
    """Registry of floodlight accessories for one hub.

    Contexts restored from the store are matched to configured devices by
    UUID; their cached state and identity are reused, with the endpoint
    refreshed from the current config.
    """

    def __init__(
        self,
        config: PlatformConfig,
        service_factory: Callable[[AccessoryContext], HubService],
        store: Optional[AccessoryStore] = None,
    ):
        self.config = config
        self._service_factory = service_factory
        self._store = store
        self._cached: dict[str, AccessoryContext] = {}
        self._accessories: dict[str, FloodlightAccessory] = {}
        logger.debug(f"Finished initializing platform: {config.name}")

        if store is not None:
            for accessory_id, context in store.load().items():
                self.configure_accessory(accessory_id, context)

    def configure_accessory(self, accessory_id: str, context: AccessoryContext) -> None:
        """Accept a context restored from the hub's accessory cache."""
        logger.info(f"Loading accessory from cache: {context.name}")
        self._cached[accessory_id] = context

    def _context_for(self, accessory_id: str, device: DeviceConfig) -> AccessoryContext:
        existing = self._cached.get(accessory_id)
        if existing is not None:
            logger.info(f"Restoring existing accessory from cache: {existing.name}")
            existing.name = device.name
            existing.endpoint = device.endpoint
            return existing
        logger.info(f"Adding new accessory: {device.name}")
        context = AccessoryContext(name=device.name, endpoint=device.endpoint)
        self._cached[accessory_id] = context
        return context

    async def discover_devices(self) -> list[FloodlightAccessory]:
        """Build and initialize an accessory for every configured device."""
        created = []
        for device in self.config.devices:
            accessory_id = accessory_uuid(device.host)
            if accessory_id in self._accessories:
                logger.debug(f"Accessory already registered: {device.host}")
                continue
            context = self._context_for(accessory_id, device)
            accessory = FloodlightAccessory(
                context,
                self._service_factory(context),
                poll_interval=device.poll_interval,
            )
            self._accessories[accessory_id] = accessory
            await accessory.initialize()
            created.append(accessory)

        self.save()
        return created

    def save(self) -> None:
        if self._store is not None:
            self._store.save(self._cached)

    async def shutdown(self) -> None:
        for accessory in self._accessories.values():
            try:
                await accessory.close()
            except Exception as e:
                logger.warning(f"Error closing {accessory.context.name}: {e}")
        self.save()
        self._accessories.clear()

    def get(self, accessory_id: str) -> Optional[FloodlightAccessory]:
        return self._accessories.get(accessory_id)

    def list_accessory_ids(self) -> list[str]:
        return list(self._accessories.keys())

    def __len__(self) -> int:
        return len(self._accessories)

    def __contains__(self, accessory_id: str) -> bool:
        return accessory_id in self._accessories
