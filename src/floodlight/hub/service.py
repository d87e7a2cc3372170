"""Hub capability interface consumed by floodlight accessories."""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)

GetHandler = Callable[[], Awaitable[Any]]
SetHandler = Callable[[Any], Awaitable[Any]]


class Characteristic(str, Enum):
    NAME = "Name"
    MANUFACTURER = "Manufacturer"
    MODEL = "Model"
    SERIAL_NUMBER = "SerialNumber"
    ON = "On"
    BRIGHTNESS = "Brightness"


class HubService(ABC):
    """What an accessory needs from the hub's service object.

    Implement this to plug the floodlight into a hub. The hub calls the
    registered handlers when it wants to read or write a characteristic, and
    the accessory calls :meth:`update_characteristic` to push values it
    learned out of band (polling, late responses).
    """

    @abstractmethod
    def on_get(self, characteristic: Characteristic, handler: GetHandler) -> None:
        """Register the coroutine answering reads of ``characteristic``."""
        pass

    @abstractmethod
    def on_set(self, characteristic: Characteristic, handler: SetHandler) -> None:
        """Register the coroutine applying writes to ``characteristic``."""
        pass

    @abstractmethod
    def set_characteristic(self, characteristic: Characteristic, value: Any) -> None:
        """Set a static value such as the name or serial number."""
        pass

    @abstractmethod
    def update_characteristic(self, characteristic: Characteristic, value: Any) -> None:
        """Push a new value without the hub having asked for it."""
        pass


class LocalService(HubService):
    """In-process hub service keeping values and handlers in dictionaries."""

    def __init__(self):
        self.values: dict[Characteristic, Any] = {}
        self._getters: dict[Characteristic, GetHandler] = {}
        self._setters: dict[Characteristic, SetHandler] = {}

    def on_get(self, characteristic: Characteristic, handler: GetHandler) -> None:
        self._getters[characteristic] = handler

    def on_set(self, characteristic: Characteristic, handler: SetHandler) -> None:
        self._setters[characteristic] = handler

    def set_characteristic(self, characteristic: Characteristic, value: Any) -> None:
        self.values[characteristic] = value

    def update_characteristic(self, characteristic: Characteristic, value: Any) -> None:
        if self.values.get(characteristic) != value:
            logger.debug(f"{characteristic.value} -> {value}")
        self.values[characteristic] = value

    async def get(self, characteristic: Characteristic) -> Any:
        """Read through the registered handler, or the stored value if none."""
        handler = self._getters.get(characteristic)
        if handler is None:
            return self.values.get(characteristic)
        value = await handler()
        self.values[characteristic] = value
        return value

    async def set(self, characteristic: Characteristic, value: Any) -> Any:
        handler = self._setters.get(characteristic)
        if handler is None:
            raise KeyError(f"{characteristic.value} is not writable")
        result = await handler(value)
        self.values[characteristic] = result
        return result
