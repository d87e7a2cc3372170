"""Stateful accessory wrapper around the floodlight device API."""

from floodlight.accessory.accessory import FloodlightAccessory
from floodlight.accessory.context import AccessoryContext, DeviceEndpoint
from floodlight.accessory.poller import PollingDriver
from floodlight.accessory.state_cache import AccessoryStateCache

__all__ = [
    "FloodlightAccessory",
    "AccessoryContext",
    "DeviceEndpoint",
    "PollingDriver",
    "AccessoryStateCache",
]
