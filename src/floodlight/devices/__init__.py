"""Device-side client for the floodlight's HTTP/JSON API."""

from .api import FloodlightAPI
from .codec import DeviceIdentity, FloodlightState
from .mock_floodlight import MockFloodlight
from .transport import DeviceTransport

__all__ = ["FloodlightAPI", "DeviceIdentity", "FloodlightState", "MockFloodlight", "DeviceTransport"]
