"""Hub-side glue: capability interface, config, persistence and platform."""

from floodlight.hub.service import Characteristic, HubService, LocalService

__all__ = ["Characteristic", "HubService", "LocalService"]
