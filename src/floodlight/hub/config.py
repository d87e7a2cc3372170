"""Configuration loader for the floodlight platform."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from floodlight.accessory.context import DeviceEndpoint
from floodlight.devices.errors import ValidationError

logger = logging.getLogger(__name__)

FLOODLIGHT_DIR = Path.home() / ".floodlight"
DEFAULT_CONFIG_PATH = "~/.floodlight/config.json"
ENV_FILE = FLOODLIGHT_DIR / ".env"
DEFAULT_PLATFORM_NAME = "Floodlight"


@dataclass
class DeviceConfig:
    """One configured floodlight."""

    name: str
    host: str
    port: int
    poll_interval: Optional[float] = None

    @property
    def endpoint(self) -> DeviceEndpoint:
        return DeviceEndpoint(self.host, self.port)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DeviceConfig":
        """Validate a device entry; a missing host or port is fatal."""
        endpoint = DeviceEndpoint.from_dict(data)
        poll_interval = data.get("poll_interval")
        if poll_interval is not None:
            try:
                poll_interval = float(poll_interval)
            except (TypeError, ValueError) as e:
                raise ValidationError(f"invalid poll_interval: {poll_interval!r}") from e
            if poll_interval <= 0:
                raise ValidationError(f"poll_interval must be positive, got {poll_interval}")
        return cls(
            name=data.get("name") or endpoint.host,
            host=endpoint.host,
            port=endpoint.port,
            poll_interval=poll_interval,
        )


@dataclass
class PlatformConfig:
    name: str = DEFAULT_PLATFORM_NAME
    devices: list[DeviceConfig] = field(default_factory=list)

    def __post_init__(self):
        seen = set()
        for device in self.devices:
            if device.host in seen:
                raise ValidationError(f"Device host configured more than once: {device.host}")
            seen.add(device.host)


def load_config(config_path: Optional[str] = None) -> PlatformConfig:
    """Load platform configuration from file with environment variable overrides.

    Environment variables:
        FLOODLIGHT_CONFIG_PATH: Override config file location
        FLOODLIGHT_HOST: Override the first device's host
        FLOODLIGHT_PORT: Override the first device's port

    Args:
        config_path: Path to config JSON file. Defaults to ~/.floodlight/config.json

    Returns:
        PlatformConfig with validated devices

    Raises:
        FileNotFoundError: If the config file does not exist
        ValidationError: If a device entry is missing its host or port,
            or two devices share a host
    """
    path_str = config_path or os.environ.get("FLOODLIGHT_CONFIG_PATH", DEFAULT_CONFIG_PATH)
    config_file = Path(path_str).expanduser()

    if not config_file.exists():
        raise FileNotFoundError(f"Floodlight config not found at {config_file}")

    with open(config_file) as f:
        data = json.load(f)

    entries = [dict(entry) for entry in data.get("devices", [])]
    if entries:
        if os.environ.get("FLOODLIGHT_HOST"):
            entries[0]["host"] = os.environ["FLOODLIGHT_HOST"]
        if os.environ.get("FLOODLIGHT_PORT"):
            entries[0]["port"] = os.environ["FLOODLIGHT_PORT"]

    config = PlatformConfig(
        name=data.get("name", DEFAULT_PLATFORM_NAME),
        devices=[DeviceConfig.from_dict(entry) for entry in entries],
    )

    logger.info(f"Loaded platform config: name={config.name}, devices={len(config.devices)}")
    return config
