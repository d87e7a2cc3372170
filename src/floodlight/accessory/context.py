"""Per-accessory records shared between the core and the hub's cache."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from floodlight.devices.codec import DeviceIdentity, FloodlightState
from floodlight.devices.errors import ValidationError


@dataclass(frozen=True)
class DeviceEndpoint:
    """Connection target for one floodlight."""

    host: str
    port: int

    def __post_init__(self):
        if not self.host:
            raise ValidationError("must set a host")
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise ValidationError(f"port must be an integer, got {self.port!r}")
        if not 0 < self.port < 65536:
            raise ValidationError(f"port out of range: {self.port}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DeviceEndpoint":
        """Build an endpoint from a config entry, coercing a numeric port string."""
        port = data.get("port")
        if port in (None, ""):
            raise ValidationError("must set a port")
        if isinstance(port, str):
            try:
                port = int(port)
            except ValueError as e:
                raise ValidationError(f"port must be an integer, got {port!r}") from e
        return cls(host=data.get("host") or "", port=port)


@dataclass
class AccessoryContext:
    """Mutable record persisted by the hub for each accessory.

    The core updates ``state`` and ``identity`` in place; saving the record
    is the hub's job.
    """

    name: str
    endpoint: DeviceEndpoint
    state: FloodlightState = field(default_factory=FloodlightState)
    identity: Optional[DeviceIdentity] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "device": {"host": self.endpoint.host, "port": self.endpoint.port},
            "state": self.state.to_dict(),
            "identity": self.identity.to_dict() if self.identity else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AccessoryContext":
        identity = data.get("identity")
        return cls(
            name=data.get("name", ""),
            endpoint=DeviceEndpoint.from_dict(data.get("device", {})),
            state=FloodlightState.from_dict(data.get("state") or {}),
            identity=DeviceIdentity.from_dict(identity) if identity else None,
        )
