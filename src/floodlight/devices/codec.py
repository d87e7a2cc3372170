"""Mapping between the floodlight's wire attributes and the domain model.

The device speaks a flat JSON object (``getMediaConfig``/``setMediaConfig``)
that carries many unrelated camera settings next to the two lighting fields
we care about. Only ``Light`` and ``Light Intensity`` are ever interpreted.
"""

from dataclasses import dataclass
from typing import Any, Mapping

from floodlight.devices.errors import DecodeError, ValidationError

LIGHT = "Light"
LIGHT_INTENSITY = "Light Intensity"
MANUFACTURER = "Manufacturer"
MODEL = "Model"
SERIAL = "Serial"

MIN_BRIGHTNESS = 0
MAX_BRIGHTNESS = 100


@dataclass(frozen=True)
class FloodlightState:
    """Last observed or desired lighting state."""

    on: bool = False
    brightness: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"on": self.on, "brightness": self.brightness}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FloodlightState":
        return cls(
            on=bool(data.get("on", False)),
            brightness=int(data.get("brightness", 0)),
        )


@dataclass(frozen=True)
class DeviceIdentity:
    """Static identity reported by ``getDeviceInfo``."""

    manufacturer: str
    model: str
    serial: str

    def to_dict(self) -> dict[str, str]:
        return {
            "manufacturer": self.manufacturer,
            "model": self.model,
            "serial": self.serial,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DeviceIdentity":
        return cls(
            manufacturer=str(data["manufacturer"]),
            model=str(data["model"]),
            serial=str(data["serial"]),
        )


def validate_brightness(brightness: int) -> int:
    if not MIN_BRIGHTNESS <= brightness <= MAX_BRIGHTNESS:
        raise ValidationError(
            f"Brightness must be {MIN_BRIGHTNESS}-{MAX_BRIGHTNESS}, got {brightness}"
        )
    return brightness


def on_to_wire(on: bool) -> dict[str, int]:
    return {LIGHT: 1 if on else 0}


def brightness_to_wire(brightness: int) -> dict[str, int]:
    return {LIGHT_INTENSITY: validate_brightness(brightness)}


def state_to_wire(state: FloodlightState) -> dict[str, int]:
    """Encode a full state as wire attributes."""
    return {**on_to_wire(state.on), **brightness_to_wire(state.brightness)}


def _require_object(attrs: Any) -> Mapping[str, Any]:
    if not isinstance(attrs, Mapping):
        raise DecodeError(f"Expected a JSON object from device, got {type(attrs).__name__}")
    return attrs


def wire_to_changes(attrs: Any) -> dict[str, Any]:
    """Decode only the lighting fields present in ``attrs``.

    Used for partial echoes: the caller merges the result over whatever it
    already knows, the codec never fills in missing fields.
    """
    attrs = _require_object(attrs)
    changes: dict[str, Any] = {}
    if LIGHT in attrs:
        changes["on"] = attrs[LIGHT] == 1
    if attrs.get(LIGHT_INTENSITY) is not None:
        try:
            changes["brightness"] = int(attrs[LIGHT_INTENSITY])
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Invalid {LIGHT_INTENSITY}: {attrs[LIGHT_INTENSITY]!r}") from e
        if not MIN_BRIGHTNESS <= changes["brightness"] <= MAX_BRIGHTNESS:
            raise DecodeError(
                f"{LIGHT_INTENSITY} out of range {MIN_BRIGHTNESS}-{MAX_BRIGHTNESS}: "
                f"{changes['brightness']}"
            )
    return changes


def wire_to_state(attrs: Any) -> FloodlightState:
    """Decode wire attributes as a full state; a missing intensity reads as 0."""
    return FloodlightState(**wire_to_changes(attrs))


def wire_to_identity(attrs: Any) -> DeviceIdentity:
    attrs = _require_object(attrs)
    missing = [key for key in (MANUFACTURER, MODEL, SERIAL) if key not in attrs]
    if missing:
        raise DecodeError(f"Device info is missing fields: {', '.join(missing)}")
    return DeviceIdentity(
        manufacturer=str(attrs[MANUFACTURER]),
        model=str(attrs[MODEL]),
        serial=str(attrs[SERIAL]),
    )
