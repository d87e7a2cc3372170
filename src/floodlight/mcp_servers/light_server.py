"""MCP server for controlling a floodlight through its accessory handlers."""

import logging
import os

from dotenv import dotenv_values
from fastmcp import FastMCP

from floodlight.accessory import AccessoryContext, DeviceEndpoint, FloodlightAccessory
from floodlight.devices.errors import ValidationError
from floodlight.hub.config import ENV_FILE
from floodlight.hub.service import Characteristic, LocalService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize FastMCP server
app = FastMCP("Floodlight Control")

# Lazily initialized accessory and the service it is bound to
accessory = None
service = None


async def get_accessory() -> tuple[FloodlightAccessory, LocalService]:
    """Get or initialize the accessory.

    Reads FLOODLIGHT_HOST and FLOODLIGHT_PORT from ~/.floodlight/.env, then
    from the process environment. Missing settings are a configuration error.
    """
    global accessory, service
    if accessory is not None:
        return accessory, service

    config = {**dotenv_values(ENV_FILE), **os.environ}
    host = config.get("FLOODLIGHT_HOST")
    port = config.get("FLOODLIGHT_PORT")
    if not host or not port:
        raise ValidationError("FLOODLIGHT_HOST and FLOODLIGHT_PORT must be set")

    context = AccessoryContext(
        name=config.get("FLOODLIGHT_NAME", "Floodlight"),
        endpoint=DeviceEndpoint.from_dict({"host": host, "port": port}),
    )
    service = LocalService()
    accessory = FloodlightAccessory(context, service)
    await accessory.initialize()
    logger.info("Connected to floodlight at %s:%s", host, port)
    return accessory, service


@app.tool()
async def turn_on() -> str:
    """Turn on the floodlight.

    Returns:
        A message confirming the light was turned on
    """
    logger.info("Tool called: turn_on")
    _, svc = await get_accessory()
    on = await svc.set(Characteristic.ON, True)
    return f"✓ Floodlight turned on. Current state: {'ON' if on else 'OFF'}"


@app.tool()
async def turn_off() -> str:
    """Turn off the floodlight.

    Returns:
        A message confirming the light was turned off
    """
    logger.info("Tool called: turn_off")
    _, svc = await get_accessory()
    on = await svc.set(Characteristic.ON, False)
    return f"✓ Floodlight turned off. Current state: {'ON' if on else 'OFF'}"


@app.tool()
async def get_status() -> str:
    """Get the current status of the floodlight.

    Returns:
        On/off state, brightness and device identity
    """
    logger.info("Tool called: get_status")
    _, svc = await get_accessory()
    on = await svc.get(Characteristic.ON)
    brightness = await svc.get(Characteristic.BRIGHTNESS)

    state_emoji = "💡" if on else "⚫"
    state_text = "ON" if on else "OFF"

    return (
        f"{state_emoji} Floodlight is {state_text}\n"
        f"Brightness: {brightness}%\n"
        f"Manufacturer: {svc.values.get(Characteristic.MANUFACTURER)}\n"
        f"Model: {svc.values.get(Characteristic.MODEL)}\n"
        f"Serial: {svc.values.get(Characteristic.SERIAL_NUMBER)}"
    )


@app.tool()
async def set_brightness(level: int) -> str:
    """Set the brightness level of the floodlight.

    Args:
        level: Brightness level from 0 to 100

    Returns:
        A message confirming the brightness was set
    """
    logger.info("Tool called: set_brightness(%d)", level)
    _, svc = await get_accessory()
    try:
        brightness = await svc.set(Characteristic.BRIGHTNESS, level)
    except ValidationError as e:
        return f"✗ {e}"
    return f"✓ Brightness set to {brightness}%"


if __name__ == "__main__":
    app.run()
