"""Simulated floodlight speaking the device's HTTP/JSON API.

Serves the same three endpoints as the real camera floodlight so the bridge
can be developed and tested without hardware. State is persisted to a JSON
file (when one is given) so it survives restarts.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

from aiohttp import web

from floodlight.devices.api import GET_DEVICE_INFO, GET_MEDIA_CONFIG, SET_MEDIA_CONFIG
from floodlight.devices.codec import LIGHT, LIGHT_INTENSITY

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_CONFIG: dict[str, Any] = {
    "Image Flip": 0,
    "Image Mirror": 0,
    "Light": 0,
    "Light Intensity": 100,
    "Light On Motion Duration": 30,
    "Light On Motion": 0,
    "Live Video Quality": 2,
    "Mic Volume": 80,
    "Siren": 0,
    "Siren On Motion Duration": 10,
    "Siren On Motion": 0,
    "Speaker Volume": 80,
    "Video Environment Mode": 0,
    "Video Environment": 0,
}

DEFAULT_DEVICE_INFO: dict[str, Any] = {
    "Current FW": "1.0.0",
    "Device Type": 7,
    "Manufacturer": "Mock Manufacturer",
    "Model": "Mock Floodlight",
    "Serial": "MOCK-0001",
    "Operating Mode": 0,
}

WRITABLE_ATTRIBUTES = (LIGHT, LIGHT_INTENSITY)


class MockFloodlight:
    """In-process floodlight device.

    Knobs for tests:
        delay: seconds to sleep before answering any request
        gate: if set, every request waits for this event before answering
        status: HTTP status to answer with instead of 200
        raw_body: body text to send instead of JSON (for malformed replies)
        echo_partial: answer setMediaConfig with only the attributes written
    """

    def __init__(self, state_file: Optional[Path] = None):
        self.state_file = state_file
        self.media_config = self._load_state()
        self.device_info = dict(DEFAULT_DEVICE_INFO)
        self.delay = 0.0
        self.gate: Optional[asyncio.Event] = None
        self.status = 200
        self.raw_body: Optional[str] = None
        self.echo_partial = False
        self.requests: list[tuple[str, str, Any]] = []
        self._runner: Optional[web.AppRunner] = None

    def _load_state(self) -> dict[str, Any]:
        if self.state_file is not None and self.state_file.exists():
            try:
                with open(self.state_file, "r") as f:
                    state = json.load(f)
                    logger.info(f"Loaded state from {self.state_file}")
                    return {**DEFAULT_MEDIA_CONFIG, **state}
            except (json.JSONDecodeError, IOError) as e:
                logger.warning(f"Could not load state file: {e}. Using default state.")
        return dict(DEFAULT_MEDIA_CONFIG)

    def _save_state(self) -> None:
        if self.state_file is None:
            return
        try:
            self.state_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.state_file, "w") as f:
                json.dump(self.media_config, f, indent=2)
            logger.debug(f"State saved to {self.state_file}")
        except IOError as e:
            logger.error(f"Failed to save state: {e}")

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get(GET_MEDIA_CONFIG, self._get_media_config)
        app.router.add_post(SET_MEDIA_CONFIG, self._set_media_config)
        app.router.add_get(GET_DEVICE_INFO, self._get_device_info)
        return app

    async def _settle(self) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.gate is not None:
            await self.gate.wait()

    def _reply(self, payload: dict[str, Any]) -> web.Response:
        if self.raw_body is not None:
            return web.Response(
                text=self.raw_body, status=self.status, content_type="application/json"
            )
        return web.json_response(payload, status=self.status)

    async def _get_media_config(self, request: web.Request) -> web.Response:
        self.requests.append((request.method, request.path, None))
        await self._settle()
        return self._reply(dict(self.media_config))

    async def _set_media_config(self, request: web.Request) -> web.Response:
        body = await request.json()
        self.requests.append((request.method, request.path, body))
        await self._settle()
        if self.status >= 400:
            return self._reply({})
        written = {k: v for k, v in body.items() if k in WRITABLE_ATTRIBUTES}
        self.media_config.update(written)
        self._save_state()
        logger.info(f"Mock floodlight updated: {written}")
        return self._reply(written if self.echo_partial else dict(self.media_config))

    async def _get_device_info(self, request: web.Request) -> web.Response:
        self.requests.append((request.method, request.path, None))
        await self._settle()
        return self._reply(dict(self.device_info))

    async def start(self, host: str = "127.0.0.1", port: int = 8080) -> None:
        """Serve the mock on ``host:port`` until :meth:`stop`."""
        self._runner = web.AppRunner(self.make_app())
        await self._runner.setup()
        site = web.TCPSite(self._runner, host, port)
        await site.start()
        logger.info(f"Mock floodlight listening on {host}:{port}")

    async def stop(self) -> None:
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
