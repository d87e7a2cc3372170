"""Shared fixtures for floodlight tests."""

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestServer

from floodlight.accessory import AccessoryContext, DeviceEndpoint
from floodlight.devices import FloodlightAPI, FloodlightState, MockFloodlight


@pytest.fixture
def tmp_state_file(tmp_path):
    """Provide a temporary state file path that doesn't touch ~/.floodlight/."""
    return tmp_path / "floodlight_state.json"


@pytest.fixture
def mock_device(tmp_state_file):
    """Return a simulated floodlight backed by a temporary state file."""
    return MockFloodlight(state_file=tmp_state_file)


@pytest_asyncio.fixture
async def serve():
    """Serve arbitrary aiohttp apps on localhost; returns the started servers."""
    servers = []

    async def _serve(app):
        server = TestServer(app)
        await server.start_server()
        servers.append(server)
        return server

    yield _serve
    for server in servers:
        await server.close()


@pytest_asyncio.fixture
async def device_server(mock_device, serve):
    server = await serve(mock_device.make_app())
    yield server
    # Let handlers parked on the gate finish so the server can shut down.
    if mock_device.gate is not None:
        mock_device.gate.set()


@pytest_asyncio.fixture
async def api(device_server):
    api = FloodlightAPI(device_server.host, device_server.port)
    yield api
    await api.close()


@pytest.fixture
def context(device_server):
    """Accessory context pointing at the simulated device, with cached state off/20."""
    return AccessoryContext(
        name="Driveway",
        endpoint=DeviceEndpoint(device_server.host, device_server.port),
        state=FloodlightState(on=False, brightness=20),
    )
