"""Tests for FloodlightAPI against the simulated device."""

import asyncio

import pytest
from aiohttp import web

from floodlight.devices import FloodlightAPI, FloodlightState
from floodlight.devices.api import GET_DEVICE_INFO, SET_MEDIA_CONFIG
from floodlight.devices.codec import DeviceIdentity
from floodlight.devices.errors import DecodeError, HTTPStatusError, ValidationError


@pytest.mark.asyncio
async def test_get_light_decodes_media_config(api, mock_device):
    mock_device.media_config.update({"Light": 1, "Light Intensity": 65})
    assert await api.get_light() == FloodlightState(on=True, brightness=65)


@pytest.mark.asyncio
async def test_get_light_late_result_is_decoded(api, mock_device):
    mock_device.gate = asyncio.Event()
    late = []
    with pytest.raises(TimeoutError):
        await api.get_light(timeout=0.01, on_late_result=late.append)

    mock_device.gate.set()
    await api.transport.drain()

    assert late == [FloodlightState(on=False, brightness=100)]


@pytest.mark.asyncio
async def test_set_light_on_sends_only_light(api, mock_device):
    assert await api.set_light_on(True) is True
    assert mock_device.requests[-1] == ("POST", SET_MEDIA_CONFIG, {"Light": 1})
    assert mock_device.media_config["Light"] == 1


@pytest.mark.asyncio
async def test_set_light_off(api, mock_device):
    mock_device.media_config["Light"] = 1
    assert await api.set_light_on(False) is False
    assert mock_device.media_config["Light"] == 0


@pytest.mark.asyncio
async def test_set_brightness_partial_echo(api, mock_device):
    mock_device.echo_partial = True
    assert await api.set_light_brightness(75) == 75
    assert mock_device.requests[-1][2] == {"Light Intensity": 75}


@pytest.mark.asyncio
async def test_set_brightness_rejects_out_of_range(api, mock_device):
    with pytest.raises(ValidationError):
        await api.set_light_brightness(150)
    assert mock_device.requests == []


@pytest.mark.asyncio
async def test_set_light_returns_device_state(api, mock_device):
    result = await api.set_light(FloodlightState(on=True, brightness=30))
    assert result == FloodlightState(on=True, brightness=30)
    assert mock_device.requests[-1][2] == {"Light": 1, "Light Intensity": 30}


@pytest.mark.asyncio
async def test_set_light_prefers_device_echo(serve):
    """The device's answer is authoritative, not the request."""

    async def clamp(request):
        return web.json_response({"Light": 1, "Light Intensity": 50})

    app = web.Application()
    app.router.add_post(SET_MEDIA_CONFIG, clamp)
    server = await serve(app)
    api = FloodlightAPI(server.host, server.port)
    try:
        result = await api.set_light(FloodlightState(on=True, brightness=90))
    finally:
        await api.close()
    assert result == FloodlightState(on=True, brightness=50)


@pytest.mark.asyncio
async def test_partial_write_falls_back_to_requested_value(serve):
    async def empty(request):
        return web.json_response({})

    app = web.Application()
    app.router.add_post(SET_MEDIA_CONFIG, empty)
    server = await serve(app)
    api = FloodlightAPI(server.host, server.port)
    try:
        assert await api.set_light_on(True) is True
        assert await api.set_light_brightness(12) == 12
    finally:
        await api.close()


@pytest.mark.asyncio
async def test_write_error_propagates(api, mock_device):
    mock_device.status = 500
    with pytest.raises(HTTPStatusError) as exc_info:
        await api.set_light_on(True)
    assert exc_info.value.code == 500


@pytest.mark.asyncio
async def test_get_device_info(api, mock_device):
    identity = await api.get_device_info()
    assert identity == DeviceIdentity("Mock Manufacturer", "Mock Floodlight", "MOCK-0001")
    assert mock_device.requests[-1][1] == GET_DEVICE_INFO


@pytest.mark.asyncio
async def test_get_device_info_malformed(api, mock_device):
    mock_device.raw_body = '"just a string"'
    with pytest.raises(DecodeError):
        await api.get_device_info()
