import pytest

from snapblaster.commands import BackendClient
from snapblaster.midi_monitor import MidiDeviceList, device_options
from snapblaster.models import MidiDevice


def _client(responses, calls):
    async def transport(command, args):
        calls.append((command, args))
        result = responses[command]
        if isinstance(result, Exception):
            raise result
        return result

    return BackendClient(transport)


def _monitor(responses, calls=None):
    connected = []
    monitor = MidiDeviceList(_client(responses, [] if calls is None else calls), connected.append)
    return monitor, connected


def test_device_options_order_and_filter():
    devices = [
        MidiDevice(id="out", name="Synth", is_input=False, is_controller=False),
        MidiDevice(id="in", name="Keys", is_input=True, is_controller=False),
        MidiDevice(id="pad", name="Pads", is_input=True, is_controller=True),
    ]
    assert device_options(devices) == [
        ("pad", "Pads (Controller)"),
        ("out", "Synth (Output)"),
    ]


def test_select_and_connect():
    monitor, connected = _monitor({})
    assert monitor.selected_name == "None"
    monitor.select("pad", "Pads (Controller)")
    assert monitor.selected == "pad"
    assert monitor.selected_name == "Pads (Controller)"
    monitor.connect()
    assert connected == ["pad"]


def test_empty_selection_clears_and_connect_does_nothing():
    monitor, connected = _monitor({})
    monitor.select("", "Select a MIDI device")
    assert monitor.selected is None
    monitor.connect()
    assert connected == []


@pytest.mark.asyncio
async def test_debug_connect_without_selection():
    monitor, connected = _monitor({})
    assert await monitor.debug_connect() == "Please select a device first"
    assert await monitor.direct_connect() == "Please select a device first"
    assert connected == []


@pytest.mark.asyncio
async def test_debug_connect_success():
    calls = []
    monitor, connected = _monitor(
        {
            "debug_connect_controller": "ok",
            "connect_controller": {"success": True, "data": True, "error": None},
        },
        calls,
    )
    monitor.select("pad", "Pads")
    assert await monitor.debug_connect() == "Connected successfully! Debug: ok"
    assert connected == ["pad"]
    assert [command for command, _ in calls] == ["debug_connect_controller", "connect_controller"]


@pytest.mark.asyncio
async def test_debug_connect_real_connect_fails():
    monitor, connected = _monitor(
        {
            "debug_connect_controller": "ok",
            "connect_controller": {"success": False, "data": None, "error": "busy"},
        }
    )
    monitor.select("pad", "Pads")
    assert await monitor.debug_connect() == "Debug OK but real connect failed: busy | Debug: ok"
    assert connected == []


@pytest.mark.asyncio
async def test_debug_connect_debug_fails():
    monitor, connected = _monitor({"debug_connect_controller": RuntimeError("gone")})
    monitor.select("pad", "Pads")
    result = await monitor.debug_connect()
    assert result.startswith("Debug error: Debug connect error")
    assert connected == []


@pytest.mark.asyncio
async def test_direct_connect_success():
    calls = []
    monitor, connected = _monitor(
        {"connect_controller": {"success": True, "data": True, "error": None}}, calls
    )
    monitor.select("pad", "Pads")
    assert await monitor.direct_connect() == "Direct connection successful!"
    assert connected == ["pad"]
    assert calls == [("connect_controller", {"deviceId": "pad"})]


@pytest.mark.asyncio
async def test_direct_connect_failed_and_unknown():
    monitor, connected = _monitor(
        {"connect_controller": {"success": False, "data": None, "error": "busy"}}
    )
    monitor.select("pad", "Pads")
    assert await monitor.direct_connect() == "Direct connection failed: busy"

    monitor, connected = _monitor(
        {"connect_controller": {"success": True, "data": None, "error": None}}
    )
    monitor.select("pad", "Pads")
    assert await monitor.direct_connect() == "Unknown response from connect command"
    assert connected == []


@pytest.mark.asyncio
async def test_direct_connect_transport_error():
    monitor, connected = _monitor({"connect_controller": RuntimeError("boom")})
    monitor.select("pad", "Pads")
    result = await monitor.direct_connect()
    assert result.startswith("Direct connection error:")
    assert "boom" in result
    assert connected == []