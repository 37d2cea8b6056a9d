"""Selection and connection of MIDI devices."""

from __future__ import annotations

from typing import Callable, Iterable, Mapping, Optional

from .commands import BackendClient, CommandError
from .models import MidiDevice

NO_SELECTION = "Please select a device first"


def device_options(devices: Iterable[MidiDevice]) -> list[tuple[str, str]]:
    """Selectable ``(id, label)`` pairs: controllers first, then outputs."""
    devices = list(devices)
    controllers = [(d.id, f"{d.name} (Controller)") for d in devices if d.is_controller]
    outputs = [
        (d.id, f"{d.name} (Output)")
        for d in devices
        if not d.is_input and not d.is_controller
    ]
    return controllers + outputs


class MidiDeviceList:
    """Holds the selected device and the outcome of connection attempts."""

    def __init__(self, client: BackendClient, on_connect: Callable[[str], None]) -> None:
        self.client = client
        self.on_connect = on_connect
        self.selected: Optional[str] = None
        self.selected_name = "None"
        self.debug_result = ""

    def select(self, device_id: str, name: str) -> None:
        self.selected_name = name
        self.selected = device_id or None

    def connect(self) -> None:
        if self.selected is not None:
            self.on_connect(self.selected)

    async def debug_connect(self) -> str:
        """Run the debug check, then a real connection if it passed."""
        device_id = self.selected
        if device_id is None:
            self.debug_result = NO_SELECTION
            return self.debug_result
        self.debug_result = "Testing connection..."
        try:
            debug = await self.client.debug_connect_controller(device_id)
        except CommandError as exc:
            self.debug_result = f"Debug error: {exc}"
            return self.debug_result
        self.debug_result = f"Debug: {debug}"
        try:
            await self.client.connect_controller(device_id)
        except CommandError as exc:
            self.debug_result = f"Debug OK but real connect failed: {exc} | Debug: {debug}"
            return self.debug_result
        self.debug_result = f"Connected successfully! Debug: {debug}"
        self.on_connect(device_id)
        return self.debug_result

    async def direct_connect(self) -> str:
        """Send the connect command and inspect its raw response."""
        device_id = self.selected
        if device_id is None:
            self.debug_result = NO_SELECTION
            return self.debug_result
        self.debug_result = "Direct connecting..."
        try:
            response = await self.client.invoke("connect_controller", {"deviceId": device_id})
        except CommandError as exc:
            self.debug_result = f"Direct connection error: {exc}"
            return self.debug_result
        if not isinstance(response, Mapping) or not isinstance(response.get("success"), bool):
            self.debug_result = (
                f"Direct connection error: Failed to deserialize result: {response!r}"
            )
            return self.debug_result
        if response["success"] and response.get("data") is not None:
            self.debug_result = "Direct connection successful!"
            self.on_connect(device_id)
        elif not response["success"] and response.get("error") is not None:
            self.debug_result = f"Direct connection failed: {response['error']}"
        else:
            self.debug_result = "Unknown response from connect command"
        return self.debug_result