"""Panel for checking backend connectivity and controller connections."""

from __future__ import annotations

from .commands import BackendClient, CommandError

CHECKING = "Checking..."


class DiagnosticPanel:
    """Tracks the results of backend diagnostic checks."""

    def __init__(self, client: BackendClient) -> None:
        self.client = client
        self.status = "Unknown"
        self.is_checking = False
        self.device_id = ""
        self.connect_result = "Not tested"

    def status_class(self) -> str:
        """CSS class for the status text: error, checking or success."""
        if self.status.startswith("Error"):
            return "error"
        if self.status == CHECKING:
            return "checking"
        return "success"

    async def check_status(self) -> str:
        self.is_checking = True
        self.status = CHECKING
        try:
            self.status = await self.client.check_backend_status()
        except CommandError as exc:
            self.status = f"Error: {exc}"
        finally:
            self.is_checking = False
        return self.status

    async def test_connect(self) -> str:
        device_id = self.device_id
        if not device_id:
            self.connect_result = "Please enter a device ID"
            return self.connect_result
        self.connect_result = "Testing..."
        try:
            self.connect_result = await self.client.debug_connect_controller(device_id)
        except CommandError as exc:
            self.connect_result = f"Error: {exc}"
        return self.connect_result