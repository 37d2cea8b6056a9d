"""Top-level application state tying the backend client to the UI pieces."""

from __future__ import annotations

import logging
from typing import Optional

from .commands import BackendClient, CommandError
from .models import MidiDevice, Project, Scene

log = logging.getLogger(__name__)

TITLE = "Snap\u2011Blaster"


class App:
    """Holds the loaded project, active scene, devices and dialog visibility."""

    def __init__(self, client: BackendClient) -> None:
        self.client = client
        self.project: Optional[Project] = None
        self.scene: Optional[Scene] = None
        self.devices: list[MidiDevice] = []
        self.loading = False
        self.error: Optional[str] = None
        self.show_projects = False
        self.show_settings = False
        self.show_ai = False

    async def start(self) -> list[MidiDevice]:
        """Poll the backend once for MIDI devices."""
        log.debug("Starting Snap-Blaster UI...")
        try:
            devices = await self.client.list_midi_devices()
        except CommandError as exc:
            log.debug("MIDI device error: %s", exc)
            self.error = f"MIDI error: {exc}"
            return self.devices
        log.debug("Found %d MIDI devices", len(devices))
        self.devices = devices
        return self.devices

    async def load_project(self, project_id: str) -> Optional[Project]:
        """Load a project, clearing the active scene; failures go to ``error``."""
        self.loading = True
        try:
            self.project = await self.client.load_project(project_id)
            self.scene = None
        except CommandError as exc:
            self.error = str(exc)
        finally:
            self.loading = False
        return self.project

    async def create_project(self, name: str, author: Optional[str] = None) -> Optional[Project]:
        """Create a project and load it."""
        self.loading = True
        try:
            project_id = await self.client.create_project(name, author)
        except CommandError as exc:
            self.error = str(exc)
            self.loading = False
            return None
        return await self.load_project(project_id)

    async def activate_scene(self, scene_id: str) -> Optional[Scene]:
        """Activate a scene; on success it becomes the scene being edited."""
        try:
            await self.client.activate_scene(scene_id)
        except CommandError as exc:
            log.debug("Scene activation failed: %s", exc)
            return self.scene
        if self.project is not None:
            scene = self.project.scenes.get(scene_id)
            if scene is not None:
                self.scene = scene
        return self.scene

    async def assign_scene(self, scene_id: str, position: int) -> None:
        """Place a scene on the grid and reload the project to show it."""
        try:
            await self.client.assign_scene_to_grid(scene_id, position)
        except CommandError as exc:
            self.error = str(exc)
            return
        if self.project is not None:
            await self.load_project(self.project.id)

    async def connect_device(self, device_id: str) -> bool:
        """Connect to a controller; return whether it worked."""
        try:
            await self.client.connect_controller(device_id)
        except CommandError as exc:
            log.debug("Error connecting: %s", exc)
            return False
        log.debug("Connected to device successfully")
        return True

    def dismiss_error(self) -> None:
        self.error = None