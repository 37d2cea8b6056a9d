"""Asynchronous client for the commands the Snap-Blaster backend exposes."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Mapping, TypeVar

from .models import GeneratedScene, GenerationParams, MidiDevice, Project, ProjectMeta, Scene

log = logging.getLogger(__name__)

Transport = Callable[[str, Any], Awaitable[Any]]
T = TypeVar("T")


class CommandError(Exception):
    """A backend command failed or returned something unusable."""


def unwrap_response(response: Any, action: str) -> Any:
    """Return the data of a command response, or raise its error.

    ``action`` describes the command for the fallback message, for example
    ``"creating project"``.
    """
    if not isinstance(response, Mapping) or not isinstance(response.get("success"), bool):
        raise CommandError(f"Failed to deserialize result: malformed response {response!r}")
    data = response.get("data")
    error = response.get("error")
    if response["success"] and data is not None:
        return data
    if not response["success"] and error is not None:
        raise CommandError(str(error))
    raise CommandError(f"Unknown error {action}")


def _decode(convert: Callable[[Any], T], data: Any) -> T:
    try:
        return convert(data)
    except (ValueError, TypeError, KeyError, AttributeError) as exc:
        raise CommandError(f"Failed to deserialize result: {exc}") from exc


def _expect(kind: type) -> Callable[[Any], Any]:
    def convert(value: Any) -> Any:
        if not isinstance(value, kind) or (kind is not bool and isinstance(value, bool)):
            raise ValueError(f"expected {kind.__name__}, got {value!r}")
        return value

    return convert


def _list_of(convert: Callable[[Any], T]) -> Callable[[Any], list[T]]:
    def convert_list(value: Any) -> list[T]:
        if not isinstance(value, list):
            raise ValueError(f"expected a list, got {value!r}")
        return [convert(item) for item in value]

    return convert_list


_as_bool = _expect(bool)
_as_str = _expect(str)


class BackendClient:
    """Calls backend commands through an asynchronous transport.

    The transport is awaited as ``transport(command, args)`` and returns the
    decoded result, or raises on failure.
    """

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    async def invoke(self, command: str, args: Any = None) -> Any:
        if args is not None and hasattr(args, "to_dict"):
            payload = args.to_dict()
        else:
            payload = args
        if payload is not None:
            log.debug("Invoking %s with args: %r", command, payload)
        try:
            return await self.transport(command, payload)
        except CommandError:
            raise
        except Exception as exc:
            raise CommandError(f"Backend command failed: {exc}") from exc

    async def _call(self, command: str, args: Any, action: str, convert: Callable[[Any], T]) -> T:
        response = await self.invoke(command, args)
        return _decode(convert, unwrap_response(response, action))

    # Projects

    async def list_projects(self) -> list[ProjectMeta]:
        raw = await self.invoke("list_projects", None)
        return _decode(_list_of(ProjectMeta.from_dict), raw)

    async def get_active_project(self) -> Project:
        return await self._call(
            "get_active_project", None, "getting active project", Project.from_dict
        )

    async def create_project(self, name: str, author: str | None = None) -> str:
        return await self._call(
            "create_project", {"name": name, "author": author}, "creating project", _as_str
        )

    async def load_project(self, project_id: str) -> Project:
        return await self._call(
            "load_project", {"id": project_id}, "loading project", Project.from_dict
        )

    async def save_project(self) -> bool:
        return await self._call("save_project", None, "saving project", _as_bool)

    # Scenes

    async def create_scene(self, name: str, description: str | None = None) -> str:
        return await self._call(
            "create_scene",
            {"name": name, "description": description},
            "creating scene",
            _as_str,
        )

    async def get_scene(self, scene_id: str) -> Scene:
        return await self._call("get_scene", {"id": scene_id}, "getting scene", Scene.from_dict)

    async def activate_scene(self, scene_id: str) -> bool:
        return await self._call(
            "activate_scene", {"id": scene_id}, "activating scene", _as_bool
        )

    async def assign_scene_to_grid(self, scene_id: str, position: int) -> bool:
        return await self._call(
            "assign_scene_to_grid",
            {"scene_id": scene_id, "position": position},
            "assigning scene to grid",
            _as_bool,
        )

    # MIDI

    async def list_midi_devices(self) -> list[MidiDevice]:
        return await self._call(
            "list_midi_devices", None, "listing MIDI devices", _list_of(MidiDevice.from_dict)
        )

    async def connect_controller(self, device_id: str) -> bool:
        log.debug("Connecting with deviceId = %s", device_id)
        return await self._call(
            "connect_controller", {"deviceId": device_id}, "connecting controller", _as_bool
        )

    async def disconnect_controller(self) -> bool:
        return await self._call(
            "disconnect_controller", None, "disconnecting controller", _as_bool
        )

    async def send_cc(self, channel: int, cc_number: int, value: int) -> bool:
        return await self._call(
            "send_cc",
            {"channel": channel, "cc_number": cc_number, "value": value},
            "sending CC",
            _as_bool,
        )

    # AI generation

    async def generate_scene(self, params: GenerationParams) -> GeneratedScene:
        return await self._call(
            "generate_scene", params, "generating scene", GeneratedScene.from_dict
        )

    async def save_generated_scene(self, generated: GeneratedScene) -> str:
        return await self._call(
            "save_generated_scene", generated, "saving generated scene", _as_str
        )

    # Diagnostics

    async def _diagnostic(self, command: str, args: Any, prefix: str) -> str:
        try:
            raw = await self.invoke(command, args)
            return _decode(_as_str, raw)
        except CommandError as exc:
            raise CommandError(f"{prefix}: {exc}") from exc

    async def check_backend_status(self) -> str:
        return await self._diagnostic(
            "check_backend_status", None, "Backend connectivity error"
        )

    async def debug_connect_controller(self, device_id: str) -> str:
        log.debug("Debug connecting with deviceId = %s", device_id)
        return await self._diagnostic(
            "debug_connect_controller", {"deviceId": device_id}, "Debug connect error"
        )

    async def debug_midi_parameters(self, device_id: str, is_controller: bool) -> str:
        args = {
            "deviceId": device_id,
            "isController": is_controller,
            "otherParams": "This is a test parameter",
        }
        return await self._diagnostic(
            "debug_midi_parameters", args, "Debug MIDI params error"
        )

    async def echo_params(self, params: Any) -> str:
        return await self._diagnostic("echo_params", params, "Echo params error")