# snapblaster

The front-end logic of a scene-based MIDI controller. A project holds CC
definitions and scenes; each scene is a set of MIDI CC values that can be
fired from a 64-pad grid, with optional timed transitions between values.
Scenes can also be generated from a text description by a backend service.

The package has no dependencies outside the standard library.

## Pieces

- `snapblaster.models` – the data: `Project`, `ProjectSettings`,
  `ProjectMeta`, `Scene`, `TriggerMode` (with `TriggerKind`),
  `TransitionCurve`, `CCValue`, `CCDefinition`, `MidiDevice`,
  `GenerationParams`, `CCDefinitionRef`, `SceneRef` and `GeneratedScene`.
  Each has `to_dict()` / `from_dict()` for the wire format (`TriggerMode`
  has `to_json()` / `from_json()`); malformed input raises `ValueError`.
- `snapblaster.commands` – `BackendClient`, with one async method per
  backend command: `list_projects`, `get_active_project`, `create_project`,
  `load_project`, `save_project`, `create_scene`, `get_scene`,
  `activate_scene`, `assign_scene_to_grid`, `list_midi_devices`,
  `connect_controller`, `disconnect_controller`, `send_cc`,
  `generate_scene`, `save_generated_scene`, and the diagnostics
  `check_backend_status`, `debug_connect_controller`,
  `debug_midi_parameters` and `echo_params`. Failures raise
  `CommandError`; `unwrap_response` turns a `{"success", "data", "error"}`
  response into its data or a `CommandError`.
- `snapblaster.grid` – `SceneGrid`, the 64-pad grid (`cells()` returns one
  `GridCell` per pad), with click-to-activate and drag-and-drop assignment.
- `snapblaster.scene_editor` – `SceneEditor`, editing a scene's name,
  description, trigger mode and CC values, with `save()` and `cancel()`;
  `group_cc_values` and `trigger_mode_label` helpers.
- `snapblaster.cc_editor` – `CCEditor`, editing a single CC value and its
  transition; `curve_from_option`, `curve_option`, `curve_label` helpers.
- `snapblaster.midi_monitor` – `MidiDeviceList`, choosing and connecting a
  MIDI controller; `device_options` lists controllers first, then outputs.
- `snapblaster.diagnostic` – `DiagnosticPanel`, checking that the backend
  answers and testing a controller connection.
- `snapblaster.ai_prompt` – `AIPromptDialog`, the AI scene generator.
- `snapblaster.project_dialog` – `ProjectDialog`, opening or creating a
  project; `format_date` keeps the date part of an ISO timestamp.
- `snapblaster.dialogs` – `SettingsPanel`, `ErrorDialog` and
  `quantization_label`.
- `snapblaster.app` – `App`, which holds the loaded project, the active
  scene, the device list, the current error and which dialogs are shown.

## Talking to the backend

`BackendClient` is built around a transport you supply: an async callable
taking a command name and its arguments (a dict, or `None`) and returning
the decoded result. Any exception it raises reaches you as `CommandError`.

```python
import asyncio

from snapblaster.app import App
from snapblaster.commands import BackendClient


async def transport(command, args):
    if command == "list_midi_devices":
        return {
            "success": True,
            "data": [{"id": "dev-1", "name": "Pad Controller",
                      "is_input": True, "is_controller": True}],
            "error": None,
        }
    raise RuntimeError(f"unsupported command {command}")


async def main():
    app = App(BackendClient(transport))
    devices = await app.start()
    print([device.name for device in devices])


asyncio.run(main())
```

## Models

```python
from snapblaster.models import CCValue, TransitionCurve

cutoff = CCValue.from_dict({
    "channel": 0,
    "cc_number": 74,
    "value": 100,
    "name": "Cutoff",
    "transition": True,
    "transition_beats": 2.0,
    "transition_ms": None,
    "curve": "SCurve",
    "description": None,
})
assert cutoff.curve is TransitionCurve.SCURVE
assert CCValue.from_dict(cutoff.to_dict()) == cutoff
```

Scenes key their CC values as `"channel:cc_number"`, and a project's grid
assignments map pad positions 0–63 to scene ids.

## What it does not do

- It draws nothing. The panels are plain state objects with methods for
  each user action; rendering them is up to the interface that uses them.
- It sends no MIDI and stores no projects. Those jobs belong to the
  backend, reached only through the transport you give `BackendClient`;
  no transport is included.
- It installs no command to run.