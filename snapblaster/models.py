"""Data models exchanged with the Snap-Blaster backend.

Every model converts to and from the plain JSON-style structures used on the
wire: dictionaries, lists, strings and numbers.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Mapping


def _require(data: Mapping[str, Any], key: str) -> Any:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object, got {data!r}")
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field `{key}`") from None


def _u8(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
        raise ValueError(f"{name} must be an integer in 0..=255, got {value!r}")
    return value


def _opt_u8(value: Any, name: str) -> int | None:
    return None if value is None else _u8(value, name)


def _flag(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be a boolean, got {value!r}")
    return value


def _text(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string, got {value!r}")
    return value


def _opt_text(value: Any, name: str) -> str | None:
    return None if value is None else _text(value, name)


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    return float(value)


class TriggerKind(enum.Enum):
    """How a scene waits before it fires."""

    IMMEDIATE = "Immediate"
    NEXT_BEAT = "NextBeat"
    BEATS = "Beats"
    NEXT_BAR = "NextBar"


@dataclass(frozen=True)
class TriggerMode:
    """A trigger kind, with a beat count when the kind is ``BEATS``."""

    kind: TriggerKind = TriggerKind.IMMEDIATE
    beats: int | None = None

    def __post_init__(self) -> None:
        if self.kind is TriggerKind.BEATS:
            _u8(self.beats, "beats")
        elif self.beats is not None:
            raise ValueError(f"{self.kind.value} takes no beat count")

    def to_json(self) -> str | dict[str, int]:
        if self.kind is TriggerKind.BEATS:
            return {TriggerKind.BEATS.value: self.beats}
        return self.kind.value

    @classmethod
    def from_json(cls, data: Any) -> TriggerMode:
        if isinstance(data, str):
            try:
                kind = TriggerKind(data)
            except ValueError:
                raise ValueError(f"unknown trigger mode {data!r}") from None
            if kind is TriggerKind.BEATS:
                raise ValueError("trigger mode `Beats` needs a beat count")
            return cls(kind)
        if isinstance(data, Mapping) and len(data) == 1 and TriggerKind.BEATS.value in data:
            return cls(TriggerKind.BEATS, _u8(data[TriggerKind.BEATS.value], "beats"))
        raise ValueError(f"invalid trigger mode {data!r}")


class TransitionCurve(enum.Enum):
    """Shape of a CC value transition."""

    LINEAR = "Linear"
    EXPONENTIAL = "Exponential"
    LOGARITHMIC = "Logarithmic"
    SCURVE = "SCurve"


def _curve(value: Any) -> TransitionCurve:
    try:
        return TransitionCurve(value)
    except ValueError:
        raise ValueError(f"unknown transition curve {value!r}") from None


@dataclass
class ProjectSettings:
    auto_connect: bool
    default_tempo: float
    use_link: bool
    default_output_device: str | None = None
    default_controller_device: str | None = None
    default_quantization: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "default_output_device": self.default_output_device,
            "default_controller_device": self.default_controller_device,
            "auto_connect": self.auto_connect,
            "default_tempo": self.default_tempo,
            "use_link": self.use_link,
            "default_quantization": self.default_quantization,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProjectSettings:
        return cls(
            auto_connect=_flag(_require(data, "auto_connect"), "auto_connect"),
            default_tempo=_number(_require(data, "default_tempo"), "default_tempo"),
            use_link=_flag(_require(data, "use_link"), "use_link"),
            default_output_device=_opt_text(
                data.get("default_output_device"), "default_output_device"
            ),
            default_controller_device=_opt_text(
                data.get("default_controller_device"), "default_controller_device"
            ),
            default_quantization=_opt_u8(
                data.get("default_quantization"), "default_quantization"
            ),
        )


@dataclass
class CCValue:
    channel: int
    cc_number: int
    value: int
    name: str | None = None
    transition: bool = False
    transition_beats: float | None = None
    transition_ms: int | None = None
    curve: TransitionCurve = TransitionCurve.LINEAR
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "channel": self.channel,
            "cc_number": self.cc_number,
            "value": self.value,
            "name": self.name,
            "transition": self.transition,
            "transition_beats": self.transition_beats,
            "transition_ms": self.transition_ms,
            "curve": self.curve.value,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CCValue:
        beats = data.get("transition_beats") if isinstance(data, Mapping) else None
        ms = data.get("transition_ms") if isinstance(data, Mapping) else None
        if ms is not None and (isinstance(ms, bool) or not isinstance(ms, int) or ms < 0):
            raise ValueError(f"transition_ms must be a non-negative integer, got {ms!r}")
        return cls(
            channel=_u8(_require(data, "channel"), "channel"),
            cc_number=_u8(_require(data, "cc_number"), "cc_number"),
            value=_u8(_require(data, "value"), "value"),
            name=_opt_text(data.get("name"), "name"),
            transition=_flag(_require(data, "transition"), "transition"),
            transition_beats=None if beats is None else _number(beats, "transition_beats"),
            transition_ms=ms,
            curve=_curve(_require(data, "curve")),
            description=_opt_text(data.get("description"), "description"),
        )


@dataclass
class CCDefinition:
    cc_number: int
    channel: int
    name: str
    description: str | None = None
    min_value: int = 0
    max_value: int = 127
    default_value: int = 0
    use_transitions: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "cc_number": self.cc_number,
            "channel": self.channel,
            "name": self.name,
            "description": self.description,
            "min_value": self.min_value,
            "max_value": self.max_value,
            "default_value": self.default_value,
            "use_transitions": self.use_transitions,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CCDefinition:
        return cls(
            cc_number=_u8(_require(data, "cc_number"), "cc_number"),
            channel=_u8(_require(data, "channel"), "channel"),
            name=_text(_require(data, "name"), "name"),
            description=_opt_text(data.get("description"), "description"),
            min_value=_u8(_require(data, "min_value"), "min_value"),
            max_value=_u8(_require(data, "max_value"), "max_value"),
            default_value=_u8(_require(data, "default_value"), "default_value"),
            use_transitions=_flag(_require(data, "use_transitions"), "use_transitions"),
        )


def _cc_values_from(data: Any) -> dict[str, CCValue]:
    if not isinstance(data, Mapping):
        raise ValueError(f"cc_values must be an object, got {data!r}")
    return {str(key): CCValue.from_dict(value) for key, value in data.items()}


def _text_list(data: Any, name: str) -> list[str]:
    if not isinstance(data, list):
        raise ValueError(f"{name} must be a list, got {data!r}")
    return [_text(item, name) for item in data]


@dataclass
class Scene:
    id: str
    name: str
    description: str | None = None
    trigger_mode: TriggerMode = TriggerMode(TriggerKind.IMMEDIATE)
    cc_values: dict[str, CCValue] = field(default_factory=dict)
    tags: list[str] = field(default_factory=list)
    active: bool = False
    favorite: bool = False
    grid_position: int | None = None
    color: tuple[int, int, int] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "trigger_mode": self.trigger_mode.to_json(),
            "cc_values": {key: value.to_dict() for key, value in self.cc_values.items()},
            "tags": list(self.tags),
            "active": self.active,
            "favorite": self.favorite,
            "grid_position": self.grid_position,
            "color": None if self.color is None else list(self.color),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Scene:
        raw_color = data.get("color") if isinstance(data, Mapping) else None
        color = None
        if raw_color is not None:
            if not isinstance(raw_color, (list, tuple)) or len(raw_color) != 3:
                raise ValueError(f"color must hold three components, got {raw_color!r}")
            r, g, b = (_u8(part, "color") for part in raw_color)
            color = (r, g, b)
        return cls(
            id=_text(_require(data, "id"), "id"),
            name=_text(_require(data, "name"), "name"),
            description=_opt_text(data.get("description"), "description"),
            trigger_mode=TriggerMode.from_json(_require(data, "trigger_mode")),
            cc_values=_cc_values_from(_require(data, "cc_values")),
            tags=_text_list(_require(data, "tags"), "tags"),
            active=_flag(_require(data, "active"), "active"),
            favorite=_flag(_require(data, "favorite"), "favorite"),
            grid_position=_opt_u8(data.get("grid_position"), "grid_position"),
            color=color,
        )


def _grid_key(key: Any) -> int:
    if isinstance(key, str):
        try:
            key = int(key)
        except ValueError:
            raise ValueError(f"grid position must be a number, got {key!r}") from None
    return _u8(key, "grid position")


@dataclass
class Project:
    id: str
    name: str
    version: str
    created_at: str
    updated_at: str
    settings: ProjectSettings
    description: str | None = None
    author: str | None = None
    cc_definitions: dict[str, CCDefinition] = field(default_factory=dict)
    scenes: dict[str, Scene] = field(default_factory=dict)
    grid_assignments: dict[int, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "author": self.author,
            "version": self.version,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "settings": self.settings.to_dict(),
            "cc_definitions": {
                key: value.to_dict() for key, value in self.cc_definitions.items()
            },
            "scenes": {key: value.to_dict() for key, value in self.scenes.items()},
            "grid_assignments": {
                str(position): scene_id
                for position, scene_id in self.grid_assignments.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Project:
        definitions = _require(data, "cc_definitions")
        scenes = _require(data, "scenes")
        grid = _require(data, "grid_assignments")
        for name, value in (
            ("cc_definitions", definitions),
            ("scenes", scenes),
            ("grid_assignments", grid),
        ):
            if not isinstance(value, Mapping):
                raise ValueError(f"{name} must be an object, got {value!r}")
        return cls(
            id=_text(_require(data, "id"), "id"),
            name=_text(_require(data, "name"), "name"),
            version=_text(_require(data, "version"), "version"),
            created_at=_text(_require(data, "created_at"), "created_at"),
            updated_at=_text(_require(data, "updated_at"), "updated_at"),
            settings=ProjectSettings.from_dict(_require(data, "settings")),
            description=_opt_text(data.get("description"), "description"),
            author=_opt_text(data.get("author"), "author"),
            cc_definitions={
                str(key): CCDefinition.from_dict(value)
                for key, value in definitions.items()
            },
            scenes={str(key): Scene.from_dict(value) for key, value in scenes.items()},
            grid_assignments={
                _grid_key(key): _text(value, "grid assignment")
                for key, value in grid.items()
            },
        )


@dataclass
class ProjectMeta:
    id: str
    name: str
    version: str
    created_at: str
    updated_at: str
    file_path: str
    description: str | None = None
    author: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "author": self.author,
            "version": self.version,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "file_path": self.file_path,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProjectMeta:
        return cls(
            id=_text(_require(data, "id"), "id"),
            name=_text(_require(data, "name"), "name"),
            version=_text(_require(data, "version"), "version"),
            created_at=_text(_require(data, "created_at"), "created_at"),
            updated_at=_text(_require(data, "updated_at"), "updated_at"),
            file_path=_text(_require(data, "file_path"), "file_path"),
            description=_opt_text(data.get("description"), "description"),
            author=_opt_text(data.get("author"), "author"),
        )


@dataclass
class MidiDevice:
    id: str
    name: str
    is_input: bool
    is_controller: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "is_input": self.is_input,
            "is_controller": self.is_controller,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MidiDevice:
        return cls(
            id=_text(_require(data, "id"), "id"),
            name=_text(_require(data, "name"), "name"),
            is_input=_flag(_require(data, "is_input"), "is_input"),
            is_controller=_flag(_require(data, "is_controller"), "is_controller"),
        )


@dataclass
class CCDefinitionRef:
    channel: int
    cc_number: int
    name: str
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "channel": self.channel,
            "cc_number": self.cc_number,
            "name": self.name,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CCDefinitionRef:
        return cls(
            channel=_u8(_require(data, "channel"), "channel"),
            cc_number=_u8(_require(data, "cc_number"), "cc_number"),
            name=_text(_require(data, "name"), "name"),
            description=_opt_text(data.get("description"), "description"),
        )


@dataclass
class SceneRef:
    id: str
    name: str
    cc_values: dict[str, CCValue] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "cc_values": {key: value.to_dict() for key, value in self.cc_values.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SceneRef:
        return cls(
            id=_text(_require(data, "id"), "id"),
            name=_text(_require(data, "name"), "name"),
            cc_values=_cc_values_from(_require(data, "cc_values")),
        )


@dataclass
class GenerationParams:
    description: str
    cc_definitions: list[CCDefinitionRef] = field(default_factory=list)
    previous_scene: SceneRef | None = None
    use_transitions: bool = True
    add_randomness: bool = False
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "cc_definitions": [ref.to_dict() for ref in self.cc_definitions],
            "previous_scene": (
                None if self.previous_scene is None else self.previous_scene.to_dict()
            ),
            "use_transitions": self.use_transitions,
            "add_randomness": self.add_randomness,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GenerationParams:
        refs = _require(data, "cc_definitions")
        if not isinstance(refs, list):
            raise ValueError(f"cc_definitions must be a list, got {refs!r}")
        previous = data.get("previous_scene")
        return cls(
            description=_text(_require(data, "description"), "description"),
            cc_definitions=[CCDefinitionRef.from_dict(ref) for ref in refs],
            previous_scene=None if previous is None else SceneRef.from_dict(previous),
            use_transitions=_flag(_require(data, "use_transitions"), "use_transitions"),
            add_randomness=_flag(_require(data, "add_randomness"), "add_randomness"),
            tags=_text_list(_require(data, "tags"), "tags"),
        )


@dataclass
class GeneratedScene:
    scene: Scene
    explanation: str

    def to_dict(self) -> dict[str, Any]:
        return {"scene": self.scene.to_dict(), "explanation": self.explanation}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GeneratedScene:
        return cls(
            scene=Scene.from_dict(_require(data, "scene")),
            explanation=_text(_require(data, "explanation"), "explanation"),
        )