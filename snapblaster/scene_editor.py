"""Editor for a scene's name, trigger mode and CC values."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Callable, Mapping, Optional

from .models import CCDefinition, CCValue, Scene, TriggerKind, TriggerMode

_U8_TEXT = re.compile(r"\+?[0-9]+")

_TRIGGER_LABELS = {
    TriggerKind.IMMEDIATE: "Immediate",
    TriggerKind.NEXT_BEAT: "Next Beat",
    TriggerKind.NEXT_BAR: "Next Bar",
}

CCGroupEntry = tuple[int, CCValue, Optional[CCDefinition]]


def _parse_u8(text: str) -> int | None:
    if not _U8_TEXT.fullmatch(text):
        return None
    number = int(text)
    return number if number <= 255 else None


def trigger_mode_label(mode: TriggerMode) -> str:
    """Human readable description of a trigger mode."""
    if mode.kind is TriggerKind.BEATS:
        return f"{mode.beats} Beats"
    return _TRIGGER_LABELS[mode.kind]


def group_cc_values(
    cc_values: Mapping[str, CCValue],
) -> list[tuple[int, list[tuple[int, CCValue]]]]:
    """Group values keyed ``"channel:cc"`` by channel.

    Keys that do not start with two numbers in 0..=255 are skipped. Channels
    come in ascending order, and within a channel values are ordered by CC
    number.
    """
    groups: dict[int, list[tuple[int, CCValue]]] = {}
    for key, value in cc_values.items():
        parts = key.split(":")
        if len(parts) < 2:
            continue
        channel = _parse_u8(parts[0])
        cc_number = _parse_u8(parts[1])
        if channel is None or cc_number is None:
            continue
        groups.setdefault(channel, []).append((cc_number, value))
    return [
        (channel, sorted(entries, key=lambda entry: entry[0]))
        for channel, entries in sorted(groups.items())
    ]


class SceneEditor:
    """Edit state for one scene; changes are reported on save."""

    def __init__(
        self,
        scene: Scene,
        cc_definitions: Optional[Mapping[str, CCDefinition]] = None,
        on_update: Optional[Callable[[Scene], None]] = None,
    ) -> None:
        self.scene = scene
        self.cc_definitions = dict(cc_definitions or {})
        self.on_update = on_update
        self.editing = False
        self.dirty = False
        self._reset()

    def _reset(self) -> None:
        self.name = self.scene.name
        self.description = self.scene.description or ""
        self.trigger_mode = self.scene.trigger_mode
        self.cc_values = dict(self.scene.cc_values)

    def begin_edit(self) -> None:
        self.editing = True

    def set_name(self, name: str) -> None:
        self.name = name
        self.dirty = True

    def set_description(self, description: str) -> None:
        self.description = description
        self.dirty = True

    def set_trigger_mode(self, mode: TriggerMode) -> None:
        self.trigger_mode = mode
        self.dirty = True

    def update_cc(self, channel: int, cc_number: int, value: CCValue) -> None:
        """Store an edited CC value under ``"channel:cc_number"``."""
        self.cc_values[f"{channel}:{cc_number}"] = value
        self.dirty = True

    def groups(self) -> list[tuple[int, list[CCGroupEntry]]]:
        """CC values grouped by channel, each with its definition if known."""
        return [
            (
                channel,
                [
                    (cc_number, value, self.cc_definitions.get(f"{value.channel}:{cc_number}"))
                    for cc_number, value in entries
                ],
            )
            for channel, entries in group_cc_values(self.cc_values)
        ]

    def save(self) -> Scene:
        """Build the edited scene, report it, and leave edit mode."""
        updated = replace(
            self.scene,
            name=self.name,
            description=self.description or None,
            trigger_mode=self.trigger_mode,
            cc_values=dict(self.cc_values),
        )
        if self.on_update is not None:
            self.on_update(updated)
        self.editing = False
        self.dirty = False
        return updated

    def cancel(self) -> None:
        """Drop all edits and leave edit mode."""
        self.editing = False
        self._reset()
        self.dirty = False