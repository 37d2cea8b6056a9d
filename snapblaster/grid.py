"""The 8x8 grid of scene pads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .models import Project, Scene, TriggerKind

GRID_SIZE = 64


@dataclass(frozen=True)
class GridCell:
    """What one pad of the grid shows."""

    position: int
    scene: Optional[Scene]
    active: bool
    css_class: str
    style: str
    number: str
    name: str


def _css_class(scene: Optional[Scene], active: bool) -> str:
    parts = ["scene-pad"]
    if scene is None:
        parts.append("empty")
    if active:
        parts.append("active")
    if scene is not None and scene.trigger_mode.kind is not TriggerKind.IMMEDIATE:
        parts.append("transition")
    return " ".join(parts)


def _style(scene: Optional[Scene]) -> str:
    if scene is None or scene.color is None:
        return ""
    r, g, b = scene.color
    return f"background-color:rgb({r},{g},{b});"


class SceneGrid:
    """Grid of scene pads supporting click-to-activate and drag-to-assign."""

    def __init__(
        self,
        project: Project,
        on_activate: Callable[[str], None],
        on_assign: Callable[[str, int], None],
    ) -> None:
        self.project = project
        self.on_activate = on_activate
        self.on_assign = on_assign
        self.dragging: Optional[str] = None

    def _scene_at(self, position: int) -> Optional[Scene]:
        if not 0 <= position < GRID_SIZE:
            raise ValueError(f"grid position must be in 0..{GRID_SIZE - 1}, got {position}")
        scene_id = self.project.grid_assignments.get(position)
        return None if scene_id is None else self.project.scenes.get(scene_id)

    def cells(self, active_scene: Optional[Scene] = None) -> list[GridCell]:
        cells = []
        for position in range(GRID_SIZE):
            scene_id = self.project.grid_assignments.get(position)
            scene = None if scene_id is None else self.project.scenes.get(scene_id)
            active = (
                active_scene is not None and scene_id is not None and active_scene.id == scene_id
            )
            cells.append(
                GridCell(
                    position=position,
                    scene=scene,
                    active=active,
                    css_class=_css_class(scene, active),
                    style=_style(scene),
                    number=str(position + 1),
                    name=scene.name if scene is not None else "",
                )
            )
        return cells

    def click(self, position: int) -> None:
        scene = self._scene_at(position)
        if scene is not None:
            self.on_activate(scene.id)

    def drag_start(self, position: int) -> Optional[str]:
        """Start dragging the scene at ``position``; return its id, if any."""
        scene = self._scene_at(position)
        if scene is not None:
            self.dragging = scene.id
            return scene.id
        return None

    def drop(self, position: int) -> None:
        self._scene_at(position)
        if self.dragging is not None:
            self.on_assign(self.dragging, position)
        self.dragging = None