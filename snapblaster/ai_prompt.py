"""Dialog that asks the backend to generate a scene from a description."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .commands import BackendClient, CommandError
from .models import (
    CCDefinitionRef,
    GeneratedScene,
    GenerationParams,
    Project,
    SceneRef,
)

PREVIEW_LIMIT = 5
NO_PROJECT = "No active project"


def more_values_label(count: int) -> str:
    """Note on how many CC values the preview leaves out."""
    if count > PREVIEW_LIMIT:
        return f"\u2026 and {count - PREVIEW_LIMIT} more"
    return ""


@dataclass(frozen=True)
class ScenePreview:
    """What the dialog shows of a generated scene."""

    name: str
    description: str
    values: list[tuple[str, int]]
    more: str
    explanation: str


class AIPromptDialog:
    """State of the scene generator dialog."""

    def __init__(
        self,
        client: BackendClient,
        project: Optional[Project],
        on_close: Callable[[], None],
        on_generate: Callable[[GenerationParams], None],
    ) -> None:
        self.client = client
        self.project = project
        self.on_close = on_close
        self.on_generate = on_generate
        self.description = ""
        self.use_transitions = True
        self.add_randomness = False
        self.tags: list[str] = []
        self.reference: Optional[str] = None
        self.is_generating = False
        self.generated: Optional[GeneratedScene] = None
        self.error: Optional[str] = None

    def all_tags(self) -> list[str]:
        """Every tag used by a scene of the project, sorted, without repeats."""
        if self.project is None:
            return []
        return sorted({tag for scene in self.project.scenes.values() for tag in scene.tags})

    def toggle_tag(self, tag: str) -> None:
        if tag in self.tags:
            self.tags = [existing for existing in self.tags if existing != tag]
        else:
            self.tags = [*self.tags, tag]

    def can_generate(self) -> bool:
        return bool(self.description.strip()) and not self.is_generating

    def build_params(self) -> GenerationParams:
        """Parameters for a generation request; ValueError without a project."""
        project = self.project
        if project is None:
            raise ValueError(NO_PROJECT)
        params = GenerationParams(
            description=self.description,
            cc_definitions=[
                CCDefinitionRef(
                    channel=definition.channel,
                    cc_number=definition.cc_number,
                    name=definition.name,
                    description=definition.description,
                )
                for definition in project.cc_definitions.values()
            ],
            use_transitions=self.use_transitions,
            add_randomness=self.add_randomness,
            tags=list(self.tags),
        )
        if self.reference is not None:
            scene = project.scenes.get(self.reference)
            if scene is not None:
                params.previous_scene = SceneRef(
                    id=scene.id, name=scene.name, cc_values=dict(scene.cc_values)
                )
        return params

    async def generate(self) -> Optional[GeneratedScene]:
        """Request a scene; failures end up in ``error``."""
        self.is_generating = True
        self.error = None
        try:
            params = self.build_params()
        except ValueError as exc:
            self.error = str(exc)
            self.is_generating = False
            return None
        self.on_generate(params)
        try:
            self.generated = await self.client.generate_scene(params)
        except CommandError as exc:
            self.error = f"Failed: {exc}"
        finally:
            self.is_generating = False
        return self.generated

    async def save(self) -> Optional[str]:
        """Store the generated scene and close; return its new id."""
        generated = self.generated
        if generated is None:
            return None
        try:
            scene_id = await self.client.save_generated_scene(generated)
        except CommandError as exc:
            self.error = f"Save failed: {exc}"
            return None
        self.on_close()
        return scene_id

    def discard(self) -> None:
        """Drop the generated scene to generate another."""
        self.generated = None

    def preview(self) -> Optional[ScenePreview]:
        generated = self.generated
        if generated is None:
            return None
        scene = generated.scene
        values = [
            (cc.name if cc.name is not None else f"CC {cc.cc_number}", cc.value)
            for cc in list(scene.cc_values.values())[:PREVIEW_LIMIT]
        ]
        return ScenePreview(
            name=scene.name,
            description=scene.description or "",
            values=values,
            more=more_values_label(len(scene.cc_values)),
            explanation=generated.explanation,
        )