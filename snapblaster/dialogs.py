"""The quick settings panel and the error dialog."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Callable, Optional

from .models import Project

NO_PROJECT_MESSAGE = "Load a project to see settings"


def _display_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == int(value):
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def quantization_label(value: Optional[int]) -> str:
    """Describe a quantization setting given in beats."""
    if value is None:
        return "Off"
    named = {1: "1 Beat", 2: "2 Beats", 4: "1 Bar", 8: "2 Bars"}
    return named.get(value, f"{value} Beats")


class SettingsPanel:
    """Summary of the loaded project's settings."""

    def __init__(self, project: Optional[Project], on_close: Callable[[], None]) -> None:
        self.project = project
        self.on_close = on_close

    def quick_settings(self) -> Optional[list[tuple[str, str]]]:
        """Label and value pairs to show, or None when no project is loaded."""
        if self.project is None:
            return None
        settings = self.project.settings
        return [
            ("Tempo:", f"{_display_number(settings.default_tempo)} BPM"),
            ("Link:", "Enabled" if settings.use_link else "Disabled"),
            ("Quantization:", quantization_label(settings.default_quantization)),
        ]

    def close(self) -> None:
        self.on_close()


class ErrorDialog:
    """A dismissable error message."""

    title = "Error"

    def __init__(self, message: str, on_close: Callable[[], None]) -> None:
        self.message = message
        self.on_close = on_close

    def close(self) -> None:
        self.on_close()