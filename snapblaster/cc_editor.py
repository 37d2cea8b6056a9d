"""State and behaviour of the editor for a single MIDI CC value."""

from __future__ import annotations

import math
import re
from dataclasses import replace
from decimal import Decimal
from typing import Callable, Optional

from .models import CCDefinition, CCValue, TransitionCurve

BEAT_OPTIONS = (0.25, 0.5, 1.0, 2.0, 4.0, 8.0)

_OPTION_BY_CURVE = {
    TransitionCurve.LINEAR: "linear",
    TransitionCurve.EXPONENTIAL: "exponential",
    TransitionCurve.LOGARITHMIC: "logarithmic",
    TransitionCurve.SCURVE: "scurve",
}
_CURVE_BY_OPTION = {option: curve for curve, option in _OPTION_BY_CURVE.items()}

_LABEL_BY_CURVE = {
    TransitionCurve.LINEAR: "Linear",
    TransitionCurve.EXPONENTIAL: "Exponential",
    TransitionCurve.LOGARITHMIC: "Logarithmic",
    TransitionCurve.SCURVE: "S\u2011Curve",
}

_U8_TEXT = re.compile(r"\+?[0-9]+")


def curve_from_option(text: str) -> TransitionCurve:
    """Map a curve selector value to a curve; unknown values mean linear."""
    return _CURVE_BY_OPTION.get(text, TransitionCurve.LINEAR)


def curve_option(curve: TransitionCurve) -> str:
    """The selector value that stands for ``curve``."""
    return _OPTION_BY_CURVE[curve]


def curve_label(curve: TransitionCurve) -> str:
    """The human readable name of ``curve``."""
    return _LABEL_BY_CURVE[curve]


def _display_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == int(value):
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def _parse_u8(raw: str) -> int | None:
    if not _U8_TEXT.fullmatch(raw):
        return None
    number = int(raw)
    return number if number <= 255 else None


class CCEditor:
    """Live-edit state for one CC value.

    Every successful edit reports the resulting value through ``on_change``.
    """

    def __init__(
        self,
        value: CCValue,
        definition: Optional[CCDefinition] = None,
        on_change: Optional[Callable[[CCValue], None]] = None,
    ) -> None:
        self.base = value
        self.definition = definition
        self.on_change = on_change
        self.value = value.value
        self.transition = value.transition
        self.beats = 1.0 if value.transition_beats is None else value.transition_beats
        self.curve = value.curve
        self.minimum = definition.min_value if definition is not None else 0
        self.maximum = definition.max_value if definition is not None else 127

    def name(self) -> str:
        if self.base.name is not None:
            return self.base.name
        if self.definition is not None:
            return self.definition.name
        return f"CC {self.base.cc_number}"

    def description(self) -> str:
        if self.base.description is not None:
            return self.base.description
        if self.definition is not None and self.definition.description is not None:
            return self.definition.description
        return ""

    def percent(self) -> float:
        """Position of the current value within the allowed range, 0.0 to 100.0.

        An empty range yields 0.0.
        """
        span = self.maximum - self.minimum
        if span == 0:
            return 0.0
        return (self.value - self.minimum) / span * 100.0

    def channel_label(self) -> str:
        return f"Ch: {self.base.channel + 1}, CC: {self.base.cc_number}"

    def transition_info(self) -> str | None:
        """Read-only summary of the stored transition, or None without one."""
        if not self.base.transition:
            return None
        beats = 1.0 if self.base.transition_beats is None else self.base.transition_beats
        return f"Transition: {_display_number(beats)} beats ({curve_label(self.base.curve)})"

    def set_value(self, raw: str) -> None:
        number = _parse_u8(raw)
        if number is None:
            return
        self.value = number
        self._apply()

    def set_transition(self, enabled: bool) -> None:
        self.transition = bool(enabled)
        self._apply()

    def set_beats(self, raw: str) -> None:
        if raw != raw.strip() or "_" in raw:
            return
        try:
            beats = float(raw)
        except ValueError:
            return
        self.beats = beats
        self._apply()

    def set_curve(self, raw: str) -> None:
        self.curve = curve_from_option(raw)
        self._apply()

    def current(self) -> CCValue:
        """The original value with the edits applied."""
        return replace(
            self.base,
            value=self.value,
            transition=self.transition,
            transition_beats=self.beats if self.transition else None,
            curve=self.curve,
        )

    def _apply(self) -> None:
        if self.on_change is not None:
            self.on_change(self.current())