"""Public raw input event types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """Raw key/button transition (``key_down`` or ``key_up``)."""

    event_type: str
    value: str


@dataclass(frozen=True, slots=True)
class AxisEvent:
    """Latest sampled value of a named axis."""

    name: str
    value: float


__all__ = ["AxisEvent", "KeyEvent"]
