"""Immutable input snapshot contracts."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class KeyboardSnapshot:
    """Frame-stable key/button state.

    ``known_keys`` of ``None`` means every name that is not an axis counts as
    a key.
    """

    pressed_keys: frozenset[str] = field(default_factory=frozenset)
    just_pressed_keys: frozenset[str] = field(default_factory=frozenset)
    just_released_keys: frozenset[str] = field(default_factory=frozenset)
    known_keys: frozenset[str] | None = None


@dataclass(frozen=True, slots=True)
class InputSnapshot:
    """Immutable frame input snapshot consumed by the match engine."""

    frame_index: int
    keyboard: KeyboardSnapshot = field(default_factory=KeyboardSnapshot)
    axes: tuple[tuple[str, float], ...] = ()


def create_empty_input_snapshot(*, frame_index: int = 0) -> InputSnapshot:
    """Create an empty input snapshot for bootstrap and tests."""
    return InputSnapshot(frame_index=frame_index)


__all__ = ["InputSnapshot", "KeyboardSnapshot", "create_empty_input_snapshot"]
