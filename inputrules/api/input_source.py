"""Input source contract read by the match engine."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from inputrules.api.input_snapshot import InputSnapshot


class InputSource(Protocol):
    """Read-only view of one tick of raw input."""

    def is_key_held(self, name: str) -> bool:
        """Return whether key is currently down."""

    def is_key_just_pressed(self, name: str) -> bool:
        """Return whether key went down this tick."""

    def is_any_key_just_pressed(self) -> bool:
        """Return whether any key went down this tick."""

    def just_pressed_keys(self) -> Iterable[str]:
        """Return keys that went down this tick."""

    def key_exists(self, name: str) -> bool:
        """Return whether name resolves to a key."""

    def axis_exists(self, name: str) -> bool:
        """Return whether name resolves to an axis."""

    def axis_value(self, name: str) -> float:
        """Return the axis value for this tick."""


def create_snapshot_input_source(snapshot: InputSnapshot) -> InputSource:
    """Create the default snapshot-backed input source."""
    from inputrules.input.snapshot_source import SnapshotInputSource

    return SnapshotInputSource(snapshot)


__all__ = ["InputSource", "create_snapshot_input_source"]
