"""Input source backed by one immutable frame snapshot."""

from __future__ import annotations

from collections.abc import Iterable

from inputrules.api.input_snapshot import InputSnapshot


class SnapshotInputSource:
    """Answer key/axis queries from a single consistent snapshot."""

    def __init__(self, snapshot: InputSnapshot) -> None:
        self._snapshot = snapshot
        self._keyboard = snapshot.keyboard
        self._axes = dict(snapshot.axes)

    @property
    def frame_index(self) -> int:
        return self._snapshot.frame_index

    def is_key_held(self, name: str) -> bool:
        return name in self._keyboard.pressed_keys

    def is_key_just_pressed(self, name: str) -> bool:
        return name in self._keyboard.just_pressed_keys

    def is_any_key_just_pressed(self) -> bool:
        return bool(self._keyboard.just_pressed_keys)

    def just_pressed_keys(self) -> Iterable[str]:
        return self._keyboard.just_pressed_keys

    def key_exists(self, name: str) -> bool:
        known = self._keyboard.known_keys
        if known is None:
            return name not in self._axes
        return name in known

    def axis_exists(self, name: str) -> bool:
        return name in self._axes

    def axis_value(self, name: str) -> float:
        """Return the sampled value; unknown axes raise ``KeyError``."""
        return float(self._axes[name])
