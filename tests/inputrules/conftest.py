from __future__ import annotations

from collections.abc import Iterable

import pytest

from inputrules.api.input_snapshot import InputSnapshot, KeyboardSnapshot
from inputrules.input.snapshot_source import SnapshotInputSource
from inputrules.input.state_tracker import InputStateTracker

AXES = ("Horizontal", "Vertical", "Mouse X")


class RecordingSink:
    def __init__(self) -> None:
        self.calls: list[tuple[int, float | None]] = []

    def invoke(self, mapping_id: int, value: float | None = None) -> None:
        self.calls.append((mapping_id, value))

    def count(self, mapping_id: int) -> int:
        return sum(1 for called_id, _ in self.calls if called_id == mapping_id)


class ExplodingSink(RecordingSink):
    def __init__(self, exploding_id: int) -> None:
        super().__init__()
        self.exploding_id = exploding_id

    def invoke(self, mapping_id: int, value: float | None = None) -> None:
        if mapping_id == self.exploding_id:
            raise RuntimeError("handler failed")
        super().invoke(mapping_id, value)


def make_source(
    *,
    held: Iterable[str] = (),
    pressed: Iterable[str] = (),
    axes: dict[str, float] | None = None,
    known_keys: Iterable[str] | None = None,
    frame_index: int = 0,
) -> SnapshotInputSource:
    """Build a one-tick source; ``pressed`` keys count as held too."""
    just_pressed = frozenset(pressed)
    axis_values = {name: 0.0 for name in AXES}
    axis_values.update(axes or {})
    snapshot = InputSnapshot(
        frame_index=frame_index,
        keyboard=KeyboardSnapshot(
            pressed_keys=frozenset(held) | just_pressed,
            just_pressed_keys=just_pressed,
            known_keys=frozenset(known_keys) if known_keys is not None else None,
        ),
        axes=tuple(axis_values.items()),
    )
    return SnapshotInputSource(snapshot)


def tap(key: str) -> SnapshotInputSource:
    return make_source(pressed=(key,))


def idle() -> SnapshotInputSource:
    return make_source()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def tracker() -> InputStateTracker:
    return InputStateTracker(axis_names=AXES)
