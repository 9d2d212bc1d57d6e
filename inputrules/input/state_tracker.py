"""Raw key/axis events to per-frame input snapshots."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable

from inputrules.api.input_events import AxisEvent, KeyEvent
from inputrules.api.input_snapshot import InputSnapshot, KeyboardSnapshot

logger = logging.getLogger(__name__)


class InputStateTracker:
    """Queue raw events and fold them into one snapshot per frame.

    Axes must be declared up front so that lookups of undeclared names can be
    reported as unknown identifiers; declared axes rest at ``0.0``.
    """

    def __init__(
        self,
        *,
        axis_names: Iterable[str] = (),
        key_names: Iterable[str] | None = None,
    ) -> None:
        self._key_events: deque[KeyEvent] = deque()
        self._axis_events: deque[AxisEvent] = deque()
        self._pressed_keys: set[str] = set()
        self._axes: dict[str, float] = {name: 0.0 for name in axis_names}
        self._known_keys = frozenset(key_names) if key_names is not None else None

    @property
    def axis_names(self) -> tuple[str, ...]:
        return tuple(self._axes)

    def declare_axis(self, name: str) -> None:
        """Register an axis so it resolves in later snapshots."""
        normalized = name.strip()
        if not normalized:
            raise ValueError("axis name must not be empty")
        self._axes.setdefault(normalized, 0.0)

    def consume_events(self, events: Iterable[KeyEvent | AxisEvent]) -> None:
        """Ingest raw input events produced by host polling."""
        for raw in events:
            if isinstance(raw, KeyEvent):
                self._key_events.append(raw)
            elif isinstance(raw, AxisEvent):
                self._axis_events.append(raw)

    def press(self, key: str) -> None:
        self._key_events.append(KeyEvent("key_down", key))

    def release(self, key: str) -> None:
        self._key_events.append(KeyEvent("key_up", key))

    def set_axis(self, name: str, value: float) -> None:
        self._axis_events.append(AxisEvent(name, value))

    def drain_key_events(self) -> list[KeyEvent]:
        """Return and clear key events."""
        items = list(self._key_events)
        self._key_events.clear()
        return items

    def drain_axis_events(self) -> list[AxisEvent]:
        """Return and clear axis events."""
        items = list(self._axis_events)
        self._axis_events.clear()
        return items

    def build_input_snapshot(self, *, frame_index: int) -> InputSnapshot:
        """Build one immutable per-frame snapshot and consume queued raw events."""
        just_pressed_keys: set[str] = set()
        just_released_keys: set[str] = set()
        for key_event in self.drain_key_events():
            value = str(key_event.value).strip()
            if not value:
                continue
            if key_event.event_type == "key_down":
                if value not in self._pressed_keys:
                    just_pressed_keys.add(value)
                self._pressed_keys.add(value)
            elif key_event.event_type == "key_up":
                if value in self._pressed_keys:
                    just_released_keys.add(value)
                self._pressed_keys.discard(value)
            else:
                logger.debug("input_event_ignored type=%s value=%s", key_event.event_type, value)

        for axis_event in self.drain_axis_events():
            if axis_event.name not in self._axes:
                logger.debug("axis_event_undeclared name=%s", axis_event.name)
                continue
            self._axes[axis_event.name] = float(axis_event.value)

        keyboard = KeyboardSnapshot(
            pressed_keys=frozenset(self._pressed_keys),
            just_pressed_keys=frozenset(just_pressed_keys),
            just_released_keys=frozenset(just_released_keys),
            known_keys=self._known_keys,
        )
        return InputSnapshot(
            frame_index=frame_index,
            keyboard=keyboard,
            axes=tuple(self._axes.items()),
        )
