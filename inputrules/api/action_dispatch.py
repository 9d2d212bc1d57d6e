"""Public action-sink API contracts."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

ButtonActionHandler = Callable[[], object]
AxisActionHandler = Callable[[float], object]


class ActionSink(Protocol):
    """Receives mapping fires from the match engine."""

    def invoke(self, mapping_id: int, value: float | None = None) -> None:
        """Invoke the action bound to mapping id; axis fires carry a value."""


def create_action_dispatcher(
    *,
    button_handlers: dict[int, ButtonActionHandler],
    axis_handlers: dict[int, AxisActionHandler] | None = None,
) -> ActionSink:
    """Create default dispatcher implementation."""
    from inputrules.runtime.action_dispatch import RuntimeActionDispatcher

    return RuntimeActionDispatcher(
        button_handlers=button_handlers,
        axis_handlers=dict(axis_handlers or {}),
    )


__all__ = [
    "ActionSink",
    "AxisActionHandler",
    "ButtonActionHandler",
    "create_action_dispatcher",
]
