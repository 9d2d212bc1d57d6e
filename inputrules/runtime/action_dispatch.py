"""Handler-table action sink for mapping fires."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from inputrules.api.action_dispatch import AxisActionHandler, ButtonActionHandler

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RuntimeActionDispatcher:
    """Resolve mapping ids to button or axis handlers."""

    button_handlers: dict[int, ButtonActionHandler]
    axis_handlers: dict[int, AxisActionHandler]

    def invoke(self, mapping_id: int, value: float | None = None) -> None:
        """Dispatch one fire. Unbound ids are ignored."""
        if value is not None:
            axis_handler = self.axis_handlers.get(mapping_id)
            if axis_handler is not None:
                axis_handler(value)
                return
        handler = self.button_handlers.get(mapping_id)
        if handler is not None:
            handler()
            return
        logger.debug("action_unbound mapping=%d value=%s", mapping_id, value)


ActionDispatcher = RuntimeActionDispatcher
