"""Public input rule API contracts."""

from inputrules.api.action_dispatch import (
    ActionSink,
    AxisActionHandler,
    ButtonActionHandler,
    create_action_dispatcher,
)
from inputrules.api.errors import (
    InputRulesError,
    MalformedDescriptorError,
    UnsupportedOperationError,
)
from inputrules.api.input_events import AxisEvent, KeyEvent
from inputrules.api.input_snapshot import (
    InputSnapshot,
    KeyboardSnapshot,
    create_empty_input_snapshot,
)
from inputrules.api.input_source import InputSource, create_snapshot_input_source
from inputrules.api.logging import LoggingConfig
from inputrules.api.mapping import (
    UNBOUND_DESCRIPTOR,
    AxisDirection,
    AxisSettings,
    InputCategory,
    InputType,
    MappingRecord,
)
from inputrules.api.steps import (
    AxisTest,
    ComboStep,
    Descriptor,
    DiagonalAxisStep,
    KeyStep,
    Step,
)

__all__ = [
    "UNBOUND_DESCRIPTOR",
    "ActionSink",
    "AxisActionHandler",
    "AxisDirection",
    "AxisEvent",
    "AxisSettings",
    "AxisTest",
    "ButtonActionHandler",
    "ComboStep",
    "Descriptor",
    "DiagonalAxisStep",
    "InputCategory",
    "InputRulesError",
    "InputSnapshot",
    "InputSource",
    "InputType",
    "KeyEvent",
    "KeyStep",
    "KeyboardSnapshot",
    "LoggingConfig",
    "MalformedDescriptorError",
    "MappingRecord",
    "Step",
    "UnsupportedOperationError",
    "create_action_dispatcher",
    "create_empty_input_snapshot",
    "create_snapshot_input_source",
]
