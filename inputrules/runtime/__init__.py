"""Input rule runtime modules."""

from inputrules.runtime.action_dispatch import ActionDispatcher, RuntimeActionDispatcher
from inputrules.runtime.config import InputRulesConfig, load_input_config
from inputrules.runtime.engine import MappingFire, MatchEngine, TickReport
from inputrules.runtime.evaluator import AtomicEvaluator, axis_matches
from inputrules.runtime.host import InputRuleHost
from inputrules.runtime.logging import configure_logging, setup_logging
from inputrules.runtime.mappings import Mapping, MappingTable
from inputrules.runtime.parser import (
    format_descriptor,
    format_step,
    parse_descriptor,
    parse_record,
)
from inputrules.runtime.records_codec import dumps_records, loads_records
from inputrules.runtime.recorder import BindingRecorder
from inputrules.runtime.time import FrameClock, TimeContext

__all__ = [
    "ActionDispatcher",
    "AtomicEvaluator",
    "BindingRecorder",
    "FrameClock",
    "InputRuleHost",
    "InputRulesConfig",
    "Mapping",
    "MappingFire",
    "MappingTable",
    "MatchEngine",
    "RuntimeActionDispatcher",
    "TickReport",
    "TimeContext",
    "axis_matches",
    "configure_logging",
    "dumps_records",
    "format_descriptor",
    "format_step",
    "load_input_config",
    "loads_records",
    "parse_descriptor",
    "parse_record",
    "setup_logging",
]
