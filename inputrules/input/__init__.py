"""Input capture adapters feeding the match engine."""

from inputrules.api.input_events import AxisEvent, KeyEvent
from inputrules.input.snapshot_source import SnapshotInputSource
from inputrules.input.state_tracker import InputStateTracker

__all__ = ["AxisEvent", "InputStateTracker", "KeyEvent", "SnapshotInputSource"]
