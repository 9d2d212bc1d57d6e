from __future__ import annotations

import pytest

from inputrules.api.errors import UnsupportedOperationError
from inputrules.api.mapping import InputCategory, InputType, MappingRecord
from inputrules.api.steps import ComboStep, KeyStep
from inputrules.diagnostics import DiagnosticHub
from inputrules.runtime.mappings import MappingTable
from inputrules.runtime.recorder import BindingRecorder


def _recorder(*records: MappingRecord, hub: DiagnosticHub | None = None) -> BindingRecorder:
    return BindingRecorder(MappingTable(records), hub=hub)


def test_standard_capture_takes_first_key() -> None:
    recorder = _recorder(MappingRecord())
    recorder.begin_capture(0)
    assert recorder.capturing
    assert recorder.on_raw_input(["Space"])
    assert not recorder.capturing
    mapping = recorder.table[0]
    assert mapping.record.descriptor == "Space"
    assert mapping.descriptor.steps == (KeyStep("Space"),)


def test_combo_capture_joins_first_two_distinct_keys() -> None:
    recorder = _recorder(MappingRecord(input_type=InputType.COMBO))
    recorder.begin_capture(0)
    assert not recorder.on_raw_input(["LeftShift"])
    assert recorder.draft == "LeftShift+"
    assert not recorder.on_raw_input(["LeftShift"])
    assert recorder.on_raw_input(["W"])
    mapping = recorder.table[0]
    assert mapping.record.descriptor == "LeftShift+W"
    assert mapping.descriptor.steps == (ComboStep(KeyStep("LeftShift"), KeyStep("W")),)


def test_combo_capture_consumes_same_tick_keys_in_sorted_order() -> None:
    recorder = _recorder(MappingRecord(input_type=InputType.COMBO))
    recorder.begin_capture(0)
    assert recorder.on_raw_input(["W", "LeftShift"])
    assert recorder.table[0].record.descriptor == "LeftShift+W"


def test_sequence_capture_is_rejected() -> None:
    hub = DiagnosticHub(capacity=100)
    recorder = _recorder(MappingRecord(input_type=InputType.SEQUENCE), hub=hub)
    with pytest.raises(UnsupportedOperationError, match="typed in"):
        recorder.begin_capture(0)
    assert not recorder.capturing
    assert [event.mapping_id for event in hub.snapshot(name="capture.rejected")] == [0]


def test_axis_capture_is_rejected() -> None:
    recorder = _recorder(MappingRecord(category=InputCategory.AXIS))
    with pytest.raises(UnsupportedOperationError):
        recorder.begin_capture(0)


def test_rejection_keeps_capture_in_progress() -> None:
    recorder = _recorder(MappingRecord(), MappingRecord(input_type=InputType.SEQUENCE))
    recorder.begin_capture(0)
    with pytest.raises(UnsupportedOperationError):
        recorder.begin_capture(1)
    assert recorder.capture_index == 0


def test_capture_index_out_of_range_raises() -> None:
    with pytest.raises(IndexError):
        _recorder().begin_capture(3)


def test_cancel_capture_leaves_descriptor_untouched() -> None:
    recorder = _recorder(MappingRecord(descriptor="Q", input_type=InputType.COMBO))
    recorder.begin_capture(0)
    recorder.on_raw_input(["A"])
    recorder.cancel_capture()
    assert not recorder.capturing
    assert recorder.draft == ""
    assert not recorder.on_raw_input(["B"])
    assert recorder.table[0].record.descriptor == "Q"


def test_capture_is_cancelled_when_target_disappears() -> None:
    table = MappingTable([MappingRecord(), MappingRecord()])
    recorder = BindingRecorder(table)
    recorder.begin_capture(1)
    table.resize(1)
    assert not recorder.on_raw_input(["A"])
    assert not recorder.capturing


def test_capture_is_cancelled_when_target_becomes_sequence() -> None:
    table = MappingTable([MappingRecord()])
    recorder = BindingRecorder(table)
    recorder.begin_capture(0)
    table.set_record(0, MappingRecord(input_type=InputType.SEQUENCE))
    assert not recorder.on_raw_input(["A"])
    assert not recorder.capturing


def test_capture_lifecycle_is_reported() -> None:
    hub = DiagnosticHub(capacity=100)
    recorder = _recorder(MappingRecord(), hub=hub)
    recorder.begin_capture(0, tick=7)
    recorder.on_raw_input(["Return"], tick=8)
    events = hub.snapshot(category="capture")
    assert [(event.name, event.tick) for event in events] == [
        ("capture.started", 7),
        ("capture.completed", 8),
    ]
    assert events[-1].value == "Return"
