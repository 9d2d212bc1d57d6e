from __future__ import annotations

import pytest

from inputrules.api.errors import MalformedDescriptorError
from inputrules.api.mapping import (
    AxisDirection,
    AxisSettings,
    InputCategory,
    InputType,
    MappingRecord,
)
from inputrules.api.steps import AxisTest, ComboStep, DiagonalAxisStep, KeyStep
from inputrules.runtime.parser import (
    format_descriptor,
    parse_descriptor,
    parse_record,
)

SETTINGS = AxisSettings(
    axis1_direction=AxisDirection.POSITIVE,
    axis2_direction=AxisDirection.NEGATIVE,
    axis1_tolerance=0.3,
    axis2_tolerance=0.6,
)


def _sequence(raw: str, **kwargs):
    return parse_descriptor(
        raw,
        category=InputCategory.BUTTON,
        input_type=InputType.SEQUENCE,
        axis_settings=SETTINGS,
        **kwargs,
    )


def test_parsing_is_idempotent() -> None:
    raw = "W, (Horizontal, Vertical><)+Fire, Horizontal>+Jump, A+B"
    assert _sequence(raw) == _sequence(raw)


def test_unbound_descriptor_parses_to_no_steps() -> None:
    for raw in ("None", "", "   "):
        descriptor = parse_descriptor(
            raw, category=InputCategory.BUTTON, input_type=InputType.COMBO
        )
        assert descriptor.is_unbound
        assert len(descriptor) == 0


def test_standard_descriptor_is_key_or_axis_by_category() -> None:
    key = parse_descriptor("Space", category=InputCategory.BUTTON, input_type=InputType.STANDARD)
    axis = parse_descriptor(
        "Horizontal", category=InputCategory.AXIS, input_type=InputType.STANDARD
    )
    known = parse_descriptor(
        "Mouse X",
        category=InputCategory.BUTTON,
        input_type=InputType.STANDARD,
        axis_names=("Mouse X",),
    )
    assert key.steps == (KeyStep("Space"),)
    assert axis.steps == (AxisTest("Horizontal"),)
    assert known.steps == (AxisTest("Mouse X"),)


def test_sequence_splits_steps_on_comma_space() -> None:
    descriptor = _sequence("W, A, S, D")
    assert descriptor.steps == (KeyStep("W"), KeyStep("A"), KeyStep("S"), KeyStep("D"))


def test_sequence_suffix_sets_direction_and_mapping_tolerance() -> None:
    descriptor = _sequence("Horizontal<, Vertical>, Horizontal=")
    assert descriptor.steps == (
        AxisTest("Horizontal", AxisDirection.NEGATIVE, 0.3),
        AxisTest("Vertical", AxisDirection.POSITIVE, 0.3),
        AxisTest("Horizontal", AxisDirection.NEUTRAL, 0.3),
    )


def test_sequence_bare_known_axis_is_neutral_with_zero_tolerance() -> None:
    descriptor = _sequence("Horizontal, W", axis_names=("Horizontal", "Vertical"))
    assert descriptor.steps == (AxisTest("Horizontal"), KeyStep("W"))


def test_sequence_diagonal_group_uses_suffix_pair_in_order() -> None:
    descriptor = _sequence("(Horizontal, Vertical><)")
    assert descriptor.steps == (
        DiagonalAxisStep(
            first=AxisTest("Horizontal", AxisDirection.POSITIVE, 0.3),
            second=AxisTest("Vertical", AxisDirection.NEGATIVE, 0.6),
        ),
    )


def test_sequence_diagonal_key_accepts_trailing_and_grouped_forms() -> None:
    trailing = _sequence("(Horizontal, Vertical<>)+Fire")
    grouped = _sequence("(Horizontal, Vertical+Fire<>)")
    assert trailing.steps == grouped.steps
    step = trailing.steps[0]
    assert isinstance(step, DiagonalAxisStep)
    assert step.key == KeyStep("Fire")


def test_sequence_combo_with_one_axis_side() -> None:
    descriptor = _sequence("Horizontal>+Jump, Jump+Vertical<")
    assert descriptor.steps == (
        ComboStep(AxisTest("Horizontal", AxisDirection.POSITIVE, 0.3), KeyStep("Jump")),
        ComboStep(KeyStep("Jump"), AxisTest("Vertical", AxisDirection.NEGATIVE, 0.3)),
    )


def test_sequence_trailing_suffix_after_key_applies_to_axis_side() -> None:
    descriptor = _sequence("W, Horizontal+Fire>", axis_names=("Horizontal", "Vertical"))
    assert descriptor.steps == (
        KeyStep("W"),
        ComboStep(AxisTest("Horizontal", AxisDirection.POSITIVE, 0.3), KeyStep("Fire")),
    )
    assert format_descriptor(descriptor) == "W, Horizontal>+Fire"


def test_combo_button_mapping_joins_two_keys() -> None:
    record = MappingRecord(descriptor="LeftShift+W", input_type=InputType.COMBO)
    assert parse_record(record).steps == (ComboStep(KeyStep("LeftShift"), KeyStep("W")),)


def test_combo_axis_mapping_takes_direction_from_record() -> None:
    record = MappingRecord(
        descriptor="Horizontal+Fire",
        category=InputCategory.AXIS,
        input_type=InputType.COMBO,
        axis1_direction=AxisDirection.NEGATIVE,
        axis1_tolerance=0.5,
    )
    assert parse_record(record).steps == (
        ComboStep(AxisTest("Horizontal", AxisDirection.NEGATIVE, 0.5), KeyStep("Fire")),
    )


@pytest.mark.parametrize("raw", ["Horizontal, Vertical+Fire", "(Horizontal, Vertical)+Fire"])
def test_combo_axis_pair_builds_diagonal_with_key(raw: str) -> None:
    record = MappingRecord(
        descriptor=raw,
        category=InputCategory.AXIS,
        input_type=InputType.COMBO,
        axis1_direction=AxisDirection.POSITIVE,
        axis2_direction=AxisDirection.NEUTRAL,
        axis1_tolerance=0.25,
    )
    assert parse_record(record).steps == (
        DiagonalAxisStep(
            first=AxisTest("Horizontal", AxisDirection.POSITIVE, 0.25),
            second=AxisTest("Vertical", AxisDirection.NEUTRAL, 0.0),
            key=KeyStep("Fire"),
        ),
    )


@pytest.mark.parametrize(
    ("input_type", "raw", "reason_fragment"),
    [
        (InputType.COMBO, "A", "missing '+'"),
        (InputType.COMBO, "A<+B", "direction suffix"),
        (InputType.COMBO, "A+B+C", "exactly two"),
        (InputType.COMBO, "A+", "missing a side"),
        (InputType.SEQUENCE, "(Horizontal, Vertical><", "unmatched '('"),
        (InputType.SEQUENCE, "Horizontal, Vertical)", "unmatched ')'"),
        (InputType.SEQUENCE, "((Horizontal, Vertical><))", "nested"),
        (InputType.SEQUENCE, "Horizontal>+Vertical<", "axis+axis"),
        (InputType.SEQUENCE, "(Horizontal, Vertical>)", "two direction suffixes"),
        (InputType.SEQUENCE, "(Horizontal<, Vertical><)", "follow the second axis"),
        (InputType.SEQUENCE, "(Horizontal, Vertical><)+Fire>", "non-axis"),
        (InputType.SEQUENCE, "(Horizontal><)", "exactly two axis names"),
        (InputType.SEQUENCE, "W, , A", "empty step"),
        (InputType.SEQUENCE, "A<>", "misplaced direction suffix"),
        (InputType.SEQUENCE, "W,A", "unexpected ','"),
        (InputType.STANDARD, "A+B", "single key or axis"),
        (InputType.STANDARD, "Horizontal>", "direction suffix"),
    ],
)
def test_malformed_descriptors_raise(input_type: InputType, raw: str, reason_fragment: str) -> None:
    with pytest.raises(MalformedDescriptorError) as exc_info:
        parse_descriptor(raw, category=InputCategory.BUTTON, input_type=input_type)
    assert reason_fragment in exc_info.value.reason
    assert exc_info.value.descriptor == raw
    assert isinstance(exc_info.value, ValueError)


def test_suffix_on_name_known_not_to_be_an_axis_is_malformed() -> None:
    with pytest.raises(MalformedDescriptorError, match="non-axis identifier 'Fire'"):
        _sequence("Fire>", axis_names=("Horizontal",))


def test_identifiers_are_case_sensitive() -> None:
    assert _sequence("w").steps != _sequence("W").steps


def test_format_descriptor_renders_canonical_text() -> None:
    raw = "W, Horizontal>, (Horizontal, Vertical<>)+Fire, A+B, Jump+Vertical="
    descriptor = _sequence(raw)
    assert format_descriptor(descriptor) == raw
    assert _sequence(format_descriptor(descriptor)) == descriptor
