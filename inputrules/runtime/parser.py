"""Descriptor grammar: raw mapping text to ordered steps.

Sequence descriptors are split into steps on ``", "`` outside parentheses.
Each step is one of::

    Key                    bare identifier
    Axis>                  identifier + direction suffix (< negative, > positive, = neutral)
    A+B                    two tests held together, at most one of them an axis
    (AxisA, AxisB<>)+Key   two axes with one suffix each, optional trailing key

Combo and standard descriptors are a single step whose axis directions and
tolerances come from the mapping record instead of suffixes. Identifier names
are never checked against a live input source here; only the shape is.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import NoReturn

from inputrules.api.errors import MalformedDescriptorError
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

STEP_DELIMITER = ", "
COMBO_JOINER = "+"

SUFFIX_DIRECTIONS: dict[str, AxisDirection] = {
    "<": AxisDirection.NEGATIVE,
    ">": AxisDirection.POSITIVE,
    "=": AxisDirection.NEUTRAL,
}
DIRECTION_SUFFIXES: dict[AxisDirection, str] = {
    direction: suffix for suffix, direction in SUFFIX_DIRECTIONS.items()
}

_RESERVED_CHARS = frozenset(",+()")


def parse_descriptor(
    raw: str,
    *,
    category: InputCategory,
    input_type: InputType,
    axis_settings: AxisSettings | None = None,
    axis_names: Collection[str] | None = None,
) -> Descriptor:
    """Parse descriptor text into steps. Raises ``MalformedDescriptorError``."""
    text = raw.strip()
    if not text or text == UNBOUND_DESCRIPTOR:
        return Descriptor(source=raw)
    parser = _DescriptorParser(
        raw,
        category=category,
        settings=axis_settings or AxisSettings(),
        axis_names=frozenset(axis_names) if axis_names is not None else None,
    )
    parser.check_parentheses(text)
    if input_type is InputType.SEQUENCE:
        steps = tuple(parser.sequence_step(fragment) for fragment in parser.split_steps(text))
    elif input_type is InputType.COMBO:
        steps = (parser.combo_mapping(text),)
    else:
        steps = (parser.standard_mapping(text),)
    return Descriptor(source=raw, steps=steps)


def parse_record(record: MappingRecord, *, axis_names: Collection[str] | None = None) -> Descriptor:
    """Parse a mapping record's descriptor with its own axis settings."""
    return parse_descriptor(
        record.descriptor,
        category=record.category,
        input_type=record.input_type,
        axis_settings=record.axis_settings,
        axis_names=axis_names,
    )


def format_step(step: Step) -> str:
    """Render one step back to canonical descriptor text."""
    if isinstance(step, KeyStep):
        return step.name
    if isinstance(step, AxisTest):
        return f"{step.name}{DIRECTION_SUFFIXES[step.direction]}"
    if isinstance(step, ComboStep):
        return f"{format_step(step.left)}{COMBO_JOINER}{format_step(step.right)}"
    group = (
        f"({step.first.name}{STEP_DELIMITER}{step.second.name}"
        f"{DIRECTION_SUFFIXES[step.first.direction]}{DIRECTION_SUFFIXES[step.second.direction]})"
    )
    if step.key is None:
        return group
    return f"{group}{COMBO_JOINER}{step.key.name}"


def format_descriptor(descriptor: Descriptor) -> str:
    if descriptor.is_unbound:
        return UNBOUND_DESCRIPTOR
    return STEP_DELIMITER.join(format_step(step) for step in descriptor.steps)


class _DescriptorParser:
    def __init__(
        self,
        raw: str,
        *,
        category: InputCategory,
        settings: AxisSettings,
        axis_names: frozenset[str] | None,
    ) -> None:
        self._raw = raw
        self._category = category
        self._settings = settings
        self._axis_names = axis_names

    def check_parentheses(self, text: str) -> None:
        depth = 0
        for char in text:
            if char == "(":
                depth += 1
                if depth > 1:
                    self._fail("nested '(' groups")
            elif char == ")":
                depth -= 1
                if depth < 0:
                    self._fail("unmatched ')'")
        if depth:
            self._fail("unmatched '('")

    def split_steps(self, text: str) -> list[str]:
        fragments: list[str] = []
        depth = 0
        start = 0
        index = 0
        while index < len(text):
            char = text[index]
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
            elif depth == 0 and text.startswith(STEP_DELIMITER, index):
                fragments.append(text[start:index])
                index += len(STEP_DELIMITER)
                start = index
                continue
            index += 1
        fragments.append(text[start:])
        stripped = [fragment.strip() for fragment in fragments]
        if any(not fragment for fragment in stripped):
            self._fail("empty step")
        return stripped

    def sequence_step(self, fragment: str) -> Step:
        if fragment.startswith("("):
            return self._diagonal_group(fragment)
        if "(" in fragment or ")" in fragment:
            self._fail(f"unexpected parenthesis in step {fragment!r}")
        if COMBO_JOINER in fragment:
            left_token, right_token = self._split_combo(fragment)
            left_name, left_direction = self._atom(left_token)
            right_name, right_direction = self._atom(right_token)
            if (
                right_direction is not None
                and left_direction is None
                and self._is_known_axis(left_name)
                and not self._is_known_axis(right_name)
            ):
                # "Axis+Key>": a trailing suffix belongs to the axis side.
                left_direction, right_direction = right_direction, None
            left = self._suffixed_side(left_name, left_direction)
            right = self._suffixed_side(right_name, right_direction)
            if isinstance(left, AxisTest) and isinstance(right, AxisTest):
                self._fail("axis+axis combo must use the '(axisA, axisB<>)' form")
            return ComboStep(left=left, right=right)
        return self._suffixed_side(*self._atom(fragment))

    def combo_mapping(self, text: str) -> Step:
        if COMBO_JOINER not in text:
            self._fail("combo descriptor is missing '+'")
        if any(suffix in text for suffix in SUFFIX_DIRECTIONS):
            self._fail("direction suffix in combo descriptor; directions come from the mapping")
        left_token, right_token = self._split_combo(text)
        if "(" in right_token or ")" in right_token:
            self._fail("unexpected parenthesis after '+'")
        if left_token.startswith("(") and left_token.endswith(")"):
            left_token = left_token[1:-1].strip()
            if STEP_DELIMITER not in left_token:
                self._fail("parenthesized group needs two axis names")
        elif "(" in left_token or ")" in left_token:
            self._fail(f"unexpected parenthesis in {left_token!r}")

        settings = self._settings
        if STEP_DELIMITER in left_token:
            first_name, second_name = self._axis_pair(left_token)
            return DiagonalAxisStep(
                first=AxisTest(first_name, settings.axis1_direction, settings.axis1_tolerance),
                second=AxisTest(second_name, settings.axis2_direction, settings.axis2_tolerance),
                key=self._key_side(right_token),
            )

        left_name, _ = self._atom(left_token)
        right_name, _ = self._atom(right_token)
        if self._axis_names is not None:
            left_is_axis = left_name in self._axis_names
        else:
            left_is_axis = self._category is InputCategory.AXIS
        right_is_axis = self._is_known_axis(right_name)
        if left_is_axis and right_is_axis:
            self._fail("axis+axis combo must use the 'axisA, axisB+key' form")
        left: KeyStep | AxisTest = KeyStep(left_name)
        right: KeyStep | AxisTest = KeyStep(right_name)
        if left_is_axis:
            left = AxisTest(left_name, settings.axis1_direction, settings.axis1_tolerance)
        elif right_is_axis:
            right = AxisTest(right_name, settings.axis1_direction, settings.axis1_tolerance)
        return ComboStep(left=left, right=right)

    def standard_mapping(self, text: str) -> Step:
        if any(char in _RESERVED_CHARS for char in text):
            self._fail("standard descriptor takes a single key or axis name")
        name, direction = self._atom(text)
        if direction is not None:
            self._fail("direction suffix in standard descriptor")
        if self._category is InputCategory.AXIS or self._is_known_axis(name):
            return AxisTest(name)
        return KeyStep(name)

    def _diagonal_group(self, fragment: str) -> DiagonalAxisStep:
        close = fragment.find(")")
        if close == -1:
            self._fail("unmatched '('")
        inner = fragment[1:close]
        tail = fragment[close + 1 :].strip()
        key: KeyStep | None = None
        if tail:
            if not tail.startswith(COMBO_JOINER):
                self._fail(f"unexpected {tail!r} after diagonal group")
            key = self._key_side(tail[len(COMBO_JOINER) :])
        if len(inner) < 2 or inner[-1] not in SUFFIX_DIRECTIONS or inner[-2] not in SUFFIX_DIRECTIONS:
            self._fail("diagonal group needs two direction suffixes")
        first_direction = SUFFIX_DIRECTIONS[inner[-2]]
        second_direction = SUFFIX_DIRECTIONS[inner[-1]]
        body = inner[:-2]
        if COMBO_JOINER in body:
            if key is not None:
                self._fail("diagonal group has more than one key")
            body, key_token = self._split_combo(body)
            key = self._key_side(key_token)
        first_name, second_name = self._axis_pair(body)
        settings = self._settings
        return DiagonalAxisStep(
            first=AxisTest(first_name, first_direction, settings.axis1_tolerance),
            second=AxisTest(second_name, second_direction, settings.axis2_tolerance),
            key=key,
        )

    def _axis_pair(self, body: str) -> tuple[str, str]:
        parts = body.split(STEP_DELIMITER)
        if len(parts) != 2:
            self._fail("diagonal group needs exactly two axis names")
        names: list[str] = []
        for part in parts:
            name, direction = self._atom(part)
            if direction is not None:
                self._fail("diagonal direction suffixes follow the second axis name")
            self._require_axis(name)
            names.append(name)
        return names[0], names[1]

    def _suffixed_side(self, name: str, direction: AxisDirection | None) -> KeyStep | AxisTest:
        if direction is not None:
            self._require_axis(name)
            return AxisTest(name, direction, self._settings.axis1_tolerance)
        if self._is_known_axis(name):
            return AxisTest(name)
        return KeyStep(name)

    def _key_side(self, token: str) -> KeyStep:
        name, direction = self._atom(token)
        if direction is not None:
            self._fail(f"direction suffix on non-axis identifier {name!r}")
        if self._is_known_axis(name):
            self._fail(f"expected a key, got axis {name!r}")
        return KeyStep(name)

    def _split_combo(self, text: str) -> tuple[str, str]:
        parts = text.split(COMBO_JOINER)
        if len(parts) != 2:
            self._fail("a combo joins exactly two tests")
        left, right = parts[0].strip(), parts[1].strip()
        if not left or not right:
            self._fail("combo is missing a side around '+'")
        return left, right

    def _atom(self, token: str) -> tuple[str, AxisDirection | None]:
        text = token.strip()
        if not text:
            self._fail("empty identifier")
        direction: AxisDirection | None = None
        if text[-1] in SUFFIX_DIRECTIONS:
            direction = SUFFIX_DIRECTIONS[text[-1]]
            text = text[:-1].rstrip()
        if not text:
            self._fail("direction suffix without identifier")
        for char in text:
            if char in SUFFIX_DIRECTIONS:
                self._fail(f"misplaced direction suffix in {token.strip()!r}")
            if char in _RESERVED_CHARS:
                self._fail(f"unexpected {char!r} in identifier {token.strip()!r}")
        return text, direction

    def _require_axis(self, name: str) -> None:
        if self._axis_names is not None and name not in self._axis_names:
            self._fail(f"direction suffix on non-axis identifier {name!r}")

    def _is_known_axis(self, name: str) -> bool:
        return self._axis_names is not None and name in self._axis_names

    def _fail(self, reason: str) -> NoReturn:
        raise MalformedDescriptorError(self._raw, reason)
