"""Atomic key/axis tests against the current tick's input source."""

from __future__ import annotations

import logging

from inputrules.api.input_source import InputSource
from inputrules.api.mapping import AxisDirection
from inputrules.api.steps import AxisTest, ComboStep, KeyStep, Step
from inputrules.diagnostics.hub import DiagnosticHub

logger = logging.getLogger(__name__)


class AtomicEvaluator:
    """Evaluate steps for one tick at a time.

    Unknown names are soft failures: the test reports ``False`` (or ``0.0``
    for samples) and the name is logged once, then again only after it has
    resolved and gone missing again. Names are re-checked every tick.
    """

    def __init__(
        self,
        *,
        hub: DiagnosticHub | None = None,
        neutral_epsilon: float = 0.0,
    ) -> None:
        if neutral_epsilon < 0.0:
            raise ValueError("neutral_epsilon must be >= 0")
        self._hub = hub
        self._neutral_epsilon = float(neutral_epsilon)
        self._source: InputSource | None = None
        self._tick = 0
        self._unknown: set[tuple[str, str]] = set()

    @property
    def neutral_epsilon(self) -> float:
        return self._neutral_epsilon

    @property
    def unknown_identifiers(self) -> frozenset[tuple[str, str]]:
        return frozenset(self._unknown)

    def begin_tick(self, source: InputSource, *, tick: int) -> None:
        """Bind the snapshot every evaluation in this tick reads from."""
        self._source = source
        self._tick = int(tick)

    def eval_key(self, name: str, *, edge_only: bool) -> bool:
        source = self._require_source()
        if not self._resolve("key", name, source.key_exists(name)):
            return False
        if edge_only:
            return source.is_key_just_pressed(name)
        return source.is_key_held(name)

    def sample_axis(self, name: str) -> float:
        source = self._require_source()
        if not self._resolve("axis", name, source.axis_exists(name)):
            return 0.0
        return float(source.axis_value(name))

    def eval_axis(self, test: AxisTest) -> bool:
        source = self._require_source()
        if not self._resolve("axis", test.name, source.axis_exists(test.name)):
            return False
        return axis_matches(
            float(source.axis_value(test.name)),
            test.direction,
            test.tolerance,
            neutral_epsilon=self._neutral_epsilon,
        )

    def eval_step(
        self,
        step: Step,
        *,
        edge_only: bool,
        bare_direction: AxisDirection = AxisDirection.NEUTRAL,
        bare_tolerance: float = 0.0,
    ) -> bool:
        """Evaluate one parsed step.

        Bare identifiers are resolved against the source every tick: a name
        that is not a key but is an axis is tested as an axis with
        ``bare_direction`` and ``bare_tolerance``. Compound steps hold at the
        level (keys held, axes in range). With ``edge_only`` every key part
        must also have gone down this tick; parts without keys stay
        level-only.
        """
        if isinstance(step, KeyStep):
            kind = self.classify(step.name)
            if kind == "axis":
                return self.eval_axis(AxisTest(step.name, bare_direction, bare_tolerance))
            if kind is None:
                return False
            source = self._require_source()
            if edge_only:
                return source.is_key_just_pressed(step.name)
            return source.is_key_held(step.name)
        if isinstance(step, AxisTest):
            return self.eval_axis(step)
        parts: tuple[KeyStep | AxisTest, ...]
        if isinstance(step, ComboStep):
            parts = self._orient_combo(step)
        elif step.key is None:
            parts = (step.first, step.second)
        else:
            parts = (step.first, step.second, step.key)
        for part in parts:
            if isinstance(part, KeyStep):
                held = self.eval_step(
                    part,
                    edge_only=edge_only,
                    bare_direction=bare_direction,
                    bare_tolerance=bare_tolerance,
                )
            else:
                held = self.eval_axis(part)
            if not held:
                return False
        return True

    def expects_key(self, step: Step) -> bool:
        """Return whether the step is a bare name that does not resolve to an axis."""
        if not isinstance(step, KeyStep):
            return False
        source = self._require_source()
        return source.key_exists(step.name) or not source.axis_exists(step.name)

    def has_axis(self, name: str) -> bool:
        source = self._require_source()
        return self._resolve("axis", name, source.axis_exists(name))

    def _orient_combo(self, step: ComboStep) -> tuple[KeyStep | AxisTest, KeyStep | AxisTest]:
        # "Axis+Key>" parsed without axis names carries the suffix on the key side.
        left, right = step.left, step.right
        if isinstance(left, KeyStep) and isinstance(right, AxisTest):
            source = self._require_source()
            if (
                not source.axis_exists(right.name)
                and source.key_exists(right.name)
                and source.axis_exists(left.name)
                and not source.key_exists(left.name)
            ):
                return AxisTest(left.name, right.direction, right.tolerance), KeyStep(right.name)
        return left, right

    def classify(self, name: str) -> str | None:
        """Resolve a bare identifier: ``"key"`` first, then ``"axis"``, else ``None``."""
        source = self._require_source()
        if source.key_exists(name):
            self._resolve("identifier", name, True)
            return "key"
        if source.axis_exists(name):
            self._resolve("identifier", name, True)
            return "axis"
        self._resolve("identifier", name, False)
        return None

    def _resolve(self, kind: str, name: str, exists: bool) -> bool:
        marker = (kind, name)
        if exists:
            if marker in self._unknown:
                self._unknown.discard(marker)
                logger.info("identifier_resolved kind=%s name=%s", kind, name)
            return True
        if marker not in self._unknown:
            self._unknown.add(marker)
            logger.warning(
                "identifier_unknown kind=%s name=%s; check key names and declared axes",
                kind,
                name,
            )
            if self._hub is not None:
                self._hub.emit_fast(
                    category="mapping",
                    name="mapping.unknown_identifier",
                    tick=self._tick,
                    level="warning",
                    value=name,
                    metadata={"kind": kind},
                )
        return False

    def _require_source(self) -> InputSource:
        if self._source is None:
            raise RuntimeError("begin_tick() must be called before evaluating steps")
        return self._source


def axis_matches(
    value: float,
    direction: AxisDirection,
    tolerance: float,
    *,
    neutral_epsilon: float = 0.0,
) -> bool:
    """Return whether a sampled axis value satisfies direction and tolerance."""
    if direction is AxisDirection.NEUTRAL:
        return abs(value) <= neutral_epsilon
    if value == 0.0 or abs(value) < tolerance:
        return False
    if direction is AxisDirection.POSITIVE:
        return value > 0.0
    return value < 0.0
