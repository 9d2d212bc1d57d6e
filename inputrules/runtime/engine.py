"""Per-tick matching of mappings against the input source."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from inputrules.api.action_dispatch import ActionSink
from inputrules.api.input_source import InputSource
from inputrules.api.mapping import InputType
from inputrules.api.steps import AxisTest, KeyStep, Step
from inputrules.diagnostics.hub import DiagnosticHub
from inputrules.runtime.errors import RECOVERABLE_RUNTIME_ERRORS, log_recoverable
from inputrules.runtime.evaluator import AtomicEvaluator
from inputrules.runtime.mappings import Mapping, MappingTable
from inputrules.runtime.recorder import BindingRecorder

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MappingFire:
    """One action invocation; axis mappings carry the sampled value."""

    mapping_id: int
    value: float | None = None


@dataclass(frozen=True, slots=True)
class TickReport:
    """Outcome of one engine tick."""

    frame_index: int
    fired: tuple[MappingFire, ...] = ()
    faulted: tuple[int, ...] = ()
    captured: bool = False

    def fired_ids(self) -> tuple[int, ...]:
        return tuple(fire.mapping_id for fire in self.fired)


class MatchEngine:
    """Evaluate every mapping once per tick and forward fires to the sink.

    Standard and combo mappings are pure functions of the current tick.
    Sequence mappings keep a cursor into their steps and an elapsed timer;
    only the expected step is tested each tick, so at most one step advances
    per tick. A timeout or a wrong key press returns the sequence to idle.
    """

    def __init__(
        self,
        table: MappingTable,
        *,
        sink: ActionSink,
        evaluator: AtomicEvaluator | None = None,
        recorder: BindingRecorder | None = None,
        hub: DiagnosticHub | None = None,
        trace_enabled: bool = False,
    ) -> None:
        self._table = table
        self._sink = sink
        self._hub = hub
        self._evaluator = evaluator or AtomicEvaluator(hub=hub)
        self._recorder = recorder
        self._trace_enabled = bool(trace_enabled)
        self._frame_index = -1

    @property
    def table(self) -> MappingTable:
        return self._table

    @property
    def evaluator(self) -> AtomicEvaluator:
        return self._evaluator

    def tick(
        self,
        source: InputSource,
        *,
        delta_seconds: float,
        frame_index: int | None = None,
    ) -> TickReport:
        """Run one tick. Faults in one mapping never stop the others."""
        if delta_seconds < 0.0:
            raise ValueError("delta_seconds must be >= 0")
        self._frame_index = self._frame_index + 1 if frame_index is None else int(frame_index)
        tick = self._frame_index

        if self._recorder is not None and self._recorder.capturing:
            keys = tuple(source.just_pressed_keys())
            if keys:
                self._recorder.on_raw_input(keys, tick=tick)
                return TickReport(frame_index=tick, captured=True)

        self._evaluator.begin_tick(source, tick=tick)
        fired: list[MappingFire] = []
        faulted: list[int] = []
        for index, mapping in enumerate(self._table):
            if mapping.inert:
                continue
            try:
                fire = self._evaluate(index, mapping, source, delta_seconds, tick)
                if fire is None:
                    continue
                fired.append(fire)
                self._sink.invoke(fire.mapping_id, fire.value)
            except RECOVERABLE_RUNTIME_ERRORS as exc:
                log_recoverable(
                    logger,
                    "mapping_fault index=%d descriptor=%r",
                    index,
                    mapping.record.descriptor,
                    level=logging.WARNING,
                )
                mapping.reset_progress()
                faulted.append(index)
                self._emit(
                    "mapping.fault",
                    tick,
                    index,
                    level="error",
                    value=type(exc).__name__,
                    metadata={"error": str(exc)},
                )
        return TickReport(frame_index=tick, fired=tuple(fired), faulted=tuple(faulted))

    def reset_sequences(self) -> None:
        """Return every sequence mapping to idle."""
        for mapping in self._table:
            mapping.reset_progress()

    def _evaluate(
        self,
        index: int,
        mapping: Mapping,
        source: InputSource,
        delta_seconds: float,
        tick: int,
    ) -> MappingFire | None:
        input_type = mapping.record.input_type
        if input_type is InputType.SEQUENCE:
            return self._evaluate_sequence(index, mapping, source, delta_seconds, tick)
        step = mapping.descriptor.steps[0]
        if input_type is InputType.COMBO:
            record = mapping.record
            matched = self._evaluator.eval_step(
                step,
                edge_only=False,
                bare_direction=record.axis1_direction,
                bare_tolerance=record.axis1_tolerance,
            )
            return MappingFire(index) if matched else None
        return self._evaluate_standard(index, step)

    def _evaluate_standard(self, index: int, step: Step) -> MappingFire | None:
        evaluator = self._evaluator
        if isinstance(step, AxisTest):
            if not evaluator.has_axis(step.name):
                return None
            return MappingFire(index, evaluator.sample_axis(step.name))
        if not isinstance(step, KeyStep):
            raise TypeError(f"standard mapping holds unexpected step {step!r}")
        kind = evaluator.classify(step.name)
        if kind == "key":
            return MappingFire(index) if evaluator.eval_key(step.name, edge_only=False) else None
        if kind == "axis":
            return MappingFire(index, evaluator.sample_axis(step.name))
        return None

    def _evaluate_sequence(
        self,
        index: int,
        mapping: Mapping,
        source: InputSource,
        delta_seconds: float,
        tick: int,
    ) -> MappingFire | None:
        time_limit = mapping.record.time_limit
        if mapping.in_progress:
            mapping.elapsed += delta_seconds
            if time_limit > 0.0 and mapping.elapsed > time_limit:
                self._reset_sequence(index, mapping, tick, reason="timeout")
                return None

        step = mapping.expected_step
        if step is None:
            mapping.reset_progress()
            return None
        if self._evaluator.eval_step(step, edge_only=True):
            mapping.advance()
            if self._trace_enabled:
                logger.debug(
                    "sequence_progress index=%d cursor=%d/%d matched=%r",
                    index,
                    mapping.progress_cursor,
                    len(mapping.descriptor),
                    mapping.matched_text,
                )
            if not mapping.complete:
                self._emit("sequence.advanced", tick, index, value=mapping.progress_cursor)
                return None
            logger.info("sequence_completed index=%d descriptor=%r", index, mapping.record.descriptor)
            self._emit("sequence.completed", tick, index, value=mapping.matched_text)
            mapping.reset_progress()
            return MappingFire(index)

        if (
            mapping.in_progress
            and source.is_any_key_just_pressed()
            and self._evaluator.expects_key(step)
        ):
            self._reset_sequence(index, mapping, tick, reason="interrupted")
        return None

    def _reset_sequence(self, index: int, mapping: Mapping, tick: int, *, reason: str) -> None:
        logger.debug(
            "sequence_reset index=%d reason=%s cursor=%d elapsed=%.3f",
            index,
            reason,
            mapping.progress_cursor,
            mapping.elapsed,
        )
        self._emit("sequence.reset", tick, index, value=reason)
        mapping.reset_progress()

    def _emit(
        self,
        name: str,
        tick: int,
        mapping_id: int,
        *,
        level: str = "info",
        value: float | int | str | bool | None = None,
        metadata: dict[str, str] | None = None,
    ) -> None:
        if self._hub is None:
            return
        category = name.split(".", 1)[0]
        self._hub.emit_fast(
            category=category,
            name=name,
            tick=tick,
            level=level,
            mapping_id=mapping_id,
            value=value,
            metadata=metadata,
        )
