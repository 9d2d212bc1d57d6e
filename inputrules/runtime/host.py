"""Host-facing facade: one object per mapping set, updated once per frame."""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable

from inputrules.api.action_dispatch import ActionSink
from inputrules.api.input_source import InputSource
from inputrules.api.mapping import MappingRecord
from inputrules.diagnostics.hub import DiagnosticHub
from inputrules.runtime.config import InputRulesConfig, load_input_config
from inputrules.runtime.engine import MatchEngine, TickReport
from inputrules.runtime.evaluator import AtomicEvaluator
from inputrules.runtime.mappings import MappingTable
from inputrules.runtime.recorder import BindingRecorder
from inputrules.runtime.time import FrameClock


class InputRuleHost:
    """Own the mapping table, match engine, recorder and frame clock."""

    def __init__(
        self,
        records: Iterable[MappingRecord] = (),
        *,
        sink: ActionSink,
        config: InputRulesConfig | None = None,
        axis_names: Collection[str] | None = None,
        hub: DiagnosticHub | None = None,
        time_source: Callable[[], float] | None = None,
    ) -> None:
        self._config = config or load_input_config()
        self._hub = hub or DiagnosticHub(
            capacity=self._config.diagnostics_buffer_cap,
            enabled=self._config.diagnostics_enabled,
        )
        self._table = MappingTable(
            records,
            max_mappings=self._config.max_mappings,
            axis_names=axis_names,
            hub=self._hub,
        )
        self._recorder = BindingRecorder(self._table, hub=self._hub)
        self._engine = MatchEngine(
            self._table,
            sink=sink,
            evaluator=AtomicEvaluator(hub=self._hub, neutral_epsilon=self._config.neutral_epsilon),
            recorder=self._recorder,
            hub=self._hub,
            trace_enabled=self._config.trace_enabled,
        )
        self._clock = FrameClock(
            time_source=time_source,
            max_delta_seconds=self._config.max_delta_seconds,
        )

    @property
    def config(self) -> InputRulesConfig:
        return self._config

    @property
    def hub(self) -> DiagnosticHub:
        return self._hub

    @property
    def table(self) -> MappingTable:
        return self._table

    @property
    def recorder(self) -> BindingRecorder:
        return self._recorder

    @property
    def engine(self) -> MatchEngine:
        return self._engine

    def update(self, source: InputSource) -> TickReport:
        """Advance the frame clock and run one engine tick."""
        frame = self._clock.next()
        return self._engine.tick(
            source,
            delta_seconds=frame.delta_seconds,
            frame_index=frame.frame_index,
        )

    def begin_capture(self, index: int) -> None:
        self._recorder.begin_capture(index)

    def export_records(self) -> tuple[MappingRecord, ...]:
        return self._table.export_records()

    def load_records(self, records: Iterable[MappingRecord]) -> None:
        self._recorder.cancel_capture()
        self._table.load_records(records)
