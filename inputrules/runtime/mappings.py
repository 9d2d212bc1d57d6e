"""Ordered mapping collection with parse-on-change semantics."""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Iterator
from dataclasses import dataclass, field

from inputrules.api.errors import MalformedDescriptorError
from inputrules.api.mapping import InputType, MappingRecord
from inputrules.api.steps import Descriptor, Step
from inputrules.diagnostics.hub import DiagnosticHub
from inputrules.runtime.config import DEFAULT_MAX_MAPPINGS
from inputrules.runtime.parser import STEP_DELIMITER, format_step, parse_record

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Mapping:
    """One configured rule plus the runtime state the match engine owns."""

    record: MappingRecord
    descriptor: Descriptor
    error: MalformedDescriptorError | None = None
    elapsed: float = 0.0
    progress_cursor: int = 0
    matched_steps: list[str] = field(default_factory=list)

    @property
    def inert(self) -> bool:
        return self.error is not None or self.descriptor.is_unbound

    @property
    def is_sequence(self) -> bool:
        return self.record.input_type is InputType.SEQUENCE

    @property
    def in_progress(self) -> bool:
        return self.progress_cursor > 0

    @property
    def matched_text(self) -> str:
        return STEP_DELIMITER.join(self.matched_steps)

    @property
    def expected_step(self) -> Step | None:
        if self.progress_cursor >= len(self.descriptor.steps):
            return None
        return self.descriptor.steps[self.progress_cursor]

    def advance(self) -> None:
        step = self.descriptor.steps[self.progress_cursor]
        self.matched_steps.append(format_step(step))
        self.progress_cursor += 1

    @property
    def complete(self) -> bool:
        return bool(self.descriptor.steps) and self.progress_cursor >= len(self.descriptor.steps)

    def reset_progress(self) -> None:
        self.elapsed = 0.0
        self.progress_cursor = 0
        self.matched_steps.clear()


class MappingTable:
    """Resizable, ordered mappings; each record is re-parsed when replaced."""

    def __init__(
        self,
        records: Iterable[MappingRecord] = (),
        *,
        max_mappings: int = DEFAULT_MAX_MAPPINGS,
        axis_names: Collection[str] | None = None,
        hub: DiagnosticHub | None = None,
    ) -> None:
        if max_mappings < 0:
            raise ValueError("max_mappings must be >= 0")
        self._max_mappings = int(max_mappings)
        self._axis_names = frozenset(axis_names) if axis_names is not None else None
        self._hub = hub
        self._mappings: list[Mapping] = []
        self.load_records(records)

    def __len__(self) -> int:
        return len(self._mappings)

    def __iter__(self) -> Iterator[Mapping]:
        return iter(self._mappings)

    def __getitem__(self, index: int) -> Mapping:
        return self._mappings[index]

    @property
    def max_mappings(self) -> int:
        return self._max_mappings

    def export_records(self) -> tuple[MappingRecord, ...]:
        """Return the persisted record list in table order."""
        return tuple(mapping.record for mapping in self._mappings)

    def load_records(self, records: Iterable[MappingRecord]) -> None:
        """Replace every mapping with freshly parsed records."""
        items = list(records)
        if len(items) > self._max_mappings:
            logger.warning(
                "mapping_records_truncated count=%d max=%d", len(items), self._max_mappings
            )
            items = items[: self._max_mappings]
        self._mappings = [self._build(index, record) for index, record in enumerate(items)]

    def resize(self, size: int) -> int:
        """Grow with default records or shrink from the end. Returns the new size."""
        if size < 0:
            raise ValueError("size must be >= 0")
        target = min(int(size), self._max_mappings)
        if target != size:
            logger.warning("mapping_resize_clamped requested=%d max=%d", size, self._max_mappings)
        current = len(self._mappings)
        if target < current:
            self._mappings = self._mappings[:target]
        else:
            self._mappings = self._mappings + [
                self._build(index, MappingRecord()) for index in range(current, target)
            ]
        logger.debug("mapping_resized previous=%d size=%d", current, target)
        return target

    def set_record(self, index: int, record: MappingRecord) -> Mapping:
        """Replace one record, re-parse it and reset its runtime state."""
        if not 0 <= index < len(self._mappings):
            raise IndexError(f"mapping index out of range: {index}")
        mapping = self._build(index, record)
        self._mappings[index] = mapping
        return mapping

    def set_descriptor(self, index: int, descriptor: str) -> Mapping:
        return self.set_record(index, self._mappings[index].record.with_descriptor(descriptor))

    def set_axis_names(self, axis_names: Collection[str] | None) -> None:
        """Change the axis names used for bare identifiers and re-parse all records."""
        self._axis_names = frozenset(axis_names) if axis_names is not None else None
        self.load_records(self.export_records())

    def _build(self, index: int, record: MappingRecord) -> Mapping:
        try:
            descriptor = parse_record(record, axis_names=self._axis_names)
        except MalformedDescriptorError as exc:
            logger.warning(
                "descriptor_malformed index=%d type=%s reason=%s descriptor=%r",
                index,
                record.input_type,
                exc.reason,
                record.descriptor,
            )
            if self._hub is not None:
                self._hub.emit_fast(
                    category="mapping",
                    name="mapping.malformed",
                    tick=0,
                    level="warning",
                    mapping_id=index,
                    value=record.descriptor,
                    metadata={"reason": exc.reason},
                )
            return Mapping(record=record, descriptor=Descriptor(source=record.descriptor), error=exc)
        return Mapping(record=record, descriptor=descriptor)
