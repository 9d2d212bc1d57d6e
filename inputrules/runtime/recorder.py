"""Live binding capture: the next pressed keys become a descriptor."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from inputrules.api.errors import UnsupportedOperationError
from inputrules.api.mapping import InputCategory, InputType
from inputrules.diagnostics.hub import DiagnosticHub
from inputrules.runtime.mappings import MappingTable
from inputrules.runtime.parser import COMBO_JOINER

logger = logging.getLogger(__name__)

SEQUENCE_EXAMPLE = "W, W, S, S, A, D, A, D, B, A, Return"


class BindingRecorder:
    """Capture keys for one standard or combo button mapping at a time.

    Keys are consumed in sorted order so a tick that delivers several keys
    resolves deterministically. A combo takes the first key as its left side
    and completes on the next different key.
    """

    def __init__(self, table: MappingTable, *, hub: DiagnosticHub | None = None) -> None:
        self._table = table
        self._hub = hub
        self._index: int | None = None
        self._first_key: str | None = None

    @property
    def table(self) -> MappingTable:
        return self._table

    @property
    def capturing(self) -> bool:
        return self._index is not None

    @property
    def capture_index(self) -> int | None:
        return self._index

    @property
    def draft(self) -> str:
        """Descriptor text captured so far."""
        if self._first_key is None:
            return ""
        return f"{self._first_key}{COMBO_JOINER}"

    def begin_capture(self, index: int, *, tick: int = 0) -> None:
        """Start capturing for mapping ``index``.

        Sequences must be typed by hand and axis mappings cannot be captured
        from key presses; both raise ``UnsupportedOperationError`` and leave
        any capture already in progress untouched.
        """
        mapping = self._table[index]
        record = mapping.record
        if record.input_type is InputType.SEQUENCE:
            self._reject(index, tick, f"sequence descriptors must be typed in, e.g. {SEQUENCE_EXAMPLE!r}")
        if record.category is InputCategory.AXIS:
            self._reject(index, tick, "axis mappings must name their axis by hand")
        if self._index is not None:
            logger.info("capture_restarted previous=%d index=%d", self._index, index)
        self._index = index
        self._first_key = None
        logger.info("capture_started index=%d type=%s", index, record.input_type)
        self._emit("capture.started", tick, index)

    def cancel_capture(self) -> None:
        if self._index is None:
            return
        logger.info("capture_cancelled index=%d draft=%r", self._index, self.draft)
        self._index = None
        self._first_key = None

    def on_raw_input(self, keys: Iterable[str], *, tick: int = 0) -> bool:
        """Feed keys pressed this tick. Returns whether capture completed."""
        index = self._index
        if index is None:
            return False
        if index >= len(self._table):
            logger.warning("capture_target_removed index=%d", index)
            self.cancel_capture()
            return False
        input_type = self._table[index].record.input_type
        if input_type is InputType.SEQUENCE:
            logger.warning("capture_target_became_sequence index=%d", index)
            self.cancel_capture()
            return False

        for raw_key in sorted(set(keys)):
            key = raw_key.strip()
            if not key:
                continue
            if input_type is InputType.STANDARD:
                self._complete(index, key, tick)
                return True
            if self._first_key is None:
                self._first_key = key
                logger.debug("capture_combo_left index=%d key=%s", index, key)
                continue
            if key == self._first_key:
                continue
            self._complete(index, f"{self._first_key}{COMBO_JOINER}{key}", tick)
            return True
        return False

    def _complete(self, index: int, descriptor: str, tick: int) -> None:
        self._table.set_descriptor(index, descriptor)
        self._index = None
        self._first_key = None
        logger.info("capture_completed index=%d descriptor=%r", index, descriptor)
        self._emit("capture.completed", tick, index, value=descriptor)

    def _reject(self, index: int, tick: int, reason: str) -> None:
        logger.warning("capture_rejected index=%d reason=%s", index, reason)
        self._emit("capture.rejected", tick, index, value=reason)
        raise UnsupportedOperationError(reason)

    def _emit(self, name: str, tick: int, index: int, *, value: str | None = None) -> None:
        if self._hub is None:
            return
        self._hub.emit_fast(category="capture", name=name, tick=tick, mapping_id=index, value=value)
