"""Diagnostics channel package."""

from inputrules.diagnostics.event import DiagnosticEvent
from inputrules.diagnostics.hub import DiagnosticHub
from inputrules.diagnostics.json_codec import dumps_bytes, dumps_text, loads
from inputrules.diagnostics.ring_buffer import RingBuffer

__all__ = [
    "DiagnosticEvent",
    "DiagnosticHub",
    "RingBuffer",
    "dumps_bytes",
    "dumps_text",
    "loads",
]
