"""Public error types."""

from __future__ import annotations


class InputRulesError(Exception):
    """Base class for input rule failures."""


class MalformedDescriptorError(InputRulesError, ValueError):
    """Descriptor text violates the descriptor grammar."""

    def __init__(self, descriptor: str, reason: str) -> None:
        super().__init__(f"malformed descriptor {descriptor!r}: {reason}")
        self.descriptor = descriptor
        self.reason = reason


class UnsupportedOperationError(InputRulesError, RuntimeError):
    """Operation is not available for the mapping's type."""


__all__ = ["InputRulesError", "MalformedDescriptorError", "UnsupportedOperationError"]
