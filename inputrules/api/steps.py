"""Parsed descriptor step types."""

from __future__ import annotations

from dataclasses import dataclass

from inputrules.api.mapping import AxisDirection


@dataclass(frozen=True, slots=True)
class KeyStep:
    """Exact key or button identifier."""

    name: str


@dataclass(frozen=True, slots=True)
class AxisTest:
    """Axis name with required direction and magnitude threshold."""

    name: str
    direction: AxisDirection = AxisDirection.NEUTRAL
    tolerance: float = 0.0


@dataclass(frozen=True, slots=True)
class ComboStep:
    """Two tests that must hold in the same tick."""

    left: KeyStep | AxisTest
    right: KeyStep | AxisTest


@dataclass(frozen=True, slots=True)
class DiagonalAxisStep:
    """Two axis tests held together, optionally with a key."""

    first: AxisTest
    second: AxisTest
    key: KeyStep | None = None


Step = KeyStep | AxisTest | ComboStep | DiagonalAxisStep


@dataclass(frozen=True, slots=True)
class Descriptor:
    """Ordered steps parsed from one descriptor string."""

    source: str
    steps: tuple[Step, ...] = ()

    @property
    def is_unbound(self) -> bool:
        return not self.steps

    def __len__(self) -> int:
        return len(self.steps)


__all__ = ["AxisTest", "ComboStep", "Descriptor", "DiagonalAxisStep", "KeyStep", "Step"]
