"""Mapping record contracts shared by the editor boundary and the runtime."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any

UNBOUND_DESCRIPTOR = "None"


class InputCategory(StrEnum):
    """Shape of the physical input a mapping listens to."""

    BUTTON = "BUTTON"
    AXIS = "AXIS"


class InputType(StrEnum):
    """How a mapping's descriptor is matched each tick."""

    STANDARD = "STANDARD"
    COMBO = "COMBO"
    SEQUENCE = "SEQUENCE"


class AxisDirection(StrEnum):
    """Required sign of an axis test."""

    NEUTRAL = "NEUTRAL"
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"


@dataclass(frozen=True, slots=True)
class AxisSettings:
    """Per-mapping axis direction and tolerance fields."""

    axis1_direction: AxisDirection = AxisDirection.NEUTRAL
    axis2_direction: AxisDirection = AxisDirection.NEUTRAL
    axis1_tolerance: float = 0.0
    axis2_tolerance: float = 0.0


@dataclass(frozen=True, slots=True)
class MappingRecord:
    """Persisted configuration of one input rule.

    Records are plain values: editing a mapping means replacing its record,
    never mutating it in place. ``time_limit <= 0`` leaves sequences unbounded.
    """

    descriptor: str = UNBOUND_DESCRIPTOR
    category: InputCategory = InputCategory.BUTTON
    input_type: InputType = InputType.STANDARD
    axis1_direction: AxisDirection = AxisDirection.NEUTRAL
    axis2_direction: AxisDirection = AxisDirection.NEUTRAL
    axis1_tolerance: float = 0.0
    axis2_tolerance: float = 0.0
    time_limit: float = 0.0

    @property
    def axis_settings(self) -> AxisSettings:
        return AxisSettings(
            axis1_direction=self.axis1_direction,
            axis2_direction=self.axis2_direction,
            axis1_tolerance=self.axis1_tolerance,
            axis2_tolerance=self.axis2_tolerance,
        )

    def with_descriptor(self, descriptor: str) -> MappingRecord:
        """Return a copy bound to another descriptor."""
        return replace(self, descriptor=descriptor)

    def to_dict(self) -> dict[str, Any]:
        return {
            "descriptor": self.descriptor,
            "category": self.category.value,
            "type": self.input_type.value,
            "axis1_dir": self.axis1_direction.value,
            "axis2_dir": self.axis2_direction.value,
            "axis1_tolerance": self.axis1_tolerance,
            "axis2_tolerance": self.axis2_tolerance,
            "time_limit": self.time_limit,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> MappingRecord:
        """Build a record from plain data, clamping tolerances to [0, 1]."""
        descriptor = payload.get("descriptor", UNBOUND_DESCRIPTOR)
        return cls(
            descriptor=str(descriptor) if descriptor is not None else UNBOUND_DESCRIPTOR,
            category=InputCategory(str(payload.get("category", InputCategory.BUTTON)).upper()),
            input_type=InputType(str(payload.get("type", InputType.STANDARD)).upper()),
            axis1_direction=AxisDirection(
                str(payload.get("axis1_dir", AxisDirection.NEUTRAL)).upper()
            ),
            axis2_direction=AxisDirection(
                str(payload.get("axis2_dir", AxisDirection.NEUTRAL)).upper()
            ),
            axis1_tolerance=_clamp_unit(payload.get("axis1_tolerance", 0.0)),
            axis2_tolerance=_clamp_unit(payload.get("axis2_tolerance", 0.0)),
            time_limit=float(payload.get("time_limit", 0.0)),
        )


def _clamp_unit(raw: Any) -> float:
    return min(1.0, max(0.0, float(raw)))


__all__ = [
    "UNBOUND_DESCRIPTOR",
    "AxisDirection",
    "AxisSettings",
    "InputCategory",
    "InputType",
    "MappingRecord",
]
