"""Centralized runtime configuration for input rule evaluation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_MAX_MAPPINGS = 50


@dataclass(frozen=True, slots=True)
class InputRulesConfig:
    max_mappings: int = DEFAULT_MAX_MAPPINGS
    neutral_epsilon: float = 0.0
    max_delta_seconds: float = 0.25
    trace_enabled: bool = False
    diagnostics_enabled: bool = True
    diagnostics_buffer_cap: int = 2_000


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        value = int(default)
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = int(default)
    if minimum is None:
        return value
    return max(int(minimum), value)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def load_input_config(*, env: Mapping[str, str] | None = None) -> InputRulesConfig:
    """Load immutable configuration from env vars (or an explicit mapping)."""
    return InputRulesConfig(
        max_mappings=_int("INPUTRULES_MAX_MAPPINGS", DEFAULT_MAX_MAPPINGS, minimum=0, env=env),
        neutral_epsilon=_float("INPUTRULES_AXIS_NEUTRAL_EPSILON", 0.0, minimum=0.0, env=env),
        max_delta_seconds=_float("INPUTRULES_MAX_DELTA_SECONDS", 0.25, minimum=0.0, env=env),
        trace_enabled=_flag("INPUTRULES_TRACE", False, env=env),
        diagnostics_enabled=_flag("INPUTRULES_DIAGNOSTICS_ENABLED", True, env=env),
        diagnostics_buffer_cap=_int(
            "INPUTRULES_DIAGNOSTICS_BUFFER_CAP", 2_000, minimum=100, env=env
        ),
    )


def resolve_log_level_name(
    default: str = "INFO", *, env: Mapping[str, str] | None = None
) -> str:
    """Resolve log level with package-prefixed override."""
    value = _raw("INPUTRULES_LOG_LEVEL", env=env)
    if value is None:
        value = _raw("LOG_LEVEL", env=env) or default
    return value.strip().upper()
