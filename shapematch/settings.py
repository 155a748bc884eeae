"""
Match Limits and Feature Flags.

Matching is an exhaustive backtracking search, so a pathological pattern
(several adjacent repetitions over a long array) can run for a very long
time. These limits bound a single top-level match:

- max_depth: nesting depth of sequence/array recursion
- max_steps: number of chunk attempts (0 means unbounded)

Defaults come from the environment at import time:

    SHAPEMATCH_MAX_DEPTH=200   nesting cap
    SHAPEMATCH_MAX_STEPS=0     step cap, 0 = unbounded
    SHAPEMATCH_TRACE=1         record every top-level match into trace.GLOBAL_TRACER
                               (unbounded until GLOBAL_TRACER.clear() is called)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_MAX_DEPTH = 200
DEFAULT_MAX_STEPS = 0

# Feature flag: set SHAPEMATCH_TRACE=1 to trace every top-level match
SHAPEMATCH_TRACE_ENABLED = os.environ.get("SHAPEMATCH_TRACE", "0") == "1"


@dataclass(frozen=True)
class MatchLimits:
    max_depth: int = DEFAULT_MAX_DEPTH
    max_steps: int = DEFAULT_MAX_STEPS

    def __post_init__(self) -> None:
        if not isinstance(self.max_depth, int) or self.max_depth < 1:
            raise ValueError(f"max_depth must be a positive integer, got {self.max_depth!r}")
        if not isinstance(self.max_steps, int) or self.max_steps < 0:
            raise ValueError(f"max_steps must be a non-negative integer, got {self.max_steps!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def limits_from_env() -> MatchLimits:
    """Build MatchLimits from SHAPEMATCH_MAX_DEPTH / SHAPEMATCH_MAX_STEPS."""
    try:
        return MatchLimits(
            max_depth=_env_int("SHAPEMATCH_MAX_DEPTH", DEFAULT_MAX_DEPTH),
            max_steps=_env_int("SHAPEMATCH_MAX_STEPS", DEFAULT_MAX_STEPS),
        )
    except ValueError as e:
        raise ValueError(f"invalid SHAPEMATCH_* limits in environment: {e}") from e


DEFAULT_LIMITS = limits_from_env()
