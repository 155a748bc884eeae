"""
Pattern Data Model and Primitive Matchers.

A Pattern is a frozen value describing what a candidate must look like.
Every kind implements one operation:

    bind(value, bindings, search) -> dict | NO_MATCH

`bindings` is the dict of named captures collected so far. A matcher
never mutates it: on success it returns either the same dict (nothing
captured) or a new dict with its capture added; on failure it returns
NO_MATCH. Captures made on a search branch that is later abandoned are
therefore simply dropped along with that branch.

The sequence kind (the backtracking search) lives in shapematch.sequence;
the raw-value compiler and the constructor functions live in
shapematch.compiler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from shapematch import settings
from shapematch.trace import MatchTracer, default_tracer
from shapematch.values import (
    Value,
    is_sequence,
    kind_name,
    strict_equal,
)


Bindings = Dict[str, Value]

GREEDY = "greedy"
LAZY = "lazy"
REPEAT_MODES = (GREEDY, LAZY)


# =============================================================================
# Outcome channels
# =============================================================================


# Sentinel for no match (not a valid bindings dict, so unambiguous)
class _NoMatch:
    """Sentinel indicating pattern did not match."""
    __slots__ = ()

    def __repr__(self) -> str:
        return "NO_MATCH"


NO_MATCH = _NoMatch()


class PatternUsageError(ValueError):
    """A pattern or dispatch table was built incorrectly (caller mistake)."""


class MatchBudgetExceeded(RuntimeError):
    """A single match ran past its configured depth or step limit."""


# =============================================================================
# Search state
# =============================================================================


class Search:
    """
    Per-call bookkeeping for one top-level match.

    Holds the limits, the optional tracer and the step/depth counters.
    Bindings are NOT kept here; they travel as values through bind().
    """

    __slots__ = ("limits", "tracer", "steps", "depth")

    def __init__(self, limits: settings.MatchLimits, tracer: Optional[MatchTracer] = None):
        self.limits = limits
        self.tracer = tracer
        self.steps = 0
        self.depth = 0

    def step(self) -> None:
        self.steps += 1
        if self.limits.max_steps and self.steps > self.limits.max_steps:
            raise MatchBudgetExceeded(
                f"match exceeded max_steps={self.limits.max_steps}"
            )

    def enter(self) -> None:
        self.depth += 1
        if self.depth > self.limits.max_depth:
            raise MatchBudgetExceeded(
                f"match exceeded max_depth={self.limits.max_depth}"
            )

    def leave(self) -> None:
        self.depth -= 1


# =============================================================================
# Pattern base
# =============================================================================


class Pattern:
    """Base class of every compiled pattern."""

    __slots__ = ()

    def bind(self, value: Value, bindings: Bindings, search: Search) -> Bindings | _NoMatch:
        raise NotImplementedError

    def match(
        self,
        candidate: Value,
        *,
        tracer: Optional[MatchTracer] = None,
        limits: Optional[settings.MatchLimits] = None,
    ) -> Bindings | _NoMatch:
        """
        Match candidate against this pattern from a fresh, empty binding context.

        Returns:
            Dict of named captures if the candidate matches, NO_MATCH otherwise.

        Raises:
            MatchBudgetExceeded: If the search runs past `limits`.
        """
        if tracer is None:
            tracer = default_tracer()
        search = Search(limits or settings.DEFAULT_LIMITS, tracer)
        if tracer is not None:
            tracer.start()
        result: Bindings | _NoMatch = NO_MATCH
        try:
            result = self.bind(candidate, {}, search)
        finally:
            # match.end is recorded even when a limit aborts the search
            if tracer is not None:
                tracer.end(ok=result is not NO_MATCH, steps=search.steps)
        return result

    def __call__(self, candidate: Value, **kwargs: Any) -> Bindings | _NoMatch:
        return self.match(candidate, **kwargs)


# =============================================================================
# Primitive matchers
# =============================================================================


@dataclass(frozen=True)
class Wildcard(Pattern):
    """Matches any single value."""

    def bind(self, value, bindings, search):
        return bindings


@dataclass(frozen=True)
class Literal(Pattern):
    """Matches a value equal to `value` with the same type (no coercion)."""

    value: Any

    def bind(self, value, bindings, search):
        return bindings if strict_equal(self.value, value) else NO_MATCH


# Kinds a TypeCheck may name (a subset of kind_name() results)
TYPE_CHECK_KINDS = ("number", "string", "boolean")


@dataclass(frozen=True)
class TypeCheck(Pattern):
    """Matches any value of a primitive kind: number, string or boolean."""

    kind: str

    def __post_init__(self) -> None:
        if self.kind not in TYPE_CHECK_KINDS:
            raise PatternUsageError(
                f"type check kind must be one of {TYPE_CHECK_KINDS}, got {self.kind!r}"
            )

    def bind(self, value, bindings, search):
        return bindings if kind_name(value) == self.kind else NO_MATCH


@dataclass(frozen=True)
class Alternation(Pattern):
    """
    Tries each option in order against the same value.

    The first option that matches decides the result, including its
    captures. Later options are never tried once one has matched, even
    if an enclosing sequence fails afterwards.
    """

    options: Tuple[Pattern, ...]

    def bind(self, value, bindings, search):
        for option in self.options:
            result = option.bind(value, bindings, search)
            if result is not NO_MATCH:
                return result
        return NO_MATCH


# =============================================================================
# Repetition
# =============================================================================


def check_bounds(min: Optional[int], max: Optional[int]) -> None:
    """Validate repetition bounds: both or neither, non-negative, min <= max."""
    if (min is None) != (max is None):
        raise PatternUsageError(
            f"repetition needs either both min and max or neither, got min={min!r} max={max!r}"
        )
    if min is None:
        return
    for name, bound in (("min", min), ("max", max)):
        if not isinstance(bound, int) or isinstance(bound, bool) or bound < 0:
            raise PatternUsageError(f"repetition {name} must be a non-negative integer, got {bound!r}")
    if min > max:
        raise PatternUsageError(f"repetition min must not exceed max, got min={min} max={max}")


def _bind_each(
    inner: Pattern,
    min: Optional[int],
    max: Optional[int],
    value: Value,
    bindings: Bindings,
    search: Search,
) -> Bindings | _NoMatch:
    if not is_sequence(value):
        return NO_MATCH
    if min is not None and len(value) < min:
        return NO_MATCH
    if max is not None and len(value) > max:
        return NO_MATCH
    for element in value:
        bindings = inner.bind(element, bindings, search)
        if bindings is NO_MATCH:
            return NO_MATCH
    return bindings


@dataclass(frozen=True)
class Repeat(Pattern):
    """
    A run of sequence elements, each matching `inner`.

    Inside a sequence a Repeat is its own chunk and the sequence decides
    how many elements it consumes (most first for greedy, fewest first
    for lazy). Applied directly, it checks a whole sequence.
    """

    inner: Pattern
    mode: str = GREEDY
    min: Optional[int] = None
    max: Optional[int] = None

    def __post_init__(self) -> None:
        if self.mode not in REPEAT_MODES:
            raise PatternUsageError(f"repeat mode must be one of {REPEAT_MODES}, got {self.mode!r}")
        check_bounds(self.min, self.max)

    @property
    def min_length(self) -> int:
        return self.min or 0

    def bind(self, value, bindings, search):
        return _bind_each(self.inner, self.min, self.max, value, bindings, search)


@dataclass(frozen=True)
class ArrayOf(Pattern):
    """
    ONE value that is itself a sequence whose every element matches `inner`.

    Unlike Repeat this is not a chunk: inside a sequence it occupies a
    single element position (a nested array).
    """

    inner: Pattern
    min: Optional[int] = None
    max: Optional[int] = None

    def __post_init__(self) -> None:
        check_bounds(self.min, self.max)

    def bind(self, value, bindings, search):
        search.enter()
        try:
            return _bind_each(self.inner, self.min, self.max, value, bindings, search)
        finally:
            search.leave()


# =============================================================================
# Named captures
# =============================================================================


@dataclass(frozen=True)
class Named(Pattern):
    """
    Captures whatever `inner` matched under `label`.

    Naming does not change what matches: a Named Repeat is still a
    repetition chunk to the sequence matcher, and the capture is the
    consumed slice.
    """

    label: str
    inner: Pattern

    def __post_init__(self) -> None:
        if not isinstance(self.label, str):
            raise PatternUsageError(f"capture label must be str, got {type(self.label).__name__}")

    def bind(self, value, bindings, search):
        result = self.inner.bind(value, bindings, search)
        if result is NO_MATCH:
            return NO_MATCH
        return {**result, self.label: value}


def repeat_of(pattern: Pattern) -> Optional[Repeat]:
    """Return the Repeat underneath any Named wrappers, or None."""
    while isinstance(pattern, Named):
        pattern = pattern.inner
    return pattern if isinstance(pattern, Repeat) else None
