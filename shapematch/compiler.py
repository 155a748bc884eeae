"""
Pattern Compiler and Constructors.

compile_pattern() turns raw Python values into patterns so callers can
write nested lists instead of constructor calls:

    compile_pattern([1, 2, [3]])  ==  sequence(literal(1), literal(2), sequence(literal(3)))

Rules:
- a Pattern is returned unchanged
- the bare constructors wildcard, number, string, boolean (not called)
  stand for their zero-argument patterns
- a list or tuple becomes a sequence of compiled elements
- anything else becomes a literal

Compilation never fails; odd inputs simply become literals.
"""

from __future__ import annotations

from typing import Any, Optional

from shapematch.patterns import (
    GREEDY,
    LAZY,
    Alternation,
    ArrayOf,
    Literal,
    Named,
    Pattern,
    Repeat,
    TypeCheck,
    Wildcard,
)
from shapematch.sequence import Sequence
from shapematch.values import is_sequence


def compile_pattern(raw: Any) -> Pattern:
    """Normalize a raw value (pattern, marker, nested list or scalar) into a Pattern."""
    if isinstance(raw, Pattern):
        return raw
    for marker in _MARKERS:
        if raw is marker:
            return marker()
    if is_sequence(raw):
        return Sequence(tuple(compile_pattern(item) for item in raw))
    return Literal(raw)


# ---------------------------------------------------------------------------
# Primitive constructors
# ---------------------------------------------------------------------------


def literal(value: Any) -> Literal:
    """Match `value` exactly, even if it is a list."""
    return Literal(value)


def wildcard() -> Wildcard:
    return Wildcard()


def number() -> TypeCheck:
    return TypeCheck("number")


def string() -> TypeCheck:
    return TypeCheck("string")


def boolean() -> TypeCheck:
    return TypeCheck("boolean")


def alternation(*options: Any) -> Alternation:
    """First option (in order) that matches wins."""
    return Alternation(tuple(compile_pattern(o) for o in options))


def sequence(*items: Any) -> Sequence:
    return Sequence(tuple(compile_pattern(i) for i in items))


# ---------------------------------------------------------------------------
# Repetition and capture
# ---------------------------------------------------------------------------


def greedy(inner: Any = wildcard, min: Optional[int] = None, max: Optional[int] = None) -> Repeat:
    """
    Repetition that consumes as many sequence elements as it can.

    Args:
        inner: Pattern every consumed element must match (default: anything).
        min, max: Bounds on the number of elements; give both or neither.

    Raises:
        PatternUsageError: If only one bound is given, or bounds are invalid.
    """
    return Repeat(compile_pattern(inner), GREEDY, min, max)


def lazy(inner: Any = wildcard, min: Optional[int] = None, max: Optional[int] = None) -> Repeat:
    """Repetition that consumes as few sequence elements as it can. See greedy()."""
    return Repeat(compile_pattern(inner), LAZY, min, max)


def array_of(inner: Any = wildcard, min: Optional[int] = None, max: Optional[int] = None) -> ArrayOf:
    """A single value that is a sequence of elements all matching `inner`."""
    return ArrayOf(compile_pattern(inner), min, max)


def named(label: str, inner: Any = wildcard) -> Named:
    """Capture what `inner` matches under `label`."""
    return Named(label, compile_pattern(inner))


# Bare constructors accepted by compile_pattern in place of their results
_MARKERS = (wildcard, number, string, boolean)


# Short and long spellings
match = compile_pattern
is_ = literal
either = alternation
repeat_greedy = greedy
repeat_lazy = lazy
repeat = array_of
