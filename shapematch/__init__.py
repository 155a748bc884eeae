"""
shapematch public API surface.

Structural pattern matching for nested, array-shaped data (for example
ASTs written as prefix lists), with regex-like greedy and lazy
repetition over sequence elements:

    ['prefix', ...]   => ['prefix', greedy()]
    [..., 'postfix']  => [greedy(), 'postfix']
    ['and', ['==', 'username', <string>], ...]
                      => ['and', ['==', 'username', string()], greedy()]

    m = compile_pattern(['a', named('middle'), 'c'])(['a', 'B', 'c'])
    if m is not NO_MATCH:
        print(m['middle'])

This module exposes:

    - Compiler: compile_pattern (alias match)
    - Constructors: literal, wildcard, number, string, boolean,
                    alternation, sequence, greedy, lazy, array_of, named
    - Outcomes: NO_MATCH, PatternUsageError, MatchBudgetExceeded
    - Dispatch: dispatch, make_dispatcher
    - Tracing / limits: MatchTracer, MatchLimits
    - Notation: decode_pattern, encode_pattern, pretty_pattern
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Pattern model
# ---------------------------------------------------------------------------

from .patterns import (
    NO_MATCH,
    Alternation,
    ArrayOf,
    Literal,
    MatchBudgetExceeded,
    Named,
    Pattern,
    PatternUsageError,
    Repeat,
    TypeCheck,
    Wildcard,
)
from .sequence import Sequence

# ---------------------------------------------------------------------------
# Compiler and constructors
# ---------------------------------------------------------------------------

from .compiler import (
    alternation,
    array_of,
    boolean,
    compile_pattern,
    either,
    greedy,
    is_,
    lazy,
    literal,
    match,
    named,
    number,
    repeat,
    repeat_greedy,
    repeat_lazy,
    sequence,
    string,
    wildcard,
)

# ---------------------------------------------------------------------------
# Dispatch, tracing, limits
# ---------------------------------------------------------------------------

from .dispatch import dispatch, make_dispatcher
from .settings import MatchLimits
from .trace import MatchTracer

# ---------------------------------------------------------------------------
# Notation
# ---------------------------------------------------------------------------

from .pattern_json import decode_pattern, encode_pattern
from .pretty import pretty_pattern


__all__ = [
    # model
    "NO_MATCH",
    "Pattern",
    "Wildcard",
    "Literal",
    "TypeCheck",
    "Alternation",
    "Sequence",
    "Repeat",
    "ArrayOf",
    "Named",
    "PatternUsageError",
    "MatchBudgetExceeded",

    # compiler
    "compile_pattern",
    "match",

    # constructors
    "literal",
    "is_",
    "wildcard",
    "number",
    "string",
    "boolean",
    "alternation",
    "either",
    "sequence",
    "greedy",
    "lazy",
    "repeat_greedy",
    "repeat_lazy",
    "array_of",
    "repeat",
    "named",

    # dispatch
    "dispatch",
    "make_dispatcher",

    # tracing / limits
    "MatchTracer",
    "MatchLimits",

    # notation
    "decode_pattern",
    "encode_pattern",
    "pretty_pattern",
]
