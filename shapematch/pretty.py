"""
Regex-like rendering of patterns.

This does NOT change any pattern's repr. It gives a compact, human-facing
form that reads like a regular expression over sequence elements:

    ['a', greedy(alternation('b', 'B'))]  ->  ['a', ('b'|'B')*]
    [named('year', greedy(number, 4, 4)), '-']  ->  [(?<year><number>{4,4}), '-']

Usage:

    from shapematch import compile_pattern
    from shapematch.pretty import pretty_pattern

    print(pretty_pattern(compile_pattern([1, greedy(), 2])))
"""

from __future__ import annotations

from shapematch.patterns import (
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


def _suffix(min, max, mode: str) -> str:
    s = "*" if min is None else f"{{{min},{max}}}"
    return s + "?" if mode == LAZY else s


def pretty_pattern(p: Pattern) -> str:
    """Render *p* in regex-like notation."""
    if isinstance(p, Wildcard):
        return "."
    if isinstance(p, Literal):
        return repr(p.value)
    if isinstance(p, TypeCheck):
        return f"<{p.kind}>"
    if isinstance(p, Alternation):
        return "(" + "|".join(pretty_pattern(o) for o in p.options) + ")"
    if isinstance(p, Sequence):
        return "[" + ", ".join(pretty_pattern(e) for e in p.elements) + "]"
    if isinstance(p, Repeat):
        return pretty_pattern(p.inner) + _suffix(p.min, p.max, p.mode)
    if isinstance(p, ArrayOf):
        return "[" + pretty_pattern(p.inner) + _suffix(p.min, p.max, "") + "]"
    if isinstance(p, Named):
        return f"(?<{p.label}>{pretty_pattern(p.inner)})"
    raise TypeError(f"cannot render {type(p).__name__}")
