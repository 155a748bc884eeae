"""
First-match dispatch over (pattern, handler) pairs.

Clauses are written as a flat list, alternating pattern and handler:

    dispatch(node, [
        ["+", named("a"), named("b")], lambda m: m["a"] + m["b"],
        ["-", named("a")],             lambda m: -m["a"],
    ], fallback=lambda node: node)

Patterns are tried in order; the handler of the first one that matches
is called with its captures. Without a match the fallback (if any) is
called with the candidate itself, otherwise NO_MATCH is returned.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence as SequenceT, Tuple

from shapematch.compiler import compile_pattern
from shapematch.patterns import NO_MATCH, Pattern, PatternUsageError

Handler = Callable[[Any], Any]


def _pair_up(clauses: SequenceT[Any]) -> List[Tuple[Pattern, Handler]]:
    if len(clauses) % 2 != 0:
        raise PatternUsageError(
            f"dispatch clauses must alternate pattern and handler; got an odd count ({len(clauses)})"
        )
    pairs = []
    for i in range(0, len(clauses), 2):
        handler = clauses[i + 1]
        if not callable(handler):
            raise PatternUsageError(
                f"dispatch clause {i // 2} handler must be callable, got {type(handler).__name__}"
            )
        pairs.append((compile_pattern(clauses[i]), handler))
    return pairs


def _run(pairs, candidate: Any, fallback: Optional[Handler]) -> Any:
    for pattern, handler in pairs:
        bindings = pattern.match(candidate)
        if bindings is not NO_MATCH:
            return handler(bindings)
    if fallback is not None:
        return fallback(candidate)
    return NO_MATCH


def dispatch(candidate: Any, clauses: SequenceT[Any], fallback: Optional[Handler] = None) -> Any:
    """
    Call the handler of the first clause whose pattern matches candidate.

    Args:
        candidate: The value to dispatch on.
        clauses: Flat list [pattern, handler, pattern, handler, ...].
        fallback: Called with candidate when nothing matches.

    Returns:
        The handler's (or fallback's) return value, or NO_MATCH.

    Raises:
        PatternUsageError: If clauses has odd length or a handler is not callable.
    """
    return _run(_pair_up(clauses), candidate, fallback)


def make_dispatcher(clauses: SequenceT[Any], fallback: Optional[Handler] = None) -> Callable[[Any], Any]:
    """
    Validate and compile clauses once; return a reusable dispatch function.

    Raises:
        PatternUsageError: Immediately, if the clauses are malformed.
    """
    pairs = _pair_up(clauses)

    def dispatcher(candidate: Any) -> Any:
        return _run(pairs, candidate, fallback)

    return dispatcher
