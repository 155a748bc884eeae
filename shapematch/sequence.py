"""
Sequence Matching - chunked backtracking search.

A sequence pattern is split once, at construction, into chunks:

    [1, 2, greedy(), 3, lazy(), lazy(), 4]
    ==> Fixed(1, 2) | Rep(greedy) | Fixed(3) | Rep(lazy) | Rep(lazy) | Fixed(4)

A fixed chunk is a maximal run of non-repeating patterns and always
consumes exactly its own width. A repetition chunk is a single Repeat
(possibly under Named wrappers) and may consume any number of elements.

Matching walks (chunk index ci, element index xi) from (0, 0):

- Fixed chunk: match each pattern against the next element; advance.
- Repetition chunk: try each consumption length in preference order
  (longest first for greedy, shortest first for lazy), recurse on the
  rest, and return the first overall success.

Success requires running out of chunks and elements at the same time.
Lengths that cannot possibly succeed (outside the repeat's bounds, or
leaving fewer elements than the remaining chunks need at minimum) are
skipped; this prunes the search without changing its outcome.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence as SequenceT, Tuple, Union

from shapematch.patterns import (
    GREEDY,
    NO_MATCH,
    Pattern,
    Repeat,
    repeat_of,
)
from shapematch.values import is_sequence


@dataclass(frozen=True)
class FixedChunk:
    patterns: Tuple[Pattern, ...]

    @property
    def width(self) -> int:
        return len(self.patterns)

    @property
    def min_length(self) -> int:
        return len(self.patterns)


@dataclass(frozen=True)
class RepeatChunk:
    # The pattern as written (may be Named) and the Repeat underneath it
    pattern: Pattern
    repeat: Repeat

    @property
    def min_length(self) -> int:
        return self.repeat.min_length

    def takes(self, available: int) -> range:
        """Candidate consumption lengths, in preference order, given `available` elements."""
        lo = self.repeat.min_length
        hi = available if self.repeat.max is None else min(available, self.repeat.max)
        if self.repeat.mode == GREEDY:
            return range(hi, lo - 1, -1)
        return range(lo, hi + 1)


Chunk = Union[FixedChunk, RepeatChunk]


def chunkify(patterns: SequenceT[Pattern]) -> Tuple[Chunk, ...]:
    """
    Group patterns into fixed runs and single repetition chunks.

    chunkify([1, 2, greedy(), 3]) ==> (Fixed(1, 2), Rep(greedy), Fixed(3))
    """
    chunks: list[Chunk] = []
    run: list[Pattern] = []
    for pattern in patterns:
        rep = repeat_of(pattern)
        if rep is None:
            run.append(pattern)
            continue
        if run:
            chunks.append(FixedChunk(tuple(run)))
            run = []
        chunks.append(RepeatChunk(pattern, rep))
    if run:
        chunks.append(FixedChunk(tuple(run)))
    return tuple(chunks)


def _tail_minimums(chunks: Tuple[Chunk, ...]) -> Tuple[int, ...]:
    # tails[ci] = fewest elements chunks[ci:] can consume; tails[-1] == 0
    tails = [0]
    for chunk in reversed(chunks):
        tails.append(tails[-1] + chunk.min_length)
    return tuple(reversed(tails))


@dataclass(frozen=True)
class Sequence(Pattern):
    """Matches a list or tuple element by element, with repetition chunks."""

    elements: Tuple[Pattern, ...]
    chunks: Tuple[Chunk, ...] = field(init=False, repr=False, compare=False)
    tail_minimums: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        elements = tuple(self.elements)
        chunks = chunkify(elements)
        object.__setattr__(self, "elements", elements)
        object.__setattr__(self, "chunks", chunks)
        object.__setattr__(self, "tail_minimums", _tail_minimums(chunks))

    def bind(self, value, bindings, search):
        if not is_sequence(value):
            return NO_MATCH
        search.enter()
        try:
            return self._submatch(value, 0, 0, bindings, search)
        finally:
            search.leave()

    def _submatch(self, xs, ci: int, xi: int, bindings, search):
        if ci >= len(self.chunks):
            # no chunks left: success only if no elements are left either
            return bindings if xi >= len(xs) else NO_MATCH

        search.step()
        tracer = search.tracer
        chunk = self.chunks[ci]
        remaining = len(xs) - xi

        if isinstance(chunk, FixedChunk):
            width = chunk.width
            if width > remaining:
                if tracer is not None:
                    tracer.fixed(ci, xi, width, ok=False)
                return NO_MATCH
            for offset, pattern in enumerate(chunk.patterns):
                bindings = pattern.bind(xs[xi + offset], bindings, search)
                if bindings is NO_MATCH:
                    if tracer is not None:
                        tracer.fixed(ci, xi, width, ok=False)
                    return NO_MATCH
            if tracer is not None:
                tracer.fixed(ci, xi, width, ok=True)
            return self._submatch(xs, ci + 1, xi + width, bindings, search)

        available = remaining - self.tail_minimums[ci + 1]
        for take in chunk.takes(available):
            if tracer is not None:
                tracer.repeat(ci, xi, take, chunk.repeat.mode)
            taken = chunk.pattern.bind(xs[xi:xi + take], bindings, search)
            if taken is NO_MATCH:
                continue
            result = self._submatch(xs, ci + 1, xi + take, taken, search)
            if result is not NO_MATCH:
                return result
        return NO_MATCH


def describe_chunks(pattern: Sequence) -> list[Optional[int]]:
    """Chunk shape of a sequence: fixed widths as ints, repetition chunks as None."""
    return [c.width if isinstance(c, FixedChunk) else None for c in pattern.chunks]
