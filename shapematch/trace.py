from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from shapematch import settings

TRACE_EVENT_V1 = 1
TRACE_EVENT_KEY_ORDER: Tuple[str, ...] = ("v", "type", "i", "meta")

EVENT_TYPES = frozenset(["match.start", "chunk.fixed", "chunk.repeat", "match.end"])


def _deep_sort_json(x: Any) -> Any:
    """
    Deterministically normalize nested JSON-ish structures:
    - dict: keys sorted lexicographically; values deep-sorted
    - list/tuple: values deep-sorted (order preserved)
    - primitives: unchanged
    """
    if isinstance(x, dict):
        out: Dict[str, Any] = {}
        for k in sorted(x.keys()):
            out[str(k)] = _deep_sort_json(x[k])
        return out
    if isinstance(x, (list, tuple)):
        return [_deep_sort_json(v) for v in x]
    return x


def canon_event(ev: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Canonicalize a single search event to a deterministic dict.

    Required:
    - v: const 1
    - type: one of EVENT_TYPES
    - i: integer >= 0

    Optional:
    - meta: event details (deep-sorted for determinism)

    Unknown keys are dropped and the top-level key order is fixed.
    """
    if not isinstance(ev, Mapping):
        raise TypeError(f"event must be a mapping, got {type(ev)}")

    v = ev.get("v", TRACE_EVENT_V1)
    if v != TRACE_EVENT_V1:
        raise ValueError(f"event.v must be {TRACE_EVENT_V1}, got {v!r}")

    typ = ev.get("type")
    if typ not in EVENT_TYPES:
        raise ValueError(f"event.type must be one of {sorted(EVENT_TYPES)}, got {typ!r}")

    i = ev.get("i")
    if not isinstance(i, int) or isinstance(i, bool) or i < 0:
        raise ValueError("event.i must be an integer >= 0")

    meta = ev.get("meta", None)
    if meta is not None and not isinstance(meta, Mapping):
        raise ValueError("event.meta must be an object/dict when provided")

    out: Dict[str, Any] = {"v": v, "type": typ, "i": i}
    if meta is not None:
        out["meta"] = _deep_sort_json(dict(meta))
    return out


def canon_events(events: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Canonicalize a sequence of events and enforce contiguous index ordering by `i`.
    """
    out = [canon_event(ev) for ev in events]
    got = [e["i"] for e in out]
    if got != list(range(len(out))):
        raise ValueError(f"event.i must be contiguous 0..n-1 in-order; got {got}")
    return out


def canon_jsonl(events: Iterable[Mapping[str, Any]]) -> str:
    """Serialize canonical events to JSONL (one event per line, newline-terminated)."""
    lines = [
        json.dumps(e, ensure_ascii=False, separators=(",", ":"), sort_keys=False)
        for e in canon_events(events)
    ]
    return "\n".join(lines) + ("\n" if lines else "")


class MatchTracer:
    """
    Records the decisions the sequence search makes.

    One tracer may observe several top-level matches; each contributes a
    match.start ... match.end bracket. Events only describe positions and
    lengths, never candidate values, so a trace is always serializable.
    """

    def __init__(self) -> None:
        self.events: List[Dict[str, Any]] = []

    def record(self, typ: str, **meta: Any) -> None:
        self.events.append(canon_event({"type": typ, "i": len(self.events), "meta": meta}))

    def start(self) -> None:
        self.record("match.start")

    def fixed(self, ci: int, xi: int, width: int, ok: bool) -> None:
        self.record("chunk.fixed", ci=ci, xi=xi, width=width, ok=ok)

    def repeat(self, ci: int, xi: int, take: int, mode: str) -> None:
        self.record("chunk.repeat", ci=ci, xi=xi, take=take, mode=mode)

    def end(self, ok: bool, steps: int) -> None:
        self.record("match.end", ok=ok, steps=steps)

    def clear(self) -> None:
        self.events = []

    def to_jsonl(self) -> str:
        return canon_jsonl(self.events)

    def __len__(self) -> int:
        return len(self.events)


# Shared tracer used when SHAPEMATCH_TRACE=1 and no tracer is passed explicitly.
# It keeps every event until clear() is called; long-running processes that
# enable the flag must drain it (to_jsonl() then clear()) themselves.
GLOBAL_TRACER = MatchTracer()


def default_tracer() -> MatchTracer | None:
    """Return GLOBAL_TRACER when tracing is enabled by environment, else None."""
    return GLOBAL_TRACER if settings.SHAPEMATCH_TRACE_ENABLED else None
