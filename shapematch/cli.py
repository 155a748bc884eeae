"""
shapematch CLI

Match a JSON value against a JSON pattern document and emit the result
as JSON:

    python3 -m shapematch.cli '[1, {"$": "name", "label": "A", "of": {"$": "greedy"}}]' '[1, 2, 3]'

Contract: emits JSON with schema tag + schema_doc. Exit codes: 0 match,
1 no match, 2 invalid input or pattern.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, List, Optional

from shapematch.pattern_json import encode_pattern, loads_pattern
from shapematch.patterns import NO_MATCH, MatchBudgetExceeded, PatternUsageError
from shapematch.pretty import pretty_pattern
from shapematch.settings import MatchLimits, limits_from_env
from shapematch.trace import MatchTracer
from shapematch.values import to_json_value


SCHEMA_TAG = "shapematch-match.v1"
SCHEMA_DOC = "shapematch/schemas/match_result.v1.json"


def _parse_json_text(text: str, what: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"{what} must be JSON. Parse error: {e}") from e


def _read_input_json(args: argparse.Namespace) -> Any:
    """
    Priority:
      1) positional input_json (if provided)
      2) --input-file
      3) --stdin
    """
    if args.input_json is not None:
        return _parse_json_text(args.input_json, "Input")

    if args.input_file is not None:
        with args.input_file as f:
            return _parse_json_text(f.read(), "Input")

    if args.stdin:
        return _parse_json_text(sys.stdin.read(), "Input")

    raise ValueError("No input provided. Use positional JSON, --input-file, or --stdin.")


def _emit(payload: dict[str, Any], pretty: bool) -> None:
    if pretty:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(json.dumps(payload, ensure_ascii=False))


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Match a JSON value against a JSON pattern document and emit JSON.")
    ap.add_argument("--schema", action="store_true", help="Print schema tag + schema doc path and exit.")
    ap.add_argument("--pretty", action="store_true", help="Pretty-print JSON output.")
    ap.add_argument("--trace", action="store_true", help="Include the search trace in the output.")
    ap.add_argument("--stdin", action="store_true", help="Read input JSON from stdin.")
    ap.add_argument(
        "--input-file",
        type=argparse.FileType("r", encoding="utf-8"),
        default=None,
        help="Read input JSON from a file.",
    )
    ap.add_argument("--max-steps", type=int, default=None, help="Abort after this many search steps.")

    ap.add_argument("pattern", nargs="?", help='Pattern document, e.g. \'[1, {"$": "greedy"}]\'')
    ap.add_argument(
        "input_json",
        nargs="?",
        default=None,
        help='Input JSON value, e.g. "[1,2,3]". Optional if using --stdin/--input-file.',
    )

    args = ap.parse_args(argv)

    if args.schema:
        print(f"{SCHEMA_TAG} {SCHEMA_DOC}")
        return 0

    if not args.pattern:
        ap.error("pattern is required unless --schema is used")

    try:
        pattern = loads_pattern(args.pattern)
        value = _read_input_json(args)
        limits = limits_from_env()
        if args.max_steps is not None:
            limits = MatchLimits(max_depth=limits.max_depth, max_steps=args.max_steps)
    except (PatternUsageError, ValueError) as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2

    warnings: List[str] = []
    tracer = MatchTracer() if args.trace else None
    try:
        result = pattern.match(value, tracer=tracer, limits=limits)
    except MatchBudgetExceeded as e:
        result = NO_MATCH
        warnings.append(str(e))

    matched = result is not NO_MATCH
    payload: dict[str, Any] = {
        "schema": SCHEMA_TAG,
        "schema_doc": SCHEMA_DOC,
        "pattern": encode_pattern(pattern),
        "pretty": pretty_pattern(pattern),
        "input": value,
        "matched": matched,
        "bindings": to_json_value(result) if matched else None,
        "warnings": warnings,
    }
    if tracer is not None:
        payload["trace"] = tracer.events

    _emit(payload, pretty=bool(args.pretty))
    return 0 if matched else 1


if __name__ == "__main__":
    raise SystemExit(main())
