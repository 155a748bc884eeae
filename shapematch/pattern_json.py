"""
JSON Pattern Notation.

Patterns written as JSON documents, for storing them in files or passing
them on the command line:

    [1, {"$": "name", "label": "A", "of": {"$": "greedy"}}, 2]

- JSON array      -> sequence
- JSON scalar     -> literal (1 and 1.0 are different literals)
- {"$": form,...} -> special form:

    {"$": "any"} | {"$": "number"} | {"$": "string"} | {"$": "boolean"}
    {"$": "is", "value": <any JSON, matched literally>}
    {"$": "or", "of": [p, ...]}        {"$": "seq", "of": [p, ...]}
    {"$": "greedy" | "lazy" | "array", "of"?: p, "min"?: n, "max"?: n}
    {"$": "name", "label": "A", "of"?: p}

Documents are validated against schemas/pattern.v1.json before decoding.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

from shapematch.compiler import (
    alternation,
    array_of,
    boolean,
    greedy,
    lazy,
    literal,
    named,
    number,
    sequence,
    string,
    wildcard,
)
from shapematch.patterns import (
    Alternation,
    ArrayOf,
    Literal,
    Named,
    Pattern,
    PatternUsageError,
    Repeat,
    TypeCheck,
    Wildcard,
)
from shapematch.sequence import Sequence
from shapematch.values import is_json_value, to_json_value

SCHEMA_PATH = Path(__file__).parent / "schemas" / "pattern.v1.json"

_VALIDATOR: Draft7Validator | None = None

_SIMPLE_FORMS = {
    "any": wildcard,
    "number": number,
    "string": string,
    "boolean": boolean,
}

_REPEAT_FORMS = {
    "greedy": greedy,
    "lazy": lazy,
    "array": array_of,
}


def load_schema() -> dict:
    """Load the pattern document schema shipped with the package."""
    with open(SCHEMA_PATH, encoding="utf-8") as f:
        return json.load(f)


def _validator() -> Draft7Validator:
    global _VALIDATOR
    if _VALIDATOR is None:
        _VALIDATOR = Draft7Validator(load_schema())
    return _VALIDATOR


def validate_document(doc: Any) -> None:
    """
    Raise PatternUsageError if doc is not a valid pattern document.

    The message names the most relevant schema violation.
    """
    error = best_match(_validator().iter_errors(doc))
    if error is not None:
        where = "/".join(str(p) for p in error.absolute_path) or "<root>"
        raise PatternUsageError(f"invalid pattern document at {where}: {error.message}")


def _decode(doc: Any) -> Pattern:
    if isinstance(doc, list):
        return sequence(*(_decode(item) for item in doc))
    if not isinstance(doc, dict):
        return literal(doc)

    form = doc["$"]
    if form in _SIMPLE_FORMS:
        return _SIMPLE_FORMS[form]()
    if form == "is":
        return literal(doc["value"])
    if form == "or":
        return alternation(*(_decode(item) for item in doc["of"]))
    if form == "seq":
        return sequence(*(_decode(item) for item in doc["of"]))
    if form in _REPEAT_FORMS:
        inner = _decode(doc["of"]) if "of" in doc else wildcard()
        return _REPEAT_FORMS[form](inner, doc.get("min"), doc.get("max"))
    if form == "name":
        inner = _decode(doc["of"]) if "of" in doc else wildcard()
        return named(doc["label"], inner)
    # Unreachable for validated documents
    raise PatternUsageError(f"unknown pattern form: {form!r}")


def decode_pattern(doc: Any) -> Pattern:
    """
    Build a Pattern from a JSON pattern document.

    Raises:
        PatternUsageError: If the document does not follow the notation.
    """
    validate_document(doc)
    return _decode(doc)


def loads_pattern(text: str) -> Pattern:
    """Parse JSON text and decode it as a pattern document."""
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise PatternUsageError(f"pattern must be JSON. Parse error: {e}") from e
    return decode_pattern(doc)


def _with_inner(doc: dict, inner: Pattern) -> dict:
    if not isinstance(inner, Wildcard):
        doc["of"] = encode_pattern(inner)
    return doc


def _with_bounds(doc: dict, p: Repeat | ArrayOf) -> dict:
    if p.min is not None:
        doc["min"] = p.min
        doc["max"] = p.max
    return doc


def encode_pattern(p: Pattern) -> Any:
    """
    Render a Pattern as a JSON pattern document.

    Raises:
        TypeError: If a literal holds a value with no JSON spelling.
    """
    if isinstance(p, Wildcard):
        return {"$": "any"}
    if isinstance(p, Literal):
        if not is_json_value(p.value):
            raise TypeError(f"literal {p.value!r} has no JSON representation")
        if isinstance(p.value, (list, tuple, dict)):
            return {"$": "is", "value": to_json_value(p.value)}
        return p.value
    if isinstance(p, TypeCheck):
        return {"$": p.kind}
    if isinstance(p, Alternation):
        return {"$": "or", "of": [encode_pattern(o) for o in p.options]}
    if isinstance(p, Sequence):
        return [encode_pattern(e) for e in p.elements]
    if isinstance(p, Repeat):
        return _with_bounds(_with_inner({"$": p.mode}, p.inner), p)
    if isinstance(p, ArrayOf):
        return _with_bounds(_with_inner({"$": "array"}, p.inner), p)
    if isinstance(p, Named):
        return _with_inner({"$": "name", "label": p.label}, p.inner)
    raise TypeError(f"cannot encode {type(p).__name__}")
