"""
Host Value Model.

Candidates handed to a pattern are ordinary Python values. This module
fixes the few questions the matchers need answered about them: what
counts as a sequence, which primitive kind a value has, and when two
scalars are "the same" literal.

Sequences are ``list`` and ``tuple`` only. Strings and bytes are
iterable in Python but are treated as scalars here, so a string never
matches a sequence pattern character by character.
"""

from __future__ import annotations

from typing import Any


# Type alias for documentation (nested lists/tuples of arbitrary scalars)
Value = Any

# Maximum nesting depth for JSON-compatibility checks
# Set conservatively below Python's default recursion limit (~1000)
MAX_VALUE_DEPTH = 200

SEQUENCE_TYPES = (list, tuple)


def is_sequence(value: Any) -> bool:
    """Return True if value is an ordered sequence a pattern can descend into."""
    return isinstance(value, SEQUENCE_TYPES)


def is_number(value: Any) -> bool:
    # bool is a subclass of int in Python
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def kind_name(value: Any) -> str:
    """
    Return the primitive kind name for a value.

    Returns one of: "null", "boolean", "number", "string", "sequence",
    "mapping", or "other".
    """
    if value is None:
        return "null"
    if is_boolean(value):
        return "boolean"
    if is_number(value):
        return "number"
    if is_string(value):
        return "string"
    if is_sequence(value):
        return "sequence"
    if isinstance(value, dict):
        return "mapping"
    return "other"


def strict_equal(a: Any, b: Any) -> bool:
    """
    Literal equality without coercion.

    Both values must have exactly the same type and compare equal, so
    ``1``, ``1.0``, ``True`` and ``"1"`` are pairwise distinct. Lists,
    tuples and dicts are compared element by element under the same rule,
    so ``[1]`` and ``[True]`` differ too.
    """
    if type(a) is not type(b):
        return False
    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(strict_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict):
        return a.keys() == b.keys() and all(strict_equal(a[k], b[k]) for k in a)
    return bool(a == b)


def is_json_value(value: Any, _seen: set[int] | None = None, _depth: int = 0) -> bool:
    """
    Check if a value is JSON-compatible.

    Tuples are accepted wherever lists are, since they serialize to JSON
    arrays. Circular references and nesting beyond MAX_VALUE_DEPTH are
    rejected.
    """
    if _depth > MAX_VALUE_DEPTH:
        return False

    if value is None or isinstance(value, (bool, str)):
        return True
    if isinstance(value, (int, float)):
        # NaN and Infinity have no JSON spelling
        if isinstance(value, float) and (value != value or value in (float("inf"), float("-inf"))):
            return False
        return True

    if isinstance(value, (list, tuple, dict)):
        if _seen is None:
            _seen = set()
        value_id = id(value)
        if value_id in _seen:
            return False
        _seen = _seen | {value_id}

    if isinstance(value, (list, tuple)):
        return all(is_json_value(item, _seen, _depth + 1) for item in value)
    if isinstance(value, dict):
        return (
            all(isinstance(k, str) for k in value.keys()) and
            all(is_json_value(v, _seen, _depth + 1) for v in value.values())
        )
    return False


def to_json_value(value: Any) -> Any:
    """Convert tuples to lists recursively so a value can be compared with decoded JSON."""
    if isinstance(value, (list, tuple)):
        return [to_json_value(v) for v in value]
    if isinstance(value, dict):
        return {k: to_json_value(v) for k, v in value.items()}
    return value
