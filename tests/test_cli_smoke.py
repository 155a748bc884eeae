"""
Smoke tests for the shapematch CLI (python3 -m shapematch.cli).

Output is validated against shapematch/schemas/match_result.v1.json.
"""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import jsonschema
import pytest

from shapematch.cli import SCHEMA_DOC, SCHEMA_TAG, main


ROOT = Path(__file__).resolve().parents[1]
RESULT_SCHEMA = ROOT / "shapematch" / "schemas" / "match_result.v1.json"

BRACKET = '[1, {"$": "name", "label": "A", "of": {"$": "greedy"}}, 2]'


def _run(args: list[str], stdin: str | None = None) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, "-m", "shapematch.cli", *args],
        cwd=str(ROOT),
        input=stdin,
        capture_output=True,
        text=True,
    )


def _validate(payload: dict) -> None:
    schema = json.loads(RESULT_SCHEMA.read_text(encoding="utf-8"))
    jsonschema.validate(instance=payload, schema=schema)


def test_schema_flag():
    r = _run(["--schema"])
    assert r.returncode == 0, r.stderr
    assert r.stdout.strip() == f"{SCHEMA_TAG} {SCHEMA_DOC}"


def test_schema_doc_exists():
    assert (ROOT / SCHEMA_DOC).exists()


def test_match_exit_zero():
    r = _run([BRACKET, "[1, 3, 4, 2]"])
    assert r.returncode == 0, r.stdout + "\n" + r.stderr
    payload = json.loads(r.stdout)
    _validate(payload)
    assert payload["matched"] is True
    assert payload["bindings"] == {"A": [3, 4]}
    assert payload["pretty"] == "[1, (?<A>.*), 2]"
    assert payload["warnings"] == []
    assert "trace" not in payload


def test_no_match_exit_one():
    r = _run([BRACKET, "[1, 3]"])
    assert r.returncode == 1, r.stdout + "\n" + r.stderr
    payload = json.loads(r.stdout)
    _validate(payload)
    assert payload["matched"] is False
    assert payload["bindings"] is None


def test_stdin_input():
    r = _run(["--stdin", BRACKET], stdin="[1, 2]")
    assert r.returncode == 0, r.stdout + "\n" + r.stderr
    assert json.loads(r.stdout)["bindings"] == {"A": []}


def test_trace_included():
    r = _run(["--trace", BRACKET, "[1, 3, 2]"])
    assert r.returncode == 0, r.stdout + "\n" + r.stderr
    payload = json.loads(r.stdout)
    _validate(payload)
    types = [e["type"] for e in payload["trace"]]
    assert types[0] == "match.start"
    assert types[-1] == "match.end"


@pytest.mark.parametrize(
    "args",
    [
        ['{"$": "bogus"}', "1"],
        ["[1,", "1"],
        [BRACKET, "not json"],
        [BRACKET],
        ['{"$": "greedy", "min": 2, "max": 1}', "[]"],
    ],
)
def test_invalid_input_exit_two(args):
    r = _run(args)
    assert r.returncode == 2, r.stdout + "\n" + r.stderr
    assert "Invalid input" in r.stderr


# =============================================================================
# In-process (main(argv))
# =============================================================================


def test_input_file(tmp_path: Path, capsys):
    f = tmp_path / "input.json"
    f.write_text('[1, "x", 2]', encoding="utf-8")
    assert main(["--input-file", str(f), BRACKET]) == 0
    assert json.loads(capsys.readouterr().out)["bindings"] == {"A": ["x"]}


def test_budget_exceeded_is_reported(capsys):
    pattern = '[{"$": "greedy"}, {"$": "greedy"}, {"$": "greedy"}, 1]'
    assert main(["--max-steps", "50", pattern, json.dumps([0] * 30)]) == 1
    payload = json.loads(capsys.readouterr().out)
    _validate(payload)
    assert payload["matched"] is False
    assert len(payload["warnings"]) == 1


def test_pretty_output_is_indented(capsys):
    assert main(["--pretty", "1", "1"]) == 0
    out = capsys.readouterr().out
    assert "\n  " in out
    assert json.loads(out)["bindings"] == {}
