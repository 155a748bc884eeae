"""
Pytest configuration for shapematch tests.

Provides:
- Hypothesis configuration for deterministic fuzzing
- Shared pattern fixtures for the sequence tests
"""

import os

import pytest

from shapematch import NO_MATCH

# =============================================================================
# Hypothesis Configuration
# =============================================================================
# - Database caches found examples for faster reruns (uses .hypothesis/ by default)
# - print_blob=True makes failures easy to reproduce
# NOTE: Do NOT set database=None - that DISABLES the database. Omit to use default.

from hypothesis import settings

settings.register_profile(
    "default",
    print_blob=True,
    derandomize=False,
)

# CI profile: derandomized so every run explores the same examples
settings.register_profile(
    "ci",
    print_blob=True,
    derandomize=True,
)

settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))


# =============================================================================
# Shared Test Utilities
# =============================================================================


def outcome(result):
    """Normalize a match result for comparison: bindings dict or False."""
    if result is NO_MATCH:
        return False
    return result


@pytest.fixture
def check():
    """
    Assert that pattern(candidate) produces `expected`.

    `expected` is a bindings dict, or False for no match.
    """
    def _check(pattern, candidate, expected):
        got = outcome(pattern(candidate))
        assert got == expected, f"{pattern!r} on {candidate!r}: got {got!r}, expected {expected!r}"
    return _check
