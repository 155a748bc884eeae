"""
Tests for the leaf pattern kinds: literal, wildcard, type checks,
alternation, named captures, and stand-alone repetition.
"""

import pytest

from shapematch import (
    PatternUsageError,
    TypeCheck,
    alternation,
    array_of,
    boolean,
    compile_pattern,
    greedy,
    lazy,
    literal,
    named,
    number,
    string,
    wildcard,
)


# =============================================================================
# Literal
# =============================================================================


class TestLiteral:
    """Tests for literal()."""

    def test_equal_string(self, check):
        """'x' matches 'x' with no captures."""
        check(literal("x"), "x", {})

    def test_different_string(self, check):
        """'x' doesn't match 'y'."""
        check(literal("x"), "y", False)

    def test_equal_int(self, check):
        check(literal(10), 10, {})
        check(literal(10), 0, False)

    def test_no_cross_type_equality(self, check):
        """1, 1.0, True and '1' are all different literals."""
        check(literal(1), "1", False)
        check(literal(1), 1.0, False)
        check(literal(1), True, False)
        check(literal(True), 1, False)
        check(literal(0), False, False)

    def test_none(self, check):
        check(literal(None), None, {})
        check(literal(None), 0, False)

    def test_explicit_list_literal(self, check):
        """literal() of a list compares the whole list, it is not a sequence pattern."""
        check(literal([1, 2]), [1, 2], {})
        check(literal([1, 2]), (1, 2), False)

    def test_container_literal_is_strict_inside(self, check):
        """Elements of a container literal are compared without coercion too."""
        check(literal([1]), [True], False)
        check(literal((1,)), (1.0,), False)
        check(literal({"a": 1}), {"a": True}, False)
        check(literal({"a": [1]}), {"a": [1]}, {})


# =============================================================================
# Wildcard and type checks
# =============================================================================


class TestWildcard:
    """Tests for wildcard()."""

    def test_matches_anything(self, check):
        for value in (1, "x", None, [], [1, [2]], {"a": 1}, object()):
            check(wildcard(), value, {})

    def test_bare_marker_compiles(self, check):
        """The uncalled wildcard constructor is accepted by the compiler."""
        check(compile_pattern(wildcard), 1, {})


class TestTypeChecks:
    """Tests for number(), string(), boolean()."""

    def test_number(self, check):
        check(number(), 1, {})
        check(number(), 2.5, {})
        check(number(), "1", False)

    def test_number_excludes_bool(self, check):
        """bool is an int subclass in Python but not a number here."""
        check(number(), True, False)

    def test_string(self, check):
        check(string(), "", {})
        check(string(), "abc", {})
        check(string(), ["a"], False)

    def test_boolean(self, check):
        check(boolean(), False, {})
        check(boolean(), 0, False)

    def test_bare_markers_compile(self, check):
        check(compile_pattern(number), 3, {})
        check(compile_pattern(string), 3, False)
        check(compile_pattern(boolean), True, {})

    def test_unknown_kind(self):
        with pytest.raises(PatternUsageError):
            TypeCheck("sequence")


# =============================================================================
# Alternation
# =============================================================================


class TestAlternation:
    """Tests for alternation()."""

    def test_any_option(self, check):
        p = alternation("b", "B")
        check(p, "b", {})
        check(p, "B", {})
        check(p, "c", False)

    def test_empty_alternation_never_matches(self, check):
        check(alternation(), 1, False)

    def test_first_option_wins(self, check):
        """Both options match; the first one's captures are used."""
        p = alternation(named("first"), named("second"))
        check(p, 7, {"first": 7})

    def test_failed_option_leaves_no_capture(self, check):
        """An option that fails after a nested capture contributes nothing."""
        p = alternation([named("A"), 1], [named("B"), 2])
        check(p, [5, 2], {"B": 5})


# =============================================================================
# Named
# =============================================================================


class TestNamed:
    """Tests for named()."""

    def test_capture(self, check):
        check(named("abba", literal("x")), "x", {"abba": "x"})

    def test_capture_fails_with_inner(self, check):
        check(named("A", literal(1)), 0, False)

    def test_default_inner_is_wildcard(self, check):
        check(named("A"), 1, {"A": 1})
        check(named("A"), "x", {"A": "x"})

    def test_label_must_be_string(self):
        with pytest.raises(PatternUsageError):
            named(1)


# =============================================================================
# Stand-alone repetition
# =============================================================================


class TestRepeatAlone:
    """A repeat applied directly checks a whole sequence."""

    @pytest.mark.parametrize("make", [greedy, lazy, array_of])
    def test_unbounded(self, check, make):
        p = make("x")
        check(p, [], {})
        check(p, ["x"], {})
        check(p, ["x", "x"], {})
        check(p, ["y", "x"], False)

    def test_bounded_zero_to_one(self, check):
        p = array_of("x", 0, 1)
        check(p, [], {})
        check(p, ["x"], {})
        check(p, ["x", "x"], False)

    def test_bounded_one_to_two(self, check):
        p = greedy("x", 1, 2)
        check(p, [], False)
        check(p, ["x"], {})
        check(p, ["x", "x"], {})
        check(p, ["x", "x", "x"], False)

    def test_non_sequence_never_matches(self, check):
        check(greedy(), "xx", False)
        check(greedy(), 3, False)
        check(array_of(), None, False)

    def test_tuple_is_a_sequence(self, check):
        check(greedy(number), (1, 2), {})

    def test_default_inner_is_wildcard(self, check):
        check(array_of(), [1, 2, "x"], {})

    def test_named_repeat_captures_whole_sequence(self, check):
        check(named("A", greedy("x")), ["x", "x"], {"A": ["x", "x"]})


class TestRepeatBounds:
    """Malformed bounds are usage errors, not failed matches."""

    @pytest.mark.parametrize("make", [greedy, lazy, array_of])
    def test_min_without_max(self, make):
        with pytest.raises(PatternUsageError):
            make(wildcard, 1)

    @pytest.mark.parametrize("make", [greedy, lazy, array_of])
    def test_max_without_min(self, make):
        with pytest.raises(PatternUsageError):
            make(wildcard, None, 2)

    def test_negative_bound(self):
        with pytest.raises(PatternUsageError):
            greedy(wildcard, -1, 2)

    def test_inverted_bounds(self):
        with pytest.raises(PatternUsageError):
            lazy(wildcard, 3, 2)

    def test_usage_error_is_value_error(self):
        """Callers catching ValueError also see usage errors."""
        with pytest.raises(ValueError):
            greedy(wildcard, 1)

