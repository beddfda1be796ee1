from __future__ import annotations

import pytest

from scopespec import (
    Failed,
    be_between,
    be_empty,
    be_equal_to,
    be_false,
    be_ge,
    be_greater_than,
    be_less_than,
    be_none,
    be_some,
    be_true,
    contain,
    end_with,
    equal_to,
    have_key,
    have_length,
    have_pair,
    have_size,
    must,
    must_equal,
    must_not_equal,
    not_,
    start_with,
    throw_a,
    throw_an,
    typed_equal_to,
)

ADDRESS = "40 Hanamal St., Tel Aviv, Israel"
MONTHS = {1: "January", 2: "February"}


class TestEquality:
    def test_equal_values_match(self) -> None:
        assert equal_to(1)(1).ok

    def test_different_values_do_not_match(self) -> None:
        result = equal_to(2)(1)
        assert not result.ok
        assert result.expected == 2
        assert result.actual == 1
        assert result.message == "1 != 2"

    def test_be_equal_to_is_an_alias(self) -> None:
        assert be_equal_to("a")("a")

    def test_typed_equality_rejects_other_types(self) -> None:
        assert typed_equal_to(1)(1).ok
        assert not typed_equal_to(1)(1.0).ok
        assert not typed_equal_to(1)(True).ok

    def test_ignore_case(self) -> None:
        matcher = equal_to("40 hanamal st., tel aviv, ISRAEL").ignore_case()
        assert matcher(ADDRESS).ok
        assert not equal_to("40 hanamal st., tel aviv, ISRAEL")(ADDRESS).ok

    def test_booleans_require_identity(self) -> None:
        assert be_true()(True).ok
        assert not be_true()(1).ok
        assert be_false()(False).ok


class TestNegation:
    def test_not_inverts_verdict_and_message(self) -> None:
        result = not_(equal_to(2))(1)
        assert result.ok
        failing = not_(equal_to(1))(1)
        assert not failing.ok
        assert failing.message == "1 == 1"

    def test_invert_operator(self) -> None:
        assert (~equal_to(2))(1).ok

    def test_double_negation_returns_the_wrapped_matcher(self) -> None:
        matcher = equal_to(1)
        assert ~~matcher is matcher


class TestStrings:
    def test_contain_substring(self) -> None:
        assert contain("Tel Aviv")(ADDRESS).ok
        assert not contain("Haifa")(ADDRESS).ok

    def test_suffix_and_prefix(self) -> None:
        assert end_with("Israel")(ADDRESS).ok
        assert not end_with("Tel Aviv")(ADDRESS).ok
        assert start_with("40")(ADDRESS).ok

    def test_suffix_on_non_string_is_a_mismatch(self) -> None:
        assert not end_with("x")(42).ok

    def test_length(self) -> None:
        assert have_length(32)(ADDRESS).ok
        assert not have_length(31)(ADDRESS).ok
        assert not have_length(1)(7).ok


class TestNumbers:
    @pytest.mark.parametrize(
        ("value", "ok"),
        [(0, True), (25, True), (100, True), (150, False), (-1, False)],
    )
    def test_between_is_inclusive(self, value: int, ok: bool) -> None:
        assert be_between(0, 100)(value).ok is ok

    def test_ordering(self) -> None:
        assert be_ge(20)(20).ok
        assert not be_greater_than(20)(20).ok
        assert be_greater_than(10)(32).ok
        assert be_less_than(5)(4).ok

    def test_incomparable_types_do_not_match(self) -> None:
        assert not be_ge(1)("a").ok


class TestOptional:
    def test_some_with_value(self) -> None:
        assert be_some("John")("John").ok
        assert not be_some("John")("Jane").ok
        assert not be_some("John")(None).ok

    def test_some_without_value(self) -> None:
        assert be_some()(0).ok
        assert not be_some()(None).ok

    def test_none(self) -> None:
        assert be_none()(None).ok
        assert not_(be_none())("John").ok


class TestCollections:
    def test_empty(self) -> None:
        assert be_empty()([]).ok
        assert not be_empty()(["Jane"]).ok

    def test_does_not_contain(self) -> None:
        assert not_(contain("Jane"))([]).ok

    def test_pair_and_keys(self) -> None:
        assert have_pair((1, "January"))(MONTHS).ok
        assert not have_pair((1, "February"))(MONTHS).ok
        assert not_(have_key(12))(MONTHS).ok
        assert have_key(2)(MONTHS).ok

    def test_key_count_and_values(self) -> None:
        assert have_size(2)(MONTHS.keys()).ok
        assert contain("February")(MONTHS.values()).ok

    def test_pair_on_non_mapping(self) -> None:
        assert not have_pair((1, "January"))([(1, "January")]).ok


class TestThrow:
    def test_matches_expected_exception(self) -> None:
        def explode() -> None:
            raise ValueError("Kaboom!")

        result = throw_an(Exception)(explode)
        assert result.ok
        assert isinstance(result.actual, ValueError)

    def test_nothing_raised(self) -> None:
        result = throw_a(ValueError)(lambda: None)
        assert not result.ok
        assert "raised nothing" in result.message

    def test_wrong_exception_type(self) -> None:
        def explode() -> None:
            raise KeyError("k")

        result = throw_a(ValueError)(explode)
        assert not result.ok
        assert "KeyError" in result.message

    def test_message_pattern(self) -> None:
        def explode() -> None:
            raise RuntimeError("Kaboom!")

        assert throw_a(RuntimeError, match="Kab")(explode).ok
        assert not throw_a(RuntimeError, match="^boom")(explode).ok

    def test_not_callable(self) -> None:
        assert not throw_an(Exception)(3).ok


class TestMust:
    def test_returns_result_on_match(self) -> None:
        assert must(1, equal_to(1)).ok

    def test_raises_failed_with_both_sides(self) -> None:
        with pytest.raises(Failed) as excinfo:
            must(1, equal_to(2))
        assert excinfo.value.expected == 2
        assert excinfo.value.actual == 1
        assert str(excinfo.value) == "1 != 2"

    def test_shorthands(self) -> None:
        must_equal("a", "a")
        must_not_equal(1, 2)
        with pytest.raises(Failed):
            must_not_equal(1, 1)

    def test_failed_is_an_assertion_error(self) -> None:
        with pytest.raises(AssertionError):
            must([], not_(be_empty()))


class TestInapplicableValues:
    """A matcher that cannot be applied to a value fails whether negated or not."""

    @pytest.mark.parametrize(
        ("actual", "matcher"),
        [
            ([12], have_key(12)),
            (None, contain("Jane")),
            (5, be_empty()),
            ("abc", be_between(0, 100)),
        ],
    )
    def test_negated_matcher_still_fails(self, actual, matcher) -> None:
        with pytest.raises(Failed) as excinfo:
            must(actual, not_(matcher))
        assert "cannot check" in str(excinfo.value)

    def test_key_on_a_list_is_not_applicable(self) -> None:
        result = not_(have_key(12))([12])
        assert not result.ok
        assert not result.applicable
        assert "cannot check whether [12]" in result.message

    def test_throw_on_non_callable_fails_when_negated(self) -> None:
        assert not not_(throw_an(Exception))(3).ok
