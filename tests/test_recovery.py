"""Tests for the token recovery rules."""

from recovery import (
    absorb_digit_prefix,
    complete_keyword,
    merge_next,
    split_after,
    split_route,
    tokenize_line,
)


def test_tokenize_line_drops_colons() -> None:
    assert tokenize_line("A1234 BASE REPT: 0545L") == ["A1234", "BASE", "REPT", "0545L"]
    assert tokenize_line("   ") == []


def test_merge_next_joins_following_token() -> None:
    tokens = ["A1234", "BASE", "REPT", "05", "45L"]

    assert merge_next(tokens, 3) == ["A1234", "BASE", "REPT", "0545L"]
    assert tokens == ["A1234", "BASE", "REPT", "05", "45L"]
    assert merge_next(tokens, 4) is None


def test_complete_keyword_variants() -> None:
    rept = complete_keyword("REPT")

    assert rept(["A1234", "BASE", "R", "EPT", "0545L"], 2) == ["A1234", "BASE", "REPT", "0545L"]
    assert rept(["A1234", "BASE", "RE", "PT0545L"], 2) == ["A1234", "BASE", "REPT", "0545L"]
    assert rept(["A1234", "BASE", "REP", "T", "0545L"], 2) == ["A1234", "BASE", "REPT", "0545L"]
    assert complete_keyword("BASE")(["A1234", "BA", "SE", "REPT"], 1) == ["A1234", "BASE", "REPT"]


def test_complete_keyword_does_not_apply_to_unrelated_tokens() -> None:
    rept = complete_keyword("REPT")

    assert rept(["A1234", "BASE", "XX", "0545L"], 2) is None
    assert rept(["A1234", "BASE", "RE", "0545L"], 2) is None
    assert rept.__name__ == "complete_rept"


def test_absorb_digit_prefix() -> None:
    assert absorb_digit_prefix(["MO", "45", "6LGA-DCA"], 1) == ["MO", "456", "LGA-DCA"]
    assert absorb_digit_prefix(["MO", "45", "6", "LGA-DCA"], 1) == ["MO", "456", "LGA-DCA"]
    assert absorb_digit_prefix(["MO", "456", "LGA-DCA"], 1) is None


def test_split_after_only_for_long_tokens() -> None:
    rule = split_after(2, longer_than=4)

    assert rule(["215", "45E75"], 1) == ["215", "45", "E75"]
    assert rule(["215", "45"], 1) is None


def test_split_route() -> None:
    assert split_route(["MO", "1234", "BOS-ORD", "0700"], 2) == ["MO", "1234", "BOS", "ORD", "0700"]
    assert split_route(["MO", "1234", "BOS", "-ORD", "0700"], 2) == ["MO", "1234", "BOS", "ORD", "0700"]
    assert split_route(["MO", "1234", "BOS-", "ORD", "0700"], 2) == ["MO", "1234", "BOS", "ORD", "0700"]
