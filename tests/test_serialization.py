from __future__ import annotations

import pytest

from chart_slug.runtime.serialization import (
    canonicalize,
    encode,
    needs_quoting,
    percent_encode,
    quote_string,
    stable_slug_dumps,
)


@pytest.mark.parametrize("text", ["cpu", "a.b", "web-01", "ts_cpu", "TRUE"])
def test_plain_identifiers_stay_bare(text):
    assert needs_quoting(text) is False
    assert quote_string(text) == text


@pytest.mark.parametrize(
    "text",
    ["", "true", "false", "null", "1w", "42", "-x", "a b", "a\tb", "a:b", "f(x)", "a,b", "hi!", "it's", "a*", "a@b", "$x"],
)
def test_ambiguous_or_reserved_strings_are_quoted(text):
    assert needs_quoting(text) is True
    assert quote_string(text).startswith("'")


def test_quote_escapes_bang_and_single_quote():
    assert quote_string("it's!") == "'it!'s!!'"
    assert quote_string("") == "''"


def test_encode_scalars():
    assert encode(True) == "true"
    assert encode(False) == "false"
    assert encode(0) == "0"
    assert encode(-5) == "-5"
    assert encode("42") == "'42'"


def test_encode_containers():
    assert encode({}) == "()"
    assert encode([]) == "!()"
    assert encode({"b": [1, True, "x"], "a": None}) == "(b:!(1,true,x))"


def test_encode_keeps_given_key_order():
    assert encode({"z": 1, "a": 2}) == "(z:1,a:2)"


def test_encode_rejects_unsupported_values():
    with pytest.raises(TypeError):
        encode(1.5)
    with pytest.raises(TypeError):
        encode({1: "x"})


def test_canonicalize_sorts_keys_and_keeps_list_order():
    value = {"b": 1, "a": {"d": 2, "c": None}, "l": [{"y": 1, "x": 2}, "z", "a"]}

    assert canonicalize(value) == {"a": {"d": 2}, "b": 1, "l": [{"x": 2, "y": 1}, "z", "a"]}
    assert list(canonicalize(value)) == ["a", "b", "l"]
    assert stable_slug_dumps(value) == "(a:(d:2),b:1,l:!((x:2,y:1),z,a))"


def test_stable_dumps_is_deterministic_for_equal_input():
    first = {"s": [{"q": "ts(a)", "n": "A"}], "ci": "acme"}
    second = {"ci": "acme", "s": [{"n": "A", "q": "ts(a)"}]}

    assert stable_slug_dumps(first) == stable_slug_dumps(second)


def test_percent_encode_keeps_rison_punctuation():
    assert percent_encode("(a:'b',c:!(d))") == "(a:'b',c:!(d))"
    assert percent_encode("a b") == "a%20b"
    assert percent_encode("é#&") == "%C3%A9%23%26"
