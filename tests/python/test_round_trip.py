import pytest

import sexp


def test_round_trip():
    source = "(player (pos 1 2) (vel 3 4))"
    assert repr(sexp.parse_one(source)) == source


def test_round_trip_nested():
    source = "(a (b (c d)) e)"
    assert repr(sexp.parse_one(source)) == source


def test_round_trip_deeply_nested():
    source = "(a (b (c (d e))) f)"
    assert repr(sexp.parse_one(source)) == source


def test_round_trip_atom():
    assert repr(sexp.parse_one("hello")) == "hello"


def test_round_trip_empty_list():
    assert repr(sexp.parse_one("()")) == "()"


def test_round_trip_normalizes_whitespace():
    t = sexp.parse_one("(a\n\t(b   c)\r\n d )")
    assert repr(t) == "(a (b c) d)"


@pytest.mark.parametrize(
    "source",
    [
        "(defun factorial (x) (if (zerop x) 1 (* x (factorial (- x 1)))))",
        "(chartRule ROOT ((what wh) (is vbz) EXPR (? fullstop)) (Same))",
        "(((a)) (b (c)) () d)",
    ],
)
def test_rendering_reparses_to_equal_tree(source):
    t = sexp.parse_one(source)
    assert sexp.parse_one(repr(t)) == t
