import io
import logging

import sexp
from sexp import ParserState


class CountingReader(io.StringIO):
    """StringIO that records how much text has been handed out."""

    def __init__(self, text):
        super().__init__(text)
        self.consumed = 0

    def read(self, size=-1):
        data = super().read(size)
        self.consumed += len(data)
        return data


def test_yields_expressions_in_order():
    parser = sexp.parse_incremental("(a b) c (d (e f))")
    assert [repr(e) for e in parser] == ["(a b)", "c", "(d (e f))"]
    assert parser.error is None
    assert parser.state is ParserState.DONE


def test_expression_available_before_rest_is_read():
    source = "(first one) " + "(filler x) " * 500
    reader = CountingReader(source)
    parser = sexp.parse_incremental(reader, chunk_size=16)
    first = next(parser)
    assert repr(first) == "(first one)"
    assert reader.consumed < len(source)
    parser.close()


def test_error_reported_after_completed_expressions():
    parser = sexp.parse_incremental("(a) (b) (c")
    assert [repr(e) for e in parser] == ["a", "b"]
    assert isinstance(parser.error, sexp.UnbalancedParensError)
    assert parser.error.depth == 1
    assert parser.state is ParserState.FAILED


def test_unexpected_close_reports_line():
    parser = sexp.parse_incremental("(a b)\n(c d))\n(e f)")
    assert [repr(e) for e in parser] == ["(a b)", "(c d)"]
    assert isinstance(parser.error, sexp.UnexpectedCloseParenError)
    assert parser.error.line == 2
    assert "line 2" in str(parser.error)


def test_no_error_before_exhaustion():
    parser = sexp.parse_incremental("(a) (b")
    next(parser)
    assert parser.error is None
    assert list(parser) == []
    assert parser.error is not None


def test_state_and_depth_track_nesting():
    parser = sexp.parse_incremental("x (a (b")
    assert parser.state is ParserState.AWAITING
    assert repr(next(parser)) == "x"
    assert parser.depth == 0
    assert list(parser) == []
    assert parser.state is ParserState.FAILED
    assert parser.depth == 2


def test_close_stops_parsing(tmp_path):
    path = tmp_path / "many.sexp"
    path.write_text("(a) " * 100, encoding="utf-8")
    with sexp.parse_incremental(path) as parser:
        assert repr(next(parser)) == "a"
    assert list(parser) == []
    assert parser.error is None


def test_close_before_start():
    parser = sexp.parse_incremental("(a b)")
    parser.close()
    assert list(parser) == []


def test_close_leaves_caller_stream_open():
    reader = io.StringIO("(a) (b)")
    with sexp.parse_incremental(reader) as parser:
        next(parser)
    assert not reader.closed


def test_canonical_mode_incremental():
    parser = sexp.parse_incremental("(a b c) (d)", sexp.Mode.CANONICAL)
    assert parser.mode is sexp.Mode.CANONICAL
    assert [repr(e) for e in parser] == ["(a (b c))", "(d)"]


def test_logs_completed_expressions(caplog):
    with caplog.at_level(logging.DEBUG, logger="sexp"):
        sexp.parse("(a b) c")
    assert "expression 2 complete" in caplog.text


def test_logs_failure(caplog):
    with caplog.at_level(logging.DEBUG, logger="sexp"):
        sexp.parse("(a b")
    assert "parse failed after 0 expression(s)" in caplog.text
