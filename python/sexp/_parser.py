"""Parser turning a token stream into top-level expressions."""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterator
from types import TracebackType
from typing import Any, NamedTuple

from ._errors import ParseError, SExpError, UnbalancedParensError, UnexpectedCloseParenError
from ._nodes import List, Node, Pair, Symbol
from ._tokens import Source, TokenKind, tokenize

logger = logging.getLogger(__name__)


class Mode(str, enum.Enum):
    """How closed groups are turned into nodes."""

    #: Variable-arity :class:`List` nodes; one-element groups collapse.
    FLEXIBLE = "flexible"
    #: Right-nested :class:`Pair` chains.
    CANONICAL = "canonical"


class ParserState(enum.Enum):
    AWAITING = "awaiting"
    IN_GROUP = "in_group"
    DONE = "done"
    FAILED = "failed"


def _build_flexible(children: list[Node]) -> Node:
    if len(children) == 1:
        return children[0]
    return List(children)


def _build_canonical(children: list[Node]) -> Pair | None:
    chain = tip = None
    for child in children:
        if tip is None:
            chain = tip = Pair.promote(child)
        else:
            tip = tip._attach(child)
    return chain


class Parser:
    """Incremental parser over a source of S-expressions.

    A parser is an iterator: each ``next()`` reads just enough input to
    complete the following top-level expression. When the input is
    malformed or unreadable, iteration stops and the error is available
    from :attr:`error`; expressions completed before the failure have
    already been yielded.

    Closing the parser (directly or by leaving a ``with`` block) stops it
    and releases any stream it opened itself.
    """

    def __init__(self, source: Source, mode: Mode | str = Mode.FLEXIBLE, **options: Any) -> None:
        self.mode = Mode(mode)
        self._tokens = tokenize(source, **options)
        self._build = _build_canonical if self.mode is Mode.CANONICAL else _build_flexible
        self._frames: list[list[Node]] = []
        self._state = ParserState.AWAITING
        self._error: SExpError | None = None
        self._emitted = 0
        self._output = self._run()

    @property
    def state(self) -> ParserState:
        return self._state

    @property
    def depth(self) -> int:
        """Number of groups currently open."""
        return len(self._frames)

    @property
    def error(self) -> SExpError | None:
        """The error that ended parsing, or ``None``."""
        return self._error

    def __iter__(self) -> Parser:
        return self

    def __next__(self) -> Node:
        return next(self._output)

    def close(self) -> None:
        self._output.close()
        self._tokens.close()

    def __enter__(self) -> Parser:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _emit(self, node: Node) -> Node:
        self._emitted += 1
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("expression %d complete (%d leaves)", self._emitted, node.leaf_count)
        return node

    def _run(self) -> Iterator[Node]:
        frames = self._frames
        line = 1
        try:
            for token in self._tokens:
                line = token.line
                if token.kind is TokenKind.OPEN:
                    frames.append([])
                    self._state = ParserState.IN_GROUP
                elif token.kind is TokenKind.ATOM:
                    if frames:
                        frames[-1].append(Symbol(token.text))
                    else:
                        yield self._emit(Symbol(token.text))
                else:
                    if not frames:
                        raise UnexpectedCloseParenError(line)
                    node = self._build(frames.pop())
                    if frames:
                        if node is not None:
                            frames[-1].append(node)
                        continue
                    self._state = ParserState.AWAITING
                    if node is None:
                        logger.debug("dropping empty top-level group at line %d", line)
                    else:
                        yield self._emit(node)
            if frames:
                raise UnbalancedParensError(len(frames), line)
            self._state = ParserState.DONE
        except SExpError as exc:
            logger.debug("parse failed after %d expression(s): %s", self._emitted, exc)
            self._state = ParserState.FAILED
            self._error = exc
        finally:
            self._tokens.close()


class ParseResult(NamedTuple):
    """Every expression of a source plus the error that stopped parsing."""

    expressions: list[Node]
    error: SExpError | None

    def raise_for_error(self) -> None:
        """Raise :attr:`error` if parsing failed."""
        if self.error is not None:
            raise self.error


def parse_incremental(source: Source, mode: Mode | str = Mode.FLEXIBLE, **options: Any) -> Parser:
    """Return a :class:`Parser` yielding expressions as they complete."""
    return Parser(source, mode, **options)


def parse(source: Source, mode: Mode | str = Mode.FLEXIBLE, **options: Any) -> ParseResult:
    """Parse every top-level expression of *source*.

    Errors do not raise: they are returned alongside the expressions that
    were completed before the failure.

    Args:
        source: ``str``, ``bytes``, ``bytearray``, a path, or a readable
            file object.
        mode: :attr:`Mode.FLEXIBLE` (default) or :attr:`Mode.CANONICAL`.
        **options: ``encoding`` and ``chunk_size``, passed to
            :func:`~sexp.tokenize`.

    """
    with Parser(source, mode, **options) as parser:
        expressions = list(parser)
    return ParseResult(expressions, parser.error)


def parse_one(source: Source, mode: Mode | str = Mode.FLEXIBLE, **options: Any) -> Node:
    """Parse a source holding exactly one top-level expression.

    Raises:
        ParseError: If the input is malformed or does not hold exactly one
                    expression.
        ReadError:  If the source cannot be read.

    """
    expressions, error = parse(source, mode, **options)
    if error is not None:
        raise error
    if len(expressions) != 1:
        raise ParseError(f"expected exactly one expression, got {len(expressions)}")
    return expressions[0]
