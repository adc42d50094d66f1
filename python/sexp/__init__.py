"""Streaming S-expression parser with flexible and canonical tree forms."""

import logging

from ._errors import (
    ParseError,
    ReadError,
    SExpError,
    UnbalancedParensError,
    UnexpectedCloseParenError,
)
from ._nodes import List, Node, Pair, Symbol, clone
from ._parser import Mode, Parser, ParseResult, ParserState, parse, parse_incremental, parse_one
from ._stream import Stream, spawn
from ._tokens import DEFAULT_CHUNK_SIZE, DEFAULT_ENCODING, Token, TokenKind, tokenize

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_ENCODING",
    "List",
    "Mode",
    "Node",
    "Pair",
    "ParseError",
    "ParseResult",
    "Parser",
    "ParserState",
    "ReadError",
    "SExpError",
    "Stream",
    "Symbol",
    "Token",
    "TokenKind",
    "UnbalancedParensError",
    "UnexpectedCloseParenError",
    "clone",
    "parse",
    "parse_incremental",
    "parse_one",
    "spawn",
    "tokenize",
]
