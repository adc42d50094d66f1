"""Lexical scanning of S-expression sources."""

from __future__ import annotations

import codecs
import enum
import io
import logging
import os
import re
from collections.abc import Generator, Iterator
from typing import IO, Any, Final, NamedTuple, Union

from ._errors import ReadError

logger = logging.getLogger(__name__)

DEFAULT_ENCODING: Final[str] = "utf-8"
DEFAULT_CHUNK_SIZE: Final[int] = 8192

Source = Union[str, bytes, bytearray, memoryview, "os.PathLike[str]", IO[Any]]

_TOKEN_RE: Final = re.compile(r"[()]|[^\s()]+")


class TokenKind(enum.Enum):
    OPEN = "("
    CLOSE = ")"
    ATOM = "atom"


class Token(NamedTuple):
    kind: TokenKind
    text: str
    line: int


def open_source(source: Source, encoding: str = DEFAULT_ENCODING) -> tuple[IO[Any], bool]:
    """Return a readable object for *source* and whether the caller owns it.

    In-memory sources and paths are wrapped or opened here and must be
    closed by the caller; objects that already expose ``read`` are used as
    they are and left open.

    Raises:
        ReadError: If *source* is a path that cannot be opened.
        TypeError: If *source* is not a supported type.

    """
    if isinstance(source, str):
        return io.StringIO(source), True
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.TextIOWrapper(io.BytesIO(bytes(source)), encoding=encoding), True
    if isinstance(source, os.PathLike):
        logger.debug("opening %s", os.fspath(source))
        try:
            return open(source, encoding=encoding), True
        except OSError as exc:
            raise ReadError(f"cannot open {os.fspath(source)!r}: {exc}") from exc
    if hasattr(source, "read"):
        return source, False
    raise TypeError(f"cannot read S-expressions from {type(source).__name__}")


def _chunks(reader: IO[Any], encoding: str, chunk_size: int) -> Iterator[str]:
    decoder = None
    while True:
        try:
            data = reader.read(chunk_size)
            eof = not data
            if isinstance(data, (bytes, bytearray)):
                if decoder is None:
                    decoder = codecs.getincrementaldecoder(encoding)()
                # a partial multi-byte sequence decodes to "" until completed
                data = decoder.decode(data, final=eof)
        except (OSError, ValueError) as exc:
            raise ReadError(f"cannot read source: {exc}") from exc
        if data:
            yield data
        if eof:
            return


def tokenize(
    source: Source,
    *,
    encoding: str = DEFAULT_ENCODING,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Generator[Token, None, None]:
    """Yield the tokens of *source* lazily, one chunk of input at a time.

    Whitespace separates tokens and is dropped. Every other run of
    characters up to whitespace or a paren is one atom, kept verbatim.
    Nothing is opened or read until the first token is requested.

    Raises:
        TypeError:  Immediately, if *source* is not a supported type.
        ReadError:  During iteration, if opening, reading or decoding the
                    source fails.

    """
    if not isinstance(source, (str, bytes, bytearray, memoryview, os.PathLike)) and not hasattr(
        source, "read"
    ):
        raise TypeError(f"cannot read S-expressions from {type(source).__name__}")
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    return _scan(source, encoding, chunk_size)


def _scan(source: Source, encoding: str, chunk_size: int) -> Generator[Token, None, None]:
    reader, owned = open_source(source, encoding)
    try:
        line = 1
        # pieces of an atom that runs up to the end of the chunks read so far
        pending: list[str] = []
        pending_line = line
        for chunk in _chunks(reader, encoding, chunk_size):
            if pending and (chunk[0] in "()" or chunk[0].isspace()):
                yield Token(TokenKind.ATOM, "".join(pending), pending_line)
                pending.clear()
            pos = 0
            for match in _TOKEN_RE.finditer(chunk):
                start, end = match.span()
                line += chunk.count("\n", pos, start)
                pos = end
                word = match.group()
                if word == "(":
                    yield Token(TokenKind.OPEN, word, line)
                elif word == ")":
                    yield Token(TokenKind.CLOSE, word, line)
                elif end == len(chunk):
                    if not pending:
                        pending_line = line
                    pending.append(word)
                elif pending:
                    pending.append(word)
                    yield Token(TokenKind.ATOM, "".join(pending), pending_line)
                    pending.clear()
                else:
                    yield Token(TokenKind.ATOM, word, line)
            line += chunk.count("\n", pos)
        if pending:
            yield Token(TokenKind.ATOM, "".join(pending), pending_line)
    finally:
        if owned:
            reader.close()
