"""Background-thread producer for parsed expressions."""

from __future__ import annotations

import logging
import queue
import threading
import weakref
from types import TracebackType
from typing import Any, Final

from ._errors import SExpError
from ._nodes import Node
from ._parser import Mode, Parser
from ._tokens import Source

logger = logging.getLogger(__name__)

_POLL_INTERVAL: Final[float] = 0.05


class _Finished:
    """Last item a producer puts on the queue."""

    __slots__ = ("crash",)

    def __init__(self, crash: Exception | None = None) -> None:
        self.crash = crash


def _put(q: queue.Queue[Any], stop: threading.Event, item: Any) -> bool:
    while not stop.is_set():
        try:
            q.put(item, timeout=_POLL_INTERVAL)
        except queue.Full:
            continue
        return True
    return False


def _produce(parser: Parser, q: queue.Queue[Any], stop: threading.Event) -> None:
    # Must not hold a reference to the Stream, or an abandoned stream would
    # never be collected and its finalizer never run.
    name = threading.current_thread().name
    logger.debug("producer %s started", name)
    crash = None
    try:
        for node in parser:
            if not _put(q, stop, node):
                logger.debug("producer %s cancelled", name)
                break
    except Exception as exc:
        crash = exc
    finally:
        parser.close()
        _put(q, stop, _Finished(crash))
        logger.debug("producer %s finished", name)


def _stop_producer(stop: threading.Event, q: queue.Queue[Any]) -> None:
    stop.set()
    while True:
        try:
            q.get_nowait()
        except queue.Empty:
            break


class Stream:
    """Parse *source* on a producer thread and hand expressions over a queue.

    The queue holds at most ``buffer`` finished expressions; once it is full
    the producer waits for the consumer before parsing any further. Iterate
    the stream to receive expressions in input order. After iteration ends,
    :attr:`error` holds the parse error, if any.

    Leaving a ``with`` block or calling :meth:`close` stops the producer
    early. Expressions still sitting in the queue are discarded. A stream
    that is dropped without being closed stops its producer when it is
    garbage collected.
    """

    def __init__(
        self,
        source: Source,
        mode: Mode | str = Mode.FLEXIBLE,
        *,
        buffer: int = 1,
        **options: Any,
    ) -> None:
        if buffer < 1:
            raise ValueError("buffer must be at least 1")
        self._parser = Parser(source, mode, **options)
        self._queue: queue.Queue[Any] = queue.Queue(maxsize=buffer)
        self._stop = threading.Event()
        self._finished = False
        self._thread = threading.Thread(
            target=_produce,
            args=(self._parser, self._queue, self._stop),
            name="sexp-producer",
            daemon=True,
        )
        self._finalize = weakref.finalize(self, _stop_producer, self._stop, self._queue)
        self._thread.start()

    @property
    def error(self) -> SExpError | None:
        """The error that ended parsing, or ``None``."""
        return self._parser.error

    def __iter__(self) -> Stream:
        return self

    def __next__(self) -> Node:
        if self._finished:
            raise StopIteration
        item = self._queue.get()
        if isinstance(item, _Finished):
            self._finished = True
            self._finalize.detach()
            self._thread.join()
            if item.crash is not None:
                raise item.crash
            raise StopIteration
        return item

    def close(self) -> None:
        """Stop the producer and wait for its thread to exit."""
        self._finalize()
        self._thread.join()
        self._finished = True

    def __enter__(self) -> Stream:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def spawn(
    source: Source,
    mode: Mode | str = Mode.FLEXIBLE,
    *,
    buffer: int = 1,
    **options: Any,
) -> Stream:
    """Start parsing *source* on a background thread."""
    return Stream(source, mode, buffer=buffer, **options)
