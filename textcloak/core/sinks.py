"""Output sinks that masked text is appended to.

A sink only needs to accept text. Optional capabilities, such as flushing,
are detected once when an adapter is created instead of on every call.

``as_sink`` turns the destinations callers usually have into a sink:

- a ``Sink`` is used as is (every ``ObfuscatingWriter`` is one)
- anything with ``write(str)``, such as ``io.StringIO`` or an open file
- anything with ``append(str)``, such as a list collecting chunks
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from .config import get_config
from .exceptions import InvalidArgumentError, create_missing_error, create_negative_error
from .text import TextLike, check_mask_char, resolve_range, substring


class Sink(ABC):
    """Append-only destination for text.

    Attributes:
        supports_flush: Whether ``flush`` reaches an underlying target
        buffer_backed: Whether appended text is kept in memory
    """

    supports_flush: bool = False
    buffer_backed: bool = False

    @abstractmethod
    def append(self, text: TextLike, start: int = 0, end: Optional[int] = None) -> None:
        """Append ``text[start:end]``.

        Raises:
            OutOfRangeError: If the range does not fit the text
        """

    def append_char(self, char: str) -> None:
        """Append a single character."""
        if not isinstance(char, str) or len(char) != 1:
            raise InvalidArgumentError("Expected a single character", argument="char", actual_value=char)
        self.append(char)

    def flush(self) -> None:
        """Flush the underlying target if it supports flushing."""


class StringSink(Sink):
    """In-memory, buffer-backed sink.

    Examples:
        >>> sink = StringSink()
        >>> sink.append("hello world", 0, 5)
        >>> sink.getvalue()
        'hello'
    """

    buffer_backed = True

    def __init__(self) -> None:
        self._parts: List[str] = []
        self._length = 0

    def append(self, text: TextLike, start: int = 0, end: Optional[int] = None) -> None:
        start, end = resolve_range(text, start, end)
        if start < end:
            self._parts.append(substring(text, start, end))
            self._length += end - start

    def getvalue(self) -> str:
        """Return everything appended so far."""
        if len(self._parts) > 1:
            self._parts = ["".join(self._parts)]
        return self._parts[0] if self._parts else ""

    def clear(self) -> None:
        """Discard everything appended so far."""
        self._parts = []
        self._length = 0

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        return self.getvalue()

    def __repr__(self) -> str:
        return f"StringSink(length={self._length})"


class WriterSink(Sink):
    """Adapter for push-style targets exposing ``write(str)``."""

    def __init__(self, target: Any):
        if target is None:
            raise create_missing_error("target")
        self._target = target
        self.supports_flush = callable(getattr(target, "flush", None))

    @property
    def target(self) -> Any:
        return self._target

    def append(self, text: TextLike, start: int = 0, end: Optional[int] = None) -> None:
        start, end = resolve_range(text, start, end)
        if start < end:
            self._target.write(substring(text, start, end))

    def flush(self) -> None:
        if self.supports_flush:
            self._target.flush()


class AppendSink(Sink):
    """Adapter for targets exposing ``append(str)``, such as a list of chunks."""

    def __init__(self, target: Any):
        if target is None:
            raise create_missing_error("target")
        self._target = target

    @property
    def target(self) -> Any:
        return self._target

    def append(self, text: TextLike, start: int = 0, end: Optional[int] = None) -> None:
        start, end = resolve_range(text, start, end)
        if start < end:
            self._target.append(substring(text, start, end))


def as_sink(destination: Any) -> Sink:
    """Return a sink that appends to ``destination``.

    Raises:
        InvalidArgumentError: If destination is None or cannot accept text
    """
    if destination is None:
        raise create_missing_error("destination")
    if isinstance(destination, Sink):
        return destination
    if callable(getattr(destination, "write", None)):
        return WriterSink(destination)
    if callable(getattr(destination, "append", None)):
        return AppendSink(destination)
    raise InvalidArgumentError(
        f"Cannot append text to {type(destination).__name__}; "
        "expected a Sink or an object with write() or append()",
        argument="destination",
    )


def append_repeated(sink: Sink, char: str, count: int) -> None:
    """Append ``char`` repeated ``count`` times, in buffer-sized chunks."""
    check_mask_char(char)
    if count < 0:
        raise create_negative_error("count", count)
    if count == 0:
        return
    chunk = char * min(count, get_config().buffer_size)
    remaining = count
    while remaining > 0:
        n = min(remaining, len(chunk))
        sink.append(chunk, 0, n)
        remaining -= n
