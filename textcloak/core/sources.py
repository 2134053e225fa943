"""Pull sources that unmasked text is read from.

A source is anything with a ``read(size)`` method returning a ``str``, where
an empty string marks the end of input (``io.StringIO``, text files, and the
readers in this module all qualify). The masking engine never closes a source
it was handed; that remains the caller's responsibility.
"""

from typing import Any, List, Optional

from .config import get_config
from .exceptions import InvalidArgumentError, StreamClosedError, create_missing_error, create_negative_error
from .sinks import Sink
from .text import TextLike, check_mask_char, resolve_range, substring


class TextReader:
    """Pull source over ``text[start:end]``.

    Examples:
        >>> reader = TextReader("hello world", 6)
        >>> reader.read(3)
        'wor'
        >>> reader.read()
        'ld'
        >>> reader.read()
        ''
    """

    def __init__(self, text: TextLike, start: int = 0, end: Optional[int] = None):
        start, end = resolve_range(text, start, end)
        self._text: Optional[TextLike] = text
        self._end = end
        self._index = start
        self._mark = start

    def _check_closed(self) -> TextLike:
        if self._text is None:
            raise StreamClosedError("Reader is closed")
        return self._text

    @property
    def closed(self) -> bool:
        return self._text is None

    def read(self, size: Optional[int] = -1) -> str:
        """Read up to ``size`` characters; all remaining ones if size is negative.

        Returns:
            The characters read, or an empty string at the end of input
        """
        text = self._check_closed()
        if size == 0 or self._index >= self._end:
            return ""
        available = self._end - self._index
        count = available if size is None or size < 0 else min(size, available)
        chunk = substring(text, self._index, self._index + count)
        self._index += count
        return chunk

    def read_char(self) -> str:
        """Read a single character, or an empty string at the end of input."""
        return self.read(1)

    def skip(self, n: int) -> int:
        """Skip up to ``n`` characters and return how many were skipped."""
        self._check_closed()
        if n < 0:
            raise create_negative_error("n", n)
        skipped = min(n, max(0, self._end - self._index))
        self._index += skipped
        return skipped

    def ready(self) -> bool:
        """Return whether a read would return characters without blocking."""
        self._check_closed()
        return self._index < self._end

    def mark(self) -> None:
        """Remember the current position for ``reset``."""
        self._check_closed()
        self._mark = self._index

    def reset(self) -> None:
        """Return to the position remembered by ``mark``."""
        self._check_closed()
        self._index = self._mark

    def close(self) -> None:
        self._text = None

    def __enter__(self) -> "TextReader":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class LimitReader:
    """Pull source that stops after at most ``limit`` characters of another source.

    Characters past the limit stay unread in the wrapped source.
    """

    def __init__(self, source: Any, limit: int):
        check_source(source)
        if limit < 0:
            raise create_negative_error("limit", limit)
        self._source = source
        self._remaining = limit

    @property
    def remaining(self) -> int:
        return self._remaining

    def read(self, size: Optional[int] = -1) -> str:
        if self._remaining == 0 or size == 0:
            return ""
        to_read = self._remaining if size is None or size < 0 else min(size, self._remaining)
        chunk = self._source.read(to_read)
        if not chunk:
            self._remaining = 0
            return ""
        self._remaining -= len(chunk)
        return chunk

    def close(self) -> None:
        """Close the wrapped source."""
        close = getattr(self._source, "close", None)
        if callable(close):
            close()


class PushbackReader:
    """Pull source that returns ``pushed`` before reading on from another source.

    Used to look ahead one chunk without losing it.
    """

    def __init__(self, source: Any, pushed: str):
        check_source(source)
        self._source = source
        self._pushed = pushed or ""

    def read(self, size: Optional[int] = -1) -> str:
        if size == 0:
            return ""
        if self._pushed:
            if size is None or size < 0:
                chunk, self._pushed = self._pushed, ""
                return chunk + read_all(self._source)
            chunk, self._pushed = self._pushed[:size], self._pushed[size:]
            return chunk
        return self._source.read(size)

    def close(self) -> None:
        """Close the wrapped source."""
        self._pushed = ""
        close = getattr(self._source, "close", None)
        if callable(close):
            close()


def check_source(source: Any) -> None:
    """Check that ``source`` can be read from.

    Raises:
        InvalidArgumentError: If source is None or has no ``read`` method
    """
    if source is None:
        raise create_missing_error("source")
    if not callable(getattr(source, "read", None)):
        raise InvalidArgumentError(
            f"Cannot read text from {type(source).__name__}; expected an object with read()",
            argument="source",
        )


def reader(text: TextLike, start: int = 0, end: Optional[int] = None) -> TextReader:
    """Return a pull source over ``text[start:end]``."""
    return TextReader(text, start, end)


def read_at_most(source: Any, limit: int) -> LimitReader:
    """Return a pull source that reads at most ``limit`` characters of ``source``."""
    return LimitReader(source, limit)


def read_all(source: Any) -> str:
    """Read ``source`` to exhaustion and return everything read."""
    check_source(source)
    buffer_size = get_config().buffer_size
    parts: List[str] = []
    while True:
        chunk = source.read(buffer_size)
        if not chunk:
            return "".join(parts)
        parts.append(chunk)


def discard_all(source: Any) -> int:
    """Read ``source`` to exhaustion, discarding its contents.

    Returns:
        The number of characters discarded
    """
    check_source(source)
    buffer_size = get_config().buffer_size
    count = 0
    while True:
        chunk = source.read(buffer_size)
        if not chunk:
            return count
        count += len(chunk)


def copy_all(source: Any, sink: Sink) -> None:
    """Append everything read from ``source`` to ``sink``."""
    check_source(source)
    buffer_size = get_config().buffer_size
    while True:
        chunk = source.read(buffer_size)
        if not chunk:
            return
        sink.append(chunk)


def mask_all(source: Any, mask_char: str, sink: Sink) -> None:
    """Append one ``mask_char`` to ``sink`` for every character read from ``source``."""
    check_source(source)
    check_mask_char(mask_char)
    buffer_size = get_config().buffer_size
    mask = mask_char * buffer_size
    while True:
        chunk = source.read(buffer_size)
        if not chunk:
            return
        if len(chunk) <= len(mask):
            sink.append(mask, 0, len(chunk))
        else:
            sink.append(mask_char * len(chunk))
