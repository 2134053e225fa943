"""Incremental writers returned by ``Obfuscator.stream_to``.

Two flavors exist. Forwarding writers transform each write as it arrives and
pass the result straight to the sink; they are used by strategies whose
output does not depend on the whole input. Collecting writers buffer every
write and run the strategy once, over the complete text, when closed.

All writers share one state machine: they start open, ``close()`` performs
the finalization exactly once, and every write or flush after that raises
``StreamClosedError``. A writer never closes the sink it writes to.
"""

import logging
from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Iterable, Optional

from ..core.exceptions import StreamClosedError, create_missing_error
from ..core.sinks import Sink, StringSink, append_repeated
from ..core.text import TextLike, check_mask_char, resolve_range

if TYPE_CHECKING:
    from .base import Obfuscator

logger = logging.getLogger(__name__)


class ObfuscatingWriter(Sink):
    """Base class for incremental writers.

    A writer is itself a sink, so it can be the destination of another
    masking call, and it mimics the write side of ``io.TextIOBase``.

    Examples:
        >>> from textcloak import all_chars
        >>> chunks = []
        >>> with all_chars().stream_to(chunks) as writer:
        ...     writer.write("secret")
        6
        >>> "".join(chunks)
        '******'
    """

    supports_flush = True

    def __init__(self, sink: Sink):
        if sink is None:
            raise create_missing_error("sink")
        self._sink = sink
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise StreamClosedError("Writer is closed")

    def write(self, text: TextLike) -> int:
        """Write ``text`` and return the number of characters written."""
        self._check_open()
        if text is None:
            raise create_missing_error("text")
        length = len(text)
        if length:
            self._write(text, 0, length)
        return length

    def writelines(self, lines: Iterable[TextLike]) -> None:
        for line in lines:
            self.write(line)

    def append(self, text: TextLike, start: int = 0, end: Optional[int] = None) -> None:
        self._check_open()
        start, end = resolve_range(text, start, end)
        if start < end:
            self._write(text, start, end)

    def flush(self) -> None:
        """Flush the sink.

        Raises:
            StreamClosedError: If the writer is closed
        """
        self._check_open()
        self._on_flush()

    def close(self) -> None:
        """Finalize the output. Calling close more than once has no effect.

        The writer is closed afterwards even if finalization raised.
        """
        if self._closed:
            return
        try:
            self._on_close()
        finally:
            self._closed = True

    def __enter__(self) -> "ObfuscatingWriter":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @abstractmethod
    def _write(self, text: TextLike, start: int, end: int) -> None:
        """Handle ``text[start:end]``; the range is already validated and non-empty."""

    def _on_flush(self) -> None:
        self._sink.flush()

    def _on_close(self) -> None:
        self._sink.flush()


class MaskCharWriter(ObfuscatingWriter):
    """Forwards one mask character for every character written."""

    def __init__(self, sink: Sink, mask_char: str):
        super().__init__(sink)
        check_mask_char(mask_char)
        self._mask_char = mask_char

    def _write(self, text: TextLike, start: int, end: int) -> None:
        append_repeated(self._sink, self._mask_char, end - start)


class PassThroughWriter(ObfuscatingWriter):
    """Forwards everything written unchanged."""

    def _write(self, text: TextLike, start: int, end: int) -> None:
        self._sink.append(text, start, end)


class DiscardingWriter(ObfuscatingWriter):
    """Ignores everything written and appends a fixed replacement on close."""

    def __init__(self, sink: Sink, replacement: TextLike):
        super().__init__(sink)
        if replacement is None:
            raise create_missing_error("replacement")
        self._replacement = replacement

    def _write(self, text: TextLike, start: int, end: int) -> None:
        pass

    def _on_close(self) -> None:
        self._sink.append(self._replacement)
        super()._on_close()


class CachingObfuscatingWriter(ObfuscatingWriter):
    """Collects everything written and masks it in one go when closed.

    Used by strategies that need the complete input, such as keeping the
    last characters of a value or calling an arbitrary function on it.
    """

    def __init__(self, obfuscator: "Obfuscator", sink: Sink):
        super().__init__(sink)
        if obfuscator is None:
            raise create_missing_error("obfuscator")
        self._obfuscator = obfuscator
        self._buffer = StringSink()

    def _write(self, text: TextLike, start: int, end: int) -> None:
        self._buffer.append(text, start, end)

    def _on_close(self) -> None:
        collected = self._buffer.getvalue()
        self._buffer.clear()
        logger.debug(
            f"Masking {len(collected)} collected characters with "
            f"{self._obfuscator.kind.value} strategy"
        )
        self._obfuscator.mask_to(collected, self._sink)
        super()._on_close()
