"""The contract every masking strategy implements.

A strategy masks text through three surfaces that always agree:

- ``mask_text`` returns the masked form of a text range
- ``mask_to`` appends that same masked form to a destination
- ``mask_stream`` reads a source to exhaustion and appends the masked form
  of everything read

``stream_to`` adds a push-style writer whose output, once closed, equals
``mask_to`` applied to everything written to it.

Public methods validate their arguments before any output is produced and
then delegate to the ``_mask_*`` hooks implemented by each strategy.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Optional

from ..core.sinks import Sink, StringSink, as_sink
from ..core.sources import check_source, read_all
from ..core.text import TextLike, resolve_range
from .writers import CachingObfuscatingWriter, ObfuscatingWriter

if TYPE_CHECKING:
    from ..wrappers import Obfuscated
    from .chaining import PrefixBuilder


class StrategyKind(Enum):
    """Types of masking strategies available."""

    ALL = "all"
    NONE = "none"
    FIXED_LENGTH = "fixed_length"
    FIXED_VALUE = "fixed_value"
    PORTION = "portion"
    FUNCTION = "function"
    CHAIN = "chain"


class Obfuscator(ABC):
    """Base class for immutable masking strategies.

    Strategies hold no per-call state, so one instance can be shared freely,
    including between threads. Writers returned by ``stream_to`` are not
    shareable; use one writer per masking session.

    Attributes:
        kind: The type of masking strategy
    """

    kind: ClassVar[StrategyKind]

    def mask_text(self, text: TextLike, start: int = 0, end: Optional[int] = None) -> TextLike:
        """Mask ``text[start:end]``.

        The result may be a zero-copy view; it compares equal to the
        corresponding ``str`` and ``str()`` materializes it.

        Raises:
            OutOfRangeError: If the range does not fit the text
        """
        start, end = resolve_range(text, start, end)
        return self._mask_text(text, start, end)

    def mask_to(self, text: TextLike, destination: Any, start: int = 0, end: Optional[int] = None) -> None:
        """Append the masked form of ``text[start:end]`` to ``destination``.

        Args:
            text: The text to mask
            destination: A ``Sink``, or any object with ``write(str)`` or ``append(str)``
            start: Start of the range to mask
            end: End of the range to mask, or None for the end of the text

        Raises:
            OutOfRangeError: If the range does not fit the text; nothing is written
            InvalidArgumentError: If destination cannot accept text
        """
        start, end = resolve_range(text, start, end)
        sink = as_sink(destination)
        self._mask_to(text, start, end, sink)

    def mask_stream(self, source: Any, destination: Any) -> None:
        """Read ``source`` to exhaustion and append the masked result to ``destination``.

        The source is not closed. Errors raised by the source or the
        destination propagate unchanged.
        """
        check_source(source)
        sink = as_sink(destination)
        self._mask_stream(source, sink)

    def mask_source(self, source: Any) -> str:
        """Read ``source`` to exhaustion and return the masked result."""
        sink = StringSink()
        self.mask_stream(source, sink)
        return sink.getvalue()

    def stream_to(self, destination: Any) -> ObfuscatingWriter:
        """Return a writer that masks everything written to it into ``destination``."""
        return self._stream_to(as_sink(destination))

    def __call__(self, text: TextLike) -> str:
        return str(self.mask_text(text))

    def until_length(self, length: int) -> "PrefixBuilder":
        """Start a chain where this strategy masks the first ``length`` characters.

        Examples:
            >>> from textcloak import all_chars, none
            >>> none().until_length(4).then(all_chars())("1234567890")
            '1234******'
        """
        from .chaining import PrefixBuilder

        return PrefixBuilder(self, length)

    def obfuscate_object(
        self, value: Any, representation: Optional[Callable[[Any], str]] = None
    ) -> "Obfuscated":
        """Wrap ``value`` so that its string form is masked with this strategy."""
        from ..wrappers import Obfuscated

        return Obfuscated(value, self, representation)

    @abstractmethod
    def _mask_text(self, text: TextLike, start: int, end: int) -> TextLike:
        """Mask a validated range."""

    def _mask_to(self, text: TextLike, start: int, end: int, sink: Sink) -> None:
        sink.append(self._mask_text(text, start, end))

    def _mask_stream(self, source: Any, sink: Sink) -> None:
        text = read_all(source)
        self._mask_to(text, 0, len(text), sink)

    def _stream_to(self, sink: Sink) -> ObfuscatingWriter:
        return CachingObfuscatingWriter(self, sink)
