"""Prefix chaining: one strategy for the first characters, another for the rest.

Chains are built fluently::

    none().until_length(4).then(portion().keep_at_end(2).build())

and can be extended as long as every switch length is larger than the
previous one::

    a.until_length(4).then(b).until_length(12).then(c)
"""

import logging
from dataclasses import dataclass
from typing import Any, ClassVar

from ..core.config import get_config
from ..core.exceptions import InvalidArgumentError, create_missing_error
from ..core.sinks import Sink
from ..core.sources import PushbackReader, read_at_most
from ..core.text import ConcatText, TextLike
from .base import Obfuscator, StrategyKind
from .writers import ObfuscatingWriter

logger = logging.getLogger(__name__)


def _check_switch_length(first: Obfuscator, length: int) -> None:
    if first is None:
        raise create_missing_error("first")
    if length <= 0:
        raise InvalidArgumentError(
            f"Switch length must be positive, got {length}",
            argument="length",
            actual_value=length,
        )
    if isinstance(first, PrefixObfuscator) and length <= first.switch_length:
        error = InvalidArgumentError(
            f"Switch length {length} must be larger than the previous switch length "
            f"{first.switch_length}",
            argument="length",
            actual_value=length,
        )
        error.add_recovery_suggestion("Chain strategies in order of increasing length")
        raise error


class PrefixBuilder:
    """Intermediate result of ``Obfuscator.until_length``; call ``then`` to finish the chain."""

    def __init__(self, obfuscator: Obfuscator, length: int):
        _check_switch_length(obfuscator, length)
        self._obfuscator = obfuscator
        self._length = length

    def then(self, other: Obfuscator) -> "PrefixObfuscator":
        """Return a strategy that uses ``other`` once the switch length is passed."""
        return PrefixObfuscator(self._obfuscator, self._length, other)

    def __repr__(self) -> str:
        return f"PrefixBuilder({self._obfuscator!r}, {self._length})"


@dataclass(frozen=True)
class PrefixObfuscator(Obfuscator):
    """Masks ``[0, switch_length)`` with ``first`` and the remainder with ``second``.

    ``second`` is not used at all for inputs of at most ``switch_length``
    characters.

    Attributes:
        first: Strategy for the prefix
        switch_length: Number of characters masked by first
        second: Strategy for everything after the prefix
    """

    kind: ClassVar[StrategyKind] = StrategyKind.CHAIN

    first: Obfuscator
    switch_length: int
    second: Obfuscator

    def __post_init__(self) -> None:
        _check_switch_length(self.first, self.switch_length)
        if self.second is None:
            raise create_missing_error("second")
        logger.debug(
            f"Chained {self.first.kind.value} strategy with {self.second.kind.value} "
            f"strategy at length {self.switch_length}"
        )

    def _mask_text(self, text: TextLike, start: int, end: int) -> TextLike:
        split_at = min(start + self.switch_length, end)
        prefix = self.first.mask_text(text, start, split_at)
        if split_at == end:
            return prefix
        return ConcatText(prefix, self.second.mask_text(text, split_at, end))

    def _mask_to(self, text: TextLike, start: int, end: int, sink: Sink) -> None:
        split_at = min(start + self.switch_length, end)
        self.first.mask_to(text, sink, start, split_at)
        if split_at < end:
            self.second.mask_to(text, sink, split_at, end)

    def _mask_stream(self, source: Any, sink: Sink) -> None:
        self.first.mask_stream(read_at_most(source, self.switch_length), sink)
        # the second strategy only runs if at least one character is left
        lookahead = source.read(get_config().buffer_size)
        if lookahead:
            self.second.mask_stream(PushbackReader(source, lookahead), sink)

    def _stream_to(self, sink: Sink) -> ObfuscatingWriter:
        return PrefixWriter(self, sink)


class PrefixWriter(ObfuscatingWriter):
    """Writer for PrefixObfuscator.

    Starts with a writer for the first strategy and replaces it with a
    writer for the second strategy when the first character past the
    switch length arrives. A write that straddles the switch length is
    split between both writers.

    The countdown is only decremented after the first writer accepted the
    characters. If closing the first writer at the switch fails, this writer
    is closed and the error propagates.
    """

    def __init__(self, obfuscator: PrefixObfuscator, sink: Sink):
        super().__init__(sink)
        self._second = obfuscator.second
        self._active = obfuscator.first.stream_to(sink)
        self._remaining = obfuscator.switch_length
        self._switched = False

    def _write(self, text: TextLike, start: int, end: int) -> None:
        if not self._switched:
            count = min(end - start, self._remaining)
            if count > 0:
                self._active.append(text, start, start + count)
                self._remaining -= count
                start += count
            if start == end:
                return
            self._switch()
        self._active.append(text, start, end)

    def _switch(self) -> None:
        try:
            self._active.close()
        except Exception:
            self._closed = True
            raise
        self._active = self._second.stream_to(self._sink)
        self._switched = True
        logger.debug(f"Switched to {self._second.kind.value} strategy")

    def _on_flush(self) -> None:
        self._active.flush()

    def _on_close(self) -> None:
        self._active.close()
