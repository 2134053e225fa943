"""Content-independent strategies and the function-backed strategy."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Optional

from ..core.config import DEFAULT_MASK_CHAR, get_config
from ..core.exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    create_missing_error,
    create_negative_error,
)
from ..core.sinks import Sink, append_repeated
from ..core.sources import copy_all, discard_all, mask_all
from ..core.text import RepeatingChars, TextLike, TextView, check_mask_char, sub_text, substring
from .base import Obfuscator, StrategyKind
from .writers import DiscardingWriter, MaskCharWriter, ObfuscatingWriter, PassThroughWriter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AllObfuscator(Obfuscator):
    """Replaces every character with the mask character.

    Examples:
        >>> AllObfuscator("#")("abc")
        '###'
    """

    kind: ClassVar[StrategyKind] = StrategyKind.ALL

    mask_char: str = DEFAULT_MASK_CHAR

    def __post_init__(self) -> None:
        check_mask_char(self.mask_char)

    def _mask_text(self, text: TextLike, start: int, end: int) -> TextLike:
        return RepeatingChars(self.mask_char, end - start)

    def _mask_to(self, text: TextLike, start: int, end: int, sink: Sink) -> None:
        append_repeated(sink, self.mask_char, end - start)

    def _mask_stream(self, source: Any, sink: Sink) -> None:
        mask_all(source, self.mask_char, sink)

    def _stream_to(self, sink: Sink) -> ObfuscatingWriter:
        return MaskCharWriter(sink, self.mask_char)


@dataclass(frozen=True)
class NoneObfuscator(Obfuscator):
    """Leaves text unchanged."""

    kind: ClassVar[StrategyKind] = StrategyKind.NONE

    def _mask_text(self, text: TextLike, start: int, end: int) -> TextLike:
        return sub_text(text, start, end)

    def _mask_to(self, text: TextLike, start: int, end: int, sink: Sink) -> None:
        sink.append(text, start, end)

    def _mask_stream(self, source: Any, sink: Sink) -> None:
        copy_all(source, sink)

    def _stream_to(self, sink: Sink) -> ObfuscatingWriter:
        return PassThroughWriter(sink)


@dataclass(frozen=True)
class FixedLengthObfuscator(Obfuscator):
    """Replaces any text with ``length`` mask characters.

    The output does not reveal the length of the input.

    Attributes:
        length: Number of mask characters to produce
        mask_char: Character used for masking
    """

    kind: ClassVar[StrategyKind] = StrategyKind.FIXED_LENGTH

    length: int
    mask_char: str = DEFAULT_MASK_CHAR
    _mask: RepeatingChars = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.length < 0:
            raise create_negative_error("length", self.length)
        check_mask_char(self.mask_char)
        object.__setattr__(self, "_mask", RepeatingChars(self.mask_char, self.length))

    def _mask_text(self, text: TextLike, start: int, end: int) -> TextLike:
        return self._mask

    def _mask_to(self, text: TextLike, start: int, end: int, sink: Sink) -> None:
        append_repeated(sink, self.mask_char, self.length)

    def _mask_stream(self, source: Any, sink: Sink) -> None:
        discard_all(source)
        append_repeated(sink, self.mask_char, self.length)

    def _stream_to(self, sink: Sink) -> ObfuscatingWriter:
        return DiscardingWriter(sink, self._mask)


@dataclass(frozen=True)
class FixedValueObfuscator(Obfuscator):
    """Replaces any text with a fixed value, which may be empty.

    Examples:
        >>> FixedValueObfuscator("<hidden>")("hunter2")
        '<hidden>'
    """

    kind: ClassVar[StrategyKind] = StrategyKind.FIXED_VALUE

    value: str

    def __post_init__(self) -> None:
        if self.value is None:
            raise create_missing_error("value")
        if isinstance(self.value, TextView):
            object.__setattr__(self, "value", str(self.value))

    def _mask_text(self, text: TextLike, start: int, end: int) -> TextLike:
        return self.value

    def _mask_stream(self, source: Any, sink: Sink) -> None:
        discard_all(source)
        sink.append(self.value)

    def _stream_to(self, sink: Sink) -> ObfuscatingWriter:
        return DiscardingWriter(sink, self.value)


@dataclass(frozen=True)
class FunctionObfuscator(Obfuscator):
    """Masks text with a caller-supplied function.

    The function receives the text to mask as a ``str`` and must return the
    masked text. It may return an empty string but never None.

    Attributes:
        function: The masking function
    """

    kind: ClassVar[StrategyKind] = StrategyKind.FUNCTION

    function: Callable[[str], TextLike]

    def __post_init__(self) -> None:
        if self.function is None:
            raise create_missing_error("function")
        if not callable(self.function):
            raise InvalidArgumentError(
                f"function must be callable, got {type(self.function).__name__}",
                argument="function",
            )

    def _mask_text(self, text: TextLike, start: int, end: int) -> TextLike:
        result = self.function(substring(text, start, end))
        if result is None:
            raise InvalidStateError(
                f"Masking function {_function_name(self.function)} returned None",
                strategy_type=self.kind.value,
            )
        if not isinstance(result, (str, TextView)):
            raise InvalidStateError(
                f"Masking function {_function_name(self.function)} returned "
                f"{type(result).__name__} instead of text",
                strategy_type=self.kind.value,
            )
        return result


def _function_name(function: Callable[..., Any]) -> str:
    return getattr(function, "__qualname__", None) or repr(function)


# Factory functions

def all_chars(mask_char: Optional[str] = None) -> AllObfuscator:
    """Return a strategy that replaces every character with ``mask_char``."""
    return AllObfuscator(mask_char if mask_char is not None else get_config().default_mask_char)


def none() -> NoneObfuscator:
    """Return a strategy that leaves text unchanged."""
    return _NONE


def fixed_length(length: int, mask_char: Optional[str] = None) -> FixedLengthObfuscator:
    """Return a strategy that replaces any text with ``length`` mask characters.

    Raises:
        InvalidArgumentError: If length is negative
    """
    return FixedLengthObfuscator(
        length, mask_char if mask_char is not None else get_config().default_mask_char
    )


def fixed_value(value: TextLike) -> FixedValueObfuscator:
    """Return a strategy that replaces any text with ``value``."""
    return FixedValueObfuscator(value)


def from_function(function: Callable[[str], TextLike]) -> FunctionObfuscator:
    """Return a strategy that masks text by calling ``function``."""
    logger.debug(f"Creating function strategy for {_function_name(function)}")
    return FunctionObfuscator(function)


_NONE = NoneObfuscator()
