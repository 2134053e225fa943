"""Portion strategy: keep a window at the start and end, mask the rest.

The number of characters kept depends on the length of the input, so this
strategy needs the complete text before it can produce anything. Its pull
surface reads the whole source first and its writer collects until closed.

Algorithm, for an input of length ``L``:

1. ``from_start`` is 0 if ``at_least_from_start > 0``, otherwise
   ``min(keep_at_start, max(0, L - at_least_from_end))``.
2. ``from_end`` is 0 if ``at_least_from_end > 0``, otherwise
   ``min(keep_at_end, available, max(0, L - at_least_from_start))`` where
   ``available`` is ``L`` with a fixed total length and ``L - from_start``
   without one. With a fixed total length, the kept windows may overlap.
3. The masked count is ``fixed_total_length - from_start - from_end`` if a
   fixed total length is set, else ``fixed_obfuscated_length`` if set, else
   ``L - from_start - from_end``.
"""

import logging
import warnings
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Optional, Tuple, TypeVar

from ..core.config import DEFAULT_MASK_CHAR, get_config
from ..core.exceptions import InvalidStateError, create_negative_error
from ..core.sinks import Sink, append_repeated
from ..core.text import ConcatText, RepeatingChars, TextLike, check_mask_char, sub_text
from .base import Obfuscator, StrategyKind

logger = logging.getLogger(__name__)

R = TypeVar("R")


@dataclass(frozen=True)
class PortionObfuscator(Obfuscator):
    """Keeps literal windows at the start and end of the text and masks the middle.

    Attributes:
        keep_at_start: Number of characters to keep at the start
        keep_at_end: Number of characters to keep at the end
        at_least_from_start: Minimum number of characters to mask from the
            start; when positive nothing is kept at the start
        at_least_from_end: Minimum number of characters to mask from the
            end; when positive nothing is kept at the end
        fixed_total_length: Exact length of every result, or None
        fixed_obfuscated_length: Exact number of mask characters, or None.
            Deprecated in favor of fixed_total_length
        mask_char: Character used for masking

    Examples:
        >>> PortionObfuscator(keep_at_start=2, keep_at_end=2)("1234567890")
        '12******90'
    """

    kind: ClassVar[StrategyKind] = StrategyKind.PORTION

    keep_at_start: int = 0
    keep_at_end: int = 0
    at_least_from_start: int = 0
    at_least_from_end: int = 0
    fixed_total_length: Optional[int] = None
    fixed_obfuscated_length: Optional[int] = None
    mask_char: str = DEFAULT_MASK_CHAR

    def __post_init__(self) -> None:
        """Validate the configuration after initialization."""
        for name in ("keep_at_start", "keep_at_end", "at_least_from_start", "at_least_from_end"):
            value = getattr(self, name)
            if value < 0:
                raise create_negative_error(name, value)
        if self.fixed_obfuscated_length is not None and self.fixed_obfuscated_length < 0:
            raise create_negative_error("fixed_obfuscated_length", self.fixed_obfuscated_length)
        if self.fixed_total_length is not None:
            if self.fixed_total_length < 0:
                raise create_negative_error("fixed_total_length", self.fixed_total_length)
            if self.fixed_total_length < self.keep_at_start + self.keep_at_end:
                error = InvalidStateError(
                    f"fixed_total_length ({self.fixed_total_length}) is smaller than "
                    f"keep_at_start + keep_at_end ({self.keep_at_start + self.keep_at_end})",
                    strategy_type=self.kind.value,
                )
                error.add_recovery_suggestion(
                    "Increase fixed_total_length or reduce the kept windows"
                )
                raise error
        check_mask_char(self.mask_char)

    def _portions(self, length: int) -> Tuple[int, int, int]:
        """Return ``(from_start, masked, from_end)`` for an input of ``length``."""
        if self.at_least_from_start > 0:
            from_start = 0
        else:
            from_start = min(self.keep_at_start, max(0, length - self.at_least_from_end))

        if self.at_least_from_end > 0:
            from_end = 0
        else:
            available = length if self.fixed_total_length is not None else length - from_start
            from_end = min(self.keep_at_end, available, max(0, length - self.at_least_from_start))

        if self.fixed_total_length is not None:
            masked = self.fixed_total_length - from_start - from_end
        elif self.fixed_obfuscated_length is not None:
            masked = self.fixed_obfuscated_length
        else:
            masked = length - from_start - from_end
        return from_start, masked, from_end

    def _mask_text(self, text: TextLike, start: int, end: int) -> TextLike:
        from_start, masked, from_end = self._portions(end - start)
        result: TextLike = RepeatingChars(self.mask_char, masked)
        if from_start > 0:
            result = ConcatText(sub_text(text, start, start + from_start), result)
        if from_end > 0:
            result = ConcatText(result, sub_text(text, end - from_end, end))
        return result

    def _mask_to(self, text: TextLike, start: int, end: int, sink: Sink) -> None:
        from_start, masked, from_end = self._portions(end - start)
        if from_start > 0:
            sink.append(text, start, start + from_start)
        append_repeated(sink, self.mask_char, masked)
        if from_end > 0:
            sink.append(text, end - from_end, end)


class PortionBuilder:
    """Fluent builder for PortionObfuscator instances.

    Examples:
        >>> masker = portion().keep_at_start(4).at_least_from_end(4).build()
        >>> masker("foobar")
        'fo****'
    """

    def __init__(self) -> None:
        self.with_defaults()

    def keep_at_start(self, count: int) -> "PortionBuilder":
        """Set the number of characters to keep at the start."""
        self._keep_at_start = _non_negative("keep_at_start", count)
        return self

    def keep_at_end(self, count: int) -> "PortionBuilder":
        """Set the number of characters to keep at the end."""
        self._keep_at_end = _non_negative("keep_at_end", count)
        return self

    def at_least_from_start(self, count: int) -> "PortionBuilder":
        """Set the minimum number of characters to mask from the start."""
        self._at_least_from_start = _non_negative("at_least_from_start", count)
        return self

    def at_least_from_end(self, count: int) -> "PortionBuilder":
        """Set the minimum number of characters to mask from the end."""
        self._at_least_from_end = _non_negative("at_least_from_end", count)
        return self

    def with_fixed_total_length(self, length: Optional[int]) -> "PortionBuilder":
        """Set the exact length of every result, or remove it with None.

        Short inputs are padded with mask characters and the kept windows
        may repeat characters, so the result never reveals the input length.
        """
        self._fixed_total_length = None if length is None else _non_negative("fixed_total_length", length)
        return self

    def with_fixed_length(self, length: Optional[int]) -> "PortionBuilder":
        """Set the exact number of mask characters; None or a negative value removes it.

        .. deprecated::
            Use ``with_fixed_total_length`` instead.
        """
        warnings.warn(
            "with_fixed_length is deprecated; use with_fixed_total_length instead",
            DeprecationWarning,
            stacklevel=2,
        )
        self._fixed_obfuscated_length = None if length is None or length < 0 else length
        return self

    def with_mask_char(self, mask_char: str) -> "PortionBuilder":
        check_mask_char(mask_char)
        self._mask_char = mask_char
        return self

    def with_defaults(self) -> "PortionBuilder":
        """Restore the default settings: keep nothing and mask every character."""
        self._keep_at_start = 0
        self._keep_at_end = 0
        self._at_least_from_start = 0
        self._at_least_from_end = 0
        self._fixed_total_length: Optional[int] = None
        self._fixed_obfuscated_length: Optional[int] = None
        self._mask_char = get_config().default_mask_char
        return self

    def transform(self, function: Callable[["PortionBuilder"], R]) -> R:
        """Apply ``function`` to this builder and return its result."""
        return function(self)

    def build(self) -> PortionObfuscator:
        """Create a PortionObfuscator from the current settings.

        Raises:
            InvalidStateError: If the fixed total length is smaller than the
                combined keep windows
        """
        obfuscator = PortionObfuscator(
            keep_at_start=self._keep_at_start,
            keep_at_end=self._keep_at_end,
            at_least_from_start=self._at_least_from_start,
            at_least_from_end=self._at_least_from_end,
            fixed_total_length=self._fixed_total_length,
            fixed_obfuscated_length=self._fixed_obfuscated_length,
            mask_char=self._mask_char,
        )
        logger.debug(f"Built portion strategy: {obfuscator}")
        return obfuscator

    def __repr__(self) -> str:
        return (
            f"PortionBuilder(keep_at_start={self._keep_at_start}, keep_at_end={self._keep_at_end}, "
            f"at_least_from_start={self._at_least_from_start}, "
            f"at_least_from_end={self._at_least_from_end}, "
            f"fixed_total_length={self._fixed_total_length}, "
            f"fixed_obfuscated_length={self._fixed_obfuscated_length}, "
            f"mask_char={self._mask_char!r})"
        )


def _non_negative(name: str, value: Any) -> int:
    if value < 0:
        raise create_negative_error(name, value)
    return value


def portion() -> PortionBuilder:
    """Return a builder for strategies that keep part of the text unmasked."""
    return PortionBuilder()
