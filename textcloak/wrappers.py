"""Wrapper classes for enhanced functionality."""

from typing import TYPE_CHECKING, Any, Callable, Optional

from .core.exceptions import create_missing_error

if TYPE_CHECKING:
    from .masking.base import Obfuscator


class Obfuscated:
    """Value wrapper whose string form is masked.

    The wrapped value stays available through ``value``; ``str()`` returns
    the masked form of its string representation. The masked form is
    computed on first use and cached, so the value should be immutable.

    Attributes:
        value: The wrapped value

    Examples:
        >>> from textcloak import portion
        >>> card = portion().keep_at_end(4).build().obfuscate_object("4111111111111111")
        >>> str(card)
        '************1111'
        >>> f"paid with {card}"
        'paid with ************1111'
        >>> card.value
        '4111111111111111'
    """

    __slots__ = ("_value", "_obfuscator", "_representation", "_masked")

    def __init__(
        self,
        value: Any,
        obfuscator: "Obfuscator",
        representation: Optional[Callable[[Any], str]] = None,
    ):
        """Initialize Obfuscated wrapper.

        Args:
            value: The value to wrap
            obfuscator: Strategy used to mask the string representation
            representation: Function that turns the value into text; ``str`` by default
        """
        if value is None:
            raise create_missing_error("value")
        if obfuscator is None:
            raise create_missing_error("obfuscator")
        self._value = value
        self._obfuscator = obfuscator
        self._representation = representation or str
        self._masked: Optional[str] = None

    @property
    def value(self) -> Any:
        return self._value

    @property
    def obfuscator(self) -> "Obfuscator":
        return self._obfuscator

    def map(self, function: Callable[[Any], Any]) -> "Obfuscated":
        """Return a wrapper around ``function(value)`` masked with the same strategy."""
        return Obfuscated(function(self._value), self._obfuscator)

    def __str__(self) -> str:
        if self._masked is None:
            self._masked = self._obfuscator(self._representation(self._value))
        return self._masked

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)

    def __repr__(self) -> str:
        return f"Obfuscated({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Obfuscated):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)
