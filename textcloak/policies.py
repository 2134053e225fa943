"""Field policies: which strategy masks the value of which named field."""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from .core.exceptions import InvalidArgumentError, create_missing_error
from .core.sinks import as_sink
from .core.text import TextLike
from .masking.base import Obfuscator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MaskingPolicy:
    """
    Maps field names to the strategies that mask their values.

    Fields without a mapping use the default strategy; without a default
    strategy their values pass through unchanged.

    Attributes:
        fields: Field name to strategy mappings
        default_obfuscator: Strategy for fields that have no mapping, or None
        case_sensitive: Whether field names are matched case-sensitively

    Examples:
        >>> from textcloak import all_chars, portion
        >>> policy = MaskingPolicy(
        ...     fields={
        ...         "password": all_chars(),
        ...         "card_number": portion().keep_at_end(4).build(),
        ...     },
        ...     case_sensitive=False,
        ... )
        >>> policy.mask_field("Password", "hunter2")
        '*******'
        >>> policy.mask_field("username", "admin")
        'admin'
    """

    fields: dict[str, Obfuscator] = field(default_factory=dict)
    default_obfuscator: Optional[Obfuscator] = field(default=None)
    case_sensitive: bool = field(default=True)
    _lookup: dict[str, Obfuscator] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate mappings and build the lookup table."""
        lookup: dict[str, Obfuscator] = {}
        for name, obfuscator in self.fields.items():
            if not isinstance(name, str) or not name:
                raise InvalidArgumentError(
                    "Field names must be non-empty strings", argument="fields", actual_value=name
                )
            if obfuscator is None:
                raise create_missing_error(f"fields[{name!r}]")
            key = self._key(name)
            if key in lookup:
                raise InvalidArgumentError(
                    f"Field name {name!r} collides with another field when matched case-insensitively",
                    argument="fields",
                    actual_value=name,
                )
            lookup[key] = obfuscator
        object.__setattr__(self, "_lookup", lookup)

    def _key(self, name: str) -> str:
        return name if self.case_sensitive else name.casefold()

    def get_obfuscator(self, name: str) -> Optional[Obfuscator]:
        """
        Get the strategy for a field.

        Args:
            name: The field name

        Returns:
            The mapped strategy, else the default strategy, else None
        """
        if name is None:
            raise create_missing_error("name")
        obfuscator = self._lookup.get(self._key(name))
        return obfuscator if obfuscator is not None else self.default_obfuscator

    def mask_field(self, name: str, value: TextLike) -> str:
        """Return ``value`` masked with the strategy for field ``name``."""
        if value is None:
            raise create_missing_error("value")
        obfuscator = self.get_obfuscator(name)
        if obfuscator is None:
            return str(value)
        return str(obfuscator.mask_text(value))

    def mask_field_to(self, name: str, value: TextLike, destination: Any) -> None:
        """Append ``value`` masked with the strategy for field ``name`` to ``destination``."""
        if value is None:
            raise create_missing_error("value")
        obfuscator = self.get_obfuscator(name)
        if obfuscator is None:
            as_sink(destination).append(value)
        else:
            obfuscator.mask_to(value, destination)

    def with_field(self, name: str, obfuscator: Obfuscator) -> "MaskingPolicy":
        """Create a new policy with an additional or replaced field mapping."""
        new_fields = {
            existing: mapped
            for existing, mapped in self.fields.items()
            if self._key(existing) != self._key(name)
        }
        new_fields[name] = obfuscator
        return MaskingPolicy(
            fields=new_fields,
            default_obfuscator=self.default_obfuscator,
            case_sensitive=self.case_sensitive,
        )

    def with_default(self, obfuscator: Optional[Obfuscator]) -> "MaskingPolicy":
        """Create a new policy with a different default strategy."""
        return MaskingPolicy(
            fields=self.fields,
            default_obfuscator=obfuscator,
            case_sensitive=self.case_sensitive,
        )

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._key(name) in self._lookup
