"""Masking strategies and the writers that stream through them."""

from .base import Obfuscator, StrategyKind
from .chaining import PrefixBuilder, PrefixObfuscator
from .portion import PortionBuilder, PortionObfuscator, portion
from .strategies import (
    AllObfuscator,
    FixedLengthObfuscator,
    FixedValueObfuscator,
    FunctionObfuscator,
    NoneObfuscator,
    all_chars,
    fixed_length,
    fixed_value,
    from_function,
    none,
)
from .writers import ObfuscatingWriter

__all__ = [
    "Obfuscator",
    "StrategyKind",
    "ObfuscatingWriter",
    "AllObfuscator",
    "NoneObfuscator",
    "FixedLengthObfuscator",
    "FixedValueObfuscator",
    "FunctionObfuscator",
    "PortionObfuscator",
    "PortionBuilder",
    "PrefixObfuscator",
    "PrefixBuilder",
    "all_chars",
    "none",
    "fixed_length",
    "fixed_value",
    "from_function",
    "portion",
]
