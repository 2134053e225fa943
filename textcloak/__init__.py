"""TextCloak: streaming text masking for logs, telemetry and output sanitization.

TextCloak masks sensitive values with immutable strategies that produce the
same result whether text is masked in one call, appended to a destination,
read from a source or written piecewise to a streaming writer.

Example:
    >>> from textcloak import all_chars, none, portion
    >>> portion().keep_at_start(2).keep_at_end(2).build()("1234567890")
    '12******90'
    >>> none().until_length(4).then(all_chars())("1234567890")
    '1234******'
"""

__version__ = "0.1.0"

from .core import (
    ConfigurationError,
    InvalidArgumentError,
    InvalidStateError,
    MaskingConfig,
    ObfuscationError,
    OutOfRangeError,
    PolicyValidationError,
    Sink,
    StreamClosedError,
    StringSink,
    TextView,
    get_config,
    reset_config,
    set_config,
)
from .masking import (
    ObfuscatingWriter,
    Obfuscator,
    PortionBuilder,
    StrategyKind,
    all_chars,
    fixed_length,
    fixed_value,
    from_function,
    none,
    portion,
)
from .policies import MaskingPolicy
from .policy_loader import PolicyLoader
from .wrappers import Obfuscated

__all__ = [
    "__version__",
    # Strategies
    "Obfuscator",
    "StrategyKind",
    "PortionBuilder",
    "ObfuscatingWriter",
    "all_chars",
    "none",
    "fixed_length",
    "fixed_value",
    "portion",
    "from_function",
    # Policies
    "MaskingPolicy",
    "PolicyLoader",
    "Obfuscated",
    # Destinations
    "Sink",
    "StringSink",
    "TextView",
    # Configuration
    "MaskingConfig",
    "get_config",
    "set_config",
    "reset_config",
    # Errors
    "ObfuscationError",
    "OutOfRangeError",
    "InvalidArgumentError",
    "InvalidStateError",
    "StreamClosedError",
    "ConfigurationError",
    "PolicyValidationError",
]
