"""Core building blocks: errors, text views, sinks, sources and configuration."""

from .config import MaskingConfig, get_config, reset_config, set_config
from .exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    InvalidStateError,
    ObfuscationError,
    OutOfRangeError,
    PolicyValidationError,
    StreamClosedError,
)
from .sinks import AppendSink, Sink, StringSink, WriterSink, as_sink
from .sources import (
    LimitReader,
    PushbackReader,
    TextReader,
    copy_all,
    discard_all,
    mask_all,
    read_all,
    read_at_most,
    reader,
)
from .text import (
    CharArrayView,
    ConcatText,
    RepeatingChars,
    TextLike,
    TextView,
    concat,
    repeat_char,
    sub_text,
    wrap_array,
)

__all__ = [
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
    # Sinks
    "Sink",
    "StringSink",
    "WriterSink",
    "AppendSink",
    "as_sink",
    # Sources
    "TextReader",
    "LimitReader",
    "PushbackReader",
    "reader",
    "read_at_most",
    "read_all",
    "discard_all",
    "copy_all",
    "mask_all",
    # Text views
    "TextLike",
    "TextView",
    "CharArrayView",
    "RepeatingChars",
    "ConcatText",
    "repeat_char",
    "concat",
    "sub_text",
    "wrap_array",
]
