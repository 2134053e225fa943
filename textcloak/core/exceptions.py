"""TextCloak exception hierarchy.

Every error raised by the masking engine derives from ObfuscationError. Each
concrete kind also derives from the builtin exception a Python caller would
naturally catch for it (IndexError for bad ranges, ValueError for bad
arguments, and so on), so existing handlers keep working.

I/O failures raised by sinks and sources are never wrapped; they propagate
to the caller unchanged.
"""

from typing import Any, Dict, List, Optional


class ObfuscationError(Exception):
    """Base exception for all TextCloak errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        context: Additional error context and metadata
        recovery_suggestions: List of suggested recovery actions
        component: Component where the error originated
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[List[str]] = None,
        component: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self._default_error_code()
        self.context = context or {}
        self.recovery_suggestions = recovery_suggestions or []
        self.component = component or self._infer_component()

    def __str__(self) -> str:
        return self.message

    def _default_error_code(self) -> str:
        """Generate default error code based on exception class name."""
        return self.__class__.__name__.upper().replace("ERROR", "_ERROR")

    def _infer_component(self) -> str:
        """Infer component name from exception class."""
        name = self.__class__.__name__.lower()
        if "stream" in name:
            return "streaming"
        elif "policy" in name or "configuration" in name:
            return "configuration"
        elif "range" in name:
            return "text"
        else:
            return "masking"

    def add_context(self, key: str, value: Any) -> None:
        """Add additional context to the error."""
        self.context[key] = value

    def add_recovery_suggestion(self, suggestion: str) -> None:
        """Add a recovery suggestion to help users resolve the error."""
        if suggestion not in self.recovery_suggestions:
            self.recovery_suggestions.append(suggestion)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to structured dictionary for logging/reporting."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "component": self.component,
            "context": self.context,
            "recovery_suggestions": self.recovery_suggestions,
        }


class OutOfRangeError(ObfuscationError, IndexError):
    """Raised when a start/end (or offset/length) pair does not fit the text.

    Always raised before anything is written to a destination.
    """

    def __init__(
        self,
        message: str,
        length: Optional[int] = None,
        start: Optional[int] = None,
        end: Optional[int] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        if length is not None:
            self.add_context("length", length)
        if start is not None:
            self.add_context("start", start)
        if end is not None:
            self.add_context("end", end)


class InvalidArgumentError(ObfuscationError, ValueError):
    """Raised for negative counts, malformed chains and missing collaborators."""

    def __init__(
        self,
        message: str,
        argument: Optional[str] = None,
        actual_value: Optional[Any] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        if argument:
            self.add_context("argument", argument)
        if actual_value is not None:
            self.add_context("actual_value", repr(actual_value))


class InvalidStateError(ObfuscationError, RuntimeError):
    """Raised when a configuration is internally inconsistent.

    Also raised when a caller-supplied masking function breaks its contract
    by returning None.
    """

    def __init__(
        self,
        message: str,
        strategy_type: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        if strategy_type:
            self.add_context("strategy_type", strategy_type)


class StreamClosedError(ObfuscationError, ValueError):
    """Raised when writing to or flushing an already closed writer or reader.

    Derives from ValueError, like the io module's closed-file errors.
    """

    def __init__(self, message: str = "I/O operation on closed stream", **kwargs: Any):
        super().__init__(message, **kwargs)


class ConfigurationError(InvalidArgumentError):
    """Raised when configuration is invalid or incomplete."""

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        config_section: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        if config_file:
            self.add_context("config_file", config_file)
        if config_section:
            self.add_context("config_section", config_section)


class PolicyValidationError(ConfigurationError):
    """Raised when a field policy definition fails validation."""


# Convenience functions for creating common exception scenarios

def create_range_error(length: int, start: int, end: int) -> OutOfRangeError:
    """Create an out-of-range error for a start/end pair."""
    error = OutOfRangeError(
        f"Invalid range [{start}, {end}) for text of length {length}",
        length=length,
        start=start,
        end=end,
    )
    error.add_recovery_suggestion("Ensure 0 <= start <= end <= len(text)")
    return error


def create_negative_error(argument: str, value: int) -> InvalidArgumentError:
    """Create an error for a count that must not be negative."""
    return InvalidArgumentError(
        f"{argument} must not be negative, got {value}",
        argument=argument,
        actual_value=value,
    )


def create_missing_error(argument: str) -> InvalidArgumentError:
    """Create an error for a required collaborator that was None."""
    return InvalidArgumentError(f"{argument} is required", argument=argument)
