"""Runtime configuration for the masking engine.

The engine is configured in code or from a YAML file; it does not read any
environment variables. Invalid values are logged and replaced with safe
defaults rather than rejected, so a bad configuration file never prevents
masking from happening.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 1024
DEFAULT_MASK_CHAR = "*"


@dataclass
class MaskingConfig:
    """Runtime configuration for masking operations.

    Attributes:
        buffer_size: Number of characters requested per read when consuming
            a pull source
        default_mask_char: Mask character used by factories and builders when
            none is given explicitly
    """

    buffer_size: int = DEFAULT_BUFFER_SIZE
    default_mask_char: str = DEFAULT_MASK_CHAR

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate_buffer_size()
        self._validate_mask_char()

        logger.debug(
            f"MaskingConfig initialized: buffer_size={self.buffer_size}, "
            f"default_mask_char={self.default_mask_char!r}"
        )

    def _validate_buffer_size(self) -> None:
        """Validate and normalize buffer_size."""
        if (
            isinstance(self.buffer_size, bool)
            or not isinstance(self.buffer_size, int)
            or self.buffer_size <= 0
        ):
            logger.warning(
                f"buffer_size must be positive integer, got {self.buffer_size!r}, "
                f"using {DEFAULT_BUFFER_SIZE}"
            )
            self.buffer_size = DEFAULT_BUFFER_SIZE

    def _validate_mask_char(self) -> None:
        """Validate and normalize default_mask_char."""
        if not isinstance(self.default_mask_char, str) or len(self.default_mask_char) != 1:
            logger.warning(
                f"default_mask_char must be a single character, got "
                f"{self.default_mask_char!r}, using {DEFAULT_MASK_CHAR!r}"
            )
            self.default_mask_char = DEFAULT_MASK_CHAR

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MaskingConfig":
        """Create configuration from a dictionary, ignoring unknown keys."""
        known = {"buffer_size", "default_mask_char"}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {sorted(unknown)}")
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "MaskingConfig":
        """Load configuration from a YAML file.

        The file may hold the settings at top level or under a ``masking`` key.

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        path = Path(path)
        try:
            with path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read configuration file: {e}", config_file=str(path)
            ) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}", config_file=str(path)
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration file must contain a mapping", config_file=str(path)
            )
        section = data.get("masking", data)
        if not isinstance(section, dict):
            raise ConfigurationError(
                "'masking' section must be a mapping",
                config_file=str(path),
                config_section="masking",
            )

        config = cls.from_dict(section)
        logger.info(f"Loaded masking configuration from {path}: {config}")
        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary for serialization."""
        return {
            "buffer_size": self.buffer_size,
            "default_mask_char": self.default_mask_char,
        }


# Global configuration instance - created lazily to support testing
_config: Optional[MaskingConfig] = None


def get_config() -> MaskingConfig:
    """Get the global masking configuration, creating it if needed."""
    global _config
    if _config is None:
        _config = MaskingConfig()
    return _config


def set_config(config: MaskingConfig) -> None:
    """Replace the global masking configuration."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global configuration for testing purposes."""
    global _config
    _config = None
