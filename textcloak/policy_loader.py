"""Loading field policies from YAML files, YAML strings and dictionaries.

A policy file looks like this::

    version: "1.0"
    name: request-logging
    case_sensitive: false
    default_strategy:
      kind: none
    fields:
      password:
        kind: fixed_length
        parameters: {length: 8}
      card_number:
        kind: portion
        parameters: {keep_at_end: 4, fixed_total_length: 16}
      authorization:
        kind: chain
        segments:
          - {kind: none, until_length: 7}
          - {kind: all}

Function-backed strategies cannot be expressed in a policy file; add them
in code with ``MaskingPolicy.with_field``.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .core.exceptions import ObfuscationError, PolicyValidationError
from .masking.base import Obfuscator, StrategyKind
from .masking.portion import PortionBuilder
from .masking.strategies import all_chars, fixed_length, fixed_value, none
from .policies import MaskingPolicy

logger = logging.getLogger(__name__)

# Parameters accepted per strategy kind
_STRATEGY_PARAMETERS: dict[StrategyKind, set[str]] = {
    StrategyKind.ALL: {"mask_char"},
    StrategyKind.NONE: set(),
    StrategyKind.FIXED_LENGTH: {"length", "mask_char"},
    StrategyKind.FIXED_VALUE: {"value"},
    StrategyKind.PORTION: {
        "keep_at_start",
        "keep_at_end",
        "at_least_from_start",
        "at_least_from_end",
        "fixed_total_length",
        "mask_char",
    },
    StrategyKind.CHAIN: set(),
}

_REQUIRED_PARAMETERS: dict[StrategyKind, set[str]] = {
    StrategyKind.FIXED_LENGTH: {"length"},
    StrategyKind.FIXED_VALUE: {"value"},
}


class StrategyConfig(BaseModel):
    """Pydantic model for strategy configuration validation."""

    model_config = ConfigDict(extra="forbid")

    kind: str = Field(..., description="Strategy type")
    parameters: dict[str, Any] = Field(
        default_factory=dict, description="Strategy parameters"
    )
    until_length: Optional[int] = Field(
        None, ge=1, description="Switch length when used as a chain segment"
    )
    segments: Optional[list["StrategyConfig"]] = Field(
        None, description="Chain segments, in order"
    )

    @field_validator("kind")
    @classmethod
    def validate_kind(cls, v: Any) -> Any:
        """Validate strategy kind is supported in policy files."""
        valid_kinds = [k for k in _STRATEGY_PARAMETERS]
        try:
            kind = StrategyKind(v)
        except ValueError as e:
            raise ValueError(
                f"Invalid strategy kind '{v}'. Valid kinds: {[k.value for k in valid_kinds]}"
            ) from e
        if kind not in valid_kinds:
            raise ValueError(f"Strategy kind '{v}' cannot be configured in a policy file")
        return v

    @model_validator(mode="after")
    def validate_parameters(self) -> "StrategyConfig":
        """Validate parameters and chain segments for the strategy kind."""
        kind = StrategyKind(self.kind)

        unknown = set(self.parameters) - _STRATEGY_PARAMETERS[kind]
        if unknown:
            raise ValueError(f"Unknown parameters for '{self.kind}' strategy: {sorted(unknown)}")
        missing = _REQUIRED_PARAMETERS.get(kind, set()) - set(self.parameters)
        if missing:
            raise ValueError(f"Missing parameters for '{self.kind}' strategy: {sorted(missing)}")

        if kind == StrategyKind.CHAIN:
            if not self.segments or len(self.segments) < 2:
                raise ValueError("Chain strategy requires at least two segments")
            for index, segment in enumerate(self.segments[:-1]):
                if segment.until_length is None:
                    raise ValueError(f"Chain segment {index} requires until_length")
            if self.segments[-1].until_length is not None:
                raise ValueError("The last chain segment must not have until_length")
        elif self.segments is not None:
            raise ValueError(f"Only chain strategies have segments, not '{self.kind}'")
        return self


StrategyConfig.model_rebuild()


class PolicyFileSchema(BaseModel):
    """Pydantic model for complete policy file validation."""

    model_config = ConfigDict(extra="forbid")

    version: str = Field("1.0", description="Policy format version")
    name: Optional[str] = Field(None, description="Policy name")
    description: Optional[str] = Field(None, description="Policy description")
    case_sensitive: bool = Field(True, description="Whether field names are case-sensitive")
    default_strategy: Optional[StrategyConfig] = Field(
        None, description="Strategy for fields without a mapping"
    )
    fields: dict[str, StrategyConfig] = Field(
        default_factory=dict, description="Field name to strategy mappings"
    )

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: Any) -> Any:
        """Validate policy version format."""
        if str(v).split(".")[0] != "1":
            raise ValueError(f"Unsupported policy version '{v}'")
        return v


class PolicyLoader:
    """
    Loads field policies and turns them into MaskingPolicy instances.

    Examples:
        >>> loader = PolicyLoader()
        >>> policy = loader.load_policy_from_dict({"fields": {"password": {"kind": "all"}}})
        >>> policy.mask_field("password", "hunter2")
        '*******'
    """

    def __init__(self, base_path: Optional[Union[str, Path]] = None):
        """
        Initialize policy loader.

        Args:
            base_path: Directory that relative policy paths are resolved
                against. Defaults to the current directory.
        """
        self.base_path = Path(base_path) if base_path else Path.cwd()
        self._policy_cache: dict[Path, MaskingPolicy] = {}

    def load_policy(self, policy_path: Union[str, Path]) -> MaskingPolicy:
        """
        Load a policy from a YAML file.

        Args:
            policy_path: Path to policy file (absolute or relative to base_path)

        Returns:
            The loaded policy

        Raises:
            FileNotFoundError: If the policy file does not exist
            PolicyValidationError: If the policy is invalid
        """
        path = Path(policy_path)
        if not path.is_absolute():
            path = self.base_path / path
        path = path.resolve()

        if path in self._policy_cache:
            return self._policy_cache[path]

        if not path.exists():
            raise FileNotFoundError(f"Policy file not found: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                policy_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise PolicyValidationError(
                f"Invalid YAML in {path}: {e}", config_file=str(path)
            ) from e

        try:
            policy = self.load_policy_from_dict(policy_data)
        except PolicyValidationError as e:
            e.add_context("config_file", str(path))
            raise

        self._policy_cache[path] = policy
        logger.info(f"Loaded policy from {path} with {len(policy.fields)} field(s)")
        return policy

    def load_policy_from_string(self, content: str) -> MaskingPolicy:
        """Load a policy from YAML text."""
        try:
            policy_data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise PolicyValidationError(f"Invalid YAML: {e}") from e
        return self.load_policy_from_dict(policy_data)

    def load_policy_from_dict(self, policy_data: Any) -> MaskingPolicy:
        """Load a policy from already parsed data."""
        if policy_data is None:
            policy_data = {}
        if not isinstance(policy_data, dict):
            raise PolicyValidationError(
                f"Policy must be a mapping, got {type(policy_data).__name__}"
            )

        try:
            schema = PolicyFileSchema(**policy_data)
        except ValidationError as e:
            raise PolicyValidationError(f"Schema validation failed: {e}") from e

        return self._schema_to_masking_policy(schema)

    def _schema_to_masking_policy(self, schema: PolicyFileSchema) -> MaskingPolicy:
        """Convert validated policy schema to MaskingPolicy instance."""
        default_obfuscator = None
        if schema.default_strategy is not None:
            default_obfuscator = self._build(schema.default_strategy, "default_strategy")

        fields = {
            name: self._build(config, f"fields.{name}")
            for name, config in schema.fields.items()
        }

        try:
            policy = MaskingPolicy(
                fields=fields,
                default_obfuscator=default_obfuscator,
                case_sensitive=schema.case_sensitive,
            )
        except ObfuscationError as e:
            raise PolicyValidationError(str(e), config_section="fields") from e

        logger.debug(
            f"Built policy {schema.name or '<unnamed>'}: fields={sorted(fields)}, "
            f"case_sensitive={schema.case_sensitive}"
        )
        return policy

    def _build(self, config: StrategyConfig, section: str) -> Obfuscator:
        try:
            return self.build_obfuscator(config)
        except (ObfuscationError, TypeError) as e:
            if isinstance(e, PolicyValidationError):
                raise
            raise PolicyValidationError(
                f"Invalid strategy in '{section}': {e}", config_section=section
            ) from e

    def build_obfuscator(self, config: StrategyConfig) -> Obfuscator:
        """
        Create the strategy described by a validated strategy configuration.

        Raises:
            InvalidArgumentError: If a parameter value is invalid
            InvalidStateError: If the parameters are inconsistent
        """
        kind = StrategyKind(config.kind)
        params = config.parameters

        if kind == StrategyKind.ALL:
            return all_chars(params.get("mask_char"))
        if kind == StrategyKind.NONE:
            return none()
        if kind == StrategyKind.FIXED_LENGTH:
            return fixed_length(params["length"], params.get("mask_char"))
        if kind == StrategyKind.FIXED_VALUE:
            return fixed_value("" if params["value"] is None else str(params["value"]))
        if kind == StrategyKind.PORTION:
            return self._build_portion(params)

        segments = config.segments or []
        obfuscator = self.build_obfuscator(segments[0])
        for previous, segment in zip(segments, segments[1:]):
            obfuscator = obfuscator.until_length(previous.until_length).then(
                self.build_obfuscator(segment)
            )
        return obfuscator

    def _build_portion(self, params: dict[str, Any]) -> Obfuscator:
        builder = PortionBuilder()
        builder.keep_at_start(params.get("keep_at_start", 0))
        builder.keep_at_end(params.get("keep_at_end", 0))
        builder.at_least_from_start(params.get("at_least_from_start", 0))
        builder.at_least_from_end(params.get("at_least_from_end", 0))
        builder.with_fixed_total_length(params.get("fixed_total_length"))
        if "mask_char" in params:
            builder.with_mask_char(params["mask_char"])
        return builder.build()

    def validate_policy_file(self, policy_path: Union[str, Path]) -> list[str]:
        """
        Validate a policy file and return any validation errors.

        Args:
            policy_path: Path to policy file to validate

        Returns:
            List of validation error messages (empty if valid)
        """
        try:
            self.load_policy(policy_path)
            return []
        except (PolicyValidationError, FileNotFoundError) as e:
            return [str(e)]
