"""Unit tests for textcloak.core.config."""

import logging
from pathlib import Path

import pytest

from textcloak.core.config import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_MASK_CHAR,
    MaskingConfig,
    get_config,
    reset_config,
    set_config,
)
from textcloak.core.exceptions import ConfigurationError


class TestMaskingConfig:
    """Test MaskingConfig defaults and validation."""

    def test_defaults(self) -> None:
        config = MaskingConfig()
        assert config.buffer_size == DEFAULT_BUFFER_SIZE == 1024
        assert config.default_mask_char == DEFAULT_MASK_CHAR == "*"

    @pytest.mark.parametrize("buffer_size", [0, -5, "large", True, 1.5])
    def test_invalid_buffer_size_falls_back(self, buffer_size: object, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            config = MaskingConfig(buffer_size=buffer_size)  # type: ignore[arg-type]
        assert config.buffer_size == DEFAULT_BUFFER_SIZE
        assert "buffer_size must be positive integer" in caplog.text

    @pytest.mark.parametrize("mask_char", ["", "##", None])
    def test_invalid_mask_char_falls_back(self, mask_char: object) -> None:
        config = MaskingConfig(default_mask_char=mask_char)  # type: ignore[arg-type]
        assert config.default_mask_char == DEFAULT_MASK_CHAR

    def test_from_dict_ignores_unknown_keys(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            config = MaskingConfig.from_dict({"buffer_size": 16, "colour": "blue"})
        assert config.buffer_size == 16
        assert "colour" in caplog.text

    def test_to_dict_round_trips(self) -> None:
        config = MaskingConfig(buffer_size=64, default_mask_char="#")
        assert MaskingConfig.from_dict(config.to_dict()) == config


@pytest.mark.integration
class TestFromYaml:
    """Test loading configuration from YAML files."""

    def test_top_level_settings(self, policy_dir: Path) -> None:
        path = policy_dir / "masking.yaml"
        path.write_text("buffer_size: 32\ndefault_mask_char: '#'\n", encoding="utf-8")
        config = MaskingConfig.from_yaml(path)
        assert config.buffer_size == 32
        assert config.default_mask_char == "#"

    def test_masking_section(self, policy_dir: Path) -> None:
        path = policy_dir / "app.yaml"
        path.write_text("masking:\n  buffer_size: 8\nother: true\n", encoding="utf-8")
        assert MaskingConfig.from_yaml(str(path)).buffer_size == 8

    def test_empty_file(self, policy_dir: Path) -> None:
        path = policy_dir / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert MaskingConfig.from_yaml(path) == MaskingConfig()

    def test_missing_file(self, policy_dir: Path) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            MaskingConfig.from_yaml(policy_dir / "missing.yaml")
        assert exc_info.value.context["config_file"].endswith("missing.yaml")

    def test_invalid_yaml(self, policy_dir: Path) -> None:
        path = policy_dir / "broken.yaml"
        path.write_text("buffer_size: [1, 2\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            MaskingConfig.from_yaml(path)

    def test_non_mapping(self, policy_dir: Path) -> None:
        path = policy_dir / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            MaskingConfig.from_yaml(path)

    def test_non_mapping_section(self, policy_dir: Path) -> None:
        path = policy_dir / "section.yaml"
        path.write_text("masking: 12\n", encoding="utf-8")
        with pytest.raises(ConfigurationError) as exc_info:
            MaskingConfig.from_yaml(path)
        assert exc_info.value.context["config_section"] == "masking"


class TestGlobalConfig:
    def test_get_config_is_cached(self) -> None:
        assert get_config() is get_config()

    def test_set_and_reset(self) -> None:
        custom = MaskingConfig(buffer_size=7)
        set_config(custom)
        assert get_config() is custom
        reset_config()
        assert get_config().buffer_size == DEFAULT_BUFFER_SIZE
