"""Shared fixtures for TextCloak tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from tests.utils.doubles import FlushableTarget, RecordingSink
from textcloak.core.config import reset_config


@pytest.fixture(autouse=True)
def clean_config() -> Generator[None, None, None]:
    """Reset the global configuration around every test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def recording_sink() -> RecordingSink:
    """Sink spy that records appends and flushes."""
    return RecordingSink()


@pytest.fixture
def flushable_target() -> FlushableTarget:
    return FlushableTarget()


@pytest.fixture
def policy_dir(tmp_path: Path) -> Path:
    """Directory for policy and configuration files written by tests."""
    directory = tmp_path / "policies"
    directory.mkdir()
    return directory
