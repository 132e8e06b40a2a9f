"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from capsule.version import Version

TOOL_VERSION = Version.parse("0.7.2")

BASIC_CONFIG = """\
version = "0.7.0"
deployment = "deployment.toml"
contracts = [{ name = "my-contract", template_type = "Rust" }]
"""


@pytest.fixture
def tool_version() -> Version:
    """Version the tests pretend the running tool has."""
    return TOOL_VERSION


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Create a project directory holding the given capsule.toml text."""

    def _make(config_text: str = BASIC_CONFIG, name: str = "project") -> Path:
        root = tmp_path / name
        root.mkdir()
        (root / "capsule.toml").write_text(config_text, encoding="utf-8")
        return root

    return _make
