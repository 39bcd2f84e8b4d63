"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog
import yaml

from featuregate.diagnostics import Diagnostics


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def diagnostics() -> Diagnostics:
    """Fresh diagnostics collector."""
    return Diagnostics()


@pytest.fixture
def sample_features() -> dict[str, list[str]]:
    """Feature declaration used across tests."""
    return {
        "default": ["json", "logging"],
        "optional": ["debug_tools", "metrics"],
    }


@pytest.fixture
def write_project(tmp_path: Path) -> Callable[..., Path]:
    """Write a project.yaml under tmp_path (or a subdirectory) and return its path."""

    def _write(data: dict[str, Any], subdir: str | None = None) -> Path:
        directory = tmp_path / subdir if subdir else tmp_path
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "project.yaml"
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return path

    return _write
