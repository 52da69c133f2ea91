"""Pytest configuration for cuinotes tests."""

import logging
from pathlib import Path
from typing import Callable

import pytest

from cuinotes.config.schema import ViewerConfig

logging.getLogger("cuinotes").handlers.clear()


def pytest_collection_modifyitems(config, items):
    """Set per-marker timeouts: unit=1s, integration=5s."""
    for item in items:
        if "unit" in item.keywords:
            item.add_marker(pytest.mark.timeout(1))
        elif "integration" in item.keywords:
            item.add_marker(pytest.mark.timeout(5))


def numbered_lines(count: int) -> list[str]:
    return [f"line {i}" for i in range(count)]


@pytest.fixture
def write_lines(tmp_path: Path) -> Callable[..., Path]:
    """Write `count` numbered lines ("line 0", "line 1", ...) to a file."""

    def _write(count: int, name: str = "big.txt", *, trailing_newline: bool = True) -> Path:
        path = tmp_path / name
        text = "\n".join(numbered_lines(count))
        if count and trailing_newline:
            text += "\n"
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def large_config() -> ViewerConfig:
    """Config where every non-empty file is large and the cache is small."""
    return ViewerConfig(large_file_threshold=0, cache_lines=20, default_viewport=4)
