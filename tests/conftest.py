"""Shared fixtures for the casegen test suite."""

import random
import textwrap
from pathlib import Path

import pytest

from casegen.debug_logger import DebugLogger


@pytest.fixture(autouse=True)
def reset_debug_logger():
    """Each test starts and ends without a global debug logger."""
    DebugLogger.reset()
    yield
    DebugLogger.reset()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def write_impl(tmp_path: Path):
    """Write a Python implementation file and return its path."""

    def _write(name: str, source: str, directory: Path = None) -> Path:
        target_dir = tmp_path if directory is None else directory
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    return _write
