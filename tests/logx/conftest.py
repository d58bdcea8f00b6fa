"""Pytest fixtures for module logger testing.

Every test starts with an empty registry so module names can be reused.
"""

import io
import json
from typing import Any, Dict, List

import pytest

from logx.registry import reset_registry


@pytest.fixture(autouse=True)
def clean_registry():
    """Ensure clean registry state for each test."""
    reset_registry()
    yield
    reset_registry()


@pytest.fixture
def buffer() -> io.StringIO:
    """In-memory sink for log output."""
    return io.StringIO()


def read_records(sink: io.StringIO) -> List[Dict[str, Any]]:
    """Parse every line written to ``sink`` as JSON."""
    return [json.loads(line) for line in sink.getvalue().splitlines()]


@pytest.fixture
def records():
    """Return a parser for the records written to a sink."""
    return read_records
