"""Pytest configuration — ensures the project root is importable."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))


@pytest.fixture
def fresh_name_index():
    """Drop the memoized name index before and after a test that rebuilds it."""
    from money_parser.name_index import get_name_index

    get_name_index.cache_clear()
    yield get_name_index
    get_name_index.cache_clear()
