"""Pytest configuration for the NewsAPI MCP test suite."""

import pytest

from newsmcp.tools.suggest import clear_suggest_cache


@pytest.fixture(autouse=True)
def _fresh_suggest_cache():
    """Suggest results are cached per process; start each test empty."""
    clear_suggest_cache()
    yield
    clear_suggest_cache()
