"""Pytest configuration and shared fixtures."""

import pytest

from lazydi import ResolutionContext, reset_context


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")


@pytest.fixture
def context():
    """A fresh, isolated resolution context."""
    return ResolutionContext()


@pytest.fixture(autouse=True)
def _isolated_default_context(monkeypatch):
    """Keep the default context and LAZYDI_* environment from leaking between tests."""
    for key in ("LAZYDI_LOG_LEVEL", "LAZYDI_LOG_JSON", "LAZYDI_DETECT_CYCLES"):
        monkeypatch.delenv(key, raising=False)
    reset_context()
    yield
    reset_context()
