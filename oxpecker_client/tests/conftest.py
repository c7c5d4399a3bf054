"""
oxpecker_client test configuration.

All tests run against the in-memory mock transport by default. No server or
network access is required.
"""
from __future__ import annotations

import os

import pytest

# ── Force mock transport for all tests ────────────────────────────────────
# These must be set before any oxpecker_client modules are imported.

os.environ.setdefault("OXPECKER_TRANSPORT", "mock")
os.environ.setdefault("OXPECKER_ENVIRONMENT", "test")
os.environ.setdefault("OXPECKER_BASE_PATH", "http://testserver")
os.environ.setdefault("OXPECKER_LOG_LEVEL", "WARNING")


# ── Fixtures ───────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Each test sees settings built from the current environment."""
    from oxpecker_client.tier0_core.config import _reset_settings

    _reset_settings()
    yield
    _reset_settings()


@pytest.fixture
def configuration():
    """A Configuration pointing at the mock server."""
    from oxpecker_client.tier0_core.config import Configuration
    return Configuration(base_path="http://testserver", headers={"X-Client": "tests"})


@pytest.fixture
def mock_transport():
    """Return a fresh MockTransport with no routes."""
    from oxpecker_client.tier3_platform.transport import MockTransport
    return MockTransport()
